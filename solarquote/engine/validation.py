"""
Boundary validation for calculator inputs and lead contact details.

The estimate engine is total over numeric input and does no range checking
of its own; API routes call these validators first and turn a ValueError
into a 422 response.
"""

import math
import re
from typing import Optional

from solarquote.config import SHADING_LEVELS, VALIDATION_LIMITS
from solarquote.models.estimate import CalculatorInputs
from solarquote.models.lead import LeadValidationResult

# GOV.UK / BS 7666 postcode format (format only, not existence)
POSTCODE_REGEX = re.compile(
    r"GIR ?0AA|"
    r"(?:[A-Z][0-9]{1,2}|[A-Z][A-HJ-Y][0-9]{1,2}|[A-Z][0-9][A-Z]|[A-Z][A-HJ-Y][0-9]?[A-Z])"
    r" ?[0-9][A-Z]{2}",
    re.IGNORECASE,
)

EMAIL_REGEX = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# Stricter RFC 5322 pattern for callers that need it
EMAIL_REGEX_STRICT = re.compile(
    r"(?:[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r'|"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21\x23-\x5b\x5d-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])*")'
    r"@(?:(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?"
    r"|\[(?:(?:25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9]?[0-9])\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9]?[0-9])\])",
    re.IGNORECASE,
)

# Applied after separators are stripped: 07700900123, +447700900123, 02012345678
UK_PHONE_REGEX = re.compile(r"(?:\+44|0)\d{9,13}")

NAME_REGEX = re.compile(r"[a-zA-Z\s\-']{2,100}")

_PHONE_SEPARATORS = re.compile(r"[\s\-()]")


# ---------------------------------------------------------------------------
# Postcodes
# ---------------------------------------------------------------------------

def is_valid_postcode(postcode: str) -> bool:
    return bool(postcode) and POSTCODE_REGEX.fullmatch(postcode.strip()) is not None


def normalize_postcode(postcode: str) -> str:
    """Upper-case with a single space before the inward code, e.g. 'SW1A 1AA'."""
    compact = re.sub(r"\s+", "", postcode).upper()
    if len(compact) < 5:
        return compact
    return f"{compact[:-3]} {compact[-3:]}"


# ---------------------------------------------------------------------------
# Calculator inputs
# ---------------------------------------------------------------------------

def _check_range(name: str, value: float, message: str) -> None:
    lower, upper = VALIDATION_LIMITS[name]
    if not math.isfinite(value) or value < lower or value > upper:
        raise ValueError(message)


def validate_calculator_inputs(inputs: CalculatorInputs) -> None:
    """
    Check that inputs fall within the ranges the estimate is meant for.

    Orientation and occupancy are already enum-checked by the model.

    Raises:
        ValueError: describing the first field out of range.
    """
    if inputs.postcode is not None and not is_valid_postcode(inputs.postcode):
        raise ValueError("Invalid UK postcode format")

    _check_range("latitude", inputs.latitude, "Invalid latitude for UK location")
    _check_range("longitude", inputs.longitude, "Invalid longitude for UK location")
    _check_range(
        "roof_pitch", inputs.roof_pitch,
        "Roof pitch must be between 0 and 90 degrees",
    )
    _check_range(
        "roof_area", inputs.roof_area,
        "Roof area must be between 5 and 500 m²",
    )

    if inputs.shading_factor not in SHADING_LEVELS:
        raise ValueError("Invalid shading factor")

    _check_range(
        "annual_electricity_usage", inputs.annual_electricity_usage,
        "Annual electricity usage must be between 500 and 50,000 kWh",
    )

    for label, rate in (
        ("Electricity unit rate", inputs.electricity_unit_rate),
        ("Export tariff rate", inputs.export_tariff_rate),
    ):
        if rate is not None and (not math.isfinite(rate) or rate <= 0):
            raise ValueError(f"{label} must be a positive number of pence per kWh")


# ---------------------------------------------------------------------------
# Lead contact details
# ---------------------------------------------------------------------------

def validate_email(email: str, strict: bool = False) -> bool:
    regex = EMAIL_REGEX_STRICT if strict else EMAIL_REGEX
    return regex.fullmatch(email.strip().lower()) is not None


def sanitize_phone(phone: str) -> str:
    """Strip spaces, hyphens and brackets."""
    return _PHONE_SEPARATORS.sub("", phone)


def validate_uk_phone(phone: Optional[str]) -> bool:
    """True for a valid UK number, or for an empty value (phone is optional)."""
    if not phone or not phone.strip():
        return True
    return UK_PHONE_REGEX.fullmatch(sanitize_phone(phone)) is not None


def validate_name(name: Optional[str]) -> bool:
    """True for 2-100 letters/spaces/hyphens/apostrophes, or for an empty value."""
    if not name or not name.strip():
        return True
    return NAME_REGEX.fullmatch(name.strip()) is not None


def format_phone_for_display(phone: str) -> str:
    """Format as '+44 XXXX XXX XXXX' where the digits allow it."""
    cleaned = sanitize_phone(phone)
    if cleaned.startswith("0"):
        cleaned = "+44" + cleaned[1:]
    match = re.fullmatch(r"(\+44)(\d{4})(\d{3})(\d{3,4})", cleaned)
    if match:
        return " ".join(match.groups())
    return cleaned


def validate_lead_form(
    email: Optional[str],
    phone: Optional[str] = None,
    name: Optional[str] = None,
) -> LeadValidationResult:
    """Validate a contact form, collecting one message per bad field."""
    errors: dict[str, str] = {}

    if not email or not email.strip():
        errors["email"] = "Email is required"
    elif not validate_email(email):
        errors["email"] = "Please enter a valid email address"

    if phone and not validate_uk_phone(phone):
        errors["phone"] = "Please enter a valid UK phone number"

    if name and not validate_name(name):
        errors["name"] = "Please enter a valid name (letters, spaces, hyphens only)"

    return LeadValidationResult(is_valid=not errors, errors=errors)
