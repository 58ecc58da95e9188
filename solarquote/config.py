"""
SolarQuote configuration, reference tables and constants.

All coefficients the engine uses live here as frozen, versioned pydantic
models. Values should be reviewed quarterly; each table group records its
source and the date it was last updated.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


class RoofOrientation(str, Enum):
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"
    FLAT = "flat"


class HomeOccupancy(str, Enum):
    ALWAYS = "always"      # WFH / retired
    DAYTIME = "daytime"
    EVENING = "evening"
    VARIABLE = "variable"


class IrradianceSource(str, Enum):
    MEASURED = "measured"                    # caller-supplied (e.g. PVGIS)
    REGIONAL_FALLBACK = "regional-fallback"  # regional table lookup
    AVERAGE_FALLBACK = "average-fallback"    # fixed UK average


class LeadCategory(str, Enum):
    HOT = "hot"
    WARM = "warm"
    COOL = "cool"


# Shading levels offered to the user (fraction of unshaded generation)
SHADING_LEVELS: tuple[float, ...] = (1.0, 0.9, 0.75, 0.5, 0.0)

# Key used for the explicit fallback entry in every lookup table
DEFAULT_KEY = "default"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class EnergyPricingConfig(_FrozenModel):
    """UK energy pricing (pence units)."""

    electricity_rate_pence: float = 27.69   # p/kWh, Direct Debit
    seg_export_rate_pence: float = 15.0     # p/kWh, average SEG
    standing_charge_pence: float = 54.7     # p/day
    source: str = "Ofgem Price Cap Q1 2026"
    last_updated: str = "2026-01-01"


class SystemCostConfig(_FrozenModel):
    """Installed cost per kWp by system-size tier."""

    cost_per_kwp_small: float = 1500.0   # £/kWp, <= small_max_kwp
    cost_per_kwp_medium: float = 1300.0  # £/kWp, <= medium_max_kwp
    cost_per_kwp_large: float = 1100.0   # £/kWp, above medium_max_kwp
    small_max_kwp: float = 3.0
    medium_max_kwp: float = 6.0
    source: str = "MCS Installation Database, Energy Saving Trust"
    last_updated: str = "2026-01-01"


class SolarConfig(_FrozenModel):
    """Physical constants and factor tables for generation modelling."""

    grid_carbon_factor: float = 0.233    # kg CO2/kWh, UK GHG factors 2025
    system_loss_factor: float = 0.86     # inverter, cabling, temperature, soiling
    panel_area_per_kwp: float = 5.0      # m² per kWp (400 W panels, ~20% eff.)
    annual_degradation: float = 0.005    # fraction per year
    panel_wattage: float = 400.0         # W
    uk_average_irradiance: float = 1000.0  # kWh/m²/year

    orientation_factors: dict[str, float] = Field(default_factory=lambda: {
        "S": 1.0,
        "SE": 0.95,
        "SW": 0.95,
        "E": 0.85,
        "W": 0.85,
        "NE": 0.7,
        "NW": 0.7,
        "N": 0.55,
        "flat": 0.9,   # flat roof mounted at optimal tilt
        DEFAULT_KEY: 0.85,
    })

    # Sorted (pitch degrees, factor) anchors; optimum for UK latitudes ~30-35°
    pitch_factors: tuple[tuple[float, float], ...] = (
        (0.0, 0.9),
        (10.0, 0.94),
        (15.0, 0.96),
        (20.0, 0.98),
        (25.0, 0.99),
        (30.0, 1.0),
        (35.0, 1.0),
        (40.0, 0.99),
        (45.0, 0.97),
        (50.0, 0.94),
        (60.0, 0.88),
        (70.0, 0.8),
        (80.0, 0.7),
        (90.0, 0.55),
    )

    self_consumption_factors: dict[str, float] = Field(default_factory=lambda: {
        "always": 0.45,
        "daytime": 0.5,
        "evening": 0.25,
        "variable": 0.35,
        DEFAULT_KEY: 0.35,
    })

    # Fraction of annual generation per month, January first
    monthly_distribution: tuple[float, ...] = (
        0.03, 0.05, 0.08, 0.10, 0.12, 0.13,
        0.13, 0.11, 0.09, 0.07, 0.05, 0.04,
    )

    source: str = "PVGIS, MCS MIS 3002, Energy Saving Trust"
    last_updated: str = "2026-01-01"

    @model_validator(mode="after")
    def _check_tables(self) -> "SolarConfig":
        if len(self.monthly_distribution) != 12:
            raise ValueError("monthly_distribution must have 12 entries")
        if abs(sum(self.monthly_distribution) - 1.0) > 0.01:
            raise ValueError("monthly_distribution must sum to 1.0")

        angles = [angle for angle, _ in self.pitch_factors]
        if len(angles) < 2 or angles != sorted(set(angles)):
            raise ValueError(
                "pitch_factors must hold at least two anchors in ascending order"
            )

        for name in ("orientation_factors", "self_consumption_factors"):
            if DEFAULT_KEY not in getattr(self, name):
                raise ValueError(f"{name} must include a '{DEFAULT_KEY}' entry")
        return self


class RegionalIrradianceConfig(_FrozenModel):
    """Fallback irradiance (kWh/m²/year) by region when PVGIS is unavailable."""

    values: dict[str, float] = Field(default_factory=lambda: {
        "South West": 1100.0,
        "South East": 1050.0,
        "London": 1000.0,
        "West Midlands": 950.0,
        "East Midlands": 950.0,
        "East of England": 1000.0,
        "North West": 900.0,
        "North East": 900.0,
        "Yorkshire": 920.0,
        "Wales": 950.0,
        "Scotland South": 900.0,
        "Scotland Central": 880.0,
        "Scotland North": 850.0,
        "Scottish Highlands": 800.0,
        "Northern Ireland": 900.0,
        DEFAULT_KEY: 950.0,
    })
    source: str = "Met Office / Energy Saving Trust regional data"
    last_updated: str = "2026-01-01"

    @model_validator(mode="after")
    def _check_default(self) -> "RegionalIrradianceConfig":
        if DEFAULT_KEY not in self.values:
            raise ValueError(f"values must include a '{DEFAULT_KEY}' entry")
        return self


class ReferenceTables(_FrozenModel):
    """The complete set of tables one calculation reads from."""

    version: str = "2026-01-01"
    energy: EnergyPricingConfig = Field(default_factory=EnergyPricingConfig)
    costs: SystemCostConfig = Field(default_factory=SystemCostConfig)
    solar: SolarConfig = Field(default_factory=SolarConfig)
    regional_irradiance: RegionalIrradianceConfig = Field(
        default_factory=RegionalIrradianceConfig
    )


_active_tables = ReferenceTables()


def get_reference_tables() -> ReferenceTables:
    """Return the reference tables currently in force."""
    return _active_tables


def use_reference_tables(tables: ReferenceTables) -> ReferenceTables:
    """
    Replace the active reference tables and return the previous bundle.

    The swap is a single reference assignment; tables are never mutated in
    place, so a calculation that already read the old bundle keeps using it.
    """
    global _active_tables
    previous = _active_tables
    _active_tables = tables
    logger.info("Reference tables switched to version %s", tables.version)
    return previous


def load_reference_tables(path: Union[str, Path]) -> ReferenceTables:
    """
    Build a ReferenceTables bundle from a JSON file.

    Missing sections and fields keep their built-in defaults. The result is
    not activated; pass it to use_reference_tables(). Malformed files raise
    pydantic's ValidationError (a ValueError).
    """
    text = Path(path).read_text(encoding="utf-8")
    return ReferenceTables.model_validate_json(text)


# Input limits enforced at the API boundary (the engine itself is total)
VALIDATION_LIMITS = {
    "latitude": (49.0, 61.0),
    "longitude": (-8.0, 2.0),
    "roof_pitch": (0.0, 90.0),
    "roof_area": (5.0, 500.0),
    "annual_electricity_usage": (500.0, 50000.0),
}

# Display labels
ORIENTATION_LABELS = {
    RoofOrientation.N: "North",
    RoofOrientation.NE: "North-East",
    RoofOrientation.E: "East",
    RoofOrientation.SE: "South-East",
    RoofOrientation.S: "South",
    RoofOrientation.SW: "South-West",
    RoofOrientation.W: "West",
    RoofOrientation.NW: "North-West",
    RoofOrientation.FLAT: "Flat Roof",
}

OCCUPANCY_LABELS = {
    HomeOccupancy.ALWAYS: "Always home / Work from home",
    HomeOccupancy.DAYTIME: "Home during the day",
    HomeOccupancy.EVENING: "Home mostly evenings",
    HomeOccupancy.VARIABLE: "Variable / Mixed schedule",
}

SHADING_LABELS = {
    1.0: "No shading (ideal)",
    0.9: "Light shading (occasional shadows)",
    0.75: "Moderate shading (trees/buildings nearby)",
    0.5: "Heavy shading (significant obstructions)",
    0.0: "Fully shaded",
}

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
