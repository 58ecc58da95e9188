"""
Carbon savings from displaced grid electricity.
"""

from typing import Optional

from solarquote.config import ReferenceTables, get_reference_tables
from solarquote.engine.financial import PROJECTION_YEARS
from solarquote.engine.utils import degradation_profile, round_half_up


def calculate_co2_savings(
    annual_generation_kwh: float,
    tables: Optional[ReferenceTables] = None,
) -> int:
    """kg CO2 avoided in the first year."""
    tables = tables or get_reference_tables()
    return round_half_up(annual_generation_kwh * tables.solar.grid_carbon_factor)


def calculate_co2_savings_25_years(
    annual_generation_kwh: float,
    tables: Optional[ReferenceTables] = None,
) -> int:
    """kg CO2 avoided over 25 years of degrading output."""
    tables = tables or get_reference_tables()
    lifetime_generation = annual_generation_kwh * degradation_profile(
        tables.solar.annual_degradation, PROJECTION_YEARS
    ).sum()
    return round_half_up(float(lifetime_generation) * tables.solar.grid_carbon_factor)
