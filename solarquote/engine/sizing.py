"""
System sizing.

Recommended size targets 90% of annual usage:

    kWp = 0.9 × usage / (irradiance × f_orient × f_pitch × f_shade × f_loss)

then the roof-area limit is applied and the result snapped to 0.5 kWp.
"""

import math
from typing import Optional

from solarquote.config import ReferenceTables, get_reference_tables
from solarquote.engine.utils import round_half_up

# Share of annual usage the recommended system aims to generate
USAGE_COVERAGE_TARGET = 0.9


def calculate_max_system_size(
    roof_area: float,
    tables: Optional[ReferenceTables] = None,
) -> float:
    """Largest system (kWp, 1 dp) the usable roof area can host."""
    tables = tables or get_reference_tables()
    return round_half_up(roof_area / tables.solar.panel_area_per_kwp, 1)


def calculate_recommended_size(
    annual_usage: float,
    irradiance: float,
    orientation_factor: float,
    pitch_factor: float,
    shading_factor: float,
    tables: Optional[ReferenceTables] = None,
) -> float:
    """
    System size (kWp, 1 dp) whose generation would cover 90% of usage.

    Returns math.inf when the combined efficiency is zero (e.g. a fully
    shaded roof); the roof limit then decides the final size.
    """
    tables = tables or get_reference_tables()
    kwh_per_kwp = (
        irradiance
        * orientation_factor
        * pitch_factor
        * shading_factor
        * tables.solar.system_loss_factor
    )
    if kwh_per_kwp <= 0:
        return math.inf

    target_generation = annual_usage * USAGE_COVERAGE_TARGET
    return round_half_up(target_generation / kwh_per_kwp, 1)


def determine_final_system_size(recommended_kwp: float, max_kwp: float) -> float:
    """
    Smaller of recommended and roof maximum, snapped to 0.5 kWp.

    A NaN on either side is ignored. When no finite size remains the
    result is 0.
    """
    candidates = [size for size in (recommended_kwp, max_kwp) if not math.isnan(size)]
    final_kwp = min(candidates, default=0.0)
    if not math.isfinite(final_kwp):
        return 0.0
    return round_half_up(final_kwp * 2) / 2


def calculate_panel_count(
    system_size_kwp: float,
    tables: Optional[ReferenceTables] = None,
) -> int:
    tables = tables or get_reference_tables()
    return math.ceil(system_size_kwp * 1000 / tables.solar.panel_wattage)
