"""
Financial projection.

Money is held in pounds; tariff rates are in pence per kWh. Prices are held
constant over the 25-year horizon (no inflation) and only panel output
degrades.
"""

import math
from typing import Optional

from solarquote.config import ReferenceTables, get_reference_tables
from solarquote.engine.utils import degradation_profile, round_half_up

# Years of operation covered by the return projection
PROJECTION_YEARS = 25


def calculate_annual_savings(
    self_consumed_kwh: float,
    electricity_rate_pence: Optional[float] = None,
    tables: Optional[ReferenceTables] = None,
) -> float:
    """Bill savings (£) from electricity used on site."""
    if electricity_rate_pence is None:
        tables = tables or get_reference_tables()
        electricity_rate_pence = tables.energy.electricity_rate_pence
    return round_half_up(self_consumed_kwh * electricity_rate_pence) / 100


def calculate_export_earnings(
    exported_kwh: float,
    export_rate_pence: Optional[float] = None,
    tables: Optional[ReferenceTables] = None,
) -> float:
    """SEG payments (£) for electricity exported to the grid."""
    if export_rate_pence is None:
        tables = tables or get_reference_tables()
        export_rate_pence = tables.energy.seg_export_rate_pence
    return round_half_up(exported_kwh * export_rate_pence) / 100


def get_cost_per_kwp(
    system_size_kwp: float,
    tables: Optional[ReferenceTables] = None,
) -> float:
    tables = tables or get_reference_tables()
    costs = tables.costs
    if system_size_kwp <= costs.small_max_kwp:
        return costs.cost_per_kwp_small
    if system_size_kwp <= costs.medium_max_kwp:
        return costs.cost_per_kwp_medium
    return costs.cost_per_kwp_large


def calculate_system_cost(
    system_size_kwp: float,
    tables: Optional[ReferenceTables] = None,
) -> int:
    """Installed cost (£) using the flat rate of the size tier."""
    return round_half_up(system_size_kwp * get_cost_per_kwp(system_size_kwp, tables))


def calculate_payback_period(system_cost: float, annual_benefit: float) -> float:
    """Simple payback in years (1 dp); math.inf when there is no benefit."""
    if annual_benefit <= 0:
        return math.inf
    return round_half_up(system_cost / annual_benefit, 1)


def calculate_roi_25_years(
    annual_generation: float,
    self_consumption_ratio: float,
    electricity_rate_pence: float,
    export_rate_pence: float,
    system_cost: float,
    tables: Optional[ReferenceTables] = None,
) -> int:
    """
    Net return (£) after 25 years.

    Each year's generation is the first-year figure degraded by
    (1 - d)^(year - 1), split with the same self-consumption ratio, and
    valued at today's rates.
    """
    tables = tables or get_reference_tables()
    yearly_generation = annual_generation * degradation_profile(
        tables.solar.annual_degradation, PROJECTION_YEARS
    )
    self_consumed = yearly_generation * self_consumption_ratio
    exported = yearly_generation - self_consumed

    yearly_benefit = (
        self_consumed * electricity_rate_pence + exported * export_rate_pence
    ) / 100
    return round_half_up(float(yearly_benefit.sum()) - system_cost)
