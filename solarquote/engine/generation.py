"""
Generation estimate and self-consumption split.

Annual generation (kWh):

    E = kWp × irradiance × f_orient × f_pitch × f_shade × f_loss

The monthly breakdown spreads E over a fixed UK profile and applies the
annual self-consumption ratio to every month.
"""

from typing import Optional

from solarquote.config import (
    MONTH_NAMES,
    HomeOccupancy,
    ReferenceTables,
    get_reference_tables,
)
from solarquote.engine.factors import get_self_consumption_factor
from solarquote.engine.utils import round_half_up
from solarquote.models.estimate import MonthlyGeneration


def calculate_annual_generation(
    system_size_kwp: float,
    irradiance: float,
    orientation_factor: float,
    pitch_factor: float,
    shading_factor: float,
    tables: Optional[ReferenceTables] = None,
) -> int:
    tables = tables or get_reference_tables()
    generation = (
        system_size_kwp
        * irradiance
        * orientation_factor
        * pitch_factor
        * shading_factor
        * tables.solar.system_loss_factor
    )
    return round_half_up(generation)


def get_monthly_distribution(tables: Optional[ReferenceTables] = None) -> list[float]:
    """Fraction of annual generation in each month, January first."""
    tables = tables or get_reference_tables()
    return list(tables.solar.monthly_distribution)


def calculate_self_consumption(
    occupancy: HomeOccupancy,
    tables: Optional[ReferenceTables] = None,
) -> float:
    """Share of generation used on site for an occupancy pattern."""
    return get_self_consumption_factor(occupancy, tables)


def split_generation(generation_kwh: int, self_consumption_ratio: float) -> tuple[int, int]:
    """
    Split generation into (self-consumed, exported) kWh.

    Exported is the remainder, so the two always add back to the total.
    """
    self_consumed = round_half_up(generation_kwh * self_consumption_ratio)
    return self_consumed, generation_kwh - self_consumed


def calculate_monthly_generation(
    annual_generation: int,
    self_consumption_ratio: float,
    tables: Optional[ReferenceTables] = None,
) -> list[MonthlyGeneration]:
    months = []
    for index, fraction in enumerate(get_monthly_distribution(tables)):
        generation_kwh = round_half_up(annual_generation * fraction)
        self_consumed, exported = split_generation(generation_kwh, self_consumption_ratio)
        months.append(MonthlyGeneration(
            month=index + 1,
            month_name=MONTH_NAMES[index],
            generation_kwh=generation_kwh,
            self_consumed_kwh=self_consumed,
            exported_kwh=exported,
        ))
    return months
