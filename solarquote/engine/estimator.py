"""
Solar estimate pipeline.

Single entry point that runs the whole calculation for one property:

    factors → sizing → generation → self-consumption split → monthly profile
    → savings / export / cost / payback / 25-year return → CO2

The reference tables are read once at the start so every step of a
calculation sees the same bundle, even if the active tables are swapped
mid-flight.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Optional

from solarquote.config import IrradianceSource, ReferenceTables, get_reference_tables
from solarquote.engine.environmental import (
    calculate_co2_savings,
    calculate_co2_savings_25_years,
)
from solarquote.engine.factors import get_orientation_factor, get_pitch_factor
from solarquote.engine.financial import (
    calculate_annual_savings,
    calculate_export_earnings,
    calculate_payback_period,
    calculate_roi_25_years,
    calculate_system_cost,
)
from solarquote.engine.generation import (
    calculate_annual_generation,
    calculate_monthly_generation,
    calculate_self_consumption,
    split_generation,
)
from solarquote.engine.sizing import (
    calculate_max_system_size,
    calculate_panel_count,
    calculate_recommended_size,
    determine_final_system_size,
)
from solarquote.models.estimate import (
    CalculationMetadata,
    CalculatorInputs,
    CalculatorResults,
)

logger = logging.getLogger(__name__)


def _resolve_rate(override: Optional[float], default: float) -> float:
    if override is None or not math.isfinite(override) or override <= 0:
        return default
    return override


def calculate_solar_estimate(
    inputs: CalculatorInputs,
    irradiance: Optional[float] = None,
    *,
    irradiance_source: Optional[IrradianceSource] = None,
    tables: Optional[ReferenceTables] = None,
) -> CalculatorResults:
    """
    Estimate system size, generation, finances and CO2 for one property.

    Args:
        inputs: Property inputs (already validated by the caller).
        irradiance: Annual irradiance (kWh/m²/year) fetched by the caller.
            When missing, not finite or not positive, the UK average is used.
        irradiance_source: How the caller obtained ``irradiance``; defaults
            to MEASURED. Ignored when the UK average is used.
        tables: Reference tables to use; defaults to the active set.

    Returns:
        CalculatorResults, with metadata recording the irradiance, rates and
        factors actually applied.
    """
    tables = tables or get_reference_tables()
    warnings: list[str] = []

    orientation_factor = get_orientation_factor(inputs.roof_orientation, tables)
    pitch_factor = get_pitch_factor(inputs.roof_pitch, tables)
    shading_factor = inputs.shading_factor
    if not math.isfinite(shading_factor):
        logger.warning("Ignoring non-finite shading factor %r", shading_factor)
        warnings.append(
            f"Shading factor {shading_factor} is not finite; roof treated as fully shaded."
        )
        shading_factor = 0.0

    if irradiance is not None and math.isfinite(irradiance) and irradiance > 0:
        used_irradiance = irradiance
        source = irradiance_source or IrradianceSource.MEASURED
    else:
        if irradiance is not None:
            logger.warning("Ignoring unusable irradiance %r", irradiance)
            warnings.append(
                f"Irradiance {irradiance} is not a positive number; UK average used instead."
            )
        used_irradiance = tables.solar.uk_average_irradiance
        source = IrradianceSource.AVERAGE_FALLBACK

    electricity_rate = _resolve_rate(
        inputs.electricity_unit_rate, tables.energy.electricity_rate_pence
    )
    export_rate = _resolve_rate(
        inputs.export_tariff_rate, tables.energy.seg_export_rate_pence
    )

    logger.debug(
        "Estimating with irradiance=%s (%s), rates=%s/%s p/kWh, tables=%s",
        used_irradiance, source.value, electricity_rate, export_rate, tables.version,
    )

    # Sizing
    max_size = calculate_max_system_size(inputs.roof_area, tables)
    recommended_size = calculate_recommended_size(
        inputs.annual_electricity_usage,
        used_irradiance,
        orientation_factor,
        pitch_factor,
        shading_factor,
        tables,
    )
    final_size = determine_final_system_size(recommended_size, max_size)
    panel_count = calculate_panel_count(final_size, tables)

    if recommended_size > max_size:
        warnings.append(
            f"Usage-based size exceeds roof capacity; system limited to {final_size} kWp."
        )
    elif math.isnan(recommended_size) or math.isnan(max_size):
        warnings.append(
            f"Usage or roof area is not a number; system sized to {final_size} kWp."
        )

    # Generation
    annual_generation = calculate_annual_generation(
        final_size,
        used_irradiance,
        orientation_factor,
        pitch_factor,
        shading_factor,
        tables,
    )
    if annual_generation <= 0:
        warnings.append("No generation expected for this roof.")

    self_consumption_ratio = calculate_self_consumption(inputs.home_occupancy, tables)
    self_consumed_kwh, exported_kwh = split_generation(
        annual_generation, self_consumption_ratio
    )
    monthly_generation = calculate_monthly_generation(
        annual_generation, self_consumption_ratio, tables
    )

    # Financials
    annual_savings = calculate_annual_savings(self_consumed_kwh, electricity_rate)
    annual_export_earnings = calculate_export_earnings(exported_kwh, export_rate)
    total_annual_benefit = annual_savings + annual_export_earnings
    system_cost = calculate_system_cost(final_size, tables)
    payback_period = calculate_payback_period(system_cost, total_annual_benefit)
    roi_25_years = calculate_roi_25_years(
        annual_generation,
        self_consumption_ratio,
        electricity_rate,
        export_rate,
        system_cost,
        tables,
    )
    if math.isinf(payback_period):
        warnings.append("System does not pay back: annual benefit is zero.")

    # Environmental
    co2_saved_annually = calculate_co2_savings(annual_generation, tables)
    co2_saved_25_years = calculate_co2_savings_25_years(annual_generation, tables)

    metadata = CalculationMetadata(
        calculated_at=datetime.now(timezone.utc),
        irradiance_used=used_irradiance,
        irradiance_source=source,
        electricity_rate=electricity_rate,
        export_rate=export_rate,
        system_loss_factor=tables.solar.system_loss_factor,
        orientation_factor=orientation_factor,
        pitch_factor=pitch_factor,
        config_version=tables.version,
    )

    return CalculatorResults(
        recommended_system_size=final_size,
        number_of_panels=panel_count,
        estimated_annual_generation=annual_generation,
        monthly_generation=monthly_generation,
        self_consumption_ratio=self_consumption_ratio,
        self_consumed_kwh=self_consumed_kwh,
        exported_kwh=exported_kwh,
        annual_savings=annual_savings,
        annual_export_earnings=annual_export_earnings,
        total_annual_benefit=total_annual_benefit,
        estimated_system_cost=system_cost,
        payback_period=payback_period,
        roi_25_years=roi_25_years,
        co2_saved_annually=co2_saved_annually,
        co2_saved_25_years=co2_saved_25_years,
        metadata=metadata,
        warnings=warnings,
    )
