"""
API routes for solar estimates.
"""

import logging
import math

from fastapi import APIRouter, HTTPException, Query

from solarquote.config import IrradianceSource
from solarquote.engine.estimator import calculate_solar_estimate
from solarquote.engine.factors import get_regional_irradiance, is_known_region
from solarquote.engine.validation import validate_calculator_inputs
from solarquote.models.estimate import (
    CalculateRequest,
    CalculatorResults,
    RegionalIrradianceOutput,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["estimate"])


@router.post("/calculate", response_model=CalculatorResults)
async def calculate(data: CalculateRequest) -> CalculatorResults:
    """
    Calculate a solar estimate for one property.

    Irradiance is taken from the request when it is a positive number;
    otherwise the geocoded region's fallback value is used, and failing that
    the UK average.
    """
    try:
        validate_calculator_inputs(data.inputs)

        measured = data.irradiance.annual_irradiance if data.irradiance is not None else None
        if measured is not None and math.isfinite(measured) and measured > 0:
            return calculate_solar_estimate(data.inputs, measured)

        region = data.geocode.region if data.geocode is not None else None
        if is_known_region(region):
            return calculate_solar_estimate(
                data.inputs,
                get_regional_irradiance(region),
                irradiance_source=IrradianceSource.REGIONAL_FALLBACK,
            )

        return calculate_solar_estimate(data.inputs)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Estimate calculation failed")
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/irradiance/regional", response_model=RegionalIrradianceOutput)
async def regional_irradiance(region: str = Query(...)) -> RegionalIrradianceOutput:
    """Fallback irradiance for a region; unknown regions get the default value."""
    return RegionalIrradianceOutput(
        region=region,
        irradiance=get_regional_irradiance(region),
        is_default=not is_known_region(region),
    )
