"""
Pydantic models for solar estimate input/output.
"""

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from solarquote.config import RoofOrientation, HomeOccupancy, IrradianceSource


class CalculatorInputs(BaseModel):
    """Property inputs for one estimate. Ranges are checked at the API boundary."""

    model_config = ConfigDict(frozen=True)

    postcode: Optional[str] = None

    # From the geocoding lookup (decimal degrees)
    latitude: float
    longitude: float

    roof_orientation: RoofOrientation
    roof_pitch: float                # degrees, 0-90
    roof_area: float                 # usable m²
    shading_factor: float = 1.0      # fraction of unshaded generation
    annual_electricity_usage: float  # kWh/year
    home_occupancy: HomeOccupancy

    # Optional tariff overrides (p/kWh)
    electricity_unit_rate: Optional[float] = None
    export_tariff_rate: Optional[float] = None


class MonthlyGeneration(BaseModel):
    """One month of the generation breakdown."""

    month: int         # 1-12
    month_name: str
    generation_kwh: int
    self_consumed_kwh: int
    exported_kwh: int


class CalculationMetadata(BaseModel):
    """Records exactly which inputs produced the displayed numbers."""

    calculated_at: datetime
    irradiance_used: float           # kWh/m²/year
    irradiance_source: IrradianceSource
    electricity_rate: float          # p/kWh
    export_rate: float               # p/kWh
    system_loss_factor: float
    orientation_factor: float
    pitch_factor: float
    config_version: str


class CalculatorResults(BaseModel):
    """Result of a solar estimate."""

    recommended_system_size: float   # kWp (after roof constraint)
    number_of_panels: int
    estimated_annual_generation: int  # kWh
    monthly_generation: list[MonthlyGeneration]

    self_consumption_ratio: float
    self_consumed_kwh: int
    exported_kwh: int

    annual_savings: float            # £
    annual_export_earnings: float    # £
    total_annual_benefit: float      # £
    estimated_system_cost: float     # £
    payback_period: float            # years; math.inf when there is no benefit
    roi_25_years: float              # £

    co2_saved_annually: int          # kg
    co2_saved_25_years: int          # kg

    metadata: CalculationMetadata
    warnings: list[str] = Field(default_factory=list)

    @field_validator("payback_period", mode="before")
    @classmethod
    def _parse_payback(cls, value):
        return math.inf if value is None else value

    @field_serializer("payback_period", when_used="json")
    def _serialize_payback(self, value: float) -> Optional[float]:
        # JSON has no infinity; an unreachable payback is emitted as null
        return value if math.isfinite(value) else None


class GeocodeResult(BaseModel):
    """What the postcode lookup collaborator hands to the caller."""

    postcode: str
    latitude: float
    longitude: float
    region: Optional[str] = None


class IrradianceResult(BaseModel):
    """What the irradiance lookup collaborator hands to the caller."""

    annual_irradiance: float                       # kWh/m²/year
    monthly_irradiance: Optional[list[float]] = None


class CalculateRequest(BaseModel):
    """Body of POST /api/v1/calculate."""

    inputs: CalculatorInputs

    # Previously fetched irradiance; takes precedence over the region fallback
    irradiance: Optional[IrradianceResult] = None
    # Geocoder output; its region keys the regional irradiance fallback
    geocode: Optional[GeocodeResult] = None


class RegionalIrradianceOutput(BaseModel):
    region: str
    irradiance: float
    is_default: bool
