"""
Pydantic models for lead contact details and lead scoring.
"""

import math
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_serializer

from solarquote.config import LeadCategory
from solarquote.models.estimate import CalculatorResults


class LeadContact(BaseModel):
    """Contact record captured alongside an estimate."""

    email: str
    phone: Optional[str] = None
    name: Optional[str] = None
    preferred_contact_time: Optional[Literal["morning", "afternoon", "evening"]] = None


class LeadScoreFactor(BaseModel):
    """One scoring factor: the raw value it was computed from and its points."""

    name: str
    value: Union[bool, int, float]
    points: int

    @field_serializer("value", when_used="json")
    def _serialize_value(self, value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value


class LeadScore(BaseModel):
    total_score: int     # 0-100
    category: LeadCategory
    factors: list[LeadScoreFactor]


class LeadScoreRequest(BaseModel):
    """Body of POST /api/v1/leads/score."""

    results: CalculatorResults
    contact: LeadContact


class LeadScoreOutput(BaseModel):
    score: LeadScore
    summary: str
    breakdown: list[str]


class LeadValidationResult(BaseModel):
    is_valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
