"""
API routes for lead validation and scoring.
"""

import logging

from fastapi import APIRouter, HTTPException

from solarquote.engine.lead_scoring import (
    calculate_lead_score,
    get_lead_score_breakdown,
    get_lead_score_summary,
)
from solarquote.engine.validation import validate_lead_form
from solarquote.models.lead import (
    LeadContact,
    LeadScoreOutput,
    LeadScoreRequest,
    LeadValidationResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/leads", tags=["leads"])


@router.post("/validate", response_model=LeadValidationResult)
async def validate_lead(contact: LeadContact) -> LeadValidationResult:
    """Check a contact form and report one message per invalid field."""
    return validate_lead_form(contact.email, contact.phone, contact.name)


@router.post("/score", response_model=LeadScoreOutput)
async def score_lead(data: LeadScoreRequest) -> LeadScoreOutput:
    """
    Score a lead from its estimate results and contact details.

    The contact must pass form validation; the score itself only looks at
    whether phone and name are present.
    """
    validation = validate_lead_form(data.contact.email, data.contact.phone, data.contact.name)
    if not validation.is_valid:
        raise HTTPException(status_code=422, detail=validation.errors)

    try:
        score = calculate_lead_score(data.results, data.contact)
        return LeadScoreOutput(
            score=score,
            summary=get_lead_score_summary(score),
            breakdown=get_lead_score_breakdown(score),
        )
    except Exception as e:
        logger.exception("Lead scoring failed")
        raise HTTPException(status_code=500, detail=f"Scoring error: {str(e)}")
