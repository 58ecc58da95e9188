"""
Lead scoring.

Turns an estimate plus contact completeness into a 0-100 score. Eight
factors each contribute between 0 and their cap; the caps add up to 100.

    System Size       20   full at 6 kWp
    Payback Period    20   full at <= 7 years, zero at >= 15 years
    Annual Savings    15   full at £500 total annual benefit
    Phone Provided    15   binary
    Name Provided      5   binary
    Self-Consumption  10   proportional to ratio
    Roof Area         10   full at 12 panels
    Usage Level        5   full at 4000 kWh annual generation

Category: >= 70 hot, >= 40 warm, otherwise cool.
"""

import math

from solarquote.config import LeadCategory
from solarquote.engine.utils import clamp, round_half_up
from solarquote.models.estimate import CalculatorResults
from solarquote.models.lead import LeadContact, LeadScore, LeadScoreFactor

SCORING_WEIGHTS = {
    "system_size": 20,
    "payback_period": 20,
    "annual_savings": 15,
    "phone_provided": 15,
    "name_provided": 5,
    "self_consumption": 10,
    "roof_area": 10,
    "usage_level": 5,
}

SCORE_THRESHOLDS = {
    LeadCategory.HOT: 70,
    LeadCategory.WARM: 40,
}

# Reference points at which a factor earns its full points
_FULL_SIZE_KWP = 6.0
_FULL_PAYBACK_YEARS = 7.0
_ZERO_PAYBACK_YEARS = 15.0
_FULL_BENEFIT_GBP = 500.0
_FULL_PANEL_COUNT = 12
_FULL_GENERATION_KWH = 4000.0

CATEGORY_LABELS = {
    LeadCategory.HOT: "High-value lead - likely to convert",
    LeadCategory.WARM: "Moderate potential - follow up recommended",
    LeadCategory.COOL: "Lower priority - nurture over time",
}


def _proportional_points(value: float, full_at: float, cap: int) -> int:
    if not math.isfinite(value):
        return cap if value > 0 else 0
    return int(clamp(round_half_up(value / full_at * cap), 0, cap))


def _payback_points(payback_years: float, cap: int) -> int:
    if math.isnan(payback_years):
        return 0
    if payback_years <= _FULL_PAYBACK_YEARS:
        return cap
    if payback_years >= _ZERO_PAYBACK_YEARS:
        return 0
    span = _ZERO_PAYBACK_YEARS - _FULL_PAYBACK_YEARS
    points = round_half_up((_ZERO_PAYBACK_YEARS - payback_years) / span * cap)
    return int(clamp(points, 0, cap))


def _is_present(value) -> bool:
    return bool(value and value.strip())


def categorize_score(total_score: int) -> LeadCategory:
    if total_score >= SCORE_THRESHOLDS[LeadCategory.HOT]:
        return LeadCategory.HOT
    if total_score >= SCORE_THRESHOLDS[LeadCategory.WARM]:
        return LeadCategory.WARM
    return LeadCategory.COOL


def calculate_lead_score(results: CalculatorResults, contact: LeadContact) -> LeadScore:
    """
    Score a lead from its estimate and contact details.

    Factors are returned in a fixed order with the raw value each was
    computed from, so the same inputs always give the same breakdown.
    """
    w = SCORING_WEIGHTS
    has_phone = _is_present(contact.phone)
    has_name = _is_present(contact.name)

    factors = [
        LeadScoreFactor(
            name="System Size",
            value=results.recommended_system_size,
            points=_proportional_points(
                results.recommended_system_size, _FULL_SIZE_KWP, w["system_size"]
            ),
        ),
        LeadScoreFactor(
            name="Payback Period",
            value=results.payback_period,
            points=_payback_points(results.payback_period, w["payback_period"]),
        ),
        LeadScoreFactor(
            name="Annual Savings",
            value=results.total_annual_benefit,
            points=_proportional_points(
                results.total_annual_benefit, _FULL_BENEFIT_GBP, w["annual_savings"]
            ),
        ),
        LeadScoreFactor(
            name="Phone Provided",
            value=has_phone,
            points=w["phone_provided"] if has_phone else 0,
        ),
        LeadScoreFactor(
            name="Name Provided",
            value=has_name,
            points=w["name_provided"] if has_name else 0,
        ),
        LeadScoreFactor(
            name="Self-Consumption",
            value=results.self_consumption_ratio,
            points=_proportional_points(
                results.self_consumption_ratio, 1.0, w["self_consumption"]
            ),
        ),
        LeadScoreFactor(
            name="Roof Area",
            value=results.number_of_panels,
            points=_proportional_points(
                results.number_of_panels, _FULL_PANEL_COUNT, w["roof_area"]
            ),
        ),
        LeadScoreFactor(
            name="Usage Level",
            value=results.estimated_annual_generation,
            points=_proportional_points(
                results.estimated_annual_generation, _FULL_GENERATION_KWH, w["usage_level"]
            ),
        ),
    ]

    total_score = int(clamp(sum(f.points for f in factors), 0, 100))

    return LeadScore(
        total_score=total_score,
        category=categorize_score(total_score),
        factors=factors,
    )


def get_lead_score_summary(score: LeadScore) -> str:
    """One-line summary, e.g. 'HOT (85/100) - High-value lead - likely to convert'."""
    category = LeadCategory(score.category)
    return f"{category.value.upper()} ({score.total_score}/100) - {CATEGORY_LABELS[category]}"


def get_lead_score_breakdown(score: LeadScore) -> list[str]:
    return [f"{factor.name}: {factor.points} pts" for factor in score.factors]
