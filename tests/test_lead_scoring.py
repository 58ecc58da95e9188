"""
Tests for lead scoring, categorisation and the score summary/breakdown.
"""

import math
from datetime import datetime, timezone

import pytest

from solarquote.config import IrradianceSource, LeadCategory
from solarquote.engine.lead_scoring import (
    SCORING_WEIGHTS,
    calculate_lead_score,
    categorize_score,
    get_lead_score_breakdown,
    get_lead_score_summary,
)
from solarquote.models.estimate import CalculationMetadata, CalculatorResults
from solarquote.models.lead import LeadContact, LeadScore, LeadScoreFactor


def make_results(
    size=4.0,
    panels=10,
    generation=3600,
    ratio=0.45,
    benefit=745.0,
    payback=7.0,
) -> CalculatorResults:
    """Estimate results with only the fields the scorer reads varied."""
    self_consumed = round(generation * ratio)
    return CalculatorResults(
        recommended_system_size=size,
        number_of_panels=panels,
        estimated_annual_generation=generation,
        monthly_generation=[],
        self_consumption_ratio=ratio,
        self_consumed_kwh=self_consumed,
        exported_kwh=generation - self_consumed,
        annual_savings=benefit,
        annual_export_earnings=0.0,
        total_annual_benefit=benefit,
        estimated_system_cost=5200,
        payback_period=payback,
        roi_25_years=8000,
        co2_saved_annually=round(generation * 0.233),
        co2_saved_25_years=round(generation * 0.233 * 23.9),
        metadata=CalculationMetadata(
            calculated_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            irradiance_used=1000,
            irradiance_source=IrradianceSource.AVERAGE_FALLBACK,
            electricity_rate=27.69,
            export_rate=15.0,
            system_loss_factor=0.86,
            orientation_factor=1.0,
            pitch_factor=1.0,
            config_version="2026-01-01",
        ),
    )


EMAIL_ONLY = LeadContact(email="test@example.com")
FULL_CONTACT = LeadContact(email="test@example.com", phone="07700900123", name="Jo Bloggs")

HOT_RESULTS = dict(size=6.0, panels=15, generation=5000, ratio=0.5, benefit=745.0, payback=6.0)


def points(score: LeadScore, name: str) -> int:
    return next(f.points for f in score.factors if f.name == name)


# ---------------------------------------------------------------------------
# Weights and categories
# ---------------------------------------------------------------------------

class TestWeights:
    def test_weights_sum_to_100(self):
        assert sum(SCORING_WEIGHTS.values()) == 100

    @pytest.mark.parametrize("total,category", [
        (0, LeadCategory.COOL),
        (39, LeadCategory.COOL),
        (40, LeadCategory.WARM),
        (69, LeadCategory.WARM),
        (70, LeadCategory.HOT),
        (100, LeadCategory.HOT),
    ])
    def test_category_thresholds(self, total, category):
        assert categorize_score(total) == category


# ---------------------------------------------------------------------------
# Whole scores
# ---------------------------------------------------------------------------

class TestLeadScore:
    def test_hot_lead_with_full_contact(self):
        score = calculate_lead_score(make_results(**HOT_RESULTS), FULL_CONTACT)
        assert score.total_score == 95
        assert score.category == LeadCategory.HOT

    def test_email_only_loses_contact_points(self):
        full = calculate_lead_score(make_results(**HOT_RESULTS), FULL_CONTACT)
        email_only = calculate_lead_score(make_results(**HOT_RESULTS), EMAIL_ONLY)
        assert full.total_score - email_only.total_score == 20
        assert email_only.total_score == 75
        assert email_only.category == LeadCategory.HOT

    def test_warm_lead(self):
        results = make_results(size=4.0, panels=10, generation=3500, ratio=0.4,
                               benefit=500.0, payback=10.0)
        score = calculate_lead_score(results, EMAIL_ONLY)
        assert score.total_score == 57
        assert score.category == LeadCategory.WARM

    def test_cool_lead(self):
        results = make_results(size=2.0, panels=5, generation=1500, ratio=0.25,
                               benefit=200.0, payback=15.0)
        score = calculate_lead_score(results, EMAIL_ONLY)
        assert score.total_score == 22
        assert score.category == LeadCategory.COOL

    def test_typical_estimate_email_only(self):
        assert calculate_lead_score(make_results(), EMAIL_ONLY).total_score == 66

    def test_total_is_sum_of_factors(self):
        score = calculate_lead_score(make_results(), FULL_CONTACT)
        assert score.total_score == sum(f.points for f in score.factors)

    def test_same_inputs_same_score(self):
        a = calculate_lead_score(make_results(), FULL_CONTACT)
        b = calculate_lead_score(make_results(), FULL_CONTACT)
        assert a == b

    def test_score_bounded_for_huge_system(self):
        results = make_results(size=50.0, panels=125, generation=45000, ratio=1.0,
                               benefit=9000.0, payback=1.0)
        score = calculate_lead_score(results, FULL_CONTACT)
        assert score.total_score == 100

    def test_score_bounded_for_empty_system(self):
        results = make_results(size=0.0, panels=0, generation=0, ratio=0.0,
                               benefit=0.0, payback=math.inf)
        score = calculate_lead_score(results, EMAIL_ONLY)
        assert score.total_score == 0
        assert score.category == LeadCategory.COOL


# ---------------------------------------------------------------------------
# Individual factors
# ---------------------------------------------------------------------------

class TestFactors:
    def test_fixed_order(self):
        score = calculate_lead_score(make_results(), EMAIL_ONLY)
        assert [f.name for f in score.factors] == [
            "System Size",
            "Payback Period",
            "Annual Savings",
            "Phone Provided",
            "Name Provided",
            "Self-Consumption",
            "Roof Area",
            "Usage Level",
        ]

    def test_each_factor_within_its_cap(self):
        caps = dict(zip(
            ["System Size", "Payback Period", "Annual Savings", "Phone Provided",
             "Name Provided", "Self-Consumption", "Roof Area", "Usage Level"],
            SCORING_WEIGHTS.values(),
        ))
        score = calculate_lead_score(make_results(**HOT_RESULTS), FULL_CONTACT)
        for factor in score.factors:
            assert 0 <= factor.points <= caps[factor.name]

    @pytest.mark.parametrize("payback,expected", [
        (5.0, 20),
        (7.0, 20),
        (10.0, 13),
        (11.0, 10),
        (15.0, 0),
        (22.0, 0),
        (math.inf, 0),
        (math.nan, 0),
    ])
    def test_payback_points(self, payback, expected):
        score = calculate_lead_score(make_results(payback=payback), EMAIL_ONLY)
        assert points(score, "Payback Period") == expected

    def test_self_consumption_points_round_half_up(self):
        score = calculate_lead_score(make_results(ratio=0.25), EMAIL_ONLY)
        assert points(score, "Self-Consumption") == 3

    def test_blank_phone_does_not_count(self):
        contact = LeadContact(email="test@example.com", phone="   ", name="")
        score = calculate_lead_score(make_results(), contact)
        assert points(score, "Phone Provided") == 0
        assert points(score, "Name Provided") == 0

    def test_factor_values_are_raw_inputs(self):
        score = calculate_lead_score(make_results(), FULL_CONTACT)
        values = {f.name: f.value for f in score.factors}
        assert values["System Size"] == 4.0
        assert values["Phone Provided"] is True
        assert values["Roof Area"] == 10

    def test_infinite_value_serializes_as_null(self):
        factor = LeadScoreFactor(name="Payback Period", value=math.inf, points=0)
        assert factor.model_dump(mode="json")["value"] is None


# ---------------------------------------------------------------------------
# Summary and breakdown
# ---------------------------------------------------------------------------

class TestSummary:
    def test_hot_summary(self):
        score = calculate_lead_score(make_results(**HOT_RESULTS), FULL_CONTACT)
        assert get_lead_score_summary(score) == (
            "HOT (95/100) - High-value lead - likely to convert"
        )

    def test_warm_and_cool_labels(self):
        warm = LeadScore(total_score=50, category=LeadCategory.WARM, factors=[])
        cool = LeadScore(total_score=10, category=LeadCategory.COOL, factors=[])
        assert get_lead_score_summary(warm) == (
            "WARM (50/100) - Moderate potential - follow up recommended"
        )
        assert get_lead_score_summary(cool) == (
            "COOL (10/100) - Lower priority - nurture over time"
        )

    def test_breakdown_lines(self):
        score = calculate_lead_score(make_results(**HOT_RESULTS), EMAIL_ONLY)
        breakdown = get_lead_score_breakdown(score)
        assert len(breakdown) == 8
        assert breakdown[0] == "System Size: 20 pts"
        assert breakdown[3] == "Phone Provided: 0 pts"
