"""
Tests for the deal quality score and mispricing analysis.
"""

import math

import pytest

from bizval_engine import (
    WEIGHTS,
    ValuationInput,
    ValuationRange,
    analyze_mispricing,
    calculate_deal_quality_score,
    deal_quality_label,
)
from bizval_engine.deal_quality import score_to_grade

RANGE = ValuationRange(low=500_000, mid=600_000, high=800_000)


def test_weights_sum_to_one():
    assert sum(WEIGHTS.values()) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "score, grade, label",
    [
        (100, "A", "Excellent"),
        (85, "A", "Excellent"),
        (84, "B", "Good"),
        (70, "B", "Good"),
        (55, "C", "Average"),
        (40, "D", "Below Average"),
        (39, "F", "Poor"),
        (0, "F", "Poor"),
    ],
)
def test_grade_and_label_thresholds(score, grade, label):
    assert score_to_grade(score) == grade
    assert deal_quality_label(score) == label


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def test_sparse_input_scores_neutral():
    inp = ValuationInput(industry="hvac", sde=200_000, owner_hours_per_week=45)

    result = calculate_deal_quality_score(inp, RANGE, as_of_year=2024)

    assert result.breakdown.pricing_fairness == 50
    assert result.breakdown.financial_trajectory == 50
    assert result.breakdown.concentration_risk == 60
    assert result.breakdown.operational_risk == 60
    assert result.breakdown.documentation_quality == 20
    assert result.breakdown.valuation_alignment == 50
    assert result.score == 50
    assert result.grade == "D"
    assert result.summary == (
        "Below-average opportunity with significant concerns (Grade D). "
        "Issues include: incomplete financial documentation."
    )


def test_strong_deal_scores_a():
    inp = ValuationInput(
        industry="hvac",
        revenue=1_500_000,
        sde=300_000,
        asking_price=450_000,
        customer_concentration=0.05,
        revenue_growth_trend="increasing",
        revenue_growth_rate=0.3,
        recurring_revenue_pct=0.8,
        owner_hours_per_week=15,
        employees=12,
        year_established=2000,
        lease_years_remaining=8,
        inventory=20_000,
        ffe=40_000,
    )

    result = calculate_deal_quality_score(inp, RANGE, as_of_year=2024)

    assert result.breakdown.pricing_fairness == 100
    assert result.breakdown.financial_trajectory == 100
    assert result.breakdown.concentration_risk == 95
    assert result.breakdown.operational_risk == 100
    assert result.breakdown.valuation_alignment == 100
    assert result.grade == "A"
    assert result.summary.startswith("Excellent opportunity (Grade A). Key strengths include favorable pricing")


def test_concentration_bands():
    scores = [
        calculate_deal_quality_score(
            ValuationInput(industry="hvac", customer_concentration=share), RANGE
        ).breakdown.concentration_risk
        for share in (0.65, 0.55, 0.45, 0.35, 0.25, 0.15, 0.05)
    ]
    assert scores == [10, 25, 40, 55, 70, 85, 95]


def test_far_overpriced_decays_to_zero():
    inp = ValuationInput(industry="hvac", asking_price=1_200_000)

    result = calculate_deal_quality_score(inp, RANGE)

    assert result.breakdown.pricing_fairness == 0
    assert result.breakdown.valuation_alignment == 0

    just_over = ValuationInput(industry="hvac", asking_price=840_000)
    assert calculate_deal_quality_score(just_over, RANGE).breakdown.valuation_alignment == 60


def test_asking_within_upper_half_of_range():
    inp = ValuationInput(industry="hvac", asking_price=700_000)

    assert calculate_deal_quality_score(inp, RANGE).breakdown.valuation_alignment == 80


def test_operational_penalties():
    inp = ValuationInput(industry="hvac", owner_hours_per_week=70, employees=0, year_established=2023)

    result = calculate_deal_quality_score(inp, RANGE, as_of_year=2024)

    assert result.breakdown.operational_risk == 25


# ---------------------------------------------------------------------------
# Mispricing
# ---------------------------------------------------------------------------


def test_no_asking_price():
    assert analyze_mispricing(None, RANGE) is None


@pytest.mark.parametrize(
    "asking, label, recommendation",
    [
        (300_000, "50% underpriced", "strong_buy"),
        (510_000, "15% underpriced", "buy"),
        (552_000, "8% underpriced", "buy"),
        (600_000, "Fairly priced", "fair"),
        (648_000, "8% overpriced", "fair"),
        (690_000, "15% overpriced", "overpriced"),
        (900_000, "50% overpriced", "avoid"),
    ],
)
def test_mispricing_bands(asking, label, recommendation):
    result = analyze_mispricing(asking, RANGE)

    assert result.label == label
    assert result.recommendation == recommendation


def test_slightly_overpriced_names_target():
    result = analyze_mispricing(648_000, RANGE)
    assert result.analysis.endswith("Target a price closer to $600,000.")


def test_zero_asking_price_is_analyzed():
    result = analyze_mispricing(0, RANGE)

    assert result.percent == -100
    assert result.recommendation == "strong_buy"


def test_zero_mid_valuation():
    zero = ValuationRange(low=0, mid=0, high=0)

    overpriced = analyze_mispricing(100_000, zero)
    assert math.isinf(overpriced.percent)
    assert overpriced.label == "Overpriced (no valuation basis)"
    assert overpriced.recommendation == "avoid"

    free = analyze_mispricing(0, zero)
    assert free.percent == 0
    assert free.recommendation == "fair"


def test_inverted_range_scores_stay_bounded():
    inverted = ValuationRange(low=-175_000, mid=-225_000, high=-300_000)
    inp = ValuationInput(industry="hvac", asking_price=50_000)

    result = calculate_deal_quality_score(inp, inverted, as_of_year=2024)

    assert result.breakdown.pricing_fairness == 50
    assert result.breakdown.valuation_alignment == 50
    assert 0 <= result.score <= 100
