"""
Tests for risk adjustments and the multiple-shifting that consumes them.
"""

import pytest

from bizval_engine import (
    ValuationInput,
    adjust_multiples,
    calculate_risk_adjustments,
    calculate_valuation_range,
    extract_red_flags,
    extract_strengths,
    get_industry_multiples,
)


def _assess(**fields):
    return calculate_risk_adjustments(ValuationInput(industry="hvac", **fields), as_of_year=2024)


# ---------------------------------------------------------------------------
# Individual dimensions
# ---------------------------------------------------------------------------


def test_high_concentration_is_single_critical_adjustment():
    risk = _assess(customer_concentration=0.65)

    assert len(risk.adjustments) == 1
    adj = risk.adjustments[0]
    assert adj.factor == "customer_concentration"
    assert adj.impact == -0.5
    assert adj.severity == "critical"
    assert adj.description == (
        "High customer concentration - top customer represents 65% of revenue. Major risk if relationship ends."
    )


@pytest.mark.parametrize(
    "share, factor, impact",
    [
        (0.4, "customer_concentration", -0.25),
        (0.25, "customer_concentration", -0.1),
        (0.2, "diversified_customers", 0.1),
        (0.05, "diversified_customers", 0.1),
    ],
)
def test_concentration_tiers(share, factor, impact):
    adj = _assess(customer_concentration=share).adjustments[0]
    assert (adj.factor, adj.impact) == (factor, impact)


@pytest.mark.parametrize(
    "trend, rate, factor, impact",
    [
        ("increasing", 0.25, "revenue_growth", 0.35),
        ("increasing", 0.15, "revenue_growth", 0.2),
        ("increasing", None, "revenue_growth", 0.1),
        ("stable", None, "stable_revenue", 0),
        ("declining", -0.2, "revenue_decline", -0.45),
        ("declining", -0.1, "revenue_decline", -0.3),
        ("declining", -0.02, "revenue_decline", -0.15),
    ],
)
def test_growth_tiers(trend, rate, factor, impact):
    adj = _assess(revenue_growth_trend=trend, revenue_growth_rate=rate).adjustments[0]
    assert (adj.factor, adj.impact) == (factor, impact)


@pytest.mark.parametrize(
    "hours, factor, impact",
    [
        (70, "owner_dependency", -0.4),
        (55, "owner_dependency", -0.25),
        (45, "owner_involvement", 0),
        (30, "semi_absentee", 0.15),
        (10, "absentee_ownership", 0.3),
    ],
)
def test_owner_hours_tiers(hours, factor, impact):
    adj = _assess(owner_hours_per_week=hours).adjustments[0]
    assert (adj.factor, adj.impact) == (factor, impact)


def test_owner_hours_text_drops_trailing_zero():
    adj = _assess(owner_hours_per_week=45.0).adjustments[0]
    assert "(45 hrs/week)" in adj.description


def test_middling_recurring_revenue_is_silent():
    assert _assess(recurring_revenue_pct=0.2).adjustments == []
    assert _assess(recurring_revenue_pct=0.05).adjustments[0].factor == "transactional_revenue"
    assert _assess(recurring_revenue_pct=0.9).adjustments[0].impact == 0.4


@pytest.mark.parametrize(
    "years, factor, impact",
    [
        (0.5, "lease_risk", -0.45),
        (1.5, "lease_risk", -0.3),
        (2.5, "lease_concern", -0.15),
        (5, "lease_security", 0.15),
        (12, "lease_security", 0.15),
    ],
)
def test_lease_tiers(years, factor, impact):
    adj = _assess(lease_years_remaining=years).adjustments[0]
    assert (adj.factor, adj.impact) == (factor, impact)


def test_mid_length_lease_is_silent():
    assert _assess(lease_years_remaining=4).adjustments == []


@pytest.mark.parametrize(
    "established, factor, impact",
    [
        (2000, "business_maturity", 0.2),
        (2010, "business_maturity", 0.1),
        (2018, "business_age", 0),
        (2020, "business_age_risk", -0.15),
        (2023, "business_age_risk", -0.3),
    ],
)
def test_business_age_tiers(established, factor, impact):
    adj = _assess(year_established=established).adjustments[0]
    assert (adj.factor, adj.impact) == (factor, impact)


def test_staffing_and_rent():
    assert _assess(employees=20).adjustments[0].factor == "team_depth"
    assert _assess(employees=3).adjustments == []
    assert _assess(employees=1).adjustments[0].factor == "solo_operation"

    high_rent = _assess(revenue=600_000, lease_monthly_rent=10_000).adjustments[0]
    assert high_rent.factor == "high_rent"
    assert "(20% of revenue)" in high_rent.description


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def test_net_change_is_clamped():
    risk = _assess(
        customer_concentration=0.65,
        revenue_growth_trend="declining",
        revenue_growth_rate=-0.2,
        owner_hours_per_week=70,
    )

    assert risk.total_adjustment == pytest.approx(-1.35)
    assert risk.net_multiple_change == -1.0
    assert [adj.factor for adj in risk.adjustments] == [
        "customer_concentration",
        "revenue_decline",
        "owner_dependency",
    ]


def test_no_facts_no_adjustments():
    risk = _assess()
    assert risk.adjustments == []
    assert risk.net_multiple_change == 0


def test_strengths_and_red_flags():
    risk = _assess(
        owner_hours_per_week=55,
        customer_concentration=0.65,
        recurring_revenue_pct=0.9,
        lease_years_remaining=2.5,
    )

    strengths = extract_strengths(risk.adjustments)
    flags = extract_red_flags(risk.adjustments)

    assert strengths == ["Excellent recurring revenue (90%). Highly predictable cash flows."]
    # Most negative impact first
    assert flags[0].startswith("High customer concentration")
    assert flags[1].startswith("High owner involvement")
    assert flags[2].startswith("Lease expires in 2.5 years")


# ---------------------------------------------------------------------------
# Multiples
# ---------------------------------------------------------------------------


def test_adjust_multiples_floors_earnings_bands():
    multiples = adjust_multiples(get_industry_multiples("accounting"), -1.0)

    assert multiples.sde.low == 0.5
    assert multiples.sde.mid == 0.5
    assert multiples.sde.high == 0.5
    assert multiples.ebitda.low == pytest.approx(1.0)
    assert multiples.primary_method == "sde"


def test_adjust_multiples_scales_and_floors_revenue_bands():
    multiples = adjust_multiples(get_industry_multiples("pharmacy"), -1.0)

    assert multiples.revenue.low == pytest.approx(0.1)
    assert multiples.revenue.mid == pytest.approx(0.2)
    assert multiples.revenue.high == pytest.approx(0.3)

    boosted = adjust_multiples(get_industry_multiples("hvac"), 0.5)
    assert boosted.revenue.mid == pytest.approx(0.8)
    assert boosted.sde.mid == pytest.approx(3.5)


def test_valuation_range_uses_primary_method():
    industry = get_industry_multiples("hvac")

    by_ebitda = calculate_valuation_range(0, 100_000, 0, 0, 0, adjust_multiples(industry, 0, "ebitda"))
    by_revenue = calculate_valuation_range(0, 0, 1_000_000, 10_000, 0, adjust_multiples(industry, 0, "revenue"))

    assert (by_ebitda.low, by_ebitda.mid, by_ebitda.high) == (350_000, 450_000, 600_000)
    assert (by_revenue.low, by_revenue.mid, by_revenue.high) == (510_000, 710_000, 1_010_000)


def test_negative_metric_floors_at_tangible_assets():
    industry = get_industry_multiples("hvac")

    rng = calculate_valuation_range(100_000, -50_000, 3_000_000, 10_000, 5_000, adjust_multiples(industry, 0, "ebitda"))

    assert (rng.low, rng.mid, rng.high) == (15_000, 15_000, 15_000)
