"""
End-to-end valuation scenarios through ``calculate_valuation``.

Covers: primary-method selection, range arithmetic, mispricing wiring,
missing-data fallbacks, tangible assets, idempotence.
"""

import math

import pytest

from bizval_engine import ValuationInput, calculate_valuation, quick_estimate

AS_OF = 2024


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------


def test_hvac_sde_scenario():
    """HVAC at $200k SDE with a standard 45-hour owner values at 2.5x / 3.0x / 4.0x."""
    inp = ValuationInput(industry="hvac", sde=200_000, owner_hours_per_week=45)

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert out.valuation_range.low == 500_000
    assert out.valuation_range.mid == 600_000
    assert out.valuation_range.high == 800_000
    assert out.multiples_used.primary_method == "sde"
    assert out.total_risk_adjustment == 0
    assert [adj.factor for adj in out.risk_adjustments] == ["owner_involvement"]
    assert out.mispricing is None
    assert out.industry_data.industry_key == "hvac"


def test_saas_small_business_uses_sde():
    """Revenue under $2M keeps SDE as the primary method even when EBITDA is present."""
    inp = ValuationInput(industry="saas", revenue=1_000_000, ebitda=250_000, asking_price=1_000_000)

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert out.multiples_used.primary_method == "sde"
    # EBITDA + estimated owner salary ($125k at $1M revenue)
    assert out.normalized_sde == 375_000
    assert out.valuation_range.mid == 1_687_500
    assert out.mispricing.recommendation == "strong_buy"
    assert out.mispricing.label == "41% underpriced"


def test_large_business_uses_ebitda():
    inp = ValuationInput(industry="saas", revenue=3_000_000, ebitda=600_000)

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert out.multiples_used.primary_method == "ebitda"
    assert out.valuation_range.mid == 4_800_000
    assert "EBITDA, appropriate for larger businesses" in out.methodology


def test_revenue_only_estimates_sde():
    """Revenue alone values on the revenue band; the normalizer still estimates SDE at 15% of revenue."""
    inp = ValuationInput(industry="hvac", revenue=1_000_000)

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert out.normalized_sde == 150_000
    assert out.multiples_used.primary_method == "revenue"
    assert out.valuation_range.mid == 700_000


# ---------------------------------------------------------------------------
# Missing data
# ---------------------------------------------------------------------------


def test_no_financials_yields_zero_range():
    out = calculate_valuation(ValuationInput(industry="hvac"), as_of_year=AS_OF)

    assert out.normalized_sde == 0
    assert out.normalized_ebitda == 0
    assert out.valuation_range.low == 0
    assert out.valuation_range.mid == 0
    assert out.valuation_range.high == 0
    assert out.mispricing is None
    assert out.risk_adjustments == []


def test_unknown_industry_falls_back_to_general_business():
    out = calculate_valuation(ValuationInput(industry="zzzz", sde=100_000), as_of_year=AS_OF)

    assert out.industry_data.industry_key == "general_business"
    assert out.valuation_range.mid == 250_000
    assert "(NAICS" not in out.methodology


def test_zero_mid_with_asking_price_is_avoid():
    out = calculate_valuation(ValuationInput(industry="hvac", asking_price=500_000), as_of_year=AS_OF)

    assert out.mispricing is not None
    assert math.isinf(out.mispricing.percent)
    assert out.mispricing.recommendation == "avoid"


# ---------------------------------------------------------------------------
# Assets, risk and narrative wiring
# ---------------------------------------------------------------------------


def test_tangible_assets_added_to_every_point():
    base = ValuationInput(industry="hvac", sde=200_000)
    with_assets = ValuationInput(industry="hvac", sde=200_000, inventory=50_000, ffe=25_000)

    plain = calculate_valuation(base, as_of_year=AS_OF).valuation_range
    boosted = calculate_valuation(with_assets, as_of_year=AS_OF)

    assert boosted.valuation_range.low == plain.low + 75_000
    assert boosted.valuation_range.mid == plain.mid + 75_000
    assert boosted.valuation_range.high == plain.high + 75_000
    assert "Inventory of $50,000 and FF&E of $25,000" in boosted.methodology


def test_high_concentration_lowers_multiples():
    inp = ValuationInput(industry="hvac", sde=200_000, customer_concentration=0.65)

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert out.total_risk_adjustment == -0.5
    assert out.multiples_used.sde.mid == pytest.approx(2.5)
    assert out.valuation_range.mid == 500_000
    assert out.red_flags[0].startswith("High customer concentration")
    assert any("earnout" in tip for tip in out.negotiation_recommendations)


def test_overpriced_listing_gets_opening_offer_tip():
    inp = ValuationInput(industry="hvac", sde=200_000, asking_price=700_000)

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert out.mispricing.recommendation == "overpriced"
    assert out.negotiation_recommendations[0].startswith("Open negotiations at $500,000 to $600,000")


def test_calculation_is_deterministic():
    inp = ValuationInput(
        industry="Plumbing",
        revenue=900_000,
        sde=180_000,
        asking_price=520_000,
        year_established=2005,
        employees=6,
        revenue_growth_trend="increasing",
        revenue_growth_rate=0.12,
    )

    assert calculate_valuation(inp, as_of_year=AS_OF) == calculate_valuation(inp, as_of_year=AS_OF)


def test_business_age_uses_as_of_year():
    inp = ValuationInput(industry="hvac", sde=200_000, year_established=2000)

    out = calculate_valuation(inp, as_of_year=2024)

    assert "Well-established business (24 years)" in out.key_strengths[0]


# ---------------------------------------------------------------------------
# Quick estimate
# ---------------------------------------------------------------------------


def test_quick_estimate_uses_flat_margin():
    rng = quick_estimate(1_000_000, "hvac")

    assert (rng.low, rng.mid, rng.high) == (375_000, 450_000, 600_000)


def test_quick_estimate_unknown_industry():
    rng = quick_estimate(400_000, "zzzz")

    assert rng.mid == 150_000


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


def test_nonexistent_industry_never_raises():
    out = calculate_valuation(ValuationInput(industry="nonexistent-xyz"), as_of_year=AS_OF)
    assert out.industry_data.industry_key == "general_business"


@pytest.mark.parametrize("industry", ["hvac", "saas", "accounting", "restaurant", "zzzz"])
def test_range_is_ordered_and_score_bounded(industry):
    inp = ValuationInput(
        industry=industry,
        revenue=2_500_000,
        ebitda=400_000,
        asking_price=1_500_000,
        customer_concentration=0.7,
        revenue_growth_trend="declining",
        revenue_growth_rate=-0.3,
        owner_hours_per_week=75,
        lease_years_remaining=0.5,
    )

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert out.valuation_range.low <= out.valuation_range.mid <= out.valuation_range.high
    assert -1 <= out.total_risk_adjustment <= 1
    assert isinstance(out.deal_quality_score, int)
    assert 0 <= out.deal_quality_score <= 100


def test_sde_below_owner_salary_keeps_range_ordered():
    """Large revenue with SDE under the owner salary gives negative EBITDA; the range floors at assets."""
    inp = ValuationInput(industry="hvac", revenue=3_000_000, sde=100_000, ebitda=50_000, asking_price=50_000)

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert out.normalized_ebitda == -50_000
    assert out.multiples_used.primary_method == "ebitda"
    assert (out.valuation_range.low, out.valuation_range.mid, out.valuation_range.high) == (0, 0, 0)
    assert out.deal_quality_breakdown.valuation_alignment == 50
    assert out.deal_quality_breakdown.pricing_fairness == 50
    assert 0 <= out.deal_quality_score <= 100
    assert out.mispricing.recommendation == "avoid"


def test_negative_ebitda_range_collapses_to_tangible_assets():
    inp = ValuationInput(industry="hvac", revenue=3_000_000, sde=100_000, ebitda=50_000, asking_price=50_000, ffe=40_000)

    out = calculate_valuation(inp, as_of_year=AS_OF)

    assert (out.valuation_range.low, out.valuation_range.mid, out.valuation_range.high) == (40_000, 40_000, 40_000)
    for value in vars(out.deal_quality_breakdown).values():
        assert 0 <= value <= 100
    assert 0 <= out.deal_quality_score <= 100
