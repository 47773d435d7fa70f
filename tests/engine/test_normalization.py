"""
Tests for financial normalization and primary-method selection.
"""

import pytest

from bizval_engine import (
    Addback,
    ValuationInput,
    determine_primary_method,
    estimate_owner_salary,
    normalize_financials,
)


@pytest.mark.parametrize(
    "revenue, salary",
    [
        (0, 50_000),
        (249_999, 50_000),
        (250_000, 75_000),
        (999_999, 100_000),
        (1_000_000, 125_000),
        (4_999_999, 150_000),
        (5_000_000, 200_000),
    ],
)
def test_owner_salary_bands(revenue, salary):
    assert estimate_owner_salary(revenue) == salary


# ---------------------------------------------------------------------------
# Branches
# ---------------------------------------------------------------------------


def test_sde_branch_with_addbacks_and_discretionary():
    inp = ValuationInput(
        industry="hvac",
        sde=200_000,
        addbacks=(Addback("Personal vehicle", 12_000), Addback("One-time legal", 18_000)),
        discretionary_expenses=10_000,
    )

    result = normalize_financials(inp)

    assert result.normalized_sde == 240_000
    # 200k - $50k estimated salary + add-backs
    assert result.normalized_ebitda == 190_000
    assert result.adjustments.addbacks_total == 30_000
    assert result.adjustments.discretionary_addback == 10_000
    assert result.adjustments.owner_salary_addback == 0
    assert result.explanation == (
        "Using provided SDE of $200,000. "
        "Applied 2 add-backs totaling $30,000. "
        "Added back $10,000 in discretionary expenses. "
        "Final normalized SDE: $240,000. Normalized EBITDA: $190,000."
    )


def test_ebitda_branch_adds_owner_salary():
    inp = ValuationInput(industry="saas", revenue=1_000_000, ebitda=250_000, addbacks=(Addback("Travel", 5_000),))

    result = normalize_financials(inp)

    assert result.normalized_sde == 380_000
    assert result.normalized_ebitda == 255_000
    assert result.adjustments.owner_salary_addback == 125_000
    assert result.adjustments.total == 130_000
    assert "Added back owner salary of $125,000 to calculate SDE." in result.explanation
    assert "Applied additional add-backs of $5,000." in result.explanation


def test_explicit_owner_salary_wins():
    inp = ValuationInput(industry="saas", ebitda=100_000, owner_salary=90_000)

    assert normalize_financials(inp).normalized_sde == 190_000


def test_cash_flow_branch():
    inp = ValuationInput(industry="hvac", revenue=600_000, cash_flow=150_000, addbacks=(Addback("Misc", 1_000),))

    result = normalize_financials(inp)

    assert result.normalized_sde == 151_000
    assert result.normalized_ebitda == 51_000
    assert result.explanation.startswith("Using cash flow of $150,000 as proxy for SDE.")
    assert "Applied add-backs of $1,000." in result.explanation


def test_sde_takes_priority_over_other_metrics():
    inp = ValuationInput(industry="hvac", sde=200_000, ebitda=120_000, cash_flow=180_000)

    assert normalize_financials(inp).normalized_sde == 200_000


def test_revenue_branch_ignores_addbacks():
    inp = ValuationInput(
        industry="hvac",
        revenue=1_000_000,
        addbacks=(Addback("Ignored", 50_000),),
        discretionary_expenses=20_000,
    )

    result = normalize_financials(inp)

    assert result.normalized_sde == 150_000
    assert result.normalized_ebitda == 25_000
    assert result.adjustments.total == 0
    assert "Estimated SDE at 15% of revenue ($150,000)" in result.explanation


def test_no_financials():
    result = normalize_financials(ValuationInput(industry="hvac"))

    assert result.normalized_sde == 0
    assert result.normalized_ebitda == 0
    assert result.explanation == "Final normalized SDE: $0. Normalized EBITDA: $0."


def test_negative_discretionary_is_ignored():
    inp = ValuationInput(industry="hvac", sde=100_000, discretionary_expenses=-5_000)

    result = normalize_financials(inp)

    assert result.normalized_sde == 100_000
    assert "discretionary" not in result.explanation


# ---------------------------------------------------------------------------
# Primary method
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "revenue, has_sde, has_ebitda, expected",
    [
        (2_000_000, True, True, "ebitda"),
        (1_999_999, True, True, "sde"),
        (5_000_000, True, False, "sde"),
        (500_000, False, True, "sde"),
        (500_000, False, False, "revenue"),
        (0, False, False, "revenue"),
    ],
)
def test_determine_primary_method(revenue, has_sde, has_ebitda, expected):
    assert determine_primary_method(revenue, has_sde, has_ebitda) == expected
