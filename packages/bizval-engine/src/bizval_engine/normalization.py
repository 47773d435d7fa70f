"""
Financial Normalization
=======================

Converts whatever earnings figures a listing carries (SDE, EBITDA, cash flow
or revenue alone) into one normalized SDE and one normalized EBITDA.

    SDE    = EBITDA + owner salary + owner benefits + discretionary expenses
    EBITDA = revenue - COGS - operating expenses

Branch priority is strict: SDE > EBITDA > cash flow > revenue estimate.
The ``explanation`` string gets one sentence per step that fires, in the
order the steps run; the narrative layer quotes it verbatim.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .formatting import format_currency, round_half_up
from .types import Addback, NormalizationAdjustments, NormalizationResult, PrimaryMethod, ValuationInput

logger = logging.getLogger(__name__)

# Revenue-banded owner salary estimates: (upper bound exclusive, salary).
OWNER_SALARY_BANDS = (
    (250_000, 50_000),
    (500_000, 75_000),
    (1_000_000, 100_000),
    (2_000_000, 125_000),
    (5_000_000, 150_000),
)
OWNER_SALARY_TOP_BAND = 200_000

REVENUE_SDE_MARGIN_ESTIMATE = 0.15
EBITDA_PREFERRED_REVENUE = 2_000_000


def estimate_owner_salary(revenue: float) -> float:
    """Market owner salary for a business of the given revenue."""
    for upper, salary in OWNER_SALARY_BANDS:
        if revenue < upper:
            return salary
    return OWNER_SALARY_TOP_BAND


def normalize_financials(inp: ValuationInput) -> NormalizationResult:
    raw_sde = inp.sde or 0
    raw_ebitda = inp.ebitda or 0
    raw_cash_flow = inp.cash_flow or 0
    revenue = inp.revenue or 0

    owner_salary = inp.owner_salary or estimate_owner_salary(revenue)

    owner_salary_addback = 0.0
    addbacks_total = 0.0
    discretionary_addback = 0.0
    parts = []

    normalized_sde: float = 0
    normalized_ebitda: float = 0

    if raw_sde > 0:
        branch = "sde"
        normalized_sde = raw_sde
        normalized_ebitda = raw_sde - owner_salary
        parts.append(f"Using provided SDE of {format_currency(raw_sde)}. ")
    elif raw_ebitda > 0:
        branch = "ebitda"
        normalized_ebitda = raw_ebitda
        normalized_sde = raw_ebitda + owner_salary
        owner_salary_addback = owner_salary
        parts.append(
            f"Starting from EBITDA of {format_currency(raw_ebitda)}. "
            f"Added back owner salary of {format_currency(owner_salary)} to calculate SDE. "
        )
    elif raw_cash_flow > 0:
        branch = "cash_flow"
        normalized_sde = raw_cash_flow
        normalized_ebitda = raw_cash_flow - owner_salary
        parts.append(f"Using cash flow of {format_currency(raw_cash_flow)} as proxy for SDE. ")
    elif revenue > 0:
        branch = "revenue"
        normalized_sde = round_half_up(revenue * REVENUE_SDE_MARGIN_ESTIMATE)
        normalized_ebitda = normalized_sde - owner_salary
        parts.append(
            f"No earnings data provided. Estimated SDE at 15% of revenue ({format_currency(normalized_sde)}). "
            "This is a rough estimate - actual financials will improve accuracy. "
        )
    else:
        branch = "none"

    logger.debug(f"Normalization branch: {branch}")

    if branch in ("sde", "ebitda", "cash_flow"):
        if inp.addbacks:
            addbacks_total = _sum_addbacks(inp.addbacks)
            normalized_sde += addbacks_total
            normalized_ebitda += addbacks_total
            parts.append(_addbacks_sentence(branch, len(inp.addbacks), addbacks_total))

        discretionary = _positive(inp.discretionary_expenses)
        if discretionary is not None:
            discretionary_addback = discretionary
            normalized_sde += discretionary
            normalized_ebitda += discretionary
            parts.append(f"Added back {format_currency(discretionary)} in discretionary expenses. ")

    parts.append(
        f"Final normalized SDE: {format_currency(normalized_sde)}. "
        f"Normalized EBITDA: {format_currency(normalized_ebitda)}."
    )

    return NormalizationResult(
        normalized_sde=normalized_sde,
        normalized_ebitda=normalized_ebitda,
        adjustments=NormalizationAdjustments(
            owner_salary_addback=owner_salary_addback,
            discretionary_addback=discretionary_addback,
            addbacks_total=addbacks_total,
            total=owner_salary_addback + discretionary_addback + addbacks_total,
        ),
        explanation="".join(parts),
    )


def _sum_addbacks(addbacks: Sequence[Addback]) -> float:
    return sum(ab.amount for ab in addbacks)


def _addbacks_sentence(branch: str, count: int, total: float) -> str:
    if branch == "sde":
        return f"Applied {count} add-backs totaling {format_currency(total)}. "
    if branch == "ebitda":
        return f"Applied additional add-backs of {format_currency(total)}. "
    return f"Applied add-backs of {format_currency(total)}. "


def _positive(value: Optional[float]) -> Optional[float]:
    if value is not None and value > 0:
        return value
    return None


def determine_primary_method(revenue: float, has_sde: bool, has_ebitda: bool) -> PrimaryMethod:
    """
    Pick the metric the valuation range is built on.

    Larger businesses ($2M+ revenue) with EBITDA are valued on EBITDA;
    main-street businesses with any earnings figure on SDE; otherwise revenue.
    """
    if revenue >= EBITDA_PREFERRED_REVENUE and has_ebitda:
        return "ebitda"
    if has_sde or has_ebitda:
        return "sde"
    return "revenue"
