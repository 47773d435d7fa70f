"""
Deal Quality Score
==================

Composite 0-100 attractiveness score built from six weighted sub-scores:

- pricing fairness      (asking price vs. mid valuation)
- financial trajectory  (growth trend, boosted by recurring revenue)
- concentration risk    (inverted top-customer share)
- operational risk      (owner hours, staffing, business age)
- documentation quality (completeness of the supplied facts)
- valuation alignment   (where the asking price sits in the range)

Sub-scores are clamped to [0, 100]; the weighted sum is rounded half-up.
Missing data scores neutral (50, or 60 for concentration), never zero.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .formatting import round_half_up
from .risk_adjustments import resolve_as_of_year
from .types import DealQualityBreakdown, DealQualityResult, Grade, ValuationInput, ValuationRange

WEIGHTS: Dict[str, float] = {
    "pricing_fairness": 0.25,
    "financial_trajectory": 0.20,
    "concentration_risk": 0.15,
    "operational_risk": 0.15,
    "documentation_quality": 0.10,
    "valuation_alignment": 0.15,
}

GRADE_THRESHOLDS = (
    (85, "A"),
    (70, "B"),
    (55, "C"),
    (40, "D"),
)

SCORE_LABELS = (
    (85, "Excellent"),
    (70, "Good"),
    (55, "Average"),
    (40, "Below Average"),
)

NEUTRAL_SCORE = 50
UNKNOWN_CONCENTRATION_SCORE = 60
OPERATIONAL_BASE_SCORE = 60
DOCUMENTATION_TOTAL_POINTS = 15

# (upper bound on asking/mid, score); ratios above the last bound decay linearly.
PRICING_BANDS = (
    (0.8, 100),
    (0.9, 95),
    (0.95, 90),
    (1.0, 85),
    (1.05, 75),
    (1.1, 65),
    (1.15, 50),
    (1.25, 35),
    (1.5, 20),
)

# (exclusive lower bound on top-customer share, score), checked top down.
CONCENTRATION_BANDS = (
    (0.6, 10),
    (0.5, 25),
    (0.4, 40),
    (0.3, 55),
    (0.2, 70),
    (0.1, 85),
)
DIVERSIFIED_SCORE = 95

STRENGTH_THRESHOLD = 80
CONCERN_THRESHOLD = 50


def calculate_deal_quality_score(
    inp: ValuationInput,
    valuation_range: ValuationRange,
    as_of_year: Optional[int] = None,
) -> DealQualityResult:
    year = resolve_as_of_year(as_of_year)

    breakdown = DealQualityBreakdown(
        pricing_fairness=_pricing_fairness(inp, valuation_range),
        financial_trajectory=_financial_trajectory(inp),
        concentration_risk=_concentration_risk(inp),
        operational_risk=_operational_risk(inp, year),
        documentation_quality=_documentation_quality(inp),
        valuation_alignment=_valuation_alignment(inp, valuation_range),
    )

    score = round_half_up(
        breakdown.pricing_fairness * WEIGHTS["pricing_fairness"]
        + breakdown.financial_trajectory * WEIGHTS["financial_trajectory"]
        + breakdown.concentration_risk * WEIGHTS["concentration_risk"]
        + breakdown.operational_risk * WEIGHTS["operational_risk"]
        + breakdown.documentation_quality * WEIGHTS["documentation_quality"]
        + breakdown.valuation_alignment * WEIGHTS["valuation_alignment"]
    )
    score = min(100, max(0, score))
    grade = score_to_grade(score)

    return DealQualityResult(
        score=score,
        breakdown=breakdown,
        grade=grade,
        summary=_summarize(breakdown, grade),
    )


def score_to_grade(score: float) -> Grade:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade  # type: ignore[return-value]
    return "F"


def deal_quality_label(score: float) -> str:
    """Display tier for a score: Excellent, Good, Average, Below Average or Poor."""
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return "Poor"


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------


def _pricing_fairness(inp: ValuationInput, valuation_range: ValuationRange) -> float:
    if not inp.asking_price or valuation_range.mid <= 0:
        return NEUTRAL_SCORE
    ratio = inp.asking_price / valuation_range.mid
    for upper, score in PRICING_BANDS:
        if ratio <= upper:
            return score
    return min(100, max(0, 100 - (ratio - 1) * 100))


def _financial_trajectory(inp: ValuationInput) -> float:
    trend = inp.revenue_growth_trend
    if trend == "increasing":
        rate = inp.revenue_growth_rate or 0
        if rate > 0.25:
            score = 100
        elif rate > 0.15:
            score = 90
        elif rate > 0.1:
            score = 85
        elif rate > 0.05:
            score = 80
        else:
            score = 75
    elif trend == "stable":
        score = 65
    elif trend == "declining":
        rate = abs(inp.revenue_growth_rate or 0)
        if rate > 0.2:
            score = 15
        elif rate > 0.1:
            score = 30
        elif rate > 0.05:
            score = 45
        else:
            score = 55
    else:
        score = NEUTRAL_SCORE

    recurring = inp.recurring_revenue_pct
    if recurring is not None:
        if recurring > 0.7:
            score = min(100, score + 10)
        elif recurring > 0.5:
            score = min(100, score + 5)

    return score


def _concentration_risk(inp: ValuationInput) -> float:
    share = inp.customer_concentration
    if share is None:
        return UNKNOWN_CONCENTRATION_SCORE
    for lower, score in CONCENTRATION_BANDS:
        if share > lower:
            return score
    return DIVERSIFIED_SCORE


def _operational_risk(inp: ValuationInput, as_of_year: int) -> float:
    score = OPERATIONAL_BASE_SCORE

    hours = inp.owner_hours_per_week
    if hours is not None:
        if hours < 20:
            score += 25
        elif hours < 30:
            score += 15
        elif hours < 40:
            score += 5
        elif hours > 50:
            score -= 15

    employees = inp.employees
    if employees is not None:
        if employees >= 10:
            score += 15
        elif employees >= 5:
            score += 10
        elif employees >= 3:
            score += 5
        elif employees == 0:
            score -= 10

    if inp.year_established:
        age = as_of_year - inp.year_established
        if age >= 10:
            score += 10
        elif age >= 5:
            score += 5
        elif age < 3:
            score -= 10

    return min(100, max(0, score))


def _documentation_quality(inp: ValuationInput) -> float:
    points = 0.0

    # Core financials
    if inp.revenue:
        points += 2
    if inp.sde or inp.ebitda:
        points += 2
    if inp.cash_flow:
        points += 1

    # Business details
    if inp.employees is not None:
        points += 1
    if inp.year_established:
        points += 1
    if inp.owner_hours_per_week is not None:
        points += 1

    # Risk factors
    if inp.customer_concentration is not None:
        points += 2
    if inp.revenue_growth_trend:
        points += 2
    if inp.recurring_revenue_pct is not None:
        points += 1
    if inp.lease_years_remaining is not None:
        points += 1

    # Tangible assets count half
    if inp.inventory is not None:
        points += 0.5
    if inp.ffe is not None:
        points += 0.5

    return min(100, round_half_up(points / DOCUMENTATION_TOTAL_POINTS * 100))


def _valuation_alignment(inp: ValuationInput, valuation_range: ValuationRange) -> float:
    asking = inp.asking_price
    low, mid, high = valuation_range.low, valuation_range.mid, valuation_range.high
    if not asking or low <= 0 or high <= 0:
        return NEUTRAL_SCORE
    if asking < low:
        return 100
    if asking <= mid:
        return 95
    if asking <= high:
        position = (asking - mid) / (high - mid)
        return round_half_up(90 - position * 20)
    overage = (asking - high) / high
    return min(100, max(0, round_half_up(70 - overage * 200)))


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def _summarize(breakdown: DealQualityBreakdown, grade: Grade) -> str:
    strengths: List[str] = []
    concerns: List[str] = []

    if breakdown.pricing_fairness >= STRENGTH_THRESHOLD:
        strengths.append("favorable pricing")
    if breakdown.financial_trajectory >= STRENGTH_THRESHOLD:
        strengths.append("strong financial trajectory")
    if breakdown.concentration_risk >= STRENGTH_THRESHOLD:
        strengths.append("diversified customer base")
    if breakdown.operational_risk >= STRENGTH_THRESHOLD:
        strengths.append("solid operations")

    if breakdown.pricing_fairness < CONCERN_THRESHOLD:
        concerns.append("overpriced relative to valuation")
    if breakdown.financial_trajectory < CONCERN_THRESHOLD:
        concerns.append("concerning financial trends")
    if breakdown.concentration_risk < CONCERN_THRESHOLD:
        concerns.append("customer concentration risk")
    if breakdown.operational_risk < CONCERN_THRESHOLD:
        concerns.append("high owner dependency")
    if breakdown.documentation_quality < CONCERN_THRESHOLD:
        concerns.append("incomplete financial documentation")

    if grade == "A":
        summary = f"Excellent opportunity (Grade {grade}). "
        if strengths:
            summary += f"Key strengths include {', '.join(strengths)}."
        else:
            summary += "Strong across all evaluation criteria."
    elif grade == "B":
        summary = f"Good opportunity with some considerations (Grade {grade}). "
        if strengths:
            summary += f"Strengths: {', '.join(strengths)}. "
        if concerns:
            summary += f"Watch: {', '.join(concerns)}."
    elif grade == "C":
        summary = f"Average opportunity requiring due diligence (Grade {grade}). "
        if concerns:
            summary += f"Key concerns: {', '.join(concerns)}."
    elif grade == "D":
        summary = f"Below-average opportunity with significant concerns (Grade {grade}). "
        summary += f"Issues include: {', '.join(concerns)}."
    else:
        summary = f"High-risk opportunity (Grade {grade}). "
        summary += f"Major concerns: {', '.join(concerns)}. Proceed with extreme caution."

    return summary
