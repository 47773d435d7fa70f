"""
Simple Calculator
=================

Single-multiple valuation used by listing previews and broker tools.

Unlike ``calculate_valuation`` this works from one metric (SDE, EBITDA or
revenue) and the mid multiple for it, nudged by a small rule table of
qualitative context. Results are rounded to the nearest $10,000.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from .formatting import format_grouped, format_number, round_half_up, to_fixed
from .industry_multiples import get_industry_multiples
from .types import InputError, MultipleBand, PrimaryMethod, Volatility

Level = Literal["high", "medium", "low"]
Strength = Literal["strong", "weak"]

MAX_MULTIPLE_ADJUSTMENT = 0.5
DEFAULT_CONFIDENCE = 75
MIN_CONFIDENCE = 40
MAX_CONFIDENCE = 90
VALUATION_ROUNDING = 10_000
HIGH_OWNER_HOURS = 55

FALLBACK_ORDER: Tuple[PrimaryMethod, ...] = ("sde", "ebitda", "revenue")

METHOD_DISPLAY_NAMES: Dict[str, str] = {
    "sde": "Seller's Discretionary Earnings (SDE)",
    "ebitda": "EBITDA",
    "revenue": "Revenue",
}

_ADJUSTMENT_PREFIX = re.compile(r"^[+-]?\d+\.?\d*\s+")


@dataclass(frozen=True)
class QualitativeAdjustments:
    owner_dependency: Optional[Level] = None
    customer_concentration: Optional[Level] = None
    recurring_revenue: bool = False
    documentation: Optional[Strength] = None
    brand: Optional[Strength] = None
    growth_potential: Optional[Level] = None


@dataclass(frozen=True)
class AdjustmentContext:
    deal_quality: Optional[float] = None  # 0-100
    owner_hours: Optional[float] = None
    volatility: Optional[Volatility] = None
    adjustments: Optional[QualitativeAdjustments] = None


@dataclass(frozen=True)
class AdjustmentResult:
    adjusted_multiple: float
    total_adjustment: float
    applied_adjustments: List[str]


@dataclass(frozen=True)
class SimpleValuationInput:
    industry_key: str
    method: PrimaryMethod = "sde"
    sde: Optional[float] = None
    ebitda: Optional[float] = None
    revenue: Optional[float] = None
    multiples: Optional[MultipleBand] = None
    deal_quality: Optional[float] = None
    volatility: Optional[Volatility] = None
    owner_hours: Optional[float] = None
    adjustments: Optional[QualitativeAdjustments] = None


@dataclass(frozen=True)
class SimpleValuationResult:
    method: PrimaryMethod
    method_used: str
    multiple: float
    adjusted_multiple: float
    multiple_range: MultipleBand
    base_value: float
    valuation: int
    valuation_low: int
    valuation_high: int
    fallback_applied: bool
    industry_name: str
    confidence_score: int
    fallback_reason: Optional[str] = None
    applied_adjustments: List[str] = field(default_factory=list)
    context: AdjustmentContext = field(default_factory=AdjustmentContext)


def adjust_multiple(base_multiple: float, context: AdjustmentContext) -> AdjustmentResult:
    """
    Nudge a base multiple by the qualitative context.

    Rules: deal quality >80 +0.3 / <50 -0.3; recurring revenue +0.3; weak
    documentation -0.2; owner hours >55 -0.2; high volatility -0.3 / low
    volatility +0.1. The total is capped to +/- 0.5 and the cap is noted.
    """
    total = 0.0
    applied: List[str] = []
    qualitative = context.adjustments or QualitativeAdjustments()

    if context.deal_quality is not None:
        if context.deal_quality > 80:
            total += 0.3
            applied.append("+0.3 high deal quality")
        elif context.deal_quality < 50:
            total -= 0.3
            applied.append("-0.3 low deal quality")

    if qualitative.recurring_revenue:
        total += 0.3
        applied.append("+0.3 recurring revenue")

    if qualitative.documentation == "weak":
        total -= 0.2
        applied.append("-0.2 weak documentation")

    if context.owner_hours is not None and context.owner_hours > HIGH_OWNER_HOURS:
        total -= 0.2
        applied.append("-0.2 high owner involvement")

    if context.volatility == "high":
        total -= 0.3
        applied.append("-0.3 high volatility")
    elif context.volatility == "low":
        total += 0.1
        applied.append("+0.1 low volatility")

    capped = max(-MAX_MULTIPLE_ADJUSTMENT, min(MAX_MULTIPLE_ADJUSTMENT, total))
    if capped != total:
        direction = "positive" if total > 0 else "negative"
        sign = "+" if capped > 0 else ""
        applied.append(f"(capped {direction} adjustment to {sign}{to_fixed(capped, 1)})")

    return AdjustmentResult(
        adjusted_multiple=round_half_up((base_multiple + capped) * 100) / 100,
        total_adjustment=capped,
        applied_adjustments=applied,
    )


def calculate_confidence_score(context: AdjustmentContext) -> int:
    """Starts at 75 and moves with volatility, deal quality, owner hours and recurring revenue; clamped to 40-90."""
    score = DEFAULT_CONFIDENCE
    if context.volatility == "high":
        score -= 10
    if context.deal_quality is not None and context.deal_quality < 50:
        score -= 10
    if context.owner_hours is not None and context.owner_hours > HIGH_OWNER_HOURS:
        score -= 5
    if context.adjustments is not None and context.adjustments.recurring_revenue:
        score += 10
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, score))


def _resolve_method(inp: SimpleValuationInput) -> Tuple[PrimaryMethod, float, Optional[str]]:
    values = {"sde": inp.sde, "ebitda": inp.ebitda, "revenue": inp.revenue}

    preferred = values.get(inp.method)
    if preferred and preferred > 0:
        return inp.method, preferred, None

    for method in FALLBACK_ORDER:
        value = values[method]
        if value and value > 0:
            reason = (
                f"Preferred method ({inp.method.upper()}) not available. "
                f"Using {method.upper()} instead."
            )
            return method, value, reason

    raise InputError(
        "No valid financial data provided. At least one of SDE, EBITDA, or Revenue is required."
    )


def _round_to_step(value: float) -> int:
    return round_half_up(value / VALUATION_ROUNDING) * VALUATION_ROUNDING


def calculate_valuation_simple(inp: SimpleValuationInput) -> SimpleValuationResult:
    industry_data = get_industry_multiples(inp.industry_key)
    method, base_value, fallback_reason = _resolve_method(inp)

    multiples = inp.multiples or getattr(industry_data, method)
    context = AdjustmentContext(
        deal_quality=inp.deal_quality,
        owner_hours=inp.owner_hours,
        volatility=inp.volatility,
        adjustments=inp.adjustments,
    )
    adjustment = adjust_multiple(multiples.mid, context)

    # Low/high use the unadjusted band; mid uses the adjusted multiple.
    valuation = _round_to_step(base_value * adjustment.adjusted_multiple)

    return SimpleValuationResult(
        method=method,
        method_used=METHOD_DISPLAY_NAMES.get(method, method.upper()),
        multiple=multiples.mid,
        adjusted_multiple=adjustment.adjusted_multiple,
        multiple_range=multiples,
        base_value=base_value,
        valuation=valuation,
        valuation_low=_round_to_step(base_value * multiples.low),
        valuation_high=_round_to_step(base_value * multiples.high),
        fallback_applied=fallback_reason is not None,
        fallback_reason=fallback_reason,
        industry_name=industry_data.industry_name,
        applied_adjustments=adjustment.applied_adjustments,
        confidence_score=calculate_confidence_score(context),
        context=context,
    )


def generate_fallback_commentary(result: SimpleValuationResult) -> str:
    """Two to four sentences describing a simple valuation, for when no written commentary is available."""
    if result.adjusted_multiple != result.multiple:
        multiple_desc = f"an adjusted {format_number(result.adjusted_multiple)}x"
    else:
        multiple_desc = f"a {format_number(result.multiple)}x"

    parts = [
        f"Using {multiple_desc} {result.method.upper()} multiple, this {result.industry_name.lower()} "
        f"business is valued at approximately ${format_grouped(result.valuation)}.",
        f"The valuation range of ${format_grouped(result.valuation_low)} to "
        f"${format_grouped(result.valuation_high)} reflects current market norms.",
    ]

    factors = [
        _ADJUSTMENT_PREFIX.sub("", note, count=1)
        for note in result.applied_adjustments
        if not note.startswith("(capped")
    ][:2]
    if factors:
        factor_list = factors[0] if len(factors) == 1 else f"{factors[0]} and {factors[1]}"
        parts.append(f"Factors like {factor_list} were considered in the adjusted estimate.")

    if result.fallback_applied and result.fallback_reason:
        parts.append(result.fallback_reason)

    return " ".join(parts)
