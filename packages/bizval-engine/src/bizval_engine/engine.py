"""
Valuation Engine
================

Orchestrates the pipeline for one business:

    catalog lookup -> normalization -> risk assessment -> primary method
    -> adjusted multiples -> valuation range -> deal quality -> mispricing
    -> narrative

Every stage always runs; missing data degrades to documented fallbacks
rather than raising. Pure and synchronous: no I/O, the only clock read is
the current year (overridable through ``as_of_year``).
"""

from __future__ import annotations

import logging
from typing import Optional

from .deal_quality import calculate_deal_quality_score
from .formatting import round_half_up
from .industry_multiples import get_industry_multiples
from .mispricing import analyze_mispricing
from .multiples import adjust_multiples, calculate_valuation_range
from .narrative import generate_methodology, generate_negotiation_tips
from .normalization import determine_primary_method, normalize_financials
from .risk_adjustments import calculate_risk_adjustments, extract_red_flags, extract_strengths, resolve_as_of_year
from .types import ValuationInput, ValuationOutput, ValuationRange

logger = logging.getLogger(__name__)

QUICK_ESTIMATE_SDE_MARGIN = 0.15


def calculate_valuation(inp: ValuationInput, as_of_year: Optional[int] = None) -> ValuationOutput:
    year = resolve_as_of_year(as_of_year)

    industry_data = get_industry_multiples(inp.industry)
    normalization = normalize_financials(inp)
    risk = calculate_risk_adjustments(inp, as_of_year=year)

    has_sde = bool(inp.sde or inp.ebitda or inp.cash_flow)
    has_ebitda = bool(inp.ebitda)
    primary_method = determine_primary_method(inp.revenue or 0, has_sde, has_ebitda)

    multiples = adjust_multiples(industry_data, risk.net_multiple_change, primary_method)
    valuation_range = calculate_valuation_range(
        normalization.normalized_sde,
        normalization.normalized_ebitda,
        inp.revenue or 0,
        inp.inventory or 0,
        inp.ffe or 0,
        multiples,
    )
    logger.debug(
        f"Valued {industry_data.industry_key} via {primary_method}: "
        f"{valuation_range.low} / {valuation_range.mid} / {valuation_range.high}"
    )

    deal_quality = calculate_deal_quality_score(inp, valuation_range, as_of_year=year)
    mispricing = analyze_mispricing(inp.asking_price, valuation_range)

    methodology = generate_methodology(
        inp,
        industry_data,
        multiples,
        primary_method,
        normalization.explanation,
    )

    return ValuationOutput(
        valuation_range=valuation_range,
        multiples_used=multiples,
        normalized_sde=normalization.normalized_sde,
        normalized_ebitda=normalization.normalized_ebitda,
        normalization_details=normalization,
        risk_adjustments=risk.adjustments,
        total_risk_adjustment=risk.net_multiple_change,
        deal_quality_score=deal_quality.score,
        deal_quality_grade=deal_quality.grade,
        deal_quality_summary=deal_quality.summary,
        deal_quality_breakdown=deal_quality.breakdown,
        mispricing=mispricing,
        methodology=methodology,
        key_strengths=extract_strengths(risk.adjustments),
        red_flags=extract_red_flags(risk.adjustments),
        negotiation_recommendations=generate_negotiation_tips(inp, valuation_range, mispricing, risk.adjustments),
        industry_data=industry_data,
    )


def quick_estimate(revenue: float, industry: str) -> ValuationRange:
    """
    Preview range from revenue alone: flat 15% SDE margin times the raw
    catalog SDE band. No risk adjustment, no scoring.
    """
    industry_data = get_industry_multiples(industry)
    estimated_sde = revenue * QUICK_ESTIMATE_SDE_MARGIN
    return ValuationRange(
        low=round_half_up(estimated_sde * industry_data.sde.low),
        mid=round_half_up(estimated_sde * industry_data.sde.mid),
        high=round_half_up(estimated_sde * industry_data.sde.high),
    )
