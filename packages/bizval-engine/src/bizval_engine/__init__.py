"""
Business Valuation Engine
=========================

Pure small-business valuation engine (multiples-based) with zero external
dependencies.

Public API:
- ``ValuationInput`` / ``ValuationOutput``: data contracts
- ``calculate_valuation(input)``: full pipeline (range, risk, score, mispricing, narrative)
- ``quick_estimate(revenue, industry)``: revenue-only preview range
- ``get_industry_multiples(industry)`` / ``get_all_industry_options()``: catalog
- ``build_valuation_input(record, overrides)``: canonical input preparation
- ``calculate_valuation_simple(input)``: single-multiple calculator
"""

from bizval_engine.deal_quality import WEIGHTS, calculate_deal_quality_score, deal_quality_label
from bizval_engine.engine import calculate_valuation, quick_estimate
from bizval_engine.industry_multiples import (
    INDUSTRY_MULTIPLES,
    INDUSTRY_NAME_MAPPINGS,
    get_all_industry_options,
    get_industry_multiples,
    get_typical_sde_margin,
)
from bizval_engine.inputs_builder import build_valuation_input
from bizval_engine.mispricing import analyze_mispricing
from bizval_engine.multiples import adjust_multiples, calculate_valuation_range
from bizval_engine.narrative import format_currency, generate_methodology, generate_negotiation_tips
from bizval_engine.normalization import determine_primary_method, estimate_owner_salary, normalize_financials
from bizval_engine.report import valuation_to_dict, valuation_to_text
from bizval_engine.risk_adjustments import calculate_risk_adjustments, extract_red_flags, extract_strengths
from bizval_engine.simple_calculator import (
    AdjustmentContext,
    QualitativeAdjustments,
    SimpleValuationInput,
    SimpleValuationResult,
    adjust_multiple,
    calculate_confidence_score,
    calculate_valuation_simple,
    generate_fallback_commentary,
)
from bizval_engine.types import (
    Addback,
    DealQualityBreakdown,
    DealQualityResult,
    IndustryMultipleData,
    InputError,
    MispricingAnalysis,
    MultipleBand,
    MultiplesUsed,
    NormalizationAdjustments,
    NormalizationResult,
    RiskAdjustment,
    RiskAssessment,
    ValuationInput,
    ValuationOutput,
    ValuationRange,
)

__all__ = [
    "INDUSTRY_MULTIPLES",
    "INDUSTRY_NAME_MAPPINGS",
    "WEIGHTS",
    "Addback",
    "AdjustmentContext",
    "DealQualityBreakdown",
    "DealQualityResult",
    "IndustryMultipleData",
    "InputError",
    "MispricingAnalysis",
    "MultipleBand",
    "MultiplesUsed",
    "NormalizationAdjustments",
    "NormalizationResult",
    "QualitativeAdjustments",
    "RiskAdjustment",
    "RiskAssessment",
    "SimpleValuationInput",
    "SimpleValuationResult",
    "ValuationInput",
    "ValuationOutput",
    "ValuationRange",
    "adjust_multiple",
    "adjust_multiples",
    "analyze_mispricing",
    "build_valuation_input",
    "calculate_confidence_score",
    "calculate_deal_quality_score",
    "calculate_risk_adjustments",
    "calculate_valuation",
    "calculate_valuation_range",
    "calculate_valuation_simple",
    "deal_quality_label",
    "determine_primary_method",
    "estimate_owner_salary",
    "extract_red_flags",
    "extract_strengths",
    "format_currency",
    "generate_fallback_commentary",
    "generate_methodology",
    "generate_negotiation_tips",
    "get_all_industry_options",
    "get_industry_multiples",
    "get_typical_sde_margin",
    "normalize_financials",
    "quick_estimate",
    "valuation_to_dict",
    "valuation_to_text",
]
