"""
Convenience re-exports of data models.

All models are defined in ``bizval_engine.types`` and re-exported here
for consumers who prefer ``from bizval_engine.models import ValuationInput``.
"""

from bizval_engine.types import (
    Addback,
    DealQualityBreakdown,
    DealQualityResult,
    IndustryMultipleData,
    InputError,
    MispricingAnalysis,
    MultipleBand,
    MultiplesUsed,
    NormalizationResult,
    RiskAdjustment,
    RiskAssessment,
    ValuationInput,
    ValuationOutput,
    ValuationRange,
)

__all__ = [
    "Addback",
    "DealQualityBreakdown",
    "DealQualityResult",
    "IndustryMultipleData",
    "InputError",
    "MispricingAnalysis",
    "MultipleBand",
    "MultiplesUsed",
    "NormalizationResult",
    "RiskAdjustment",
    "RiskAssessment",
    "ValuationInput",
    "ValuationOutput",
    "ValuationRange",
]
