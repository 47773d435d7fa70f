"""
Data contracts for the valuation engine.

Every record is a frozen dataclass: inputs and outputs are value objects with
no identity, and the industry catalog relies on immutability to be safely
shared across concurrent calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence


GrowthTrend = Literal["increasing", "stable", "declining"]
Volatility = Literal["low", "medium", "high"]
Severity = Literal["positive", "neutral", "negative", "critical"]
PrimaryMethod = Literal["sde", "ebitda", "revenue"]
Recommendation = Literal["strong_buy", "buy", "fair", "overpriced", "avoid"]
Grade = Literal["A", "B", "C", "D", "F"]


class InputError(ValueError):
    pass


@dataclass(frozen=True)
class Addback:
    description: str
    amount: float


@dataclass(frozen=True)
class ValuationInput:
    industry: str

    # Financials (currency units)
    revenue: Optional[float] = None
    sde: Optional[float] = None
    ebitda: Optional[float] = None
    cash_flow: Optional[float] = None
    asking_price: Optional[float] = None
    inventory: Optional[float] = None
    ffe: Optional[float] = None

    # Business details
    business_name: Optional[str] = None
    naics_code: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    year_established: Optional[int] = None
    employees: Optional[int] = None

    # Risk factors
    customer_concentration: Optional[float] = None  # top customer share of revenue, 0-1
    revenue_growth_trend: Optional[GrowthTrend] = None
    revenue_growth_rate: Optional[float] = None
    owner_hours_per_week: Optional[float] = None
    owner_salary: Optional[float] = None
    recurring_revenue_pct: Optional[float] = None  # 0-1
    lease_years_remaining: Optional[float] = None
    lease_monthly_rent: Optional[float] = None

    # Normalization inputs
    addbacks: Sequence[Addback] = ()
    discretionary_expenses: Optional[float] = None


@dataclass(frozen=True)
class MultipleBand:
    low: float
    mid: float
    high: float


@dataclass(frozen=True)
class IndustryMultipleData:
    industry_key: str
    industry_name: str
    naics_code: Optional[str]
    sde: MultipleBand
    ebitda: MultipleBand
    revenue: MultipleBand
    typical_owner_hours: Optional[int] = None
    volatility: Optional[Volatility] = None


@dataclass(frozen=True)
class RiskAdjustment:
    factor: str
    description: str
    impact: float  # roughly -0.5 .. +0.5 multiple turns
    severity: Severity


@dataclass(frozen=True)
class RiskAssessment:
    adjustments: List[RiskAdjustment]
    total_adjustment: float
    net_multiple_change: float


@dataclass(frozen=True)
class NormalizationAdjustments:
    owner_salary_addback: float = 0.0
    discretionary_addback: float = 0.0
    addbacks_total: float = 0.0
    total: float = 0.0


@dataclass(frozen=True)
class NormalizationResult:
    normalized_sde: float
    normalized_ebitda: float
    adjustments: NormalizationAdjustments
    explanation: str


@dataclass(frozen=True)
class MultiplesUsed:
    sde: MultipleBand
    ebitda: MultipleBand
    revenue: MultipleBand
    primary_method: PrimaryMethod


@dataclass(frozen=True)
class ValuationRange:
    low: int
    mid: int
    high: int


@dataclass(frozen=True)
class DealQualityBreakdown:
    pricing_fairness: float
    financial_trajectory: float
    concentration_risk: float
    operational_risk: float
    documentation_quality: float
    valuation_alignment: float


@dataclass(frozen=True)
class DealQualityResult:
    score: int
    breakdown: DealQualityBreakdown
    grade: Grade
    summary: str


@dataclass(frozen=True)
class MispricingAnalysis:
    percent: float  # negative = underpriced, positive = overpriced
    label: str
    analysis: str
    recommendation: Recommendation


@dataclass(frozen=True)
class ValuationOutput:
    valuation_range: ValuationRange
    multiples_used: MultiplesUsed

    normalized_sde: float
    normalized_ebitda: float
    normalization_details: NormalizationResult

    risk_adjustments: List[RiskAdjustment]
    total_risk_adjustment: float

    deal_quality_score: int
    deal_quality_grade: Grade
    deal_quality_summary: str
    deal_quality_breakdown: DealQualityBreakdown

    mispricing: Optional[MispricingAnalysis]

    methodology: str
    key_strengths: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    negotiation_recommendations: List[str] = field(default_factory=list)

    industry_data: Optional[IndustryMultipleData] = None
