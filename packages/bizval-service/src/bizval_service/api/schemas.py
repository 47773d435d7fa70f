from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AddbackItem(BaseModel):
    description: str = Field("", description="What the expense was")
    amount: float = Field(..., description="Amount added back to earnings")


class BusinessInput(BaseModel):
    """Facts about the business being valued. Field names accept snake_case or camelCase."""

    industry: Optional[str] = Field(None, description="Free-text industry label or catalog key (e.g. 'hvac')")

    # Financials
    revenue: Optional[float] = Field(None, description="Annual revenue")
    sde: Optional[float] = Field(None, description="Seller's discretionary earnings")
    ebitda: Optional[float] = Field(None, description="EBITDA")
    cash_flow: Optional[float] = Field(None, description="Listed cash flow, used as an SDE proxy")
    asking_price: Optional[float] = Field(None, description="Seller's asking price")
    inventory: Optional[float] = Field(None, description="Inventory value included in the sale")
    ffe: Optional[float] = Field(None, description="Furniture, fixtures & equipment value")

    # Business details
    business_name: Optional[str] = Field(None, description="Display name")
    naics_code: Optional[str] = Field(None, description="NAICS code, informational only")
    city: Optional[str] = Field(None, description="City")
    state: Optional[str] = Field(None, description="State")
    year_established: Optional[int] = Field(None, description="Year the business was founded")
    employees: Optional[int] = Field(None, description="Employee count")

    # Risk factors
    customer_concentration: Optional[float] = Field(None, description="Largest customer's share of revenue (0-1)")
    revenue_growth_trend: Optional[Literal["increasing", "stable", "declining"]] = Field(
        None, description="Direction of revenue over recent years"
    )
    revenue_growth_rate: Optional[float] = Field(None, description="Signed growth rate as a fraction")
    owner_hours_per_week: Optional[float] = Field(None, description="Hours the owner works per week")
    owner_salary: Optional[float] = Field(None, description="Owner salary; estimated from revenue when omitted")
    recurring_revenue_pct: Optional[float] = Field(None, description="Recurring share of revenue (0-1)")
    lease_years_remaining: Optional[float] = Field(None, description="Years left on the premises lease")
    lease_monthly_rent: Optional[float] = Field(None, description="Monthly rent")

    # Normalization
    addbacks: Optional[List[AddbackItem]] = Field(None, description="Itemized add-backs")
    discretionary_expenses: Optional[float] = Field(None, description="Discretionary expenses to add back")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValuationRequest(BaseModel):
    """Request body for the full valuation endpoint."""

    source_type: Literal["manual_entry", "existing_listing"] = Field(
        "manual_entry", description="Value the supplied input alone, or merge it over a stored listing"
    )
    listing_id: Optional[str] = Field(None, description="Listing to merge when source_type is 'existing_listing'")
    source: Optional[str] = Field(None, description="Listing connector; defaults to BIZVAL_DEFAULT_SOURCE")
    as_of_year: Optional[int] = Field(None, description="Year business age is measured against; defaults to now")
    input: BusinessInput = Field(..., description="Business facts; these win over listing data")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "source_type": "manual_entry",
                "input": {
                    "industry": "hvac",
                    "revenue": 1200000,
                    "sde": 200000,
                    "asking_price": 650000,
                    "owner_hours_per_week": 45,
                    "customer_concentration": 0.15,
                    "revenue_growth_trend": "increasing",
                    "revenue_growth_rate": 0.12,
                },
            }
        }
    )


class MultipleBandModel(BaseModel):
    low: float
    mid: float
    high: float


class QualitativeAdjustmentsModel(BaseModel):
    owner_dependency: Optional[Literal["high", "medium", "low"]] = None
    customer_concentration: Optional[Literal["high", "medium", "low"]] = None
    recurring_revenue: Optional[bool] = None
    documentation: Optional[Literal["strong", "weak"]] = None
    brand: Optional[Literal["strong", "weak"]] = None
    growth_potential: Optional[Literal["high", "medium", "low"]] = None


class SimpleValuationRequest(BaseModel):
    """Request body for the single-multiple calculator."""

    industry_key: str = Field(..., description="Catalog key or free-text industry")
    method: Literal["sde", "ebitda", "revenue"] = Field("sde", description="Preferred metric")
    sde: Optional[float] = Field(None, description="SDE")
    ebitda: Optional[float] = Field(None, description="EBITDA")
    revenue: Optional[float] = Field(None, description="Revenue")
    multiples: Optional[MultipleBandModel] = Field(None, description="Override the catalog band for the method")
    deal_quality: Optional[float] = Field(None, ge=0, le=100, description="Deal quality score (0-100)")
    volatility: Optional[Literal["low", "medium", "high"]] = Field(None, description="Industry volatility")
    owner_hours: Optional[float] = Field(None, description="Owner hours per week")
    adjustments: Optional[QualitativeAdjustmentsModel] = Field(None, description="Qualitative adjustments")


class IndustryOption(BaseModel):
    key: str
    name: str
