"""
Narrative Text
==============

Deterministic prose attached to a valuation: the methodology write-up and
the negotiation tips. Text depends only on the computed values, so identical
inputs always produce identical paragraphs.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .formatting import format_currency, to_fixed
from .types import (
    IndustryMultipleData,
    MispricingAnalysis,
    MultiplesUsed,
    PrimaryMethod,
    RiskAdjustment,
    ValuationInput,
    ValuationRange,
)

QOE_REVENUE_THRESHOLD = 500_000

_METHOD_TEXT = {
    "sde": (
        "Primary valuation based on Seller's Discretionary Earnings (SDE), the standard metric for "
        "main-street businesses. SDE represents the total financial benefit to a working owner."
    ),
    "ebitda": (
        "Primary valuation based on EBITDA, appropriate for larger businesses with professional "
        "management. EBITDA measures operational profitability before financing and accounting decisions."
    ),
    "revenue": (
        "Valuation based on revenue multiple due to limited earnings data. Revenue multiples are less "
        "precise - provide SDE or EBITDA for more accurate valuation."
    ),
}


def generate_methodology(
    inp: ValuationInput,
    industry_data: IndustryMultipleData,
    multiples: MultiplesUsed,
    primary_method: PrimaryMethod,
    normalization_explanation: str,
) -> str:
    """
    Markdown-flavoured methodology: industry context, risk-adjusted
    multiples, the normalization explanation, the valuation method and,
    when present, the tangible assets added on top.
    """
    name = industry_data.industry_name
    text = f'**Industry Analysis**: This business is classified as "{name}" '
    if industry_data.naics_code and industry_data.naics_code != "default":
        text += f"(NAICS {industry_data.naics_code}). "
    else:
        text += ". "

    text += (
        f"Typical {name} businesses trade at "
        f"{to_fixed(industry_data.sde.low, 1)}x-{to_fixed(industry_data.sde.high, 1)}x SDE. "
    )

    text += (
        "\n\n**Risk Adjustments**: Based on the business-specific risk factors analyzed, "
        "we applied a net adjustment to the base multiples. "
    )
    text += f"Adjusted SDE multiples: {to_fixed(multiples.sde.low, 2)}x-{to_fixed(multiples.sde.high, 2)}x. "

    text += f"\n\n**Financial Normalization**: {normalization_explanation} "

    text += "\n\n**Valuation Method**: " + _METHOD_TEXT[primary_method]

    if inp.inventory or inp.ffe:
        text += "\n\n**Tangible Assets**: "
        if inp.inventory:
            text += f"Inventory of {format_currency(inp.inventory)} "
        if inp.inventory and inp.ffe:
            text += "and "
        if inp.ffe:
            text += f"FF&E of {format_currency(inp.ffe)} "
        text += "added to base multiple valuation."

    return text


def generate_negotiation_tips(
    inp: ValuationInput,
    valuation_range: ValuationRange,
    mispricing: Optional[MispricingAnalysis],
    risk_adjustments: Sequence[RiskAdjustment] = (),
) -> List[str]:
    """Ordered tips: pricing, risk-driven clauses, then standing advice."""
    tips: List[str] = []

    if mispricing is not None:
        if mispricing.recommendation in ("strong_buy", "buy"):
            tips.append(
                "Listing is priced favorably. Consider opening at 90-95% of asking price to secure "
                "the deal while leaving room for minor adjustments."
            )
        elif mispricing.recommendation == "overpriced":
            tips.append(
                f"Open negotiations at {format_currency(valuation_range.low)} to "
                f"{format_currency(valuation_range.mid)}. Justify with comparable market data."
            )
            tips.append("Ask for detailed financials and add-back documentation before making a formal offer.")
        elif mispricing.recommendation == "avoid":
            tips.append(
                "Consider waiting for a price reduction or walking away. If pursuing, start "
                f"negotiations at {format_currency(valuation_range.low)}."
            )

    if inp.customer_concentration and inp.customer_concentration > 0.3:
        tips.append(
            "Negotiate an earnout clause tied to customer retention of top accounts for 12-24 months post-close."
        )

    if inp.owner_hours_per_week and inp.owner_hours_per_week > 50:
        tips.append(
            "Request extended seller transition period (6-12 months) with training to ensure successful handoff."
        )

    if inp.lease_years_remaining and inp.lease_years_remaining < 3:
        tips.append("Make lease extension/renewal a condition of the sale. Negotiate with landlord before closing.")

    tips.append(
        "Request seller financing for 10-20% of purchase price over 2-3 years - this keeps seller "
        "invested in your success."
    )

    if inp.revenue and inp.revenue > QOE_REVENUE_THRESHOLD:
        tips.append("Verify financials with Quality of Earnings (QoE) analysis for deals of this size.")

    tips.append(
        "Always conduct thorough due diligence: verify tax returns (3 years), bank statements, "
        "customer contracts, and employee agreements."
    )

    return tips
