"""
Report export: a JSON-ready dict and a plain-text report for one valuation.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .deal_quality import deal_quality_label
from .formatting import format_currency, to_fixed
from .types import ValuationOutput

_BREAKDOWN_TITLES = {
    "pricing_fairness": "Pricing Fairness",
    "financial_trajectory": "Financial Trajectory",
    "concentration_risk": "Concentration Risk",
    "operational_risk": "Operational Risk",
    "documentation_quality": "Documentation Quality",
    "valuation_alignment": "Valuation Alignment",
}


def valuation_to_dict(output: ValuationOutput) -> Dict[str, Any]:
    """Nested plain-Python structure of the whole output (dataclasses become dicts)."""
    return asdict(output)


def valuation_to_text(output: ValuationOutput, business_name: Optional[str] = None) -> str:
    rng = output.valuation_range
    lines: List[str] = []

    title = "Business Valuation Report"
    if business_name:
        title = f"{title}: {business_name}"
    lines += [title, "=" * len(title), ""]

    lines.append(f"Estimated Business Value: {format_currency(rng.mid)}")
    lines.append(f"Range: {format_currency(rng.low)} - {format_currency(rng.high)}")

    if output.mispricing is not None:
        lines += ["", f"Pricing: {output.mispricing.label} ({output.mispricing.recommendation})"]
        lines.append(output.mispricing.analysis)

    lines += [
        "",
        f"Deal Quality Score: {output.deal_quality_score}/100 "
        f"(Grade {output.deal_quality_grade}, {deal_quality_label(output.deal_quality_score)})",
        output.deal_quality_summary,
    ]
    for key, title_text in _BREAKDOWN_TITLES.items():
        lines.append(f"  {title_text}: {getattr(output.deal_quality_breakdown, key):g}")

    lines += ["", "Key Strengths"]
    lines += [f"  + {item}" for item in output.key_strengths] or [
        "  No significant strengths identified based on provided data."
    ]

    lines += ["", "Red Flags"]
    lines += [f"  ! {item}" for item in output.red_flags] or ["  No significant risk factors identified."]

    lines += ["", "Valuation Details"]
    if output.industry_data is not None:
        industry = output.industry_data
        naics = f" (NAICS {industry.naics_code})" if industry.naics_code and industry.naics_code != "default" else ""
        lines.append(f"  Industry: {industry.industry_name}{naics}")
    lines.append(
        f"  Normalized SDE: {format_currency(output.normalized_sde)}; "
        f"EBITDA: {format_currency(output.normalized_ebitda)}"
    )
    sde = output.multiples_used.sde
    lines.append(f"  SDE Multiples Applied: {to_fixed(sde.low, 2)}x - {to_fixed(sde.high, 2)}x")
    sign = "+" if output.total_risk_adjustment > 0 else ""
    lines.append(f"  Risk Adjustment: {sign}{to_fixed(output.total_risk_adjustment, 2)}x")
    lines.append(f"  Primary Method: {output.multiples_used.primary_method.upper()}")

    if output.negotiation_recommendations:
        lines += ["", "Negotiation Recommendations"]
        lines += [f"  {i}. {tip}" for i, tip in enumerate(output.negotiation_recommendations, start=1)]

    lines += ["", "Methodology", output.methodology.replace("**", "")]

    return "\n".join(lines) + "\n"
