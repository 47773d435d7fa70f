"""
Risk Adjustments
================

Turns qualitative facts about a business into signed adjustments to its
industry multiples. Each dimension is evaluated independently and yields at
most one ``RiskAdjustment``; generation order is fixed:

    concentration -> growth -> owner hours -> recurring revenue
    -> lease -> business age -> staffing -> rent ratio

``total_adjustment`` is the raw sum of impacts. ``net_multiple_change`` is
that sum clamped to +/- 1.0x so a pile of critical risks can never drive a
multiple to zero on its own.
"""

from __future__ import annotations

import datetime
from typing import List, Optional

from .formatting import format_number, percent
from .types import RiskAdjustment, RiskAssessment, ValuationInput

MAX_NET_MULTIPLE_CHANGE = 1.0


def resolve_as_of_year(as_of_year: Optional[int] = None) -> int:
    """The year business age is measured against; defaults to today's year."""
    if as_of_year is not None:
        return as_of_year
    return datetime.date.today().year


def calculate_risk_adjustments(inp: ValuationInput, as_of_year: Optional[int] = None) -> RiskAssessment:
    year = resolve_as_of_year(as_of_year)

    candidates = [
        _customer_concentration(inp),
        _revenue_growth(inp),
        _owner_hours(inp),
        _recurring_revenue(inp),
        _lease(inp),
        _business_age(inp, year),
        _staffing(inp),
        _rent_ratio(inp),
    ]
    adjustments = [adj for adj in candidates if adj is not None]

    total = sum(adj.impact for adj in adjustments)
    net = max(-MAX_NET_MULTIPLE_CHANGE, min(MAX_NET_MULTIPLE_CHANGE, total))

    return RiskAssessment(
        adjustments=adjustments,
        total_adjustment=total,
        net_multiple_change=net,
    )


# ---------------------------------------------------------------------------
# Per-dimension rules
# ---------------------------------------------------------------------------


def _customer_concentration(inp: ValuationInput) -> Optional[RiskAdjustment]:
    share = inp.customer_concentration
    if share is None:
        return None
    pct = percent(share)
    if share > 0.5:
        return RiskAdjustment(
            "customer_concentration",
            f"High customer concentration - top customer represents {pct}% of revenue. "
            "Major risk if relationship ends.",
            -0.5,
            "critical",
        )
    if share > 0.3:
        return RiskAdjustment(
            "customer_concentration",
            f"Moderate customer concentration ({pct}%). Recommend diversifying customer base.",
            -0.25,
            "negative",
        )
    if share > 0.2:
        return RiskAdjustment(
            "customer_concentration",
            f"Some customer concentration ({pct}%). Monitor largest accounts.",
            -0.1,
            "neutral",
        )
    return RiskAdjustment(
        "diversified_customers",
        f"Well-diversified customer base (largest customer < {pct}%). Reduces revenue risk.",
        0.1,
        "positive",
    )


def _revenue_growth(inp: ValuationInput) -> Optional[RiskAdjustment]:
    trend = inp.revenue_growth_trend
    if not trend:
        return None

    if trend == "increasing":
        rate = inp.revenue_growth_rate or 0
        if rate > 0.2:
            return RiskAdjustment(
                "revenue_growth",
                f"Strong revenue growth of {percent(rate)}% - indicates healthy demand and market position.",
                0.35,
                "positive",
            )
        if rate > 0.1:
            return RiskAdjustment(
                "revenue_growth",
                f"Solid revenue growth of {percent(rate)}% - business is expanding.",
                0.2,
                "positive",
            )
        return RiskAdjustment(
            "revenue_growth",
            "Modest revenue growth - trending in right direction.",
            0.1,
            "positive",
        )

    if trend == "declining":
        rate = abs(inp.revenue_growth_rate or 0)
        if rate > 0.15:
            return RiskAdjustment(
                "revenue_decline",
                f"Significant revenue decline ({percent(rate)}%) - investigate cause immediately.",
                -0.45,
                "critical",
            )
        if rate > 0.05:
            return RiskAdjustment(
                "revenue_decline",
                f"Revenue showing decline ({percent(rate)}%) - trend needs reversal.",
                -0.3,
                "negative",
            )
        return RiskAdjustment(
            "revenue_decline",
            "Slight revenue softness - monitor closely.",
            -0.15,
            "negative",
        )

    return RiskAdjustment(
        "stable_revenue",
        "Stable revenue - predictable but limited growth opportunity.",
        0,
        "neutral",
    )


def _owner_hours(inp: ValuationInput) -> Optional[RiskAdjustment]:
    hours = inp.owner_hours_per_week
    if hours is None:
        return None
    shown = format_number(hours)
    if hours > 60:
        return RiskAdjustment(
            "owner_dependency",
            f"Very high owner involvement ({shown} hrs/week). "
            "Business heavily dependent on owner - transition risk.",
            -0.4,
            "critical",
        )
    if hours > 50:
        return RiskAdjustment(
            "owner_dependency",
            f"High owner involvement ({shown} hrs/week). Will require significant management transition.",
            -0.25,
            "negative",
        )
    if hours > 40:
        return RiskAdjustment(
            "owner_involvement",
            f"Standard owner involvement ({shown} hrs/week). Typical for main-street business.",
            0,
            "neutral",
        )
    if hours > 20:
        return RiskAdjustment(
            "semi_absentee",
            f"Semi-absentee owner ({shown} hrs/week). Good management systems in place.",
            0.15,
            "positive",
        )
    return RiskAdjustment(
        "absentee_ownership",
        f"Absentee ownership possible ({shown} hrs/week). Strong systems and management team.",
        0.3,
        "positive",
    )


def _recurring_revenue(inp: ValuationInput) -> Optional[RiskAdjustment]:
    share = inp.recurring_revenue_pct
    if share is None:
        return None
    pct = percent(share)
    if share > 0.8:
        return RiskAdjustment(
            "recurring_revenue",
            f"Excellent recurring revenue ({pct}%). Highly predictable cash flows.",
            0.4,
            "positive",
        )
    if share > 0.6:
        return RiskAdjustment(
            "recurring_revenue",
            f"Strong recurring revenue ({pct}%). Good revenue visibility.",
            0.25,
            "positive",
        )
    if share > 0.4:
        return RiskAdjustment(
            "recurring_revenue",
            f"Moderate recurring revenue ({pct}%). Some predictability.",
            0.1,
            "positive",
        )
    if share < 0.1:
        return RiskAdjustment(
            "transactional_revenue",
            f"Primarily transactional revenue ({pct}% recurring). Less predictable.",
            -0.1,
            "negative",
        )
    return None


def _lease(inp: ValuationInput) -> Optional[RiskAdjustment]:
    years = inp.lease_years_remaining
    if years is None:
        return None
    shown = format_number(years)
    if years < 1:
        return RiskAdjustment(
            "lease_risk",
            "Critical lease situation - less than 1 year remaining. Must negotiate renewal before sale.",
            -0.45,
            "critical",
        )
    if years < 2:
        return RiskAdjustment(
            "lease_risk",
            f"Short lease remaining ({shown} years). Negotiate extension as condition of sale.",
            -0.3,
            "negative",
        )
    if years < 3:
        return RiskAdjustment(
            "lease_concern",
            f"Lease expires in {shown} years. Recommend securing longer term.",
            -0.15,
            "negative",
        )
    # Leases of 10+ years land here too; there is no separate top tier.
    if years >= 5:
        return RiskAdjustment(
            "lease_security",
            f"Long-term lease secured ({shown} years). Location stability assured.",
            0.15,
            "positive",
        )
    return None


def _business_age(inp: ValuationInput, as_of_year: int) -> Optional[RiskAdjustment]:
    if not inp.year_established:
        return None
    age = as_of_year - inp.year_established
    if age >= 20:
        return RiskAdjustment(
            "business_maturity",
            f"Well-established business ({age} years). Proven model with long track record.",
            0.2,
            "positive",
        )
    if age >= 10:
        return RiskAdjustment(
            "business_maturity",
            f"Established business ({age} years). Solid operating history.",
            0.1,
            "positive",
        )
    if age >= 5:
        return RiskAdjustment(
            "business_age",
            f"Maturing business ({age} years). Past initial startup phase.",
            0,
            "neutral",
        )
    if age >= 3:
        return RiskAdjustment(
            "business_age_risk",
            f"Relatively young business ({age} years). Still proving model.",
            -0.15,
            "negative",
        )
    return RiskAdjustment(
        "business_age_risk",
        f"Young business ({age} years). Higher risk due to limited track record.",
        -0.3,
        "negative",
    )


def _staffing(inp: ValuationInput) -> Optional[RiskAdjustment]:
    employees = inp.employees
    if employees is None:
        return None
    if employees >= 15:
        return RiskAdjustment(
            "team_depth",
            f"Strong team in place ({format_number(employees)} employees). Reduces key-person risk.",
            0.15,
            "positive",
        )
    if employees >= 5:
        return RiskAdjustment(
            "team_size",
            f"Established team ({format_number(employees)} employees). Basic organizational structure.",
            0.05,
            "positive",
        )
    if employees <= 1:
        return RiskAdjustment(
            "solo_operation",
            "Solo or minimal staff operation. High dependency on owner/few individuals.",
            -0.1,
            "negative",
        )
    return None


def _rent_ratio(inp: ValuationInput) -> Optional[RiskAdjustment]:
    if not (inp.lease_monthly_rent and inp.revenue):
        return None
    ratio = inp.lease_monthly_rent * 12 / inp.revenue
    if ratio > 0.15:
        return RiskAdjustment(
            "high_rent",
            f"High occupancy cost ({percent(ratio)}% of revenue). Squeezes margins.",
            -0.2,
            "negative",
        )
    if ratio < 0.05:
        return RiskAdjustment(
            "low_rent",
            f"Low occupancy cost ({percent(ratio)}% of revenue). Strong margin protection.",
            0.1,
            "positive",
        )
    return None


# ---------------------------------------------------------------------------
# Narrative extraction
# ---------------------------------------------------------------------------


def extract_strengths(adjustments: List[RiskAdjustment]) -> List[str]:
    """Descriptions of positive adjustments, in generation order."""
    return [adj.description for adj in adjustments if adj.severity == "positive"]


def extract_red_flags(adjustments: List[RiskAdjustment]) -> List[str]:
    """Descriptions of negative and critical adjustments, most negative impact first."""
    flagged = [adj for adj in adjustments if adj.severity in ("negative", "critical")]
    return [adj.description for adj in sorted(flagged, key=lambda adj: adj.impact)]
