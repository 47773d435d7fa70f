"""
Multiple Adjustment & Valuation Range
=====================================

Applies the clamped risk delta to an industry's multiple bands and turns the
adjusted bands into a currency valuation range.
"""

from __future__ import annotations

from .formatting import round_half_up
from .types import IndustryMultipleData, MultipleBand, MultiplesUsed, PrimaryMethod, ValuationRange

EARNINGS_MULTIPLE_FLOOR = 0.5
REVENUE_DELTA_SCALE = 0.2
REVENUE_MULTIPLE_FLOORS = MultipleBand(low=0.1, mid=0.2, high=0.3)


def _shift_band(band: MultipleBand, delta: float, floors: MultipleBand) -> MultipleBand:
    return MultipleBand(
        low=max(floors.low, band.low + delta),
        mid=max(floors.mid, band.mid + delta),
        high=max(floors.high, band.high + delta),
    )


def adjust_multiples(
    industry_data: IndustryMultipleData,
    net_multiple_change: float,
    primary_method: PrimaryMethod = "sde",
) -> MultiplesUsed:
    """
    Shift every band by the risk delta.

    SDE and EBITDA move one-for-one and are floored at 0.5x. Revenue
    multiples are much smaller numbers, so they move by a fifth of the delta
    and are floored at 0.1x / 0.2x / 0.3x.
    """
    earnings_floor = MultipleBand(EARNINGS_MULTIPLE_FLOOR, EARNINGS_MULTIPLE_FLOOR, EARNINGS_MULTIPLE_FLOOR)
    return MultiplesUsed(
        sde=_shift_band(industry_data.sde, net_multiple_change, earnings_floor),
        ebitda=_shift_band(industry_data.ebitda, net_multiple_change, earnings_floor),
        revenue=_shift_band(
            industry_data.revenue,
            net_multiple_change * REVENUE_DELTA_SCALE,
            REVENUE_MULTIPLE_FLOORS,
        ),
        primary_method=primary_method,
    )


def calculate_valuation_range(
    sde: float,
    ebitda: float,
    revenue: float,
    inventory: float,
    ffe: float,
    multiples: MultiplesUsed,
) -> ValuationRange:
    """
    Metric x adjusted band for ``multiples.primary_method``, plus tangible
    assets (inventory + FF&E), rounded half-up to whole currency units.
    """
    method = multiples.primary_method
    if method == "sde":
        metric, band = sde, multiples.sde
    elif method == "ebitda":
        metric, band = ebitda, multiples.ebitda
    else:
        metric, band = revenue, multiples.revenue

    # A negative earnings figure would invert the band; value on assets alone.
    metric = max(metric, 0)

    tangible_assets = inventory + ffe

    return ValuationRange(
        low=round_half_up(metric * band.low + tangible_assets),
        mid=round_half_up(metric * band.mid + tangible_assets),
        high=round_half_up(metric * band.high + tangible_assets),
    )
