"""
Asking price vs. computed mid valuation.

``percent`` is signed: negative means the listing is priced below our mid
(underpriced), positive means above it (overpriced).
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from .formatting import format_currency, round_half_up
from .types import MispricingAnalysis, ValuationRange

logger = logging.getLogger(__name__)

FAIRLY_PRICED_LABEL = "Fairly priced"


def analyze_mispricing(
    asking_price: Optional[float],
    valuation_range: ValuationRange,
) -> Optional[MispricingAnalysis]:
    """
    Classify the gap between ``asking_price`` and the mid valuation.

    Returns ``None`` when no asking price is supplied. A price of ``0`` is
    still analyzed. A zero mid valuation yields ``+inf`` for a positive
    asking price and ``0.0`` otherwise.
    """
    if asking_price is None:
        return None

    mid = valuation_range.mid
    if mid == 0:
        logger.debug("Mid valuation is zero; mispricing percent is degenerate")
        pct = math.inf if asking_price > 0 else 0.0
    else:
        pct = (asking_price - mid) / mid * 100

    rounded = round_half_up(pct) if math.isfinite(pct) else None

    if pct <= -20:
        return MispricingAnalysis(
            percent=pct,
            label=f"{abs(rounded)}% underpriced",
            analysis=(
                "The asking price is significantly below our mid-range valuation. This represents an "
                "exceptional opportunity if the business fundamentals check out. Move quickly as this "
                "pricing won't last."
            ),
            recommendation="strong_buy",
        )
    if pct <= -10:
        return MispricingAnalysis(
            percent=pct,
            label=f"{abs(rounded)}% underpriced",
            analysis=(
                "The asking price is below our mid-range valuation, indicating a favorable deal for the "
                "buyer. This provides room for negotiation or a buffer for unforeseen issues."
            ),
            recommendation="buy",
        )
    if pct <= -5:
        return MispricingAnalysis(
            percent=pct,
            label=f"{abs(rounded)}% underpriced",
            analysis="The asking price is slightly below fair market value. A solid opportunity at the listed price.",
            recommendation="buy",
        )
    if pct <= 5:
        return MispricingAnalysis(
            percent=pct,
            label=FAIRLY_PRICED_LABEL,
            analysis=(
                "The asking price aligns closely with our valuation. This is a fair market price. "
                "Success depends on your negotiation and the specific fit with your goals."
            ),
            recommendation="fair",
        )
    if pct <= 10:
        return MispricingAnalysis(
            percent=pct,
            label=f"{rounded}% overpriced",
            analysis=(
                "The asking price is slightly above our mid-range valuation. There's room to negotiate. "
                f"Target a price closer to {format_currency(mid)}."
            ),
            recommendation="fair",
        )
    if pct <= 20:
        return MispricingAnalysis(
            percent=pct,
            label=f"{rounded}% overpriced",
            analysis=(
                "The asking price exceeds our valuation. Negotiate firmly or wait for price reduction. "
                f"Fair offer would be around {format_currency(mid)}."
            ),
            recommendation="overpriced",
        )

    label = f"{rounded}% overpriced" if rounded is not None else "Overpriced (no valuation basis)"
    return MispricingAnalysis(
        percent=pct,
        label=label,
        analysis=(
            "The asking price significantly exceeds our valuation. Unless there are exceptional "
            "circumstances not captured in the data, this deal should be avoided or negotiated down "
            "substantially."
        ),
        recommendation="avoid",
    )
