"""
Inputs Builder
==============

Canonical logic for preparing a ``ValuationInput`` from a raw listing record
(typically returned by a Connector, e.g. one row of a listings CSV) and a
user-supplied overrides dictionary (typically an API payload).

This module is the **single source of truth** for:
- Mapping listing columns (``price``, ``cash_flow``, ``owner_hours`` ...) and
  camelCase payload keys (``askingPrice``, ``cashFlow`` ...) onto fields
- Parsing currency text such as ``"$1,250,000"``
- Merging overrides with record data (override > record > default)

Both ``bizval_service`` and direct engine callers (CLI, notebooks, tests)
should use ``build_valuation_input()`` so input preparation is identical.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, List, Optional, Tuple

from .types import Addback, ValuationInput

logger = logging.getLogger(__name__)

# Canonical defaults, kept in one place.
DEFAULT_INDUSTRY = "general_business"
GROWTH_TRENDS = ("increasing", "stable", "declining")

_NON_NUMERIC = re.compile(r"[^0-9.\-]")

# field name -> accepted source keys, checked in order.
FIELD_KEYS: Dict[str, Tuple[str, ...]] = {
    "business_name": ("business_name", "businessName", "title"),
    "naics_code": ("naics_code", "naicsCode"),
    "city": ("city",),
    "state": ("state",),
    "revenue": ("revenue",),
    "sde": ("sde",),
    "ebitda": ("ebitda",),
    "cash_flow": ("cash_flow", "cashFlow"),
    "asking_price": ("asking_price", "askingPrice", "price"),
    "inventory": ("inventory",),
    "ffe": ("ffe",),
    "year_established": ("year_established", "yearEstablished"),
    "employees": ("employees",),
    "customer_concentration": ("customer_concentration", "customerConcentration"),
    "revenue_growth_trend": ("revenue_growth_trend", "revenueGrowthTrend"),
    "revenue_growth_rate": ("revenue_growth_rate", "revenueGrowthRate"),
    "owner_hours_per_week": ("owner_hours_per_week", "ownerHoursPerWeek", "owner_hours"),
    "owner_salary": ("owner_salary", "ownerSalary"),
    "recurring_revenue_pct": ("recurring_revenue_pct", "recurringRevenuePct"),
    "lease_years_remaining": ("lease_years_remaining", "leaseYearsRemaining"),
    "lease_monthly_rent": ("lease_monthly_rent", "leaseMonthlyRent"),
    "discretionary_expenses": ("discretionary_expenses", "discretionaryExpenses"),
}

TEXT_FIELDS = ("business_name", "naics_code", "city", "state")
INTEGER_FIELDS = ("year_established", "employees")
NUMBER_FIELDS = (
    "revenue",
    "sde",
    "ebitda",
    "cash_flow",
    "asking_price",
    "inventory",
    "ffe",
    "customer_concentration",
    "revenue_growth_rate",
    "owner_hours_per_week",
    "owner_salary",
    "recurring_revenue_pct",
    "lease_years_remaining",
    "lease_monthly_rent",
    "discretionary_expenses",
)


def parse_number(value: Any, field_name: str = "value") -> Optional[float]:
    """
    Coerce a raw cell or payload value to ``float``.

    Strings are stripped of everything but digits, ``.`` and ``-`` first, so
    ``"$1,250,000"`` parses as ``1250000.0``. Missing values (``None``, empty
    strings, NaN cells) become ``None``; unparseable ones become ``None``
    with a warning.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    text = str(value).strip()
    if not text:
        return None
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        number = float(cleaned)
    except ValueError:
        logger.warning(f"Could not parse {field_name}={value!r}; treating as missing")
        return None
    return number if math.isfinite(number) else None


def parse_integer(value: Any, field_name: str = "value") -> Optional[int]:
    number = parse_number(value, field_name)
    if number is None:
        return None
    return int(number)


def parse_addbacks(value: Any) -> List[Addback]:
    """Accept ``Addback`` objects or ``{description, amount}`` mappings; skip malformed entries."""
    if not value:
        return []
    addbacks: List[Addback] = []
    for item in value:
        if isinstance(item, Addback):
            addbacks.append(item)
            continue
        if not isinstance(item, dict):
            logger.warning(f"Ignoring add-back entry {item!r}: expected a mapping")
            continue
        amount = parse_number(item.get("amount"), "addback.amount")
        if amount is None:
            logger.warning(f"Ignoring add-back entry {item!r}: missing amount")
            continue
        addbacks.append(Addback(description=str(item.get("description", "")), amount=amount))
    return addbacks


def _parse_trend(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    trend = str(value).strip().lower()
    if not trend:
        return None
    if trend not in GROWTH_TRENDS:
        logger.warning(f"Unknown revenue growth trend {value!r}; treating as missing")
        return None
    return trend


def _parse_text(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    text = str(value).strip()
    return text or None


def build_valuation_input(
    record: Dict[str, Any] | None = None,
    overrides: Dict[str, Any] | None = None,
) -> ValuationInput:
    """
    Merge a listing record with user overrides into a ``ValuationInput``.

    Every field of ``ValuationInput`` is explicitly mapped here so that
    the output is identical regardless of call-site (service, CLI, test).

    Parameters
    ----------
    record : dict, optional
        Listing data, typically one row from a Connector. Listing column
        names (``price``, ``owner_hours``, ``title``) are accepted.
    overrides : dict, optional
        User-supplied values. Any key present here with a non-``None``
        value takes precedence over *record*. snake_case and camelCase
        keys are both accepted.

    Returns
    -------
    ValuationInput
        Ready to pass to ``calculate_valuation()``.
    """
    if record is None:
        record = {}
    if overrides is None:
        overrides = {}

    # Helper: pick Override > Record > Default
    def get_val(field_name: str, default: Any = None) -> Any:
        keys = FIELD_KEYS.get(field_name, (field_name,))
        for source in (overrides, record):
            for key in keys:
                if source.get(key) is not None:
                    return source[key]
        return default

    values: Dict[str, Any] = {}

    # ------------------------------------------------------------------ #
    # 1. Industry (empty text falls through to the next source)
    # ------------------------------------------------------------------ #
    industry = _parse_text(overrides.get("industry")) or _parse_text(record.get("industry"))
    values["industry"] = industry or DEFAULT_INDUSTRY

    # ------------------------------------------------------------------ #
    # 2. Descriptive fields
    # ------------------------------------------------------------------ #
    for name in TEXT_FIELDS:
        values[name] = _parse_text(get_val(name))

    # ------------------------------------------------------------------ #
    # 3. Financials & risk factors
    # ------------------------------------------------------------------ #
    for name in NUMBER_FIELDS:
        values[name] = parse_number(get_val(name), name)
    for name in INTEGER_FIELDS:
        values[name] = parse_integer(get_val(name), name)

    values["revenue_growth_trend"] = _parse_trend(get_val("revenue_growth_trend"))

    # ------------------------------------------------------------------ #
    # 4. Add-backs
    # ------------------------------------------------------------------ #
    values["addbacks"] = tuple(parse_addbacks(get_val("addbacks", [])))

    return ValuationInput(**values)
