"""
Valuation Service
=================

Thin orchestration layer: optionally fetch a listing via a Connector, prepare
inputs via the shared ``build_valuation_input`` builder, run the engine, and
return results.

All input-preparation and computation logic lives in **bizval_engine** so
there is exactly one source of truth.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from bizval_engine import (
    MultipleBand,
    QualitativeAdjustments,
    SimpleValuationInput,
    build_valuation_input,
    calculate_valuation,
    calculate_valuation_simple,
    deal_quality_label,
    generate_fallback_commentary,
    quick_estimate,
    valuation_to_dict,
    valuation_to_text,
)
from bizval_service.connectors.base import BaseConnector

logger = logging.getLogger(__name__)

FINANCIAL_FIELDS = ("revenue", "sde", "ebitda", "cash_flow")


class ValuationService:
    def __init__(self, connector: Optional[BaseConnector] = None):
        self.connector = connector

    def calculate_valuation(
        self,
        input_data: Dict[str, Any],
        source_type: str = "manual_entry",
        listing_id: Optional[str] = None,
        as_of_year: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Orchestrates the valuation process.

        1. For ``existing_listing``, fetch the listing record from the Connector.
        2. Merge record and request input via the shared builder (input wins).
        3. Require at least one financial metric.
        4. Run the engine and return results as a dict (API-friendly).
        """
        record: Dict[str, Any] = {}
        if source_type == "existing_listing":
            if not listing_id:
                raise ValueError("listing_id is required when source_type is 'existing_listing'")
            if self.connector is None:
                raise ValueError("No listing connector available")
            # ListingNotFoundError propagates to the caller
            record = self.connector.get_listing(listing_id)
            logger.info(f"Merging listing {listing_id} into valuation input")
        elif not input_data.get("industry"):
            raise ValueError("Industry is required")

        inputs = build_valuation_input(record, input_data)

        if not any(getattr(inputs, name) for name in FINANCIAL_FIELDS):
            raise ValueError(
                "At least one financial metric (revenue, SDE, EBITDA, or cash flow) is required"
            )

        output = calculate_valuation(inputs, as_of_year=as_of_year)

        result = valuation_to_dict(output)
        result["deal_quality_label"] = deal_quality_label(output.deal_quality_score)
        result["business_name"] = inputs.business_name
        result["report_text"] = valuation_to_text(output, business_name=inputs.business_name)
        return result

    def quick_estimate(self, revenue: float, industry: str) -> Dict[str, Any]:
        return asdict(quick_estimate(revenue, industry))

    def calculate_simple(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Single-multiple valuation; ``InputError`` (a ``ValueError``) when no metric is usable."""
        multiples = payload.get("multiples")
        adjustments = payload.get("adjustments")

        simple_input = SimpleValuationInput(
            industry_key=payload["industry_key"],
            method=payload.get("method") or "sde",
            sde=payload.get("sde"),
            ebitda=payload.get("ebitda"),
            revenue=payload.get("revenue"),
            multiples=MultipleBand(**multiples) if multiples else None,
            deal_quality=payload.get("deal_quality"),
            volatility=payload.get("volatility"),
            owner_hours=payload.get("owner_hours"),
            adjustments=QualitativeAdjustments(**adjustments) if adjustments else None,
        )
        result = calculate_valuation_simple(simple_input)

        data = asdict(result)
        data["commentary"] = generate_fallback_commentary(result)
        return data
