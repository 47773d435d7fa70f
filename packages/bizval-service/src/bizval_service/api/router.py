"""
API Router: all endpoint definitions for the valuation service.
"""

import logging
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, HTTPException, Query

from bizval_engine import get_all_industry_options, get_industry_multiples
from bizval_service.api.schemas import IndustryOption, SimpleValuationRequest, ValuationRequest
from bizval_service.config import get_settings
from bizval_service.connectors import ConnectorFactory, ListingNotFoundError
from bizval_service.services.valuation import ValuationService
from bizval_service.utils.json import sanitize_for_json

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/industries",
    summary="List Industries",
    description="All catalog industries, sorted by display name.",
    response_model=List[IndustryOption],
)
def list_industries():
    return get_all_industry_options()


@router.get(
    "/industries/{industry}",
    summary="Resolve Industry",
    description="Resolves free text to a catalog record (key, alias, substring match, then 'general_business').",
    response_description="Industry record with SDE, EBITDA and revenue multiple bands.",
)
def resolve_industry(industry: str):
    return asdict(get_industry_multiples(industry))


@router.post(
    "/valuation/calculate",
    summary="Calculate Valuation",
    description="Full multiples-based valuation. Optionally merges the input over a stored listing.",
    response_description="Valuation range, adjusted multiples, risk adjustments, deal quality, mispricing and narrative.",
)
def calculate_valuation(request: ValuationRequest):
    label = request.listing_id or request.input.business_name or request.input.industry
    try:
        connector = ConnectorFactory.get_connector(request.source or get_settings().default_source)
        service = ValuationService(connector)

        input_dict = request.input.model_dump(exclude_none=True)
        result = service.calculate_valuation(
            input_dict,
            source_type=request.source_type,
            listing_id=request.listing_id,
            as_of_year=request.as_of_year,
        )
        return sanitize_for_json(result)
    except ListingNotFoundError as e:
        logger.warning(f"Listing not found: {e}")
        raise HTTPException(status_code=404, detail="Listing not found")
    except ValueError as e:
        logger.warning(f"Bad Request for {label}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Internal Error valuing {label}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get(
    "/valuation/quick-estimate",
    summary="Quick Estimate",
    description="Preview range from revenue alone: 15% SDE margin times the industry's SDE band.",
)
def get_quick_estimate(
    revenue: float = Query(..., ge=0, description="Annual revenue"),
    industry: str = Query("general_business", description="Industry label or catalog key"),
):
    try:
        return sanitize_for_json(ValuationService().quick_estimate(revenue, industry))
    except Exception as e:
        logger.error(f"Internal Error estimating {industry}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post(
    "/valuation/simple",
    summary="Simple Valuation",
    description="Single-multiple valuation with qualitative adjustments, rounded to the nearest $10,000.",
)
def calculate_simple_valuation(request: SimpleValuationRequest):
    try:
        payload = request.model_dump(exclude_none=True)
        return sanitize_for_json(ValuationService().calculate_simple(payload))
    except ValueError as e:
        logger.warning(f"Bad Request for {request.industry_key}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Internal Error valuing {request.industry_key}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")
