"""
Industry Multiple Catalog
=========================

Static market multiples by industry (BizBuySell / IBBA market data and
industry research) plus the free-text matching layer used to resolve a
user-supplied industry label to a catalog record.

The catalog is built once at import time and exposed read-only:
``INDUSTRY_MULTIPLES`` is a ``MappingProxyType`` over frozen records and
``INDUSTRY_NAME_MAPPINGS`` is an ordered tuple of ``(alias, key)`` pairs.
Alias order decides substring-match precedence and must not be re-sorted.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .types import IndustryMultipleData, MultipleBand, Volatility

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY_KEY = "general_business"
DEFAULT_SDE_MARGIN = 0.15


def _entry(
    key: str,
    name: str,
    naics: str,
    sde: Tuple[float, float, float],
    ebitda: Tuple[float, float, float],
    revenue: Tuple[float, float, float],
    owner_hours: int,
    volatility: Volatility,
) -> IndustryMultipleData:
    return IndustryMultipleData(
        industry_key=key,
        industry_name=name,
        naics_code=naics,
        sde=MultipleBand(*sde),
        ebitda=MultipleBand(*ebitda),
        revenue=MultipleBand(*revenue),
        typical_owner_hours=owner_hours,
        volatility=volatility,
    )


_CATALOG: Tuple[IndustryMultipleData, ...] = (
    # Service businesses
    _entry("professional_services", "Professional Services", "54",
           (2.0, 2.5, 3.5), (3.0, 4.0, 5.5), (0.4, 0.6, 0.9), 45, "low"),
    _entry("accounting", "Accounting & Tax Services", "541211",
           (1.0, 1.25, 1.5), (2.0, 3.0, 4.0), (0.8, 1.1, 1.4), 50, "low"),
    _entry("insurance_agency", "Insurance Agency", "524210",
           (1.5, 2.0, 2.5), (3.0, 4.5, 6.0), (1.0, 1.5, 2.2), 40, "low"),
    _entry("staffing", "Staffing & Recruiting", "561311",
           (2.0, 3.0, 4.0), (3.5, 5.0, 7.0), (0.3, 0.5, 0.8), 50, "medium"),
    _entry("marketing_agency", "Marketing & Advertising Agency", "541810",
           (2.0, 3.0, 4.5), (3.0, 4.5, 6.5), (0.5, 0.8, 1.2), 45, "medium"),

    # Trades & home services
    _entry("hvac", "HVAC Services", "238220",
           (2.5, 3.0, 4.0), (3.5, 4.5, 6.0), (0.5, 0.7, 1.0), 50, "low"),
    _entry("plumbing", "Plumbing Services", "238220",
           (2.0, 2.8, 3.5), (3.0, 4.0, 5.0), (0.4, 0.6, 0.85), 50, "low"),
    _entry("electrical", "Electrical Services", "238210",
           (2.0, 2.8, 3.5), (3.0, 4.0, 5.5), (0.4, 0.6, 0.9), 50, "low"),
    _entry("landscaping", "Landscaping & Lawn Care", "561730",
           (1.5, 2.0, 3.0), (2.5, 3.5, 4.5), (0.3, 0.5, 0.7), 55, "medium"),
    _entry("cleaning_janitorial", "Cleaning & Janitorial Services", "561720",
           (1.5, 2.2, 3.0), (2.5, 3.5, 4.5), (0.3, 0.5, 0.7), 40, "low"),
    _entry("pest_control", "Pest Control Services", "561710",
           (2.5, 3.5, 4.5), (4.0, 5.5, 7.0), (0.6, 0.9, 1.3), 45, "low"),
    _entry("roofing", "Roofing Contractor", "238160",
           (1.8, 2.5, 3.5), (2.5, 3.5, 5.0), (0.3, 0.5, 0.7), 55, "medium"),
    _entry("auto_repair", "Auto Repair & Service", "811111",
           (1.8, 2.5, 3.2), (2.5, 3.5, 4.5), (0.3, 0.5, 0.7), 50, "low"),

    # Construction
    _entry("construction_general", "General Construction", "23",
           (1.8, 2.5, 3.5), (2.5, 3.5, 5.0), (0.3, 0.5, 0.7), 55, "high"),
    _entry("construction_specialty", "Specialty Trade Contractor", "238",
           (2.0, 2.8, 3.8), (3.0, 4.0, 5.5), (0.35, 0.55, 0.8), 50, "medium"),

    # Manufacturing
    _entry("manufacturing_general", "Manufacturing", "31-33",
           (2.5, 3.5, 5.0), (4.0, 5.5, 7.0), (0.5, 0.8, 1.2), 50, "medium"),
    _entry("manufacturing_food", "Food Manufacturing", "311",
           (2.0, 3.0, 4.5), (3.5, 5.0, 7.0), (0.4, 0.7, 1.0), 50, "medium"),
    _entry("manufacturing_precision", "Precision Manufacturing / Machine Shop", "332710",
           (3.0, 4.0, 5.5), (4.5, 6.0, 8.0), (0.6, 0.9, 1.3), 50, "medium"),

    # Retail
    _entry("retail_general", "Retail Store", "44-45",
           (1.5, 2.2, 3.0), (2.5, 3.5, 4.5), (0.3, 0.5, 0.7), 55, "medium"),
    _entry("convenience_store", "Convenience Store", "445120",
           (1.5, 2.0, 2.8), (2.5, 3.5, 4.5), (0.2, 0.35, 0.5), 60, "low"),
    _entry("liquor_store", "Liquor Store", "445310",
           (2.0, 2.8, 3.5), (3.0, 4.0, 5.0), (0.3, 0.5, 0.7), 50, "low"),

    # Food & beverage
    _entry("restaurant_full_service", "Full-Service Restaurant", "722511",
           (1.5, 2.0, 2.8), (2.5, 3.5, 4.5), (0.3, 0.45, 0.6), 60, "high"),
    _entry("restaurant_fast_food", "Fast Food / QSR", "722513",
           (2.0, 2.5, 3.2), (3.0, 4.0, 5.0), (0.4, 0.55, 0.7), 55, "medium"),
    _entry("restaurant_franchise", "Restaurant Franchise", "722513",
           (2.5, 3.0, 4.0), (3.5, 4.5, 6.0), (0.45, 0.65, 0.9), 45, "medium"),
    _entry("bar_nightclub", "Bar / Nightclub", "722410",
           (1.5, 2.2, 3.0), (2.5, 3.5, 4.5), (0.35, 0.5, 0.7), 50, "high"),
    _entry("coffee_shop", "Coffee Shop / Cafe", "722515",
           (1.5, 2.0, 2.8), (2.5, 3.5, 4.5), (0.35, 0.5, 0.7), 55, "medium"),
    _entry("catering", "Catering Services", "722320",
           (1.5, 2.2, 3.0), (2.5, 3.5, 4.5), (0.3, 0.5, 0.7), 55, "medium"),

    # Healthcare
    _entry("medical_practice", "Medical Practice", "621",
           (1.8, 2.5, 3.5), (3.0, 4.5, 6.0), (0.4, 0.7, 1.0), 45, "low"),
    _entry("dental_practice", "Dental Practice", "621210",
           (2.0, 2.8, 3.8), (3.5, 5.0, 6.5), (0.5, 0.75, 1.1), 40, "low"),
    _entry("veterinary", "Veterinary Practice", "541940",
           (2.0, 3.0, 4.0), (4.0, 5.5, 7.5), (0.5, 0.8, 1.2), 45, "low"),
    _entry("pharmacy", "Pharmacy / Drug Store", "446110",
           (2.0, 2.8, 3.5), (3.0, 4.0, 5.5), (0.2, 0.35, 0.5), 50, "low"),
    _entry("home_health", "Home Health Care", "621610",
           (2.5, 3.5, 5.0), (4.0, 6.0, 8.0), (0.5, 0.8, 1.2), 45, "low"),

    # Technology
    _entry("saas", "SaaS / Software", "511210",
           (3.0, 4.5, 7.0), (5.0, 8.0, 12.0), (2.0, 4.0, 8.0), 45, "medium"),
    _entry("it_services", "IT Services / MSP", "541512",
           (2.5, 3.5, 5.0), (4.0, 5.5, 7.5), (0.6, 1.0, 1.5), 45, "medium"),
    _entry("web_development", "Web Development Agency", "541511",
           (2.0, 3.0, 4.0), (3.0, 4.5, 6.0), (0.5, 0.8, 1.2), 45, "medium"),

    # E-commerce
    _entry("ecommerce", "E-Commerce Business", "454110",
           (2.0, 3.0, 4.5), (3.0, 4.5, 6.5), (0.5, 0.9, 1.5), 35, "medium"),
    _entry("amazon_fba", "Amazon FBA Business", "454110",
           (2.5, 3.5, 5.0), (3.5, 5.0, 7.0), (0.6, 1.0, 1.5), 30, "high"),

    # Logistics & transportation
    _entry("trucking", "Trucking / Freight", "484",
           (2.0, 3.0, 4.0), (3.0, 4.5, 6.0), (0.4, 0.6, 0.9), 50, "medium"),
    _entry("courier", "Courier / Delivery Service", "492110",
           (1.8, 2.5, 3.5), (2.5, 3.5, 5.0), (0.35, 0.55, 0.8), 50, "medium"),

    # Hospitality
    _entry("hotel_motel", "Hotel / Motel", "721110",
           (3.0, 4.5, 6.0), (5.0, 7.0, 9.0), (0.8, 1.2, 1.8), 55, "medium"),
    _entry("bed_breakfast", "Bed & Breakfast", "721191",
           (2.0, 3.0, 4.0), (3.0, 4.5, 6.0), (0.6, 1.0, 1.5), 60, "medium"),

    # Personal services
    _entry("fitness_gym", "Gym / Fitness Center", "713940",
           (1.8, 2.5, 3.5), (3.0, 4.0, 5.5), (0.4, 0.6, 0.9), 45, "medium"),
    _entry("salon_spa", "Salon / Spa", "812111",
           (1.5, 2.2, 3.0), (2.5, 3.5, 4.5), (0.35, 0.5, 0.7), 45, "low"),
    _entry("daycare", "Daycare / Child Care Center", "624410",
           (2.0, 2.8, 3.5), (3.0, 4.0, 5.5), (0.4, 0.6, 0.9), 50, "low"),
    _entry("tutoring", "Tutoring / Education Services", "611691",
           (2.0, 2.8, 3.8), (3.0, 4.0, 5.5), (0.5, 0.75, 1.1), 40, "low"),

    # Distribution & wholesale
    _entry("distribution", "Distribution / Wholesale", "42",
           (2.0, 3.0, 4.0), (3.5, 5.0, 6.5), (0.25, 0.4, 0.6), 50, "medium"),

    # Printing & signage
    _entry("printing", "Printing / Graphics", "323111",
           (1.8, 2.5, 3.5), (2.5, 3.5, 5.0), (0.35, 0.55, 0.8), 50, "medium"),
    _entry("signage", "Sign Shop", "339950",
           (2.0, 2.8, 3.8), (3.0, 4.0, 5.5), (0.4, 0.6, 0.9), 50, "low"),

    # Default fallback
    _entry(DEFAULT_INDUSTRY_KEY, "General Business", "default",
           (2.0, 2.5, 3.5), (3.0, 4.0, 5.5), (0.4, 0.6, 0.9), 45, "medium"),
)

INDUSTRY_MULTIPLES: Mapping[str, IndustryMultipleData] = MappingProxyType(
    {entry.industry_key: entry for entry in _CATALOG}
)

# Substring matching walks this tuple front to back; keep the order as is.
INDUSTRY_NAME_MAPPINGS: Tuple[Tuple[str, str], ...] = (
    # Professional services
    ("accounting", "accounting"),
    ("tax", "accounting"),
    ("cpa", "accounting"),
    ("bookkeeping", "accounting"),
    ("insurance", "insurance_agency"),
    ("staffing", "staffing"),
    ("recruiting", "staffing"),
    ("hr", "staffing"),
    ("marketing", "marketing_agency"),
    ("advertising", "marketing_agency"),
    ("digital marketing", "marketing_agency"),
    ("seo", "marketing_agency"),
    ("consulting", "professional_services"),
    ("professional services", "professional_services"),

    # Trades
    ("hvac", "hvac"),
    ("heating", "hvac"),
    ("air conditioning", "hvac"),
    ("plumbing", "plumbing"),
    ("electrical", "electrical"),
    ("electrician", "electrical"),
    ("landscaping", "landscaping"),
    ("lawn care", "landscaping"),
    ("lawn service", "landscaping"),
    ("cleaning", "cleaning_janitorial"),
    ("janitorial", "cleaning_janitorial"),
    ("commercial cleaning", "cleaning_janitorial"),
    ("pest control", "pest_control"),
    ("exterminator", "pest_control"),
    ("roofing", "roofing"),
    ("auto repair", "auto_repair"),
    ("automotive", "auto_repair"),
    ("mechanic", "auto_repair"),
    ("auto shop", "auto_repair"),

    # Construction
    ("construction", "construction_general"),
    ("general contractor", "construction_general"),
    ("contractor", "construction_specialty"),

    # Manufacturing
    ("manufacturing", "manufacturing_general"),
    ("machine shop", "manufacturing_precision"),
    ("machining", "manufacturing_precision"),
    ("food manufacturing", "manufacturing_food"),
    ("food production", "manufacturing_food"),

    # Retail
    ("retail", "retail_general"),
    ("store", "retail_general"),
    ("convenience store", "convenience_store"),
    ("gas station", "convenience_store"),
    ("liquor store", "liquor_store"),
    ("liquor", "liquor_store"),

    # Food & beverage
    ("restaurant", "restaurant_full_service"),
    ("fast food", "restaurant_fast_food"),
    ("qsr", "restaurant_fast_food"),
    ("quick service", "restaurant_fast_food"),
    ("franchise", "restaurant_franchise"),
    ("bar", "bar_nightclub"),
    ("nightclub", "bar_nightclub"),
    ("pub", "bar_nightclub"),
    ("coffee shop", "coffee_shop"),
    ("cafe", "coffee_shop"),
    ("coffee", "coffee_shop"),
    ("catering", "catering"),

    # Healthcare
    ("medical", "medical_practice"),
    ("healthcare", "medical_practice"),
    ("clinic", "medical_practice"),
    ("doctor", "medical_practice"),
    ("dental", "dental_practice"),
    ("dentist", "dental_practice"),
    ("veterinary", "veterinary"),
    ("vet", "veterinary"),
    ("animal hospital", "veterinary"),
    ("pharmacy", "pharmacy"),
    ("drug store", "pharmacy"),
    ("home health", "home_health"),
    ("home care", "home_health"),

    # Technology
    ("saas", "saas"),
    ("software", "saas"),
    ("app", "saas"),
    ("it", "it_services"),
    ("msp", "it_services"),
    ("managed services", "it_services"),
    ("tech support", "it_services"),
    ("web development", "web_development"),
    ("web design", "web_development"),
    ("website", "web_development"),

    # E-commerce
    ("ecommerce", "ecommerce"),
    ("e-commerce", "ecommerce"),
    ("online store", "ecommerce"),
    ("amazon", "amazon_fba"),
    ("fba", "amazon_fba"),
    ("amazon fba", "amazon_fba"),

    # Logistics
    ("trucking", "trucking"),
    ("freight", "trucking"),
    ("transportation", "trucking"),
    ("courier", "courier"),
    ("delivery", "courier"),

    # Hospitality
    ("hotel", "hotel_motel"),
    ("motel", "hotel_motel"),
    ("bed and breakfast", "bed_breakfast"),
    ("b&b", "bed_breakfast"),

    # Personal services
    ("gym", "fitness_gym"),
    ("fitness", "fitness_gym"),
    ("salon", "salon_spa"),
    ("spa", "salon_spa"),
    ("hair salon", "salon_spa"),
    ("beauty", "salon_spa"),
    ("daycare", "daycare"),
    ("child care", "daycare"),
    ("preschool", "daycare"),
    ("tutoring", "tutoring"),
    ("education", "tutoring"),

    # Distribution
    ("distribution", "distribution"),
    ("wholesale", "distribution"),
    ("distributor", "distribution"),

    # Printing
    ("printing", "printing"),
    ("print shop", "printing"),
    ("graphics", "printing"),
    ("sign", "signage"),
    ("signage", "signage"),
    ("sign shop", "signage"),
)

_ALIAS_LOOKUP: Mapping[str, str] = MappingProxyType(dict(INDUSTRY_NAME_MAPPINGS))

TYPICAL_SDE_MARGINS: Mapping[str, float] = MappingProxyType(
    {
        "saas": 0.25,
        "it_services": 0.20,
        "professional_services": 0.18,
        "medical_practice": 0.20,
        "dental_practice": 0.22,
        "accounting": 0.30,
        "restaurant_full_service": 0.08,
        "restaurant_fast_food": 0.10,
        "retail_general": 0.08,
        "manufacturing_general": 0.12,
        "construction_general": 0.10,
        "hvac": 0.15,
        "plumbing": 0.15,
        "ecommerce": 0.15,
    }
)


def get_industry_multiples(industry: str) -> IndustryMultipleData:
    """
    Resolve a free-text industry label to its catalog record.

    Matching order: canonical key, exact alias, first alias (in declared
    order) that contains or is contained in the input, then the
    ``general_business`` default. Unknown labels never raise.
    """
    if not isinstance(industry, str):
        raise TypeError(f"industry must be a string, got {type(industry).__name__}")

    normalized = industry.lower().strip()
    if not normalized:
        # An empty label would substring-match every alias, so use the default.
        logger.debug(f"Empty industry label; using {DEFAULT_INDUSTRY_KEY}")
        return INDUSTRY_MULTIPLES[DEFAULT_INDUSTRY_KEY]

    direct = INDUSTRY_MULTIPLES.get(normalized)
    if direct is not None:
        return direct

    mapped_key = _ALIAS_LOOKUP.get(normalized)
    if mapped_key is not None:
        return INDUSTRY_MULTIPLES[mapped_key]

    partial_key = _match_alias_substring(normalized)
    if partial_key is not None:
        return INDUSTRY_MULTIPLES[partial_key]

    logger.debug(f"No catalog match for industry {industry!r}; using {DEFAULT_INDUSTRY_KEY}")
    return INDUSTRY_MULTIPLES[DEFAULT_INDUSTRY_KEY]


lookup = get_industry_multiples


def _match_alias_substring(normalized: str) -> Optional[str]:
    for alias, key in INDUSTRY_NAME_MAPPINGS:
        if alias in normalized or normalized in alias:
            return key
    return None


def get_all_industry_options() -> List[Dict[str, str]]:
    """All catalog industries as ``{key, name}`` pairs, sorted by display name."""
    options = [
        {"key": entry.industry_key, "name": entry.industry_name}
        for entry in INDUSTRY_MULTIPLES.values()
    ]
    return sorted(options, key=lambda option: option["name"].lower())


def get_typical_sde_margin(industry: str) -> float:
    """Typical SDE margin for a catalog key; 15% when the industry has no entry."""
    return TYPICAL_SDE_MARGINS.get(industry.lower(), DEFAULT_SDE_MARGIN)
