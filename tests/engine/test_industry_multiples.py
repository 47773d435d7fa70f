"""
Tests for the industry catalog and free-text lookup.
"""

import pytest

from bizval_engine import (
    INDUSTRY_MULTIPLES,
    get_all_industry_options,
    get_industry_multiples,
    get_typical_sde_margin,
)

# ---------------------------------------------------------------------------
# Catalog integrity
# ---------------------------------------------------------------------------


def test_catalog_has_default_entry():
    assert "general_business" in INDUSTRY_MULTIPLES
    assert len(INDUSTRY_MULTIPLES) == 49


@pytest.mark.parametrize("key", sorted(INDUSTRY_MULTIPLES))
def test_bands_are_ordered(key):
    entry = INDUSTRY_MULTIPLES[key]
    for band in (entry.sde, entry.ebitda, entry.revenue):
        assert 0 < band.low <= band.mid <= band.high


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        INDUSTRY_MULTIPLES["new"] = INDUSTRY_MULTIPLES["hvac"]


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "label, expected",
    [
        ("hvac", "hvac"),
        ("  HVAC  ", "hvac"),
        ("Hair Salon", "salon_spa"),
        ("Heating & Cooling", "hvac"),
        ("Full Service Restaurant", "restaurant_full_service"),
        ("dentist", "dental_practice"),
        ("zzzz", "general_business"),
        ("", "general_business"),
        ("   ", "general_business"),
    ],
)
def test_lookup(label, expected):
    assert get_industry_multiples(label).industry_key == expected


def test_lookup_rejects_non_string():
    with pytest.raises(TypeError):
        get_industry_multiples(None)


def test_lookup_returns_shared_record():
    assert get_industry_multiples("HVAC") is get_industry_multiples("hvac")


# ---------------------------------------------------------------------------
# Options & margins
# ---------------------------------------------------------------------------


def test_options_sorted_by_name():
    options = get_all_industry_options()
    names = [o["name"].lower() for o in options]

    assert len(options) == len(INDUSTRY_MULTIPLES)
    assert names == sorted(names)
    assert {"key": "hvac", "name": "HVAC Services"} in options


def test_typical_sde_margin():
    assert get_typical_sde_margin("saas") == 0.25
    assert get_typical_sde_margin("SaaS") == 0.25
    assert get_typical_sde_margin("zzzz") == 0.15
