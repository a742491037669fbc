"""
regions.py — Country tiers and geographic proximity scoring.

Business Rules:
- Tiers are fixed: DACH = DE/AT/CH, EU-27 = the 27 member states
  (Switzerland is DACH but not EU-27)
- Countries are ISO alpha-2 codes; English names of DACH/EU members are
  mapped to their codes, anything else is "elsewhere"
- Proximity table (scope → DACH / other EU-27 / elsewhere):
    DACH   100 / 70 / 30
    EU-27  100 / 85 / 40
    Global  90 / 75 / 60

Called by: scoring.py (proximity), services/filter_engine.py (region predicate)
"""

from __future__ import annotations

from typing import Literal

from ..schemas.suppliers import Supplier

Tier = Literal["dach", "eu27", "other"]

DACH_COUNTRIES = frozenset({"DE", "AT", "CH"})
EU27_COUNTRIES = frozenset({
    "AT", "BE", "BG", "HR", "CY", "CZ", "DK", "EE", "FI", "FR", "DE", "GR", "HU", "IE",
    "IT", "LV", "LT", "LU", "MT", "NL", "PL", "PT", "RO", "SK", "SI", "ES", "SE",
})

_COUNTRY_NAMES = {
    "austria": "AT", "belgium": "BE", "bulgaria": "BG", "croatia": "HR", "cyprus": "CY",
    "czech republic": "CZ", "czechia": "CZ", "denmark": "DK", "estonia": "EE",
    "finland": "FI", "france": "FR", "germany": "DE", "deutschland": "DE", "greece": "GR",
    "hungary": "HU", "ireland": "IE", "italy": "IT", "latvia": "LV", "lithuania": "LT",
    "luxembourg": "LU", "malta": "MT", "netherlands": "NL", "the netherlands": "NL",
    "poland": "PL", "portugal": "PT", "romania": "RO", "slovakia": "SK", "slovenia": "SI",
    "spain": "ES", "sweden": "SE", "switzerland": "CH", "schweiz": "CH", "osterreich": "AT",
}

# Greece is "EL" in EU institutional usage
_CODE_ALIASES = {"EL": "GR", "UK": "GB"}

PROXIMITY_TABLE: dict[str, dict[Tier, float]] = {
    "DACH": {"dach": 100.0, "eu27": 70.0, "other": 30.0},
    "EU-27": {"dach": 100.0, "eu27": 85.0, "other": 40.0},
    "Global": {"dach": 90.0, "eu27": 75.0, "other": 60.0},
}


def country_code(country: str | None) -> str:
    """'Germany' / 'de' / ' DE ' → 'DE'. Unknown names come back upper-cased."""
    raw = (country or "").strip()
    if not raw:
        return ""
    named = _COUNTRY_NAMES.get(raw.lower().replace("ö", "o"))
    if named:
        return named
    code = raw.upper()
    return _CODE_ALIASES.get(code, code)


def country_tier(country: str | None) -> Tier:
    code = country_code(country)
    if code in DACH_COUNTRIES:
        return "dach"
    if code in EU27_COUNTRIES:
        return "eu27"
    return "other"


def in_dach(country: str | None) -> bool:
    return country_code(country) in DACH_COUNTRIES


def in_eu27(country: str | None) -> bool:
    return country_code(country) in EU27_COUNTRIES


def score_proximity(supplier: Supplier, region_scope: str = "EU-27") -> float:
    """Fixed-tier distance score, 0-100. Unknown scopes score as EU-27."""
    table = PROXIMITY_TABLE.get(region_scope, PROXIMITY_TABLE["EU-27"])
    return table[country_tier(supplier.country)]
