"""
schemas/matching.py — Matching engine options, results and API wrappers

MatchOptions replaces a loosely-typed options bag with named defaults:
region_scope=EU-27, max_results=50, min_score=0, current_price_index=1.0.

Called by: services/matching_engine.py, services/bom_import.py, routers/matching.py
Depends on: pydantic, config.py
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import get_settings
from ..utils.normalization import normalize_cert_code
from .parts import PartSpec
from .suppliers import CertCode, Supplier

RegionScope = Literal["DACH", "EU-27", "Global"]
AuditReadiness = Literal["Audit-ready", "Minor gaps", "Major gaps"]

_SCOPE_ALIASES = {
    "dach": "DACH",
    "eu27": "EU-27",
    "eu": "EU-27",
    "global": "Global",
    "world": "Global",
}


def normalize_region_scope(value):
    """'eu27' / 'EU 27' / 'eu-27' → 'EU-27'. Unknown values pass through."""
    if not isinstance(value, str):
        return value
    key = "".join(ch for ch in value.lower() if ch.isalnum())
    return _SCOPE_ALIASES.get(key, value)


class MatchOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    region_scope: RegionScope = Field(default_factory=lambda: normalize_region_scope(get_settings().default_region_scope))
    required_certs: frozenset[CertCode] | None = None
    max_results: int = Field(default_factory=lambda: get_settings().default_max_results, ge=0)
    min_score: float = Field(0, ge=0, le=100)
    current_price_index: float = Field(1.0, gt=0)
    as_of: date | None = None

    @field_validator("region_scope", mode="before")
    @classmethod
    def alias_scope(cls, v):
        return normalize_region_scope(v)

    @field_validator("required_certs", mode="before")
    @classmethod
    def normalize_codes(cls, v):
        if v is None:
            return None
        return frozenset(normalize_cert_code(c) for c in v)


class MatchResult(BaseModel):
    supplier: Supplier
    switching_cost_score: int = Field(..., ge=0, le=100)
    estimated_savings_rate: float = Field(..., ge=0, le=0.35)
    audit_readiness: AuditReadiness
    reasons: list[str] = Field(default_factory=list, max_length=4)
    breakdown: dict[str, float] = Field(default_factory=dict)


# ── API wrappers ────────────────────────────────────────────────────────


class MatchRequest(BaseModel):
    part: PartSpec
    suppliers: list[Supplier] = Field(default_factory=list)
    options: MatchOptions = Field(default_factory=MatchOptions)


class MatchResponse(BaseModel):
    part_number: str = ""
    candidates: int = 0
    results: list[MatchResult] = Field(default_factory=list)
