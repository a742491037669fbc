"""
schemas/filters.py — Filter state and facet counts

FilterState is owned by the UI layer; the filter engine only reads it.
Every mutation helper returns a new state.

Business Rules:
- region "all" and "global" both pass every supplier
- Selected values are de-duplicated, blanks dropped, order preserved
- Toggling a selected value removes it, toggling an unselected one adds it

Called by: services/filter_engine.py, routers/filters.py
Depends on: pydantic
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.normalization import normalize_cert_code
from .suppliers import CertCode, Supplier

RegionFilter = Literal["all", "dach", "eu27", "global"]
Facet = Literal["certifications", "processes", "materials"]


def _dedupe(values) -> tuple[str, ...]:
    seen: set[str] = set()
    result: list[str] = []
    for v in values or ():
        cleaned = str(v).strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            result.append(cleaned)
    return tuple(result)


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    region: RegionFilter = "all"
    certifications: tuple[CertCode, ...] = ()
    processes: tuple[str, ...] = ()
    materials: tuple[str, ...] = ()

    @field_validator("region", mode="before")
    @classmethod
    def lower_region(cls, v):
        if v is None:
            return "all"
        key = "".join(ch for ch in str(v).lower() if ch.isalnum())
        return key or "all"

    @field_validator("certifications", mode="before")
    @classmethod
    def clean_certs(cls, v):
        return _dedupe(normalize_cert_code(c) for c in (v or ()))

    @field_validator("processes", "materials", mode="before")
    @classmethod
    def clean_labels(cls, v):
        return _dedupe(v)

    @property
    def is_empty(self) -> bool:
        return (
            self.region in ("all", "global")
            and not self.certifications
            and not self.processes
            and not self.materials
        )

    def toggle(self, facet: Facet, value: str) -> FilterState:
        """Return a new state with `value` added to or removed from `facet`."""
        current = getattr(self, facet)
        if facet == "certifications":
            value = normalize_cert_code(value)
        if value in current:
            updated = tuple(v for v in current if v != value)
        else:
            updated = (*current, value)
        return FilterState.model_validate({**self.model_dump(), facet: updated})

    def with_region(self, region: str) -> FilterState:
        return FilterState.model_validate({**self.model_dump(), "region": region})

    def cleared(self) -> FilterState:
        return FilterState()


class FilterCounts(BaseModel):
    region: dict[str, int] = Field(default_factory=lambda: {"dach": 0, "eu27": 0, "global": 0})
    certifications: dict[str, int] = Field(default_factory=dict)
    processes: dict[str, int] = Field(default_factory=dict)
    materials: dict[str, int] = Field(default_factory=dict)


# ── API wrappers ────────────────────────────────────────────────────────


class FilterRequest(BaseModel):
    suppliers: list[Supplier] = Field(default_factory=list)
    filters: FilterState = Field(default_factory=FilterState)


class FilterResponse(BaseModel):
    total: int = 0
    matched: int = 0
    suppliers: list[Supplier] = Field(default_factory=list)
