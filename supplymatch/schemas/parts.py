"""
schemas/parts.py — The sourcing request

Business Rules:
- Empty process/material/description are allowed; they score 0, they
  never raise (required-field checks are a caller concern)
- criticality is upper-cased; anything but A/B/C is rejected

Called by: services/matching_engine.py, services/compliance.py, routers/matching.py
Depends on: pydantic
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Criticality = Literal["A", "B", "C"]


class PartSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    part_number: str = ""
    description: str = ""
    material: str = ""
    process: str = ""
    annual_volume: float = Field(0, ge=0)
    target_unit_price: float | None = Field(None, ge=0)
    tolerance: str | None = None
    criticality: Criticality | None = None

    @field_validator("part_number", "description", "material", "process", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("criticality", mode="before")
    @classmethod
    def upper_criticality(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return str(v).strip().upper()

    @property
    def monthly_demand(self) -> float:
        return self.annual_volume / 12
