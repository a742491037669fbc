"""
schemas/bom.py — Bill-of-materials import lines and batch match results

A BomLine is a PartSpec row from an imported spreadsheet, plus what the
buyer pays today.

Called by: services/bom_import.py, routers/bom.py
Depends on: pydantic
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .matching import MatchOptions, MatchResult
from .parts import PartSpec
from .suppliers import Supplier


class BomLine(PartSpec):
    current_supplier: str | None = None
    current_unit_price: float | None = Field(None, ge=0)


class BomParseResponse(BaseModel):
    count: int = 0
    lines: list[BomLine] = Field(default_factory=list)


class BomMatchRequest(BaseModel):
    lines: list[BomLine] = Field(default_factory=list)
    suppliers: list[Supplier] = Field(default_factory=list)
    options: MatchOptions | None = None


class BomLineMatch(BaseModel):
    line: BomLine
    matches: list[MatchResult] = Field(default_factory=list)


class BomMatchResponse(BaseModel):
    processed: int = 0
    items: list[BomLineMatch] = Field(default_factory=list)
