"""
bom_import.py — Bill-of-materials import and batch matching.

Parses an uploaded BOM spreadsheet into BomLine rows and runs the matching
engine once per row (top 5 by default).

Business Rules:
- Headers are matched case-insensitively against known aliases
  ("part no", "qty/year", "process", ...)
- Missing part number → "PART-{row}", missing text fields → ""
- Unparseable numbers → 0 for annual_volume, unspecified for prices
- Criticality other than A/B/C is dropped
- A row that still fails validation is logged and skipped

Called by: routers/bom.py, scripts/match_bom.py
Depends on: file_utils.py, services/matching_engine.py
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger
from pydantic import ValidationError

from ..config import get_settings
from ..file_utils import parse_tabular_file
from ..schemas.bom import BomLine, BomLineMatch
from ..schemas.matching import MatchOptions
from ..schemas.suppliers import Supplier
from ..utils.normalization import parse_number
from .matching_engine import match_suppliers

BOM_TEMPLATE_CSV = (
    "part_number,description,material,process,annual_volume,current_unit_price,current_supplier\n"
    "AUTO-BRK-001,Automotive bracket,Al 6061,CNC milling,25000,12.50,Current Supplier A\n"
    "HOUS-PLT-002,Housing plate,Steel S235,Laser cutting,15000,8.20,Current Supplier B\n"
    "SEAL-RNG-003,Seal ring,EPDM,Injection molding,50000,2.15,Current Supplier C\n"
)

HEADER_ALIASES = {
    "part_number": {"part_number", "part number", "part no", "part_no", "pn", "part#", "item", "item number"},
    "description": {"description", "desc", "part description", "name"},
    "material": {"material", "materials", "raw material"},
    "process": {"process", "manufacturing process", "technology"},
    "annual_volume": {"annual_volume", "annual volume", "volume", "qty/year", "eau", "annual qty"},
    "target_unit_price": {"target_unit_price", "target price", "target unit price"},
    "tolerance": {"tolerance", "tol"},
    "criticality": {"criticality", "abc", "class", "abc class"},
    "current_supplier": {"current_supplier", "current supplier", "supplier", "incumbent"},
    "current_unit_price": {"current_unit_price", "current unit price", "unit price", "price"},
}


def _resolve_headers(headers: Sequence[str]) -> dict[str, str]:
    """Map BomLine field → source header. Exact aliases win over partial ones.

    A header that is a known alias of some field is never reused as a
    partial match for another ("price" stays the current unit price).
    """
    mapping: dict[str, str] = {}
    for field, aliases in HEADER_ALIASES.items():
        exact = next((h for h in headers if h in aliases), None)
        if exact:
            mapping[field] = exact

    known = set().union(*HEADER_ALIASES.values())
    for field in HEADER_ALIASES:
        if field in mapping:
            continue
        partial = next(
            (h for h in headers
             if h and h not in known and h not in mapping.values() and (field in h or h in field)),
            None,
        )
        if partial:
            mapping[field] = partial
    return mapping


def row_to_line(row: dict, row_number: int, mapping: dict[str, str]) -> BomLine | None:
    def get(field: str) -> str:
        header = mapping.get(field)
        return (row.get(header) or "").strip() if header else ""

    criticality = get("criticality").upper()
    volume = parse_number(get("annual_volume"))
    data = {
        "part_number": get("part_number") or f"PART-{row_number}",
        "description": get("description"),
        "material": get("material"),
        "process": get("process"),
        "annual_volume": max(0.0, volume) if volume is not None else 0.0,
        "target_unit_price": parse_number(get("target_unit_price")),
        "tolerance": get("tolerance") or None,
        "criticality": criticality if criticality in ("A", "B", "C") else None,
        "current_supplier": get("current_supplier") or None,
        "current_unit_price": parse_number(get("current_unit_price")),
    }
    try:
        return BomLine.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Skipping BOM row {row_number}: {e.error_count()} invalid field(s)")
        return None


def parse_bom(content: bytes, filename: str) -> list[BomLine]:
    """Parse CSV/TSV/XLSX bytes into BOM lines. Unreadable files → []."""
    rows = parse_tabular_file(content, filename)
    if not rows:
        logger.warning(f"BOM {filename!r} contained no data rows")
        return []

    mapping = _resolve_headers(list(rows[0].keys()))
    lines = [line for i, row in enumerate(rows, start=1) if (line := row_to_line(row, i, mapping))]
    logger.info(f"Parsed {len(lines)}/{len(rows)} BOM rows from {filename!r}")
    return lines


def match_bom(
    lines: Sequence[BomLine],
    suppliers: Sequence[Supplier],
    options: MatchOptions | None = None,
) -> list[BomLineMatch]:
    """Run the matching engine once per BOM line."""
    opts = options or MatchOptions(max_results=get_settings().bom_max_results)
    items = []
    for line in lines:
        items.append(BomLineMatch(line=line, matches=match_suppliers(line, suppliers, opts)))
    logger.info(f"BOM matched: {len(items)} lines against {len(suppliers)} suppliers")
    return items
