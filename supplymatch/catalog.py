"""
catalog.py — Supplier catalog loader for files handed over by the data provider.

Business Rules:
- Accepts a JSON list of suppliers or an object with a "suppliers" list
- Invalid entries are logged and skipped; the rest of the catalog loads
- Missing or unreadable file → empty catalog (graceful degradation)
- Nothing is cached; callers pass the returned list explicitly

Called by: scripts/match_bom.py
Depends on: schemas/suppliers.py
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from .schemas.suppliers import Supplier


def parse_catalog(raw: Any) -> list[Supplier]:
    entries = raw.get("suppliers", []) if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        logger.error(f"Supplier catalog must be a list, got {type(entries).__name__}")
        return []

    suppliers: list[Supplier] = []
    for i, entry in enumerate(entries):
        try:
            suppliers.append(Supplier.model_validate(entry))
        except ValidationError as e:
            ident = entry.get("id", i) if isinstance(entry, dict) else i
            logger.warning(f"Skipping catalog entry {ident}: {e.error_count()} invalid field(s)")
    return suppliers


def load_catalog(path: str | Path) -> list[Supplier]:
    """Read and validate a JSON supplier catalog."""
    target = Path(path)
    if not target.exists():
        logger.warning(f"Supplier catalog not found at {target}")
        return []
    try:
        raw = json.loads(target.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.error(f"Failed to parse supplier catalog {target}: {exc}")
        return []

    suppliers = parse_catalog(raw)
    logger.info(f"Supplier catalog loaded: {len(suppliers)} suppliers from {target}")
    return suppliers
