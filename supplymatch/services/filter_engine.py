"""
filter_engine.py — Narrows the supplier population before scoring.

Business Rules:
- Region: dach / eu27 use the same country tiers as proximity scoring;
  all / global pass everyone
- Certifications: supplier passes if it holds ANY requested code
- Processes / materials: ANY requested label must be a case-insensitive
  substring of one of the supplier's labels (cheaper than fuzzy matching)
- Facet counts are computed over the currently filtered suppliers, per
  candidate value: how many of them that value matches. Never cached.

Called by: routers/filters.py
Depends on: services/regions.py
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..schemas.filters import FilterCounts, FilterState
from ..schemas.suppliers import Supplier
from .regions import in_dach, in_eu27


def _label_matches(wanted: str, labels: Iterable[str]) -> bool:
    needle = wanted.lower()
    return any(needle in label.lower() for label in labels)


def matches_region(supplier: Supplier, region: str) -> bool:
    if region == "dach":
        return in_dach(supplier.country)
    if region == "eu27":
        return in_eu27(supplier.country)
    return True


def matches_certifications(supplier: Supplier, codes: Iterable[str]) -> bool:
    codes = set(codes)
    return not codes or bool(codes & supplier.cert_codes())


def matches_labels(wanted: Sequence[str], labels: Iterable[str]) -> bool:
    if not wanted:
        return True
    labels = list(labels)
    return any(_label_matches(w, labels) for w in wanted)


def supplier_passes(supplier: Supplier, filters: FilterState) -> bool:
    return (
        matches_region(supplier, filters.region)
        and matches_certifications(supplier, filters.certifications)
        and matches_labels(filters.processes, supplier.processes)
        and matches_labels(filters.materials, supplier.materials)
    )


def apply_filters(suppliers: Sequence[Supplier], filters: FilterState | None = None) -> list[Supplier]:
    """Suppliers passing every active predicate, in their original order."""
    if filters is None or filters.is_empty:
        return list(suppliers)
    return [s for s in suppliers if supplier_passes(s, filters)]


def _candidate_labels(selected: Iterable[str], per_supplier: Iterable[Iterable[str]]) -> list[str]:
    """Selected values first, then each distinct supplier label (first spelling wins)."""
    seen: set[str] = set()
    ordered: list[str] = []
    for label in (*selected, *(lbl for labels in per_supplier for lbl in labels)):
        key = label.lower()
        if key not in seen:
            seen.add(key)
            ordered.append(label)
    return ordered


def get_filter_counts(suppliers: Sequence[Supplier], filters: FilterState | None = None) -> FilterCounts:
    """Per-value counters for the filter chips ("CNC milling (12)")."""
    filters = filters or FilterState()
    filtered = apply_filters(suppliers, filters)

    counts = FilterCounts(
        region={
            "dach": sum(1 for s in filtered if in_dach(s.country)),
            "eu27": sum(1 for s in filtered if in_eu27(s.country)),
            "global": len(filtered),
        }
    )

    codes = _candidate_labels(filters.certifications, (sorted(s.cert_codes()) for s in filtered))
    counts.certifications = {
        code: sum(1 for s in filtered if code in s.cert_codes()) for code in codes
    }

    processes = _candidate_labels(filters.processes, (s.processes for s in filtered))
    counts.processes = {
        p: sum(1 for s in filtered if _label_matches(p, s.processes)) for p in processes
    }

    materials = _candidate_labels(filters.materials, (s.materials for s in filtered))
    counts.materials = {
        m: sum(1 for s in filtered if _label_matches(m, s.materials)) for m in materials
    }
    return counts
