"""
similarity.py — Lightweight lexical similarity for capability labels.

Compares a query phrase ("CNC milling") with a supplier's labels
("5-axis milling", "Turning") using synonym-expanded token sets.

Business Rules:
- Normalize: lower-case, keep [a-z0-9] and whitespace, drop tokens of length <= 1
- A token that is a substring of, or contains, a synonym key or value
  pulls the whole synonym group into the token set
- Score = Jaccard(expanded sets), +0.2 when one phrase contains the other, capped at 1.0
- Equal non-empty normalized strings score 1.0 (exact-match bonus)
- Best match wins across candidates; no candidates → 0.0

The synonym table is data (data/synonyms.json), not code. Pass a different
table to similarity() to swap or extend it.

Called by: scoring.py (capability fit)
Depends on: config.py (synonyms_path), utils/normalization.py
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from ..config import get_settings
from ..utils.normalization import normalize_label

_DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "synonyms.json"

CONTAINS_BONUS = 0.2

SynonymTable = Mapping[str, tuple[str, ...]]


def _read_table(path: Path) -> dict[str, tuple[str, ...]]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return {
        str(k).strip().lower(): tuple(str(v).strip().lower() for v in values if str(v).strip())
        for k, values in raw.items()
        if str(k).strip()
    }


@lru_cache(maxsize=8)
def _load_cached(path_str: str) -> SynonymTable:
    path = Path(path_str)
    try:
        table = _read_table(path)
    except (OSError, json.JSONDecodeError, AttributeError) as exc:
        if path == _DEFAULT_PATH:
            raise
        logger.error(f"Failed to load synonym table {path}: {exc}; using built-in table")
        table = _read_table(_DEFAULT_PATH)
    logger.debug(f"Synonym table loaded: {len(table)} groups from {path}")
    return MappingProxyType(table)


def load_synonym_table(path: str | Path | None = None) -> SynonymTable:
    """Return the read-only synonym table (SYNONYMS_PATH setting, else built-in)."""
    target = path or get_settings().synonyms_path or _DEFAULT_PATH
    return _load_cached(str(Path(target).resolve()))


def tokenize(text: str) -> list[str]:
    return [t for t in normalize_label(text).split() if len(t) > 1]


def expand_tokens(tokens: Iterable[str], synonyms: SynonymTable) -> set[str]:
    """Add every synonym group touched by a token (substring either way)."""
    expanded = set(tokens)
    for token in list(expanded):
        for key, values in synonyms.items():
            terms = (key, *values)
            if any(token in term or term in token for term in terms):
                expanded.update(terms)
    return expanded


def jaccard(a: set[str], b: set[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def phrase_similarity(query: str, candidate: str, synonyms: SynonymTable | None = None) -> float:
    """Similarity of two single phrases, 0.0-1.0."""
    table = synonyms if synonyms is not None else load_synonym_table()
    q_norm, c_norm = normalize_label(query), normalize_label(candidate)
    if not q_norm or not c_norm:
        return 0.0
    if q_norm == c_norm:
        return 1.0

    score = jaccard(expand_tokens(tokenize(q_norm), table), expand_tokens(tokenize(c_norm), table))
    if q_norm in c_norm or c_norm in q_norm:
        score += CONTAINS_BONUS
    return min(1.0, score)


def similarity(query: str, candidates: Iterable[str], synonyms: SynonymTable | None = None) -> float:
    """Best-match similarity of `query` against any of `candidates` (0.0 if none)."""
    table = synonyms if synonyms is not None else load_synonym_table()
    best = 0.0
    for candidate in candidates or ():
        score = phrase_similarity(query, candidate, table)
        if score > best:
            best = score
            if best >= 1.0:
                break
    return best
