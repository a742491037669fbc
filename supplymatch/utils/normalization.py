"""Deterministic normalization — pure Python helpers shared by schemas and services.

  - Labels: "CNC-Milling (5 axis)" → "cncmilling 5 axis"
  - Dates: "2026-03-01", "01 Mar 2026", date/datetime → date, garbage or partial ("June") → None
  - Numbers: "25,000" → 25000.0, "" → None
  - Cert codes: "iso 9001" → "ISO9001"

Design: Return None for ambiguous values; callers decide the fallback.
"""

import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser
from loguru import logger

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WS_RE = re.compile(r"\s+")

_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def normalize_label(text: Any) -> str:
    """Lower-case, drop everything but [a-z0-9] and whitespace, collapse spaces."""
    if text is None:
        return ""
    cleaned = _NON_ALNUM_RE.sub("", str(text).lower())
    return _WS_RE.sub(" ", cleaned).strip()


def parse_lenient_date(value: Any) -> date | None:
    """Parse a certificate date. Unparseable input yields None (never raises)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    try:
        # dateutil fills missing parts from `default`; two distinct defaults
        # must agree, so "June" or "2027" never borrow a day from elsewhere
        first = date_parser.parse(raw, dayfirst=False, default=_DEFAULT_A)
        second = date_parser.parse(raw, dayfirst=False, default=_DEFAULT_B)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable date {raw!r}: {e}")
        return None
    if first.date() != second.date():
        logger.debug(f"Incomplete date {raw!r}: year, month and day are all required")
        return None
    return first.date()


def parse_number(value: Any) -> float | None:
    """'25,000' → 25000.0; '12.50 EUR' → 12.5; '' / 'n/a' → None."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    raw = str(value).strip().replace(",", "")
    m = re.search(r"-?\d+(?:\.\d+)?", raw)
    if not m:
        return None
    try:
        return float(m.group(0))
    except ValueError:
        return None


_CERT_ALIASES = {
    "iso9001": "ISO9001",
    "iatf16949": "IATF16949",
    "iso14001": "ISO14001",
    "iso13485": "ISO13485",
    "rohs": "RoHS",
    "reach": "REACH",
}


def normalize_cert_code(value: Any) -> Any:
    """'iso 9001:2015' → 'ISO9001'. Unknown codes are returned unchanged."""
    if not isinstance(value, str):
        return value
    key = re.sub(r"[^a-z0-9]", "", value.lower())
    if key in _CERT_ALIASES:
        return _CERT_ALIASES[key]
    # Strip a trailing revision year: iso90012015 → iso9001
    for alias, code in _CERT_ALIASES.items():
        if key.startswith(alias) and key[len(alias):].isdigit():
            return code
    return value.strip()
