"""
compliance.py — Certification compliance and audit readiness.

Business Rules:
- Required set defaults to {ISO9001}, plus IATF16949 for criticality "A" parts
  or any part whose description mentions "automotive"
- Credits per required code held with a currently valid certificate:
  IATF16949 50, ISO9001 30, anything else 20
- IATF16949 required but missing while ISO9001 is valid: 25 partial credit
- Earned credit is scaled against the full credit of the required set, then
  +10 per valid bonus cert (ISO14001, RoHS, REACH, ISO13485) not already required
- A certificate is valid at t iff expiry > t; "expiring" iff t < expiry <= t + 6 months
- Missing/unparseable expiry = expired (stricter audit classification)

Called by: services/matching_engine.py, services/reasons.py
Depends on: python-dateutil (calendar-month window)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from dateutil.relativedelta import relativedelta

from ..schemas.parts import PartSpec
from ..schemas.suppliers import Certification, Supplier

AUDIT_READY = "Audit-ready"
MINOR_GAPS = "Minor gaps"
MAJOR_GAPS = "Major gaps"

EXPIRY_WINDOW = relativedelta(months=6)

REQUIRED_CREDIT = {"IATF16949": 50.0, "ISO9001": 30.0}
DEFAULT_REQUIRED_CREDIT = 20.0
IATF_PARTIAL_CREDIT = 25.0

BONUS_CERTS = ("ISO14001", "RoHS", "REACH", "ISO13485")
BONUS_CREDIT = 10.0


def required_certifications(part: PartSpec, override: Iterable[str] | None = None) -> frozenset[str]:
    """Certs the part demands. An explicit override replaces the default set."""
    if override is not None:
        return frozenset(override)
    required = {"ISO9001"}
    if part.criticality == "A" or "automotive" in (part.description or "").lower():
        required.add("IATF16949")
    return frozenset(required)


def valid_codes(certifications: Iterable[Certification], when: date) -> set[str]:
    return {c.code for c in certifications if c.is_valid_at(when)}


def is_expiring_soon(cert: Certification, when: date) -> bool:
    return cert.expiry is not None and when < cert.expiry <= when + EXPIRY_WINDOW


def score_compliance(
    part: PartSpec,
    supplier: Supplier,
    required_certs: Iterable[str] | None = None,
    as_of: date | None = None,
) -> float:
    """0-100 compliance score for `supplier` against the part's required certs."""
    when = as_of or date.today()
    required = required_certifications(part, required_certs)
    held = valid_codes(supplier.certifications, when)

    earned = possible = 0.0
    for code in required:
        credit = REQUIRED_CREDIT.get(code, DEFAULT_REQUIRED_CREDIT)
        possible += credit
        if code in held:
            earned += credit

    # ISO9001 is the recognized stepping-stone towards IATF16949
    if "IATF16949" in required and "IATF16949" not in held and "ISO9001" in held:
        earned += IATF_PARTIAL_CREDIT

    base = (earned / possible * 100) if possible else 100.0
    bonus = sum(BONUS_CREDIT for code in BONUS_CERTS if code in held and code not in required)
    return max(0.0, min(100.0, base + bonus))


def certificate_windows(supplier: Supplier, as_of: date | None = None) -> tuple[set[str], list[Certification]]:
    """(codes valid beyond the 6-month window, certificates expiring inside it)."""
    when = as_of or date.today()
    horizon = when + EXPIRY_WINDOW
    valid = {c.code for c in supplier.certifications if c.is_valid_at(horizon)}
    expiring = [c for c in supplier.certifications if is_expiring_soon(c, when)]
    return valid, expiring


def classify_audit_readiness(supplier: Supplier, as_of: date | None = None) -> str:
    """Audit-ready / Minor gaps / Major gaps, from certificate validity windows."""
    valid, expiring = certificate_windows(supplier, as_of)
    has_iso = "ISO9001" in valid
    has_iatf = "IATF16949" in valid

    if has_iso and has_iatf and not expiring:
        return AUDIT_READY
    if has_iso and (has_iatf or len(expiring) <= 1):
        return MINOR_GAPS
    return MAJOR_GAPS
