"""
schemas/suppliers.py — Supplier catalog records

A Supplier is built wholesale by an external provider (catalog file, API
payload) and is immutable for the duration of a scoring pass.

Business Rules:
- price_index > 0 (1.0 = parity with the current supplier)
- on_time_rate in [0, 1], defect_rate_ppm >= 0
- Certificate dates are parsed leniently; an unparseable date becomes None
  and a certificate without an expiry counts as already expired
- Cert codes are normalized ("iso 9001" → "ISO9001") before validation

Called by: services/*, routers/*, catalog.py
Depends on: pydantic, utils/normalization.py
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.normalization import normalize_cert_code, parse_lenient_date

CertCode = Literal["ISO9001", "IATF16949", "ISO14001", "ISO13485", "RoHS", "REACH"]


class Certification(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: CertCode
    issued: date | None = None
    expiry: date | None = None
    issuer: str | None = None

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v):
        return normalize_cert_code(v)

    @field_validator("issued", "expiry", mode="before")
    @classmethod
    def lenient_date(cls, v):
        return parse_lenient_date(v)

    def is_valid_at(self, when: date) -> bool:
        """Valid iff the expiry lies strictly after `when`."""
        return self.expiry is not None and self.expiry > when


class Capacity(BaseModel):
    model_config = ConfigDict(frozen=True)

    unit: Literal["units/month", "kg/month"] = "units/month"
    value: float = Field(0, ge=0)


class QualityMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    on_time_rate: float = Field(..., ge=0, le=1)
    defect_rate_ppm: float = Field(..., ge=0)


class Sustainability(BaseModel):
    model_config = ConfigDict(frozen=True)

    co2e_class: Literal["A", "B", "C"]
    notes: str | None = None


class Supplier(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    country: str
    city: str | None = None
    region: str | None = None
    categories: tuple[str, ...] = ()
    processes: tuple[str, ...] = ()
    materials: tuple[str, ...] = ()
    certifications: tuple[Certification, ...] = ()
    capacity: Capacity = Field(default_factory=Capacity)
    moq: int = Field(0, ge=0)
    lead_time_days: int = Field(0, ge=0)
    quality: QualityMetrics
    sustainability: Sustainability | None = None
    price_index: float = Field(..., gt=0)
    past_clients: tuple[str, ...] = ()
    website: str | None = None

    @field_validator("country", mode="before")
    @classmethod
    def strip_country(cls, v):
        return str(v or "").strip()

    @field_validator("categories", "processes", "materials", "past_clients", mode="before")
    @classmethod
    def drop_blank_labels(cls, v):
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        return tuple(str(x).strip() for x in v if x is not None and str(x).strip())

    def cert_codes(self) -> set[str]:
        return {c.code for c in self.certifications}
