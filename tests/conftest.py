"""
conftest.py — Shared Test Fixtures for SupplyMatch

Provides supplier/part factories, a fixed evaluation date and a FastAPI
TestClient.

Business Rules:
- Every date-sensitive test evaluates at AS_OF, never at "today"
- Rate limiting is disabled so tight test loops never hit 429

Called by: all test files via pytest autodiscovery
Depends on: supplymatch.schemas, supplymatch.main
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")  # Must be set before importing app modules

from datetime import date

import pytest
from dateutil.relativedelta import relativedelta
from fastapi.testclient import TestClient

from supplymatch.schemas.parts import PartSpec
from supplymatch.schemas.suppliers import Supplier

AS_OF = date(2026, 1, 15)


def cert(code: str, months_valid: int = 24, issuer: str = "TÜV SÜD") -> dict:
    """Certificate dict expiring `months_valid` months after AS_OF (negative = expired)."""
    return {
        "code": code,
        "issued": (AS_OF - relativedelta(years=1)).isoformat(),
        "expiry": (AS_OF + relativedelta(months=months_valid)).isoformat(),
        "issuer": issuer,
    }


def make_supplier(**overrides) -> Supplier:
    """Supplier factory: a solid German CNC shop unless overridden."""
    data = {
        "id": "sup-001",
        "name": "Präzisionsteile Müller GmbH",
        "country": "DE",
        "city": "Stuttgart",
        "categories": ["CNC Machining"],
        "processes": ["CNC milling"],
        "materials": ["Al 6061"],
        "certifications": [cert("ISO9001"), cert("IATF16949")],
        "capacity": {"unit": "units/month", "value": 20000},
        "moq": 500,
        "lead_time_days": 14,
        "quality": {"on_time_rate": 0.98, "defect_rate_ppm": 15},
        "price_index": 0.82,
    }
    data.update(overrides)
    return Supplier.model_validate(data)


def make_part(**overrides) -> PartSpec:
    data = {
        "part_number": "AUTO-BRK-001",
        "description": "Bracket",
        "material": "Al 6061",
        "process": "CNC milling",
        "annual_volume": 25000,
        "criticality": "A",
    }
    data.update(overrides)
    return PartSpec.model_validate(data)


@pytest.fixture()
def part() -> PartSpec:
    return make_part()


@pytest.fixture()
def supplier() -> Supplier:
    return make_supplier()


@pytest.fixture()
def catalog() -> list[Supplier]:
    """Small mixed catalog: DACH, other EU, non-EU, with and without certs."""
    return [
        make_supplier(),
        make_supplier(
            id="sup-002", name="Obróbka CNC Kowalski", country="PL", city="Poznań",
            processes=["5-axis milling", "Turning"], materials=["Aluminium 7075", "Steel S235"],
            certifications=[cert("ISO9001"), cert("ISO14001")], price_index=0.74,
            lead_time_days=18, quality={"on_time_rate": 0.93, "defect_rate_ppm": 120},
        ),
        make_supplier(
            id="sup-003", name="Shenzhen Precision Parts", country="CN", city="Shenzhen",
            categories=["Injection Molding"], processes=["Injection molding"], materials=["ABS", "PA66"],
            certifications=[], price_index=0.65, moq=5000, lead_time_days=45,
            quality={"on_time_rate": 0.88, "defect_rate_ppm": 400},
        ),
        make_supplier(
            id="sup-004", name="Alpentech AG", country="CH", city="Zürich",
            processes=["Laser cutting", "CNC milling"], materials=["Stainless steel 316L"],
            certifications=[cert("ISO9001"), cert("ISO13485")], price_index=1.12,
            sustainability={"co2e_class": "A"},
        ),
        make_supplier(
            id="sup-005", name="Metalurgia Ibérica", country="ES", city="Bilbao",
            categories=["Sheet Metal"], processes=["Laser cutting", "Bending"], materials=["Steel S235"],
            certifications=[cert("RoHS")], price_index=0.95, lead_time_days=25,
        ),
    ]


@pytest.fixture()
def client():
    """FastAPI TestClient (lifespan runs, so logging is configured)."""
    from supplymatch.main import app

    with TestClient(app) as c:
        yield c
