"""
test_compliance.py — Tests for supplymatch/services/compliance.py

Covers:
- required_certifications(): criticality/automotive defaults, explicit override
- score_compliance(): full/partial/no coverage, bonus certs, expiry, cap
- classify_audit_readiness(): the three tiers and the 6-month window edges

Called by: pytest
Depends on: supplymatch/services/compliance.py, conftest factories
"""

import pytest
from conftest import AS_OF, cert, make_part, make_supplier

from supplymatch.services.compliance import (
    AUDIT_READY,
    MAJOR_GAPS,
    MINOR_GAPS,
    certificate_windows,
    classify_audit_readiness,
    is_expiring_soon,
    required_certifications,
    score_compliance,
)
from supplymatch.schemas.suppliers import Certification


class TestRequiredCertifications:
    def test_criticality_a_needs_iatf(self):
        assert required_certifications(make_part(criticality="A")) == {"ISO9001", "IATF16949"}

    def test_automotive_description_needs_iatf(self):
        part = make_part(criticality="C", description="Automotive bracket")
        assert "IATF16949" in required_certifications(part)

    def test_plain_part_needs_iso_only(self):
        part = make_part(criticality="C", description="Housing plate")
        assert required_certifications(part) == {"ISO9001"}

    def test_no_criticality(self):
        part = make_part(criticality=None, description="")
        assert required_certifications(part) == {"ISO9001"}

    def test_override_replaces_defaults(self):
        assert required_certifications(make_part(), {"ISO13485"}) == {"ISO13485"}


class TestScoreCompliance:
    def test_full_coverage_is_100(self, part, supplier):
        assert score_compliance(part, supplier, as_of=AS_OF) == 100.0

    def test_iso_only_gets_partial_iatf_credit(self, part):
        s = make_supplier(certifications=[cert("ISO9001")])
        # (30 + 25) / 80
        assert score_compliance(part, s, as_of=AS_OF) == pytest.approx(68.75)

    def test_iatf_without_iso(self, part):
        s = make_supplier(certifications=[cert("IATF16949")])
        assert score_compliance(part, s, as_of=AS_OF) == pytest.approx(62.5)

    def test_no_certs_is_zero(self, part):
        assert score_compliance(part, make_supplier(certifications=[]), as_of=AS_OF) == 0.0

    def test_expired_certs_do_not_count(self, part):
        s = make_supplier(certifications=[cert("ISO9001", -1), cert("IATF16949", -3)])
        assert score_compliance(part, s, as_of=AS_OF) == 0.0

    def test_expiry_today_is_not_valid(self):
        part = make_part(criticality="C", description="")
        s = make_supplier(certifications=[{"code": "ISO9001", "expiry": AS_OF.isoformat()}])
        assert score_compliance(part, s, as_of=AS_OF) == 0.0

    def test_malformed_expiry_treated_as_expired(self):
        part = make_part(criticality="C", description="")
        s = make_supplier(certifications=[{"code": "ISO9001", "expiry": "not-a-date"}])
        assert score_compliance(part, s, as_of=AS_OF) == 0.0

    def test_non_critical_part_iso_only_is_full(self):
        part = make_part(criticality="C", description="Housing")
        s = make_supplier(certifications=[cert("ISO9001")])
        assert score_compliance(part, s, as_of=AS_OF) == 100.0

    def test_bonus_certs_add_ten_each(self, part):
        s = make_supplier(certifications=[cert("ISO9001"), cert("ISO14001"), cert("RoHS")])
        assert score_compliance(part, s, as_of=AS_OF) == pytest.approx(88.75)

    def test_expired_bonus_cert_ignored(self, part):
        s = make_supplier(certifications=[cert("ISO9001"), cert("ISO14001", -2)])
        assert score_compliance(part, s, as_of=AS_OF) == pytest.approx(68.75)

    def test_capped_at_100(self):
        part = make_part(criticality="C", description="")
        s = make_supplier(certifications=[
            cert("ISO9001"), cert("ISO14001"), cert("RoHS"), cert("REACH"), cert("ISO13485"),
        ])
        assert score_compliance(part, s, as_of=AS_OF) == 100.0

    def test_override_required_set(self, part):
        s = make_supplier(certifications=[cert("ISO13485")])
        assert score_compliance(part, s, required_certs={"ISO13485"}, as_of=AS_OF) == 100.0

    def test_required_bonus_cert_not_double_counted(self):
        part = make_part(criticality="C", description="")
        s = make_supplier(certifications=[cert("ISO13485")])
        # ISO9001 (30) + ISO13485 (20) required, only ISO13485 held
        score = score_compliance(part, s, required_certs={"ISO9001", "ISO13485"}, as_of=AS_OF)
        assert score == pytest.approx(40.0)

    def test_empty_required_set_is_full(self, part):
        s = make_supplier(certifications=[])
        assert score_compliance(part, s, required_certs=set(), as_of=AS_OF) == 100.0

    def test_bounded(self, part, catalog):
        for s in catalog:
            assert 0 <= score_compliance(part, s, as_of=AS_OF) <= 100


class TestExpiryWindow:
    def test_expiring_inside_window(self):
        c = Certification.model_validate(cert("RoHS", 3))
        assert is_expiring_soon(c, AS_OF)

    def test_boundary_six_months_is_expiring(self):
        c = Certification.model_validate(cert("RoHS", 6))
        assert is_expiring_soon(c, AS_OF)

    def test_beyond_window(self):
        c = Certification.model_validate(cert("RoHS", 7))
        assert not is_expiring_soon(c, AS_OF)

    def test_already_expired_is_not_expiring(self):
        c = Certification.model_validate(cert("RoHS", -1))
        assert not is_expiring_soon(c, AS_OF)

    def test_missing_expiry_is_not_expiring(self):
        c = Certification(code="RoHS")
        assert not is_expiring_soon(c, AS_OF)

    def test_windows_split(self):
        s = make_supplier(certifications=[cert("ISO9001"), cert("RoHS", 2), cert("REACH", -1)])
        valid, expiring = certificate_windows(s, AS_OF)
        assert valid == {"ISO9001"}
        assert [c.code for c in expiring] == ["RoHS"]


class TestAuditReadiness:
    def test_iso_and_iatf_nothing_expiring(self, supplier):
        assert classify_audit_readiness(supplier, AS_OF) == AUDIT_READY

    def test_one_expiring_cert_is_minor(self):
        s = make_supplier(certifications=[cert("ISO9001"), cert("IATF16949"), cert("RoHS", 3)])
        assert classify_audit_readiness(s, AS_OF) == MINOR_GAPS

    def test_iso_without_iatf_is_minor(self):
        s = make_supplier(certifications=[cert("ISO9001")])
        assert classify_audit_readiness(s, AS_OF) == MINOR_GAPS

    def test_iso_without_iatf_two_expiring_is_major(self):
        s = make_supplier(certifications=[cert("ISO9001"), cert("ISO14001", 3), cert("RoHS", 2)])
        assert classify_audit_readiness(s, AS_OF) == MAJOR_GAPS

    def test_iso_expiring_soon_is_major(self):
        s = make_supplier(certifications=[cert("ISO9001", 3), cert("IATF16949")])
        assert classify_audit_readiness(s, AS_OF) == MAJOR_GAPS

    def test_iso_expiring_exactly_at_window_edge_is_major(self):
        s = make_supplier(certifications=[cert("ISO9001", 6), cert("IATF16949")])
        assert classify_audit_readiness(s, AS_OF) == MAJOR_GAPS

    def test_no_certs_is_major(self):
        assert classify_audit_readiness(make_supplier(certifications=[]), AS_OF) == MAJOR_GAPS

    def test_malformed_dates_are_major(self):
        s = make_supplier(certifications=[
            {"code": "ISO9001", "expiry": "31/31/2031"},
            {"code": "IATF16949", "expiry": ""},
        ])
        assert classify_audit_readiness(s, AS_OF) == MAJOR_GAPS

    @pytest.mark.parametrize("partial", ["2027", "June", "12", "Mar 2030"])
    def test_partial_expiry_is_major_and_earns_nothing(self, part, partial):
        """A year, month or day alone is never completed from the calendar."""
        s = make_supplier(certifications=[
            {"code": "ISO9001", "expiry": partial},
            {"code": "IATF16949", "expiry": partial},
        ])
        assert all(c.expiry is None for c in s.certifications)
        assert classify_audit_readiness(s, AS_OF) == MAJOR_GAPS
        assert score_compliance(part, s, as_of=AS_OF) == 0.0
