from __future__ import annotations

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from lead_capture.exceptions import ValidationError
from lead_capture.leads.models import ClientInfo, LeadRecord, LeadSubmission, build_document


def test_normalize_trims_and_lowercases_email():
    lead = LeadSubmission(name=" Ana ", email="ANA@Test.com ", phone=" 555-0100 ").normalize(
        default_product="Starter Kit"
    )

    assert lead.name == "Ana"
    assert lead.email == "ana@test.com"
    assert lead.phone == "555-0100"
    assert lead.product == "Starter Kit"


def test_normalize_keeps_explicit_product():
    lead = LeadSubmission(name="a", email="a@b.com", phone="1", product=" Pro ").normalize(
        default_product="Starter Kit"
    )
    assert lead.product == "Pro"


def test_blank_product_falls_back_to_default():
    lead = LeadSubmission(name="a", email="a@b.com", phone="1", product="   ").normalize(
        default_product="Starter Kit"
    )
    assert lead.product == "Starter Kit"


@pytest.mark.parametrize(
    "payload,missing",
    [
        ({"name": "", "email": "a@b.com", "phone": "1"}, ["name"]),
        ({"name": "   ", "email": "a@b.com", "phone": "1"}, ["name"]),
        ({"name": "A", "phone": "1"}, ["email"]),
        ({"name": "A", "email": "a@b.com", "phone": "\t\n"}, ["phone"]),
        ({}, ["name", "email", "phone"]),
    ],
)
def test_missing_required_fields_raise_validation_error(payload, missing):
    with pytest.raises(ValidationError) as ei:
        LeadSubmission(**payload).normalize(default_product="x")

    assert ei.value.status_code == 400
    assert ei.value.extra["fields"] == missing


def test_emails_differing_in_case_and_whitespace_normalize_identically():
    a = LeadSubmission(name="A", email="  Lead@Example.COM", phone="1").normalize(default_product="x")
    b = LeadSubmission(name="B", email="lead@example.com  ", phone="2").normalize(default_product="x")
    assert a.email == b.email == "lead@example.com"


def test_unknown_fields_are_ignored():
    sub = LeadSubmission.model_validate({"name": "A", "email": "a@b.com", "phone": "1", "extra": True})
    assert not hasattr(sub, "extra")


def test_build_document_uses_stored_field_names():
    created = datetime(2026, 1, 2, tzinfo=timezone.utc)
    lead = LeadSubmission(name="A", email="a@b.com", phone="1").normalize(default_product="x")

    doc = build_document(lead, ClientInfo(source_ip="10.0.0.1", user_agent="curl/8"), created_at=created)

    assert doc == {
        "name": "A",
        "email": "a@b.com",
        "phone": "1",
        "product": "x",
        "createdAt": created,
        "sourceIp": "10.0.0.1",
        "userAgent": "curl/8",
    }


def test_lead_record_serializes_camel_case():
    oid = ObjectId()
    created = datetime(2026, 1, 2, tzinfo=timezone.utc)
    record = LeadRecord.from_document(
        {
            "_id": oid,
            "name": "A",
            "email": "a@b.com",
            "phone": "1",
            "product": "x",
            "createdAt": created,
            "sourceIp": "10.0.0.1",
            "userAgent": "curl/8",
        }
    )

    data = record.model_dump(by_alias=True, mode="json")
    assert data["id"] == str(oid)
    assert data["createdAt"].startswith("2026-01-02T00:00:00")
    assert data["sourceIp"] == "10.0.0.1"
    assert data["userAgent"] == "curl/8"
