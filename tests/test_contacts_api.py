import json
from unittest.mock import Mock

import pytest
from sqlalchemy import text

from realty import create_app
from realty.errors import PersistenceError
from realty.extensions import db
from realty.services.lead_repository import EXTENSION_KEY


def test_create_contact_returns_pending_lead(client, lead_payload):
    payload = lead_payload(email="ana@example.com", projectSlug="aura-boulevard")

    response = client.post("/api/contacts", json=payload)

    assert response.status_code == 201
    data = response.get_json()
    assert data["id"] == 1
    assert data["fullName"] == payload["fullName"]
    assert data["email"] == "ana@example.com"
    assert data["projectSlug"] == "aura-boulevard"
    assert data["downPayment"] == payload["downPayment"]
    assert data["calendlyStatus"] == "pending"
    assert data["appointmentDate"] is None
    assert data["calendlyEventId"] is None
    assert data["createdAt"] is not None


def test_create_contact_trims_fields(client, lead_payload):
    response = client.post("/api/contacts", json=lead_payload(fullName="  Ana Gomez  ", budget="  "))

    data = response.get_json()
    assert data["fullName"] == "Ana Gomez"
    assert data["budget"] is None


def test_invalid_contact_never_reaches_the_store(app, client, lead_payload):
    spy = Mock()
    app.extensions[EXTENSION_KEY] = spy

    response = client.post("/api/contacts", json=lead_payload(email="   ", phone=None))

    assert response.status_code == 400
    data = response.get_json()
    assert data["message"] == "Validation error"
    assert [error["path"] for error in data["errors"]] == [["email"], ["phone"]]
    assert spy.mock_calls == []


def test_non_json_body_is_validation_error(client):
    response = client.post("/api/contacts", data="fullName=Ana", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["errors"] == [{"path": [], "message": "Expected a JSON object"}]


def test_store_failure_returns_500(app, client, lead_payload):
    repository = Mock()
    repository.create.side_effect = PersistenceError("Lead store unreachable during create", attempted=["sql", "rest"])
    app.extensions[EXTENSION_KEY] = repository

    response = client.post("/api/contacts", json=lead_payload())

    assert response.status_code == 500
    data = response.get_json()
    assert data["message"] == "Error creating contact"
    assert "unreachable" in data["error"]


@pytest.mark.db
def test_create_contact_on_table_without_project_slug(app, client, lead_payload):
    db.session.execute(text("ALTER TABLE contacts DROP COLUMN project_slug"))
    db.session.commit()

    response = client.post("/api/contacts", json=lead_payload(projectSlug="the-reef"))

    assert response.status_code == 201
    data = response.get_json()
    assert data["projectSlug"] is None
    assert data["downPayment"] is not None


def test_list_contacts(client, lead_payload):
    for _ in range(2):
        client.post("/api/contacts", json=lead_payload())

    response = client.get("/api/contacts")

    assert response.status_code == 200
    assert [lead["id"] for lead in response.get_json()] == [1, 2]


def test_list_contacts_store_failure(app, client):
    repository = Mock()
    repository.list.side_effect = PersistenceError("Lead store unreachable during list")
    app.extensions[EXTENSION_KEY] = repository

    response = client.get("/api/contacts")

    assert response.status_code == 500
    assert response.get_json()["message"] == "Error fetching contacts"


def test_contact_submissions_are_rate_limited(lead_payload):
    app = create_app("testing", overrides={"RATELIMIT_ENABLED": True, "CONTACT_RATE_LIMIT": "2 per hour"})
    with app.app_context():
        db.create_all()
        client = app.test_client()

        statuses = [client.post("/api/contacts", json=lead_payload()).status_code for _ in range(3)]

        db.session.remove()
        db.drop_all()

    assert statuses == [201, 201, 429]


def test_request_id_is_echoed(client):
    response = client.get("/api/contacts", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_lead_json_keeps_field_order(client, lead_payload):
    response = client.post("/api/contacts", json=lead_payload())

    keys = list(json.loads(response.data).keys())
    assert keys[:3] == ["id", "fullName", "email"]
