import json
import time

import pytest
from faker import Faker

from realty import create_app
from realty.extensions import db
from realty.webhooks.security import SIGNATURE_HEADER, compute_signature

# Initialize Faker for generating test data
fake = Faker()

SIGNING_KEY = "test-calendly-signing-key"


@pytest.fixture()
def app():
    """Application with a fresh in-memory database per test"""
    app = create_app("testing")

    with app.app_context():
        db.create_all()

        yield app

        # Cleanup
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture
def lead_payload():
    """Contact-form submission as the website sends it"""
    def _payload(**overrides):
        base = {
            "fullName": fake.name(),
            "email": fake.email(),
            "phone": fake.phone_number(),
            "budget": fake.random_element(["$200k-$300k", "$300k-$500k", "$500k+"]),
            "downPayment": fake.random_element(["10%", "20%", "30%"]),
            "whatInMind": fake.sentence(),
            "projectSlug": fake.random_element(["aura-boulevard", "the-reef", "secret-garden"]),
        }
        base.update(overrides)
        return base

    return _payload


@pytest.fixture
def calendly_event():
    """Calendly webhook body for one invitee"""
    def _event(event_type="invitee.created", email=None, event_id=None, **payload_overrides):
        event_id = event_id or fake.uuid4()
        payload = {
            "email": email or fake.email(),
            "name": fake.name(),
            "rescheduled": False,
            "scheduled_event": {
                "uri": f"https://api.calendly.com/scheduled_events/{event_id}",
                "start_time": "2026-11-03T15:00:00.000000Z",
            },
        }
        payload.update(payload_overrides)
        return {"event": event_type, "payload": payload}

    return _event


@pytest.fixture
def signed_headers():
    """Signature headers for a raw webhook body"""
    def _headers(body, key=SIGNING_KEY, timestamp=None):
        timestamp = str(timestamp or int(time.time()))
        signature = compute_signature(timestamp, body, key)
        return {
            SIGNATURE_HEADER: f"t={timestamp},s={signature}",
            "Content-Type": "application/json",
        }

    return _headers


@pytest.fixture
def post_webhook(client, signed_headers):
    """POST a JSON event to the Calendly webhook with a valid signature"""
    def _post(event):
        body = json.dumps(event)
        return client.post("/api/webhooks/calendly", data=body, headers=signed_headers(body))

    return _post
