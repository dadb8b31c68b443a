"""
Reconciles verified Calendly webhook events with stored leads.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from realty.models.lead import CANCELLED, RESCHEDULED, SCHEDULED
from realty.services.lead_repository import SchedulingUpdate

logger = logging.getLogger(__name__)

EVENT_STATUSES = {
    "invitee.created": SCHEDULED,
    "invitee.canceled": CANCELLED,
    "invitee.rescheduled": RESCHEDULED,
    "invitee.updated": RESCHEDULED,
}

PROCESSED = "processed"
SKIPPED = "skipped"
IGNORED = "ignored"
NO_MATCH = "no_match"
ERROR = "error"


@dataclass
class ReconcileResult:
    status: str
    lead_id: Optional[int] = None
    reason: Optional[str] = None

    def to_dict(self):
        body = {"received": True, "status": self.status}
        if self.lead_id is not None:
            body["leadId"] = self.lead_id
        if self.reason:
            body["reason"] = self.reason
        return body


def status_for(event_type, payload):
    status = EVENT_STATUSES.get(event_type)
    # Calendly reports a reschedule as a cancellation flagged `rescheduled`
    if status == CANCELLED and payload.get("rescheduled"):
        return RESCHEDULED
    return status


def external_event_id(scheduled_event):
    uri = (scheduled_event or {}).get("uri")
    if not uri or not isinstance(uri, str):
        return None
    return uri.rstrip("/").rsplit("/", 1)[-1] or None


def parse_start_time(value):
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.info("Unparseable Calendly start_time", extra={"start_time": value})
        return None
    # Stored as naive UTC, like created_at
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class AppointmentReconciler:
    """
    Maps an authenticated Calendly event onto the lead with the invitee's email.

    Never raises: the provider retries anything that is not a 2xx, so every
    outcome, including internal failures, is reported as a ReconcileResult.
    """

    def __init__(self, repository):
        self.repository = repository

    def reconcile(self, event) -> ReconcileResult:
        try:
            return self._reconcile(event)
        except Exception as exc:
            logger.exception(
                "Calendly webhook processing failed",
                extra={"event_type": _event_type(event), "error": str(exc)},
            )
            return ReconcileResult(ERROR, reason="processing_failed")

    def _reconcile(self, event):
        if not isinstance(event, dict):
            logger.info("Calendly webhook without a JSON object body, skipping")
            return ReconcileResult(SKIPPED, reason="invalid_body")

        event_type = event.get("event")
        payload = event.get("payload") or {}
        if not isinstance(payload, dict):
            payload = {}

        email = payload.get("email")
        scheduled_event = payload.get("scheduled_event") or {}
        event_id = external_event_id(scheduled_event)

        if not email or not event_id:
            logger.info(
                "Incomplete Calendly payload, skipping",
                extra={"event_type": event_type, "has_email": bool(email), "has_event_id": bool(event_id)},
            )
            return ReconcileResult(SKIPPED, reason="incomplete_payload")

        status = status_for(event_type, payload)
        if status is None:
            logger.info("Unhandled Calendly event type", extra={"event_type": event_type})
            return ReconcileResult(IGNORED, reason="unhandled_event_type")

        update = SchedulingUpdate(
            calendly_event_id=event_id,
            calendly_status=status,
            appointment_date=parse_start_time(scheduled_event.get("start_time")),
            calendly_invitee_name=payload.get("name"),
            calendly_raw_payload=event,
        )

        lead = self.repository.update_scheduling(email.strip().lower(), update)
        if lead is None:
            logger.info(
                "No lead matches Calendly invitee",
                extra={"event_type": event_type, "calendly_event_id": event_id},
            )
            return ReconcileResult(NO_MATCH)

        logger.info(
            "Lead scheduling state updated",
            extra={"lead_id": lead.id, "calendly_status": status, "calendly_event_id": event_id},
        )
        return ReconcileResult(PROCESSED, lead_id=lead.id)


def _event_type(event):
    return event.get("event") if isinstance(event, dict) else None
