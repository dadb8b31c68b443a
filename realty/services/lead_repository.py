"""
Durable access to leads across the wire-protocol and REST transports.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from flask import current_app

from realty.errors import PersistenceError, SchemaDriftError, StoreUnavailable
from realty.models.lead import Lead
from realty.storage import RestLeadStore, SqlLeadStore

logger = logging.getLogger(__name__)

# Optional columns introduced after the first deployment, oldest first.
# Only these may be dropped from an insert when an environment lacks them.
DRIFT_TOLERANT_COLUMNS = ("down_payment", "what_in_mind", "project_slug")

EXTENSION_KEY = "lead_repository"


@dataclass
class SchedulingUpdate:
    calendly_event_id: str
    calendly_status: str
    appointment_date: Optional[datetime] = None
    calendly_invitee_name: Optional[str] = None
    calendly_raw_payload: Any = field(default=None)

    def to_values(self):
        return {
            "appointment_date": self.appointment_date,
            "calendly_event_id": self.calendly_event_id,
            "calendly_status": self.calendly_status,
            "calendly_invitee_name": self.calendly_invitee_name,
            "calendly_raw_payload": self.calendly_raw_payload,
        }


class LeadRepository:
    """
    Create/read access to leads.

    Every operation runs on the primary transport first and, if that
    transport is unreachable, once on the fallback. Inserts tolerate
    environments whose contacts table predates the newer optional columns.
    """

    def __init__(self, primary, fallback=None):
        self.primary = primary
        self.fallback = fallback

    @property
    def transports(self):
        return [store for store in (self.primary, self.fallback) if store is not None]

    def create(self, lead_request) -> Lead:
        row = self._run("create", lambda store: self._insert_tolerant(store, lead_request))
        return Lead.from_row(row)

    def find_by_email(self, email) -> Optional[Lead]:
        row = self._run("find_by_email", lambda store: store.latest_by_email(email))
        return Lead.from_row(row) if row else None

    def update_scheduling(self, email, update: SchedulingUpdate) -> Optional[Lead]:
        """
        Overwrite the scheduling state of the lead this event belongs to.

        The lead already holding the external event id wins; otherwise the
        most recent lead with this email. Returns None when no lead matches;
        that is an expected outcome.
        """

        def apply(store):
            row = None
            if update.calendly_event_id:
                row = store.by_event_id(update.calendly_event_id)
            if row is None:
                row = store.latest_by_email(email)
            if row is None:
                return None
            return store.update(row["id"], update.to_values())

        row = self._run("update_scheduling", apply)
        return Lead.from_row(row) if row else None

    def list(self):
        return [Lead.from_row(row) for row in self._run("list", lambda store: store.all())]

    def _insert_tolerant(self, store, lead_request):
        record = list(lead_request.fields())
        dropped = []

        for _ in range(len(DRIFT_TOLERANT_COLUMNS) + 1):
            row = {item.column: item.value for item in record}
            try:
                persisted = store.insert(row)
            except SchemaDriftError as exc:
                offender = next((item for item in record if item.column == exc.column), None)
                if offender is None or offender.required or offender.column not in DRIFT_TOLERANT_COLUMNS:
                    raise PersistenceError(
                        f"Column {exc.column} is missing and cannot be omitted",
                        cause=exc,
                        attempted=[store.name],
                    ) from exc
                record.remove(offender)
                dropped.append(offender.column)
                logger.warning(
                    "Contacts table is missing a column, retrying insert without it",
                    extra={"column": exc.column, "transport": store.name},
                )
                continue

            if dropped:
                logger.warning(
                    "Lead stored without optional columns",
                    extra={"dropped_columns": dropped, "transport": store.name},
                )
            return persisted

        raise PersistenceError("Schema drift retries exhausted", attempted=[store.name])

    def _run(self, operation, fn):
        attempted = []
        last_error = None

        for store in self.transports:
            attempted.append(store.name)
            try:
                result = fn(store)
            except StoreUnavailable as exc:
                last_error = exc
                logger.warning(
                    "Lead store transport unavailable",
                    extra={"operation": operation, "transport": store.name, "error": str(exc)},
                )
                continue
            except SchemaDriftError as exc:
                logger.error(
                    "Lead store schema is missing a column",
                    extra={"operation": operation, "transport": store.name, "column": exc.column},
                )
                raise PersistenceError(str(exc), cause=exc, attempted=attempted) from exc
            except PersistenceError as exc:
                exc.attempted = attempted
                logger.error(
                    "Lead store rejected operation",
                    extra={
                        "operation": operation,
                        "transport": store.name,
                        "error": str(exc),
                        "code": exc.code,
                    },
                )
                raise

            if len(attempted) > 1:
                logger.warning(
                    "Lead store operation served by fallback transport",
                    extra={"operation": operation, "transports": attempted},
                )
            return result

        logger.error(
            "All lead store transports failed",
            extra={
                "operation": operation,
                "transports": attempted,
                "code": getattr(last_error, "code", None),
            },
        )
        raise PersistenceError(
            f"Lead store unreachable during {operation}",
            cause=last_error,
            attempted=attempted,
            code=getattr(last_error, "code", None),
        )


def build_lead_repository(config):
    fallback = None
    if config.get("SUPABASE_URL") and config.get("SUPABASE_SERVICE_ROLE_KEY"):
        fallback = RestLeadStore(
            config["SUPABASE_URL"],
            config["SUPABASE_SERVICE_ROLE_KEY"],
            timeout=config.get("REST_TIMEOUT", 10),
        )
    return LeadRepository(SqlLeadStore(), fallback)


def init_lead_repository(app):
    repository = build_lead_repository(app.config)
    app.extensions[EXTENSION_KEY] = repository
    logger.info(
        "Lead repository initialized",
        extra={"transports": [store.name for store in repository.transports]},
    )
    return repository


def get_lead_repository() -> LeadRepository:
    return current_app.extensions[EXTENSION_KEY]
