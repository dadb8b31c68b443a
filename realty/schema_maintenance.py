"""
Out-of-band repair of environments whose contacts table predates newer columns.
"""

import logging

from sqlalchemy import inspect, text

from realty.models.lead import Lead

logger = logging.getLogger(__name__)

# column -> (postgres type, sqlite type)
CONTACT_COLUMN_TYPES = {
    "down_payment": ("TEXT", "TEXT"),
    "what_in_mind": ("TEXT", "TEXT"),
    "project_slug": ("TEXT", "TEXT"),
    "appointment_date": ("TIMESTAMP", "DATETIME"),
    "calendly_event_id": ("TEXT", "TEXT"),
    "calendly_status": ("TEXT DEFAULT 'pending'", "TEXT DEFAULT 'pending'"),
    "calendly_invitee_name": ("TEXT", "TEXT"),
    "calendly_raw_payload": ("JSONB", "JSON"),
}


def contact_columns(engine):
    inspector = inspect(engine)
    if not inspector.has_table(Lead.__tablename__):
        return None
    return [column["name"] for column in inspector.get_columns(Lead.__tablename__)]


def missing_contact_columns(engine):
    present = contact_columns(engine)
    if present is None:
        return list(Lead.column_names())
    return [name for name in Lead.column_names() if name not in present]


def add_missing_columns(engine):
    """Add every known optional column the live contacts table lacks. Returns the columns added."""
    present = contact_columns(engine)
    if present is None:
        raise RuntimeError("contacts table does not exist; run init-db first")

    dialect_index = 0 if engine.dialect.name == "postgresql" else 1
    added = []

    with engine.begin() as connection:
        for column, types in CONTACT_COLUMN_TYPES.items():
            if column in present:
                continue
            connection.execute(text(f"ALTER TABLE contacts ADD COLUMN {column} {types[dialect_index]}"))
            added.append(column)
            logger.info("Added contacts column", extra={"column": column})

        connection.execute(text(
            "CREATE UNIQUE INDEX IF NOT EXISTS contacts_calendly_event_id_key "
            "ON contacts (calendly_event_id)"
        ))

        if engine.dialect.name == "postgresql":
            # Budget became optional after the first release
            connection.execute(text("ALTER TABLE contacts ALTER COLUMN budget DROP NOT NULL"))

    return added
