import time
from urllib.parse import urlparse

from flask import current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from realty.extensions import db
from realty.services.lead_repository import get_lead_repository

TRANSACTION_POOLER_PORT = 6543


def _check_database():
    start = time.time()
    try:
        db.session.execute(text("SELECT 1"))
        latency = round((time.time() - start) * 1000, 2)
        return {"status": "ok", "latency_ms": latency}
    except SQLAlchemyError as e:
        db.session.rollback()
        return {"status": "error", "error": str(e)}


def _check_rest():
    fallback = get_lead_repository().fallback
    if fallback is None:
        return {"status": "skipped", "reason": "SUPABASE_URL not set"}

    start = time.time()
    if fallback.ping():
        latency = round((time.time() - start) * 1000, 2)
        return {"status": "ok", "latency_ms": latency}
    return {"status": "error", "error": "REST API unreachable"}


def connection_info(database_url):
    """Describe the configured connection; production wants the transaction pooler."""
    if not database_url or not database_url.startswith("postgresql"):
        return {"type": "local", "transaction_pooler": False}

    try:
        port = urlparse(database_url).port
    except ValueError:
        port = None

    uses_pooler = port == TRANSACTION_POOLER_PORT
    return {
        "type": "transaction_pooler" if uses_pooler else "direct",
        "transaction_pooler": uses_pooler,
    }


def run_health_checks():
    database = _check_database()
    rest = _check_rest()
    connection = connection_info(current_app.config.get("SQLALCHEMY_DATABASE_URI"))

    status = "ok" if database["status"] == "ok" else "degraded"

    return {
        "status": status,
        "database": database,
        "rest": rest,
        "connection": connection,
    }
