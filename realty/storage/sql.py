import logging

from sqlalchemy import func, insert, text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from realty.errors import PersistenceError, SchemaDriftError, StoreUnavailable
from realty.extensions import db
from realty.models.lead import Lead
from realty.storage.base import LeadStore, is_connectivity_failure, missing_column

logger = logging.getLogger(__name__)


class SqlLeadStore(LeadStore):
    """Wire-protocol transport through the Flask-SQLAlchemy session."""

    name = "sql"

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session or db.session

    def insert(self, row):
        table = Lead.__table__
        returned = [table.c.id, table.c.created_at] + [
            table.c[column] for column in row if column not in ("id", "created_at")
        ]
        stmt = insert(table).values(**row).returning(*returned)

        with self._translate_errors("insert"):
            persisted = dict(self.session.execute(stmt).mappings().one())
            self.session.commit()

        return persisted

    def latest_by_email(self, email):
        with self._translate_errors("latest_by_email"):
            lead = (
                self.session.query(Lead)
                .filter(func.lower(Lead.email) == email.strip().lower())
                .order_by(Lead.created_at.desc(), Lead.id.desc())
                .first()
            )
        return lead.to_row() if lead else None

    def by_event_id(self, event_id):
        with self._translate_errors("by_event_id"):
            lead = self.session.query(Lead).filter(Lead.calendly_event_id == event_id).first()
        return lead.to_row() if lead else None

    def update(self, lead_id, values):
        with self._translate_errors("update"):
            lead = self.session.get(Lead, lead_id)
            if lead is None:
                return None
            for column, value in values.items():
                setattr(lead, column, value)
            self.session.commit()
            return lead.to_row()

    def all(self):
        with self._translate_errors("all"):
            return [lead.to_row() for lead in self.session.query(Lead).order_by(Lead.id.asc()).all()]

    def ping(self):
        try:
            self.session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as exc:
            logger.warning("SQL transport ping failed", extra={"error": str(exc)})
            self.session.rollback()
            return False

    def _translate_errors(self, operation):
        return _SqlErrorTranslator(self.session, operation)


class _SqlErrorTranslator:
    """Maps SQLAlchemy failures onto the store error taxonomy."""

    def __init__(self, session, operation):
        self.session = session
        self.operation = operation

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc is None or not isinstance(exc, SQLAlchemyError):
            return False

        self.session.rollback()
        message = str(getattr(exc, "orig", None) or exc)

        column = missing_column(message)
        if column:
            raise SchemaDriftError(column, cause=exc) from exc

        connection_lost = isinstance(exc, DBAPIError) and exc.connection_invalidated
        if connection_lost or (isinstance(exc, OperationalError) and is_connectivity_failure(message)):
            raise StoreUnavailable(
                f"Database connection failed during {self.operation}",
                cause=exc,
                code=getattr(getattr(exc, "orig", None), "pgcode", None),
            ) from exc

        raise PersistenceError(
            f"Database error during {self.operation}",
            cause=exc,
            code=getattr(getattr(exc, "orig", None), "pgcode", None),
        ) from exc
