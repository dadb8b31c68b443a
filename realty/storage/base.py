import re
from abc import ABC, abstractmethod

_MISSING_COLUMN_PATTERNS = (
    # Postgres: column "project_slug" of relation "contacts" does not exist
    re.compile(r'column "(?P<column>[\w]+)" of relation "[\w]+" does not exist', re.I),
    re.compile(r'column "?(?:[\w]+\.)?(?P<column>[\w]+)"? does not exist', re.I),
    # SQLite
    re.compile(r"table [\w\"]+ has no column named (?P<column>[\w]+)", re.I),
    re.compile(r"no such column: (?:[\w]+\.)?(?P<column>[\w]+)", re.I),
    # PostgREST schema cache (PGRST204)
    re.compile(r"could not find the '(?P<column>[\w]+)' column", re.I),
)

_CONNECTIVITY_MARKERS = (
    "could not translate host name",
    "name or service not known",
    "could not connect to server",
    "connection refused",
    "connection timed out",
    "timeout expired",
    "server closed the connection unexpectedly",
    "network is unreachable",
    "temporary failure in name resolution",
)


def missing_column(message):
    """Return the column named by an 'unknown column' error message, if any."""
    if not message:
        return None
    for pattern in _MISSING_COLUMN_PATTERNS:
        match = pattern.search(str(message))
        if match:
            return match.group("column")
    return None


def is_connectivity_failure(message):
    text = str(message or "").lower()
    return any(marker in text for marker in _CONNECTIVITY_MARKERS)


class LeadStore(ABC):
    """
    One transport to the contacts table.

    Rows are plain dicts keyed by column name. Implementations raise
    SchemaDriftError for an unknown column, StoreUnavailable for
    transient connectivity failures and PersistenceError otherwise.
    """

    name = "store"

    @abstractmethod
    def insert(self, row):
        """Insert one row and return it as persisted (with id and created_at)."""

    @abstractmethod
    def latest_by_email(self, email):
        """Most recently created row whose email matches case-insensitively."""

    @abstractmethod
    def by_event_id(self, event_id):
        """Row already holding this external scheduling event id, if any."""

    @abstractmethod
    def update(self, lead_id, values):
        """Overwrite the given columns of one row and return the row."""

    @abstractmethod
    def all(self):
        """Every row, ordered by id."""

    @abstractmethod
    def ping(self):
        """True when the transport can reach the store."""
