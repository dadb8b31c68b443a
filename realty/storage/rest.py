import logging
from datetime import date, datetime

import requests

from realty.errors import PersistenceError, SchemaDriftError, StoreUnavailable
from realty.storage.base import LeadStore, missing_column

logger = logging.getLogger(__name__)

UNDEFINED_COLUMN_CODES = ("PGRST204", "42703")


def _jsonable(row):
    out = {}
    for key, value in row.items():
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        out[key] = value
    return out


def _escape_like(value):
    # PostgREST turns `*` into `%`; `_` keeps it a single-character match
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "_")


class RestLeadStore(LeadStore):
    """PostgREST transport for the same contacts table, used when the wire protocol is unreachable."""

    name = "rest"

    def __init__(self, base_url, service_key, table="contacts", timeout=10, session=None):
        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout
        self.http = session or requests.Session()
        self.http.headers.update({
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        })

    def insert(self, row):
        rows = self._request("POST", payload=_jsonable(row))
        if not rows:
            raise PersistenceError("REST insert returned no representation")
        return rows[0]

    def latest_by_email(self, email):
        rows = self._request(
            "GET",
            params={
                "email": f"ilike.{_escape_like(email.strip())}",
                "order": "created_at.desc,id.desc",
            },
        )
        wanted = email.strip().lower()
        return next((row for row in rows if (row.get("email") or "").lower() == wanted), None)

    def by_event_id(self, event_id):
        rows = self._request("GET", params={"calendly_event_id": f"eq.{event_id}", "limit": 1})
        return rows[0] if rows else None

    def update(self, lead_id, values):
        rows = self._request("PATCH", params={"id": f"eq.{lead_id}"}, payload=_jsonable(values))
        return rows[0] if rows else None

    def all(self):
        return self._request("GET", params={"order": "id.asc"})

    def ping(self):
        try:
            self._request("GET", params={"select": "id", "limit": 1})
            return True
        except PersistenceError as exc:
            logger.warning("REST transport ping failed", extra={"error": str(exc)})
            return False

    def _request(self, method, params=None, payload=None):
        try:
            response = self.http.request(
                method,
                self.endpoint,
                params=params,
                json=payload,
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise StoreUnavailable("REST API unreachable", cause=exc) from exc
        except requests.RequestException as exc:
            raise PersistenceError("REST API request failed", cause=exc) from exc

        if response.status_code >= 400:
            self._raise_for_error(response)

        if not response.content:
            return []
        return response.json()

    @staticmethod
    def _raise_for_error(response):
        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}

        code = body.get("code") if isinstance(body, dict) else None
        message = body.get("message") if isinstance(body, dict) else str(body)

        if code in UNDEFINED_COLUMN_CODES or missing_column(message):
            column = missing_column(message)
            if column:
                raise SchemaDriftError(column, cause=body)

        if response.status_code in (502, 503, 504):
            raise StoreUnavailable(f"REST API error {response.status_code}", cause=body, code=code)

        raise PersistenceError(
            f"REST API error {response.status_code}: {message}",
            cause=body,
            code=code,
        )
