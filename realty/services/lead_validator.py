"""
Validation and normalization of inbound contact-form submissions.
"""

from collections import namedtuple
from dataclasses import dataclass
from typing import Optional

from realty.errors import ValidationError
from realty.models.lead import PENDING

LeadField = namedtuple("LeadField", ["column", "value", "required"])

# (payload key, column)
REQUIRED_FIELDS = (
    ("fullName", "full_name"),
    ("email", "email"),
    ("phone", "phone"),
)

OPTIONAL_FIELDS = (
    ("budget", "budget"),
    ("downPayment", "down_payment"),
    ("whatInMind", "what_in_mind"),
    ("projectSlug", "project_slug"),
)


@dataclass(frozen=True)
class LeadRequest:
    """A validated, trimmed lead submission ready to be persisted."""

    full_name: str
    email: str
    phone: str
    budget: Optional[str] = None
    down_payment: Optional[str] = None
    what_in_mind: Optional[str] = None
    project_slug: Optional[str] = None

    def fields(self):
        """Insert record as ordered (column, value, required) triples."""
        record = [
            LeadField(column, getattr(self, column), True)
            for _, column in REQUIRED_FIELDS
        ]
        record.extend(
            LeadField(column, getattr(self, column), False)
            for _, column in OPTIONAL_FIELDS
        )
        record.append(LeadField("calendly_status", PENDING, False))
        return record


def _clean(value):
    if value is None:
        return None
    return value.strip()


def validate_lead(payload) -> LeadRequest:
    """
    Validate a raw submission mapping and return a LeadRequest.

    Required fields must be non-empty strings after trimming. Optional
    fields that are absent or blank become None. All problems are
    collected and raised together as a ValidationError.
    """
    if not isinstance(payload, dict):
        raise ValidationError([{"path": [], "message": "Expected a JSON object"}])

    errors = []
    values = {}

    for key, column in REQUIRED_FIELDS:
        raw = payload.get(key)
        if raw is not None and not isinstance(raw, str):
            errors.append({"path": [key], "message": "Expected string"})
            continue
        cleaned = _clean(raw)
        if not cleaned:
            errors.append({"path": [key], "message": f"{key} is required"})
            continue
        values[column] = cleaned

    for key, column in OPTIONAL_FIELDS:
        raw = payload.get(key)
        if raw is not None and not isinstance(raw, str):
            errors.append({"path": [key], "message": "Expected string"})
            continue
        values[column] = _clean(raw) or None

    if errors:
        raise ValidationError(errors)

    return LeadRequest(**values)
