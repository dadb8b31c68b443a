from datetime import datetime

from sqlalchemy.dialects.postgresql import JSONB

from realty.extensions import db

PENDING = "pending"
SCHEDULED = "scheduled"
CANCELLED = "cancelled"
RESCHEDULED = "rescheduled"

CALENDLY_STATUSES = (PENDING, SCHEDULED, CANCELLED, RESCHEDULED)

_TIMESTAMP_FIELDS = ("created_at", "appointment_date")


class Lead(db.Model):
    """A contact-form submission, later enriched by scheduling webhooks."""

    __tablename__ = 'contacts'

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text, nullable=False, index=True)
    phone = db.Column(db.Text, nullable=False)
    budget = db.Column(db.Text, nullable=True)
    down_payment = db.Column(db.Text, nullable=True)
    what_in_mind = db.Column(db.Text, nullable=True)
    project_slug = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Scheduling state, written only by the Calendly reconciler
    appointment_date = db.Column(db.DateTime, nullable=True)
    calendly_event_id = db.Column(db.Text, unique=True, nullable=True)
    calendly_status = db.Column(db.Text, default=PENDING)
    calendly_invitee_name = db.Column(db.Text, nullable=True)
    calendly_raw_payload = db.Column(db.JSON().with_variant(JSONB(), "postgresql"), nullable=True)

    @classmethod
    def column_names(cls):
        return [column.name for column in cls.__table__.columns]

    @classmethod
    def from_row(cls, row):
        """Build a detached Lead from a store row (column name -> value)."""
        known = set(cls.column_names())
        values = {key: value for key, value in dict(row).items() if key in known}
        for field in _TIMESTAMP_FIELDS:
            if isinstance(values.get(field), str):
                values[field] = _parse_timestamp(values[field])
        return cls(**values)

    def to_row(self):
        return {name: getattr(self, name) for name in self.column_names()}

    def to_dict(self):
        """Convert lead object to dictionary"""
        return {
            'id': self.id,
            'fullName': self.full_name,
            'email': self.email,
            'phone': self.phone,
            'budget': self.budget,
            'downPayment': self.down_payment,
            'whatInMind': self.what_in_mind,
            'projectSlug': self.project_slug,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'appointmentDate': self.appointment_date.isoformat() if self.appointment_date else None,
            'calendlyEventId': self.calendly_event_id,
            'calendlyStatus': self.calendly_status,
            'calendlyInviteeName': self.calendly_invitee_name,
            'calendlyRawPayload': self.calendly_raw_payload,
        }

    def __repr__(self):
        return f"<Lead {self.id} {self.email}>"


def _parse_timestamp(value):
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
