from .base import BaseConfig


class TestingConfig(BaseConfig):
    """
    Test configuration: in-memory SQLite, no REST fallback, no rate limits.
    """

    TESTING = True
    ENVIRONMENT = "testing"

    SECRET_KEY = "test-secret-key"

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"

    SUPABASE_URL = None
    SUPABASE_SERVICE_ROLE_KEY = None

    CALENDLY_WEBHOOK_SIGNING_KEY = "test-calendly-signing-key"
    CALENDLY_SIGNATURE_TOLERANCE = 0

    RATELIMIT_ENABLED = False

    SENTRY_DSN = None

    @classmethod
    def validate(cls):
        return cls
