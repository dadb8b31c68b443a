import os
import re
from urllib.parse import quote


class ConfigurationError(Exception):
    """
    Raised when an invalid or unsupported configuration is requested.
    """
    pass


_URL_PARTS = re.compile(r"^(?P<scheme>[a-z0-9+]+)://(?P<user>[^:/@]+):(?P<password>.+)@(?P<host>[^@]+)$")


def normalize_database_url(url: str) -> str:
    """
    Managed Postgres hands out postgres:// or postgresql:// URLs;
    SQLAlchemy wants postgresql+psycopg2://. Passwords with reserved
    characters are percent-encoded.
    """
    url = (url or "").strip()
    if not url:
        return url

    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg2://", 1)

    match = _URL_PARTS.match(url)
    if match and "%" not in match.group("password"):
        password = quote(match.group("password"), safe="")
        url = f"{match.group('scheme')}://{match.group('user')}:{password}@{match.group('host')}"

    return url


def _env_list(name, default=""):
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class BaseConfig:
    """
    Base configuration shared by all environments.
    """

    # Flask
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")

    # Application
    APP_NAME = "Dario Velez Realty"
    APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
    ENVIRONMENT = "development"

    # Database
    SQLALCHEMY_DATABASE_URI = normalize_database_url(os.getenv("DATABASE_URL", ""))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))

    # REST fallback transport
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    REST_TIMEOUT = int(os.getenv("REST_TIMEOUT", "10"))

    # Scheduling provider
    CALENDLY_WEBHOOK_SIGNING_KEY = os.getenv("CALENDLY_WEBHOOK_SIGNING_KEY")
    CALENDLY_SIGNATURE_TOLERANCE = int(os.getenv("CALENDLY_SIGNATURE_TOLERANCE", "0"))

    # CORS
    CORS_ORIGINS = _env_list("CORS_ORIGINS", "http://localhost:5000,http://127.0.0.1:5000")

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "200 per 15 minutes")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_HEADERS_ENABLED = True
    CONTACT_RATE_LIMIT = os.getenv("CONTACT_RATE_LIMIT", "5 per hour")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_REQUESTS = os.getenv("LOG_REQUESTS", "false").lower() == "true"

    # Error tracking
    SENTRY_DSN = os.getenv("SENTRY_DSN")

    @classmethod
    def validate(cls):
        """Fail fast on settings every environment needs."""
        if not cls.SQLALCHEMY_DATABASE_URI:
            raise ConfigurationError("DATABASE_URL is not set")
        return cls
