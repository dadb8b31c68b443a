# realty/extensions.py
"""
Flask extensions initialization module.
"""

import logging

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
migrate = Migrate()
cors = CORS()
limiter = Limiter(key_func=get_remote_address)

logger = logging.getLogger(__name__)


def init_extensions(app):
    """Initialize all Flask extensions against the given app."""

    uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if uri.startswith("postgresql"):
        # Bound the wire-protocol connect so a hung primary falls through
        # to the REST transport instead of blocking the request.
        engine_options = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {})
        engine_options.setdefault("pool_pre_ping", True)
        engine_options.setdefault("pool_size", 10)
        engine_options.setdefault("max_overflow", 20)
        connect_args = dict(engine_options.get("connect_args") or {})
        connect_args.setdefault("connect_timeout", app.config.get("DB_CONNECT_TIMEOUT", 10))
        engine_options["connect_args"] = connect_args
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options

    db.init_app(app)
    logger.info("SQLAlchemy initialized")

    migrate.init_app(app, db)
    logger.info("Flask-Migrate initialized")

    init_cors(app)

    limiter.init_app(app)
    logger.info(
        "Rate limiter initialized",
        extra={"enabled": app.config.get("RATELIMIT_ENABLED", True)},
    )

    return app


def init_cors(app):
    """CORS for API routes only, restricted to configured origins."""
    origins = app.config.get("CORS_ORIGINS") or []

    if "*" in origins and app.config.get("ENVIRONMENT") == "production":
        raise RuntimeError("Wildcard CORS origin '*' is not allowed in production")

    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": origins,
                "supports_credentials": True,
                "allow_headers": ["Content-Type", "Authorization", "X-Request-ID"],
                "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                "expose_headers": ["X-Request-ID"],
                "max_age": 600,
            }
        },
    )
    logger.info("CORS initialized", extra={"origins": origins})


__all__ = ["db", "migrate", "cors", "limiter", "init_extensions"]
