"""
Flask application factory for the real-estate marketing backend.
"""

import logging
from typing import Optional

import sentry_sdk
from flask import Flask
from sentry_sdk.integrations.flask import FlaskIntegration

from realty.config import get_config
from realty.error_handlers import register_error_handlers
from realty.extensions import init_extensions
from realty.health.checks import connection_info
from realty.logging_config import setup_logging
from realty.middleware.request_id import init_request_id_middleware
from realty.route_registry import register_routes
from realty.services.lead_repository import init_lead_repository

logger = logging.getLogger(__name__)


def setup_sentry(app: Flask) -> None:
    """Initialize Sentry error tracking"""
    sentry_dsn = app.config.get('SENTRY_DSN')

    if sentry_dsn and app.config.get('ENVIRONMENT') == 'production':
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment="production",
            release=app.config.get('APP_VERSION', '1.0.0'),
            send_default_pii=False,
        )
        logger.info("Sentry error tracking initialized")


def check_production_readiness(app: Flask) -> None:
    if app.config.get('ENVIRONMENT') != 'production':
        return

    connection = connection_info(app.config.get('SQLALCHEMY_DATABASE_URI'))
    if not connection['transaction_pooler']:
        logger.warning(
            "Not using the transaction pooler (port 6543); row-level security policies may not apply correctly",
            extra={"connection_type": connection['type']},
        )
    if not app.config.get('CALENDLY_WEBHOOK_SIGNING_KEY'):
        logger.warning("CALENDLY_WEBHOOK_SIGNING_KEY is not set; the Calendly webhook will answer 500")


def create_app(config_name: Optional[str] = None, overrides: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False

    setup_logging(app)
    setup_sentry(app)

    init_extensions(app)
    init_request_id_middleware(app)
    register_error_handlers(app)
    register_routes(app)
    init_lead_repository(app)

    check_production_readiness(app)

    logger.info(
        "Application created",
        extra={"environment": app.config.get('ENVIRONMENT'), "app_version": app.config.get('APP_VERSION')},
    )
    return app
