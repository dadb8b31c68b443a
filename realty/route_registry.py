# realty/route_registry.py
import logging

logger = logging.getLogger(__name__)


def register_routes(app):
    """Register all routes and blueprints"""
    from realty.health import health_bp
    from realty.routes import contact_routes, project_routes, webhook_routes

    app.register_blueprint(contact_routes.bp)
    app.register_blueprint(project_routes.bp)
    app.register_blueprint(webhook_routes.bp)
    app.register_blueprint(health_bp)

    logger.info("Registered API blueprints")
    return app
