# realty/error_handlers.py
import logging
import traceback

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from realty.errors import PersistenceError, SignatureError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Register all error handlers for the application"""

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        logger.info(f"Validation error - Path: {request.path}", extra={"errors": error.errors})
        return jsonify({
            "message": "Validation error",
            "errors": error.errors,
        }), 400

    @app.errorhandler(SignatureError)
    def handle_signature_error(error):
        logger.warning(f"Rejected webhook: {error} - Path: {request.path}")
        return jsonify({
            "message": str(error),
            "error": "Unauthorized",
        }), 401

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(error):
        logger.error(
            f"Persistence error: {error} - Path: {request.path}",
            extra={"code": error.code, "transports": error.attempted},
        )
        return jsonify({
            "message": "Database error",
            "error": str(error),
        }), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """
        Handles known HTTP errors (404, 405, 429, etc.)
        """
        if e.code and e.code >= 500:
            logger.error(f"{e.name}: {e.description} - Path: {request.path}")
        else:
            logger.info(f"{e.name} - {request.method} {request.path}")
        return jsonify({
            "message": e.description,
            "error": e.name,
        }), e.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        """
        Handles all unexpected server errors
        Prevents stack trace leakage in production
        """
        logger.error(f"Unhandled exception - Path: {request.path}")
        logger.error(traceback.format_exc())

        return jsonify({
            "message": "Internal Server Error",
            "error": str(e) if app.config.get("DEBUG") else "Something went wrong. Please try again later.",
        }), 500
