import logging

from flask import Blueprint, current_app, jsonify, request

from realty.errors import PersistenceError, ValidationError
from realty.extensions import limiter
from realty.services.lead_repository import get_lead_repository
from realty.services.lead_validator import validate_lead

logger = logging.getLogger(__name__)

bp = Blueprint('contacts', __name__, url_prefix='/api/contacts')


def _contact_limit():
    return current_app.config.get("CONTACT_RATE_LIMIT", "5 per hour")


@bp.route('', methods=['POST'])
@limiter.limit(_contact_limit, methods=['POST'])
def create_contact():
    """Create a lead from the contact form"""
    payload = request.get_json(silent=True)

    try:
        lead_request = validate_lead(payload)
    except ValidationError as e:
        logger.info("Contact submission rejected", extra={"errors": e.errors})
        return jsonify({'message': 'Validation error', 'errors': e.errors}), 400

    try:
        lead = get_lead_repository().create(lead_request)
    except PersistenceError as e:
        logger.error(
            "Failed to store contact",
            extra={"error": str(e), "code": e.code, "transports": e.attempted},
        )
        return jsonify({'message': 'Error creating contact', 'error': str(e)}), 500

    logger.info("Contact stored", extra={"lead_id": lead.id, "project_slug": lead.project_slug})
    return jsonify(lead.to_dict()), 201


@bp.route('', methods=['GET'])
def list_contacts():
    """Get all leads (administrative use)"""
    try:
        leads = get_lead_repository().list()
    except PersistenceError as e:
        logger.error("Failed to fetch contacts", extra={"error": str(e), "transports": e.attempted})
        return jsonify({'message': 'Error fetching contacts', 'error': str(e)}), 500

    return jsonify([lead.to_dict() for lead in leads]), 200
