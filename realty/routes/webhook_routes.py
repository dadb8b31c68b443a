import json
import logging

from flask import Blueprint, current_app, jsonify, request

from realty.config import ConfigurationError
from realty.errors import SignatureError
from realty.extensions import limiter
from realty.services.lead_repository import get_lead_repository
from realty.webhooks.calendly import AppointmentReconciler
from realty.webhooks.security import SIGNATURE_HEADER, verify_calendly_signature

logger = logging.getLogger(__name__)

bp = Blueprint('webhooks', __name__, url_prefix='/api/webhooks')


@bp.route('/calendly', methods=['POST'])
@limiter.exempt
def calendly_webhook():
    """
    Receive a Calendly webhook.

    Answers 500 when no signing key is configured and 401 when the
    signature is missing or invalid. Every authenticated call gets a 200,
    whatever happens while reconciling it.
    """
    # Raw bytes: re-serialized JSON would not match the signature
    raw_body = request.get_data(cache=True)
    signature = request.headers.get(SIGNATURE_HEADER)

    try:
        valid = verify_calendly_signature(
            raw_body,
            signature,
            current_app.config.get("CALENDLY_WEBHOOK_SIGNING_KEY"),
            tolerance=current_app.config.get("CALENDLY_SIGNATURE_TOLERANCE") or None,
        )
    except ConfigurationError as e:
        logger.error("Calendly webhook received but signing key is not configured")
        return jsonify({'message': 'Webhook signing key not configured', 'error': str(e)}), 500

    if not signature:
        raise SignatureError("Missing webhook signature")
    if not valid:
        raise SignatureError("Invalid webhook signature")

    try:
        event = json.loads(raw_body)
    except ValueError:
        event = None

    result = AppointmentReconciler(get_lead_repository()).reconcile(event)
    return jsonify(result.to_dict()), 200
