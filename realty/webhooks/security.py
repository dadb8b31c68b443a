import hashlib
import hmac
import re
import time

from realty.config import ConfigurationError

SIGNATURE_HEADER = "Calendly-Webhook-Signature"

_HEX_DIGEST = re.compile(r"[0-9a-f]{64}")


def parse_signature_header(header):
    """
    Split a `t=<timestamp>,s=<hex digest>` header.

    Returns (timestamp, digest) or None when the header is malformed.
    """
    if not header or not isinstance(header, str):
        return None

    parts = header.split(",")
    if len(parts) != 2:
        return None

    values = {}
    for part in parts:
        key, sep, value = part.strip().partition("=")
        if not sep or not value:
            return None
        values[key] = value

    if "t" not in values or "s" not in values:
        return None

    return values["t"], values["s"]


def compute_signature(timestamp, payload, signing_key):
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8")
    signed_payload = f"{timestamp}.{payload}".encode("utf-8")
    return hmac.new(signing_key.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()


def verify_calendly_signature(payload, header, signing_key, tolerance=None, now=None):
    """
    Check a Calendly webhook signature against the raw request body.

    `payload` must be the body exactly as received. Returns False for any
    invalid or malformed signature; raises ConfigurationError only when no
    signing key is configured.
    """
    if not signing_key:
        raise ConfigurationError("CALENDLY_WEBHOOK_SIGNING_KEY is not set")

    parsed = parse_signature_header(header)
    if parsed is None:
        return False
    timestamp, digest = parsed

    # compare_digest only accepts ASCII str
    if not _HEX_DIGEST.fullmatch(digest):
        return False

    if tolerance:
        try:
            age = abs(int(now if now is not None else time.time()) - int(timestamp))
        except ValueError:
            return False
        if age > tolerance:
            return False

    try:
        expected = compute_signature(timestamp, payload, signing_key)
    except UnicodeDecodeError:
        return False

    return hmac.compare_digest(expected, digest)
