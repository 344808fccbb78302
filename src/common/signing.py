"""HMAC signatures for payment gateway callbacks.

The gateway reports payment outcomes (and the pending checkout it opened) by
calling back into the API. Each callback carries a hex HMAC-SHA256 over the
pipe-joined fields, keyed by ``settings.PAYMENT_GATEWAY_SECRET``::

    signature = hmac_sha256(secret, "order_123|pay_456|succeeded")

Security:
    - The key is the shared gateway secret, never Django's SECRET_KEY.
    - Uses hmac.compare_digest() to prevent timing attacks.
    - Replays cannot regress state: a repeated outcome is rejected as already finalized.
"""

import hashlib
import hmac

from django.conf import settings

__all__ = [
    "generate_signature",
    "verify_signature",
]

_SEPARATOR = "|"


def _get_signing_key() -> bytes:
    return str(settings.PAYMENT_GATEWAY_SECRET).encode()


def generate_signature(*fields: str) -> str:
    """Generate the hex signature for the given callback fields.

    Args:
        *fields: The callback fields in wire order, e.g. order id, payment id, outcome.

    Returns:
        Hex-encoded HMAC-SHA256 signature.
    """
    message = _SEPARATOR.join(fields)
    return hmac.new(_get_signing_key(), message.encode(), hashlib.sha256).hexdigest()


def verify_signature(signature: str | None, *fields: str) -> bool:
    """Verify a callback signature.

    Args:
        signature: The signature sent by the gateway.
        *fields: The callback fields in wire order.

    Returns:
        True if the signature matches, False otherwise.
    """
    if not signature:
        return False
    expected = generate_signature(*fields)
    return hmac.compare_digest(signature, expected)
