import hashlib
import hmac
from typing import Optional, Union

from django.conf import settings

Payload = Union[bytes, str]


def _to_bytes(value: Payload) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def compute_signature(payload: Payload, secret: str) -> str:
    return hmac.new(_to_bytes(secret), _to_bytes(payload), hashlib.sha256).hexdigest()


def verify_signature(payload: Payload, signature: Optional[str], secret: Optional[str]) -> bool:
    """
    Check a hex HMAC-SHA256 signature over the exact bytes the gateway signed.

    A missing signature or an unconfigured secret never verifies.
    """
    if not signature or not secret:
        return False
    expected = compute_signature(payload, secret)
    return hmac.compare_digest(expected, signature.strip().lower())


def checkout_payload(order_id: str, payment_id: str) -> str:
    return f"{order_id}|{payment_id}"


def verify_checkout_signature(order_id: str, payment_id: str, signature: Optional[str]) -> bool:
    """Signature handed to the browser by hosted checkout, keyed by the API secret."""
    return verify_signature(
        checkout_payload(order_id, payment_id),
        signature,
        settings.RAZORPAY_KEY_SECRET,
    )


def verify_webhook_signature(raw_body: Payload, signature: Optional[str]) -> bool:
    """Signature on the raw webhook body, keyed by the webhook secret."""
    return verify_signature(raw_body, signature, settings.RAZORPAY_WEBHOOK_SECRET)
