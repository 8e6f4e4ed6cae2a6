from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional
from uuid import uuid4

from django.conf import settings

from .exceptions import GatewayError

logger = logging.getLogger(__name__)

MINOR_UNITS_PER_MAJOR = 100


@dataclass
class GatewayOrder:
    """
    The subset of a Razorpay order the booking flow consumes.

    Stub mode returns the same shape with ``order_test_`` identifiers so local
    development and tests never reach the network.
    """

    id: str
    amount: int
    currency: str
    receipt: str
    status: str = "created"
    notes: Dict[str, Any] = field(default_factory=dict)


def to_minor_units(amount: Decimal) -> int:
    """Rupees to paise. Call exactly once, when handing an amount to the gateway."""
    return int((Decimal(amount) * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(int(amount)) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"))


def _get_key_pair() -> Optional[tuple[str, str]]:
    key_id = getattr(settings, "RAZORPAY_KEY_ID", "")
    key_secret = getattr(settings, "RAZORPAY_KEY_SECRET", "")
    if not key_id or not key_secret:
        return None
    return key_id, key_secret


def should_use_stub() -> bool:
    if getattr(settings, "RAZORPAY_USE_STUB", False):
        return True
    return _get_key_pair() is None


def _stub_order(*, amount_minor_units: int, currency: str, receipt: str, notes: Dict[str, Any]) -> GatewayOrder:
    return GatewayOrder(
        id=f"order_test_{uuid4().hex[:14]}",
        amount=amount_minor_units,
        currency=currency,
        receipt=receipt,
        notes=dict(notes),
    )


def get_razorpay_client():
    import razorpay

    key_pair = _get_key_pair()
    if key_pair is None:
        raise GatewayError("Razorpay credentials are not configured.")
    return razorpay.Client(auth=key_pair)


def create_order(
    *,
    amount_minor_units: int,
    currency: str,
    receipt: str,
    notes: Optional[Dict[str, Any]] = None,
) -> GatewayOrder:
    """
    Create a hosted-checkout order at the gateway.

    Raises ``GatewayError`` for any network, credential or validation failure;
    nothing is persisted locally before this call returns.
    """
    notes = {key: str(value) for key, value in (notes or {}).items()}

    if should_use_stub():
        return _stub_order(
            amount_minor_units=amount_minor_units,
            currency=currency,
            receipt=receipt,
            notes=notes,
        )

    client = get_razorpay_client()
    try:
        response = client.order.create(
            data={
                "amount": amount_minor_units,
                "currency": currency,
                "receipt": receipt,
                "notes": notes,
            }
        )
    except Exception as exc:
        logger.warning("Razorpay order creation failed for receipt %s: %s", receipt, exc)
        raise GatewayError() from exc

    order_id = response.get("id") if isinstance(response, dict) else None
    if not order_id:
        logger.warning("Razorpay returned an order without an id for receipt %s: %r", receipt, response)
        raise GatewayError()

    return GatewayOrder(
        id=order_id,
        amount=int(response.get("amount", amount_minor_units)),
        currency=response.get("currency", currency),
        receipt=response.get("receipt", receipt),
        status=response.get("status", "created"),
        notes=response.get("notes") or notes,
    )
