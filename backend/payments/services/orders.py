from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import DatabaseError

from bookings.models import Booking
from bookings.pricing import deposit_matches

from .. import gateway
from ..exceptions import (
    AlreadyPaid,
    BookingNotFound,
    BookingUnavailable,
    NotBookingOwner,
    PaymentInconsistency,
    PersistenceError,
)
from ..models import Payment
from ..repository import PaymentRepository

logger = logging.getLogger(__name__)


@dataclass
class DepositOrder:
    order_id: str
    amount: Decimal
    currency: str
    booking_details: Dict[str, Any]
    customer_details: Dict[str, str]

    def as_response(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            "orderId": data["order_id"],
            "amount": data["amount"],
            "currency": data["currency"],
            "bookingDetails": data["booking_details"],
            "customerDetails": data["customer_details"],
        }


def build_receipt(booking: Booking) -> str:
    return f"booking_{booking.pk}"


def build_order_notes(booking: Booking) -> Dict[str, str]:
    return {
        "booking_id": str(booking.pk),
        "client_id": str(booking.client_id),
        "moodboard_title": booking.moodboard.title if booking.moodboard_id else "Unknown",
        "model_name": booking.model.name if booking.model_id else "Unknown",
    }


def _booking_details(booking: Booking) -> Dict[str, Any]:
    return {
        "id": booking.pk,
        "moodboardTitle": booking.moodboard.title if booking.moodboard_id else None,
        "modelName": booking.model.name if booking.model_id else None,
        "bookingDate": booking.booking_date.isoformat(),
        "productCount": booking.product_count,
        "totalAmount": booking.total_amount,
        "depositAmount": booking.deposit_amount,
    }


def _customer_details(booking: Booking) -> Dict[str, str]:
    client = booking.client
    return {
        "name": client.contact_name or "Customer",
        "email": client.email or "",
        "contact": client.phone_number or "",
    }


def create_deposit_order(
    booking_id,
    user,
    *,
    repository: Optional[PaymentRepository] = None,
) -> DepositOrder:
    """
    Open a gateway order for a booking's deposit and record it as a pending payment.

    Nothing is written locally until the gateway has accepted the order, so a
    ``GatewayError`` leaves no state behind and the caller may simply retry.
    """
    repository = repository or PaymentRepository()

    booking = repository.get_booking(booking_id)
    if booking is None:
        raise BookingNotFound()

    if booking.client_id != user.pk:
        logger.warning("User %s attempted to pay for booking %s owned by %s.", user.pk, booking.pk, booking.client_id)
        raise NotBookingOwner()

    if booking.deposit_paid:
        raise AlreadyPaid()

    if booking.status == Booking.CANCELLED or (booking.moodboard_id and booking.moodboard.is_booked):
        logger.info("Booking %s is cancelled or its moodboard is taken; refusing to open an order.", booking.pk)
        raise BookingUnavailable()

    if not deposit_matches(booking.total_amount, booking.deposit_amount):
        logger.error(
            "Booking %s deposit %s disagrees with total %s; refusing to open an order.",
            booking.pk,
            booking.deposit_amount,
            booking.total_amount,
        )
        raise PersistenceError("Booking pricing is inconsistent. Please contact support.")

    currency = settings.PAYMENT_CURRENCY
    order = gateway.create_order(
        amount_minor_units=gateway.to_minor_units(booking.deposit_amount),
        currency=currency,
        receipt=build_receipt(booking),
        notes=build_order_notes(booking),
    )

    try:
        repository.create_pending_payment(
            booking=booking,
            amount=booking.deposit_amount,
            currency=currency,
            order_id=order.id,
            payment_type=Payment.DEPOSIT,
        )
    except DatabaseError as exc:
        logger.error(
            "Reconciliation needed: gateway order %s for booking %s has no local payment record: %s",
            order.id,
            booking.pk,
            exc,
        )
        raise PaymentInconsistency() from exc

    logger.info("Opened deposit order %s for booking %s (%s %s).", order.id, booking.pk, booking.deposit_amount, currency)

    return DepositOrder(
        order_id=order.id,
        amount=booking.deposit_amount,
        currency=currency,
        booking_details=_booking_details(booking),
        customer_details=_customer_details(booking),
    )
