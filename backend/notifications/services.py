from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.core.mail import send_mail
from django.db import DatabaseError

from bookings.models import Booking

from .models import Notification

logger = logging.getLogger(__name__)

PAYMENT_SUCCESS_TITLE = "Payment Successful"
PAYMENT_SUCCESS_MESSAGE = (
    "Your booking deposit has been paid successfully. We will contact you within 24 hours."
)


def _format_from_email(brand: str) -> str:
    default_from = settings.DEFAULT_FROM_EMAIL
    email_addr = default_from
    if '<' in default_from and default_from.endswith('>'):
        email_addr = default_from.split('<', 1)[1].rstrip('>')
    return f"{brand} <{email_addr}>"


def _format_amount(amount) -> str:
    return f"₹{amount:,.2f}"


def create_payment_notification(booking: Booking) -> Optional[Notification]:
    try:
        return Notification.objects.create(
            user_id=booking.client_id,
            title=PAYMENT_SUCCESS_TITLE,
            message=PAYMENT_SUCCESS_MESSAGE,
            type=Notification.TYPE_PAYMENT,
            related_entity_type="booking",
            related_entity_id=str(booking.pk),
        )
    except DatabaseError:
        logger.exception("Could not record payment notification for booking %s.", booking.pk)
        return None


def send_booking_confirmed_email(booking: Booking, recipient: str) -> bool:
    client = booking.client
    moodboard_title = booking.moodboard.title if booking.moodboard_id else "N/A"
    model_name = booking.model.name if booking.model_id else "N/A"

    body_lines = [
        f"Hi {client.contact_name or 'there'},",
        "",
        "Your booking is confirmed. Here are your details:",
        f" • Moodboard: {moodboard_title}",
        f" • Model: {model_name}",
        f" • Booking date: {booking.booking_date:%B %d, %Y}",
        f" • Product count: {booking.product_count}",
        f" • Total amount: {_format_amount(booking.total_amount)}",
        f" • Deposit paid: {_format_amount(booking.deposit_amount)}",
        "",
        "We look forward to seeing you at Space Called Blu!",
    ]
    try:
        send_mail(
            "Your Space Called Blu Booking is Confirmed!",
            "\n".join(body_lines),
            _format_from_email("Space Called Blu"),
            [recipient],
            fail_silently=False,
        )
    except Exception:
        logger.exception("Confirmation email for booking %s could not be sent.", booking.pk)
        return False
    return True


def notify_booking_confirmed(booking: Booking, client_contact: Optional[str] = None) -> None:
    """
    Tell the client their deposit landed. Both channels are best effort: the
    booking is already committed, so failures are logged and never raised.
    """
    create_payment_notification(booking)

    recipient = client_contact or booking.client.email
    if recipient:
        send_booking_confirmed_email(booking, recipient)
    else:
        logger.info("Booking %s client has no email on file; skipping confirmation email.", booking.pk)


def notify_booking_confirmed_by_id(booking_id) -> None:
    booking = (
        Booking.objects.select_related("client", "moodboard", "model")
        .filter(pk=booking_id)
        .first()
    )
    if booking is None:
        logger.warning("Cannot notify for missing booking %s.", booking_id)
        return
    notify_booking_confirmed(booking)
