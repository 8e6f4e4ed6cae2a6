from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, ContextManager, Optional

from django.db import transaction
from django.utils import timezone

from bookings.models import Booking
from catalog.models import Moodboard

from .exceptions import ConfirmationConflict
from .models import Payment


class PaymentRepository:
    """
    Narrow persistence interface used by order initiation and reconciliation.

    ``update_payment_status_if_pending`` is the only write that decides who
    wins a race between the checkout callback and the webhook: it is a single
    ``UPDATE ... WHERE status = 'pending'`` and reports whether a row changed.
    """

    def atomic(self) -> ContextManager:
        return transaction.atomic()

    def on_commit(self, callback: Callable[[], Any]) -> None:
        transaction.on_commit(callback)

    def get_booking(self, booking_id) -> Optional[Booking]:
        try:
            return (
                Booking.objects.select_related("client", "moodboard", "model")
                .filter(pk=booking_id)
                .first()
            )
        except (TypeError, ValueError):
            return None

    def get_payment_by_order_id(self, order_id: str) -> Optional[Payment]:
        return Payment.objects.select_related("booking").filter(razorpay_order_id=order_id).first()

    def create_pending_payment(
        self,
        *,
        booking: Booking,
        amount: Decimal,
        currency: str,
        order_id: str,
        payment_type: str = Payment.DEPOSIT,
    ) -> Payment:
        return Payment.objects.create(
            booking=booking,
            amount=amount,
            currency=currency,
            payment_type=payment_type,
            razorpay_order_id=order_id,
            status=Payment.PENDING,
        )

    def update_payment_status_if_pending(self, order_id: str, status: str, **fields) -> bool:
        updated = Payment.objects.filter(
            razorpay_order_id=order_id,
            status=Payment.PENDING,
        ).update(status=status, updated_at=timezone.now(), **fields)
        return updated == 1

    def update_booking_on_confirm(self, booking_id, *, amount_paid: Decimal) -> Booking:
        """
        Credit the deposit and claim the moodboard for this booking.

        Booking and moodboard rows are locked in that order, so two deposits
        for different bookings of one moodboard serialize on the moodboard and
        the later one raises ``ConfirmationConflict``.
        """
        booking = Booking.objects.select_for_update().get(pk=booking_id)
        if booking.status == Booking.CANCELLED:
            raise ConfirmationConflict(f"booking {booking.pk} was cancelled")

        moodboard = None
        if booking.moodboard_id is not None:
            moodboard = Moodboard.objects.select_for_update().get(pk=booking.moodboard_id)
            if moodboard.is_booked and not booking.deposit_paid:
                raise ConfirmationConflict(f"moodboard {moodboard.pk} is already booked")

        booking.deposit_paid = True
        booking.amount_paid = amount_paid
        if booking.status != Booking.COMPLETED:
            booking.status = Booking.CONFIRMED
        booking.save(update_fields=["deposit_paid", "amount_paid", "status", "updated_at"])
        if moodboard is not None and not moodboard.is_booked:
            moodboard.is_booked = True
            moodboard.save(update_fields=["is_booked", "updated_at"])
        return booking
