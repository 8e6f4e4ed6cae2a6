from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from django.conf import settings
from django.db import IntegrityError
from django.utils import timezone as django_timezone

from ..exceptions import (
    BookingNotFound,
    ConfirmationConflict,
    InvalidSignature,
    NotBookingOwner,
    PaymentNotFound,
)
from ..gateway import to_minor_units
from ..models import Payment
from ..repository import PaymentRepository
from ..signatures import verify_checkout_signature

logger = logging.getLogger(__name__)


class ReconcileOutcome(str, enum.Enum):
    APPLIED = "applied"
    DUPLICATE = "duplicate"
    UNKNOWN_ORDER = "unknown_order"
    CONFLICT = "conflict"
    IGNORED = "ignored"


@dataclass
class ReconcileResult:
    outcome: ReconcileOutcome
    payment: Optional[Payment] = None
    booking_status: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.outcome == ReconcileOutcome.APPLIED


def _default_notifier(booking_id) -> None:
    from notifications.services import notify_booking_confirmed_by_id

    notify_booking_confirmed_by_id(booking_id)


class PaymentReconciler:
    """
    Apply gateway payment events to local Payment and Booking rows exactly once.

    The checkout callback and the webhook both land here. Whichever caller's
    conditional update flips the payment out of ``pending`` performs the
    booking credit; every other caller sees a duplicate and changes nothing.
    """

    def __init__(
        self,
        repository: Optional[PaymentRepository] = None,
        notifier: Optional[Callable[[Any], None]] = None,
    ):
        self.repository = repository or PaymentRepository()
        self.notifier = notifier or _default_notifier

    def apply_success(
        self,
        order_id: str,
        *,
        payment_id: Optional[str] = None,
        paid_at: Optional[datetime] = None,
        signature: Optional[str] = None,
        method: Optional[str] = None,
        amount_minor_units: Optional[int] = None,
    ) -> ReconcileResult:
        payment = self.repository.get_payment_by_order_id(order_id)
        if payment is None:
            logger.warning("No payment record for order %s; nothing to confirm.", order_id)
            return ReconcileResult(ReconcileOutcome.UNKNOWN_ORDER)

        if payment.status == Payment.FAILED:
            return self._captured_after_failure(payment)
        if payment.status != Payment.PENDING:
            return self._duplicate(payment)

        if not payment_id:
            logger.warning("Success event for order %s carries no gateway payment id; waiting for payment.captured.", order_id)
            return ReconcileResult(ReconcileOutcome.IGNORED, payment=payment, booking_status=payment.booking.status)

        # paise comparison only; the stored amount stays in rupees
        expected_minor_units = to_minor_units(payment.amount)
        if amount_minor_units is not None and int(amount_minor_units) != expected_minor_units:
            logger.error(
                "Reconciliation needed: order %s captured %s minor units but payment %s expects %s.",
                order_id,
                amount_minor_units,
                payment.pk,
                expected_minor_units,
            )
            return ReconcileResult(ReconcileOutcome.CONFLICT, payment=payment, booking_status=payment.booking.status)

        fields: Dict[str, Any] = {
            "payment_date": paid_at or django_timezone.now(),
            "razorpay_payment_id": payment_id,
            "transaction_id": payment_id,
        }
        if signature:
            fields["razorpay_signature"] = signature
        if method:
            fields["payment_method"] = method

        try:
            with self.repository.atomic():
                won = self.repository.update_payment_status_if_pending(order_id, Payment.COMPLETED, **fields)
                if not won:
                    current = self.repository.get_payment_by_order_id(order_id) or payment
                    if current.status == Payment.FAILED:
                        return self._captured_after_failure(current)
                    return self._duplicate(current)
                booking = self.repository.update_booking_on_confirm(payment.booking_id, amount_paid=payment.amount)
                self.repository.on_commit(lambda: self._notify(booking.pk))
        except IntegrityError:
            return self._refund_required(payment, "it already has a completed deposit")
        except ConfirmationConflict as exc:
            return self._refund_required(payment, str(exc))

        logger.info("Payment for order %s completed; booking %s confirmed.", order_id, booking.pk)
        payment = self.repository.get_payment_by_order_id(order_id) or payment
        return ReconcileResult(ReconcileOutcome.APPLIED, payment=payment, booking_status=booking.status)

    def apply_failure(self, order_id: str, *, payment_id: Optional[str] = None) -> ReconcileResult:
        payment = self.repository.get_payment_by_order_id(order_id)
        if payment is None:
            logger.warning("No payment record for failed order %s.", order_id)
            return ReconcileResult(ReconcileOutcome.UNKNOWN_ORDER)

        if payment.status != Payment.PENDING:
            return self._duplicate(payment)

        fields: Dict[str, Any] = {}
        if payment_id:
            fields["razorpay_payment_id"] = payment_id
            fields["transaction_id"] = payment_id

        if not self.repository.update_payment_status_if_pending(order_id, Payment.FAILED, **fields):
            current = self.repository.get_payment_by_order_id(order_id)
            return self._duplicate(current or payment)

        logger.info("Payment for order %s failed; booking %s left open for retry.", order_id, payment.booking_id)
        payment = self.repository.get_payment_by_order_id(order_id) or payment
        return ReconcileResult(ReconcileOutcome.APPLIED, payment=payment, booking_status=payment.booking.status)

    def recover_orphaned_order(self, order_id: str, entity: Dict[str, Any]) -> Optional[Payment]:
        """
        Rebuild the pending payment row for a gateway order whose local insert
        never happened, using the booking id carried in the order notes.
        """
        notes = entity.get("notes") or {}
        booking_id = notes.get("booking_id") if isinstance(notes, dict) else None
        if not booking_id:
            return None
        booking = self.repository.get_booking(booking_id)
        if booking is None or booking.deposit_paid:
            return None

        amount_minor_units = entity.get("amount")
        # paise comparison only; the deposit stays in rupees
        expected_minor_units = to_minor_units(booking.deposit_amount)
        if amount_minor_units is not None and int(amount_minor_units) != expected_minor_units:
            logger.error(
                "Orphaned order %s amount %s does not match booking %s deposit of %s minor units; not recovering.",
                order_id,
                amount_minor_units,
                booking.pk,
                expected_minor_units,
            )
            return None

        try:
            with self.repository.atomic():
                payment = self.repository.create_pending_payment(
                    booking=booking,
                    amount=booking.deposit_amount,
                    currency=entity.get("currency") or settings.PAYMENT_CURRENCY,
                    order_id=order_id,
                )
        except IntegrityError:
            return self.repository.get_payment_by_order_id(order_id)
        logger.warning("Recovered orphaned order %s for booking %s from gateway metadata.", order_id, booking.pk)
        return payment

    def _duplicate(self, payment: Payment) -> ReconcileResult:
        logger.info("Order %s already %s; ignoring duplicate event.", payment.razorpay_order_id, payment.status)
        return ReconcileResult(
            ReconcileOutcome.DUPLICATE,
            payment=payment,
            booking_status=payment.booking.status,
        )

    def _captured_after_failure(self, payment: Payment) -> ReconcileResult:
        logger.error(
            "Reconciliation needed: order %s was captured after its payment %s was marked failed; "
            "refund or manual confirm required for booking %s.",
            payment.razorpay_order_id,
            payment.pk,
            payment.booking_id,
        )
        return ReconcileResult(ReconcileOutcome.CONFLICT, payment=payment, booking_status=payment.booking.status)

    def _refund_required(self, payment: Payment, reason: str) -> ReconcileResult:
        logger.error(
            "Reconciliation needed: order %s captured for booking %s but %s; refund required.",
            payment.razorpay_order_id,
            payment.booking_id,
            reason,
        )
        return ReconcileResult(ReconcileOutcome.CONFLICT, payment=payment)

    def _notify(self, booking_id) -> None:
        try:
            self.notifier(booking_id)
        except Exception:
            logger.exception("Booking %s confirmed but notification dispatch failed.", booking_id)


def confirm_checkout(
    *,
    order_id: str,
    payment_id: str,
    signature: str,
    booking_id,
    user,
    reconciler: Optional[PaymentReconciler] = None,
) -> ReconcileResult:
    """Synchronous confirmation triggered by the browser after hosted checkout."""
    if not verify_checkout_signature(order_id, payment_id, signature):
        logger.warning("Rejected checkout confirmation for order %s: bad signature.", order_id)
        raise InvalidSignature()

    reconciler = reconciler or PaymentReconciler()
    booking = reconciler.repository.get_booking(booking_id)
    if booking is None:
        raise BookingNotFound()
    if booking.client_id != user.pk:
        raise NotBookingOwner()

    payment = reconciler.repository.get_payment_by_order_id(order_id)
    if payment is None or payment.booking_id != booking.pk:
        raise PaymentNotFound()

    return reconciler.apply_success(order_id, payment_id=payment_id, signature=signature)


def _entity(event: Dict[str, Any], name: str) -> Dict[str, Any]:
    payload = event.get("payload") or {}
    wrapper = payload.get(name) or {}
    # gateway payloads nest the object under "entity"; accept it unwrapped too
    entity = wrapper.get("entity", wrapper)
    return entity if isinstance(entity, dict) else {}


def _epoch_to_datetime(value: Any) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def handle_webhook_event(event: Dict[str, Any], *, reconciler: Optional[PaymentReconciler] = None) -> ReconcileResult:
    """Dispatch an already signature-verified webhook event."""
    reconciler = reconciler or PaymentReconciler()
    event_type = event.get("event")

    if event_type == "payment.captured":
        payment = _entity(event, "payment")
        order_id = payment.get("order_id")
        if not order_id:
            logger.warning("payment.captured event without an order id: %s", payment.get("id"))
            return ReconcileResult(ReconcileOutcome.IGNORED)
        if reconciler.repository.get_payment_by_order_id(order_id) is None:
            reconciler.recover_orphaned_order(order_id, payment)
        return reconciler.apply_success(
            order_id,
            payment_id=payment.get("id"),
            paid_at=_epoch_to_datetime(payment.get("created_at")),
            method=payment.get("method"),
            amount_minor_units=payment.get("amount"),
        )

    if event_type == "payment.failed":
        payment = _entity(event, "payment")
        order_id = payment.get("order_id")
        if not order_id:
            return ReconcileResult(ReconcileOutcome.IGNORED)
        return reconciler.apply_failure(order_id, payment_id=payment.get("id"))

    if event_type == "order.paid":
        order = _entity(event, "order")
        payment = _entity(event, "payment")
        order_id = order.get("id") or payment.get("order_id")
        if not order_id:
            return ReconcileResult(ReconcileOutcome.IGNORED)
        # without a payment entity this can only acknowledge an order already completed
        return reconciler.apply_success(
            order_id,
            payment_id=payment.get("id"),
            paid_at=_epoch_to_datetime(payment.get("created_at")),
            method=payment.get("method"),
            amount_minor_units=order.get("amount_paid"),
        )

    logger.info("Unhandled gateway event type: %s", event_type)
    return ReconcileResult(ReconcileOutcome.IGNORED)
