from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from rest_framework import serializers

from bookings.models import Booking
from bookings.pricing import build_pricing, compute_total
from catalog.models import ModelProfile, Moodboard, MoodboardModel

logger = logging.getLogger(__name__)


def create_booking(
    *,
    client,
    moodboard: Moodboard,
    model: Optional[ModelProfile],
    booking_date: Optional[date] = None,
    product_count: int = 1,
    notes: str = "",
) -> Booking:
    """
    Record a client's selection of a moodboard and model, priced at creation.

    The deposit is derived from the total here and re-checked when the
    deposit order is opened.
    """
    if not moodboard.is_active:
        raise serializers.ValidationError({"moodboard": "This moodboard is not available."})
    if moodboard.is_booked:
        raise serializers.ValidationError({"moodboard": "This moodboard has already been booked."})

    if model is not None:
        if not model.is_active:
            raise serializers.ValidationError({"model": "This model is not available."})
        if not MoodboardModel.objects.filter(moodboard=moodboard, model=model).exists():
            raise serializers.ValidationError({"model": "This model is not part of the selected moodboard."})

    booking_date = booking_date or moodboard.date
    if booking_date is None:
        raise serializers.ValidationError({"booking_date": "A booking date is required for this moodboard."})

    pricing = build_pricing(compute_total(moodboard.booking_price, product_count))

    booking = Booking.objects.create(
        client=client,
        moodboard=moodboard,
        model=model,
        booking_date=booking_date,
        product_count=product_count,
        total_amount=pricing.total_amount,
        deposit_amount=pricing.deposit_amount,
        status=Booking.PENDING,
        notes=notes,
    )

    logger.info(
        "Booking %s created for moodboard %s (total %s, deposit %s).",
        booking.pk,
        moodboard.pk,
        pricing.total_amount,
        pricing.deposit_amount,
    )
    return booking


def cancel_booking(booking: Booking) -> Booking:
    if booking.deposit_paid:
        raise serializers.ValidationError("Paid bookings cannot be cancelled online. Please contact support.")
    if booking.status == Booking.CANCELLED:
        return booking
    booking.status = Booking.CANCELLED
    booking.save(update_fields=["status", "updated_at"])
    return booking
