from datetime import date
from decimal import Decimal

import pytest
from django.db import DatabaseError
from django.urls import reverse
from rest_framework.test import APIClient

from accounts.models import User
from bookings.models import Booking
from catalog.models import ModelProfile, Moodboard
from payments import gateway
from payments.exceptions import GatewayError, PaymentInconsistency
from payments.models import Payment
from payments.repository import PaymentRepository
from payments.services.orders import create_deposit_order


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        username="owner@example.com",
        email="owner@example.com",
        password="password123",
        first_name="Asha",
        last_name="Rao",
        phone_number="+919811111111",
    )


@pytest.fixture
def stranger(db):
    return User.objects.create_user(
        username="stranger@example.com",
        email="stranger@example.com",
        password="password123",
    )


@pytest.fixture
def booking(owner):
    moodboard = Moodboard.objects.create(title="Whispers of Spring", date=date(2026, 11, 14))
    model = ModelProfile.objects.create(name="Meera")
    return Booking.objects.create(
        client=owner,
        moodboard=moodboard,
        model=model,
        booking_date=moodboard.date,
        product_count=11,
        total_amount=Decimal("550000.00"),
        deposit_amount=Decimal("55000.00"),
    )


@pytest.fixture
def auth_client(owner):
    client = APIClient()
    client.force_authenticate(owner)
    return client


@pytest.mark.django_db
def test_create_order_records_pending_deposit(settings, auth_client, booking):
    settings.RAZORPAY_USE_STUB = True

    response = auth_client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")

    assert response.status_code == 200
    assert response.data["orderId"].startswith("order_test_")
    assert response.data["amount"] == Decimal("55000.00")
    assert response.data["currency"] == "INR"
    assert response.data["bookingDetails"]["moodboardTitle"] == "Whispers of Spring"
    assert response.data["customerDetails"] == {
        "name": "Asha Rao",
        "email": "owner@example.com",
        "contact": "+919811111111",
    }

    payment = Payment.objects.get(razorpay_order_id=response.data["orderId"])
    assert payment.booking == booking
    assert payment.status == Payment.PENDING
    assert payment.payment_type == Payment.DEPOSIT
    assert payment.amount == Decimal("55000.00")


@pytest.mark.django_db
def test_gateway_receives_deposit_in_minor_units(settings, monkeypatch, owner, booking):
    settings.RAZORPAY_USE_STUB = True
    captured = {}
    original = gateway.create_order

    def spy(**kwargs):
        captured.update(kwargs)
        return original(**kwargs)

    monkeypatch.setattr(gateway, "create_order", spy)

    create_deposit_order(booking.id, owner)

    assert captured["amount_minor_units"] == 5500000
    assert captured["receipt"] == f"booking_{booking.id}"
    assert captured["notes"]["booking_id"] == str(booking.id)


@pytest.mark.django_db
def test_missing_booking_id_is_rejected(auth_client):
    response = auth_client.post(reverse("payment-create-order"), {}, format="json")
    assert response.status_code == 400


@pytest.mark.django_db
def test_create_order_requires_authentication(booking):
    response = APIClient().post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")
    assert response.status_code == 401


@pytest.mark.django_db
def test_unknown_booking_is_not_found(auth_client):
    response = auth_client.post(reverse("payment-create-order"), {"bookingId": 999999}, format="json")
    assert response.status_code == 404
    assert Payment.objects.count() == 0


@pytest.mark.django_db
def test_other_users_booking_is_forbidden(stranger, booking):
    client = APIClient()
    client.force_authenticate(stranger)

    response = client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")

    assert response.status_code == 403
    assert Payment.objects.count() == 0


@pytest.mark.django_db
def test_paid_booking_is_refused(auth_client, booking):
    booking.status = Booking.CONFIRMED
    booking.deposit_paid = True
    booking.amount_paid = booking.deposit_amount
    booking.save()

    response = auth_client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")

    assert response.status_code == 400
    assert response.data["detail"] == "Booking already paid."
    assert Payment.objects.count() == 0


@pytest.mark.django_db
def test_gateway_failure_leaves_no_payment(monkeypatch, owner, booking):
    def fail(**kwargs):
        raise GatewayError()

    monkeypatch.setattr(gateway, "create_order", fail)

    with pytest.raises(GatewayError):
        create_deposit_order(booking.id, owner)

    assert Payment.objects.count() == 0


@pytest.mark.django_db
def test_gateway_failure_is_a_server_error(monkeypatch, auth_client, booking):
    def fail(**kwargs):
        raise GatewayError()

    monkeypatch.setattr(gateway, "create_order", fail)

    response = auth_client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")

    assert response.status_code == 500
    assert response.data["detail"] == "Failed to create payment order. Please try again."


class FailingInsertRepository(PaymentRepository):
    def create_pending_payment(self, **kwargs):
        raise DatabaseError("disk full")


@pytest.mark.django_db
def test_failed_insert_after_gateway_order_is_flagged(caplog, owner, booking):
    with pytest.raises(PaymentInconsistency):
        create_deposit_order(booking.id, owner, repository=FailingInsertRepository())

    assert "Reconciliation needed" in caplog.text
    assert Payment.objects.count() == 0


@pytest.mark.django_db
def test_inconsistent_booking_pricing_is_refused(auth_client, booking):
    Booking.objects.filter(pk=booking.pk).update(deposit_amount=Decimal("5500.00"))

    response = auth_client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")

    assert response.status_code == 500
    assert Payment.objects.count() == 0


@pytest.mark.django_db
def test_retry_opens_a_fresh_order(auth_client, booking):
    first = auth_client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")
    second = auth_client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")

    assert first.status_code == second.status_code == 200
    assert first.data["orderId"] != second.data["orderId"]
    assert Payment.objects.filter(booking=booking, status=Payment.PENDING).count() == 2


@pytest.mark.django_db
def test_cancelled_booking_cannot_be_paid(auth_client, booking):
    Booking.objects.filter(pk=booking.pk).update(status=Booking.CANCELLED)

    response = auth_client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")

    assert response.status_code == 400
    assert Payment.objects.count() == 0


@pytest.mark.django_db
def test_booking_on_taken_moodboard_cannot_be_paid(auth_client, booking):
    Moodboard.objects.filter(pk=booking.moodboard_id).update(is_booked=True)

    response = auth_client.post(reverse("payment-create-order"), {"bookingId": booking.id}, format="json")

    assert response.status_code == 400
    assert response.data["detail"] == "This booking can no longer be paid for."
    assert Payment.objects.count() == 0
