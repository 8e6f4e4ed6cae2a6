from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from accounts.models import User
from bookings.models import Booking
from catalog.models import Moodboard
from notifications.models import Notification
from payments.models import Payment
from payments.signatures import checkout_payload, compute_signature


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        username="owner@example.com",
        email="owner@example.com",
        password="password123",
    )


@pytest.fixture
def booking(owner):
    moodboard = Moodboard.objects.create(title="Golden Hour", date=date(2026, 12, 1))
    return Booking.objects.create(
        client=owner,
        moodboard=moodboard,
        booking_date=moodboard.date,
        total_amount=Decimal("50000.00"),
        deposit_amount=Decimal("5000.00"),
    )


@pytest.fixture
def payment(booking):
    return Payment.objects.create(
        booking=booking,
        amount=Decimal("5000.00"),
        currency="INR",
        razorpay_order_id="order_Checkout1",
    )


@pytest.fixture
def auth_client(owner):
    client = APIClient()
    client.force_authenticate(owner)
    return client


def _payload(booking, *, order_id="order_Checkout1", payment_id="pay_Checkout1", secret="rzp_test_secret"):
    return {
        "razorpay_order_id": order_id,
        "razorpay_payment_id": payment_id,
        "razorpay_signature": compute_signature(checkout_payload(order_id, payment_id), secret),
        "bookingId": booking.id,
    }


@pytest.mark.django_db
def test_verify_confirms_booking(django_capture_on_commit_callbacks, auth_client, payment, booking):
    with django_capture_on_commit_callbacks(execute=True):
        response = auth_client.post(reverse("payment-verify"), _payload(booking), format="json")

    assert response.status_code == 200
    assert response.data == {
        "success": True,
        "message": "Payment verified successfully",
        "bookingStatus": "confirmed",
    }
    payment.refresh_from_db()
    assert payment.status == Payment.COMPLETED
    assert payment.razorpay_payment_id == "pay_Checkout1"
    assert payment.razorpay_signature
    assert Notification.objects.filter(user=booking.client).count() == 1


@pytest.mark.django_db
def test_verify_is_idempotent(auth_client, payment, booking):
    first = auth_client.post(reverse("payment-verify"), _payload(booking), format="json")
    second = auth_client.post(reverse("payment-verify"), _payload(booking), format="json")

    assert first.status_code == second.status_code == 200
    assert second.data["bookingStatus"] == "confirmed"
    booking.refresh_from_db()
    assert booking.amount_paid == Decimal("5000.00")


@pytest.mark.django_db
def test_verify_rejects_bad_signature(auth_client, payment, booking):
    response = auth_client.post(
        reverse("payment-verify"),
        _payload(booking, secret="whsec_test_secret"),
        format="json",
    )

    assert response.status_code == 400
    payment.refresh_from_db()
    booking.refresh_from_db()
    assert payment.status == Payment.PENDING
    assert booking.deposit_paid is False


@pytest.mark.django_db
def test_verify_requires_all_parameters(auth_client, booking):
    response = auth_client.post(
        reverse("payment-verify"),
        {"razorpay_order_id": "order_Checkout1", "bookingId": booking.id},
        format="json",
    )

    assert response.status_code == 400
    assert response.data["detail"] == "Missing required payment parameters"


@pytest.mark.django_db
def test_verify_for_someone_elses_booking_is_forbidden(payment, booking):
    stranger = User.objects.create_user(username="s@example.com", email="s@example.com", password="x")
    client = APIClient()
    client.force_authenticate(stranger)

    response = client.post(reverse("payment-verify"), _payload(booking), format="json")

    assert response.status_code == 403
    payment.refresh_from_db()
    assert payment.status == Payment.PENDING


@pytest.mark.django_db
def test_verify_after_failure_reports_failure(auth_client, payment, booking):
    Payment.objects.filter(pk=payment.pk).update(status=Payment.FAILED)

    response = auth_client.post(reverse("payment-verify"), _payload(booking), format="json")

    assert response.status_code == 400
    assert response.data["detail"] == "Payment verification failed"


@pytest.mark.django_db
def test_verify_unknown_order(auth_client, payment, booking):
    response = auth_client.post(
        reverse("payment-verify"),
        _payload(booking, order_id="order_Other"),
        format="json",
    )

    assert response.status_code == 404
