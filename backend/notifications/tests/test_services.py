from datetime import date
from decimal import Decimal

import pytest
from django.core import mail
from django.db import DatabaseError
from django.urls import reverse
from rest_framework.test import APIClient

from accounts.models import User
from bookings.models import Booking
from catalog.models import ModelProfile, Moodboard
from notifications import services
from notifications.models import Notification


@pytest.fixture
def client_user(db):
    return User.objects.create_user(
        username="asha@example.com",
        email="asha@example.com",
        password="password123",
        first_name="Asha",
    )


@pytest.fixture
def booking(client_user):
    return Booking.objects.create(
        client=client_user,
        moodboard=Moodboard.objects.create(title="Whispers of Spring", date=date(2026, 11, 14)),
        model=ModelProfile.objects.create(name="Meera"),
        booking_date=date(2026, 11, 14),
        product_count=11,
        total_amount=Decimal("550000.00"),
        deposit_amount=Decimal("55000.00"),
        status=Booking.CONFIRMED,
        deposit_paid=True,
        amount_paid=Decimal("55000.00"),
    )


@pytest.mark.django_db
def test_confirmation_records_notification_and_sends_email(booking):
    services.notify_booking_confirmed(booking)

    notification = Notification.objects.get(user=booking.client)
    assert notification.title == "Payment Successful"
    assert notification.type == Notification.TYPE_PAYMENT
    assert notification.related_entity_id == str(booking.id)

    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.subject == "Your Space Called Blu Booking is Confirmed!"
    assert message.to == ["asha@example.com"]
    assert "Whispers of Spring" in message.body
    assert "Meera" in message.body
    assert "₹55,000.00" in message.body
    assert message.from_email.startswith("Space Called Blu <")


@pytest.mark.django_db
def test_explicit_contact_overrides_account_email(booking):
    services.notify_booking_confirmed(booking, client_contact="studio@example.com")

    assert mail.outbox[0].to == ["studio@example.com"]


@pytest.mark.django_db
def test_email_failure_is_swallowed(monkeypatch, booking):
    def broken_send_mail(*args, **kwargs):
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr(services, "send_mail", broken_send_mail)

    services.notify_booking_confirmed(booking)

    assert Notification.objects.filter(user=booking.client).count() == 1
    assert mail.outbox == []


@pytest.mark.django_db
def test_notification_write_failure_still_sends_email(monkeypatch, booking):
    def broken_create(**kwargs):
        raise DatabaseError("table locked")

    monkeypatch.setattr(Notification.objects, "create", broken_create)

    services.notify_booking_confirmed(booking)

    assert len(mail.outbox) == 1


@pytest.mark.django_db
def test_client_without_email_gets_only_in_app_notice(booking):
    User.objects.filter(pk=booking.client_id).update(email="")
    booking.client.refresh_from_db()

    services.notify_booking_confirmed(booking)

    assert Notification.objects.filter(user=booking.client).count() == 1
    assert mail.outbox == []


@pytest.mark.django_db
def test_notify_by_id_ignores_missing_booking():
    services.notify_booking_confirmed_by_id(987654)
    assert Notification.objects.count() == 0


@pytest.mark.django_db
def test_user_lists_and_reads_own_notifications(booking, client_user):
    services.create_payment_notification(booking)
    other = User.objects.create_user(username="o@example.com", email="o@example.com", password="x")
    Notification.objects.create(user=other, title="Other", message="Not yours")
    api = APIClient()
    api.force_authenticate(client_user)

    listing = api.get(reverse("notification-list"), {"unread": "1"})
    assert [item["title"] for item in listing.data] == ["Payment Successful"]

    read = api.post(reverse("notification-mark-read", args=[listing.data[0]["id"]]))
    assert read.status_code == 200
    assert read.data["is_read"] is True
    assert api.get(reverse("notification-list"), {"unread": "1"}).data == []
