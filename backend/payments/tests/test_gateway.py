from decimal import Decimal
from types import SimpleNamespace

import pytest

from payments import gateway
from payments.exceptions import GatewayError


def test_minor_unit_conversion():
    assert gateway.to_minor_units(Decimal("55000.00")) == 5500000
    assert gateway.to_minor_units(Decimal("10.005")) == 1001
    assert gateway.from_minor_units(5500000) == Decimal("55000.00")


def test_stub_order_when_configured(settings):
    settings.RAZORPAY_USE_STUB = True

    order = gateway.create_order(
        amount_minor_units=5500000,
        currency="INR",
        receipt="booking_7",
        notes={"booking_id": 7},
    )

    assert order.id.startswith("order_test_")
    assert order.amount == 5500000
    assert order.currency == "INR"
    assert order.receipt == "booking_7"
    assert order.notes == {"booking_id": "7"}


def test_stub_used_without_credentials(settings):
    settings.RAZORPAY_USE_STUB = False
    settings.RAZORPAY_KEY_ID = ""
    settings.RAZORPAY_KEY_SECRET = ""

    assert gateway.should_use_stub()


def _fake_client(create):
    return SimpleNamespace(order=SimpleNamespace(create=create))


def test_create_order_calls_razorpay_when_configured(settings, monkeypatch):
    settings.RAZORPAY_USE_STUB = False
    settings.RAZORPAY_KEY_ID = "rzp_live_key"
    settings.RAZORPAY_KEY_SECRET = "rzp_live_secret"
    captured = {}

    def fake_create(data):
        captured["data"] = data
        return {
            "id": "order_Real123",
            "amount": data["amount"],
            "currency": data["currency"],
            "receipt": data["receipt"],
            "status": "created",
            "notes": data["notes"],
        }

    monkeypatch.setattr(gateway, "get_razorpay_client", lambda: _fake_client(fake_create))

    order = gateway.create_order(
        amount_minor_units=5500000,
        currency="INR",
        receipt="booking_7",
        notes={"booking_id": 7, "moodboard_title": "Whispers of Spring"},
    )

    assert order.id == "order_Real123"
    assert order.amount == 5500000
    assert captured["data"] == {
        "amount": 5500000,
        "currency": "INR",
        "receipt": "booking_7",
        "notes": {"booking_id": "7", "moodboard_title": "Whispers of Spring"},
    }


def test_gateway_failures_are_wrapped(settings, monkeypatch):
    settings.RAZORPAY_USE_STUB = False
    settings.RAZORPAY_KEY_ID = "rzp_live_key"
    settings.RAZORPAY_KEY_SECRET = "rzp_live_secret"

    def boom(data):
        raise ConnectionError("gateway unreachable")

    monkeypatch.setattr(gateway, "get_razorpay_client", lambda: _fake_client(boom))

    with pytest.raises(GatewayError):
        gateway.create_order(amount_minor_units=100, currency="INR", receipt="booking_1")


def test_order_without_id_is_an_error(settings, monkeypatch):
    settings.RAZORPAY_USE_STUB = False
    settings.RAZORPAY_KEY_ID = "rzp_live_key"
    settings.RAZORPAY_KEY_SECRET = "rzp_live_secret"

    monkeypatch.setattr(gateway, "get_razorpay_client", lambda: _fake_client(lambda data: {"status": "created"}))

    with pytest.raises(GatewayError):
        gateway.create_order(amount_minor_units=100, currency="INR", receipt="booking_1")
