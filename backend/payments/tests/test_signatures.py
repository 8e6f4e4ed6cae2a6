import hashlib
import hmac

from payments.signatures import (
    checkout_payload,
    compute_signature,
    verify_checkout_signature,
    verify_signature,
    verify_webhook_signature,
)


def test_compute_signature_matches_hmac_sha256_hex():
    expected = hmac.new(b"secret", b"order_1|pay_1", hashlib.sha256).hexdigest()
    assert compute_signature("order_1|pay_1", "secret") == expected


def test_verify_signature_accepts_only_the_exact_payload():
    signature = compute_signature(b'{"event":"payment.captured"}', "secret")

    assert verify_signature(b'{"event":"payment.captured"}', signature, "secret")
    assert verify_signature(b'{"event":"payment.captured"}', signature.upper(), "secret")
    assert not verify_signature(b'{"event": "payment.captured"}', signature, "secret")
    assert not verify_signature(b'{"event":"payment.captured"}', signature, "other-secret")


def test_missing_signature_or_secret_never_verifies():
    assert not verify_signature("payload", None, "secret")
    assert not verify_signature("payload", "", "secret")
    assert not verify_signature("payload", compute_signature("payload", "secret"), "")


def test_checkout_signature_uses_api_secret(settings):
    settings.RAZORPAY_KEY_SECRET = "api-secret"
    settings.RAZORPAY_WEBHOOK_SECRET = "hook-secret"
    good = compute_signature(checkout_payload("order_1", "pay_1"), "api-secret")

    assert checkout_payload("order_1", "pay_1") == "order_1|pay_1"
    assert verify_checkout_signature("order_1", "pay_1", good)
    assert not verify_checkout_signature("order_1", "pay_2", good)
    assert not verify_checkout_signature(
        "order_1", "pay_1", compute_signature("order_1|pay_1", "hook-secret")
    )


def test_webhook_signature_uses_webhook_secret(settings):
    settings.RAZORPAY_KEY_SECRET = "api-secret"
    settings.RAZORPAY_WEBHOOK_SECRET = "hook-secret"
    body = b'{"event":"payment.failed"}'

    assert verify_webhook_signature(body, compute_signature(body, "hook-secret"))
    assert not verify_webhook_signature(body, compute_signature(body, "api-secret"))
