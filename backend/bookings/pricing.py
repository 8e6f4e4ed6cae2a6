from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from django.conf import settings

MINOR_UNIT = Decimal("0.01")
DEFAULT_TOLERANCE = Decimal("0.01")

Amount = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class PricingResult:
    total_amount: Decimal
    deposit_amount: Decimal
    currency: str


def _as_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # floats carry binary noise; go through str to keep 0.1 as 0.1
        return Decimal(str(value))
    return Decimal(value)


def deposit_rate() -> Decimal:
    return _as_decimal(str(getattr(settings, "DEPOSIT_RATE", "0.10")))


def quantize_amount(value: Amount) -> Decimal:
    return _as_decimal(value).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


def compute_deposit(total_amount: Amount, *, rate: Optional[Decimal] = None) -> Decimal:
    """
    Deposit owed upfront for a booking total: ``total × rate`` rounded half-up to
    the nearest minor currency unit.
    """
    rate = deposit_rate() if rate is None else rate
    return quantize_amount(_as_decimal(total_amount) * rate)


def compute_total_from_deposit(deposit_amount: Amount, *, rate: Optional[Decimal] = None) -> Decimal:
    rate = deposit_rate() if rate is None else rate
    return quantize_amount(_as_decimal(deposit_amount) / rate)


def compute_total(base_price: Amount, product_count: int) -> Decimal:
    if product_count < 1:
        raise ValueError("product_count must be at least 1")
    return quantize_amount(_as_decimal(base_price) * product_count)


def build_pricing(total_amount: Amount, *, currency: Optional[str] = None) -> PricingResult:
    total = quantize_amount(total_amount)
    return PricingResult(
        total_amount=total,
        deposit_amount=compute_deposit(total),
        currency=currency or settings.PAYMENT_CURRENCY,
    )


def deposit_matches(
    total_amount: Amount,
    stored_deposit: Amount,
    *,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> bool:
    """Return True when a stored deposit agrees with a fresh computation."""
    expected = compute_deposit(total_amount)
    return abs(expected - _as_decimal(stored_deposit)) <= tolerance
