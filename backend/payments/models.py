from django.db import models


class Payment(models.Model):
    """One attempt to pay against a booking, keyed by the gateway order id."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    STATUSES = [
        (PENDING, "Pending"),
        (COMPLETED, "Completed"),
        (FAILED, "Failed"),
    ]

    DEPOSIT = "deposit"
    FULL = "full"
    REFUND = "refund"
    PAYMENT_TYPES = [
        (DEPOSIT, "Deposit"),
        (FULL, "Full payment"),
        (REFUND, "Refund"),
    ]

    booking = models.ForeignKey("bookings.Booking", on_delete=models.PROTECT, related_name="payments")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=10, default="INR")
    payment_type = models.CharField(max_length=10, choices=PAYMENT_TYPES, default=DEPOSIT)
    payment_method = models.CharField(max_length=30, blank=True, null=True)
    razorpay_order_id = models.CharField(max_length=100, unique=True)
    razorpay_payment_id = models.CharField(max_length=100, blank=True, null=True)
    razorpay_signature = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(max_length=12, choices=STATUSES, default=PENDING)
    payment_date = models.DateTimeField(null=True, blank=True)
    transaction_id = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["booking"],
                condition=models.Q(status="completed", payment_type="deposit"),
                name="uq_payment_one_completed_deposit_per_booking",
            ),
        ]

    def __str__(self):
        return f"Payment {self.razorpay_order_id} [{self.status}] {self.amount} {self.currency}"
