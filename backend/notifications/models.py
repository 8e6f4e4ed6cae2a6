from django.conf import settings
from django.db import models


class Notification(models.Model):
    """In-app notification shown to a user."""

    TYPE_BOOKING = "booking"
    TYPE_PAYMENT = "payment"
    TYPE_SYSTEM = "system"
    TYPES = [
        (TYPE_BOOKING, "Booking"),
        (TYPE_PAYMENT, "Payment"),
        (TYPE_SYSTEM, "System"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications")
    title = models.CharField(max_length=200)
    message = models.TextField()
    type = models.CharField(max_length=10, choices=TYPES, default=TYPE_SYSTEM)
    is_read = models.BooleanField(default=False)
    related_entity_type = models.CharField(max_length=50, blank=True)
    related_entity_id = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} → {self.user}"

    def mark_read(self):
        if not self.is_read:
            self.is_read = True
            self.save(update_fields=["is_read"])
