from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Authenticated identity; bookings are owned by the user's primary key."""

    CLIENT = "client"
    ADMIN = "admin"
    ROLES = [
        (CLIENT, "Client"),
        (ADMIN, "Admin"),
    ]

    display_name = models.CharField(max_length=120, blank=True)
    phone_number = models.CharField(max_length=30, blank=True)
    brand_name = models.CharField(max_length=200, blank=True)
    role = models.CharField(max_length=10, choices=ROLES, default=CLIENT)

    @property
    def is_platform_admin(self) -> bool:
        return self.is_superuser or self.role == self.ADMIN

    @property
    def contact_name(self) -> str:
        full_name = f"{self.first_name} {self.last_name}".strip()
        return self.display_name or full_name or self.email or self.username
