from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class ModelProfile(models.Model):
    """A model (talent) that clients can pick for a moodboard shoot."""

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    agency = models.CharField(max_length=200, blank=True)
    instagram = models.CharField(max_length=120, blank=True)
    bio = models.TextField(blank=True)
    one_liner = models.CharField(max_length=255, blank=True)
    height = models.CharField(max_length=20, blank=True)
    shoe_size = models.CharField(max_length=20, blank=True)
    hair_color = models.CharField(max_length=50, blank=True)
    eye_color = models.CharField(max_length=50, blank=True)
    experience_level = models.CharField(max_length=50, blank=True)
    category = models.CharField(max_length=80, blank=True)
    rate_per_day = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    profile_image = models.URLField(blank=True)
    portfolio_images = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Moodboard(models.Model):
    """Themed photo-shoot listing, bookable for one calendar date."""

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    liner = models.CharField(max_length=255, blank=True)
    date = models.DateField(null=True, blank=True)
    booking_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("50000"),
        validators=[MinValueValidator(Decimal("1"))],
    )
    main_image = models.URLField(blank=True)
    images = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)
    style = models.CharField(max_length=80, blank=True)
    color_palette = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    is_booked = models.BooleanField(default=False)
    available_models = models.ManyToManyField(
        "ModelProfile",
        through="MoodboardModel",
        related_name="moodboards",
        blank=True,
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_moodboards",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "id"]

    def __str__(self):
        return self.title


class MoodboardModel(models.Model):
    """Join table listing which models are available for a moodboard."""

    moodboard = models.ForeignKey("Moodboard", on_delete=models.CASCADE, related_name="moodboard_models")
    model = models.ForeignKey("ModelProfile", on_delete=models.CASCADE, related_name="moodboard_links")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("moodboard", "model")

    def __str__(self):
        return f"{self.model} × {self.moodboard}"
