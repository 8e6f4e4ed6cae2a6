from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ModelProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("agency", models.CharField(blank=True, max_length=200)),
                ("instagram", models.CharField(blank=True, max_length=120)),
                ("bio", models.TextField(blank=True)),
                ("one_liner", models.CharField(blank=True, max_length=255)),
                ("height", models.CharField(blank=True, max_length=20)),
                ("shoe_size", models.CharField(blank=True, max_length=20)),
                ("hair_color", models.CharField(blank=True, max_length=50)),
                ("eye_color", models.CharField(blank=True, max_length=50)),
                ("experience_level", models.CharField(blank=True, max_length=50)),
                ("category", models.CharField(blank=True, max_length=80)),
                ("rate_per_day", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("profile_image", models.URLField(blank=True)),
                ("portfolio_images", models.JSONField(blank=True, default=list)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Moodboard",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("liner", models.CharField(blank=True, max_length=255)),
                ("date", models.DateField(blank=True, null=True)),
                ("booking_price", models.DecimalField(decimal_places=2, default=Decimal("50000"), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal("1"))])),
                ("main_image", models.URLField(blank=True)),
                ("images", models.JSONField(blank=True, default=list)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("style", models.CharField(blank=True, max_length=80)),
                ("color_palette", models.JSONField(blank=True, default=list)),
                ("is_active", models.BooleanField(default=True)),
                ("is_booked", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="created_moodboards", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["date", "id"],
            },
        ),
        migrations.CreateModel(
            name="MoodboardModel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("model", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="moodboard_links", to="catalog.modelprofile")),
                ("moodboard", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="moodboard_models", to="catalog.moodboard")),
            ],
            options={
                "unique_together": {("moodboard", "model")},
            },
        ),
        migrations.AddField(
            model_name="moodboard",
            name="available_models",
            field=models.ManyToManyField(blank=True, related_name="moodboards", through="catalog.MoodboardModel", to="catalog.modelprofile"),
        ),
    ]
