from django.contrib import admin

from .models import ModelProfile, Moodboard, MoodboardModel


class MoodboardModelInline(admin.TabularInline):
    model = MoodboardModel
    extra = 0
    autocomplete_fields = ("model",)


@admin.register(Moodboard)
class MoodboardAdmin(admin.ModelAdmin):
    list_display = ("title", "date", "booking_price", "is_active", "is_booked")
    list_filter = ("is_active", "is_booked", "style")
    search_fields = ("title", "description", "liner")
    ordering = ("date",)
    inlines = [MoodboardModelInline]


@admin.register(ModelProfile)
class ModelProfileAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "rate_per_day", "is_active")
    list_filter = ("is_active", "category")
    search_fields = ("name", "email", "agency", "instagram")
