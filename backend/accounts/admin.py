from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class MoodboardUserAdmin(UserAdmin):
    list_display = ("username", "email", "display_name", "phone_number", "role", "is_staff")
    list_filter = ("role", "is_staff", "is_superuser")
    search_fields = ("username", "email", "display_name", "phone_number", "brand_name")
    fieldsets = UserAdmin.fieldsets + (
        ("Profile", {"fields": ("display_name", "phone_number", "brand_name", "role")}),
    )
