from django.contrib import admin

from payments.models import Payment

from .models import Booking


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    can_delete = False
    fields = ("razorpay_order_id", "amount", "payment_type", "status", "payment_date", "transaction_id")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("id", "moodboard", "model", "client", "booking_date", "status", "deposit_paid", "amount_paid")
    list_filter = ("status", "deposit_paid", "full_payment_paid")
    search_fields = ("moodboard__title", "model__name", "client__email", "client__phone_number")
    readonly_fields = ("total_amount", "deposit_amount", "deposit_paid", "amount_paid", "created_at", "updated_at")
    inlines = [PaymentInline]

    def has_delete_permission(self, request, obj=None):
        return False
