from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("razorpay_order_id", "booking", "amount", "currency", "payment_type", "status", "payment_date")
    list_filter = ("status", "payment_type", "currency")
    search_fields = ("razorpay_order_id", "razorpay_payment_id", "transaction_id", "booking__client__email")
    readonly_fields = (
        "booking",
        "amount",
        "currency",
        "payment_type",
        "razorpay_order_id",
        "razorpay_payment_id",
        "razorpay_signature",
        "status",
        "payment_date",
        "transaction_id",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
