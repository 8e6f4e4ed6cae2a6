from rest_framework import serializers

from .models import Payment


class CreateOrderSerializer(serializers.Serializer):
    bookingId = serializers.IntegerField(
        min_value=1,
        error_messages={"required": "Booking ID is required", "null": "Booking ID is required"},
    )


class VerifyPaymentSerializer(serializers.Serializer):
    razorpay_order_id = serializers.CharField(max_length=100)
    razorpay_payment_id = serializers.CharField(max_length=100)
    razorpay_signature = serializers.CharField(max_length=255)
    bookingId = serializers.IntegerField(min_value=1)


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            "id",
            "booking",
            "amount",
            "currency",
            "payment_type",
            "payment_method",
            "razorpay_order_id",
            "razorpay_payment_id",
            "status",
            "payment_date",
            "transaction_id",
            "created_at",
        ]
        read_only_fields = fields
