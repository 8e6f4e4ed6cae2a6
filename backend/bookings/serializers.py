from rest_framework import serializers

from bookings.models import Booking
from catalog.models import ModelProfile, Moodboard
from payments.serializers import PaymentSerializer


class BookingCreateSerializer(serializers.Serializer):
    moodboard_id = serializers.PrimaryKeyRelatedField(queryset=Moodboard.objects.all(), source="moodboard")
    model_id = serializers.PrimaryKeyRelatedField(
        queryset=ModelProfile.objects.all(),
        source="model",
        required=False,
        allow_null=True,
    )
    booking_date = serializers.DateField(required=False)
    product_count = serializers.IntegerField(min_value=1, max_value=100, required=False, default=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class BookingSerializer(serializers.ModelSerializer):
    moodboard_title = serializers.CharField(source="moodboard.title", read_only=True, default=None)
    model_name = serializers.CharField(source="model.name", read_only=True, default=None)
    client_email = serializers.EmailField(source="client.email", read_only=True)
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "client",
            "client_email",
            "moodboard",
            "moodboard_title",
            "model",
            "model_name",
            "booking_date",
            "product_count",
            "total_amount",
            "deposit_amount",
            "status",
            "deposit_paid",
            "full_payment_paid",
            "amount_paid",
            "notes",
            "payments",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
