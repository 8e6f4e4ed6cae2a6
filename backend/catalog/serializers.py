from rest_framework import serializers

from .models import ModelProfile, Moodboard


class ModelProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = ModelProfile
        fields = [
            "id",
            "name",
            "one_liner",
            "bio",
            "height",
            "shoe_size",
            "hair_color",
            "eye_color",
            "experience_level",
            "category",
            "rate_per_day",
            "profile_image",
            "portfolio_images",
            "is_active",
        ]
        read_only_fields = fields


class MoodboardSummarySerializer(serializers.ModelSerializer):
    model_count = serializers.SerializerMethodField()

    class Meta:
        model = Moodboard
        fields = [
            "id",
            "title",
            "liner",
            "date",
            "booking_price",
            "main_image",
            "tags",
            "style",
            "is_booked",
            "model_count",
        ]
        read_only_fields = fields

    def get_model_count(self, obj: Moodboard) -> int:
        return obj.moodboard_models.count()


class MoodboardDetailSerializer(MoodboardSummarySerializer):
    models = serializers.SerializerMethodField()

    class Meta(MoodboardSummarySerializer.Meta):
        fields = MoodboardSummarySerializer.Meta.fields + [
            "description",
            "images",
            "color_palette",
            "models",
        ]
        read_only_fields = fields

    def get_models(self, obj: Moodboard):
        active_models = obj.available_models.filter(is_active=True).order_by("name")
        return ModelProfileSerializer(active_models, many=True).data
