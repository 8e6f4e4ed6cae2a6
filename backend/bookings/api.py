from decimal import Decimal

from django.db.models import Count, Q, Sum
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.models import Booking
from bookings.serializers import BookingCreateSerializer, BookingSerializer
from bookings.services.reservations import cancel_booking, create_booking
from catalog.models import ModelProfile, Moodboard


class IsPlatformAdmin(permissions.BasePermission):
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_platform_admin)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["status", "deposit_paid", "moodboard"]
    ordering_fields = ["created_at", "booking_date"]

    def get_queryset(self):
        queryset = Booking.objects.select_related("client", "moodboard", "model").prefetch_related("payments")
        user = self.request.user
        if user.is_platform_admin:
            return queryset
        return queryset.filter(client=user)

    def get_serializer_class(self):
        if self.action == "create":
            return BookingCreateSerializer
        return super().get_serializer_class()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = create_booking(client=request.user, **serializer.validated_data)
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        booking = cancel_booking(self.get_object())
        return Response(BookingSerializer(booking).data)


class AdminStatsView(APIView):
    """Headline numbers for the admin dashboard."""

    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    def get(self, request, *args, **kwargs):
        booking_stats = Booking.objects.aggregate(
            total=Count("id"),
            pending=Count("id", filter=Q(status=Booking.PENDING)),
            confirmed=Count("id", filter=Q(status=Booking.CONFIRMED)),
            completed=Count("id", filter=Q(status=Booking.COMPLETED)),
            cancelled=Count("id", filter=Q(status=Booking.CANCELLED)),
            revenue=Sum("amount_paid"),
        )
        return Response(
            {
                "totalMoodboards": Moodboard.objects.count(),
                "activeMoodboards": Moodboard.objects.filter(is_active=True).count(),
                "totalModels": ModelProfile.objects.count(),
                "activeModels": ModelProfile.objects.filter(is_active=True).count(),
                "totalBookings": booking_stats["total"],
                "pendingBookings": booking_stats["pending"],
                "confirmedBookings": booking_stats["confirmed"],
                "completedBookings": booking_stats["completed"],
                "cancelledBookings": booking_stats["cancelled"],
                "totalRevenue": booking_stats["revenue"] or Decimal("0"),
            }
        )
