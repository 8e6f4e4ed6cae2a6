from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from accounts.api import LoginView, MeView
from bookings.api import AdminStatsView, BookingViewSet
from catalog.api import (
    ModelSearchView,
    MoodboardCalendarView,
    MoodboardDetailView,
    MoodboardDiscoverView,
    MoodboardListView,
    MoodboardSearchView,
    SimilarMoodboardsView,
)
from notifications.api import NotificationViewSet
from payments.api import CreateOrderView, RazorpayWebhookView, VerifyPaymentView

router = DefaultRouter()
router.register(r"bookings", BookingViewSet, basename="booking")
router.register(r"notifications", NotificationViewSet, basename="notification")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/login/", LoginView.as_view(), name="auth-login"),
    path("api/auth/refresh/", TokenRefreshView.as_view(), name="auth-refresh"),
    path("api/auth/me/", MeView.as_view(), name="auth-me"),
    path("api/moodboards/calendar/", MoodboardCalendarView.as_view(), name="moodboard-calendar"),
    path("api/moodboards/discover/", MoodboardDiscoverView.as_view(), name="moodboard-discover"),
    path("api/moodboards/all/", MoodboardListView.as_view(), name="moodboard-all"),
    path("api/moodboards/search/", MoodboardSearchView.as_view(), name="moodboard-search"),
    path("api/moodboards/similar/", SimilarMoodboardsView.as_view(), name="moodboard-similar"),
    path("api/moodboards/<int:moodboard_id>/", MoodboardDetailView.as_view(), name="moodboard-detail"),
    path("api/models/", ModelSearchView.as_view(), name="model-search"),
    path("api/admin/stats/", AdminStatsView.as_view(), name="admin-stats"),
    path("api/payments/create-order/", CreateOrderView.as_view(), name="payment-create-order"),
    path("api/payments/verify/", VerifyPaymentView.as_view(), name="payment-verify"),
    path("api/payments/webhook/", RazorpayWebhookView.as_view(), name="payment-webhook"),
    path("api/", include(router.urls)),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
