import json
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.models import Booking

from .serializers import CreateOrderSerializer, VerifyPaymentSerializer
from .services.orders import create_deposit_order
from .services.reconciliation import confirm_checkout, handle_webhook_event
from .signatures import verify_webhook_signature

logger = logging.getLogger(__name__)


class CreateOrderView(APIView):
    """Open a gateway order for the current user's booking deposit."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = create_deposit_order(serializer.validated_data["bookingId"], request.user)
        return Response(order.as_response(), status=status.HTTP_200_OK)


class VerifyPaymentView(APIView):
    """Confirm a payment from the hosted checkout success callback."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = VerifyPaymentSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"detail": "Missing required payment parameters", "errors": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        data = serializer.validated_data
        result = confirm_checkout(
            order_id=data["razorpay_order_id"],
            payment_id=data["razorpay_payment_id"],
            signature=data["razorpay_signature"],
            booking_id=data["bookingId"],
            user=request.user,
        )
        if result.booking_status not in Booking.PAID_STATUSES:
            return Response(
                {"detail": "Payment verification failed", "bookingStatus": result.booking_status},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(
            {
                "success": True,
                "message": "Payment verified successfully",
                "bookingStatus": result.booking_status,
            }
        )


class RazorpayWebhookView(APIView):
    """
    Receive payment events from the gateway.

    Only a bad signature is reported back as an error; every other outcome,
    including internal failures, is acknowledged so the gateway does not
    start redelivering.
    """

    permission_classes: list = []
    authentication_classes: list = []

    def post(self, request, *args, **kwargs):
        payload = request.body
        signature = request.META.get("HTTP_X_RAZORPAY_SIGNATURE") or request.META.get("HTTP_X_SIGNATURE")
        if not signature:
            logger.warning("Gateway webhook received without a signature.")
            return Response({"detail": "Missing signature"}, status=status.HTTP_400_BAD_REQUEST)

        if not verify_webhook_signature(payload, signature):
            logger.warning("Invalid gateway webhook signature.")
            return Response({"detail": "Invalid signature"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            event = json.loads(payload)
        except ValueError:
            logger.warning("Signed gateway webhook body is not valid JSON.")
            return Response({"status": "ok"})

        if not isinstance(event, dict):
            logger.warning("Signed gateway webhook body is not an object.")
            return Response({"status": "ok"})

        try:
            result = handle_webhook_event(event)
            logger.info("Gateway webhook %s processed: %s", event.get("event"), result.outcome.value)
        except Exception:
            logger.exception("Gateway webhook %s processing failed.", event.get("event"))

        return Response({"status": "ok"})
