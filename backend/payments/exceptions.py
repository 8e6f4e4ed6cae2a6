from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, PermissionDenied


class BookingNotFound(NotFound):
    default_detail = "Booking not found."
    default_code = "booking_not_found"


class PaymentNotFound(NotFound):
    default_detail = "Payment record not found."
    default_code = "payment_not_found"


class NotBookingOwner(PermissionDenied):
    default_detail = "Unauthorized access to booking."
    default_code = "not_booking_owner"


class AlreadyPaid(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Booking already paid."
    default_code = "already_paid"


class InvalidSignature(APIException):
    """Signature did not match; terminal and never retried."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid payment signature."
    default_code = "invalid_signature"


class GatewayError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to create payment order. Please try again."
    default_code = "gateway_error"


class PersistenceError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to update payment records. Please try again."
    default_code = "persistence_error"


class PaymentInconsistency(PersistenceError):
    """A gateway order exists without a matching local payment record."""

    default_detail = "Failed to create payment record."
    default_code = "payment_inconsistency"


class BookingUnavailable(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This booking can no longer be paid for."
    default_code = "booking_unavailable"


class ConfirmationConflict(Exception):
    """A captured payment that cannot be applied to its booking; a refund is needed."""
