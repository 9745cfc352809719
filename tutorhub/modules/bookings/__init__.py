"""Student bookings and the earnings they produce."""

from .exceptions import (
    BookingAlreadyExistsError,
    BookingAlreadySettledError,
    BookingError,
    BookingNotFoundError,
    FacultyNotFoundError,
    InvalidBookingError,
    InvalidPaymentSignatureError,
    PaymentGatewayError,
)
from .gateway import GatewayOrder, PaymentGateway
from .models import Booking, CheckoutSession, EarningsSummary, FacultyDashboard, RecentEarning
from .service import BookingService

__all__ = [
    "Booking",
    "BookingAlreadyExistsError",
    "BookingAlreadySettledError",
    "BookingError",
    "BookingNotFoundError",
    "BookingService",
    "CheckoutSession",
    "EarningsSummary",
    "FacultyDashboard",
    "FacultyNotFoundError",
    "GatewayOrder",
    "InvalidBookingError",
    "InvalidPaymentSignatureError",
    "PaymentGateway",
    "PaymentGatewayError",
    "RecentEarning",
]
