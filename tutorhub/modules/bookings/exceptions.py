"""Booking domain specific exceptions."""


class BookingError(Exception):
    """Base class for booking errors."""


class InvalidBookingError(BookingError):
    """Raised for a non-positive price or unsupported currency."""


class FacultyNotFoundError(BookingError):
    """Raised when the booked faculty does not exist or is inactive."""


class BookingNotFoundError(BookingError):
    """Raised when no booking matches the gateway order."""


class BookingAlreadySettledError(BookingError):
    """Raised when payment verification arrives for a booking that is no longer pending."""


class BookingAlreadyExistsError(BookingError):
    """Raised when a student books the same free session twice."""


class InvalidPaymentSignatureError(BookingError):
    """Raised when the gateway signature does not match the order and payment ids."""


class PaymentGatewayError(BookingError):
    """Raised when the payment gateway cannot be reached or rejects the call."""
