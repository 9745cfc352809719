"""Payment gateway dependency."""

from functools import lru_cache

from tutorhub.core.config import get_settings
from tutorhub.infrastructure.payments import RazorpayGateway
from tutorhub.modules.bookings import PaymentGateway


@lru_cache()
def get_payment_gateway() -> PaymentGateway:
    settings = get_settings()
    return RazorpayGateway(settings.razorpay.key_id, settings.razorpay.key_secret)


__all__ = ["get_payment_gateway"]
