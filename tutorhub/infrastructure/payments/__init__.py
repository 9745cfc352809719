"""Payment gateway adapters."""

from .razorpay_gateway import RazorpayGateway

__all__ = ["RazorpayGateway"]
