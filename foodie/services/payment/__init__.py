"""
Payment Service Factory

Provides a single entry point for obtaining the payment handoff service.
UPI links are built locally in every environment, so there is no
separate mock implementation.

Usage:
    from foodie.services.payment import get_payment_service

    result = get_payment_service().initiate(PaymentMethodEnum.UPI, 45000, UpiAppEnum.GPAY)
    print(result.deep_link)
"""

import logging
from functools import lru_cache

from foodie.services.payment.base import BasePaymentService, PaymentResult
from foodie.services.payment.upi import UpiPaymentService, build_upi_link

logger = logging.getLogger(__name__)


@lru_cache()
def get_payment_service() -> BasePaymentService:
    """Get the cached payment handoff service."""
    logger.info("Payment Service: Using UpiPaymentService")
    return UpiPaymentService()


def reset_payment_service() -> None:
    """Clear the cached payment service instance."""
    get_payment_service.cache_clear()
    logger.debug("Payment service cache cleared")


__all__ = [
    "get_payment_service",
    "reset_payment_service",
    "BasePaymentService",
    "PaymentResult",
    "UpiPaymentService",
    "build_upi_link",
]
