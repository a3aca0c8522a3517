"""
Payment Service Abstract Base Class

The storefront never collects money itself. A payment is either:
    - PAY LATER: the order is confirmed and settled at the table
    - UPI: the diner is handed off to a UPI app through a deep link

Implementations return a PaymentResult describing what the client
should do next; there is no reconciliation or settlement here.

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from foodie.schemas import PaymentMethodEnum, UpiAppEnum


@dataclass
class PaymentResult:
    """
    Standardized result of starting a payment.

    Attributes:
        success: Whether the payment step could be started
        method: Payment method used
        amount: Amount in paise
        confirmed: True when the order is confirmed without a handoff
        deep_link: UPI URL the client should open (UPI only)
        error_message: Error description if the step failed
        error_code: Machine-readable error code
    """
    success: bool
    method: PaymentMethodEnum
    amount: int = 0
    confirmed: bool = False
    deep_link: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None


class BasePaymentService(ABC):
    """Abstract base class for payment handoff services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of the payment provider."""
        pass

    @abstractmethod
    def initiate(
        self,
        method: PaymentMethodEnum,
        amount: int,
        app: Optional[UpiAppEnum] = None,
    ) -> PaymentResult:
        """
        Start a payment.

        Args:
            method: UPI or pay-later
            amount: Amount in paise
            app: UPI app to hand off to (UPI only)

        Returns:
            PaymentResult: Confirmation or the deep link to open
        """
        pass
