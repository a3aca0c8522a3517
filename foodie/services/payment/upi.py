"""
UPI Payment Handoff

Builds the OS-level deep links that open a UPI app with the amount
pre-filled:

    <scheme>?pa=<payee>&pn=<name>&am=<rupees>&cu=INR&tn=<note>

Google Pay uses its own `tez://` scheme and PhonePe `phonepe://`;
every other app goes through the generic `upi://pay`.
"""

import logging
from typing import Optional
from urllib.parse import quote

from foodie.core.config import get_settings
from foodie.schemas import PaymentMethodEnum, UpiAppEnum
from foodie.services.payment.base import BasePaymentService, PaymentResult

logger = logging.getLogger(__name__)

UPI_SCHEMES = {
    UpiAppEnum.GPAY: "tez://upi/pay",
    UpiAppEnum.PHONEPE: "phonepe://pay",
}
DEFAULT_UPI_SCHEME = "upi://pay"


def build_upi_link(
    app: UpiAppEnum,
    amount: int,
    payee: str,
    name: str,
    note: str,
    currency: str = "INR",
) -> str:
    """
    Deep link for `app` requesting `amount` paise.

    The amount is sent in rupees with two decimals (45000 -> "450.00").
    """
    scheme = UPI_SCHEMES.get(app, DEFAULT_UPI_SCHEME)
    rupees = f"{amount / 100:.2f}"
    return (
        f"{scheme}?pa={quote(payee, safe='@.-_')}"
        f"&pn={quote(name)}"
        f"&am={rupees}"
        f"&cu={currency}"
        f"&tn={quote(note)}"
    )


class UpiPaymentService(BasePaymentService):
    """Pay-later confirmations and UPI app handoff."""

    def __init__(
        self,
        payee: Optional[str] = None,
        merchant_name: Optional[str] = None,
        note: Optional[str] = None,
        currency: Optional[str] = None,
    ):
        settings = get_settings()
        self.payee = payee or settings.upi_payee_vpa
        self.merchant_name = merchant_name or settings.upi_merchant_name
        self.note = note or settings.upi_transaction_note
        self.currency = currency or settings.upi_currency

        logger.info(f"UpiPaymentService initialized (payee={self.payee})")

    @property
    def provider_name(self) -> str:
        return "upi"

    def initiate(
        self,
        method: PaymentMethodEnum,
        amount: int,
        app: Optional[UpiAppEnum] = None,
    ) -> PaymentResult:
        if amount <= 0:
            return PaymentResult(
                success=False,
                method=method,
                amount=amount,
                error_message="Amount must be greater than 0",
                error_code="invalid_amount",
            )

        if method == PaymentMethodEnum.PAY_LATER:
            logger.info(f"Pay later: order of {amount} paise confirmed")
            return PaymentResult(
                success=True,
                method=method,
                amount=amount,
                confirmed=True,
            )

        link = build_upi_link(
            app or UpiAppEnum.OTHER,
            amount,
            payee=self.payee,
            name=self.merchant_name,
            note=self.note,
            currency=self.currency,
        )
        logger.info(f"UPI: Handing off {amount} paise to {(app or UpiAppEnum.OTHER).value}")

        return PaymentResult(
            success=True,
            method=method,
            amount=amount,
            deep_link=link,
        )
