"""
Checkout Flow

Walks a diner from the menu to a confirmed order:

    browsing → cart → summary → phone_verification
             → payment_method → (upi_app) → success

Phone verification is a mock: no SMS is sent and every OTP of four or
more characters is accepted after a fixed delay. Payment is either a
pay-later confirmation or a UPI deep link handoff; nothing is charged.

Each action checks the current stage and raises CheckoutError when it is
called out of order.
"""

import asyncio
import logging
import re
from datetime import datetime
from typing import Optional

from foodie.exceptions import CheckoutError
from foodie.schemas import CheckoutStageEnum as Stage
from foodie.schemas import PaymentMethodEnum, UpiAppEnum
from foodie.services.cart import Cart, delivery_estimate
from foodie.services.payment import BasePaymentService

logger = logging.getLogger(__name__)

MIN_PHONE_DIGITS = 10
MIN_OTP_LENGTH = 4

PREVIOUS_STAGE = {
    Stage.CART: Stage.BROWSING,
    Stage.SUMMARY: Stage.CART,
    Stage.PHONE_VERIFICATION: Stage.SUMMARY,
    Stage.PAYMENT_METHOD: Stage.PHONE_VERIFICATION,
    Stage.UPI_APP: Stage.PAYMENT_METHOD,
}


class CheckoutFlow:
    def __init__(
        self,
        cart: Cart,
        payment_service: BasePaymentService,
        otp_delay_seconds: float = 1.0,
        delivery_minutes: int = 15,
    ):
        self.cart = cart
        self.payment_service = payment_service
        self.otp_delay_seconds = otp_delay_seconds
        self.delivery_minutes = delivery_minutes

        self.stage = Stage.BROWSING
        self.phone: Optional[str] = None
        self.otp_sent = False
        self.payment_method: Optional[PaymentMethodEnum] = None
        self.upi_app: Optional[UpiAppEnum] = None
        self.deep_link: Optional[str] = None
        self.confirmed_at: Optional[datetime] = None

    def _require(self, *stages: Stage) -> None:
        if self.stage not in stages:
            expected = ", ".join(s.value for s in stages)
            raise CheckoutError(
                f"Cannot do that at stage '{self.stage.value}' (expected {expected})",
                code="invalid_stage",
            )

    def _require_items(self) -> None:
        if self.cart.is_empty:
            raise CheckoutError("Your cart is empty", code="empty_cart")

    def _move(self, stage: Stage) -> None:
        logger.debug(f"Checkout: {self.stage.value} -> {stage.value}")
        self.stage = stage

    # -------------------------------------------------------------------------
    # Cart / summary
    # -------------------------------------------------------------------------

    def open_cart(self) -> None:
        self._require(Stage.BROWSING, Stage.CART)
        self._require_items()
        self._move(Stage.CART)

    def proceed_to_summary(self) -> None:
        self._require(Stage.CART)
        self._require_items()
        self._move(Stage.SUMMARY)

    def proceed_to_verification(self) -> None:
        self._require(Stage.SUMMARY)
        self._require_items()
        self._move(Stage.PHONE_VERIFICATION)

    def estimate(self, now: Optional[datetime] = None) -> dict[str, str]:
        return delivery_estimate(now, self.delivery_minutes)

    # -------------------------------------------------------------------------
    # Phone verification
    # -------------------------------------------------------------------------

    def send_otp(self, phone: str) -> None:
        """Record the phone number and mark an OTP as sent."""
        self._require(Stage.PHONE_VERIFICATION)

        digits = re.sub(r"\D", "", phone or "")
        if len(digits) < MIN_PHONE_DIGITS:
            raise CheckoutError(
                "Please enter a valid 10 digit phone number",
                code="invalid_phone",
            )

        self.phone = digits
        self.otp_sent = True
        logger.info(f"Checkout: OTP requested for ******{digits[-4:]}")

    async def verify_otp(self, otp: str) -> None:
        """Accept any OTP of at least four characters after the fixed delay."""
        self._require(Stage.PHONE_VERIFICATION)
        if not self.otp_sent:
            raise CheckoutError("Request an OTP first", code="otp_not_sent")
        if len((otp or "").strip()) < MIN_OTP_LENGTH:
            raise CheckoutError("OTP must be at least 4 digits", code="invalid_otp")

        if self.otp_delay_seconds > 0:
            await asyncio.sleep(self.otp_delay_seconds)

        self.otp_sent = False
        self._move(Stage.PAYMENT_METHOD)

    # -------------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------------

    def select_payment_method(self, method: PaymentMethodEnum) -> None:
        self._require(Stage.PAYMENT_METHOD)
        method = PaymentMethodEnum(method)
        self.payment_method = method

        if method == PaymentMethodEnum.UPI:
            self._move(Stage.UPI_APP)
            return

        self._require_items()
        result = self.payment_service.initiate(PaymentMethodEnum.PAY_LATER, self.cart.total_price())
        if not result.success:
            raise CheckoutError(result.error_message or "Payment failed", code="payment_failed")

        self._confirm()

    def select_upi_app(self, app: UpiAppEnum) -> str:
        """Build the UPI deep link for `app` and confirm the order."""
        self._require(Stage.UPI_APP)
        self._require_items()
        app = UpiAppEnum(app)

        result = self.payment_service.initiate(
            PaymentMethodEnum.UPI,
            self.cart.total_price(),
            app,
        )
        if not result.success:
            raise CheckoutError(result.error_message or "Payment failed", code="payment_failed")

        self.upi_app = app
        self.deep_link = result.deep_link
        self._confirm()
        return result.deep_link

    def _confirm(self) -> None:
        self.confirmed_at = datetime.now()
        logger.info(
            f"Checkout: Order confirmed ({self.payment_method.value}, "
            f"{self.cart.total_items()} items, {self.cart.total_price()} paise)"
        )
        self._move(Stage.SUCCESS)

    def acknowledge(self) -> None:
        """Close the success screen: empty the cart and start over."""
        self._require(Stage.SUCCESS)
        self.cart.clear()
        self.reset()

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def back(self) -> None:
        if self.stage == Stage.BROWSING:
            return
        if self.stage == Stage.SUCCESS:
            raise CheckoutError("The order is already confirmed", code="invalid_stage")

        if self.stage == Stage.PHONE_VERIFICATION:
            self.otp_sent = False
        if self.stage == Stage.UPI_APP:
            self.payment_method = None

        self._move(PREVIOUS_STAGE[self.stage])

    def reset(self) -> None:
        self.stage = Stage.BROWSING
        self.phone = None
        self.otp_sent = False
        self.payment_method = None
        self.upi_app = None
        self.deep_link = None
        self.confirmed_at = None
