import time

import pytest

from foodie.exceptions import CheckoutError
from foodie.schemas import CheckoutStageEnum as Stage
from foodie.schemas import PaymentMethodEnum, UpiAppEnum
from foodie.services.cart import Cart
from foodie.services.checkout import CheckoutFlow


@pytest.fixture
def flow(payment_service, paneer):
    cart = Cart()
    cart.add(paneer)
    cart.add(paneer, ["cheese"])
    return CheckoutFlow(cart, payment_service, otp_delay_seconds=0)


async def walk_to_payment(flow):
    flow.open_cart()
    flow.proceed_to_summary()
    flow.proceed_to_verification()
    flow.send_otp("98765 43210")
    await flow.verify_otp("1234")


async def test_pay_later_flow(flow):
    await walk_to_payment(flow)
    assert flow.stage == Stage.PAYMENT_METHOD
    assert flow.phone == "9876543210"

    flow.select_payment_method(PaymentMethodEnum.PAY_LATER)
    assert flow.stage == Stage.SUCCESS
    assert flow.deep_link is None

    flow.acknowledge()
    assert flow.stage == Stage.BROWSING
    assert flow.cart.is_empty
    assert flow.phone is None


async def test_upi_flow(flow):
    await walk_to_payment(flow)
    flow.select_payment_method(PaymentMethodEnum.UPI)
    assert flow.stage == Stage.UPI_APP

    link = flow.select_upi_app(UpiAppEnum.GPAY)

    assert flow.stage == Stage.SUCCESS
    assert link.startswith("tez://upi/pay?pa=foodie-restaurant@okicici")
    assert "&am=430.00&" in link
    assert flow.upi_app == UpiAppEnum.GPAY


def test_empty_cart_cannot_open(payment_service):
    flow = CheckoutFlow(Cart(), payment_service, otp_delay_seconds=0)
    with pytest.raises(CheckoutError):
        flow.open_cart()
    assert flow.stage == Stage.BROWSING


def test_short_phone_rejected(flow):
    flow.open_cart()
    flow.proceed_to_summary()
    flow.proceed_to_verification()

    with pytest.raises(CheckoutError):
        flow.send_otp("12345")
    assert not flow.otp_sent


async def test_verify_requires_sent_otp(flow):
    flow.open_cart()
    flow.proceed_to_summary()
    flow.proceed_to_verification()

    with pytest.raises(CheckoutError):
        await flow.verify_otp("1234")


async def test_short_otp_rejected(flow):
    flow.open_cart()
    flow.proceed_to_summary()
    flow.proceed_to_verification()
    flow.send_otp("9876543210")

    with pytest.raises(CheckoutError):
        await flow.verify_otp("12")
    assert flow.stage == Stage.PHONE_VERIFICATION


async def test_verify_waits_fixed_delay(flow):
    flow.otp_delay_seconds = 0.05
    flow.open_cart()
    flow.proceed_to_summary()
    flow.proceed_to_verification()
    flow.send_otp("9876543210")

    started = time.monotonic()
    await flow.verify_otp("0000")

    assert time.monotonic() - started >= 0.05
    assert flow.stage == Stage.PAYMENT_METHOD


async def test_back_navigation(flow):
    flow.back()
    assert flow.stage == Stage.BROWSING

    await walk_to_payment(flow)
    flow.select_payment_method(PaymentMethodEnum.UPI)
    flow.back()
    assert flow.stage == Stage.PAYMENT_METHOD
    flow.back()
    assert flow.stage == Stage.PHONE_VERIFICATION
    assert not flow.otp_sent


async def test_back_not_allowed_after_success(flow):
    await walk_to_payment(flow)
    flow.select_payment_method(PaymentMethodEnum.PAY_LATER)

    with pytest.raises(CheckoutError):
        flow.back()


def test_out_of_order_actions(flow):
    with pytest.raises(CheckoutError):
        flow.select_upi_app(UpiAppEnum.GPAY)
    with pytest.raises(CheckoutError):
        flow.proceed_to_summary()
    with pytest.raises(CheckoutError):
        flow.acknowledge()
