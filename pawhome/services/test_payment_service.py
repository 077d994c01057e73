# pawhome/services/test_payment_service.py
import re

from pawhome.services.payment_service import (
    DemoPaymentGateway,
    SignaturePaymentGateway,
    create_payment_gateway,
    to_subunits
)


def test_to_subunits():
    assert to_subunits(500) == 50000
    assert to_subunits(19.99) == 1999


def test_demo_order_shape():
    gateway = DemoPaymentGateway(key_id="rzp_test_demo")
    order = gateway.create_order(250, receipt="receipt_1", notes={"purpose": "food"})
    assert re.fullmatch(r"order_demo_\d+_[a-z0-9]{9}", order['id'])
    assert order['amount'] == 25000
    assert order['currency'] == "INR"
    assert order['status'] == "created"
    assert order['receipt'] == "receipt_1"
    assert order['notes'] == {"purpose": "food"}


def test_demo_order_generates_receipt():
    order = DemoPaymentGateway(key_id="k").create_order(10)
    assert order['receipt'].startswith("demo_receipt_")


def test_demo_verification_always_succeeds():
    assert DemoPaymentGateway(key_id="k").verify_payment("order_1", "pay_1", "anything") is True


def test_signature_gateway_checks_hmac():
    gateway = SignaturePaymentGateway(key_id="k", key_secret="top-secret")
    signature = gateway.expected_signature("order_1", "pay_1")
    assert gateway.verify_payment("order_1", "pay_1", signature) is True
    assert gateway.verify_payment("order_1", "pay_2", signature) is False


def test_signature_gateway_without_secret_rejects():
    assert SignaturePaymentGateway(key_id="k").verify_payment("o", "p", "sig") is False


def test_factory_follows_demo_mode_flag():
    assert isinstance(create_payment_gateway({'PAYMENT_DEMO_MODE': True, 'PAYMENT_KEY_ID': 'k'}), DemoPaymentGateway)
    gateway = create_payment_gateway({'PAYMENT_DEMO_MODE': False, 'PAYMENT_KEY_ID': 'k', 'PAYMENT_KEY_SECRET': 's'})
    assert isinstance(gateway, SignaturePaymentGateway)
    assert gateway.demo_mode is False
