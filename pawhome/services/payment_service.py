# pawhome/services/payment_service.py
"""
결제 게이트웨이 연동.

실제 결제사 연동 대신 두 가지 구현을 제공합니다.
- DemoPaymentGateway: 외부 통신 없이 주문/결제를 흉내 냅니다. 서명 검증은 항상 성공합니다.
- SignaturePaymentGateway: 주문 생성은 데모와 같지만 결제 서명을 HMAC-SHA256으로 실제 검증합니다.
"""

import hashlib
import hmac
import logging
import secrets
import string
import time
from typing import Any, Dict, Optional

DEFAULT_CURRENCY = 'INR'
_ORDER_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def to_subunits(amount: float) -> int:
    """루피 금액을 파이사 단위 정수로 변환합니다."""
    return int(round(amount * 100))


class PaymentGateway:
    """결제 게이트웨이 인터페이스."""
    demo_mode = False

    def __init__(self, key_id: str, key_secret: str = '', latency: float = 0.0):
        self.key_id = key_id
        self.key_secret = key_secret
        self.latency = latency

    def _simulate_latency(self):
        if self.latency > 0:
            time.sleep(self.latency)

    def create_order(self, amount: float, currency: str = DEFAULT_CURRENCY, receipt: Optional[str] = None,
                     notes: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        raise NotImplementedError

    def verify_payment(self, order_id: str, payment_id: str, signature: str) -> bool:
        raise NotImplementedError

    def get_payment(self, payment_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def expected_signature(self, order_id: str, payment_id: str) -> str:
        body = f"{order_id}|{payment_id}"
        return hmac.new(self.key_secret.encode(), body.encode(), hashlib.sha256).hexdigest()


class DemoPaymentGateway(PaymentGateway):
    demo_mode = True

    def create_order(self, amount, currency=DEFAULT_CURRENCY, receipt=None, notes=None):
        now_ms = int(time.time() * 1000)
        suffix = ''.join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(9))
        order = {
            'id': f"order_demo_{now_ms}_{suffix}",
            'amount': to_subunits(amount),
            'currency': currency,
            'receipt': receipt or f"demo_receipt_{now_ms}",
            'status': 'created',
            'created_at': now_ms // 1000,
            'notes': notes or {},
        }
        self._simulate_latency()
        logging.info(f"Demo payment order created: {order['id']} ({order['amount']} {currency})")
        return order

    def verify_payment(self, order_id, payment_id, signature):
        self._simulate_latency()
        logging.info(f"Demo payment verified: order={order_id}, payment={payment_id}")
        return True

    def get_payment(self, payment_id):
        self._simulate_latency()
        return {
            'id': payment_id,
            'amount': 100.0,
            'currency': DEFAULT_CURRENCY,
            'status': 'captured',
            'method': 'card',
            'created_at': int(time.time()),
            'email': 'demo@example.com',
            'contact': '+919999999999',
        }


class SignaturePaymentGateway(DemoPaymentGateway):
    """결제 서명을 키 시크릿으로 검증하는 게이트웨이."""
    demo_mode = False

    def verify_payment(self, order_id, payment_id, signature):
        if not self.key_secret:
            logging.error("PAYMENT_KEY_SECRET is not configured; rejecting payment verification.")
            return False
        expected = self.expected_signature(order_id, payment_id)
        return hmac.compare_digest(expected, signature or '')


def create_payment_gateway(config) -> PaymentGateway:
    """앱 설정에 따라 결제 게이트웨이 구현을 선택합니다."""
    gateway_cls = DemoPaymentGateway if config.get('PAYMENT_DEMO_MODE', True) else SignaturePaymentGateway
    return gateway_cls(
        key_id=config.get('PAYMENT_KEY_ID'),
        key_secret=config.get('PAYMENT_KEY_SECRET') or '',
        latency=config.get('PAYMENT_DEMO_LATENCY', 0.0)
    )
