# pawhome/api/payments/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawhome.core.errors import error_response, validation_error_response
from pawhome.core.security import optional_auth
from .schemas import CreateOrderSchema, VerifyPaymentSchema, PaymentFailureSchema

payments_bp = Blueprint('payments_bp', __name__)


@payments_bp.route('/create-order', methods=['POST'])
def create_order():
    """기부 결제를 위한 주문을 생성합니다. 금액은 파이사(1/100) 단위로 변환되어 반환됩니다."""
    gateway = current_app.services['payments']
    try:
        data = CreateOrderSchema().load(request.get_json(silent=True) or {})
        order = gateway.create_order(
            amount=data['amount'],
            currency=data['currency'],
            receipt=data.get('receipt'),
            notes=data['notes']
        )
        return jsonify({
            "success": True,
            "order": {k: order[k] for k in ('id', 'amount', 'currency', 'receipt', 'status', 'created_at')},
            "key_id": gateway.key_id,
            "demo_mode": gateway.demo_mode,
            "message": "Demo order created successfully" if gateway.demo_mode else "Order created successfully"
        }), 200
    except ValidationError as err:
        return validation_error_response(err, "Valid amount is required")
    except Exception as e:
        logging.error(f"Create payment order API error: {e}", exc_info=True)
        return error_response("PAYMENT_ORDER_FAILED", "Failed to create payment order", 500)


@payments_bp.route('/verify-payment', methods=['POST'])
def verify_payment():
    gateway = current_app.services['payments']
    try:
        data = VerifyPaymentSchema().load(request.get_json(silent=True) or {})
        order_id = data['razorpay_order_id']
        payment_id = data['razorpay_payment_id']

        if not gateway.verify_payment(order_id, payment_id, data['razorpay_signature']):
            logging.warning(f"Payment verification failed: order={order_id}, payment={payment_id}")
            return error_response("PAYMENT_VERIFICATION_FAILED", "Payment verification failed", 400)

        logging.info(f"Payment verified: order={order_id}, payment={payment_id}, details={data.get('donation_details')}")
        return jsonify({
            "success": True,
            "msg": "Payment verified successfully",
            "payment_id": payment_id,
            "order_id": order_id,
            "demo_mode": gateway.demo_mode,
            "verification_status": "success"
        }), 200
    except ValidationError as err:
        return validation_error_response(err, "Missing payment verification parameters")
    except Exception as e:
        logging.error(f"Verify payment API error: {e}", exc_info=True)
        return error_response("PAYMENT_VERIFICATION_FAILED", "Payment verification failed", 500)


@payments_bp.route('/payment-failure', methods=['POST'])
def payment_failure():
    """클라이언트에서 발생한 결제 실패 정보를 기록합니다."""
    gateway = current_app.services['payments']
    try:
        data = PaymentFailureSchema().load(request.get_json(silent=True) or {})
        logging.warning(
            f"Payment failed: order={data.get('order_id')}, payment={data.get('payment_id')}, "
            f"code={data.get('error_code')}, description={data.get('error_description')}"
        )
        return jsonify({
            "success": True,
            "msg": "Payment failure recorded",
            "error_details": {
                "code": data.get('error_code'),
                "description": data.get('error_description'),
                "source": data.get('error_source'),
                "step": data.get('error_step'),
                "reason": data.get('error_reason')
            },
            "demo_mode": gateway.demo_mode
        }), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid payment failure details")
    except Exception as e:
        logging.error(f"Payment failure API error: {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Failed to handle payment failure", 500)


@payments_bp.route('/payment/<string:payment_id>', methods=['GET'])
@optional_auth
def get_payment(payment_id: str):
    gateway = current_app.services['payments']
    try:
        payment = gateway.get_payment(payment_id)
        return jsonify({
            "success": True,
            "payment": payment,
            "demo_mode": gateway.demo_mode
        }), 200
    except Exception as e:
        logging.error(f"Get payment API error (payment_id: {payment_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Failed to fetch payment details", 500)
