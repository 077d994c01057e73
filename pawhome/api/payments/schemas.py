# pawhome/api/payments/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate

from pawhome.services.payment_service import DEFAULT_CURRENCY


class CreateOrderSchema(Schema):
    """결제 요청 필드는 결제사 규격(snake_case)을 그대로 따릅니다."""
    amount = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False, error="Valid amount is required"))
    currency = fields.Str(load_default=DEFAULT_CURRENCY, validate=validate.Length(equal=3))
    receipt = fields.Str(allow_none=True)
    notes = fields.Dict(load_default=dict)


class VerifyPaymentSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    razorpay_order_id = fields.Str(required=True, validate=validate.Length(min=1))
    razorpay_payment_id = fields.Str(required=True, validate=validate.Length(min=1))
    razorpay_signature = fields.Str(required=True, validate=validate.Length(min=1))
    donation_details = fields.Dict(allow_none=True)


class PaymentFailureSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    error_code = fields.Str(allow_none=True)
    error_description = fields.Str(allow_none=True)
    error_source = fields.Str(allow_none=True)
    error_step = fields.Str(allow_none=True)
    error_reason = fields.Str(allow_none=True)
    order_id = fields.Str(allow_none=True)
    payment_id = fields.Str(allow_none=True)
