# pawhome/api/donations/schemas.py
from marshmallow import fields, validate, validates_schema, ValidationError

from pawhome.models.donation import PaymentStatus
from pawhome.schemas.base import NOT_BLANK, CamelCaseSchema, IsoDateTime, QuerySchema, UpdateSchema, one_of, required_str

AMOUNT_ERROR = "Donation amount must be greater than 0"
STATUS_ERROR = "Invalid payment status"


def positive_amount(**kwargs):
    return fields.Float(validate=validate.Range(min=0, min_inclusive=False, error=AMOUNT_ERROR), **kwargs)


class DonationCreateSchema(CamelCaseSchema):
    """POST /api/donations/ 기부 기록 생성. paymentStatus를 생략하면 pending으로 저장됩니다."""
    donor_name = required_str()
    email = fields.Email(required=True, validate=NOT_BLANK)
    amount = positive_amount(required=True)
    payment_id = required_str()
    payment_status = fields.Str(load_default=PaymentStatus.PENDING.value, validate=one_of(PaymentStatus, error=STATUS_ERROR))


class DonationUpdateSchema(UpdateSchema):
    """PUT /api/donations/<id>. 결제 정보(paymentId, paymentStatus)는 여기서 수정할 수 없습니다."""
    donor_name = fields.Str(validate=validate.Length(min=1))
    email = fields.Email()
    amount = positive_amount()


class PaymentStatusSchema(CamelCaseSchema):
    payment_status = fields.Str(required=True, validate=one_of(PaymentStatus, error=STATUS_ERROR))


class DonationQuerySchema(QuerySchema):
    """GET /api/donations/ 필터. status는 결제 상태, startDate/endDate는 생성일 범위(경계 포함)."""
    status = fields.Str(validate=one_of(PaymentStatus, error=STATUS_ERROR))
    start_date = IsoDateTime()
    end_date = IsoDateTime()

    @validates_schema
    def validate_range(self, data, **kwargs):
        start, end = data.get('start_date'), data.get('end_date')
        if start and end and start > end:
            raise ValidationError("startDate must be before endDate", field_name='startDate')


class DonationResponseSchema(CamelCaseSchema):
    id = fields.Str(attribute='donation_id')
    donor_name = fields.Str()
    email = fields.Str()
    amount = fields.Float()
    payment_id = fields.Str()
    payment_status = fields.Str()
    created_at = fields.DateTime()


class MonthlyStatSchema(CamelCaseSchema):
    year = fields.Int()
    month = fields.Int()
    count = fields.Int()
    amount = fields.Float()


class DonationStatsSchema(CamelCaseSchema):
    total_donations = fields.Int()
    successful_donations = fields.Int()
    pending_donations = fields.Int()
    failed_donations = fields.Int()
    total_amount = fields.Float()
    monthly_stats = fields.List(fields.Nested(MonthlyStatSchema))
