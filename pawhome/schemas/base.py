# pawhome/schemas/base.py
from datetime import datetime

from marshmallow import EXCLUDE, Schema, fields, validate, validates_schema, ValidationError

from pawhome.utils.datetime_utils import DateTimeUtils


def camelcase(s: str) -> str:
    parts = iter(s.split("_"))
    return next(parts) + "".join(part.title() for part in parts)


class CamelCaseSchema(Schema):
    """내부의 snake_case 속성을 API의 camelCase 키로 매핑하는 기본 스키마."""

    def on_bind_field(self, field_name, field_obj):
        field_obj.data_key = camelcase(field_obj.data_key or field_name)


class IsoDateTime(fields.Field):
    """'2024-01-15' 같은 날짜만 있는 값과 ISO datetime 값을 모두 받아 UTC datetime으로 변환하는 필드."""

    default_error_messages = {"invalid": "Not a valid date."}

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return DateTimeUtils.to_iso_string(DateTimeUtils.for_firestore(value))

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, datetime):
            return DateTimeUtils.for_firestore(value)
        if not isinstance(value, str):
            raise self.make_error("invalid")
        try:
            return DateTimeUtils.parse_iso_datetime(value)
        except ValueError as e:
            raise self.make_error("invalid") from e


# 빈 문자열도 '누락'으로 취급하기 위해 required 메시지를 그대로 사용합니다.
NOT_BLANK = validate.Length(min=1, error=fields.Field.default_error_messages['required'])


def required_str(**kwargs) -> fields.Str:
    return fields.Str(required=True, validate=NOT_BLANK, **kwargs)


def one_of(enum_cls, error: str = None):
    """Enum 값 목록으로 OneOf 검증기를 만듭니다."""
    choices = [e.value for e in enum_cls]
    return validate.OneOf(choices, error=error or f"Must be one of: {', '.join(choices)}.")


class UpdateSchema(CamelCaseSchema):
    """부분 업데이트용 기본 스키마. 정의된 필드만 허용하며 빈 요청은 거부합니다."""

    @validates_schema
    def require_changes(self, data, **kwargs):
        if not data:
            raise ValidationError("No fields provided for update.")


class QuerySchema(CamelCaseSchema):
    """쿼리 파라미터용 기본 스키마. 알 수 없는 파라미터는 무시합니다."""

    class Meta:
        unknown = EXCLUDE
