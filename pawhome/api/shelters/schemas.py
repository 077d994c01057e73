# pawhome/api/shelters/schemas.py
from marshmallow import fields, validate

from pawhome.schemas.base import NOT_BLANK, CamelCaseSchema, QuerySchema, UpdateSchema, required_str


class CoordinatesSchema(CamelCaseSchema):
    latitude = fields.Float(required=True, validate=validate.Range(min=-90, max=90))
    longitude = fields.Float(required=True, validate=validate.Range(min=-180, max=180))


class OperatingHoursSchema(CamelCaseSchema):
    """요일별 운영 시간. 요청에 없는 요일은 기본값을 유지합니다."""
    monday = fields.Str()
    tuesday = fields.Str()
    wednesday = fields.Str()
    thursday = fields.Str()
    friday = fields.Str()
    saturday = fields.Str()
    sunday = fields.Str()


class ShelterCreateSchema(CamelCaseSchema):
    """POST /api/shelters/ 보호소 생성 요청 스키마."""
    name = required_str()
    address = required_str()
    city = required_str()
    state = required_str()
    zip_code = required_str()
    phone = required_str()
    email = fields.Email(required=True, validate=NOT_BLANK)
    capacity = fields.Int(required=True, validate=validate.Range(min=0))
    coordinates = fields.Nested(CoordinatesSchema, allow_none=True)
    operating_hours = fields.Nested(OperatingHoursSchema)


class ShelterUpdateSchema(UpdateSchema):
    """PUT /api/shelters/<id> 부분 업데이트 스키마. current_occupancy는 계산 값이므로 수정할 수 없습니다."""
    name = fields.Str(validate=validate.Length(min=1))
    address = fields.Str(validate=validate.Length(min=1))
    city = fields.Str(validate=validate.Length(min=1))
    state = fields.Str(validate=validate.Length(min=1))
    zip_code = fields.Str(validate=validate.Length(min=1))
    phone = fields.Str(validate=validate.Length(min=1))
    email = fields.Email()
    capacity = fields.Int(validate=validate.Range(min=0))
    coordinates = fields.Nested(CoordinatesSchema, allow_none=True)
    operating_hours = fields.Nested(OperatingHoursSchema)


class ShelterQuerySchema(QuerySchema):
    """GET /api/shelters/ 쿼리 파라미터. city는 부분 일치(대소문자 무시), state는 완전 일치."""
    city = fields.Str()
    state = fields.Str()


class ShelterSummarySchema(CamelCaseSchema):
    """다른 리소스 응답에 포함되는 보호소 요약 정보."""
    id = fields.Str(attribute='shelter_id')
    name = fields.Str()
    address = fields.Str()
    city = fields.Str()
    state = fields.Str()
    phone = fields.Str()
    email = fields.Str()


class ShelterResponseSchema(CamelCaseSchema):
    id = fields.Str(attribute='shelter_id')
    name = fields.Str()
    address = fields.Str()
    city = fields.Str()
    state = fields.Str()
    zip_code = fields.Str()
    phone = fields.Str()
    email = fields.Str()
    capacity = fields.Int()
    current_occupancy = fields.Int()
    coordinates = fields.Dict(allow_none=True)
    operating_hours = fields.Dict()
    created_at = fields.DateTime()


class ShelterDetailResponseSchema(ShelterResponseSchema):
    """GET /api/shelters/<id> 응답. 보호 중인 펫 수와 입양 가능한 펫 수를 포함합니다."""
    pets_count = fields.Int()
    available_pets = fields.Int()
