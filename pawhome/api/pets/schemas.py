# pawhome/api/pets/schemas.py
from marshmallow import fields, validate

from pawhome.api.shelters.schemas import ShelterSummarySchema
from pawhome.models.pet import AdoptionStatus, PetGender, PetSize
from pawhome.schemas.base import CamelCaseSchema, QuerySchema, UpdateSchema, one_of, required_str


class PetCreateSchema(CamelCaseSchema):
    """POST /api/pets/ 펫 등록 요청 스키마."""
    name = required_str()
    type = required_str()
    breed = required_str()
    age = fields.Int(required=True, validate=validate.Range(min=0))
    description = required_str()
    image = required_str()
    shelter_id = required_str()
    gender = fields.Str(required=True, validate=one_of(PetGender))
    size = fields.Str(required=True, validate=one_of(PetSize))
    color = required_str()
    adoption_fee = fields.Float(required=True, validate=validate.Range(min=0))
    weight = fields.Float(allow_none=True, validate=validate.Range(min=0))
    is_vaccinated = fields.Bool(load_default=False)
    is_neutered = fields.Bool(load_default=False)
    special_needs = fields.Str(allow_none=True)


class PetUpdateSchema(UpdateSchema):
    """PUT /api/pets/<pet_id> 부분 업데이트 스키마 (수정 가능한 필드 목록)."""
    name = fields.Str(validate=validate.Length(min=1))
    type = fields.Str(validate=validate.Length(min=1))
    breed = fields.Str(validate=validate.Length(min=1))
    age = fields.Int(validate=validate.Range(min=0))
    description = fields.Str(validate=validate.Length(min=1))
    image = fields.Str(validate=validate.Length(min=1))
    shelter_id = fields.Str(validate=validate.Length(min=1))
    gender = fields.Str(validate=one_of(PetGender))
    size = fields.Str(validate=one_of(PetSize))
    color = fields.Str(validate=validate.Length(min=1))
    adoption_fee = fields.Float(validate=validate.Range(min=0))
    adoption_status = fields.Str(validate=one_of(AdoptionStatus, error="Invalid adoption status"))
    weight = fields.Float(allow_none=True, validate=validate.Range(min=0))
    is_vaccinated = fields.Bool()
    is_neutered = fields.Bool()
    special_needs = fields.Str(allow_none=True)


class AdoptionStatusSchema(CamelCaseSchema):
    """PATCH /api/pets/<pet_id>/adoption-status 요청 스키마."""
    adoption_status = fields.Str(required=True, validate=one_of(AdoptionStatus, error="Invalid adoption status"))


class PetQuerySchema(QuerySchema):
    """
    GET /api/pets/ 필터.
    - type, size, shelterId, adoptionStatus: 완전 일치
    - breed: 부분 일치 (대소문자 무시)
    - age: 지정한 나이 이하
    """
    type = fields.Str()
    breed = fields.Str()
    age = fields.Int(validate=validate.Range(min=0))
    size = fields.Str()
    shelter_id = fields.Str()
    adoption_status = fields.Str()


class PetSummarySchema(CamelCaseSchema):
    """의료 기록 등 다른 리소스 응답에 포함되는 펫 요약 정보."""
    id = fields.Str(attribute='pet_id')
    name = fields.Str()
    type = fields.Str()
    breed = fields.Str()


class PetResponseSchema(CamelCaseSchema):
    id = fields.Str(attribute='pet_id')
    shelter_id = fields.Str()
    shelter = fields.Nested(ShelterSummarySchema, allow_none=True)
    name = fields.Str()
    type = fields.Str()
    breed = fields.Str()
    age = fields.Int()
    description = fields.Str()
    image = fields.Str()
    gender = fields.Str()
    size = fields.Str()
    color = fields.Str()
    weight = fields.Float(allow_none=True)
    adoption_status = fields.Str()
    adoption_fee = fields.Float()
    is_vaccinated = fields.Bool()
    is_neutered = fields.Bool()
    special_needs = fields.Str(allow_none=True)
    created_at = fields.DateTime()
