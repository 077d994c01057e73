# pawhome/api/volunteers/schemas.py
from marshmallow import fields, validate

from pawhome.api.shelters.schemas import ShelterSummarySchema
from pawhome.models.volunteer import BackgroundCheck, Experience, VolunteerStatus
from pawhome.schemas.base import NOT_BLANK, CamelCaseSchema, IsoDateTime, QuerySchema, UpdateSchema, one_of, required_str

WEEK_DAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')


class DayAvailabilitySchema(CamelCaseSchema):
    available = fields.Bool(load_default=False)
    time_slots = fields.List(fields.Str(), load_default=list)


class EmergencyContactSchema(CamelCaseSchema):
    name = fields.Str()
    phone = fields.Str()
    relationship = fields.Str()


def availability_field():
    return fields.Dict(
        keys=fields.Str(validate=validate.OneOf(WEEK_DAYS)),
        values=fields.Nested(DayAvailabilitySchema)
    )


class VolunteerCreateSchema(CamelCaseSchema):
    """POST /api/volunteers/ 봉사자 지원서 스키마. 상태/신원 조회/봉사 시간은 지원자가 지정할 수 없습니다."""
    name = required_str()
    email = fields.Email(required=True, validate=NOT_BLANK)
    phone = required_str()
    address = required_str()
    date_of_birth = IsoDateTime(required=True)
    shelter_id = required_str()
    skills = fields.List(fields.Str(), load_default=list)
    availability = availability_field()
    experience = fields.Str(load_default=Experience.NONE.value, validate=one_of(Experience))
    interests = fields.List(fields.Str(), load_default=list)
    emergency_contact = fields.Nested(EmergencyContactSchema, allow_none=True)


class VolunteerUpdateSchema(UpdateSchema):
    """PUT /api/volunteers/<id> 수정 가능한 필드 목록."""
    name = fields.Str(validate=validate.Length(min=1))
    email = fields.Email()
    phone = fields.Str(validate=validate.Length(min=1))
    address = fields.Str(validate=validate.Length(min=1))
    date_of_birth = IsoDateTime()
    shelter_id = fields.Str(validate=validate.Length(min=1))
    skills = fields.List(fields.Str())
    availability = availability_field()
    experience = fields.Str(validate=one_of(Experience))
    interests = fields.List(fields.Str())
    emergency_contact = fields.Nested(EmergencyContactSchema, allow_none=True)


class VolunteerStatusSchema(UpdateSchema):
    """status, backgroundCheck 중 하나 이상이 필요합니다."""
    status = fields.Str(validate=one_of(VolunteerStatus, error="Invalid volunteer status"))
    background_check = fields.Str(validate=one_of(BackgroundCheck, error="Invalid background check status"))


class VolunteerHoursSchema(CamelCaseSchema):
    hours_to_add = fields.Float(
        required=True,
        validate=validate.Range(min=0, error="Invalid hours value"),
        error_messages={"invalid": "Invalid hours value", "special": "Invalid hours value"}
    )


class VolunteerQuerySchema(QuerySchema):
    shelter_id = fields.Str()
    status = fields.Str()
    experience = fields.Str()


class VolunteerResponseSchema(CamelCaseSchema):
    id = fields.Str(attribute='volunteer_id')
    shelter_id = fields.Str()
    shelter = fields.Nested(ShelterSummarySchema, allow_none=True)
    name = fields.Str()
    email = fields.Str()
    phone = fields.Str()
    address = fields.Str()
    date_of_birth = IsoDateTime()
    skills = fields.List(fields.Str())
    availability = availability_field()
    experience = fields.Str()
    interests = fields.List(fields.Str())
    emergency_contact = fields.Nested(EmergencyContactSchema, allow_none=True)
    background_check = fields.Str()
    status = fields.Str()
    hours_completed = fields.Float()
    start_date = fields.DateTime()
    created_at = fields.DateTime()
