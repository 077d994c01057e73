# pawhome/api/medical/schemas.py
from marshmallow import fields, validate

from pawhome.api.pets.schemas import PetSummarySchema
from pawhome.models.medical_record import RecordType
from pawhome.schemas.base import CamelCaseSchema, IsoDateTime, UpdateSchema, one_of, required_str


class MedicationSchema(CamelCaseSchema):
    name = fields.Str()
    dosage = fields.Str()
    frequency = fields.Str()
    duration = fields.Str()


class VaccinationSchema(CamelCaseSchema):
    vaccine = fields.Str()
    date_given = IsoDateTime(allow_none=True)
    next_due = IsoDateTime(allow_none=True)
    batch_number = fields.Str(allow_none=True)


class MedicalRecordCreateSchema(CamelCaseSchema):
    """POST /api/medical/ 의료 기록 생성 요청 스키마."""
    pet_id = required_str()
    record_type = fields.Str(required=True, validate=one_of(RecordType))
    title = required_str()
    description = required_str()
    veterinarian = required_str()
    clinic = required_str()
    date = IsoDateTime(required=True)
    next_appointment = IsoDateTime(allow_none=True)
    medications = fields.List(fields.Nested(MedicationSchema), load_default=list)
    vaccinations = fields.List(fields.Nested(VaccinationSchema), load_default=list)
    cost = fields.Float(load_default=0, validate=validate.Range(min=0))
    notes = fields.Str(allow_none=True)
    attachments = fields.List(fields.Str(), load_default=list)


class MedicalRecordUpdateSchema(UpdateSchema):
    pet_id = fields.Str(validate=validate.Length(min=1))
    record_type = fields.Str(validate=one_of(RecordType))
    title = fields.Str(validate=validate.Length(min=1))
    description = fields.Str(validate=validate.Length(min=1))
    veterinarian = fields.Str(validate=validate.Length(min=1))
    clinic = fields.Str(validate=validate.Length(min=1))
    date = IsoDateTime()
    next_appointment = IsoDateTime(allow_none=True)
    medications = fields.List(fields.Nested(MedicationSchema))
    vaccinations = fields.List(fields.Nested(VaccinationSchema))
    cost = fields.Float(validate=validate.Range(min=0))
    notes = fields.Str(allow_none=True)
    attachments = fields.List(fields.Str())


class MedicalRecordResponseSchema(CamelCaseSchema):
    id = fields.Str(attribute='record_id')
    pet_id = fields.Str()
    pet = fields.Nested(PetSummarySchema, allow_none=True)
    record_type = fields.Str()
    title = fields.Str()
    description = fields.Str()
    veterinarian = fields.Str()
    clinic = fields.Str()
    date = IsoDateTime()
    next_appointment = IsoDateTime(allow_none=True)
    medications = fields.List(fields.Nested(MedicationSchema))
    vaccinations = fields.List(fields.Nested(VaccinationSchema))
    cost = fields.Float()
    notes = fields.Str(allow_none=True)
    attachments = fields.List(fields.Str())
    created_at = fields.DateTime()


class VaccinationHistorySchema(VaccinationSchema):
    """접종 이력 항목. 접종 정보에 해당 진료 기록의 메타데이터를 덧붙입니다."""
    record_id = fields.Str()
    record_date = IsoDateTime()
    veterinarian = fields.Str()
    clinic = fields.Str()
