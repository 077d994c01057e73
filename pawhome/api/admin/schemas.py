# pawhome/api/admin/schemas.py
from marshmallow import fields

from pawhome.api.pets.schemas import PetResponseSchema
from pawhome.schemas.base import CamelCaseSchema


class AdminStatsSchema(CamelCaseSchema):
    total_pets = fields.Int()
    available_pets = fields.Int()
    adopted_pets = fields.Int()
    pending_pets = fields.Int()
    recent_pets = fields.List(fields.Nested(PetResponseSchema))
