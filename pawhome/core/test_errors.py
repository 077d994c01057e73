# pawhome/core/test_errors.py
from marshmallow import ValidationError

from pawhome.api.pets.schemas import PetUpdateSchema
from pawhome.api.donations.schemas import DonationCreateSchema
from pawhome.core.errors import summarize_validation_error


def _errors(schema, data):
    try:
        schema.load(data)
    except ValidationError as err:
        return err
    raise AssertionError("expected a validation error")


def test_missing_field_uses_resource_message():
    err = _errors(DonationCreateSchema(), {"donorName": "Asha", "amount": 50})
    assert summarize_validation_error(err, "Missing required donation fields") == "Missing required donation fields"


def test_blank_string_counts_as_missing():
    err = _errors(DonationCreateSchema(), {
        "donorName": "", "email": "asha@example.com", "amount": 50, "paymentId": "pay_1"
    })
    assert summarize_validation_error(err, "Missing required donation fields") == "Missing required donation fields"


def test_first_field_message_when_nothing_is_missing():
    err = _errors(DonationCreateSchema(), {
        "donorName": "Asha", "email": "asha@example.com", "amount": 0, "paymentId": "pay_1"
    })
    assert summarize_validation_error(err, "unused") == "Donation amount must be greater than 0"


def test_unknown_field_names_the_field():
    err = _errors(PetUpdateSchema(), {"name": "Rex", "currentOccupancy": 3})
    assert summarize_validation_error(err, "unused") == "Field 'currentOccupancy' cannot be set"


def test_empty_update_is_rejected():
    err = _errors(PetUpdateSchema(), {})
    assert summarize_validation_error(err, "unused") == "No fields provided for update."
