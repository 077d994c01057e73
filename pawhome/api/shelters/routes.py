# pawhome/api/shelters/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawhome.api.pets.schemas import PetResponseSchema
from pawhome.core.errors import InvalidRequestError, NotFoundError, error_response, validation_error_response
from pawhome.core.security import admin_required
from .schemas import (
    ShelterCreateSchema,
    ShelterUpdateSchema,
    ShelterQuerySchema,
    ShelterResponseSchema,
    ShelterDetailResponseSchema
)

shelters_bp = Blueprint('shelters_bp', __name__)


@shelters_bp.route('/', methods=['GET'])
def list_shelters():
    """보호소 목록을 조회합니다. 각 보호소의 현재 수용 두수를 포함합니다."""
    shelter_service = current_app.services['shelters']
    try:
        filters = ShelterQuerySchema().load(request.args)
        shelters = shelter_service.list_shelters(filters)
        return jsonify(ShelterResponseSchema(many=True).dump(shelters)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid shelter filters")
    except Exception as e:
        logging.error(f"Get shelters API error: {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching shelters", 500)


@shelters_bp.route('/<string:shelter_id>', methods=['GET'])
def get_shelter(shelter_id: str):
    shelter_service = current_app.services['shelters']
    try:
        shelter = shelter_service.get_shelter(shelter_id)
        return jsonify(ShelterDetailResponseSchema().dump(shelter)), 200
    except NotFoundError as e:
        return error_response("SHELTER_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Get shelter API error (shelter_id: {shelter_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching shelter details", 500)


@shelters_bp.route('/<string:shelter_id>/pets', methods=['GET'])
def get_shelter_pets(shelter_id: str):
    """특정 보호소가 보호 중인 펫 목록을 조회합니다."""
    pet_service = current_app.services['pets']
    try:
        pets = pet_service.list_pets({'shelter_id': shelter_id})
        return jsonify(PetResponseSchema(many=True).dump(pets)), 200
    except Exception as e:
        logging.error(f"Get shelter pets API error (shelter_id: {shelter_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching shelter pets", 500)


@shelters_bp.route('/', methods=['POST'])
@admin_required
def create_shelter():
    shelter_service = current_app.services['shelters']
    try:
        validated_data = ShelterCreateSchema().load(request.get_json(silent=True) or {})
        new_shelter = shelter_service.create_shelter(validated_data)
        return jsonify(ShelterResponseSchema().dump(new_shelter)), 201
    except ValidationError as err:
        return validation_error_response(err, "Missing required shelter fields")
    except Exception as e:
        logging.error(f"Create shelter API error: {e}", exc_info=True)
        return error_response("SHELTER_CREATION_FAILED", "Error creating shelter", 500)


@shelters_bp.route('/<string:shelter_id>', methods=['PUT'])
@admin_required
def update_shelter(shelter_id: str):
    shelter_service = current_app.services['shelters']
    try:
        update_data = ShelterUpdateSchema().load(request.get_json(silent=True) or {})
        updated_shelter = shelter_service.update_shelter(shelter_id, update_data)
        return jsonify(ShelterResponseSchema().dump(updated_shelter)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid shelter update")
    except NotFoundError as e:
        return error_response("SHELTER_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update shelter API error (shelter_id: {shelter_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating shelter", 500)


@shelters_bp.route('/<string:shelter_id>', methods=['DELETE'])
@admin_required
def delete_shelter(shelter_id: str):
    shelter_service = current_app.services['shelters']
    try:
        shelter_service.delete_shelter(shelter_id)
        return jsonify({"msg": "Shelter deleted successfully"}), 200
    except InvalidRequestError as e:
        return error_response("SHELTER_HAS_PETS", str(e), 400)
    except NotFoundError as e:
        return error_response("SHELTER_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Delete shelter API error (shelter_id: {shelter_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error deleting shelter", 500)
