# pawhome/api/pets/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawhome.core.errors import InvalidRequestError, NotFoundError, error_response, validation_error_response
from pawhome.core.security import admin_required
from .schemas import (
    PetCreateSchema,
    PetUpdateSchema,
    AdoptionStatusSchema,
    PetQuerySchema,
    PetResponseSchema
)

pets_bp = Blueprint('pets_bp', __name__)


@pets_bp.route('/', methods=['GET'])
def list_pets():
    """
    입양 가능한 펫 목록을 조회합니다.
    Query: type, breed, age(이하), size, shelterId, adoptionStatus
    """
    pet_service = current_app.services['pets']
    try:
        filters = PetQuerySchema().load(request.args)
        pets = pet_service.list_pets(filters)
        return jsonify(PetResponseSchema(many=True).dump(pets)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid pet filters")
    except Exception as e:
        logging.error(f"Get pets API error: {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching pets", 500)


@pets_bp.route('/<string:pet_id>', methods=['GET'])
def get_pet(pet_id: str):
    pet_service = current_app.services['pets']
    try:
        pet = pet_service.get_pet(pet_id)
        return jsonify(PetResponseSchema().dump(pet)), 200
    except InvalidRequestError as e:
        return error_response("INVALID_PET_ID", str(e), 400)
    except NotFoundError as e:
        return error_response("PET_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Get pet API error (pet_id: {pet_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching pet details", 500)


@pets_bp.route('/', methods=['POST'])
@admin_required
def create_pet():
    pet_service = current_app.services['pets']
    try:
        validated_data = PetCreateSchema().load(request.get_json(silent=True) or {})
        new_pet = pet_service.create_pet(validated_data)
        return jsonify(PetResponseSchema().dump(new_pet)), 201
    except ValidationError as err:
        return validation_error_response(err, "Missing required pet fields")
    except InvalidRequestError as e:
        return error_response("INVALID_SHELTER", str(e), 400)
    except Exception as e:
        logging.error(f"Create pet API error: {e}", exc_info=True)
        return error_response("PET_CREATION_FAILED", "Error creating pet", 500)


@pets_bp.route('/<string:pet_id>', methods=['PUT'])
@admin_required
def update_pet(pet_id: str):
    pet_service = current_app.services['pets']
    try:
        update_data = PetUpdateSchema().load(request.get_json(silent=True) or {})
        updated_pet = pet_service.update_pet(pet_id, update_data)
        return jsonify(PetResponseSchema().dump(updated_pet)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid pet update")
    except InvalidRequestError as e:
        return error_response("INVALID_SHELTER", str(e), 400)
    except NotFoundError as e:
        return error_response("PET_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update pet API error (pet_id: {pet_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating pet", 500)


@pets_bp.route('/<string:pet_id>/adoption-status', methods=['PATCH'])
@admin_required
def update_adoption_status(pet_id: str):
    """입양 상태만 변경합니다 (available -> pending -> adopted)."""
    pet_service = current_app.services['pets']
    try:
        data = AdoptionStatusSchema().load(request.get_json(silent=True) or {})
        updated_pet = pet_service.update_adoption_status(pet_id, data['adoption_status'])
        return jsonify(PetResponseSchema().dump(updated_pet)), 200
    except ValidationError as err:
        return validation_error_response(err, "Adoption status is required")
    except InvalidRequestError as e:
        return error_response("INVALID_STATUS", str(e), 400)
    except NotFoundError as e:
        return error_response("PET_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update adoption status API error (pet_id: {pet_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating adoption status", 500)


@pets_bp.route('/<string:pet_id>', methods=['DELETE'])
@admin_required
def delete_pet(pet_id: str):
    pet_service = current_app.services['pets']
    try:
        pet_service.delete_pet(pet_id)
        return jsonify({"msg": "Pet deleted successfully"}), 200
    except NotFoundError as e:
        return error_response("PET_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Delete pet API error (pet_id: {pet_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error deleting pet", 500)
