# pawhome/api/admin/routes.py
"""
관리자 대시보드 API. 블루프린트 전체가 admin 전용입니다.
펫 관련 로직은 PetService를 그대로 사용하고 응답만 {"success": true, ...} 형태로 감쌉니다.
"""

import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawhome.api.pets.schemas import PetCreateSchema, PetUpdateSchema, PetResponseSchema
from pawhome.api.shelters.schemas import ShelterSummarySchema
from pawhome.core.errors import InvalidRequestError, NotFoundError, error_response, validation_error_response
from pawhome.core.security import ensure_admin
from .schemas import AdminStatsSchema

admin_bp = Blueprint('admin_bp', __name__)


@admin_bp.before_request
def require_admin():
    return ensure_admin()


@admin_bp.route('/pets', methods=['GET'])
def list_pets():
    pet_service = current_app.services['pets']
    try:
        pets = pet_service.list_pets({})
        return jsonify({"success": True, "pets": PetResponseSchema(many=True).dump(pets)}), 200
    except Exception as e:
        logging.error(f"Admin get pets API error: {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching pets", 500)


@admin_bp.route('/pets', methods=['POST'])
def create_pet():
    pet_service = current_app.services['pets']
    try:
        validated_data = PetCreateSchema().load(request.get_json(silent=True) or {})
        new_pet = pet_service.create_pet(validated_data)
        return jsonify({
            "success": True,
            "msg": "Pet added successfully",
            "pet": PetResponseSchema().dump(new_pet)
        }), 201
    except ValidationError as err:
        return validation_error_response(err, "Missing required pet fields")
    except InvalidRequestError as e:
        return error_response("INVALID_SHELTER", str(e), 400)
    except Exception as e:
        logging.error(f"Admin create pet API error: {e}", exc_info=True)
        return error_response("PET_CREATION_FAILED", "Error creating pet", 500)


@admin_bp.route('/pets/<string:pet_id>', methods=['PUT'])
def update_pet(pet_id: str):
    pet_service = current_app.services['pets']
    try:
        update_data = PetUpdateSchema().load(request.get_json(silent=True) or {})
        updated_pet = pet_service.update_pet(pet_id, update_data)
        return jsonify({
            "success": True,
            "msg": "Pet updated successfully",
            "pet": PetResponseSchema().dump(updated_pet)
        }), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid pet update")
    except InvalidRequestError as e:
        return error_response("INVALID_SHELTER", str(e), 400)
    except NotFoundError as e:
        return error_response("PET_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Admin update pet API error (pet_id: {pet_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating pet", 500)


@admin_bp.route('/pets/<string:pet_id>', methods=['DELETE'])
def delete_pet(pet_id: str):
    pet_service = current_app.services['pets']
    try:
        pet_service.delete_pet(pet_id)
        return jsonify({"success": True, "msg": "Pet deleted successfully"}), 200
    except NotFoundError as e:
        return error_response("PET_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Admin delete pet API error (pet_id: {pet_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error deleting pet", 500)


@admin_bp.route('/shelters', methods=['GET'])
def list_shelters():
    """펫 등록 화면의 보호소 선택 목록."""
    shelter_service = current_app.services['shelters']
    try:
        shelters = shelter_service.list_for_dropdown()
        return jsonify({"success": True, "shelters": ShelterSummarySchema(many=True).dump(shelters)}), 200
    except Exception as e:
        logging.error(f"Admin get shelters API error: {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching shelters", 500)


@admin_bp.route('/stats', methods=['GET'])
def get_stats():
    pet_service = current_app.services['pets']
    try:
        stats = pet_service.get_stats()
        return jsonify({"success": True, "stats": AdminStatsSchema().dump(stats)}), 200
    except Exception as e:
        logging.error(f"Admin get stats API error: {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching dashboard stats", 500)
