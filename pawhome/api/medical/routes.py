# pawhome/api/medical/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawhome.core.errors import InvalidRequestError, NotFoundError, error_response, validation_error_response
from pawhome.core.security import admin_required, optional_auth
from .schemas import (
    MedicalRecordCreateSchema,
    MedicalRecordUpdateSchema,
    MedicalRecordResponseSchema,
    VaccinationHistorySchema
)

medical_bp = Blueprint('medical_bp', __name__)


@medical_bp.route('/pet/<string:pet_id>', methods=['GET'])
@optional_auth
def list_pet_records(pet_id: str):
    medical_service = current_app.services['medical']
    try:
        records = medical_service.list_for_pet(pet_id)
        return jsonify(MedicalRecordResponseSchema(many=True).dump(records)), 200
    except NotFoundError as e:
        return error_response("PET_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Get medical records API error (pet_id: {pet_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching medical records", 500)


@medical_bp.route('/pet/<string:pet_id>/vaccinations', methods=['GET'])
@optional_auth
def get_vaccination_history(pet_id: str):
    medical_service = current_app.services['medical']
    try:
        history = medical_service.get_vaccination_history(pet_id)
        return jsonify(VaccinationHistorySchema(many=True).dump(history)), 200
    except Exception as e:
        logging.error(f"Get vaccination history API error (pet_id: {pet_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching vaccination history", 500)


@medical_bp.route('/<string:record_id>', methods=['GET'])
@optional_auth
def get_record(record_id: str):
    medical_service = current_app.services['medical']
    try:
        record = medical_service.get_record(record_id)
        return jsonify(MedicalRecordResponseSchema().dump(record)), 200
    except NotFoundError as e:
        return error_response("RECORD_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Get medical record API error (record_id: {record_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching medical record", 500)


@medical_bp.route('/', methods=['POST'])
@admin_required
def create_record():
    medical_service = current_app.services['medical']
    try:
        validated_data = MedicalRecordCreateSchema().load(request.get_json(silent=True) or {})
        record = medical_service.create_record(validated_data)
        return jsonify(MedicalRecordResponseSchema().dump(record)), 201
    except ValidationError as err:
        return validation_error_response(err, "Missing required medical record fields")
    except InvalidRequestError as e:
        return error_response("INVALID_PET", str(e), 400)
    except Exception as e:
        logging.error(f"Create medical record API error: {e}", exc_info=True)
        return error_response("RECORD_CREATION_FAILED", "Error creating medical record", 500)


@medical_bp.route('/<string:record_id>', methods=['PUT'])
@admin_required
def update_record(record_id: str):
    medical_service = current_app.services['medical']
    try:
        update_data = MedicalRecordUpdateSchema().load(request.get_json(silent=True) or {})
        record = medical_service.update_record(record_id, update_data)
        return jsonify(MedicalRecordResponseSchema().dump(record)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid medical record update")
    except InvalidRequestError as e:
        return error_response("INVALID_PET", str(e), 400)
    except NotFoundError as e:
        return error_response("RECORD_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update medical record API error (record_id: {record_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating medical record", 500)


@medical_bp.route('/<string:record_id>', methods=['DELETE'])
@admin_required
def delete_record(record_id: str):
    medical_service = current_app.services['medical']
    try:
        medical_service.delete_record(record_id)
        return jsonify({"msg": "Medical record deleted successfully"}), 200
    except NotFoundError as e:
        return error_response("RECORD_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Delete medical record API error (record_id: {record_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error deleting medical record", 500)
