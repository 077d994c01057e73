# pawhome/api/volunteers/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawhome.core.errors import InvalidRequestError, NotFoundError, error_response, validation_error_response
from pawhome.core.security import admin_required
from .schemas import (
    VolunteerCreateSchema,
    VolunteerUpdateSchema,
    VolunteerStatusSchema,
    VolunteerHoursSchema,
    VolunteerQuerySchema,
    VolunteerResponseSchema
)

volunteers_bp = Blueprint('volunteers_bp', __name__)


@volunteers_bp.route('/', methods=['POST'])
def apply_volunteer():
    """봉사자 지원서를 제출합니다. 인증 없이 누구나 지원할 수 있습니다."""
    volunteer_service = current_app.services['volunteers']
    try:
        validated_data = VolunteerCreateSchema().load(request.get_json(silent=True) or {})
        volunteer = volunteer_service.create_volunteer(validated_data)
        return jsonify(VolunteerResponseSchema().dump(volunteer)), 201
    except ValidationError as err:
        return validation_error_response(err, "Missing required volunteer fields")
    except InvalidRequestError as e:
        return error_response("INVALID_REQUEST", str(e), 400)
    except Exception as e:
        logging.error(f"Create volunteer API error: {e}", exc_info=True)
        return error_response("VOLUNTEER_CREATION_FAILED", "Error creating volunteer application", 500)


@volunteers_bp.route('/', methods=['GET'])
@admin_required
def list_volunteers():
    volunteer_service = current_app.services['volunteers']
    try:
        filters = VolunteerQuerySchema().load(request.args)
        volunteers = volunteer_service.list_volunteers(filters)
        return jsonify(VolunteerResponseSchema(many=True).dump(volunteers)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid volunteer filters")
    except Exception as e:
        logging.error(f"Get volunteers API error: {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching volunteers", 500)


@volunteers_bp.route('/shelter/<string:shelter_id>', methods=['GET'])
@admin_required
def list_shelter_volunteers(shelter_id: str):
    volunteer_service = current_app.services['volunteers']
    try:
        volunteers = volunteer_service.list_volunteers({'shelter_id': shelter_id})
        return jsonify(VolunteerResponseSchema(many=True).dump(volunteers)), 200
    except Exception as e:
        logging.error(f"Get shelter volunteers API error (shelter_id: {shelter_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching shelter volunteers", 500)


@volunteers_bp.route('/<string:volunteer_id>', methods=['GET'])
@admin_required
def get_volunteer(volunteer_id: str):
    volunteer_service = current_app.services['volunteers']
    try:
        volunteer = volunteer_service.get_volunteer(volunteer_id)
        return jsonify(VolunteerResponseSchema().dump(volunteer)), 200
    except NotFoundError as e:
        return error_response("VOLUNTEER_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Get volunteer API error (volunteer_id: {volunteer_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching volunteer details", 500)


@volunteers_bp.route('/<string:volunteer_id>', methods=['PUT'])
@admin_required
def update_volunteer(volunteer_id: str):
    volunteer_service = current_app.services['volunteers']
    try:
        update_data = VolunteerUpdateSchema().load(request.get_json(silent=True) or {})
        volunteer = volunteer_service.update_volunteer(volunteer_id, update_data)
        return jsonify(VolunteerResponseSchema().dump(volunteer)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid volunteer update")
    except InvalidRequestError as e:
        return error_response("INVALID_REQUEST", str(e), 400)
    except NotFoundError as e:
        return error_response("VOLUNTEER_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update volunteer API error (volunteer_id: {volunteer_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating volunteer", 500)


@volunteers_bp.route('/<string:volunteer_id>/status', methods=['PATCH'])
@admin_required
def update_volunteer_status(volunteer_id: str):
    volunteer_service = current_app.services['volunteers']
    try:
        status_data = VolunteerStatusSchema().load(request.get_json(silent=True) or {})
        volunteer = volunteer_service.update_status(volunteer_id, status_data)
        return jsonify(VolunteerResponseSchema().dump(volunteer)), 200
    except ValidationError as err:
        return validation_error_response(err, "Status or background check is required")
    except NotFoundError as e:
        return error_response("VOLUNTEER_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update volunteer status API error (volunteer_id: {volunteer_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating volunteer status", 500)


@volunteers_bp.route('/<string:volunteer_id>/hours', methods=['PATCH'])
@admin_required
def add_volunteer_hours(volunteer_id: str):
    """누적 봉사 시간에 hoursToAdd 만큼 더합니다. 음수는 허용되지 않습니다."""
    volunteer_service = current_app.services['volunteers']
    try:
        data = VolunteerHoursSchema().load(request.get_json(silent=True) or {})
        volunteer = volunteer_service.add_hours(volunteer_id, data['hours_to_add'])
        return jsonify(VolunteerResponseSchema().dump(volunteer)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid hours value")
    except InvalidRequestError as e:
        return error_response("INVALID_HOURS", str(e), 400)
    except NotFoundError as e:
        return error_response("VOLUNTEER_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update volunteer hours API error (volunteer_id: {volunteer_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating volunteer hours", 500)


@volunteers_bp.route('/<string:volunteer_id>', methods=['DELETE'])
@admin_required
def delete_volunteer(volunteer_id: str):
    volunteer_service = current_app.services['volunteers']
    try:
        volunteer_service.delete_volunteer(volunteer_id)
        return jsonify({"msg": "Volunteer deleted successfully"}), 200
    except NotFoundError as e:
        return error_response("VOLUNTEER_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Delete volunteer API error (volunteer_id: {volunteer_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error deleting volunteer", 500)
