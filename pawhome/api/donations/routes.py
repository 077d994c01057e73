# pawhome/api/donations/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from pawhome.core.errors import NotFoundError, error_response, validation_error_response
from pawhome.core.security import admin_required
from .schemas import (
    DonationCreateSchema,
    DonationUpdateSchema,
    PaymentStatusSchema,
    DonationQuerySchema,
    DonationResponseSchema,
    DonationStatsSchema
)

donations_bp = Blueprint('donations_bp', __name__)


@donations_bp.route('/', methods=['POST'])
def create_donation():
    """기부 기록을 생성합니다. 결제 완료 후 클라이언트가 호출하며 인증이 필요 없습니다."""
    donation_service = current_app.services['donations']
    try:
        validated_data = DonationCreateSchema().load(request.get_json(silent=True) or {})
        donation = donation_service.create_donation(validated_data)
        return jsonify(DonationResponseSchema().dump(donation)), 201
    except ValidationError as err:
        return validation_error_response(err, "Missing required donation fields")
    except Exception as e:
        logging.error(f"Create donation API error: {e}", exc_info=True)
        return error_response("DONATION_CREATION_FAILED", "Error processing donation", 500)


@donations_bp.route('/', methods=['GET'])
@admin_required
def list_donations():
    donation_service = current_app.services['donations']
    try:
        filters = DonationQuerySchema().load(request.args)
        donations = donation_service.list_donations(filters)
        return jsonify(DonationResponseSchema(many=True).dump(donations)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid donation filters")
    except Exception as e:
        logging.error(f"Get donations API error: {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching donations", 500)


@donations_bp.route('/stats', methods=['GET'])
@admin_required
def get_donation_stats():
    donation_service = current_app.services['donations']
    try:
        stats = donation_service.get_stats()
        return jsonify(DonationStatsSchema().dump(stats)), 200
    except Exception as e:
        logging.error(f"Get donation stats API error: {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching donation statistics", 500)


@donations_bp.route('/<string:donation_id>', methods=['GET'])
@admin_required
def get_donation(donation_id: str):
    donation_service = current_app.services['donations']
    try:
        donation = donation_service.get_donation(donation_id)
        return jsonify(DonationResponseSchema().dump(donation)), 200
    except NotFoundError as e:
        return error_response("DONATION_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Get donation API error (donation_id: {donation_id}): {e}", exc_info=True)
        return error_response("FETCH_FAILED", "Error fetching donation", 500)


@donations_bp.route('/<string:donation_id>', methods=['PUT'])
@admin_required
def update_donation(donation_id: str):
    donation_service = current_app.services['donations']
    try:
        update_data = DonationUpdateSchema().load(request.get_json(silent=True) or {})
        donation = donation_service.update_donation(donation_id, update_data)
        return jsonify(DonationResponseSchema().dump(donation)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid donation update")
    except NotFoundError as e:
        return error_response("DONATION_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update donation API error (donation_id: {donation_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating donation", 500)


@donations_bp.route('/<string:donation_id>/status', methods=['PATCH'])
@admin_required
def update_donation_status(donation_id: str):
    donation_service = current_app.services['donations']
    try:
        data = PaymentStatusSchema().load(request.get_json(silent=True) or {})
        donation = donation_service.update_payment_status(donation_id, data['payment_status'])
        return jsonify(DonationResponseSchema().dump(donation)), 200
    except ValidationError as err:
        return validation_error_response(err, "Invalid payment status")
    except NotFoundError as e:
        return error_response("DONATION_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Update donation status API error (donation_id: {donation_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error updating donation status", 500)


@donations_bp.route('/<string:donation_id>', methods=['DELETE'])
@admin_required
def delete_donation(donation_id: str):
    donation_service = current_app.services['donations']
    try:
        donation_service.delete_donation(donation_id)
        return jsonify({"msg": "Donation deleted successfully"}), 200
    except NotFoundError as e:
        return error_response("DONATION_NOT_FOUND", str(e), 404)
    except Exception as e:
        logging.error(f"Delete donation API error (donation_id: {donation_id}): {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Error deleting donation", 500)
