# pawhome/api/auth/routes.py

import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import create_access_token, current_user, jwt_required
from marshmallow import ValidationError

from pawhome.core.errors import InvalidRequestError, error_response, validation_error_response
from pawhome.services.google_auth_service import GoogleAuthError
from .schemas import RegisterSchema, LoginSchema, GoogleLoginSchema, UserResponseSchema

auth_bp = Blueprint('auth_bp', __name__)


def _token_response(user, msg: str, status: int = 200):
    access_token = create_access_token(identity=user.user_id)
    return jsonify({
        "msg": msg,
        "token": access_token,
        "user": UserResponseSchema().dump(user)
    }), status


@auth_bp.route('/register', methods=['POST'])
def register():
    auth_service = current_app.services['auth']
    try:
        data = RegisterSchema().load(request.get_json(silent=True) or {})
        user = auth_service.register(data['name'], data['email'], data['password'])
        return _token_response(user, "User registered successfully", 201)
    except ValidationError as err:
        return validation_error_response(err, "All fields are required")
    except InvalidRequestError as e:
        return error_response("EMAIL_EXISTS", str(e), 400)
    except Exception as e:
        logging.error(f"Register API error: {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Server error during registration", 500)


@auth_bp.route('/login', methods=['POST'])
def login():
    auth_service = current_app.services['auth']
    try:
        data = LoginSchema().load(request.get_json(silent=True) or {})
        user = auth_service.authenticate(data['email'], data['password'])
        return _token_response(user, "Login successful")
    except ValidationError as err:
        return validation_error_response(err, "Email and password are required")
    except InvalidRequestError as e:
        return error_response("INVALID_CREDENTIALS", str(e), 400)
    except Exception as e:
        logging.error(f"Login API error: {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Server error during login", 500)


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_profile():
    """현재 로그인한 사용자 정보를 반환합니다. 비밀번호 해시는 포함되지 않습니다."""
    return jsonify(UserResponseSchema().dump(current_user)), 200


@auth_bp.route('/google', methods=['POST'])
def google_login():
    """
    Google 로그인. 클라이언트가 받은 idToken / accessToken / authCode 중 하나를 Google에 검증한 뒤
    해당 이메일의 사용자를 찾거나 생성하고 자체 토큰을 발급합니다.
    """
    auth_service = current_app.services['auth']
    google_auth = current_app.services['google_auth']
    try:
        data = GoogleLoginSchema().load(request.get_json(silent=True) or {})
        profile = google_auth.resolve_profile(
            id_token=data.get('id_token'),
            access_token=data.get('access_token'),
            auth_code=data.get('auth_code')
        )
        user, is_new_user = auth_service.get_or_create_user_by_google(profile)
        logging.info(f"Google login for user {user.user_id} (new user: {is_new_user})")
        return _token_response(user, "Google login successful")
    except ValidationError as err:
        return validation_error_response(err, "Invalid Google authentication data")
    except GoogleAuthError as e:
        logging.warning(f"Google login rejected: {e}")
        return error_response("INVALID_GOOGLE_CREDENTIAL", "Google authentication failed", 401)
    except InvalidRequestError as e:
        return error_response("INVALID_GOOGLE_DATA", str(e), 400)
    except Exception as e:
        logging.error(f"Google login API error: {e}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Server error during Google authentication", 500)
