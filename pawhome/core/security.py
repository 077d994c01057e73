# pawhome/core/security.py
"""
요청 인증/인가 가드.

- jwt_required (flask_jwt_extended): Bearer 토큰을 검증하고 토큰의 sub(user_id)를 실제 사용자로 해석합니다.
- admin_required: 인증 후 사용자 역할이 admin인지 확인합니다.
- optional_auth: 유효한 토큰이 있으면 사용자 정보를 붙이고, 없거나 잘못되어도 요청을 거부하지 않습니다.
"""

import logging
from functools import wraps

from flask import current_app
from flask_jwt_extended import JWTManager, current_user, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from pawhome.core.errors import error_response


def register_jwt_handlers(jwt: JWTManager):
    """JWTManager에 사용자 조회 및 인증 실패 응답 콜백을 등록합니다."""

    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        identity = jwt_data["sub"]
        return current_app.services['auth'].get_user(identity)

    @jwt.user_lookup_error_loader
    def user_not_found(_jwt_header, jwt_data):
        return error_response("UNAUTHORIZED", "User not found for this token", 401)

    @jwt.unauthorized_loader
    def missing_token(reason: str):
        return error_response("UNAUTHORIZED", "No token, authorization denied", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason: str):
        return error_response("INVALID_TOKEN", "Token is not valid", 401)

    @jwt.expired_token_loader
    def expired_token(_jwt_header, jwt_payload):
        return error_response("TOKEN_EXPIRED", "Token has expired", 401)


def ensure_admin():
    """현재 요청이 admin 사용자의 요청인지 확인합니다. 통과하면 None을 반환합니다."""
    verify_jwt_in_request()
    if not current_user.is_admin:
        logging.warning(f"Admin access denied for user {current_user.user_id}")
        return error_response("FORBIDDEN", "Admin access required", 403)
    return None


def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        denied = ensure_admin()
        if denied is not None:
            return denied
        return f(*args, **kwargs)

    return decorated_function


def optional_auth(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            verify_jwt_in_request(optional=True)
        except (JWTExtendedException, PyJWTError) as e:
            # 잘못된 토큰은 익명 요청으로 취급
            logging.info(f"Ignoring invalid optional token: {e}")
        return f(*args, **kwargs)

    return decorated_function
