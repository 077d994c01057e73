# pawhome/core/errors.py
"""
API 전역에서 사용하는 예외 타입과 에러 응답 헬퍼.

서비스 계층은 아래 예외를 발생시키고, 라우트 계층은 이를 HTTP 상태 코드로 변환합니다.
- InvalidRequestError -> 400 (중복 이메일, 존재하지 않는 참조 ID 등 도메인 검증 실패)
- NotFoundError       -> 404
"""

from typing import Any, Dict, Iterator, Optional, Tuple

from flask import jsonify
from marshmallow import ValidationError, fields


class InvalidRequestError(ValueError):
    """요청 값이 도메인 규칙을 위반했을 때 발생합니다."""


class NotFoundError(LookupError):
    """조회 대상 리소스가 존재하지 않을 때 발생합니다."""


# marshmallow가 '값 누락'으로 판단하는 기본 메시지들
MISSING_MESSAGES = {
    fields.Field.default_error_messages['required'],
    fields.Field.default_error_messages['null'],
}
UNKNOWN_FIELD_MESSAGE = 'Unknown field.'


def error_response(error_code: str, msg: str, status: int, details: Optional[Dict[str, Any]] = None):
    body = {"error_code": error_code, "msg": msg}
    if details is not None:
        body["details"] = details
    return jsonify(body), status


def _iter_field_messages(messages: Any, field_name: str = '') -> Iterator[Tuple[str, str]]:
    """중첩된 marshmallow 에러 구조를 (최상위 필드명, 메시지) 쌍으로 평탄화합니다."""
    if isinstance(messages, str):
        yield field_name, messages
    elif isinstance(messages, dict):
        for key, value in messages.items():
            yield from _iter_field_messages(value, field_name or str(key))
    elif isinstance(messages, (list, tuple)):
        for item in messages:
            yield from _iter_field_messages(item, field_name)


def summarize_validation_error(err: ValidationError, missing_message: str) -> str:
    """
    검증 오류를 한 줄짜리 메시지로 요약합니다.
    필수 값 누락이 하나라도 있으면 missing_message를, 아니면 첫 번째 필드 오류를 사용합니다.
    """
    pairs = list(_iter_field_messages(err.messages))
    if not pairs or any(message in MISSING_MESSAGES for _, message in pairs):
        return missing_message

    field_name, message = pairs[0]
    if message == UNKNOWN_FIELD_MESSAGE:
        return f"Field '{field_name}' cannot be set"
    return message


def validation_error_response(err: ValidationError, missing_message: str):
    return error_response(
        "VALIDATION_ERROR",
        summarize_validation_error(err, missing_message),
        400,
        details=err.messages
    )
