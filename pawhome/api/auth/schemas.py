# pawhome/api/auth/schemas.py
from marshmallow import EXCLUDE, fields, validate, validates_schema, ValidationError

from pawhome.schemas.base import NOT_BLANK, CamelCaseSchema, required_str


class RegisterSchema(CamelCaseSchema):
    """회원가입 요청 스키마. role 등 정의되지 않은 필드는 무시되며 모든 신규 사용자는 user 역할입니다."""
    class Meta:
        unknown = EXCLUDE

    name = required_str()
    email = fields.Email(
        required=True,
        validate=NOT_BLANK,
        error_messages={"invalid": "Please enter a valid email address"}
    )
    password = fields.Str(
        required=True,
        load_only=True,
        validate=[NOT_BLANK, validate.Length(min=6, error="Password must be at least 6 characters long")]
    )


class LoginSchema(CamelCaseSchema):
    class Meta:
        unknown = EXCLUDE

    email = required_str()
    password = required_str(load_only=True)


class GoogleLoginSchema(CamelCaseSchema):
    """Google 로그인 요청. idToken, accessToken, authCode 중 하나가 필요합니다."""
    class Meta:
        unknown = EXCLUDE

    id_token = fields.Str()
    access_token = fields.Str()
    auth_code = fields.Str()

    @validates_schema
    def require_credential(self, data, **kwargs):
        if not any(data.get(key) for key in ('id_token', 'access_token', 'auth_code')):
            raise ValidationError("Invalid Google authentication data")


class UserResponseSchema(CamelCaseSchema):
    id = fields.Str(attribute='user_id')
    name = fields.Str()
    email = fields.Str()
    role = fields.Str()
    profile_picture = fields.Str(allow_none=True)
    created_at = fields.DateTime()
