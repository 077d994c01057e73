# pawhome/api/auth/services.py
import logging
import secrets
import uuid
from typing import Any, Dict, Optional, Tuple

from firebase_admin import firestore
from werkzeug.security import check_password_hash, generate_password_hash

from pawhome.core.errors import InvalidRequestError
from pawhome.models.user import User, UserRole


class AuthService:
    """사용자 가입, 로그인, Google 계정 연동을 담당하는 서비스."""
    def __init__(self, db=None):
        self.db = db if db is not None else firestore.client()
        self.users_ref = self.db.collection('users')
        logging.info("AuthService initialized.")

    def _find_by_email(self, email: str) -> Optional[User]:
        query = self.users_ref.where('email', '==', email.lower()).limit(1).stream()
        user_doc = next(query, None)
        if not user_doc:
            return None
        return User.from_dict(user_doc.to_dict())

    def _save(self, user: User) -> None:
        self.users_ref.document(user.user_id).set(user.to_firestore())

    def get_user(self, user_id: str) -> Optional[User]:
        """토큰의 sub(user_id)로 사용자를 찾습니다. 삭제된 사용자는 None을 반환합니다."""
        if not user_id:
            return None
        doc = self.users_ref.document(str(user_id)).get()
        if not doc.exists:
            return None
        return User.from_dict(doc.to_dict())

    def register(self, name: str, email: str, password: str) -> User:
        """신규 사용자를 등록합니다. 역할은 항상 user로 고정됩니다."""
        if self._find_by_email(email):
            raise InvalidRequestError("Email already exists")

        user = User(
            user_id=str(uuid.uuid4()),
            name=name,
            email=email.lower(),
            password_hash=generate_password_hash(password),
            role=UserRole.USER.value
        )
        self._save(user)
        logging.info(f"User registered: {user.user_id}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """이메일과 비밀번호를 확인합니다. 실패 사유(이메일/비밀번호)는 구분하지 않습니다."""
        user = self._find_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            raise InvalidRequestError("Invalid email or password")
        return user

    def get_or_create_user_by_google(self, profile: Dict[str, Any]) -> Tuple[User, bool]:
        """
        Google 프로필의 이메일로 사용자를 찾거나 새로 만듭니다.
        - 신규 사용자: 임의의 비밀번호 해시로 생성 (비밀번호 로그인 불가)
        - 기존 사용자: google_id가 없으면 연동하고, 새 프로필 사진이 있을 때만 교체
        """
        email = profile.get('email')
        if not email:
            raise InvalidRequestError("Invalid Google authentication data")

        user = self._find_by_email(email)
        if not user:
            user = User(
                user_id=str(uuid.uuid4()),
                name=profile.get('name') or email.split('@')[0],
                email=email.lower(),
                password_hash=generate_password_hash(secrets.token_urlsafe(32)),
                role=UserRole.USER.value,
                google_id=profile.get('sub'),
                profile_picture=profile.get('picture')
            )
            self._save(user)
            logging.info(f"User created from Google login: {user.user_id}")
            return user, True

        if not user.google_id:
            user.google_id = profile.get('sub')
            user.profile_picture = profile.get('picture') or user.profile_picture
            self.users_ref.document(user.user_id).update({
                'google_id': user.google_id,
                'profile_picture': user.profile_picture
            })
            logging.info(f"Linked Google account to user {user.user_id}")
        return user, False
