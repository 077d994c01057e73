# pawhome/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from pawhome.models.base import FirestoreDocument
from pawhome.utils.datetime_utils import DateTimeUtils


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass
class User(FirestoreDocument):
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    비밀번호는 항상 해시 값으로만 저장합니다.
    """
    user_id: str
    name: str
    email: str
    password_hash: str
    role: str = UserRole.USER.value
    google_id: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
