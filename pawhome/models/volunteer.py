# pawhome/models/volunteer.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pawhome.models.base import FirestoreDocument
from pawhome.utils.datetime_utils import DateTimeUtils


class Experience(Enum):
    NONE = "none"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class BackgroundCheck(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VolunteerStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


@dataclass
class Volunteer(FirestoreDocument):
    """
    Firestore 'volunteers' 컬렉션 문서 구조.
    hours_completed는 누적 증가 연산으로만 변경됩니다.
    """
    volunteer_id: str
    shelter_id: str
    name: str
    email: str
    phone: str
    address: str
    date_of_birth: datetime
    skills: List[str] = field(default_factory=list)
    availability: Dict[str, Any] = field(default_factory=dict)  # {'monday': {'available', 'time_slots'}}
    experience: str = Experience.NONE.value
    interests: List[str] = field(default_factory=list)
    emergency_contact: Optional[Dict[str, str]] = None
    background_check: str = BackgroundCheck.PENDING.value
    status: str = VolunteerStatus.ACTIVE.value
    hours_completed: float = 0
    start_date: datetime = field(default_factory=DateTimeUtils.now)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
