# pawhome/models/shelter.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from pawhome.models.base import FirestoreDocument
from pawhome.utils.datetime_utils import DateTimeUtils

WEEKDAY_HOURS = "9:00 AM - 5:00 PM"
WEEKEND_HOURS = "10:00 AM - 4:00 PM"


def default_operating_hours() -> Dict[str, str]:
    hours = {day: WEEKDAY_HOURS for day in ('monday', 'tuesday', 'wednesday', 'thursday', 'friday')}
    hours.update(saturday=WEEKEND_HOURS, sunday=WEEKEND_HOURS)
    return hours


@dataclass
class Shelter(FirestoreDocument):
    """
    Firestore 'shelters' 컬렉션 문서 구조.
    현재 수용 두수(current occupancy)는 저장하지 않고 조회 시 보호 중인 펫 수로 계산합니다.
    """
    shelter_id: str
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: str
    email: str
    capacity: int
    coordinates: Optional[Dict[str, float]] = None  # {'latitude', 'longitude'}
    operating_hours: Dict[str, str] = field(default_factory=default_operating_hours)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
