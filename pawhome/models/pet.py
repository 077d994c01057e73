# pawhome/models/pet.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from pawhome.models.base import FirestoreDocument
from pawhome.utils.datetime_utils import DateTimeUtils


class PetGender(Enum):
    MALE = "male"
    FEMALE = "female"


class PetSize(Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class AdoptionStatus(Enum):
    """입양 상태. available -> pending -> adopted 전이는 명시적인 상태 변경 요청으로만 일어납니다."""
    AVAILABLE = "available"
    PENDING = "pending"
    ADOPTED = "adopted"


@dataclass
class Pet(FirestoreDocument):
    """
    Firestore 'pets' 컬렉션 문서 구조.
    shelter_id는 생성 시점에 존재하는 보호소를 가리켜야 합니다.
    """
    pet_id: str
    shelter_id: str
    name: str
    type: str
    breed: str
    age: int
    description: str
    image: str
    gender: str
    size: str
    color: str
    adoption_fee: float
    adoption_status: str = AdoptionStatus.AVAILABLE.value
    weight: Optional[float] = None
    is_vaccinated: bool = False
    is_neutered: bool = False
    special_needs: Optional[str] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
