# pawhome/models/medical_record.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pawhome.models.base import FirestoreDocument
from pawhome.utils.datetime_utils import DateTimeUtils


class RecordType(Enum):
    VACCINATION = "vaccination"
    TREATMENT = "treatment"
    CHECKUP = "checkup"
    SURGERY = "surgery"
    MEDICATION = "medication"


@dataclass
class MedicalRecord(FirestoreDocument):
    """
    Firestore 'medical_records' 컬렉션 문서 구조.
    medications: [{'name', 'dosage', 'frequency', 'duration'}]
    vaccinations: [{'vaccine', 'date_given', 'next_due', 'batch_number'}]
    """
    record_id: str
    pet_id: str
    record_type: str
    title: str
    description: str
    veterinarian: str
    clinic: str
    date: datetime
    next_appointment: Optional[datetime] = None
    medications: List[Dict[str, Any]] = field(default_factory=list)
    vaccinations: List[Dict[str, Any]] = field(default_factory=list)
    cost: float = 0
    notes: Optional[str] = None
    attachments: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
