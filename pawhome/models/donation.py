# pawhome/models/donation.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pawhome.models.base import FirestoreDocument
from pawhome.utils.datetime_utils import DateTimeUtils


class PaymentStatus(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class Donation(FirestoreDocument):
    """Firestore 'donations' 컬렉션 문서 구조."""
    donation_id: str
    donor_name: str
    email: str
    amount: float
    payment_id: str
    payment_status: str = PaymentStatus.PENDING.value
    created_at: datetime = field(default_factory=DateTimeUtils.now)
