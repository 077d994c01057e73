# pawhome/api/donations/services.py
import logging
import uuid
from collections import defaultdict
from typing import Any, Dict, List, Optional

from firebase_admin import firestore

from pawhome.core.errors import NotFoundError
from pawhome.models.donation import Donation, PaymentStatus
from pawhome.utils.datetime_utils import DateTimeUtils

MONTHLY_STATS_LIMIT = 12


class DonationService:
    """기부 기록과 결제 상태, 관리자용 기부 통계를 담당하는 서비스."""
    def __init__(self, db=None):
        self.db = db if db is not None else firestore.client()
        self.donations_ref = self.db.collection('donations')
        logging.info("DonationService initialized.")

    def _get_donation(self, donation_id: str) -> Optional[Donation]:
        doc = self.donations_ref.document(donation_id).get()
        if not doc.exists:
            return None
        return Donation.from_dict(doc.to_dict())

    def _require_donation(self, donation_id: str) -> None:
        if not self.donations_ref.document(donation_id).get().exists:
            raise NotFoundError("Donation not found")

    def _all_donations(self) -> List[Donation]:
        return [Donation.from_dict(doc.to_dict()) for doc in self.donations_ref.stream()]

    def list_donations(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = self.donations_ref
        if filters.get('status'):
            query = query.where('payment_status', '==', filters['status'])

        donations = [Donation.from_dict(doc.to_dict()) for doc in query.stream()]

        start, end = filters.get('start_date'), filters.get('end_date')
        if start:
            donations = [d for d in donations if d.created_at and d.created_at >= start]
        if end:
            donations = [d for d in donations if d.created_at and d.created_at <= end]

        donations.sort(key=lambda d: DateTimeUtils.sort_key(d.created_at), reverse=True)
        return [d.to_dict() for d in donations]

    def get_donation(self, donation_id: str) -> Dict[str, Any]:
        donation = self._get_donation(donation_id)
        if not donation:
            raise NotFoundError("Donation not found")
        return donation.to_dict()

    def create_donation(self, donation_data: Dict[str, Any]) -> Dict[str, Any]:
        donation_id = str(uuid.uuid4())
        donation = Donation(donation_id=donation_id, **donation_data)
        self.donations_ref.document(donation_id).set(donation.to_firestore())
        logging.info(f"Donation recorded: {donation_id} ({donation.amount}, {donation.payment_status})")
        return donation.to_dict()

    def update_donation(self, donation_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        self._require_donation(donation_id)
        self.donations_ref.document(donation_id).update(update_data)
        logging.info(f"Donation {donation_id} updated with fields: {list(update_data.keys())}")
        return self.get_donation(donation_id)

    def update_payment_status(self, donation_id: str, payment_status: str) -> Dict[str, Any]:
        self._require_donation(donation_id)
        self.donations_ref.document(donation_id).update({'payment_status': payment_status})
        logging.info(f"Donation {donation_id} payment status changed to {payment_status}")
        return self.get_donation(donation_id)

    def delete_donation(self, donation_id: str) -> None:
        self._require_donation(donation_id)
        self.donations_ref.document(donation_id).delete()
        logging.info(f"Donation deleted: {donation_id}")

    def get_stats(self) -> Dict[str, Any]:
        """
        결제 상태별 건수, 성공한 기부의 총액, 최근 12개월의 월별 성공 기부 통계를 계산합니다.
        월별 통계는 기부가 있었던 달만 포함하며 최신 월이 먼저 옵니다.
        """
        donations = self._all_donations()
        successful = [d for d in donations if d.payment_status == PaymentStatus.SUCCESS.value]

        monthly = defaultdict(lambda: {'count': 0, 'amount': 0.0})
        for donation in successful:
            if donation.created_at is None:
                continue
            bucket = monthly[(donation.created_at.year, donation.created_at.month)]
            bucket['count'] += 1
            bucket['amount'] += donation.amount

        monthly_stats = [
            {'year': year, 'month': month, **values}
            for (year, month), values in sorted(monthly.items(), reverse=True)
        ][:MONTHLY_STATS_LIMIT]

        def count_status(status: PaymentStatus) -> int:
            return sum(1 for d in donations if d.payment_status == status.value)

        return {
            'total_donations': len(donations),
            'successful_donations': count_status(PaymentStatus.SUCCESS),
            'pending_donations': count_status(PaymentStatus.PENDING),
            'failed_donations': count_status(PaymentStatus.FAILED),
            'total_amount': sum(d.amount for d in successful),
            'monthly_stats': monthly_stats,
        }
