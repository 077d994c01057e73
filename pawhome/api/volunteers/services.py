# pawhome/api/volunteers/services.py
import logging
import uuid
from typing import Any, Dict, List, Optional

from firebase_admin import firestore

from pawhome.api.shelters.services import ShelterService
from pawhome.core.errors import InvalidRequestError, NotFoundError
from pawhome.models.volunteer import Volunteer
from pawhome.utils.datetime_utils import DateTimeUtils


class VolunteerService:
    """
    봉사자 지원서와 활동 기록을 관리하는 서비스.
    누적 봉사 시간은 Firestore Increment 연산으로만 변경해 동시 요청에도 합계가 유지됩니다.
    """
    def __init__(self, shelter_service: ShelterService, db=None):
        self.db = db if db is not None else firestore.client()
        self.volunteers_ref = self.db.collection('volunteers')
        self.shelter_service = shelter_service
        logging.info("VolunteerService initialized with dependencies.")

    def _get_volunteer(self, volunteer_id: str) -> Optional[Volunteer]:
        doc = self.volunteers_ref.document(volunteer_id).get()
        if not doc.exists:
            return None
        return Volunteer.from_dict(doc.to_dict())

    def _require_volunteer(self, volunteer_id: str) -> None:
        if not self.volunteers_ref.document(volunteer_id).get().exists:
            raise NotFoundError("Volunteer not found")

    def _email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        query = self.volunteers_ref.where('email', '==', email).limit(1)
        return any(doc.id != exclude_id for doc in query.stream())

    def _with_shelters(self, volunteers: List[Volunteer], detailed: bool = False) -> List[Dict[str, Any]]:
        summaries = self.shelter_service.get_summaries((v.shelter_id for v in volunteers), detailed=detailed)
        views = []
        for volunteer in volunteers:
            view = volunteer.to_dict()
            view['shelter'] = summaries.get(volunteer.shelter_id)
            views.append(view)
        return views

    def list_volunteers(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = self.volunteers_ref
        for key in ('shelter_id', 'status', 'experience'):
            if filters.get(key):
                query = query.where(key, '==', filters[key])

        volunteers = [Volunteer.from_dict(doc.to_dict()) for doc in query.stream()]
        volunteers.sort(key=lambda v: DateTimeUtils.sort_key(v.created_at), reverse=True)
        return self._with_shelters(volunteers)

    def get_volunteer(self, volunteer_id: str) -> Dict[str, Any]:
        volunteer = self._get_volunteer(volunteer_id)
        if not volunteer:
            raise NotFoundError("Volunteer not found")
        return self._with_shelters([volunteer], detailed=True)[0]

    def create_volunteer(self, volunteer_data: Dict[str, Any]) -> Dict[str, Any]:
        """봉사 지원서를 등록합니다. 보호소가 존재해야 하며 이메일은 중복될 수 없습니다."""
        if not self.shelter_service.shelter_exists(volunteer_data['shelter_id']):
            raise InvalidRequestError("Invalid shelter ID")

        volunteer_data['email'] = volunteer_data['email'].lower()
        if self._email_taken(volunteer_data['email']):
            raise InvalidRequestError("Volunteer with this email already exists")

        volunteer_id = str(uuid.uuid4())
        volunteer = Volunteer(volunteer_id=volunteer_id, **volunteer_data)
        self.volunteers_ref.document(volunteer_id).set(volunteer.to_firestore())
        logging.info(f"Volunteer application created: {volunteer_id} for shelter {volunteer.shelter_id}")
        return self._with_shelters([volunteer])[0]

    def update_volunteer(self, volunteer_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        self._require_volunteer(volunteer_id)

        if 'shelter_id' in update_data and not self.shelter_service.shelter_exists(update_data['shelter_id']):
            raise InvalidRequestError("Invalid shelter ID")
        if 'email' in update_data:
            update_data['email'] = update_data['email'].lower()
            if self._email_taken(update_data['email'], exclude_id=volunteer_id):
                raise InvalidRequestError("Volunteer with this email already exists")

        self.volunteers_ref.document(volunteer_id).update(DateTimeUtils.for_firestore(update_data))
        logging.info(f"Volunteer {volunteer_id} updated with fields: {list(update_data.keys())}")
        return self.get_volunteer(volunteer_id)

    def update_status(self, volunteer_id: str, status_data: Dict[str, str]) -> Dict[str, Any]:
        """활동 상태(status)와 신원 조회 결과(background_check)를 변경합니다."""
        self._require_volunteer(volunteer_id)
        self.volunteers_ref.document(volunteer_id).update(dict(status_data))
        logging.info(f"Volunteer {volunteer_id} status changed: {status_data}")
        return self.get_volunteer(volunteer_id)

    def add_hours(self, volunteer_id: str, hours_to_add: float) -> Dict[str, Any]:
        if hours_to_add is None or hours_to_add < 0:
            raise InvalidRequestError("Invalid hours value")
        self._require_volunteer(volunteer_id)

        self.volunteers_ref.document(volunteer_id).update({
            'hours_completed': firestore.Increment(hours_to_add)
        })
        logging.info(f"Added {hours_to_add} hours to volunteer {volunteer_id}")
        return self.get_volunteer(volunteer_id)

    def delete_volunteer(self, volunteer_id: str) -> None:
        self._require_volunteer(volunteer_id)
        self.volunteers_ref.document(volunteer_id).delete()
        logging.info(f"Volunteer deleted: {volunteer_id}")
