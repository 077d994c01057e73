# pawhome/api/shelters/services.py
import logging
import uuid
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from firebase_admin import firestore

from pawhome.core.errors import InvalidRequestError, NotFoundError
from pawhome.models.pet import AdoptionStatus
from pawhome.models.shelter import Shelter, default_operating_hours
from pawhome.utils.datetime_utils import DateTimeUtils

SUMMARY_FIELDS = ('shelter_id', 'name', 'address', 'city', 'state')
DETAIL_SUMMARY_FIELDS = SUMMARY_FIELDS + ('phone', 'email')


class ShelterService:
    """
    보호소 정보 관리를 전담하는 서비스.
    수용 두수(current_occupancy)는 저장된 카운터가 아니라 해당 보호소를 참조하는 펫 문서 수로 계산합니다.
    """
    def __init__(self, db=None):
        self.db = db if db is not None else firestore.client()
        self.shelters_ref = self.db.collection('shelters')
        self.pets_ref = self.db.collection('pets')
        logging.info("ShelterService initialized.")

    # --- 내부 헬퍼 ---
    def _get_shelter(self, shelter_id: str) -> Optional[Shelter]:
        doc = self.shelters_ref.document(shelter_id).get()
        if not doc.exists:
            return None
        return Shelter.from_dict(doc.to_dict())

    def _count_pets(self, shelter_id: str, adoption_status: Optional[str] = None) -> int:
        query = self.pets_ref.where('shelter_id', '==', shelter_id)
        if adoption_status:
            query = query.where('adoption_status', '==', adoption_status)
        return sum(1 for _ in query.stream())

    def _to_view(self, shelter: Shelter, occupancy: int) -> Dict[str, Any]:
        view = shelter.to_dict()
        view['current_occupancy'] = occupancy
        return view

    # --- 조회 ---
    def shelter_exists(self, shelter_id: Optional[str]) -> bool:
        if not shelter_id:
            return False
        return self.shelters_ref.document(shelter_id).get().exists

    def get_summaries(self, shelter_ids: Iterable[str], detailed: bool = False) -> Dict[str, Dict[str, Any]]:
        """보호소 ID 목록에 대해 {shelter_id: 요약 정보} 딕셔너리를 반환합니다. 삭제된 보호소는 제외됩니다."""
        keys = DETAIL_SUMMARY_FIELDS if detailed else SUMMARY_FIELDS
        summaries = {}
        for shelter_id in set(filter(None, shelter_ids)):
            shelter = self._get_shelter(shelter_id)
            if shelter:
                data = shelter.to_dict()
                summaries[shelter_id] = {k: data[k] for k in keys}
        return summaries

    def list_shelters(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = self.shelters_ref
        if filters.get('state'):
            query = query.where('state', '==', filters['state'])

        shelters = [Shelter.from_dict(doc.to_dict()) for doc in query.stream()]

        city = filters.get('city')
        if city:
            shelters = [s for s in shelters if city.lower() in (s.city or '').lower()]

        occupancy = Counter(doc.to_dict().get('shelter_id') for doc in self.pets_ref.stream())
        shelters.sort(key=lambda s: s.name.lower())
        return [self._to_view(s, occupancy.get(s.shelter_id, 0)) for s in shelters]

    def list_for_dropdown(self) -> List[Dict[str, Any]]:
        return [
            {k: shelter[k] for k in SUMMARY_FIELDS}
            for shelter in self.list_shelters({})
        ]

    def get_shelter(self, shelter_id: str) -> Dict[str, Any]:
        """보호소 상세 정보와 함께 보호 중인 펫 수, 입양 가능한 펫 수를 반환합니다."""
        shelter = self._get_shelter(shelter_id)
        if not shelter:
            raise NotFoundError("Shelter not found")

        pets_count = self._count_pets(shelter_id)
        view = self._to_view(shelter, pets_count)
        view['pets_count'] = pets_count
        view['available_pets'] = self._count_pets(shelter_id, AdoptionStatus.AVAILABLE.value)
        return view

    # --- 생성/수정/삭제 ---
    def create_shelter(self, shelter_data: Dict[str, Any]) -> Dict[str, Any]:
        shelter_id = str(uuid.uuid4())
        operating_hours = default_operating_hours()
        operating_hours.update(shelter_data.pop('operating_hours', None) or {})

        new_shelter = Shelter(shelter_id=shelter_id, operating_hours=operating_hours, **shelter_data)
        self.shelters_ref.document(shelter_id).set(new_shelter.to_firestore())
        logging.info(f"Shelter created: {shelter_id} ({new_shelter.name})")
        return self._to_view(new_shelter, 0)

    def update_shelter(self, shelter_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        shelter = self._get_shelter(shelter_id)
        if not shelter:
            raise NotFoundError("Shelter not found")

        if 'operating_hours' in update_data:
            # 요청에 포함된 요일만 덮어씁니다.
            merged_hours = dict(shelter.operating_hours or default_operating_hours())
            merged_hours.update(update_data['operating_hours'] or {})
            update_data['operating_hours'] = merged_hours

        self.shelters_ref.document(shelter_id).update(DateTimeUtils.for_firestore(update_data))
        logging.info(f"Shelter {shelter_id} updated with fields: {list(update_data.keys())}")
        return self._to_view(self._get_shelter(shelter_id), self._count_pets(shelter_id))

    def delete_shelter(self, shelter_id: str) -> None:
        """보호 중인 펫이 남아 있는 보호소는 삭제할 수 없습니다."""
        if not self.shelter_exists(shelter_id):
            raise NotFoundError("Shelter not found")
        if self._count_pets(shelter_id) > 0:
            raise InvalidRequestError("Cannot delete shelter with existing pets. Please relocate pets first.")

        self.shelters_ref.document(shelter_id).delete()
        logging.info(f"Shelter deleted: {shelter_id}")
