# pawhome/api/pets/services.py
import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional

from firebase_admin import firestore

from pawhome.api.shelters.services import ShelterService
from pawhome.core.errors import InvalidRequestError, NotFoundError
from pawhome.models.pet import AdoptionStatus, Pet
from pawhome.utils.datetime_utils import DateTimeUtils

EXACT_MATCH_FILTERS = ('type', 'size', 'shelter_id', 'adoption_status')
SUMMARY_FIELDS = ('pet_id', 'name', 'type', 'breed')


def is_valid_pet_id(pet_id: str) -> bool:
    try:
        uuid.UUID(pet_id)
        return True
    except (TypeError, ValueError):
        return False


class PetService:
    """입양 대상 펫의 프로필 관리와 입양 상태 변경을 전담하는 서비스."""
    def __init__(self, shelter_service: ShelterService, db=None):
        self.db = db if db is not None else firestore.client()
        self.pets_ref = self.db.collection('pets')
        self.shelter_service = shelter_service
        logging.info("PetService initialized with dependencies.")

    # --- 내부 헬퍼 ---
    def _get_pet(self, pet_id: str) -> Optional[Pet]:
        doc = self.pets_ref.document(pet_id).get()
        if not doc.exists:
            return None
        return Pet.from_dict(doc.to_dict())

    def _with_shelters(self, pets: List[Pet], detailed: bool = False) -> List[Dict[str, Any]]:
        """펫 목록에 소속 보호소 요약 정보를 붙입니다."""
        summaries = self.shelter_service.get_summaries((p.shelter_id for p in pets), detailed=detailed)
        views = []
        for pet in pets:
            view = pet.to_dict()
            view['shelter'] = summaries.get(pet.shelter_id)
            views.append(view)
        return views

    def _require_shelter(self, shelter_id: str) -> None:
        if not self.shelter_service.shelter_exists(shelter_id):
            raise InvalidRequestError("Invalid shelter ID")

    # --- 조회 ---
    def pet_exists(self, pet_id: Optional[str]) -> bool:
        if not pet_id:
            return False
        return self.pets_ref.document(pet_id).get().exists

    def get_summaries(self, pet_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        summaries = {}
        for pet_id in set(filter(None, pet_ids)):
            pet = self._get_pet(pet_id)
            if pet:
                data = pet.to_dict()
                summaries[pet_id] = {k: data[k] for k in SUMMARY_FIELDS}
        return summaries

    def list_pets(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        필터 조건에 맞는 펫 목록을 최신 등록순으로 반환합니다.
        완전 일치 조건은 Firestore 쿼리로, 품종 부분 일치와 나이 상한은 메모리에서 처리합니다.
        """
        query = self.pets_ref
        for key in EXACT_MATCH_FILTERS:
            if filters.get(key):
                query = query.where(key, '==', filters[key])

        pets = [Pet.from_dict(doc.to_dict()) for doc in query.stream()]

        breed = filters.get('breed')
        if breed:
            pets = [p for p in pets if breed.lower() in (p.breed or '').lower()]
        max_age = filters.get('age')
        if max_age is not None:
            pets = [p for p in pets if p.age is not None and p.age <= max_age]

        pets.sort(key=lambda p: DateTimeUtils.sort_key(p.created_at), reverse=True)
        return self._with_shelters(pets)

    def get_pet(self, pet_id: str) -> Dict[str, Any]:
        if not is_valid_pet_id(pet_id):
            raise InvalidRequestError("Invalid pet ID format")
        pet = self._get_pet(pet_id)
        if not pet:
            raise NotFoundError("Pet not found")
        return self._with_shelters([pet], detailed=True)[0]

    def get_stats(self, recent_limit: int = 5) -> Dict[str, Any]:
        """관리자 대시보드용 입양 상태별 통계와 최근 등록된 펫 목록."""
        pets = self.list_pets({})
        stats = {
            'total_pets': len(pets),
            'available_pets': 0,
            'pending_pets': 0,
            'adopted_pets': 0,
        }
        for pet in pets:
            key = f"{pet['adoption_status']}_pets"
            if key in stats:
                stats[key] += 1
        stats['recent_pets'] = pets[:recent_limit]
        return stats

    # --- 생성/수정/삭제 ---
    def create_pet(self, pet_data: Dict[str, Any]) -> Dict[str, Any]:
        """보호소 존재 여부를 확인한 뒤 펫을 등록합니다. 보호소 수용 두수는 조회 시 계산됩니다."""
        self._require_shelter(pet_data['shelter_id'])

        pet_id = str(uuid.uuid4())
        new_pet = Pet(pet_id=pet_id, **pet_data)
        self.pets_ref.document(pet_id).set(new_pet.to_firestore())
        logging.info(f"Pet created: {pet_id} in shelter {new_pet.shelter_id}")
        return self._with_shelters([new_pet])[0]

    def update_pet(self, pet_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        """펫 정보를 부분 업데이트합니다. 보호소가 변경되면 새 보호소의 존재 여부를 다시 확인합니다."""
        if not self.pet_exists(pet_id):
            raise NotFoundError("Pet not found")
        if 'shelter_id' in update_data:
            self._require_shelter(update_data['shelter_id'])

        self.pets_ref.document(pet_id).update(DateTimeUtils.for_firestore(update_data))
        logging.info(f"Pet {pet_id} updated with fields: {list(update_data.keys())}")
        return self._with_shelters([self._get_pet(pet_id)])[0]

    def update_adoption_status(self, pet_id: str, adoption_status: str) -> Dict[str, Any]:
        if adoption_status not in {s.value for s in AdoptionStatus}:
            raise InvalidRequestError("Invalid adoption status")
        return self.update_pet(pet_id, {'adoption_status': adoption_status})

    def delete_pet(self, pet_id: str) -> None:
        if not self.pet_exists(pet_id):
            raise NotFoundError("Pet not found")
        self.pets_ref.document(pet_id).delete()
        logging.info(f"Pet deleted: {pet_id}")
