# pawhome/api/medical/services.py
import logging
import uuid
from typing import Any, Dict, List, Optional

from firebase_admin import firestore

from pawhome.api.pets.services import PetService
from pawhome.core.errors import InvalidRequestError, NotFoundError
from pawhome.models.medical_record import MedicalRecord, RecordType
from pawhome.utils.datetime_utils import DateTimeUtils


class MedicalRecordService:
    """
    펫의 진료/접종 기록을 관리하는 서비스.
    펫이 삭제되어도 기록은 남겨 두며, 이 경우 응답의 pet 요약은 null이 됩니다.
    """
    def __init__(self, pet_service: PetService, db=None):
        self.db = db if db is not None else firestore.client()
        self.records_ref = self.db.collection('medical_records')
        self.pet_service = pet_service
        logging.info("MedicalRecordService initialized with dependencies.")

    def _get_record(self, record_id: str) -> Optional[MedicalRecord]:
        doc = self.records_ref.document(record_id).get()
        if not doc.exists:
            return None
        return MedicalRecord.from_dict(doc.to_dict())

    def _with_pets(self, records: List[MedicalRecord]) -> List[Dict[str, Any]]:
        summaries = self.pet_service.get_summaries(r.pet_id for r in records)
        views = []
        for record in records:
            view = record.to_dict()
            view['pet'] = summaries.get(record.pet_id)
            views.append(view)
        return views

    def _records_for_pet(self, pet_id: str, record_type: Optional[str] = None) -> List[MedicalRecord]:
        """펫의 기록을 진료일 최신순으로 반환합니다."""
        query = self.records_ref.where('pet_id', '==', pet_id)
        if record_type:
            query = query.where('record_type', '==', record_type)
        records = [MedicalRecord.from_dict(doc.to_dict()) for doc in query.stream()]
        records.sort(key=lambda r: DateTimeUtils.sort_key(r.date), reverse=True)
        return records

    def list_for_pet(self, pet_id: str) -> List[Dict[str, Any]]:
        if not self.pet_service.pet_exists(pet_id):
            raise NotFoundError("Pet not found")
        return self._with_pets(self._records_for_pet(pet_id))

    def get_vaccination_history(self, pet_id: str) -> List[Dict[str, Any]]:
        """
        vaccination 타입 기록들의 접종 항목을 하나의 목록으로 펼칩니다.
        최신 진료 기록의 접종이 먼저 오며, 각 항목에 기록 ID, 진료일, 수의사, 병원 정보를 붙입니다.
        """
        history = []
        for record in self._records_for_pet(pet_id, RecordType.VACCINATION.value):
            for vaccination in record.vaccinations or []:
                history.append({
                    **vaccination,
                    'record_id': record.record_id,
                    'record_date': record.date,
                    'veterinarian': record.veterinarian,
                    'clinic': record.clinic,
                })
        return history

    def get_record(self, record_id: str) -> Dict[str, Any]:
        record = self._get_record(record_id)
        if not record:
            raise NotFoundError("Medical record not found")
        return self._with_pets([record])[0]

    def create_record(self, record_data: Dict[str, Any]) -> Dict[str, Any]:
        if not self.pet_service.pet_exists(record_data['pet_id']):
            raise InvalidRequestError("Invalid pet ID")

        record_id = str(uuid.uuid4())
        record = MedicalRecord(record_id=record_id, **record_data)
        self.records_ref.document(record_id).set(record.to_firestore())
        logging.info(f"Medical record created: {record_id} for pet {record.pet_id}")
        return self._with_pets([record])[0]

    def update_record(self, record_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        if not self.records_ref.document(record_id).get().exists:
            raise NotFoundError("Medical record not found")
        if 'pet_id' in update_data and not self.pet_service.pet_exists(update_data['pet_id']):
            raise InvalidRequestError("Invalid pet ID")

        self.records_ref.document(record_id).update(DateTimeUtils.for_firestore(update_data))
        logging.info(f"Medical record {record_id} updated with fields: {list(update_data.keys())}")
        return self.get_record(record_id)

    def delete_record(self, record_id: str) -> None:
        if not self.records_ref.document(record_id).get().exists:
            raise NotFoundError("Medical record not found")
        self.records_ref.document(record_id).delete()
        logging.info(f"Medical record deleted: {record_id}")
