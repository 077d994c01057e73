# pawhome/models/base.py
from dataclasses import asdict, fields
from typing import Any, Dict, Type, TypeVar

from pawhome.utils.datetime_utils import DateTimeUtils

T = TypeVar('T', bound='FirestoreDocument')


class FirestoreDocument:
    """
    Firestore 문서와 데이터클래스 사이의 상호 변환 로직을 제공하는 믹스인.
    데이터클래스에 정의되지 않은 필드는 무시합니다.
    """

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        known = {f.name for f in fields(cls)}
        processed_data = DateTimeUtils.from_firestore(
            {k: v for k, v in data.items() if k in known}
        )
        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_firestore(self) -> Dict[str, Any]:
        return DateTimeUtils.for_firestore(self.to_dict())
