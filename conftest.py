# conftest.py
"""
pytest 공용 픽스처.

Firestore 대신 서비스가 사용하는 API 부분집합(collection/document/get/set/update/delete,
where/limit/order_by/stream, Increment)만 구현한 메모리 저장소를 주입해 앱을 생성합니다.
"""

import copy
import operator
import uuid

import pytest
from firebase_admin import firestore
from flask_jwt_extended import create_access_token
from google.api_core.exceptions import NotFound

from pawhome import create_app
from pawhome.models.user import User, UserRole

_OPERATORS = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
    'in': lambda value, choices: value in choices,
    'array_contains': lambda value, item: item in (value or []),
}


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, store, doc_id):
        self._store = store
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self.id, self._store.get(self.id))

    def set(self, data, merge=False):
        if merge and self.id in self._store:
            self._store[self.id].update(copy.deepcopy(data))
        else:
            self._store[self.id] = copy.deepcopy(data)

    def update(self, data):
        if self.id not in self._store:
            raise NotFound(f"No document to update: {self.id}")
        current = self._store[self.id]
        for key, value in data.items():
            if isinstance(value, firestore.Increment):
                current[key] = (current.get(key) or 0) + value.value
            else:
                current[key] = copy.deepcopy(value)

    def delete(self):
        self._store.pop(self.id, None)


class FakeQuery:
    def __init__(self, store, filters=None, order=None, limit_count=None):
        self._store = store
        self._filters = filters or []
        self._order = order
        self._limit = limit_count

    def where(self, field, op, value):
        return FakeQuery(self._store, self._filters + [(field, op, value)], self._order, self._limit)

    def order_by(self, field, direction=None):
        return FakeQuery(self._store, self._filters, (field, direction), self._limit)

    def limit(self, count):
        return FakeQuery(self._store, self._filters, self._order, count)

    def stream(self):
        results = [
            FakeSnapshot(doc_id, data)
            for doc_id, data in list(self._store.items())
            if all(field in data and _OPERATORS[op](data[field], value) for field, op, value in self._filters)
        ]
        if self._order:
            field, direction = self._order
            results.sort(
                key=lambda snap: snap.to_dict().get(field),
                reverse=direction == firestore.Query.DESCENDING
            )
        if self._limit is not None:
            results = results[:self._limit]
        return iter(results)


class FakeCollection(FakeQuery):
    def document(self, doc_id=None):
        return FakeDocumentRef(self._store, doc_id or uuid.uuid4().hex)


class FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return FakeCollection(self.collections.setdefault(name, {}))


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def app(db):
    app = create_app('testing', db=db)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def _create_user(app, db, role, email):
    user = User(
        user_id=str(uuid.uuid4()),
        name=f"{role} tester",
        email=email,
        password_hash='not-used',
        role=role
    )
    db.collection('users').document(user.user_id).set(user.to_firestore())
    with app.app_context():
        token = create_access_token(identity=user.user_id)
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(app, db):
    _, headers = _create_user(app, db, UserRole.ADMIN.value, 'admin@pawhome.test')
    return headers


@pytest.fixture
def user_headers(app, db):
    _, headers = _create_user(app, db, UserRole.USER.value, 'user@pawhome.test')
    return headers


@pytest.fixture
def shelter_payload():
    return {
        "name": "Happy Tails Shelter",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "zipCode": "560001",
        "phone": "+91-80-1234-5678",
        "email": "contact@happytails.org",
        "capacity": 10
    }


@pytest.fixture
def create_shelter(client, admin_headers, shelter_payload):
    def _create(**overrides):
        payload = {**shelter_payload, **overrides}
        res = client.post('/api/shelters/', json=payload, headers=admin_headers)
        assert res.status_code == 201, res.get_json()
        return res.get_json()
    return _create


@pytest.fixture
def pet_payload():
    def _payload(shelter_id, **overrides):
        payload = {
            "name": "Bruno",
            "type": "dog",
            "breed": "Labrador Retriever",
            "age": 3,
            "description": "Friendly and loves to play fetch",
            "image": "https://images.example.com/bruno.jpg",
            "shelterId": shelter_id,
            "gender": "male",
            "size": "large",
            "color": "golden",
            "adoptionFee": 2500
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def create_pet(client, admin_headers, pet_payload):
    def _create(shelter_id, **overrides):
        res = client.post('/api/pets/', json=pet_payload(shelter_id, **overrides), headers=admin_headers)
        assert res.status_code == 201, res.get_json()
        return res.get_json()
    return _create
