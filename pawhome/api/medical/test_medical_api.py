# pawhome/api/medical/test_medical_api.py
import pytest


@pytest.fixture
def pet(create_shelter, create_pet):
    return create_pet(create_shelter()['id'])


@pytest.fixture
def record_payload(pet):
    def _payload(**overrides):
        payload = {
            "petId": pet['id'],
            "recordType": "checkup",
            "title": "Annual checkup",
            "description": "General health examination",
            "veterinarian": "Dr. Mehta",
            "clinic": "City Vet Clinic",
            "date": "2024-03-01"
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def create_record(client, admin_headers, record_payload):
    def _create(**overrides):
        res = client.post('/api/medical/', json=record_payload(**overrides), headers=admin_headers)
        assert res.status_code == 201, res.get_json()
        return res.get_json()
    return _create


def test_create_record(create_record, pet):
    record = create_record(medications=[{"name": "Amoxicillin", "dosage": "250mg", "frequency": "2x daily", "duration": "7 days"}])
    assert record['petId'] == pet['id']
    assert record['pet']['name'] == pet['name']
    assert record['cost'] == 0
    assert record['date'] == "2024-03-01T00:00:00Z"
    assert record['medications'][0]['dosage'] == "250mg"


def test_create_record_requires_existing_pet(client, admin_headers, record_payload):
    res = client.post('/api/medical/', json=record_payload(petId="missing-pet"), headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Invalid pet ID"


def test_create_record_missing_fields(client, admin_headers, record_payload, db):
    payload = record_payload()
    del payload['veterinarian']
    res = client.post('/api/medical/', json=payload, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Missing required medical record fields"
    assert db.collections['medical_records'] == {}


def test_create_record_requires_admin(client, user_headers, record_payload):
    assert client.post('/api/medical/', json=record_payload(), headers=user_headers).status_code == 403


def test_records_for_pet_sorted_by_date(client, create_record, pet):
    create_record(title="Older", date="2023-01-10")
    create_record(title="Newer", date="2024-06-20")
    res = client.get(f"/api/medical/pet/{pet['id']}")
    assert res.status_code == 200
    assert [r['title'] for r in res.get_json()] == ["Newer", "Older"]


def test_records_for_unknown_pet(client):
    res = client.get('/api/medical/pet/unknown-pet')
    assert res.status_code == 404
    assert res.get_json()['msg'] == "Pet not found"


def test_vaccination_history(client, create_record, pet):
    create_record(
        recordType="vaccination", title="Puppy shots", date="2023-02-01", veterinarian="Dr. Rao",
        vaccinations=[{"vaccine": "DHPP", "dateGiven": "2023-02-01", "nextDue": "2024-02-01", "batchNumber": "B-1"}]
    )
    latest = create_record(
        recordType="vaccination", title="Rabies", date="2024-02-15",
        vaccinations=[
            {"vaccine": "Rabies", "dateGiven": "2024-02-15", "nextDue": "2025-02-15"},
            {"vaccine": "Leptospirosis", "dateGiven": "2024-02-15"}
        ]
    )
    create_record(title="Checkup only", date="2024-05-01")

    res = client.get(f"/api/medical/pet/{pet['id']}/vaccinations")
    assert res.status_code == 200
    history = res.get_json()
    assert [v['vaccine'] for v in history] == ["Rabies", "Leptospirosis", "DHPP"]
    assert history[0]['recordId'] == latest['id']
    assert history[0]['clinic'] == "City Vet Clinic"
    assert history[0]['recordDate'] == "2024-02-15T00:00:00Z"
    assert history[2]['veterinarian'] == "Dr. Rao"
    assert history[2]['batchNumber'] == "B-1"


def test_get_record(client, create_record):
    record = create_record()
    assert client.get(f"/api/medical/{record['id']}").get_json()['title'] == "Annual checkup"
    res = client.get('/api/medical/missing')
    assert res.status_code == 404
    assert res.get_json()['msg'] == "Medical record not found"


def test_update_record(client, admin_headers, create_record):
    record = create_record()
    res = client.put(f"/api/medical/{record['id']}", json={"cost": 1200, "notes": "All good"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['cost'] == 1200
    assert res.get_json()['notes'] == "All good"

    res = client.put(f"/api/medical/{record['id']}", json={"petId": "missing"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Invalid pet ID"


def test_delete_record(client, admin_headers, create_record):
    record = create_record()
    res = client.delete(f"/api/medical/{record['id']}", headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['msg'] == "Medical record deleted successfully"
    assert client.delete(f"/api/medical/{record['id']}", headers=admin_headers).status_code == 404


def test_records_survive_pet_deletion(client, admin_headers, create_record, pet):
    record = create_record()
    client.delete(f"/api/pets/{pet['id']}", headers=admin_headers)
    res = client.get(f"/api/medical/{record['id']}")
    assert res.status_code == 200
    assert res.get_json()['pet'] is None
