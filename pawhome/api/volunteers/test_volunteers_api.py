# pawhome/api/volunteers/test_volunteers_api.py
import pytest


@pytest.fixture
def volunteer_payload(create_shelter):
    shelter = create_shelter()
    return {
        "name": "Priya Sharma",
        "email": "Priya@Example.com",
        "phone": "+91-98765-43210",
        "address": "45 Park Street, Kolkata",
        "dateOfBirth": "1995-06-15",
        "shelterId": shelter['id'],
        "skills": ["dog walking", "grooming"],
        "availability": {"saturday": {"available": True, "timeSlots": ["10:00-14:00"]}},
        "experience": "beginner",
        "emergencyContact": {"name": "Ravi Sharma", "phone": "+91-90000-00000", "relationship": "brother"}
    }


@pytest.fixture
def volunteer(client, volunteer_payload):
    res = client.post('/api/volunteers/', json=volunteer_payload)
    assert res.status_code == 201, res.get_json()
    return res.get_json()


def test_apply_as_volunteer(volunteer, volunteer_payload):
    assert volunteer['status'] == "active"
    assert volunteer['backgroundCheck'] == "pending"
    assert volunteer['hoursCompleted'] == 0
    assert volunteer['email'] == "priya@example.com"
    assert volunteer['dateOfBirth'].startswith("1995-06-15")
    assert volunteer['availability']['saturday']['timeSlots'] == ["10:00-14:00"]
    assert volunteer['shelter']['id'] == volunteer_payload['shelterId']


def test_apply_cannot_set_admin_fields(client, volunteer_payload):
    payload = {**volunteer_payload, "hoursCompleted": 100}
    res = client.post('/api/volunteers/', json=payload)
    assert res.status_code == 400


@pytest.mark.parametrize("missing, overrides", [
    ('phone', {}),
    (None, {"email": ""}),
    (None, {"email": None}),
])
def test_apply_missing_fields(client, volunteer_payload, db, missing, overrides):
    payload = {**volunteer_payload, **overrides}
    if missing:
        del payload[missing]
    res = client.post('/api/volunteers/', json=payload)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Missing required volunteer fields"
    assert db.collections.get('volunteers', {}) == {}


def test_apply_with_unknown_shelter(client, volunteer_payload):
    res = client.post('/api/volunteers/', json={**volunteer_payload, "shelterId": "nope"})
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Invalid shelter ID"


def test_duplicate_volunteer_email(client, volunteer, volunteer_payload):
    res = client.post('/api/volunteers/', json={**volunteer_payload, "email": "priya@example.com"})
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Volunteer with this email already exists"


def test_listing_requires_admin(client, volunteer, user_headers):
    assert client.get('/api/volunteers/').status_code == 401
    assert client.get('/api/volunteers/', headers=user_headers).status_code == 403


def test_list_and_filter_volunteers(client, admin_headers, volunteer, volunteer_payload):
    res = client.get('/api/volunteers/', headers=admin_headers)
    assert [v['id'] for v in res.get_json()] == [volunteer['id']]

    res = client.get('/api/volunteers/', query_string={'experience': 'advanced'}, headers=admin_headers)
    assert res.get_json() == []

    res = client.get(f"/api/volunteers/shelter/{volunteer_payload['shelterId']}", headers=admin_headers)
    assert len(res.get_json()) == 1


def test_get_volunteer(client, admin_headers, volunteer):
    res = client.get(f"/api/volunteers/{volunteer['id']}", headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['shelter']['email'] is not None
    assert client.get('/api/volunteers/missing', headers=admin_headers).status_code == 404


def test_update_volunteer(client, admin_headers, volunteer):
    res = client.put(f"/api/volunteers/{volunteer['id']}", json={"phone": "+91-11111-11111"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['phone'] == "+91-11111-11111"


def test_generic_update_cannot_touch_status_or_hours(client, admin_headers, volunteer):
    for body in ({"status": "suspended"}, {"hoursCompleted": 50}, {"backgroundCheck": "approved"}):
        res = client.put(f"/api/volunteers/{volunteer['id']}", json=body, headers=admin_headers)
        assert res.status_code == 400


def test_update_status(client, admin_headers, volunteer):
    res = client.patch(
        f"/api/volunteers/{volunteer['id']}/status",
        json={"status": "inactive", "backgroundCheck": "approved"},
        headers=admin_headers
    )
    assert res.status_code == 200
    assert res.get_json()['status'] == "inactive"
    assert res.get_json()['backgroundCheck'] == "approved"


def test_update_status_rejects_unknown_values(client, admin_headers, volunteer):
    res = client.patch(f"/api/volunteers/{volunteer['id']}/status", json={"status": "retired"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Invalid volunteer status"

    res = client.patch(f"/api/volunteers/{volunteer['id']}/status", json={}, headers=admin_headers)
    assert res.status_code == 400


def test_hours_are_accumulated(client, admin_headers, volunteer):
    url = f"/api/volunteers/{volunteer['id']}/hours"
    client.patch(url, json={"hoursToAdd": 10}, headers=admin_headers)
    res = client.patch(url, json={"hoursToAdd": 10}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['hoursCompleted'] == 20


@pytest.mark.parametrize("body", [
    {"hoursToAdd": -5}, {}, {"hoursToAdd": None}, {"hoursToAdd": "abc"}, {"hoursToAdd": "NaN"}
])
def test_invalid_hours(client, admin_headers, volunteer, body, db):
    res = client.patch(f"/api/volunteers/{volunteer['id']}/hours", json=body, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Invalid hours value"
    assert db.collections['volunteers'][volunteer['id']]['hours_completed'] == 0


def test_hours_for_missing_volunteer(client, admin_headers):
    res = client.patch('/api/volunteers/missing/hours', json={"hoursToAdd": 2}, headers=admin_headers)
    assert res.status_code == 404


def test_delete_volunteer(client, admin_headers, volunteer):
    res = client.delete(f"/api/volunteers/{volunteer['id']}", headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['msg'] == "Volunteer deleted successfully"
    assert client.delete(f"/api/volunteers/{volunteer['id']}", headers=admin_headers).status_code == 404
