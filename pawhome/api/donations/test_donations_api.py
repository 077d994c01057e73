# pawhome/api/donations/test_donations_api.py
from datetime import datetime, timezone

import pytest


@pytest.fixture
def donation_payload():
    return {
        "donorName": "Anil Kumar",
        "email": "anil@example.com",
        "amount": 50,
        "paymentId": "pay_demo_001"
    }


@pytest.fixture
def donation(client, donation_payload):
    res = client.post('/api/donations/', json=donation_payload)
    assert res.status_code == 201, res.get_json()
    return res.get_json()


def test_create_donation_defaults_to_pending(donation):
    assert donation['paymentStatus'] == "pending"
    assert donation['amount'] == 50


@pytest.mark.parametrize("amount", [0, -10])
def test_create_donation_rejects_non_positive_amount(client, donation_payload, amount, db):
    res = client.post('/api/donations/', json={**donation_payload, "amount": amount})
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Donation amount must be greater than 0"
    assert db.collections['donations'] == {}


@pytest.mark.parametrize("missing, overrides", [
    ('paymentId', {}),
    (None, {"email": ""}),
])
def test_create_donation_missing_fields(client, donation_payload, db, missing, overrides):
    payload = {**donation_payload, **overrides}
    if missing:
        del payload[missing]
    res = client.post('/api/donations/', json=payload)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Missing required donation fields"
    assert db.collections.get('donations', {}) == {}


def test_admin_endpoints_require_admin(client, donation, user_headers):
    assert client.get('/api/donations/').status_code == 401
    assert client.get('/api/donations/stats', headers=user_headers).status_code == 403


def test_list_donations_with_status_filter(client, admin_headers, donation, donation_payload):
    client.post('/api/donations/', json={**donation_payload, "paymentStatus": "success", "paymentId": "pay_2"})

    res = client.get('/api/donations/', headers=admin_headers)
    assert len(res.get_json()) == 2

    res = client.get('/api/donations/', query_string={'status': 'success'}, headers=admin_headers)
    assert [d['paymentId'] for d in res.get_json()] == ["pay_2"]


def test_list_donations_with_date_range(client, admin_headers, donation, db):
    db.collections['donations'][donation['id']]['created_at'] = datetime(2023, 5, 10, tzinfo=timezone.utc)

    res = client.get(
        '/api/donations/',
        query_string={'startDate': '2023-05-01', 'endDate': '2023-05-31'},
        headers=admin_headers
    )
    assert [d['id'] for d in res.get_json()] == [donation['id']]

    res = client.get('/api/donations/', query_string={'startDate': '2024-01-01'}, headers=admin_headers)
    assert res.get_json() == []


def test_get_donation(client, admin_headers, donation):
    assert client.get(f"/api/donations/{donation['id']}", headers=admin_headers).get_json()['id'] == donation['id']
    assert client.get('/api/donations/missing', headers=admin_headers).status_code == 404


def test_update_donation(client, admin_headers, donation):
    res = client.put(f"/api/donations/{donation['id']}", json={"amount": 75}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['amount'] == 75

    res = client.put(f"/api/donations/{donation['id']}", json={"amount": 0}, headers=admin_headers)
    assert res.status_code == 400

    res = client.put(f"/api/donations/{donation['id']}", json={"paymentStatus": "success"}, headers=admin_headers)
    assert res.status_code == 400


def test_update_payment_status(client, admin_headers, donation):
    url = f"/api/donations/{donation['id']}/status"
    res = client.patch(url, json={"paymentStatus": "success"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['paymentStatus'] == "success"

    res = client.patch(url, json={"paymentStatus": "refunded"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Invalid payment status"

    res = client.patch('/api/donations/missing/status', json={"paymentStatus": "failed"}, headers=admin_headers)
    assert res.status_code == 404


def test_donation_stats(client, admin_headers, donation_payload, db):
    for payment_id, amount, status in (("p1", 100, "success"), ("p2", 250, "success"), ("p3", 40, "failed")):
        client.post('/api/donations/', json={
            **donation_payload, "paymentId": payment_id, "amount": amount, "paymentStatus": status
        })
    older = next(doc_id for doc_id, doc in db.collections['donations'].items() if doc['payment_id'] == "p1")
    db.collections['donations'][older]['created_at'] = datetime(2023, 12, 5, tzinfo=timezone.utc)

    res = client.get('/api/donations/stats', headers=admin_headers)
    assert res.status_code == 200
    stats = res.get_json()
    assert stats['totalDonations'] == 3
    assert stats['successfulDonations'] == 2
    assert stats['failedDonations'] == 1
    assert stats['pendingDonations'] == 0
    assert stats['totalAmount'] == 350
    assert len(stats['monthlyStats']) == 2
    assert stats['monthlyStats'][-1] == {"year": 2023, "month": 12, "count": 1, "amount": 100}


def test_delete_donation(client, admin_headers, donation):
    assert client.delete(f"/api/donations/{donation['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/donations/{donation['id']}", headers=admin_headers).status_code == 404
