# pawhome/api/admin/test_admin_api.py
import uuid


def test_admin_pet_lifecycle(client, admin_headers, create_shelter, pet_payload):
    shelter = create_shelter()

    res = client.post('/api/admin/pets', json=pet_payload(shelter['id']), headers=admin_headers)
    assert res.status_code == 201
    body = res.get_json()
    assert body['success'] is True
    assert body['msg'] == "Pet added successfully"
    pet_id = body['pet']['id']

    res = client.put(f"/api/admin/pets/{pet_id}", json={"adoptionFee": 1500}, headers=admin_headers)
    assert res.status_code == 200
    assert res.get_json()['pet']['adoptionFee'] == 1500

    res = client.get('/api/admin/pets', headers=admin_headers)
    assert [p['id'] for p in res.get_json()['pets']] == [pet_id]

    res = client.delete(f"/api/admin/pets/{pet_id}", headers=admin_headers)
    assert res.get_json() == {"success": True, "msg": "Pet deleted successfully"}
    assert client.delete(f"/api/admin/pets/{pet_id}", headers=admin_headers).status_code == 404


def test_admin_create_pet_validation(client, admin_headers, pet_payload):
    res = client.post('/api/admin/pets', json=pet_payload("missing-shelter"), headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()['msg'] == "Invalid shelter ID"

    res = client.put(f"/api/admin/pets/{uuid.uuid4()}", json={"age": 2}, headers=admin_headers)
    assert res.status_code == 404


def test_admin_shelter_dropdown(client, admin_headers, create_shelter):
    create_shelter(name="Zeta Shelter")
    create_shelter(name="Alpha Shelter")
    res = client.get('/api/admin/shelters', headers=admin_headers)
    shelters = res.get_json()['shelters']
    assert [s['name'] for s in shelters] == ["Alpha Shelter", "Zeta Shelter"]
    assert set(shelters[0]) == {"id", "name", "address", "city", "state"}


def test_admin_stats(client, admin_headers, create_shelter, create_pet):
    shelter = create_shelter()
    pets = [create_pet(shelter['id'], name=f"Pet {i}") for i in range(6)]
    client.patch(f"/api/pets/{pets[0]['id']}/adoption-status", json={"adoptionStatus": "adopted"}, headers=admin_headers)
    client.patch(f"/api/pets/{pets[1]['id']}/adoption-status", json={"adoptionStatus": "pending"}, headers=admin_headers)

    res = client.get('/api/admin/stats', headers=admin_headers)
    assert res.status_code == 200
    stats = res.get_json()['stats']
    assert stats['totalPets'] == 6
    assert stats['availablePets'] == 4
    assert stats['adoptedPets'] == 1
    assert stats['pendingPets'] == 1
    assert len(stats['recentPets']) == 5
