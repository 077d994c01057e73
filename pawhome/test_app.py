# pawhome/test_app.py
import pytest


def test_health_check(client):
    res = client.get('/')
    assert res.status_code == 200
    assert b"running" in res.data


def test_unknown_route_returns_json_error(client):
    res = client.get('/api/unknown')
    assert res.status_code == 404
    assert res.get_json()['error_code'] == "NOT_FOUND"


def test_unhandled_exception_returns_500(app, client):
    class BrokenShelters:
        def list_shelters(self, filters):
            raise RuntimeError("firestore unavailable")

    app.services['shelters'] = BrokenShelters()
    res = client.get('/api/shelters/')
    assert res.status_code == 500
    assert res.get_json()['msg'] == "Error fetching shelters"


def test_app_requires_jwt_secret(monkeypatch, db):
    from pawhome import create_app
    from pawhome.core.config import TestingConfig

    monkeypatch.setattr(TestingConfig, 'JWT_SECRET_KEY', None)
    with pytest.raises(ValueError):
        create_app('testing', db=db)


def test_services_share_injected_client(app, db):
    assert app.services['pets'].db is db
    assert app.services['medical'].pet_service is app.services['pets']
    assert app.services['volunteers'].shelter_service is app.services['shelters']
