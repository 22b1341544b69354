from fastapi.testclient import TestClient

from pantry_app import crud
from pantry_app.settings import settings


def _headers(SessionLocal, username):
    with SessionLocal() as db:
        user = crud.get_or_create_user(db, username=username)
        token = crud.rotate_user_api_key(db, user.id)
    return {"Authorization": f"Bearer {token}"}


def test_pantry_items_are_private(test_app):
    app, SessionLocal = test_app
    settings.API_KEY_SECRET = "test-secret"
    settings.API_KEY = None
    client = TestClient(app)
    headers1 = _headers(SessionLocal, "user-1")
    headers2 = _headers(SessionLocal, "user-2")

    resp = client.post("/pantry", json={"name": "Caviar"}, headers=headers1)
    assert resp.status_code == 200
    item_id = resp.json()["id"]

    assert client.get("/pantry", headers=headers2).json() == []
    assert client.delete(f"/pantry/{item_id}", headers=headers2).status_code == 404
    assert client.patch(f"/pantry/{item_id}", json={"name": "Ovas"}, headers=headers2).status_code == 404


def test_recipes_can_only_be_edited_by_author(test_app, recipe_payload):
    app, SessionLocal = test_app
    settings.API_KEY_SECRET = "test-secret"
    settings.API_KEY = None
    client = TestClient(app)
    headers1 = _headers(SessionLocal, "user-1")
    headers2 = _headers(SessionLocal, "user-2")

    recipe_id = client.post("/recipes", json=recipe_payload(), headers=headers1).json()["id"]
    assert client.get(f"/recipes/{recipe_id}", headers=headers2).status_code == 200
    assert client.delete(f"/recipes/{recipe_id}", headers=headers2).status_code == 403


def test_match_uses_only_own_pantry(test_app, recipe_payload):
    app, SessionLocal = test_app
    settings.API_KEY_SECRET = "test-secret"
    settings.API_KEY = None
    client = TestClient(app)
    headers1 = _headers(SessionLocal, "user-1")
    headers2 = _headers(SessionLocal, "user-2")

    client.post("/recipes", json=recipe_payload(ingredients=["Arroz"]), headers=headers1)
    client.post("/pantry", json={"name": "arroz"}, headers=headers1)

    assert client.get("/match", headers=headers1).json()[0]["match_percentage"] == 100
    assert client.get("/match", headers=headers2).json()[0]["match_percentage"] == 0


def test_service_api_key_is_enforced(test_app):
    app, SessionLocal = test_app
    settings.API_KEY_SECRET = "test-secret"
    settings.API_KEY = "service-key"
    try:
        client = TestClient(app)
        headers = _headers(SessionLocal, "user-1")
        assert client.get("/pantry", headers=headers).status_code == 401
        assert client.get("/pantry", headers={**headers, "X-API-Key": "service-key"}).status_code == 200
    finally:
        settings.API_KEY = None
