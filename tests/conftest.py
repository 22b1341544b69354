import datetime as dt

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pantry_app import crud
from pantry_app.api.deps import get_today
from pantry_app.db import get_db
from pantry_app.main import create_app
from pantry_app.models.base import Base
from pantry_app.settings import settings


TODAY = dt.date(2026, 3, 10)


@pytest.fixture()
def test_app():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(engine)

    app = create_app()

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return app, TestingSessionLocal


@pytest.fixture()
def client(test_app):
    app, _ = test_app
    return TestClient(app)


@pytest.fixture()
def auth_headers(test_app):
    app, TestingSessionLocal = test_app
    settings.API_KEY_SECRET = "test-secret"
    settings.API_KEY = None
    with TestingSessionLocal() as db:
        user = crud.get_or_create_user(db, username="test")
        token = crud.rotate_user_api_key(db, user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def recipe_payload():
    def _make(title="Arroz com Feijão", ingredients=None, **extra):
        payload = {
            "title": title,
            "prep_time_minutes": 40,
            "ingredients": ingredients or ["Arroz", "Feijão", "Sal"],
            "steps": ["Cook", "Serve"],
        }
        payload.update(extra)
        return payload

    return _make
