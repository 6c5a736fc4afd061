import pytest
from fastapi.testclient import TestClient

from backend.config import Settings
from backend.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        jwt_expire_minutes=60,
        cors_origins=["http://localhost:5173"],
        cookie_secure=False,
        upload_dir=tmp_path / "uploads",
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


def signup(client, name="Ana", email="a@x.com", password="pw123", files=None):
    return client.post(
        "/api/signup",
        data={"name": name, "email": email, "password": password},
        files=files,
    )
