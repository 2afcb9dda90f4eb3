"""
Pytest configuration and shared fixtures for the boutique test suite.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from boutique.auth_utils import create_access_token
from boutique.config import Settings
from boutique.db.database import create_engine_and_sessionmaker
from boutique.db.init_db import init_db
from boutique.main import create_app

TEST_SECRET = "test-secret-key-for-signing-tokens"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file, with cheap bcrypt rounds."""
    return Settings(
        jwt_secret=TEST_SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'boutique.db'}",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def db_session(settings):
    """An AsyncSession on a freshly created schema."""
    engine, session_factory = create_engine_and_sessionmaker(settings.database_url)
    await init_db(engine)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def admin_headers(settings):
    token = create_access_token(
        {"userId": "admin0000000000000000000000000001", "email": "admin@example.com", "role": "admin"},
        settings.jwt_secret,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Factory fixture: registers a customer and returns its auth headers."""
    def _register(email: str = "alice@example.com", password: str = "s3cret-pass", name: str = "Alice") -> dict:
        response = client.post("/api/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _register


@pytest.fixture
def make_product(client, admin_headers):
    """Factory fixture: creates a product through the admin API and returns its JSON."""
    def _make(**overrides) -> dict:
        payload = {
            "name": "Veste en Cuir",
            "description": "Veste en cuir véritable",
            "price": 85000,
            "category": "vetements",
            "image": "https://img.example.com/veste.jpg",
            "stock": 15,
            "featured": False,
        }
        payload.update(overrides)
        response = client.post("/api/products", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
