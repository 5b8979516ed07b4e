import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.core import db as db_module
from app.core.security import hash_password
from app.api.v1.deps import get_generation_service
from app.main import app
from app.models.user import User
from app.services.generation_base import GenerationError, GenerationService


TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


class FakeGenerator(GenerationService):
    """
    Scripted generation service: answers "reply to: <message>" and records
    every call. Set ``fail`` to make the next calls raise GenerationError.
    """

    def __init__(self):
        self.calls = []
        self.fail = False

    @property
    def name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return True

    async def generate_reply(self, history, new_message):
        self.calls.append((list(history), new_message))
        if self.fail:
            raise GenerationError("provider down")
        return f"reply to: {new_message}"


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """Fresh schema without an HTTP client, for service-level tests."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest_asyncio.fixture
async def client(db, generator):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB and
    the scripted generator in place of Gemini.
    """
    app.dependency_overrides[get_generation_service] = lambda: generator
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.pop(get_generation_service, None)


@pytest_asyncio.fixture
async def create_admin():
    """
    Factory fixture to create admin users directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[User, str]:
        user = await User.create(
            username=f"admin_{uuid.uuid4().hex[:6]}",
            email="admin@example.com",
            password_hash=hash_password(password),
            role="admin",
        )
        return user, password

    return _create_admin


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create regular users directly, with a chosen balance.
    """

    async def _create_user(
        password: str = "UserPass!23",
        credits: int = 20,
        is_banned: bool = False,
    ) -> tuple[User, str]:
        user = await User.create(
            username=f"user_{uuid.uuid4().hex[:6]}",
            email=f"{uuid.uuid4().hex[:6]}@example.com",
            password_hash=hash_password(password),
            role="user",
            credits=credits,
            is_banned=is_banned,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(username: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["accessToken"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
