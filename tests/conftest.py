import os
import tempfile
from typing import AsyncGenerator, Dict
from unittest.mock import patch

TEST_ROOT = tempfile.mkdtemp(prefix="blog-tests-")

patch.dict(
    os.environ,
    {
        "ASYNC_DATABASE_URL": f"sqlite+aiosqlite:///{os.path.join(TEST_ROOT, 'test.db')}",
        "UPLOAD_FOLDER": os.path.join(TEST_ROOT, "uploads"),
        "SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
        "LOG_LEVEL": "WARNING",
    },
).start()  # noqa

import httpx
import pytest
from sqlmodel import SQLModel

from src.core.config import settings
from src.core.database import engine, get_session, init_db
from src.core.security import create_access_token
from src.main import app
from src.apps.users.models.user import User
from src.apps.users.repositories.user_repository import UserRepository

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture(autouse=True)
def upload_dir():
    os.makedirs(settings.UPLOAD_FOLDER, exist_ok=True)

    yield settings.UPLOAD_FOLDER

    for name in os.listdir(settings.UPLOAD_FOLDER):
        os.remove(os.path.join(settings.UPLOAD_FOLDER, name))


@pytest.fixture
async def database() -> AsyncGenerator[None, None]:
    await init_db()
    await engine.dispose()

    yield

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(database) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def user_repository() -> UserRepository:
    return UserRepository(get_session)  # type: ignore


@pytest.fixture
async def author(database, user_repository: UserRepository) -> User:
    return await user_repository.create({"name": "Ada", "email": "ada@example.com"})


@pytest.fixture
async def other_user(database, user_repository: UserRepository) -> User:
    return await user_repository.create({"name": "Grace", "email": "grace@example.com"})


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def create_post(client: httpx.AsyncClient):
    async def make(
        user: User,
        title: str = "Harvest report",
        category: str = "Agriculture",
        description: str = "How the wheat harvest went this year.",
        filename: str = "cover.png",
        content: bytes = PNG_BYTES,
    ) -> dict:
        response = await client.post(
            "/posts",
            data={"title": title, "category": category, "description": description},
            files={"thumbnail": (filename, content, "image/png")},
            headers=auth_headers(user),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return make
