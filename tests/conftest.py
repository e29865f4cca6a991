# tests/conftest.py
"""
Shared fixtures.

Each test gets its own SQLite file and an in-memory media host, wired into
the app through dependency overrides. The TestClient is used without its
context manager so the lifespan (which targets the configured database)
never runs.
"""
import asyncio
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from folio.app.core.errors import MediaHostError
from folio.app.db import init_models
from folio.app.db.base import get_db, utcnow
from folio.app.db.session import build_engine, build_sessionmaker
from folio.app.main import app
from folio.app.models.user import UserSession
from folio.app.services import users as user_service
from folio.app.services.media import MediaUpload, get_media_host

PASSWORD = "secret123"


class FakeMediaHost:
    """Keeps uploads in a dict keyed by public id."""

    def __init__(self):
        self.files = {}
        self.deleted = []
        self.fail_uploads = False
        self._counter = 0

    async def upload(self, data, folder, resource_type="image", filename="upload"):
        if self.fail_uploads:
            raise MediaHostError("Failed to upload file")
        self._counter += 1
        public_id = f"{folder}/{self._counter}"
        url = f"https://media.test/{resource_type}/{public_id}"
        self.files[public_id] = {"url": url, "data": data, "resource_type": resource_type}
        return MediaUpload(url=url, public_id=public_id)

    async def delete(self, public_id):
        self.deleted.append(public_id)
        return self.files.pop(public_id, None) is not None

    async def fetch(self, url):
        for stored in self.files.values():
            if stored["url"] == url:
                return stored["data"]
        raise MediaHostError("Failed to fetch file")


@pytest.fixture
def sessionmaker(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    asyncio.run(init_models(engine))
    yield build_sessionmaker(engine)
    asyncio.run(engine.dispose())


@pytest.fixture
def media():
    return FakeMediaHost()


@pytest.fixture
def client(sessionmaker, media):
    async def override_get_db():
        async with sessionmaker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_host] = lambda: media
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_call(sessionmaker):
    """Run fn(db, *args) against the test database from synchronous test code."""
    def call(fn, *args):
        async def run():
            async with sessionmaker() as db:
                return await fn(db, *args)
        return asyncio.run(run())
    return call


def signup(client, username="alice", email=None, phone_number="0123456789", gender="female",
           password=PASSWORD):
    return client.post(
        "/api/v1/auth/signup",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "phoneNumber": phone_number,
            "gender": gender,
            "password": password,
        },
    )


def login(client, email_or_username="alice", password=PASSWORD):
    return client.post(
        "/api/v1/auth/login",
        json={"emailOrUsername": email_or_username, "password": password},
    )


async def promote(db, username):
    user = await user_service.find_user_by_username(db, username)
    await user_service.set_admin(db, user)


async def expire_sessions(db):
    await db.execute(update(UserSession).values(expires_at=utcnow() - timedelta(minutes=1)))
    await db.commit()


@pytest.fixture
def user_client(client):
    """Logged in as a regular user."""
    assert signup(client).status_code == 201
    assert login(client).status_code == 200
    return client


@pytest.fixture
def admin_client(client, db_call):
    """Logged in as an administrator."""
    assert signup(client, username="admin", phone_number="0999999999").status_code == 201
    db_call(promote, "admin")
    assert login(client, "admin").status_code == 200
    return client
