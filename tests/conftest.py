import os
import tempfile

# Settings are read at import time, so the environment must be in place first
_TMP_DIR = tempfile.mkdtemp(prefix="leaderboard-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/test.db"
os.environ["AUTO_CREATE_TABLES"] = "0"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789"
os.environ["API_PREFIX"] = ""
os.environ["ADMIN_ROLL_NUMBER"] = "ADMIN001"
os.environ["ADMIN_PASSWORD"] = "adminpass"
os.environ["PUBLISH_LEADERBOARD_DEFAULT"] = "1"

import httpx
import pytest_asyncio
from httpx import AsyncClient

from leaderboard_api.db import SessionLocal, drop_models, init_models
from leaderboard_api.main import app


@pytest_asyncio.fixture
async def fresh_db():
    await drop_models()
    await init_models()
    yield


@pytest_asyncio.fixture
async def client(fresh_db):
    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def session(fresh_db):
    async with SessionLocal() as s:
        yield s


@pytest_asyncio.fixture
async def admin_headers(client):
    r = await client.post("/login", json={"identifier": "ADMIN001", "password": "adminpass"})
    assert r.status_code == 200, r.text
    return {"x-auth-token": r.json()["token"]}
