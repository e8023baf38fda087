# tests/conftest.py
import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from prepmate.db import mongo
from prepmate.services import generation, llm_adapter
from prepmate.services.llm_adapters import mock_adapter


class ScriptedLLM:
    """Adapter stand-in: pops one scripted output per call and records the prompts it saw.

    An Exception instance in the script is raised instead of returned.
    """

    def __init__(self):
        self.outputs = []
        self.calls = []

    def queue(self, *outputs):
        self.outputs.extend(outputs)
        return self

    async def generate(self, prompt_type, prompt, system_prompt=""):
        self.calls.append({"prompt_type": prompt_type, "prompt": prompt, "system_prompt": system_prompt})
        if not self.outputs:
            raise AssertionError(f"unexpected LLM call for {prompt_type}")
        out = self.outputs.pop(0)
        if isinstance(out, Exception):
            raise out
        return out


class FakeCache:
    def __init__(self):
        self.store = {}
        self.ttls = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ttl=None):
        self.store[key] = value
        self.ttls[key] = ttl

    async def delete(self, key):
        self.store.pop(key, None)


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch):
    """In-memory Motor client for every test."""
    client = AsyncMongoMockClient()
    monkeypatch.setattr(mongo, "_mongo_client", client)
    return mongo.get_db()


@pytest.fixture(autouse=True)
def fake_cache(monkeypatch):
    cache = FakeCache()
    monkeypatch.setattr(generation, "cache", cache)
    return cache


@pytest.fixture(autouse=True)
def default_adapter():
    # never reach a real model from tests
    llm_adapter.set_adapter(mock_adapter)
    yield
    llm_adapter.set_adapter(None)


@pytest.fixture
def llm():
    scripted = ScriptedLLM()
    llm_adapter.set_adapter(scripted)
    return scripted


@pytest.fixture
async def user():
    from prepmate.repositories import users
    from prepmate.services.auth import hash_password

    uid = await users.create_user("student@example.com", hash_password("secret123"), "Test Student")
    return await users.get_user(uid)


@pytest.fixture
async def client(user):
    """Authenticated client: get_current_user is overridden with the fixture user."""
    from prepmate.api.v1.auth import get_current_user
    from prepmate.main import app

    app.dependency_overrides[get_current_user] = lambda: user
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def anon_client():
    from prepmate.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
