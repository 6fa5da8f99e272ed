from filmorate_api.core.config import Settings
from filmorate_api.main import app
from filmorate_api.services.repositories.base import Repositories
from filmorate_api.services.repositories.factory import build_repositories
from filmorate_api.services.repositories.memory import MemoryEntityRepo


async def test_lifespan_puts_repositories_on_app_state(client):
    assert isinstance(app.state.repositories, Repositories)
    assert isinstance(app.state.repositories.users, MemoryEntityRepo)


async def test_build_repositories_memory_backend_is_isolated():
    cfg = Settings(STORAGE_BACKEND="memory")
    first = await build_repositories(cfg)
    second = await build_repositories(cfg)
    await first.users.insert({"login": "x"})
    assert await second.users.list_all() == []


async def test_trace_id_is_echoed_back(client):
    r = await client.get("/health", headers={"X-Request-Id": "abc123"})
    assert r.headers["X-Request-Id"] == "abc123"
    r = await client.get("/health")
    assert r.headers["X-Request-Id"]
