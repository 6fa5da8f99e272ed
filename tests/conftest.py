import logging
import os

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from motor.motor_asyncio import AsyncIOMotorClient

from filmorate_api.core.config import settings
from filmorate_api.main import app
from filmorate_api.services.films_service import FilmsService
from filmorate_api.services.repositories.memory import memory_repositories
from filmorate_api.services.repositories.mongo import mongo_repositories
from filmorate_api.services.users_service import UsersService

# repository tests also run against a real server when this is set
MONGO_TEST_DSN = os.environ.get("MONGO_TEST_DSN", "")
MONGO_TEST_DB = "filmorate_test"

requires_mongo = pytest.mark.skipif(
    not MONGO_TEST_DSN, reason="MONGO_TEST_DSN is not set")


@pytest.fixture(scope="session", autouse=True)
def test_env():
    os.environ["STORAGE_BACKEND"] = "memory"
    os.environ["SENTRY_DSN"] = ""  # no Sentry in tests
    settings.storage_backend = "memory"
    settings.sentry_dsn = ""


@pytest.fixture(autouse=True)
def info_logging(caplog):
    # the app logs at INFO, so every test records at that level too
    caplog.set_level(logging.INFO)


@pytest.fixture
async def client():
    # a fresh lifespan means a fresh in-memory database per test
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport,
                               base_url="http://test") as ac:
            yield ac


@pytest.fixture(params=["memory", pytest.param("mongo", marks=requires_mongo)])
async def repos(request):
    if request.param == "memory":
        bundle = memory_repositories()
        await bundle.prepare()
        yield bundle
        return

    mongo = AsyncIOMotorClient(MONGO_TEST_DSN, tz_aware=True)
    await mongo.drop_database(MONGO_TEST_DB)
    bundle = mongo_repositories(mongo[MONGO_TEST_DB])
    await bundle.prepare()
    yield bundle
    await mongo.drop_database(MONGO_TEST_DB)
    mongo.close()


@pytest.fixture
def users_service(repos) -> UsersService:
    return UsersService(repos)


@pytest.fixture
def films_service(repos) -> FilmsService:
    return FilmsService(repos)
