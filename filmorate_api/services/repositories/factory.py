import logging

from filmorate_api.core.config import Settings
from filmorate_api.db.mongo import create_client, ping
from filmorate_api.services.repositories.base import Repositories
from filmorate_api.services.repositories.memory import memory_repositories
from filmorate_api.services.repositories.mongo import mongo_repositories

logger = logging.getLogger(__name__)


async def build_repositories(settings: Settings) -> Repositories:
    """Pick the storage backend named by `settings.storage_backend`."""
    if settings.storage_backend == "mongo":
        client = create_client(settings)
        await ping(client)
        repos = mongo_repositories(
            client[settings.mongo_db],
            use_transactions=settings.mongo_transactions,
        )
    else:
        repos = memory_repositories()
    await repos.prepare()
    logger.info("storage_ready",
                extra={"backend": settings.storage_backend})
    return repos
