import logging

from motor.motor_asyncio import AsyncIOMotorClient

from filmorate_api.core.config import Settings

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Motor client with explicit timeouts and pool; owned by the app."""
    return AsyncIOMotorClient(
        settings.mongo_dsn,
        appname=settings.app_name,
        tz_aware=True,
        maxPoolSize=50,
        minPoolSize=0,
        serverSelectionTimeoutMS=3000,
        connectTimeoutMS=3000,
        socketTimeoutMS=5000,
        retryWrites=True,
    )


async def ping(client: AsyncIOMotorClient) -> bool:
    """Early reachability check; startup goes on when it fails."""
    try:
        await client.admin.command("ping")
    except Exception as e:
        logger.warning("mongo_ping_failed", extra={"err": str(e)})
        return False
    return True
