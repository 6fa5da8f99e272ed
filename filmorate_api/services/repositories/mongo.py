"""MongoDB-backed repository bundle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from filmorate_api.services.repositories.base import Repositories, T
from filmorate_api.services.repositories.entity_repo import (
    MongoFilmsRepo,
    users_repo,
)
from filmorate_api.services.repositories.film_genres_repo import (
    MongoFilmGenresRepo,
)
from filmorate_api.services.repositories.friendships_repo import (
    MongoFriendshipsRepo,
)
from filmorate_api.services.repositories.likes_repo import MongoLikesRepo
from filmorate_api.services.repositories.reference_data import GENRES, RATINGS
from filmorate_api.services.repositories.reference_repo import (
    MongoReferenceRepo,
)

logger = logging.getLogger(__name__)


@dataclass
class MongoRepositories(Repositories):
    client: AsyncIOMotorClient | None = None
    use_transactions: bool = False

    async def run_in_transaction(
            self, unit: Callable[[Any], Awaitable[T]]) -> T:
        """Open mongo session + transaction and run `unit` inside it.

        `with_transaction` retries the whole unit on TransientTransactionError
        (write conflicts between concurrent requests) and retries the commit
        on UnknownTransactionCommitResult.
        """
        if not self.use_transactions or self.client is None:
            return await unit(None)
        async with await self.client.start_session() as session:
            return await session.with_transaction(unit)

    async def prepare(self) -> None:
        await self.film_genres.ensure_indexes()
        await self.likes.ensure_indexes()
        await self.friendships.ensure_indexes()
        await self.ratings.ensure_seeded()
        await self.genres.ensure_seeded()
        logger.info("mongo_storage_prepared")

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()


def mongo_repositories(
        db: AsyncIOMotorDatabase,
        use_transactions: bool = False) -> MongoRepositories:
    return MongoRepositories(
        users=users_repo(db),
        films=MongoFilmsRepo(db),
        ratings=MongoReferenceRepo(db, 'ratings', RATINGS),
        genres=MongoReferenceRepo(db, 'genres', GENRES),
        film_genres=MongoFilmGenresRepo(db),
        likes=MongoLikesRepo(db),
        friendships=MongoFriendshipsRepo(db),
        client=db.client,
        use_transactions=use_transactions,
    )
