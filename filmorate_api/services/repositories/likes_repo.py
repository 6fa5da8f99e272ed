"""Mongo repository for the film_likes collection."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, Set

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from filmorate_api.services.repositories.base import LikesRepo


class MongoLikesRepo(LikesRepo):
    """Insert-or-ignore like rows keyed by (film_id, user_id)."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._col = db['film_likes']

    async def ensure_indexes(self) -> None:
        """Create indexes: unique (film_id, user_id) and user_id filter."""
        await self._col.create_index(
            [('film_id', ASCENDING), ('user_id', ASCENDING)],
            unique=True,
            name='film_likes_film_user',
        )
        await self._col.create_index([('user_id', ASCENDING)],
                                     name='film_likes_user_id')

    async def add(self, film_id: int, user_id: int, session=None) -> bool:
        try:
            res = await self._col.update_one(
                {'film_id': film_id, 'user_id': user_id},
                {'$setOnInsert': {'created_at': datetime.now(timezone.utc)}},
                upsert=True,
                session=session,
            )
        except DuplicateKeyError:
            # a concurrent upsert of the same pair won the race
            return False
        return res.upserted_id is not None

    async def remove(self, film_id: int, user_id: int, session=None) -> bool:
        res = await self._col.delete_one(
            {'film_id': film_id, 'user_id': user_id}, session=session)
        return res.deleted_count == 1

    async def user_ids(self, film_id: int, session=None) -> Set[int]:
        cursor = self._col.find(
            {'film_id': film_id},
            {'_id': 0, 'user_id': 1},
            session=session,
        )
        return {int(doc['user_id']) async for doc in cursor}

    async def user_ids_by_films(
            self, film_ids: Iterable[int],
            session=None) -> Dict[int, Set[int]]:
        wanted = list(set(film_ids))
        if not wanted:
            return {}
        cursor = self._col.find(
            {'film_id': {'$in': wanted}},
            {'_id': 0, 'film_id': 1, 'user_id': 1},
            session=session,
        )
        grouped: Dict[int, Set[int]] = defaultdict(set)
        async for doc in cursor:
            grouped[int(doc['film_id'])].add(int(doc['user_id']))
        return dict(grouped)

    async def delete_by_film(self, film_id: int, session=None) -> int:
        res = await self._col.delete_many({'film_id': film_id},
                                          session=session)
        return res.deleted_count

    async def delete_by_user(self, user_id: int, session=None) -> int:
        res = await self._col.delete_many({'user_id': user_id},
                                          session=session)
        return res.deleted_count

    async def clear(self, session=None) -> None:
        await self._col.delete_many({}, session=session)
