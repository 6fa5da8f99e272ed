"""Mongo repository for directed friendship edges."""

from __future__ import annotations

from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from filmorate_api.services.repositories.base import FriendshipsRepo, Row


class MongoFriendshipsRepo(FriendshipsRepo):

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._col = db['friendships']

    async def ensure_indexes(self) -> None:
        await self._col.create_index(
            [('user_id', ASCENDING), ('friend_id', ASCENDING)],
            unique=True,
            name='friendships_user_friend',
        )
        # reverse lookups: mutual check and cascade on delete
        await self._col.create_index([('friend_id', ASCENDING)],
                                     name='friendships_friend_id')

    async def add(self, user_id: int, friend_id: int, session=None) -> bool:
        try:
            res = await self._col.update_one(
                {'user_id': user_id, 'friend_id': friend_id},
                {'$setOnInsert': {'status': True}},
                upsert=True,
                session=session,
            )
        except DuplicateKeyError:
            return False
        return res.upserted_id is not None

    async def remove(
            self, user_id: int, friend_id: int, session=None) -> bool:
        res = await self._col.delete_one(
            {'user_id': user_id, 'friend_id': friend_id}, session=session)
        return res.deleted_count == 1

    async def get(
            self, user_id: int, friend_id: int,
            session=None) -> Optional[Row]:
        return await self._col.find_one(
            {'user_id': user_id, 'friend_id': friend_id},
            {'_id': 0, 'user_id': 1, 'friend_id': 1, 'status': 1},
            session=session,
        )

    async def friend_ids(self, user_id: int, session=None) -> List[int]:
        cursor = self._col.find(
            {'user_id': user_id, 'status': True},
            {'_id': 0, 'friend_id': 1},
            session=session,
        ).sort('friend_id', ASCENDING)
        return [int(doc['friend_id']) async for doc in cursor]

    async def delete_by_user(self, user_id: int, session=None) -> int:
        res = await self._col.delete_many(
            {'$or': [{'user_id': user_id}, {'friend_id': user_id}]},
            session=session,
        )
        return res.deleted_count

    async def clear(self, session=None) -> None:
        await self._col.delete_many({}, session=session)
