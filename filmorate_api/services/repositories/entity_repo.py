"""Mongo repositories for users and films collections."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument

from filmorate_api.services.repositories.base import (
    EntityRepo,
    FilmsRepo,
    Row,
)

# largest $limit BSON can encode; no collection gets near it
MAX_INT64 = 2 ** 63 - 1


class Counters:
    """Monotonic id sequences kept in the `counters` collection."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._col = db['counters']

    async def next_id(self, sequence: str) -> int:
        doc = await self._col.find_one_and_update(
            {'_id': sequence},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc['seq'])


class MongoEntityRepo(EntityRepo):
    """Rows stored with the integer id as `_id`.

    BSON has no plain date type, so `date_fields` travel as UTC midnight.
    """

    def __init__(
            self,
            db: AsyncIOMotorDatabase,
            collection: str,
            date_fields: Tuple[str, ...] = (),
    ) -> None:
        self.col = db[collection]
        self._sequence = collection
        self._counters = Counters(db)
        self._date_fields = date_fields

    def _to_doc(self, fields: Row) -> Dict[str, Any]:
        doc = {k: v for k, v in fields.items() if k != 'id'}
        for key in self._date_fields:
            if isinstance(doc.get(key), date):
                doc[key] = datetime.combine(
                    doc[key], time.min, tzinfo=timezone.utc)
        return doc

    def _to_row(self, doc: Dict[str, Any]) -> Row:
        row = {k: v for k, v in doc.items() if k != '_id'}
        row['id'] = int(doc['_id'])
        for key in self._date_fields:
            if isinstance(row.get(key), datetime):
                row[key] = row[key].date()
        return row

    async def list_all(self, session=None) -> List[Row]:
        cursor = self.col.find({}, session=session).sort('_id', ASCENDING)
        return [self._to_row(doc) async for doc in cursor]

    async def get(self, entity_id: int, session=None) -> Optional[Row]:
        doc = await self.col.find_one({'_id': entity_id}, session=session)
        return None if doc is None else self._to_row(doc)

    async def get_many(self, ids: Iterable[int], session=None) -> List[Row]:
        wanted = sorted(set(ids))
        if not wanted:
            return []
        cursor = self.col.find(
            {'_id': {'$in': wanted}},
            session=session,
        ).sort('_id', ASCENDING)
        return [self._to_row(doc) async for doc in cursor]

    async def insert(self, row: Row, session=None) -> Row:
        # never inside a transaction: every insert touches the same counter
        new_id = await self._counters.next_id(self._sequence)
        doc = self._to_doc(row)
        doc['_id'] = new_id
        await self.col.insert_one(doc, session=session)
        return self._to_row(doc)

    async def update(
            self, entity_id: int, fields: Row, session=None) -> Optional[Row]:
        doc = self._to_doc(fields)
        if not doc:
            return await self.get(entity_id, session=session)
        updated = await self.col.find_one_and_update(
            {'_id': entity_id},
            {'$set': doc},
            return_document=ReturnDocument.AFTER,
            session=session,
        )
        return None if updated is None else self._to_row(updated)

    async def delete(self, entity_id: int, session=None) -> bool:
        res = await self.col.delete_one({'_id': entity_id}, session=session)
        return res.deleted_count == 1

    async def clear(self, session=None) -> None:
        await self.col.delete_many({}, session=session)

    async def exists(self, entity_id: int, session=None) -> bool:
        count = await self.col.count_documents(
            {'_id': entity_id}, limit=1, session=session)
        return count > 0


class MongoFilmsRepo(MongoEntityRepo, FilmsRepo):

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        super().__init__(db, 'films', date_fields=('release_date',))

    async def most_liked(self, count: int, session=None) -> List[Row]:
        pipeline = [
            {'$lookup': {
                'from': 'film_likes',
                'localField': '_id',
                'foreignField': 'film_id',
                'as': 'likes',
            }},
            {'$addFields': {'likes_count': {'$size': '$likes'}}},
            {'$sort': {'likes_count': -1, '_id': 1}},
            {'$limit': min(count, MAX_INT64)},
            {'$project': {'likes': 0, 'likes_count': 0}},
        ]
        cursor = self.col.aggregate(pipeline, session=session)
        return [self._to_row(doc) async for doc in cursor]


def users_repo(db: AsyncIOMotorDatabase) -> MongoEntityRepo:
    return MongoEntityRepo(db, 'users', date_fields=('birthday',))
