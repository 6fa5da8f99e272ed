from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from filmorate_api.services.repositories.base import ReferenceRepo, Row


class MongoReferenceRepo(ReferenceRepo):
    """Lookup collection seeded out-of-band; the API never writes to it."""

    def __init__(
            self,
            db: AsyncIOMotorDatabase,
            collection: str,
            seed: List[Dict],
    ) -> None:
        self.col = db[collection]
        self._seed = seed

    @staticmethod
    def _to_row(doc: Dict) -> Row:
        return {'id': int(doc['_id']), 'name': doc['name']}

    async def ensure_seeded(self) -> None:
        """Upsert the seed rows; existing names are refreshed."""
        for row in self._seed:
            await self.col.update_one(
                {'_id': row['id']},
                {'$set': {'name': row['name']}},
                upsert=True,
            )

    async def list_all(self) -> List[Row]:
        cursor = self.col.find({}).sort('_id', ASCENDING)
        return [self._to_row(doc) async for doc in cursor]

    async def get(self, ref_id: int) -> Optional[Row]:
        doc = await self.col.find_one({'_id': ref_id})
        return None if doc is None else self._to_row(doc)

    async def get_many(self, ids: Iterable[int]) -> List[Row]:
        wanted = sorted(set(ids))
        if not wanted:
            return []
        cursor = self.col.find({'_id': {'$in': wanted}}).sort('_id', ASCENDING)
        return [self._to_row(doc) async for doc in cursor]
