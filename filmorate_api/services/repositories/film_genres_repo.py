"""Mongo repository for the film_genres association collection."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import BulkWriteError

from filmorate_api.services.repositories.base import FilmGenresRepo

DUPLICATE_KEY = 11000


class MongoFilmGenresRepo(FilmGenresRepo):
    """(film_id, genre_id) pairs, unique per pair."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._col = db['film_genres']

    async def ensure_indexes(self) -> None:
        await self._col.create_index(
            [('film_id', ASCENDING), ('genre_id', ASCENDING)],
            unique=True,
            name='film_genres_film_genre',
        )

    async def replace(
            self, film_id: int, genre_ids: Iterable[int],
            session=None) -> List[int]:
        """Delete the old set and insert the new one.

        Pass a transaction session to hide the gap between the two writes.
        Without one, a concurrent identical replace may insert the same
        pairs first; those duplicates are skipped so both calls converge.
        """
        wanted = sorted(set(genre_ids))
        await self._col.delete_many({'film_id': film_id}, session=session)
        if not wanted:
            return wanted
        try:
            await self._col.insert_many(
                [{'film_id': film_id, 'genre_id': gid} for gid in wanted],
                ordered=False,
                session=session,
            )
        except BulkWriteError as e:
            errors = e.details.get('writeErrors', [])
            if e.details.get('writeConcernErrors') or any(
                    err.get('code') != DUPLICATE_KEY for err in errors):
                raise
        return wanted

    async def genre_ids(self, film_id: int, session=None) -> List[int]:
        cursor = self._col.find(
            {'film_id': film_id},
            {'_id': 0, 'genre_id': 1},
            session=session,
        ).sort('genre_id', ASCENDING)
        return [int(doc['genre_id']) async for doc in cursor]

    async def genre_ids_by_films(
            self, film_ids: Iterable[int],
            session=None) -> Dict[int, List[int]]:
        wanted = list(set(film_ids))
        if not wanted:
            return {}
        cursor = self._col.find(
            {'film_id': {'$in': wanted}},
            {'_id': 0, 'film_id': 1, 'genre_id': 1},
            session=session,
        ).sort([('film_id', ASCENDING), ('genre_id', ASCENDING)])
        grouped: Dict[int, List[int]] = defaultdict(list)
        async for doc in cursor:
            grouped[int(doc['film_id'])].append(int(doc['genre_id']))
        return dict(grouped)

    async def delete_by_film(self, film_id: int, session=None) -> int:
        res = await self._col.delete_many({'film_id': film_id},
                                          session=session)
        return res.deleted_count

    async def clear(self, session=None) -> None:
        await self._col.delete_many({}, session=session)
