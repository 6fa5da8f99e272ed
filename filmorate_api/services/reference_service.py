"""Read access to rating and genre reference data."""

from __future__ import annotations

from typing import Iterable, List

from filmorate_api.models.reference import Genre, Rating
from filmorate_api.services.errors import NotFound, storage_errors
from filmorate_api.services.repositories.base import Repositories


class ReferenceService:
    """Lookups plus the existence checks used before film writes."""

    def __init__(self, repos: Repositories) -> None:
        self.ratings = repos.ratings
        self.genres = repos.genres

    async def list_ratings(self) -> List[Rating]:
        with storage_errors('rating_list'):
            return [Rating(**row) for row in await self.ratings.list_all()]

    async def get_rating(self, rating_id: int) -> Rating:
        with storage_errors('rating_get'):
            row = await self.ratings.get(rating_id)
        if row is None:
            raise NotFound('rating', rating_id)
        return Rating(**row)

    async def list_genres(self) -> List[Genre]:
        with storage_errors('genre_list'):
            return [Genre(**row) for row in await self.genres.list_all()]

    async def get_genre(self, genre_id: int) -> Genre:
        with storage_errors('genre_get'):
            row = await self.genres.get(genre_id)
        if row is None:
            raise NotFound('genre', genre_id)
        return Genre(**row)

    async def require_genres(self, genre_ids: Iterable[int]) -> List[int]:
        """Return the sorted unique ids, failing on the lowest unknown one."""
        wanted = sorted(set(genre_ids))
        if not wanted:
            return []
        with storage_errors('genre_get'):
            known = {row['id'] for row in await self.genres.get_many(wanted)}
        for genre_id in wanted:
            if genre_id not in known:
                raise NotFound('genre', genre_id)
        return wanted
