"""Service layer for films, genre assignments, likes and popularity."""

from __future__ import annotations

import logging
from typing import List, Optional

from filmorate_api.models.films import (
    Film,
    FilmCreateRequest,
    FilmUpdateRequest,
)
from filmorate_api.models.reference import Genre
from filmorate_api.services import validation
from filmorate_api.services.errors import NotFound, storage_errors
from filmorate_api.services.film_loader import FilmLoader
from filmorate_api.services.reference_service import ReferenceService
from filmorate_api.services.repositories.base import Repositories, Row

logger = logging.getLogger(__name__)


class FilmsService:  # noqa: WPS214 (methods count)
    """Film CRUD and the relationships hanging off a film.

    Every referenced entity (rating, genres, liking user) is checked before
    the first write, so a failed request leaves no partial state behind.
    """

    def __init__(self, repos: Repositories) -> None:
        """Initialize with the repository bundle and derived helpers."""
        self.repos = repos
        self.films = repos.films
        self.reference = ReferenceService(repos)
        self.loader = FilmLoader(repos)

    # ---------- helpers ----------

    async def _require_row(self, film_id: int, session=None) -> Row:
        with storage_errors('film_get'):
            row = await self.films.get(film_id, session=session)
        if row is None:
            logger.warning('film_not_found', extra={'film_id': film_id})
            raise NotFound('film', film_id)
        return row

    async def _require_user(self, user_id: int) -> None:
        with storage_errors('user_get'):
            found = await self.repos.users.exists(user_id)
        if not found:
            logger.warning('user_not_found', extra={'user_id': user_id})
            raise NotFound('user', user_id)

    async def _checked_references(
            self,
            data: FilmCreateRequest,
    ) -> tuple[Optional[int], Optional[List[int]]]:
        """Resolve rating/genre refs; None means "not supplied"."""
        rating_id = None
        if data.rating is not None:
            rating_id = (await self.reference.get_rating(data.rating.id)).id
        genre_ids = None
        if data.genres is not None:
            genre_ids = await self.reference.require_genres(
                g.id for g in data.genres)
        return rating_id, genre_ids

    # ---------- READ ----------

    async def list_films(self) -> List[Film]:
        with storage_errors('film_list'):
            return await self.loader.load(await self.films.list_all())

    async def get_film(self, film_id: int) -> Film:
        row = await self._require_row(film_id)
        with storage_errors('film_get'):
            return await self.loader.load_one(row)

    async def exists(self, film_id: int) -> bool:
        with storage_errors('film_get'):
            return await self.films.exists(film_id)

    async def genres_of(self, film_id: int) -> List[Genre]:
        """Genres assigned to the film, ordered by genre id."""
        await self._require_row(film_id)
        with storage_errors('film_genres'):
            ids = await self.repos.film_genres.genre_ids(film_id)
            return [Genre(**row)
                    for row in await self.repos.genres.get_many(ids)]

    async def likes_of(self, film_id: int) -> List[int]:
        await self._require_row(film_id)
        with storage_errors('film_likes'):
            return sorted(await self.repos.likes.user_ids(film_id))

    # ---------- CREATE / UPDATE ----------

    async def create_film(self, data: FilmCreateRequest) -> Film:
        """Validate, check references, insert the row and its genres."""
        validation.check_film_name(data.name)
        validation.check_description(data.description)
        validation.check_release_date(data.release_date)
        validation.check_duration(data.duration)
        rating_id, genre_ids = await self._checked_references(data)

        row = {
            'name': data.name,
            'description': data.description,
            'release_date': data.release_date,
            'duration': data.duration,
            'rating_id': rating_id,
        }

        async def store(session) -> Film:
            stored = await self.films.insert(row, session=session)
            if genre_ids:
                await self.repos.film_genres.replace(
                    stored['id'], genre_ids, session=session)
            return await self.loader.load_one(stored, session=session)

        with storage_errors('film_create'):
            film = await self.repos.run_in_transaction(store)
        logger.info('film_created', extra={'film_id': film.id})
        return film

    async def update_film(self, data: FilmUpdateRequest) -> Film:
        """Apply only the supplied fields.

        `genres=None` keeps the current assignment, `genres=[]` clears it.
        """
        await self._require_row(data.id)

        fields: Row = {}
        if data.name is not None:
            validation.check_film_name(data.name)
            fields['name'] = data.name
        if data.description is not None:
            validation.check_description(data.description)
            fields['description'] = data.description
        if data.release_date is not None:
            validation.check_release_date(data.release_date)
            fields['release_date'] = data.release_date
        if data.duration is not None:
            validation.check_duration(data.duration)
            fields['duration'] = data.duration
        rating_id, genre_ids = await self._checked_references(data)
        if rating_id is not None:
            fields['rating_id'] = rating_id

        async def apply(session) -> Optional[Film]:
            stored = await self.films.update(data.id, fields, session=session)
            if stored is None:
                return None
            if genre_ids is not None:
                await self.repos.film_genres.replace(
                    data.id, genre_ids, session=session)
            return await self.loader.load_one(stored, session=session)

        with storage_errors('film_update'):
            film = await self.repos.run_in_transaction(apply)
        if film is None:
            # deleted between the existence check and the write
            raise NotFound('film', data.id)
        logger.info('film_updated', extra={'film_id': data.id,
                                           'fields': sorted(fields)})
        return film

    async def replace_genres(
            self, film_id: int, genre_ids: List[int]) -> List[Genre]:
        """Swap the film's genre set for `genre_ids` (deduplicated)."""
        await self._require_row(film_id)
        wanted = await self.reference.require_genres(genre_ids)

        async def swap(session) -> List[int]:
            return await self.repos.film_genres.replace(
                film_id, wanted, session=session)

        with storage_errors('film_genres'):
            await self.repos.run_in_transaction(swap)
            return [Genre(**row)
                    for row in await self.repos.genres.get_many(wanted)]

    # ---------- DELETE ----------

    async def delete_film(self, film_id: int) -> None:
        """Drop likes and genre rows first, then the film itself."""
        await self._require_row(film_id)

        async def cascade(session) -> bool:
            await self.repos.likes.delete_by_film(film_id, session=session)
            await self.repos.film_genres.delete_by_film(
                film_id, session=session)
            return await self.films.delete(film_id, session=session)

        with storage_errors('film_delete'):
            deleted = await self.repos.run_in_transaction(cascade)
        if not deleted:
            raise NotFound('film', film_id)
        logger.info('film_deleted', extra={'film_id': film_id})

    async def clear_films(self) -> None:
        async def wipe(session) -> None:
            await self.repos.likes.clear(session=session)
            await self.repos.film_genres.clear(session=session)
            await self.films.clear(session=session)

        with storage_errors('film_clear'):
            await self.repos.run_in_transaction(wipe)
        logger.info('films_cleared')

    # ---------- LIKES ----------

    async def add_like(self, film_id: int, user_id: int) -> Film:
        """Record the like; liking twice leaves a single row."""
        await self._require_row(film_id)
        await self._require_user(user_id)
        with storage_errors('like_add'):
            created = await self.repos.likes.add(film_id, user_id)
        logger.info('like_added', extra={'film_id': film_id,
                                         'user_id': user_id,
                                         'inserted': created})
        return await self.get_film(film_id)

    async def remove_like(self, film_id: int, user_id: int) -> Film:
        """Drop the like if present; a missing like is not an error."""
        await self._require_row(film_id)
        await self._require_user(user_id)
        with storage_errors('like_remove'):
            removed = await self.repos.likes.remove(film_id, user_id)
        logger.info('like_removed', extra={'film_id': film_id,
                                           'user_id': user_id,
                                           'removed': removed})
        return await self.get_film(film_id)

    # ---------- POPULAR ----------

    async def popular(self, count: int) -> List[Film]:
        """Films by distinct likers, most liked first, ties by id."""
        validation.check_count(count)
        with storage_errors('film_popular'):
            rows = await self.films.most_liked(count)
            return await self.loader.load(rows)
