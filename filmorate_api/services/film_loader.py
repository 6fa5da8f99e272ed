"""Batch assembly of Film models from film rows.

Genres, likes and ratings for a whole result set are fetched with one
query each and grouped here, so listing k films costs four round trips
instead of one per film.
"""

from __future__ import annotations

from typing import List

from filmorate_api.models.films import Film
from filmorate_api.models.reference import Genre, Rating
from filmorate_api.services.repositories.base import Repositories, Row


class FilmLoader:

    def __init__(self, repos: Repositories) -> None:
        self.repos = repos

    async def load(self, rows: List[Row], session=None) -> List[Film]:
        if not rows:
            return []
        film_ids = [row['id'] for row in rows]

        genres_by_film = await self.repos.film_genres.genre_ids_by_films(
            film_ids, session=session)
        likes_by_film = await self.repos.likes.user_ids_by_films(
            film_ids, session=session)

        genre_ids = {gid for ids in genres_by_film.values() for gid in ids}
        genres = {row['id']: Genre(**row)
                  for row in await self.repos.genres.get_many(genre_ids)}

        rating_ids = {row['rating_id'] for row in rows
                      if row.get('rating_id') is not None}
        ratings = {row['id']: Rating(**row)
                   for row in await self.repos.ratings.get_many(rating_ids)}

        return [
            Film(
                id=row['id'],
                name=row['name'],
                description=row.get('description'),
                release_date=row['release_date'],
                duration=row['duration'],
                rating=ratings.get(row.get('rating_id')),
                genres=[genres[gid]
                        for gid in genres_by_film.get(row['id'], [])
                        if gid in genres],
                likes=sorted(likes_by_film.get(row['id'], ())),
            )
            for row in rows
        ]

    async def load_one(self, row: Row, session=None) -> Film:
        films = await self.load([row], session=session)
        return films[0]
