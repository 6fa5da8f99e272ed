"""Storage contracts shared by the memory and MongoDB backends.

Rows cross this boundary as plain dicts keyed by column name
(`id`, `email`, `release_date`, `rating_id`, ...). Every method takes an
optional `session` so that services can group several writes into one
backend transaction; backends without transactions ignore it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Set,
    TypeVar,
)

Row = Dict[str, Any]
T = TypeVar("T")


class EntityRepo(ABC):
    """Keyed rows with ids drawn from a monotonic, never reused sequence."""

    @abstractmethod
    async def list_all(self, session=None) -> List[Row]:
        """All rows ordered by id."""

    @abstractmethod
    async def get(self, entity_id: int, session=None) -> Optional[Row]:
        ...

    @abstractmethod
    async def get_many(
            self, ids: Iterable[int], session=None) -> List[Row]:
        """Rows for the given ids ordered by id; unknown ids are skipped."""

    @abstractmethod
    async def insert(self, row: Row, session=None) -> Row:
        """Store a new row under the next sequence id and return it."""

    @abstractmethod
    async def update(
            self, entity_id: int, fields: Row, session=None) -> Optional[Row]:
        """Overwrite the given columns; None when the row is absent."""

    @abstractmethod
    async def delete(self, entity_id: int, session=None) -> bool:
        ...

    @abstractmethod
    async def clear(self, session=None) -> None:
        """Drop every row; the id sequence keeps counting."""

    @abstractmethod
    async def exists(self, entity_id: int, session=None) -> bool:
        ...


class FilmsRepo(EntityRepo):

    @abstractmethod
    async def most_liked(self, count: int, session=None) -> List[Row]:
        """Top `count` films by distinct likers, ties by ascending id."""


class ReferenceRepo(ABC):
    """Read-only lookup table (ratings, genres)."""

    @abstractmethod
    async def list_all(self) -> List[Row]:
        ...

    @abstractmethod
    async def get(self, ref_id: int) -> Optional[Row]:
        ...

    @abstractmethod
    async def get_many(self, ids: Iterable[int]) -> List[Row]:
        ...


class FilmGenresRepo(ABC):

    @abstractmethod
    async def replace(
            self, film_id: int, genre_ids: Iterable[int],
            session=None) -> List[int]:
        """Swap the film's assignment set; returns the stored sorted ids."""

    @abstractmethod
    async def genre_ids(self, film_id: int, session=None) -> List[int]:
        ...

    @abstractmethod
    async def genre_ids_by_films(
            self, film_ids: Iterable[int],
            session=None) -> Dict[int, List[int]]:
        """One round trip for many films; lists are sorted by genre id."""

    @abstractmethod
    async def delete_by_film(self, film_id: int, session=None) -> int:
        ...

    @abstractmethod
    async def clear(self, session=None) -> None:
        ...


class LikesRepo(ABC):

    @abstractmethod
    async def add(self, film_id: int, user_id: int, session=None) -> bool:
        """Insert-or-ignore; True when a new row was written."""

    @abstractmethod
    async def remove(self, film_id: int, user_id: int, session=None) -> bool:
        ...

    @abstractmethod
    async def user_ids(self, film_id: int, session=None) -> Set[int]:
        ...

    @abstractmethod
    async def user_ids_by_films(
            self, film_ids: Iterable[int],
            session=None) -> Dict[int, Set[int]]:
        ...

    @abstractmethod
    async def delete_by_film(self, film_id: int, session=None) -> int:
        ...

    @abstractmethod
    async def delete_by_user(self, user_id: int, session=None) -> int:
        ...

    @abstractmethod
    async def clear(self, session=None) -> None:
        ...


class FriendshipsRepo(ABC):
    """Directed edges user_id -> friend_id with an `active` status flag."""

    @abstractmethod
    async def add(self, user_id: int, friend_id: int, session=None) -> bool:
        """Insert the edge if absent; True when a new row was written."""

    @abstractmethod
    async def remove(
            self, user_id: int, friend_id: int, session=None) -> bool:
        """Delete this direction only."""

    @abstractmethod
    async def get(
            self, user_id: int, friend_id: int,
            session=None) -> Optional[Row]:
        ...

    @abstractmethod
    async def friend_ids(self, user_id: int, session=None) -> List[int]:
        """Targets of active edges leaving `user_id`, sorted."""

    @abstractmethod
    async def delete_by_user(self, user_id: int, session=None) -> int:
        """Drop edges in both directions touching the user."""

    @abstractmethod
    async def clear(self, session=None) -> None:
        ...


@dataclass
class Repositories:
    """Every storage capability a service needs, behind one handle."""

    users: EntityRepo
    films: FilmsRepo
    ratings: ReferenceRepo
    genres: ReferenceRepo
    film_genres: FilmGenresRepo
    likes: LikesRepo
    friendships: FriendshipsRepo

    async def run_in_transaction(
            self, unit: Callable[[Any], Awaitable[T]]) -> T:
        """Run `unit(session)` as one atomic group of writes.

        `unit` may be invoked more than once when the backend retries a
        conflicting transaction, so it must only read and write storage.
        Backends without transactions call it once with `session=None`.
        """
        return await unit(None)

    async def prepare(self) -> None:
        """Create indexes and seed reference data."""

    async def close(self) -> None:
        ...
