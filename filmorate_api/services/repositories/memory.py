"""In-process backend: dicts and sets guarded by the event loop.

None of the coroutines below await anything, so each call runs to
completion without yielding and is atomic as seen by other requests.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from filmorate_api.services.repositories.base import (
    EntityRepo,
    FilmGenresRepo,
    FilmsRepo,
    FriendshipsRepo,
    LikesRepo,
    ReferenceRepo,
    Repositories,
    Row,
)
from filmorate_api.services.repositories.reference_data import GENRES, RATINGS


class MemoryDatabase:
    """Tables of the logical schema plus the id sequences."""

    def __init__(self) -> None:
        self.users: Dict[int, Row] = {}
        self.films: Dict[int, Row] = {}
        self.ratings: Dict[int, Row] = {r['id']: dict(r) for r in RATINGS}
        self.genres: Dict[int, Row] = {g['id']: dict(g) for g in GENRES}
        self.film_genres: Set[Tuple[int, int]] = set()
        self.film_likes: Set[Tuple[int, int]] = set()
        # (user_id, friend_id) -> active
        self.friendships: Dict[Tuple[int, int], bool] = {}
        self._sequences: Dict[str, int] = defaultdict(int)

    def next_id(self, sequence: str) -> int:
        self._sequences[sequence] += 1
        return self._sequences[sequence]


class MemoryEntityRepo(EntityRepo):

    def __init__(self, db: MemoryDatabase, table: str) -> None:
        self._db = db
        self._sequence = table
        self._rows: Dict[int, Row] = getattr(db, table)

    async def list_all(self, session=None) -> List[Row]:
        return [dict(self._rows[i]) for i in sorted(self._rows)]

    async def get(self, entity_id: int, session=None) -> Optional[Row]:
        row = self._rows.get(entity_id)
        return None if row is None else dict(row)

    async def get_many(self, ids: Iterable[int], session=None) -> List[Row]:
        return [dict(self._rows[i]) for i in sorted(set(ids))
                if i in self._rows]

    async def insert(self, row: Row, session=None) -> Row:
        stored = dict(row, id=self._db.next_id(self._sequence))
        self._rows[stored['id']] = stored
        return dict(stored)

    async def update(
            self, entity_id: int, fields: Row, session=None) -> Optional[Row]:
        row = self._rows.get(entity_id)
        if row is None:
            return None
        row.update({k: v for k, v in fields.items() if k != 'id'})
        return dict(row)

    async def delete(self, entity_id: int, session=None) -> bool:
        return self._rows.pop(entity_id, None) is not None

    async def clear(self, session=None) -> None:
        self._rows.clear()

    async def exists(self, entity_id: int, session=None) -> bool:
        return entity_id in self._rows


class MemoryFilmsRepo(MemoryEntityRepo, FilmsRepo):

    def __init__(self, db: MemoryDatabase) -> None:
        super().__init__(db, 'films')

    async def most_liked(self, count: int, session=None) -> List[Row]:
        likes: Dict[int, int] = defaultdict(int)
        for film_id, _ in self._db.film_likes:
            likes[film_id] += 1
        ranked = sorted(self._rows, key=lambda fid: (-likes[fid], fid))
        return [dict(self._rows[fid]) for fid in ranked[:count]]


class MemoryReferenceRepo(ReferenceRepo):

    def __init__(self, rows: Dict[int, Row]) -> None:
        self._rows = rows

    async def list_all(self) -> List[Row]:
        return [dict(self._rows[i]) for i in sorted(self._rows)]

    async def get(self, ref_id: int) -> Optional[Row]:
        row = self._rows.get(ref_id)
        return None if row is None else dict(row)

    async def get_many(self, ids: Iterable[int]) -> List[Row]:
        return [dict(self._rows[i]) for i in sorted(set(ids))
                if i in self._rows]


class MemoryFilmGenresRepo(FilmGenresRepo):

    def __init__(self, db: MemoryDatabase) -> None:
        self._pairs = db.film_genres

    async def replace(
            self, film_id: int, genre_ids: Iterable[int],
            session=None) -> List[int]:
        wanted = sorted(set(genre_ids))
        self._pairs.difference_update(
            [p for p in self._pairs if p[0] == film_id])
        self._pairs.update((film_id, gid) for gid in wanted)
        return wanted

    async def genre_ids(self, film_id: int, session=None) -> List[int]:
        return sorted(g for f, g in self._pairs if f == film_id)

    async def genre_ids_by_films(
            self, film_ids: Iterable[int],
            session=None) -> Dict[int, List[int]]:
        wanted = set(film_ids)
        grouped: Dict[int, List[int]] = defaultdict(list)
        for film_id, genre_id in sorted(self._pairs):
            if film_id in wanted:
                grouped[film_id].append(genre_id)
        return dict(grouped)

    async def delete_by_film(self, film_id: int, session=None) -> int:
        doomed = [p for p in self._pairs if p[0] == film_id]
        self._pairs.difference_update(doomed)
        return len(doomed)

    async def clear(self, session=None) -> None:
        self._pairs.clear()


class MemoryLikesRepo(LikesRepo):

    def __init__(self, db: MemoryDatabase) -> None:
        self._pairs = db.film_likes

    async def add(self, film_id: int, user_id: int, session=None) -> bool:
        if (film_id, user_id) in self._pairs:
            return False
        self._pairs.add((film_id, user_id))
        return True

    async def remove(self, film_id: int, user_id: int, session=None) -> bool:
        if (film_id, user_id) not in self._pairs:
            return False
        self._pairs.discard((film_id, user_id))
        return True

    async def user_ids(self, film_id: int, session=None) -> Set[int]:
        return {u for f, u in self._pairs if f == film_id}

    async def user_ids_by_films(
            self, film_ids: Iterable[int],
            session=None) -> Dict[int, Set[int]]:
        wanted = set(film_ids)
        grouped: Dict[int, Set[int]] = defaultdict(set)
        for film_id, user_id in self._pairs:
            if film_id in wanted:
                grouped[film_id].add(user_id)
        return dict(grouped)

    async def delete_by_film(self, film_id: int, session=None) -> int:
        doomed = [p for p in self._pairs if p[0] == film_id]
        self._pairs.difference_update(doomed)
        return len(doomed)

    async def delete_by_user(self, user_id: int, session=None) -> int:
        doomed = [p for p in self._pairs if p[1] == user_id]
        self._pairs.difference_update(doomed)
        return len(doomed)

    async def clear(self, session=None) -> None:
        self._pairs.clear()


class MemoryFriendshipsRepo(FriendshipsRepo):

    def __init__(self, db: MemoryDatabase) -> None:
        self._edges = db.friendships

    async def add(self, user_id: int, friend_id: int, session=None) -> bool:
        if (user_id, friend_id) in self._edges:
            return False
        self._edges[(user_id, friend_id)] = True
        return True

    async def remove(
            self, user_id: int, friend_id: int, session=None) -> bool:
        return self._edges.pop((user_id, friend_id), None) is not None

    async def get(
            self, user_id: int, friend_id: int,
            session=None) -> Optional[Row]:
        active = self._edges.get((user_id, friend_id))
        if active is None:
            return None
        return {'user_id': user_id, 'friend_id': friend_id, 'status': active}

    async def friend_ids(self, user_id: int, session=None) -> List[int]:
        return sorted(f for (u, f), active in self._edges.items()
                      if u == user_id and active)

    async def delete_by_user(self, user_id: int, session=None) -> int:
        doomed = [e for e in self._edges if user_id in e]
        for edge in doomed:
            del self._edges[edge]
        return len(doomed)

    async def clear(self, session=None) -> None:
        self._edges.clear()


def memory_repositories(db: Optional[MemoryDatabase] = None) -> Repositories:
    db = db or MemoryDatabase()
    return Repositories(
        users=MemoryEntityRepo(db, 'users'),
        films=MemoryFilmsRepo(db),
        ratings=MemoryReferenceRepo(db.ratings),
        genres=MemoryReferenceRepo(db.genres),
        film_genres=MemoryFilmGenresRepo(db),
        likes=MemoryLikesRepo(db),
        friendships=MemoryFriendshipsRepo(db),
    )
