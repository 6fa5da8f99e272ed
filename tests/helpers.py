from datetime import date
from typing import Any, Dict, List

from httpx import AsyncClient

from filmorate_api.models.films import FilmCreateRequest, GenreRef, RatingRef
from filmorate_api.models.users import UserCreateRequest

USERS = "/api/v1/users"
FILMS = "/api/v1/films"


def user_payload(n: int = 1, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "email": f"user{n}@example.com",
        "login": f"user{n}",
        "name": f"User {n}",
        "birthday": "1990-05-17",
    }
    payload.update(overrides)
    return payload


def film_payload(n: int = 1, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": f"Film {n}",
        "description": "A film about things",
        "releaseDate": "2001-09-14",
        "duration": 120,
        "mpa": {"id": 1},
    }
    payload.update(overrides)
    return payload


async def create_user(client: AsyncClient, n: int = 1, **overrides) -> dict:
    r = await client.post(USERS, json=user_payload(n, **overrides))
    assert r.status_code == 201, r.text
    return r.json()


async def create_film(client: AsyncClient, n: int = 1, **overrides) -> dict:
    r = await client.post(FILMS, json=film_payload(n, **overrides))
    assert r.status_code == 201, r.text
    return r.json()


def user_request(n: int = 1, **overrides: Any) -> UserCreateRequest:
    fields = {
        "email": f"user{n}@example.com",
        "login": f"user{n}",
        "name": f"User {n}",
        "birthday": date(1990, 5, 17),
    }
    fields.update(overrides)
    return UserCreateRequest(**fields)


def film_request(
        n: int = 1,
        genres: List[int] | None = None,
        **overrides: Any,
) -> FilmCreateRequest:
    fields = {
        "name": f"Film {n}",
        "description": "A film about things",
        "release_date": date(2001, 9, 14),
        "duration": 120,
        "rating": RatingRef(id=1),
        "genres": None if genres is None else [GenreRef(id=g) for g in genres],
    }
    fields.update(overrides)
    return FilmCreateRequest(**fields)
