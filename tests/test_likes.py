"""Tests for likes and the popularity ranking over HTTP."""

from tests.helpers import FILMS, create_film, create_user


async def test_like_is_recorded_on_film(client):
    user = await create_user(client)
    film = await create_film(client)

    r = await client.put(f"{FILMS}/{film['id']}/like/{user['id']}")
    assert r.status_code == 200
    assert r.json()["likes"] == [user["id"]]


async def test_like_twice_keeps_single_row(client):
    user = await create_user(client)
    film = await create_film(client)

    await client.put(f"{FILMS}/{film['id']}/like/{user['id']}")
    r = await client.put(f"{FILMS}/{film['id']}/like/{user['id']}")
    assert r.status_code == 200
    assert r.json()["likes"] == [user["id"]]
    r = await client.get(f"{FILMS}/{film['id']}/likes")
    assert r.json() == [user["id"]]


async def test_unlike_without_existing_like_returns_200(client):
    user = await create_user(client)
    film = await create_film(client)

    r = await client.delete(f"{FILMS}/{film['id']}/like/{user['id']}")
    assert r.status_code == 200
    assert r.json()["likes"] == []


async def test_like_unknown_film_or_user_returns_404(client):
    user = await create_user(client)
    film = await create_film(client)

    r = await client.put(f"{FILMS}/999/like/{user['id']}")
    assert r.status_code == 404 and r.json()["detail"]["kind"] == "film"
    r = await client.put(f"{FILMS}/{film['id']}/like/999")
    assert r.status_code == 404 and r.json()["detail"]["kind"] == "user"


async def test_popular_orders_by_likes_then_id(client):
    users = [await create_user(client, n) for n in range(1, 4)]
    films = [await create_film(client, n) for n in range(1, 5)]

    # film 3: 2 likes, film 2: 2 likes, film 4: 1 like, film 1: none
    for user in users[:2]:
        await client.put(f"{FILMS}/{films[2]['id']}/like/{user['id']}")
        await client.put(f"{FILMS}/{films[1]['id']}/like/{user['id']}")
    await client.put(f"{FILMS}/{films[3]['id']}/like/{users[2]['id']}")

    r = await client.get(f"{FILMS}/popular?count=3")
    assert r.status_code == 200
    assert [f["id"] for f in r.json()] == [2, 3, 4]
    assert [len(f["likes"]) for f in r.json()] == [2, 2, 1]


async def test_popular_default_count_is_ten(client):
    for n in range(1, 13):
        await create_film(client, n)
    r = await client.get(f"{FILMS}/popular")
    assert [f["id"] for f in r.json()] == list(range(1, 11))


async def test_popular_rejects_non_positive_count(client):
    r = await client.get(f"{FILMS}/popular?count=0")
    assert r.status_code == 400


async def test_deleting_user_removes_their_likes(client):
    user = await create_user(client)
    film = await create_film(client)
    await client.put(f"{FILMS}/{film['id']}/like/{user['id']}")

    await client.delete(f"/api/v1/users/{user['id']}")
    r = await client.get(f"{FILMS}/{film['id']}")
    assert r.json()["likes"] == []


async def test_popular_with_huge_count_returns_everything(client):
    film = await create_film(client)
    r = await client.get(f"{FILMS}/popular", params={"count": 2 ** 70})
    assert r.status_code == 200
    assert [f["id"] for f in r.json()] == [film["id"]]
