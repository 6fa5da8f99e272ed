async def test_list_genres_ordered_by_id(client):
    r = await client.get("/api/v1/genres")
    assert r.status_code == 200
    ids = [g["id"] for g in r.json()]
    assert ids == sorted(ids) and len(ids) == 6


async def test_get_genre_by_id(client):
    r = await client.get("/api/v1/genres/2")
    assert r.json() == {"id": 2, "name": "Drama"}


async def test_unknown_genre_returns_404(client):
    r = await client.get("/api/v1/genres/100")
    assert r.status_code == 404
    assert r.json()["detail"]["kind"] == "genre"


async def test_list_and_get_ratings(client):
    r = await client.get("/api/v1/mpa")
    assert [m["name"] for m in r.json()] == ["G", "PG", "PG-13", "R", "NC-17"]
    r = await client.get("/api/v1/mpa/3")
    assert r.json() == {"id": 3, "name": "PG-13"}
    assert (await client.get("/api/v1/mpa/9")).status_code == 404


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200 and r.json() == {"status": "ok"}
