"""Tests for directed friendships over HTTP."""

from tests.helpers import FILMS, USERS, create_film, create_user


async def _friend(client, user_id: int, friend_id: int):
    return await client.put(f"{USERS}/{user_id}/friends/{friend_id}")


async def _friend_ids(client, user_id: int) -> list:
    r = await client.get(f"{USERS}/{user_id}/friends")
    assert r.status_code == 200
    return [u["id"] for u in r.json()]


async def test_add_friend_is_one_directional(client):
    a = await create_user(client, 1)
    b = await create_user(client, 2)

    r = await _friend(client, a["id"], b["id"])
    assert r.status_code == 200 and r.json()["id"] == a["id"]

    assert await _friend_ids(client, a["id"]) == [b["id"]]
    assert await _friend_ids(client, b["id"]) == []


async def test_add_friend_twice_is_idempotent(client):
    a = await create_user(client, 1)
    b = await create_user(client, 2)
    await _friend(client, a["id"], b["id"])
    r = await _friend(client, a["id"], b["id"])
    assert r.status_code == 200
    assert await _friend_ids(client, a["id"]) == [b["id"]]


async def test_self_friendship_returns_400(client):
    a = await create_user(client)
    r = await _friend(client, a["id"], a["id"])
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "validation_error"


async def test_friend_unknown_user_returns_404(client):
    a = await create_user(client)
    r = await _friend(client, a["id"], 404)
    assert r.status_code == 404
    assert r.json()["detail"]["id"] == 404
    r = await client.get(f"{USERS}/404/friends")
    assert r.status_code == 404


async def test_remove_friend_keeps_reverse_edge(client):
    a = await create_user(client, 1)
    b = await create_user(client, 2)
    await _friend(client, a["id"], b["id"])
    await _friend(client, b["id"], a["id"])

    r = await client.delete(f"{USERS}/{a['id']}/friends/{b['id']}")
    assert r.status_code == 200
    assert await _friend_ids(client, a["id"]) == []
    assert await _friend_ids(client, b["id"]) == [a["id"]]


async def test_remove_missing_friendship_is_noop(client):
    a = await create_user(client, 1)
    b = await create_user(client, 2)
    r = await client.delete(f"{USERS}/{a['id']}/friends/{b['id']}")
    assert r.status_code == 200


async def test_common_friends_use_each_users_outgoing_edges(client):
    a, b, c, d = [await create_user(client, n) for n in range(1, 5)]
    await _friend(client, a["id"], b["id"])
    await _friend(client, a["id"], c["id"])
    await _friend(client, b["id"], c["id"])
    await _friend(client, d["id"], c["id"])

    r = await client.get(f"{USERS}/{a['id']}/friends/common/{d['id']}")
    assert r.status_code == 200
    assert [u["id"] for u in r.json()] == [c["id"]]


async def test_friendship_state_reports_mutual(client):
    a = await create_user(client, 1)
    b = await create_user(client, 2)
    await _friend(client, a["id"], b["id"])

    r = await client.get(f"{USERS}/{a['id']}/friends/{b['id']}")
    assert r.json() == {"user_id": a["id"], "friend_id": b["id"],
                        "active": True, "mutual": False}

    await _friend(client, b["id"], a["id"])
    r = await client.get(f"{USERS}/{a['id']}/friends/{b['id']}")
    assert r.json()["mutual"] is True


async def test_deleting_user_drops_edges_in_both_directions(client):
    a = await create_user(client, 1)
    b = await create_user(client, 2)
    c = await create_user(client, 3)
    await _friend(client, a["id"], b["id"])
    await _friend(client, b["id"], a["id"])
    await _friend(client, c["id"], b["id"])

    await client.delete(f"{USERS}/{b['id']}")
    assert await _friend_ids(client, a["id"]) == []
    assert await _friend_ids(client, c["id"]) == []


async def test_friend_and_like_succeed_with_info_logging(client):
    a = await create_user(client, 1)
    b = await create_user(client, 2)
    film = await create_film(client)

    assert (await _friend(client, a["id"], b["id"])).status_code == 200
    r = await client.put(f"{FILMS}/{film['id']}/like/{a['id']}")
    assert r.status_code == 200
    assert r.json()["likes"] == [a["id"]]
