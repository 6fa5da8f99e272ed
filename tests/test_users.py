"""Tests for user CRUD over HTTP."""

from datetime import date, timedelta

import pytest

from tests.helpers import USERS, create_user, user_payload


async def test_create_user_assigns_id_and_returns_201(client):
    r = await client.post(USERS, json=user_payload())
    assert r.status_code == 201
    body = r.json()
    assert body["id"] == 1
    assert body["login"] == "user1"
    assert body["birthday"] == "1990-05-17"


@pytest.mark.parametrize("name", [None, "", "   "])
async def test_blank_name_defaults_to_login(client, name):
    r = await client.post(USERS, json=user_payload(name=name))
    assert r.status_code == 201
    assert r.json()["name"] == "user1"


@pytest.mark.parametrize("overrides", [
    {"email": ""},
    {"email": "no-at-sign.example.com"},
    {"login": ""},
    {"login": "has space"},
    {"birthday": None},
    {"birthday": (date.today() + timedelta(days=1)).isoformat()},
])
async def test_invalid_user_returns_400(client, overrides):
    r = await client.post(USERS, json=user_payload(**overrides))
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "validation_error"
    # nothing was written
    assert (await client.get(USERS)).json() == []


async def test_birthday_today_is_accepted(client):
    r = await client.post(
        USERS, json=user_payload(birthday=date.today().isoformat()))
    assert r.status_code == 201


async def test_update_changes_only_supplied_fields(client):
    user = await create_user(client)
    r = await client.put(USERS, json={"id": user["id"],
                                      "email": "new@example.com"})
    assert r.status_code == 200
    assert r.json() == dict(user, email="new@example.com")


async def test_update_with_blank_name_resets_to_login(client):
    user = await create_user(client, name="Display")
    r = await client.put(USERS, json={"id": user["id"],
                                      "login": "renamed",
                                      "name": ""})
    assert r.status_code == 200
    assert r.json()["name"] == "renamed"


async def test_update_validates_supplied_field(client):
    user = await create_user(client)
    r = await client.put(USERS, json={"id": user["id"], "login": "a b"})
    assert r.status_code == 400
    r = await client.get(f"{USERS}/{user['id']}")
    assert r.json()["login"] == "user1"


async def test_update_unknown_user_returns_404(client):
    r = await client.put(USERS, json={"id": 999, "name": "x"})
    assert r.status_code == 404
    detail = r.json()["detail"]
    assert detail["error"] == "not_found"
    assert detail["kind"] == "user" and detail["id"] == 999


async def test_list_users_is_ordered_by_id(client):
    for n in (1, 2, 3):
        await create_user(client, n)
    ids = [u["id"] for u in (await client.get(USERS)).json()]
    assert ids == [1, 2, 3]


async def test_delete_user_then_get_returns_404(client):
    user = await create_user(client)
    r = await client.delete(f"{USERS}/{user['id']}")
    assert r.status_code == 204
    assert (await client.get(f"{USERS}/{user['id']}")).status_code == 404
    assert (await client.delete(f"{USERS}/{user['id']}")).status_code == 404


async def test_ids_are_not_reused_after_delete_or_clear(client):
    for n in (1, 2, 3):
        await create_user(client, n)
    await client.delete(f"{USERS}/3")
    assert (await create_user(client, 4))["id"] == 4

    assert (await client.delete(USERS)).status_code == 204
    assert (await client.get(USERS)).json() == []
    assert (await create_user(client, 5))["id"] == 5
