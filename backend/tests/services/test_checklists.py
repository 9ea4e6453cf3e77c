"""Checklists — verifies owner CRUD, item ordering and public share-token access.

Invariants:
    - Items append after the current last sort_order
    - Sharing is idempotent (same token); unsharing revokes public access
    - A share token only reaches items of its own category
"""

from uuid import uuid4


async def _category(client, headers, name="Packing") -> dict:
    res = await client.post("/api/v1/checklists", json={"category_name": name}, headers=headers)
    assert res.status_code == 201
    return res.json()


async def _item(client, headers, category_id, text) -> dict:
    res = await client.post(
        f"/api/v1/checklists/{category_id}/items", json={"text": text}, headers=headers,
    )
    assert res.status_code == 201
    return res.json()


async def test_create_category_starts_empty(client, auth_headers):
    category = await _category(client, auth_headers)
    assert category["items"] == []
    assert category["is_shared"] is False
    assert category["share_token"] is None


async def test_items_append_in_order(client, auth_headers):
    category = await _category(client, auth_headers)
    first = await _item(client, auth_headers, category["id"], "Passport")
    second = await _item(client, auth_headers, category["id"], "Charger")

    assert (first["sort_order"], second["sort_order"]) == (0, 1)

    res = await client.get("/api/v1/checklists", headers=auth_headers)
    [listed] = res.json()
    assert [i["text"] for i in listed["items"]] == ["Passport", "Charger"]


async def test_update_and_delete_item(client, auth_headers):
    category = await _category(client, auth_headers)
    item = await _item(client, auth_headers, category["id"], "Passport")

    res = await client.patch(
        f"/api/v1/checklists/items/{item['id']}", json={"completed": True},
        headers=auth_headers,
    )
    assert res.json()["completed"] is True
    assert res.json()["text"] == "Passport"

    res = await client.delete(f"/api/v1/checklists/items/{item['id']}", headers=auth_headers)
    assert res.status_code == 204


async def test_rename_and_delete_category(client, auth_headers):
    category = await _category(client, auth_headers)
    await _item(client, auth_headers, category["id"], "Passport")

    res = await client.patch(
        f"/api/v1/checklists/{category['id']}", json={"category_name": "Trip"},
        headers=auth_headers,
    )
    assert res.json()["category_name"] == "Trip"
    assert len(res.json()["items"]) == 1

    res = await client.delete(f"/api/v1/checklists/{category['id']}", headers=auth_headers)
    assert res.status_code == 204
    assert (await client.get("/api/v1/checklists", headers=auth_headers)).json() == []


async def test_cannot_add_item_to_foreign_category(client, auth_headers, other_headers):
    category = await _category(client, auth_headers)
    res = await client.post(
        f"/api/v1/checklists/{category['id']}/items", json={"text": "Sneaky"},
        headers=other_headers,
    )
    assert res.status_code == 404


async def test_share_is_idempotent(client, auth_headers):
    category = await _category(client, auth_headers)

    first = (await client.post(f"/api/v1/checklists/{category['id']}/share", headers=auth_headers)).json()
    second = (await client.post(f"/api/v1/checklists/{category['id']}/share", headers=auth_headers)).json()

    assert first["is_shared"] is True
    assert len(first["share_token"]) == 32
    assert first["share_token"] == second["share_token"]


async def test_public_read_and_toggle(client, auth_headers):
    category = await _category(client, auth_headers)
    item = await _item(client, auth_headers, category["id"], "Passport")
    token = (await client.post(f"/api/v1/checklists/{category['id']}/share", headers=auth_headers)).json()["share_token"]

    res = await client.get(f"/api/v1/shared-checklists/{token}")
    assert res.status_code == 200
    assert res.json()["category_name"] == "Packing"
    assert "share_token" not in res.json()

    res = await client.patch(
        f"/api/v1/shared-checklists/{token}/items/{item['id']}", json={"completed": True},
    )
    assert res.status_code == 200
    assert res.json()["completed"] is True


async def test_token_cannot_reach_other_category_items(client, auth_headers):
    shared = await _category(client, auth_headers, "Shared")
    private = await _category(client, auth_headers, "Private")
    private_item = await _item(client, auth_headers, private["id"], "Secret")
    token = (await client.post(f"/api/v1/checklists/{shared['id']}/share", headers=auth_headers)).json()["share_token"]

    res = await client.patch(
        f"/api/v1/shared-checklists/{token}/items/{private_item['id']}", json={"completed": True},
    )
    assert res.status_code == 404


async def test_unshare_revokes_public_access(client, auth_headers):
    category = await _category(client, auth_headers)
    token = (await client.post(f"/api/v1/checklists/{category['id']}/share", headers=auth_headers)).json()["share_token"]

    res = await client.delete(f"/api/v1/checklists/{category['id']}/share", headers=auth_headers)
    assert res.json() == {"category_id": category["id"], "is_shared": False, "share_token": None}

    assert (await client.get(f"/api/v1/shared-checklists/{token}")).status_code == 404


async def test_unknown_token_is_404(client):
    res = await client.patch(
        f"/api/v1/shared-checklists/nope/items/{uuid4()}", json={"completed": True},
    )
    assert res.status_code == 404
