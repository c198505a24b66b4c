"""
Storefront Backend - Orders Endpoint Tests
===========================================

What:  Tests for the /api/orders and /api/hideOrder endpoints.
How:   HTTPX AsyncClient over ASGITransport against a fresh app and store.

What we test:
    ✅ Create → list → hide → delete scenario with exact status codes
    ✅ 400 for blank username and malformed bodies, store unchanged
    ✅ 400 for non-integer ids, 404 for unknown ids
    ✅ Client-sent id / created_at / hidden are ignored
    ✅ Bulk delete by username
"""

import pytest


async def _create(client, username, items=None):
    body = {"username": username}
    if items is not None:
        body["items"] = items
    response = await client.post("/api/orders", json=body)
    assert response.status_code == 201
    return response.json()


class TestOrderScenario:

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, test_client):
        item = {"id": 1, "url": "http://cdn.test/images/Keychains/moon.jpg"}
        alice = await _create(test_client, "alice", [item])
        bob = await _create(test_client, "bob")
        assert alice["id"] == 1
        assert bob["id"] == 2

        response = await test_client.get("/api/orders", params={"username": "alice"})
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [1]
        assert response.json()[0]["items"] == [item]

        response = await test_client.post("/api/hideOrder", params={"id": 1})
        assert response.status_code == 200

        response = await test_client.get("/api/orders", params={"username": "alice"})
        assert response.json() == []

        response = await test_client.get("/api/orders", params={"username": "admin"})
        orders = response.json()
        assert [o["id"] for o in orders] == [1, 2]
        assert orders[0]["hidden"] is True
        assert orders[1]["hidden"] is False

        response = await test_client.delete("/api/orders/2")
        assert response.status_code == 204
        assert response.content == b""

        response = await test_client.delete("/api/orders/2")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestCreateOrder:

    @pytest.mark.asyncio
    async def test_response_shape(self, test_client):
        order = await _create(test_client, "bob")
        assert set(order) == {"id", "username", "items", "created_at", "hidden"}
        assert order["items"] == []
        assert order["hidden"] is False
        assert "T" in order["created_at"]

    @pytest.mark.asyncio
    async def test_null_items_normalized(self, test_client):
        order = await _create(test_client, "bob", None)
        response = await test_client.post("/api/orders", json={"username": "bob", "items": None})
        assert response.status_code == 201
        assert response.json()["items"] == []
        assert order["items"] == []

    @pytest.mark.asyncio
    async def test_client_fields_ignored(self, test_client):
        response = await test_client.post(
            "/api/orders",
            json={
                "id": 500,
                "username": "alice",
                "created_at": "1999-01-01T00:00:00Z",
                "hidden": True,
            },
        )
        order = response.json()
        assert order["id"] == 1
        assert order["hidden"] is False
        assert not order["created_at"].startswith("1999")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body", [{"username": "  "}, {"username": ""}, {"username": None}, {}]
    )
    async def test_blank_username_rejected(self, test_client, order_store, body):
        response = await test_client.post("/api/orders", json=body)
        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "validation_error"
        assert payload["message"] == "username required"
        assert payload["details"] == {"field": "username"}
        assert order_store.count() == 0

    @pytest.mark.asyncio
    async def test_invalid_json_rejected(self, test_client, order_store):
        response = await test_client.post(
            "/api/orders",
            content=b'{"username": "alice",',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "malformed_input"
        assert response.json()["message"] == "invalid json"
        assert order_store.count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [["alice"], {"username": 42}, {"username": "alice", "items": "nope"}],
    )
    async def test_wrong_shape_rejected(self, test_client, order_store, body):
        response = await test_client.post("/api/orders", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "malformed_input"
        assert order_store.count() == 0


class TestDeleteOrder:

    @pytest.mark.asyncio
    async def test_non_integer_id_is_bad_request(self, test_client):
        response = await test_client.delete("/api/orders/abc")
        assert response.status_code == 400
        assert response.json()["error"] == "malformed_input"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["1_0", "+10", "%2010", "１０"])
    async def test_non_canonical_id_is_bad_request(self, test_client, order_store, raw_id):
        for n in range(10):
            await _create(test_client, f"user{n}")
        response = await test_client.delete(f"/api/orders/{raw_id}")
        assert response.status_code == 400
        assert response.json()["error"] == "malformed_input"
        assert order_store.count() == 10
        assert [o.id for o in order_store.list_orders("admin")][-1] == 10

    @pytest.mark.asyncio
    async def test_delete_keeps_remaining_order(self, test_client):
        for name in ["a", "b", "c"]:
            await _create(test_client, name)
        await test_client.delete("/api/orders/2")
        response = await test_client.get("/api/orders", params={"username": "admin"})
        assert [o["id"] for o in response.json()] == [1, 3]

    @pytest.mark.asyncio
    async def test_delete_by_username(self, test_client):
        for name in ["alice", "bob", "alice"]:
            await _create(test_client, name)

        response = await test_client.delete("/api/orders", params={"username": "alice"})
        assert response.status_code == 200
        assert response.json() == {"deleted": 2}

        response = await test_client.get("/api/orders", params={"username": "admin"})
        assert [o["username"] for o in response.json()] == ["bob"]

    @pytest.mark.asyncio
    async def test_delete_by_username_no_match(self, test_client):
        response = await test_client.delete("/api/orders", params={"username": "ghost"})
        assert response.status_code == 200
        assert response.json() == {"deleted": 0}

    @pytest.mark.asyncio
    async def test_delete_by_username_requires_username(self, test_client):
        response = await test_client.delete("/api/orders")
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestListAndHide:

    @pytest.mark.asyncio
    async def test_list_without_username_is_empty(self, test_client):
        await _create(test_client, "alice")
        response = await test_client.get("/api/orders")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_hide_unknown_id_still_ok(self, test_client):
        response = await test_client.post("/api/hideOrder", params={"id": 99})
        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"id": "abc"}, {}])
    async def test_hide_unparsable_id_still_ok(self, test_client, order_store, params):
        await _create(test_client, "alice")
        response = await test_client.post("/api/hideOrder", params=params)
        assert response.status_code == 200
        assert order_store.list_orders("alice")[0].hidden is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["1_0", "+10", " 10 ", "１０"])
    async def test_hide_non_canonical_id_is_noop(self, test_client, order_store, raw_id):
        for n in range(10):
            await _create(test_client, f"user{n}")
        response = await test_client.post("/api/hideOrder", params={"id": raw_id})
        assert response.status_code == 200
        assert [o.id for o in order_store.list_orders("admin") if o.hidden] == []

    @pytest.mark.asyncio
    async def test_hide_twice(self, test_client):
        await _create(test_client, "alice")
        await test_client.post("/api/hideOrder", params={"id": 1})
        first = (await test_client.get("/api/orders", params={"username": "admin"})).json()
        await test_client.post("/api/hideOrder", params={"id": 1})
        second = (await test_client.get("/api/orders", params={"username": "admin"})).json()
        assert first == second
