"""
Bars API Backend - Bars Endpoint Tests
=======================================

What:  End-to-end tests of the /bars routes through the ASGI app against a
       temporary SQLite database.

What we test:
    ✅ Public listing, per-user listing
    ✅ Create → get round trip with the owner embedded
    ✅ Ownership enforcement on PATCH and DELETE
    ✅ Blank-field semantics on PATCH
    ✅ 401 without a token, 404 for unknown ids
"""

import pytest
from uuid import uuid4


async def _create_bar(client, headers, **fields):
    response = await client.post("/bars", json={"bar": fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["bar"]


class TestListBars:

    @pytest.mark.asyncio
    async def test_list_is_public(self, test_client):
        response = await test_client.get("/bars")

        assert response.status_code == 200
        assert response.json() == {"bars": []}

    @pytest.mark.asyncio
    async def test_list_returns_every_users_bars(self, test_client, make_user):
        _, alice = await make_user("alice@example.com")
        _, bob = await make_user("bob@example.com")
        await _create_bar(test_client, alice, name="A1")
        await _create_bar(test_client, bob, name="B1")

        response = await test_client.get("/bars")

        assert sorted(bar["name"] for bar in response.json()["bars"]) == ["A1", "B1"]

    @pytest.mark.asyncio
    async def test_repeated_listing_is_not_throttled(self, test_client):
        for _ in range(150):
            response = await test_client.get("/bars")
            assert response.status_code == 200
        assert "Retry-After" not in response.headers

    @pytest.mark.asyncio
    async def test_user_bars_only_returns_requesters_bars(self, test_client, make_user):
        alice_user, alice = await make_user("alice@example.com")
        _, bob = await make_user("bob@example.com")
        await _create_bar(test_client, alice, name="A1")
        await _create_bar(test_client, alice, name="A2")
        await _create_bar(test_client, bob, name="B1")

        response = await test_client.get("/user_bars", headers=alice)

        assert response.status_code == 200
        bars = response.json()["bars"]
        assert sorted(bar["name"] for bar in bars) == ["A1", "A2"]
        assert {bar["owner"] for bar in bars} == {alice_user["id"]}

    @pytest.mark.asyncio
    async def test_user_bars_requires_token(self, test_client):
        response = await test_client.get("/user_bars")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"] == "unauthenticated"

    @pytest.mark.asyncio
    async def test_invalid_token_is_rejected(self, test_client):
        response = await test_client.get(
            "/user_bars", headers={"Authorization": "Bearer not-a-real-token"}
        )

        assert response.status_code == 401


class TestCreateAndGetBar:

    @pytest.mark.asyncio
    async def test_create_stamps_requester_as_owner(self, test_client, make_user):
        alice_user, alice = await make_user("alice@example.com")
        bob_user, _ = await make_user("bob@example.com")

        bar = await _create_bar(
            test_client, alice, name="Joe's", city="X", owner=bob_user["id"]
        )

        assert bar["owner"] == alice_user["id"]
        assert bar["name"] == "Joe's"
        assert bar["city"] == "X"

    @pytest.mark.asyncio
    async def test_create_requires_token(self, test_client):
        response = await test_client.post("/bars", json={"bar": {"name": "Joe's"}})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_rejects_blank_name(self, test_client, make_user):
        _, alice = await make_user("alice@example.com")

        response = await test_client.post("/bars", json={"bar": {"name": "  "}}, headers=alice)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_round_trip_embeds_owner(self, test_client, make_user):
        alice_user, alice = await make_user("alice@example.com")
        fields = {"name": "Joe's", "city": "X", "address": "1 Main St", "price": "$$"}
        created = await _create_bar(test_client, alice, **fields)

        response = await test_client.get(f"/bars/{created['id']}", headers=alice)

        assert response.status_code == 200
        bar = response.json()["bar"]
        assert bar["id"] == created["id"]
        for key, value in fields.items():
            assert bar[key] == value
        assert bar["owner"] == {"id": alice_user["id"], "email": "alice@example.com"}
        assert "token" not in bar["owner"]
        assert "hashed_password" not in bar["owner"]

    @pytest.mark.asyncio
    async def test_create_and_get_report_the_same_timestamps(self, test_client, make_user):
        _, alice = await make_user("alice@example.com")
        created = await _create_bar(test_client, alice, name="Joe's")

        fetched = (await test_client.get(f"/bars/{created['id']}", headers=alice)).json()["bar"]
        listed = (await test_client.get("/bars")).json()["bars"][0]

        assert created["created_at"].endswith("Z")
        assert fetched["created_at"] == created["created_at"]
        assert fetched["updated_at"] == created["updated_at"]
        assert listed["created_at"] == created["created_at"]

    @pytest.mark.asyncio
    async def test_create_drops_unknown_fields(self, test_client, make_user):
        _, alice = await make_user("alice@example.com")

        created = await _create_bar(test_client, alice, name="Joe's", rating=5)

        assert "rating" not in created
        fetched = (await test_client.get(f"/bars/{created['id']}", headers=alice)).json()["bar"]
        assert "rating" not in fetched
        assert fetched["name"] == "Joe's"

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, test_client, make_user):
        _, alice = await make_user("alice@example.com")

        response = await test_client.get(f"/bars/{uuid4()}", headers=alice)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_requires_token(self, test_client):
        response = await test_client.get(f"/bars/{uuid4()}")

        assert response.status_code == 401


class TestUpdateAndDeleteBar:

    @pytest.mark.asyncio
    async def test_ownership_and_blank_field_scenario(self, test_client, make_user):
        """Create as A, B cannot patch, A patches with a blank name, A deletes."""
        alice_user, alice = await make_user("alice@example.com")
        _, bob = await make_user("bob@example.com")

        bar = await _create_bar(test_client, alice, name="Joe's", city="X")
        assert bar["owner"] == alice_user["id"]

        response = await test_client.patch(
            f"/bars/{bar['id']}", json={"bar": {"name": "Bob's"}}, headers=bob
        )
        assert response.status_code == 401
        assert response.json()["error"] == "ownership_error"

        stored = (await test_client.get(f"/bars/{bar['id']}", headers=alice)).json()["bar"]
        assert stored["name"] == "Joe's"

        response = await test_client.patch(
            f"/bars/{bar['id']}", json={"bar": {"name": "", "city": "Y"}}, headers=alice
        )
        assert response.status_code == 204
        assert response.content == b""

        stored = (await test_client.get(f"/bars/{bar['id']}", headers=alice)).json()["bar"]
        assert stored["name"] == "Joe's"
        assert stored["city"] == "Y"

        response = await test_client.delete(f"/bars/{bar['id']}", headers=alice)
        assert response.status_code == 204

        response = await test_client.get(f"/bars/{bar['id']}", headers=alice)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_patch_cannot_reassign_owner(self, test_client, make_user):
        alice_user, alice = await make_user("alice@example.com")
        bob_user, _ = await make_user("bob@example.com")
        bar = await _create_bar(test_client, alice, name="Joe's")

        response = await test_client.patch(
            f"/bars/{bar['id']}",
            json={"bar": {"owner": bob_user["id"], "price": "$"}},
            headers=alice,
        )
        assert response.status_code == 204

        stored = (await test_client.get(f"/bars/{bar['id']}", headers=alice)).json()["bar"]
        assert stored["owner"]["id"] == alice_user["id"]
        assert stored["price"] == "$"

    @pytest.mark.asyncio
    async def test_delete_by_non_owner_keeps_bar(self, test_client, make_user):
        _, alice = await make_user("alice@example.com")
        _, bob = await make_user("bob@example.com")
        bar = await _create_bar(test_client, alice, name="Joe's")

        response = await test_client.delete(f"/bars/{bar['id']}", headers=bob)
        assert response.status_code == 401

        response = await test_client.get(f"/bars/{bar['id']}", headers=alice)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_patch_and_delete_unknown_id(self, test_client, make_user):
        _, alice = await make_user("alice@example.com")
        missing = uuid4()

        response = await test_client.patch(
            f"/bars/{missing}", json={"bar": {"name": "X"}}, headers=alice
        )
        assert response.status_code == 404

        response = await test_client.delete(f"/bars/{missing}", headers=alice)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id_is_rejected(self, test_client, make_user):
        _, alice = await make_user("alice@example.com")

        response = await test_client.get("/bars/not-a-uuid", headers=alice)

        assert response.status_code == 422
