"""Wallet set service tests."""

import uuid

import pytest

from circle_wallets.errors import CircleArgumentError, CircleError, MalformedResponseError
from circle_wallets.models import WalletSetListOptions

from tests.conftest import (
    ENTITY_SECRET,
    WALLET_SET_ID,
    body_of,
    decrypt_ciphertext,
    make_client,
    make_handler,
    posts,
)

WALLET_SET = {
    "id": WALLET_SET_ID,
    "custodyType": "DEVELOPER",
    "name": "Treasury",
    "createDate": "2024-01-01T12:04:05Z",
    "updateDate": "2024-01-01T12:04:05Z",
}


class TestCreateWalletSet:
    async def test_sends_fresh_ciphertext(self):
        calls = []
        handler = make_handler(
            {("POST", "/v1/w3s/developer/walletSets"): (201, {"data": {"walletSet": WALLET_SET}})},
            calls,
        )
        client = make_client(handler)
        wallet_set = await client.wallet_sets.create_wallet_set("Treasury", ENTITY_SECRET)

        assert wallet_set.id == WALLET_SET_ID
        assert wallet_set.custody_type == "DEVELOPER"
        [request] = posts(calls)
        body = body_of(request)
        assert body["name"] == "Treasury"
        assert uuid.UUID(body["idempotencyKey"])
        assert decrypt_ciphertext(body["entitySecretCiphertext"]) == ENTITY_SECRET

    async def test_empty_name(self):
        calls = []
        client = make_client(make_handler({}, calls))
        with pytest.raises(CircleArgumentError, match="Name cannot be null or empty."):
            await client.wallet_sets.create_wallet_set("", ENTITY_SECRET)
        assert calls == []

    async def test_invalid_secret(self):
        calls = []
        client = make_client(make_handler({}, calls))
        with pytest.raises(CircleArgumentError):
            await client.wallet_sets.create_wallet_set("Treasury", "xyz")
        assert calls == []


class TestListWalletSets:
    async def test_returns_wallet_sets(self):
        calls = []
        handler = make_handler(
            {("GET", "/v1/w3s/walletSets"): (200, {"data": {"walletSets": [WALLET_SET]}})},
            calls,
        )
        client = make_client(handler)
        wallet_sets = await client.wallet_sets.list_wallet_sets(
            WalletSetListOptions(page_size=10, page_after="cursor")
        )
        assert [ws.id for ws in wallet_sets] == [WALLET_SET_ID]
        params = calls[0].url.params
        assert params["pageSize"] == "10"
        assert params["pageAfter"] == "cursor"
        assert "pageBefore" not in params

    async def test_empty_payload(self):
        handler = make_handler({("GET", "/v1/w3s/walletSets"): (200, {"data": {}})})
        client = make_client(handler)
        assert await client.wallet_sets.list_wallet_sets() == []

    async def test_conflicting_cursors(self):
        client = make_client(make_handler({}))
        with pytest.raises(CircleArgumentError, match="pageBefore and pageAfter"):
            await client.wallet_sets.list_wallet_sets(
                WalletSetListOptions(page_before="a", page_after="b")
            )


class TestGetAndUpdateWalletSet:
    async def test_get(self):
        handler = make_handler(
            {("GET", f"/v1/w3s/walletSets/{WALLET_SET_ID}"): (200, {"data": {"walletSet": WALLET_SET}})}
        )
        client = make_client(handler)
        wallet_set = await client.wallet_sets.get_wallet_set(WALLET_SET_ID)
        assert wallet_set.name == "Treasury"

    async def test_get_requires_id(self):
        client = make_client(make_handler({}))
        with pytest.raises(CircleArgumentError, match="Wallet set ID"):
            await client.wallet_sets.get_wallet_set("")

    async def test_update(self):
        calls = []
        renamed = dict(WALLET_SET, name="Ops")
        handler = make_handler(
            {("PUT", f"/v1/w3s/developer/walletSets/{WALLET_SET_ID}"): (200, {"data": {"walletSet": renamed}})},
            calls,
        )
        client = make_client(handler)
        wallet_set = await client.wallet_sets.update_wallet_set(WALLET_SET_ID, "Ops")
        assert wallet_set.name == "Ops"
        assert body_of(calls[0]) == {"name": "Ops"}


class TestMalformedPayloads:
    async def test_wallet_set_without_id(self):
        handler = make_handler(
            {("GET", f"/v1/w3s/walletSets/{WALLET_SET_ID}"): (200, {"data": {"walletSet": {"name": "x"}}})}
        )
        client = make_client(handler)
        with pytest.raises(MalformedResponseError) as exc_info:
            await client.wallet_sets.get_wallet_set(WALLET_SET_ID)
        assert isinstance(exc_info.value, CircleError)
        assert exc_info.value.status_code == 200
        assert "walletSet" in exc_info.value.body

    async def test_null_list_payload_is_empty(self):
        handler = make_handler({("GET", "/v1/w3s/walletSets"): (200, {"data": None})})
        client = make_client(handler)
        assert await client.wallet_sets.list_wallet_sets() == []

    async def test_request_id_reaches_public_key_fetch(self):
        calls = []
        handler = make_handler(
            {("POST", "/v1/w3s/developer/walletSets"): (201, {"data": {"walletSet": WALLET_SET}})},
            calls,
        )
        client = make_client(handler)
        await client.wallet_sets.create_wallet_set("Treasury", ENTITY_SECRET, request_id="req-ws")
        assert [r.headers["X-Request-Id"] for r in calls] == ["req-ws", "req-ws"]
