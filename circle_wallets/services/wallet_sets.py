"""Wallet set operations."""

from __future__ import annotations

import uuid
from typing import Optional

from circle_wallets.models import (
    CreateWalletSetRequest,
    WalletSet,
    WalletSetList,
    WalletSetListOptions,
)
from circle_wallets.services.entity_secrets import EntitySecretService
from circle_wallets.transport import CircleTransport, path_segment
from circle_wallets.validation import check_pagination, require, require_entity_secret


class WalletSetService:
    """Create, list, fetch and rename developer-controlled wallet sets."""

    def __init__(self, transport: CircleTransport, entity_secrets: EntitySecretService) -> None:
        self._transport = transport
        self._entity_secrets = entity_secrets

    async def create_wallet_set(
        self,
        name: str,
        entity_secret: str,
        *,
        request_id: Optional[str] = None,
    ) -> WalletSet:
        """POST /developer/walletSets -- Create a wallet set.

        Args:
            name: Name or description of the wallet set.
            entity_secret: Entity secret; a fresh ciphertext is generated.
            request_id: Optional X-Request-Id header value.
        """
        require(name, "name", "Name")
        require_entity_secret(entity_secret)

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = CreateWalletSetRequest(
            entity_secret_ciphertext=ciphertext,
            idempotency_key=str(uuid.uuid4()),
            name=name,
        )
        return await self._transport.request(
            "POST",
            "developer/walletSets",
            json_body=request.model_dump(by_alias=True),
            request_id=request_id,
            model=WalletSet,
            key="walletSet",
        )

    async def list_wallet_sets(
        self,
        options: Optional[WalletSetListOptions] = None,
        *,
        request_id: Optional[str] = None,
    ) -> list[WalletSet]:
        """GET /walletSets -- List wallet sets.

        Returns an empty list when the response carries no wallet sets.
        """
        options = options or WalletSetListOptions()
        check_pagination(options)
        result = await self._transport.request(
            "GET",
            "walletSets",
            params=options.to_params(),
            request_id=request_id,
            model=WalletSetList,
            allow_empty=True,
        )
        return result.wallet_sets

    async def get_wallet_set(
        self, wallet_set_id: str, *, request_id: Optional[str] = None
    ) -> WalletSet:
        """GET /walletSets/:id -- Get a wallet set."""
        require(wallet_set_id, "wallet_set_id", "Wallet set ID")
        return await self._transport.request(
            "GET",
            f"walletSets/{path_segment(wallet_set_id)}",
            request_id=request_id,
            model=WalletSet,
            key="walletSet",
        )

    async def update_wallet_set(
        self,
        wallet_set_id: str,
        name: str,
        *,
        request_id: Optional[str] = None,
    ) -> WalletSet:
        """PUT /developer/walletSets/:id -- Rename a wallet set."""
        require(wallet_set_id, "wallet_set_id", "Wallet set ID")
        require(name, "name", "Name")
        return await self._transport.request(
            "PUT",
            f"developer/walletSets/{path_segment(wallet_set_id)}",
            json_body={"name": name},
            request_id=request_id,
            model=WalletSet,
            key="walletSet",
        )
