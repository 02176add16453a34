"""Circle developer-controlled wallets async HTTP client."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from circle_wallets.errors import CircleArgumentError
from circle_wallets.services import (
    EntitySecretService,
    TokenService,
    TransactionService,
    WalletService,
    WalletSetService,
)
from circle_wallets.transport import CircleTransport

DEFAULT_BASE_URL = "https://api.circle.com/v1/w3s/"


class CircleClient:
    """Async client for the Circle Web3 Services REST API.

    Usage:
        async with CircleClient("TEST_API_KEY:...") as client:
            secret = "..."  # stored entity secret
            wallet_set = await client.wallet_sets.create_wallet_set("Main", secret)
            wallets = await client.wallets.create_wallets(
                wallet_set.id, ["ETH-SEPOLIA"], secret
            )
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
        strict_ciphertext_length: bool = True,
    ) -> None:
        if not api_key:
            raise CircleArgumentError("API key cannot be null or empty.", "api_key")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = timeout
        self._owns_client = http_client is None
        self._closed = False
        self._client = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers=self._build_headers(),
        )
        if not self._owns_client:
            self._client.headers.update(self._build_headers())

        transport = CircleTransport(self._client)
        self.entity_secrets = EntitySecretService(
            transport, strict_ciphertext_length=strict_ciphertext_length
        )
        self.wallet_sets = WalletSetService(transport, self.entity_secrets)
        self.wallets = WalletService(transport, self.entity_secrets)
        self.transactions = TransactionService(transport, self.entity_secrets)
        self.tokens = TokenService(transport)

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "CircleClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client and not self._closed:
            await self._client.aclose()
        self._closed = True
