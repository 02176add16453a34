"""Token lookups."""

from __future__ import annotations

from typing import Optional

from circle_wallets.models import Token
from circle_wallets.transport import CircleTransport, path_segment
from circle_wallets.validation import require


class TokenService:
    def __init__(self, transport: CircleTransport) -> None:
        self._transport = transport

    async def get_token(self, token_id: str, *, request_id: Optional[str] = None) -> Token:
        """GET /tokens/:id -- Get token details."""
        require(token_id, "token_id", "Token ID")
        return await self._transport.request(
            "GET",
            f"tokens/{path_segment(token_id)}",
            request_id=request_id,
            model=Token,
            key="token",
        )
