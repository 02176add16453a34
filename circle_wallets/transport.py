"""Single-shot HTTP transport for the Circle REST API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from circle_wallets.errors import (
    CircleApiError,
    CircleTransportError,
    MalformedResponseError,
)

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


def path_segment(value: str) -> str:
    """Percent-encode a resource ID for use as a single URL path segment."""
    return quote(value, safe="")


def unwrap(data: Any, key: str) -> Any:
    """Return ``data[key]`` for single-resource payloads nested under a name."""
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        return data[key]
    return data


def _encode_params(params: Optional[dict[str, Any]]) -> Optional[dict[str, str]]:
    """Drop unset query parameters and render the rest as strings."""
    if not params:
        return None
    encoded: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, datetime):
            encoded[key] = value.isoformat()
        else:
            encoded[key] = str(value)
    return encoded or None


class CircleTransport:
    """Sends requests and unwraps the ``{"data": ...}`` envelope.

    No request is ever retried here; the caller owns retry policy and
    uses idempotency keys to make mutating calls safe to repeat.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        request_id: Optional[str] = None,
        model: Optional[type[BaseModel]] = None,
        key: Optional[str] = None,
        allow_empty: bool = False,
    ) -> Any:
        """Make one HTTP request and return the response's ``data`` payload.

        Args:
            model: Validate the payload into this model and return it.
            key: Name a single resource may be nested under (see :func:`unwrap`).
            allow_empty: Treat a null payload as an empty object (list endpoints).

        Raises:
            CircleTransportError: The request never produced a response.
            CircleApiError: The response status was not 2xx.
            MalformedResponseError: A 2xx body was not a ``data`` envelope, or
                its payload did not fit ``model``.
        """
        headers = {REQUEST_ID_HEADER: request_id} if request_id else None
        try:
            response = await self._client.request(
                method,
                path,
                json=json_body,
                params=_encode_params(params),
                headers=headers,
            )
        except httpx.TransportError as e:
            raise CircleTransportError(f"{method} {path} failed: {e}") from e

        logger.debug("%s %s -> %d", method, path, response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            raise CircleApiError.from_response(
                response.status_code, body, raw=response.text, request_id=request_id
            )
        if not isinstance(body, dict) or "data" not in body:
            raise MalformedResponseError(
                f"Unexpected response body from {method} {path}",
                status_code=response.status_code,
                body=response.text,
                request_id=request_id,
            )
        data = body["data"]
        if model is None:
            return data
        if key is not None:
            data = unwrap(data, key)
        if data is None and allow_empty:
            data = {}
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected {model.__name__} payload from {method} {path}: {e}",
                status_code=response.status_code,
                body=response.text,
                request_id=request_id,
            ) from e
