"""Entity secret lifecycle: generation, per-call ciphertexts, registration."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from circle_wallets import crypto
from circle_wallets.errors import EntitySecretCryptoError, RecoveryFileError
from circle_wallets.models import (
    PublicKeyResponse,
    RecoveryRecord,
    RegisterEntitySecretRequest,
    RegisterEntitySecretResult,
)
from circle_wallets.transport import CircleTransport
from circle_wallets.validation import require_entity_secret, require_file_path

logger = logging.getLogger(__name__)


class EntitySecretService:
    """Generates, encrypts and registers the entity secret.

    Usage:
        secret = client.entity_secrets.generate_entity_secret()
        await client.entity_secrets.register_entity_secret(secret, "recovery.json")
        ciphertext = await client.entity_secrets.generate_ciphertext(secret)
    """

    def __init__(self, transport: CircleTransport, *, strict_ciphertext_length: bool = True) -> None:
        self._transport = transport
        self._strict = strict_ciphertext_length

    @staticmethod
    def generate_entity_secret() -> str:
        """Generate a new 32-byte entity secret (64 lowercase hex characters).

        Generate once per account entity and store it securely; it cannot be
        retrieved from Circle later.
        """
        return crypto.generate_entity_secret()

    async def get_public_key(self, *, request_id: Optional[str] = None) -> str:
        """GET /config/entity/publicKey -- Fetch Circle's current RSA public key.

        Returns:
            PEM-encoded public key.

        Raises:
            EntitySecretCryptoError: The response carried no key.
        """
        payload = await self._transport.request(
            "GET",
            "config/entity/publicKey",
            request_id=request_id,
            model=PublicKeyResponse,
        )
        if not payload.public_key:
            raise EntitySecretCryptoError("Public key response did not contain a key.")
        return payload.public_key

    async def generate_ciphertext(
        self,
        entity_secret: str,
        *,
        request_id: Optional[str] = None,
    ) -> str:
        """Encrypt the entity secret for a single API call.

        The public key is fetched on every call and the result must not be
        reused across requests.

        Args:
            entity_secret: 64-character hex entity secret.
            request_id: Optional X-Request-Id for the public key fetch.

        Returns:
            Base64-encoded RSA-OAEP-SHA256 ciphertext.
        """
        require_entity_secret(entity_secret)
        public_key_pem = await self.get_public_key(request_id=request_id)
        return crypto.encrypt_entity_secret(
            entity_secret, public_key_pem, strict=self._strict
        )

    async def register_entity_secret(
        self,
        entity_secret: str,
        recovery_file_path: Optional[str] = None,
        *,
        request_id: Optional[str] = None,
    ) -> RegisterEntitySecretResult:
        """POST /developer/register -- Register a newly generated entity secret.

        This is the only call that sends the secret in plaintext.  It is made
        exactly once per invocation; a fresh idempotency key lets the caller
        retry the whole operation safely.

        Args:
            entity_secret: 64-character hex entity secret.
            recovery_file_path: Where to write a JSON recovery record after a
                successful registration.  Its directory must already exist.
            request_id: Optional X-Request-Id header value.

        Returns:
            RegisterEntitySecretResult with status and idempotency key.

        Raises:
            CircleArgumentError: Bad secret or recovery path (no request is sent).
            RecoveryFileError: Registration succeeded but the file write failed.
        """
        require_entity_secret(entity_secret)
        if recovery_file_path is not None:
            require_file_path(recovery_file_path)

        idempotency_key = str(uuid.uuid4())
        request = RegisterEntitySecretRequest(
            entity_secret=entity_secret, idempotency_key=idempotency_key
        )
        data = await self._transport.request(
            "POST",
            "developer/register",
            json_body=request.model_dump(by_alias=True),
            request_id=request_id,
        )
        result = RegisterEntitySecretResult(
            status=data.get("status") if isinstance(data, dict) else None,
            idempotency_key=idempotency_key,
        )

        if recovery_file_path is not None:
            self._write_recovery_file(recovery_file_path, entity_secret, result)
        return result

    @staticmethod
    def _write_recovery_file(
        path: str,
        entity_secret: str,
        result: RegisterEntitySecretResult,
    ) -> None:
        record = RecoveryRecord(
            entity_secret=entity_secret,
            idempotency_key=result.idempotency_key,
            registration_date=datetime.now(timezone.utc),
        )
        content = json.dumps(record.model_dump(mode="json", by_alias=True), indent=2)
        try:
            Path(path).write_text(content, encoding="utf-8")
        except OSError as e:
            raise RecoveryFileError(
                f"Failed to write recovery file to {path}.", path=str(path), result=result
            ) from e
        result.recovery_file_path = str(path)
        logger.debug("Wrote entity secret recovery file to %s", path)
