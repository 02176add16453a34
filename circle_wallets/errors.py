"""Circle client error types, one per failure kind."""

from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from circle_wallets.models import RegisterEntitySecretResult


class CircleError(Exception):
    """Base class for every error raised by the Circle client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CircleArgumentError(CircleError, ValueError):
    """Invalid or conflicting arguments, raised before any I/O."""

    def __init__(self, message: str, argument: Optional[str] = None) -> None:
        super().__init__(message)
        self.argument = argument


class CircleApiError(CircleError):
    """Non-success response from the Circle API."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        code: Optional[int] = None,
        body: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.body = body
        self.request_id = request_id

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: Any,
        raw: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> "CircleApiError":
        """Create CircleApiError from the ``{code, message}`` error envelope."""
        if not isinstance(body, dict):
            body = {}
        code = body.get("code")
        return cls(
            message=body.get("message") or "Unknown error",
            status_code=status_code,
            code=code if isinstance(code, int) else None,
            body=raw,
            request_id=request_id,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code}, code={self.code!r})"
        )


class MalformedResponseError(CircleApiError):
    """Successful status, but the body could not be unwrapped."""


class CircleTransportError(CircleError):
    """Network failure before a response was received."""


class EntitySecretCryptoError(CircleError):
    """Public key import, encryption or ciphertext length failure."""


class RecoveryFileError(CircleError, OSError):
    """Recovery file write failed after the registration itself succeeded.

    The remote registration is not rolled back; ``result`` carries the
    successful registration so the caller can retry only the write.
    """

    def __init__(
        self,
        message: str,
        path: str,
        result: "RegisterEntitySecretResult",
    ) -> None:
        super().__init__(message)
        self.path = path
        self.result = result
