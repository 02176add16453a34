"""Entity secret generation and RSA-OAEP envelope encryption.

The entity secret is a 32-byte value shared once with Circle at
registration.  Every privileged API call afterwards carries a fresh
*ciphertext* of that secret, encrypted under Circle's current RSA public
key with OAEP-SHA256.  OAEP is randomised, so encrypting the same secret
twice yields two different ciphertexts, which is what makes each
ciphertext single-use.
"""

from __future__ import annotations

import base64
import math
import secrets
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from circle_wallets.errors import EntitySecretCryptoError
from circle_wallets.validation import require_entity_secret

ENTITY_SECRET_BYTES = 32


def _oaep_sha256() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def generate_entity_secret() -> str:
    """Return a new 256-bit entity secret as 64 lowercase hex characters."""
    return secrets.token_bytes(ENTITY_SECRET_BYTES).hex()


def expected_ciphertext_length(key_size: int) -> int:
    """Length of the Base64 ciphertext for an RSA modulus of ``key_size`` bits.

    RSA output is always the modulus length in bytes, so a 2048-bit key
    gives 256 bytes, i.e. 344 Base64 characters.
    """
    modulus_bytes = (key_size + 7) // 8
    return 4 * math.ceil(modulus_bytes / 3)


def load_rsa_public_key(public_key_pem: Union[str, bytes]) -> RSAPublicKey:
    """Import a PEM-encoded RSA public key.

    Raises:
        EntitySecretCryptoError: The PEM is empty, malformed or not RSA.
    """
    if not public_key_pem:
        raise EntitySecretCryptoError("Public key is missing.")
    if isinstance(public_key_pem, str):
        public_key_pem = public_key_pem.encode("ascii", errors="replace")
    try:
        key = serialization.load_pem_public_key(public_key_pem)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise EntitySecretCryptoError(f"Failed to import public key: {e}") from e
    if not isinstance(key, RSAPublicKey):
        raise EntitySecretCryptoError(
            f"Public key must be RSA, got {type(key).__name__}."
        )
    return key


def encrypt_entity_secret(
    entity_secret: str,
    public_key_pem: Union[str, bytes],
    *,
    strict: bool = True,
) -> str:
    """Encrypt ``entity_secret`` for one API call.

    Args:
        entity_secret: 64-character hex entity secret.
        public_key_pem: Circle's current RSA public key (PEM).
        strict: Check the Base64 length against the key's modulus size.

    Returns:
        Base64-encoded RSA-OAEP-SHA256 ciphertext, unique per call.

    Raises:
        CircleArgumentError: ``entity_secret`` is not 64 hex characters.
        EntitySecretCryptoError: Key import, encryption or length check failed.
    """
    require_entity_secret(entity_secret)
    secret_bytes = bytes.fromhex(entity_secret)
    public_key = load_rsa_public_key(public_key_pem)

    try:
        encrypted = public_key.encrypt(secret_bytes, _oaep_sha256())
    except ValueError as e:
        raise EntitySecretCryptoError(f"Failed to encrypt Entity Secret: {e}") from e

    ciphertext = base64.b64encode(encrypted).decode("ascii")

    if strict:
        expected = expected_ciphertext_length(public_key.key_size)
        if len(ciphertext) != expected:
            raise EntitySecretCryptoError(
                f"Generated ciphertext length ({len(ciphertext)}) does not match "
                f"expected length ({expected}) for a {public_key.key_size}-bit key."
            )
    return ciphertext
