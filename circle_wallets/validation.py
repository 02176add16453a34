"""Argument validation shared by the Circle services.

The ``is_*`` predicates are pure; the ``require_*`` / ``check_*`` helpers
raise :class:`CircleArgumentError` and are called before any network or
cryptographic work.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Collection, Sequence, Sized
from typing import Any, Optional

from circle_wallets.errors import CircleArgumentError
from circle_wallets.models import CursorOptions, FeeOptions

ENTITY_SECRET_LENGTH = 64
MAX_PAGE_SIZE = 50
FEE_LEVELS = frozenset({"LOW", "MEDIUM", "HIGH"})
ACCOUNT_TYPES = frozenset({"EOA", "SCA"})
SCA_CORE_UPGRADE_TARGET = "circle_6900_singleowner_v2"

WALLET_BLOCKCHAINS = frozenset({
    "ETH", "ETH-SEPOLIA", "AVAX", "AVAX-FUJI", "MATIC", "MATIC-AMOY",
    "SOL", "SOL-DEVNET", "ARB", "ARB-SEPOLIA", "NEAR", "NEAR-TESTNET",
    "EVM", "EVM-TESTNET", "UNI", "UNI-SEPOLIA", "BASE", "BASE-SEPOLIA",
    "OP", "OP-SEPOLIA",
})
DERIVABLE_BLOCKCHAINS = WALLET_BLOCKCHAINS - {
    "SOL", "SOL-DEVNET", "NEAR", "NEAR-TESTNET",
}
TRANSFER_FEE_BLOCKCHAINS = WALLET_BLOCKCHAINS - {
    "NEAR", "NEAR-TESTNET", "EVM", "EVM-TESTNET",
}
CONTRACT_FEE_BLOCKCHAINS = TRANSFER_FEE_BLOCKCHAINS - {"SOL", "SOL-DEVNET"}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_hex_string(value: Any) -> bool:
    """True if ``value`` is a non-empty string of hex digits (any case)."""
    return isinstance(value, str) and bool(value) and all(c in _HEX_DIGITS for c in value)


def is_valid_secret_format(value: Any) -> bool:
    """True if ``value`` is a 64-character hex string (a 32-byte secret)."""
    return (
        isinstance(value, str)
        and len(value) == ENTITY_SECRET_LENGTH
        and is_hex_string(value)
    )


def is_valid_file_path(path: Any) -> bool:
    """True if ``path`` names a file whose parent directory exists."""
    if not path:
        return False
    try:
        full_path = os.path.abspath(os.fspath(path))
    except (TypeError, ValueError):
        return False
    directory = os.path.dirname(full_path)
    return not directory or os.path.isdir(directory)


def is_hex_payload(value: Any) -> bool:
    """True for a ``0x``-prefixed, even-length hex string."""
    return (
        isinstance(value, str)
        and value.startswith("0x")
        and len(value) % 2 == 0
        and is_hex_string(value[2:])
    )


def is_uuid(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


# ---------------------------------------------------------------------------
# Raising checks
# ---------------------------------------------------------------------------


def require(value: Any, name: str, label: str) -> None:
    """Reject ``None`` and empty values."""
    if value is None or (isinstance(value, Sized) and len(value) == 0):
        raise CircleArgumentError(f"{label} cannot be null or empty.", name)


def require_entity_secret(entity_secret: Any, name: str = "entity_secret") -> None:
    if not is_valid_secret_format(entity_secret):
        raise CircleArgumentError(
            "Entity Secret must be a 32-byte hex string (64 characters).", name
        )


def require_file_path(path: Any, name: str = "recovery_file_path") -> None:
    if not is_valid_file_path(path):
        raise CircleArgumentError("Invalid recovery file path.", name)


def require_idempotency_key(key: Any, name: str = "idempotency_key") -> None:
    if not is_uuid(key):
        raise CircleArgumentError("Idempotency key must be a valid UUIDv4.", name)


def require_hex_payload(value: Any, name: str, label: str) -> None:
    if not is_hex_payload(value):
        raise CircleArgumentError(
            f"{label} must be a valid hex string starting with '0x'.", name
        )


def check_blockchain(
    blockchain: Optional[str],
    allowed: Collection[str],
    name: str = "blockchain",
) -> None:
    """Reject a blockchain outside ``allowed``; ``None`` passes."""
    if blockchain is not None and blockchain not in allowed:
        raise CircleArgumentError(f"Invalid blockchain specified: {blockchain!r}.", name)


def check_pagination(options: CursorOptions) -> None:
    if options.page_before and options.page_after:
        raise CircleArgumentError("Cannot specify both pageBefore and pageAfter.")
    size = options.page_size
    if size is not None and not 1 <= size <= MAX_PAGE_SIZE:
        raise CircleArgumentError(
            f"Page size must be between 1 and {MAX_PAGE_SIZE}.", "page_size"
        )


def check_fee(fee: FeeOptions) -> None:
    """Validate a fee selection: a fee level, or a consistent gas configuration."""
    if fee.fee_level and fee.fee_level not in FEE_LEVELS:
        raise CircleArgumentError("Fee level must be LOW, MEDIUM, or HIGH.", "fee_level")
    if not fee.fee_level and not fee.gas_limit:
        raise CircleArgumentError(
            "Gas limit is required if feeLevel is not provided.", "gas_limit"
        )
    if fee.fee_level and (fee.gas_price or fee.max_fee or fee.priority_fee):
        raise CircleArgumentError(
            "Fee level cannot be used with gasPrice, maxFee, or priorityFee."
        )
    if fee.max_fee and not (fee.priority_fee and fee.gas_limit):
        raise CircleArgumentError("Max fee requires priorityFee and gasLimit.")
    if fee.priority_fee and not (fee.max_fee and fee.gas_limit):
        raise CircleArgumentError("Priority fee requires maxFee and gasLimit.")
    if fee.gas_price and (fee.max_fee or fee.priority_fee):
        raise CircleArgumentError(
            "Gas price cannot be used with maxFee, priorityFee, or feeLevel."
        )


def check_token_source(
    token_id: Optional[str],
    token_address: Optional[str],
    blockchain: Optional[str],
) -> None:
    if token_id and (token_address or blockchain):
        raise CircleArgumentError(
            "Token ID is mutually exclusive with tokenAddress and blockchain."
        )
    if not token_id and not blockchain:
        raise CircleArgumentError("Blockchain is required if tokenId is not provided.")


def check_nft_amounts(
    nft_token_ids: Optional[Sequence[str]],
    amounts: Sequence[str],
) -> None:
    if nft_token_ids is not None and len(nft_token_ids) != len(amounts):
        raise CircleArgumentError(
            "NFT token IDs length must match amounts length for ERC-1155 transfers."
        )


def check_wallet_or_source(
    wallet_id: Optional[str],
    blockchain: Optional[str],
    source_address: Optional[str],
) -> None:
    """Either a wallet ID, or both blockchain and source address, but not both."""
    if not wallet_id and not (blockchain and source_address):
        raise CircleArgumentError(
            "Wallet ID is required when sourceAddress and blockchain are not provided."
        )
    if wallet_id and (blockchain or source_address):
        raise CircleArgumentError(
            "Wallet ID is mutually exclusive with sourceAddress and blockchain."
        )


def check_call_selection(
    abi_function_signature: Optional[str],
    call_data: Optional[str],
) -> None:
    if not abi_function_signature and not call_data:
        raise CircleArgumentError(
            "Either abiFunctionSignature or callData must be provided."
        )
    if abi_function_signature and call_data:
        raise CircleArgumentError(
            "abiFunctionSignature and callData are mutually exclusive."
        )
    if call_data:
        require_hex_payload(call_data, "call_data", "callData")
