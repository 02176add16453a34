"""Circle developer-controlled wallets Python SDK."""

from circle_wallets.client import CircleClient
from circle_wallets.crypto import (
    encrypt_entity_secret,
    expected_ciphertext_length,
    generate_entity_secret,
)
from circle_wallets.errors import (
    CircleApiError,
    CircleArgumentError,
    CircleError,
    CircleTransportError,
    EntitySecretCryptoError,
    MalformedResponseError,
    RecoveryFileError,
)
from circle_wallets.models import (
    ContractExecutionFeeEstimateOptions,
    ContractExecutionOptions,
    CreateWalletsOptions,
    FeeOptions,
    NftListOptions,
    RegisterEntitySecretResult,
    Token,
    Transaction,
    TransactionListOptions,
    TransactionState,
    TransferFeeEstimateOptions,
    TransferOptions,
    Wallet,
    WalletBalanceListOptions,
    WalletListOptions,
    WalletMetadata,
    WalletSet,
    WalletSetListOptions,
)
from circle_wallets.validation import is_valid_file_path, is_valid_secret_format

__version__ = "0.1.0"

__all__ = [
    "CircleClient",
    "CircleError",
    "CircleArgumentError",
    "CircleApiError",
    "CircleTransportError",
    "MalformedResponseError",
    "EntitySecretCryptoError",
    "RecoveryFileError",
    "generate_entity_secret",
    "encrypt_entity_secret",
    "expected_ciphertext_length",
    "is_valid_secret_format",
    "is_valid_file_path",
    "RegisterEntitySecretResult",
    "WalletSet",
    "WalletSetListOptions",
    "Wallet",
    "WalletMetadata",
    "CreateWalletsOptions",
    "WalletListOptions",
    "WalletBalanceListOptions",
    "NftListOptions",
    "Token",
    "Transaction",
    "TransactionState",
    "TransactionListOptions",
    "FeeOptions",
    "TransferOptions",
    "TransferFeeEstimateOptions",
    "ContractExecutionOptions",
    "ContractExecutionFeeEstimateOptions",
]
