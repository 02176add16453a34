"""Pydantic v2 models for Circle Web3 Services request/response data."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# ---------------------------------------------------------------------------
# Entity secret models
# ---------------------------------------------------------------------------


class PublicKeyResponse(BaseModel):
    """Payload of GET /config/entity/publicKey."""

    public_key: Optional[str] = Field(default=None, alias="publicKey")

    model_config = {"populate_by_name": True}


class RegisterEntitySecretRequest(BaseModel):
    """Request body for POST /developer/register."""

    entity_secret: str = Field(alias="entitySecret")
    idempotency_key: str = Field(alias="idempotencyKey")

    model_config = {"populate_by_name": True}


class RegisterEntitySecretResult(BaseModel):
    """Outcome of a successful entity secret registration.

    ``idempotency_key`` is generated client-side and echoed here so the
    caller can correlate a retried registration.
    """

    status: Optional[str] = None
    idempotency_key: str = Field(alias="idempotencyKey")
    recovery_file_path: Optional[str] = Field(default=None, alias="recoveryFilePath")

    model_config = {"populate_by_name": True}


class RecoveryRecord(BaseModel):
    """Local recovery artifact written once at registration time."""

    entity_secret: str = Field(alias="EntitySecret")
    idempotency_key: str = Field(alias="IdempotencyKey")
    registration_date: datetime = Field(alias="RegistrationDate")
    note: str = Field(
        default="Store this file securely and contact Circle Support for recovery.",
        alias="Note",
    )

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------


class CursorOptions(BaseModel):
    """Cursor pagination shared by list endpoints.

    ``page_before`` and ``page_after`` are mutually exclusive;
    ``page_size`` is 1-50 when given (server default otherwise).
    """

    page_before: Optional[str] = None
    page_after: Optional[str] = None
    page_size: Optional[int] = None

    def to_params(self) -> dict[str, Any]:
        return {
            "pageBefore": self.page_before,
            "pageAfter": self.page_after,
            "pageSize": self.page_size,
        }


class PageOptions(CursorOptions):
    """Cursor pagination plus a ``from_date``/``to_date`` creation range."""

    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None

    def to_params(self) -> dict[str, Any]:
        params = {"from": _isoformat(self.from_date), "to": _isoformat(self.to_date)}
        params.update(super().to_params())
        return params


class FeeOptions(BaseModel):
    """Fee configuration for transactions.

    Either ``fee_level`` (LOW, MEDIUM, HIGH) or explicit gas settings:
    ``gas_limit`` + ``gas_price`` for legacy chains, or ``gas_limit`` +
    ``max_fee`` + ``priority_fee`` for EIP-1559 chains.
    """

    fee_level: Optional[str] = Field(default=None, alias="feeLevel")
    gas_limit: Optional[str] = Field(default=None, alias="gasLimit")
    gas_price: Optional[str] = Field(default=None, alias="gasPrice")
    max_fee: Optional[str] = Field(default=None, alias="maxFee")
    priority_fee: Optional[str] = Field(default=None, alias="priorityFee")

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Wallet set models
# ---------------------------------------------------------------------------


class WalletSet(BaseModel):
    id: str
    custody_type: Optional[str] = Field(default=None, alias="custodyType")
    name: Optional[str] = None
    create_date: Optional[datetime] = Field(default=None, alias="createDate")
    update_date: Optional[datetime] = Field(default=None, alias="updateDate")

    model_config = {"populate_by_name": True}


class WalletSetList(BaseModel):
    wallet_sets: list[WalletSet] = Field(default_factory=list, alias="walletSets")

    model_config = {"populate_by_name": True}


class CreateWalletSetRequest(BaseModel):
    """Request body for POST /developer/walletSets."""

    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    idempotency_key: str = Field(alias="idempotencyKey")
    name: str

    model_config = {"populate_by_name": True}


class WalletSetListOptions(PageOptions):
    """Filters for GET /walletSets."""


# ---------------------------------------------------------------------------
# Token models
# ---------------------------------------------------------------------------


class Token(BaseModel):
    id: str
    name: Optional[str] = None
    standard: Optional[str] = None
    blockchain: Optional[str] = None
    decimals: Optional[int] = None
    is_native: bool = Field(default=False, alias="isNative")
    symbol: Optional[str] = None
    token_address: Optional[str] = Field(default=None, alias="tokenAddress")
    create_date: Optional[datetime] = Field(default=None, alias="createDate")
    update_date: Optional[datetime] = Field(default=None, alias="updateDate")

    model_config = {"populate_by_name": True}


class TokenBalance(BaseModel):
    amount: str
    token: Token
    update_date: Optional[datetime] = Field(default=None, alias="updateDate")

    model_config = {"populate_by_name": True}


class Nft(BaseModel):
    amount: str
    metadata: Optional[str] = None
    nft_token_id: Optional[str] = Field(default=None, alias="nftTokenId")
    token: Token
    update_date: Optional[datetime] = Field(default=None, alias="updateDate")

    model_config = {"populate_by_name": True}


class NftList(BaseModel):
    nfts: list[Nft] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Wallet models
# ---------------------------------------------------------------------------


class WalletMetadata(BaseModel):
    name: Optional[str] = None
    ref_id: Optional[str] = Field(default=None, alias="refId")

    model_config = {"populate_by_name": True}


class Wallet(BaseModel):
    id: str
    address: Optional[str] = None
    blockchain: Optional[str] = None
    create_date: Optional[datetime] = Field(default=None, alias="createDate")
    update_date: Optional[datetime] = Field(default=None, alias="updateDate")
    custody_type: Optional[str] = Field(default=None, alias="custodyType")
    name: Optional[str] = None
    ref_id: Optional[str] = Field(default=None, alias="refId")
    state: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    wallet_set_id: Optional[str] = Field(default=None, alias="walletSetId")
    initial_public_key: Optional[str] = Field(default=None, alias="initialPublicKey")
    account_type: Optional[str] = Field(default=None, alias="accountType")

    model_config = {"populate_by_name": True}


class WalletWithBalances(Wallet):
    token_balances: list[TokenBalance] = Field(default_factory=list, alias="tokenBalances")


class WalletList(BaseModel):
    wallets: list[Wallet] = Field(default_factory=list)


class WalletWithBalancesList(BaseModel):
    wallets: list[WalletWithBalances] = Field(default_factory=list)


class CreateWalletsRequest(BaseModel):
    """Request body for POST /developer/wallets."""

    wallet_set_id: str = Field(alias="walletSetId")
    blockchains: list[str]
    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    idempotency_key: str = Field(alias="idempotencyKey")
    account_type: str = Field(alias="accountType")
    count: int
    metadata: Optional[list[WalletMetadata]] = None

    model_config = {"populate_by_name": True}


class CreateWalletsOptions(BaseModel):
    """Optional settings for wallet creation.

    ``idempotency_key`` defaults to a fresh UUIDv4 per call.
    ``metadata``, when given, must hold exactly ``count`` entries.
    """

    idempotency_key: Optional[str] = None
    account_type: str = "EOA"
    count: int = 1
    metadata: Optional[list[WalletMetadata]] = None


class WalletListOptions(PageOptions):
    """Filters for GET /wallets."""

    address: Optional[str] = None
    blockchain: Optional[str] = None
    sca_core: Optional[str] = None
    wallet_set_id: Optional[str] = None
    ref_id: Optional[str] = None

    def to_params(self) -> dict[str, Any]:
        params = {
            "address": self.address,
            "blockchain": self.blockchain,
            "scaCore": self.sca_core,
            "walletSetId": self.wallet_set_id,
            "refId": self.ref_id,
        }
        params.update(super().to_params())
        return params


class WalletBalanceListOptions(PageOptions):
    """Filters for GET /developer/wallets/balances."""

    address: Optional[str] = None
    sca_core: Optional[str] = None
    wallet_set_id: Optional[str] = None
    ref_id: Optional[str] = None
    amount_gte: Optional[str] = None
    token_address: Optional[str] = None

    def to_params(self) -> dict[str, Any]:
        params = {
            "address": self.address,
            "scaCore": self.sca_core,
            "walletSetId": self.wallet_set_id,
            "refId": self.ref_id,
            "amount__gte": self.amount_gte,
            "tokenAddress": self.token_address,
        }
        params.update(super().to_params())
        return params


class NftListOptions(CursorOptions):
    """Filters for GET /wallets/:id/nfts."""

    include_all: Optional[bool] = None
    name: Optional[str] = None
    token_address: Optional[str] = None
    standard: Optional[str] = None

    def to_params(self) -> dict[str, Any]:
        params = {
            "includeAll": self.include_all,
            "name": self.name,
            "tokenAddress": self.token_address,
            "standard": self.standard,
        }
        params.update(super().to_params())
        return params


class UpdateWalletRequest(BaseModel):
    name: Optional[str] = None
    ref_id: Optional[str] = Field(default=None, alias="refId")

    model_config = {"populate_by_name": True}


class DeriveWalletRequest(BaseModel):
    metadata: Optional[WalletMetadata] = None


# ---------------------------------------------------------------------------
# Signing models
# ---------------------------------------------------------------------------


class SignMessageRequest(BaseModel):
    """Request body for POST /developer/sign/message."""

    wallet_id: str = Field(alias="walletId")
    message: str
    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    encoded_by_hex: bool = Field(default=False, alias="encodedByHex")
    memo: Optional[str] = None

    model_config = {"populate_by_name": True}


class SignTypedDataRequest(BaseModel):
    """Request body for POST /developer/sign/typedData."""

    wallet_id: str = Field(alias="walletId")
    data: str
    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    memo: Optional[str] = None

    model_config = {"populate_by_name": True}


class SignTransactionRequest(BaseModel):
    """Request body for POST /developer/sign/transaction."""

    wallet_id: str = Field(alias="walletId")
    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    raw_transaction: Optional[str] = Field(default=None, alias="rawTransaction")
    transaction: Optional[str] = None
    memo: Optional[str] = None

    model_config = {"populate_by_name": True}


class SignDelegateActionRequest(BaseModel):
    """Request body for POST /developer/sign/delegateAction."""

    wallet_id: str = Field(alias="walletId")
    unsigned_delegate_action: str = Field(alias="unsignedDelegateAction")
    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")

    model_config = {"populate_by_name": True}


class SignatureResponse(BaseModel):
    """Response from the sign/message and sign/typedData endpoints."""

    signature: str


class SignTransactionResponse(BaseModel):
    signature: str
    signed_transaction: Optional[str] = Field(default=None, alias="signedTransaction")
    tx_hash: Optional[str] = Field(default=None, alias="txHash")

    model_config = {"populate_by_name": True}


class SignDelegateActionResponse(BaseModel):
    signature: str
    signed_delegate_action: Optional[str] = Field(default=None, alias="signedDelegateAction")

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Transaction models
# ---------------------------------------------------------------------------


class EstimatedFee(BaseModel):
    gas_limit: Optional[str] = Field(default=None, alias="gasLimit")
    gas_price: Optional[str] = Field(default=None, alias="gasPrice")
    max_fee: Optional[str] = Field(default=None, alias="maxFee")
    priority_fee: Optional[str] = Field(default=None, alias="priorityFee")
    base_fee: Optional[str] = Field(default=None, alias="baseFee")
    network_fee: Optional[str] = Field(default=None, alias="networkFee")

    model_config = {"populate_by_name": True}


class FeeEstimate(BaseModel):
    """Response from the estimateFee endpoints."""

    high: Optional[EstimatedFee] = None
    medium: Optional[EstimatedFee] = None
    low: Optional[EstimatedFee] = None
    call_gas_limit: Optional[str] = Field(default=None, alias="callGasLimit")
    verification_gas_limit: Optional[str] = Field(default=None, alias="verificationGasLimit")
    pre_verification_gas: Optional[str] = Field(default=None, alias="preVerificationGas")

    model_config = {"populate_by_name": True}


class ScreeningReason(BaseModel):
    source: Optional[str] = None
    source_value: Optional[str] = Field(default=None, alias="sourceValue")
    risk_score: Optional[str] = Field(default=None, alias="riskScore")
    risk_categories: list[str] = Field(default_factory=list, alias="riskCategories")
    type: Optional[str] = None

    model_config = {"populate_by_name": True}


class TransactionScreeningEvaluation(BaseModel):
    rule_name: Optional[str] = Field(default=None, alias="ruleName")
    actions: list[str] = Field(default_factory=list)
    screening_date: Optional[datetime] = Field(default=None, alias="screeningDate")
    reasons: list[ScreeningReason] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class Transaction(BaseModel):
    """Transaction record from GET /transactions and /transactions/:id."""

    id: str
    abi_function_signature: Optional[str] = Field(default=None, alias="abiFunctionSignature")
    abi_parameters: Optional[list[Any]] = Field(default=None, alias="abiParameters")
    amounts: list[str] = Field(default_factory=list)
    amount_in_usd: Optional[str] = Field(default=None, alias="amountInUSD")
    block_hash: Optional[str] = Field(default=None, alias="blockHash")
    block_height: Optional[int] = Field(default=None, alias="blockHeight")
    blockchain: Optional[str] = None
    contract_address: Optional[str] = Field(default=None, alias="contractAddress")
    create_date: Optional[datetime] = Field(default=None, alias="createDate")
    custody_type: Optional[str] = Field(default=None, alias="custodyType")
    destination_address: Optional[str] = Field(default=None, alias="destinationAddress")
    error_reason: Optional[str] = Field(default=None, alias="errorReason")
    error_details: Optional[str] = Field(default=None, alias="errorDetails")
    estimated_fee: Optional[EstimatedFee] = Field(default=None, alias="estimatedFee")
    fee_level: Optional[str] = Field(default=None, alias="feeLevel")
    first_confirm_date: Optional[datetime] = Field(default=None, alias="firstConfirmDate")
    network_fee: Optional[str] = Field(default=None, alias="networkFee")
    network_fee_in_usd: Optional[str] = Field(default=None, alias="networkFeeInUSD")
    nfts: Optional[list[str]] = None
    operation: Optional[str] = None
    ref_id: Optional[str] = Field(default=None, alias="refId")
    source_address: Optional[str] = Field(default=None, alias="sourceAddress")
    state: Optional[str] = None
    token_id: Optional[str] = Field(default=None, alias="tokenId")
    transaction_type: Optional[str] = Field(default=None, alias="transactionType")
    tx_hash: Optional[str] = Field(default=None, alias="txHash")
    update_date: Optional[datetime] = Field(default=None, alias="updateDate")
    user_id: Optional[str] = Field(default=None, alias="userId")
    wallet_id: Optional[str] = Field(default=None, alias="walletId")
    transaction_screening_evaluation: Optional[TransactionScreeningEvaluation] = Field(
        default=None, alias="transactionScreeningEvaluation"
    )

    model_config = {"populate_by_name": True}


class TransactionList(BaseModel):
    transactions: list[Transaction] = Field(default_factory=list)


class TransactionState(BaseModel):
    """Response from transfer, contract execution, upgrade, cancel and accelerate."""

    id: str
    state: Optional[str] = None


class AddressValidation(BaseModel):
    is_valid: bool = Field(alias="isValid")

    model_config = {"populate_by_name": True}


class TransactionListOptions(PageOptions):
    """Filters for GET /transactions."""

    blockchain: Optional[str] = None
    custody_type: Optional[str] = None
    destination_address: Optional[str] = None
    include_all: Optional[bool] = None
    operation: Optional[str] = None
    state: Optional[str] = None
    tx_hash: Optional[str] = None
    tx_type: Optional[str] = None
    wallet_ids: Optional[str] = None

    def to_params(self) -> dict[str, Any]:
        params = {
            "blockchain": self.blockchain,
            "custodyType": self.custody_type,
            "destinationAddress": self.destination_address,
            "includeAll": self.include_all,
            "operation": self.operation,
            "state": self.state,
            "txHash": self.tx_hash,
            "txType": self.tx_type,
            "walletIds": self.wallet_ids,
        }
        params.update(super().to_params())
        return params


class TransferOptions(BaseModel):
    """Source, token and fee selection for a transfer.

    ``wallet_id`` is required unless ``blockchain`` is given; ``token_id``
    excludes ``token_address`` and ``blockchain``.
    """

    wallet_id: Optional[str] = None
    blockchain: Optional[str] = None
    token_id: Optional[str] = None
    token_address: Optional[str] = None
    nft_token_ids: Optional[list[str]] = None
    ref_id: Optional[str] = None
    fee: FeeOptions = Field(default_factory=FeeOptions)


class TransferFeeEstimateOptions(BaseModel):
    """Source and token selection for a transfer fee estimate."""

    wallet_id: Optional[str] = None
    source_address: Optional[str] = None
    blockchain: Optional[str] = None
    token_id: Optional[str] = None
    token_address: Optional[str] = None
    nft_token_ids: Optional[list[str]] = None


class ContractExecutionFeeEstimateOptions(BaseModel):
    """Source and call selection for a contract execution fee estimate.

    Exactly one of ``abi_function_signature`` or ``call_data`` is required.
    """

    wallet_id: Optional[str] = None
    source_address: Optional[str] = None
    blockchain: Optional[str] = None
    abi_function_signature: Optional[str] = None
    abi_parameters: Optional[list[Any]] = None
    call_data: Optional[str] = None
    amount: Optional[str] = None


class ContractExecutionOptions(BaseModel):
    """Call and fee selection for a contract execution."""

    abi_function_signature: Optional[str] = None
    abi_parameters: Optional[list[Any]] = None
    call_data: Optional[str] = None
    amount: Optional[str] = None
    ref_id: Optional[str] = None
    fee: FeeOptions = Field(default_factory=FeeOptions)


class CreateTransferRequest(FeeOptions):
    """Request body for POST /developer/transactions/transfer."""

    wallet_id: Optional[str] = Field(default=None, alias="walletId")
    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    destination_address: str = Field(alias="destinationAddress")
    idempotency_key: str = Field(alias="idempotencyKey")
    amounts: list[str]
    nft_token_ids: Optional[list[str]] = Field(default=None, alias="nftTokenIds")
    ref_id: Optional[str] = Field(default=None, alias="refId")
    token_id: Optional[str] = Field(default=None, alias="tokenId")
    token_address: Optional[str] = Field(default=None, alias="tokenAddress")
    blockchain: Optional[str] = None


class ValidateAddressRequest(BaseModel):
    blockchain: str
    address: str


class EstimateTransferFeeRequest(BaseModel):
    """Request body for POST /transactions/transfer/estimateFee."""

    destination_address: str = Field(alias="destinationAddress")
    amounts: list[str]
    nft_token_ids: Optional[list[str]] = Field(default=None, alias="nftTokenIds")
    source_address: Optional[str] = Field(default=None, alias="sourceAddress")
    token_id: Optional[str] = Field(default=None, alias="tokenId")
    token_address: Optional[str] = Field(default=None, alias="tokenAddress")
    blockchain: Optional[str] = None
    wallet_id: Optional[str] = Field(default=None, alias="walletId")

    model_config = {"populate_by_name": True}


class EstimateContractExecutionFeeRequest(BaseModel):
    """Request body for POST /transactions/contractExecution/estimateFee."""

    contract_address: str = Field(alias="contractAddress")
    blockchain: Optional[str] = None
    source_address: Optional[str] = Field(default=None, alias="sourceAddress")
    wallet_id: Optional[str] = Field(default=None, alias="walletId")
    abi_function_signature: Optional[str] = Field(default=None, alias="abiFunctionSignature")
    abi_parameters: Optional[list[Any]] = Field(default=None, alias="abiParameters")
    call_data: Optional[str] = Field(default=None, alias="callData")
    amount: Optional[str] = None

    model_config = {"populate_by_name": True}


class CreateContractExecutionRequest(FeeOptions):
    """Request body for POST /developer/transactions/contractExecution."""

    wallet_id: str = Field(alias="walletId")
    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    contract_address: str = Field(alias="contractAddress")
    idempotency_key: str = Field(alias="idempotencyKey")
    abi_function_signature: Optional[str] = Field(default=None, alias="abiFunctionSignature")
    abi_parameters: Optional[list[Any]] = Field(default=None, alias="abiParameters")
    call_data: Optional[str] = Field(default=None, alias="callData")
    amount: Optional[str] = None
    ref_id: Optional[str] = Field(default=None, alias="refId")


class CreateWalletUpgradeRequest(FeeOptions):
    """Request body for POST /developer/transactions/walletUpgrade."""

    wallet_id: str = Field(alias="walletId")
    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    new_sca_core: str = Field(alias="newScaCore")
    idempotency_key: str = Field(alias="idempotencyKey")
    ref_id: Optional[str] = Field(default=None, alias="refId")


class TransactionActionRequest(BaseModel):
    """Request body for POST /developer/transactions/:id/cancel and /accelerate."""

    entity_secret_ciphertext: str = Field(alias="entitySecretCiphertext")
    idempotency_key: str = Field(alias="idempotencyKey")

    model_config = {"populate_by_name": True}
