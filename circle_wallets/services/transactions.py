"""Transaction listing, transfers, contract execution and fee estimation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel

from circle_wallets.errors import CircleArgumentError
from circle_wallets.models import (
    AddressValidation,
    ContractExecutionFeeEstimateOptions,
    ContractExecutionOptions,
    CreateContractExecutionRequest,
    CreateTransferRequest,
    CreateWalletUpgradeRequest,
    EstimateContractExecutionFeeRequest,
    EstimateTransferFeeRequest,
    FeeEstimate,
    FeeOptions,
    Transaction,
    TransactionActionRequest,
    TransactionList,
    TransactionListOptions,
    TransactionState,
    TransferFeeEstimateOptions,
    TransferOptions,
    ValidateAddressRequest,
)
from circle_wallets.services.entity_secrets import EntitySecretService
from circle_wallets.transport import CircleTransport, path_segment
from circle_wallets.validation import (
    CONTRACT_FEE_BLOCKCHAINS,
    SCA_CORE_UPGRADE_TARGET,
    TRANSFER_FEE_BLOCKCHAINS,
    WALLET_BLOCKCHAINS,
    check_blockchain,
    check_call_selection,
    check_fee,
    check_nft_amounts,
    check_pagination,
    check_token_source,
    check_wallet_or_source,
    require,
    require_entity_secret,
    require_idempotency_key,
)


def _require_amounts(amounts: Sequence[str]) -> None:
    if not amounts or isinstance(amounts, str):
        raise CircleArgumentError("At least one amount is required.", "amounts")


class TransactionService:
    """Transactions on developer-controlled wallets.

    Every mutating call takes a caller-supplied UUID idempotency key so it
    can be retried safely; none are retried by the client itself.
    """

    def __init__(self, transport: CircleTransport, entity_secrets: EntitySecretService) -> None:
        self._transport = transport
        self._entity_secrets = entity_secrets

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    async def list_transactions(
        self,
        options: Optional[TransactionListOptions] = None,
        *,
        request_id: Optional[str] = None,
    ) -> list[Transaction]:
        """GET /transactions -- List transactions matching the given filters."""
        options = options or TransactionListOptions()
        check_pagination(options)
        result = await self._transport.request(
            "GET",
            "transactions",
            params=options.to_params(),
            request_id=request_id,
            model=TransactionList,
            allow_empty=True,
        )
        return result.transactions

    async def get_transaction(
        self,
        transaction_id: str,
        *,
        tx_type: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> Transaction:
        """GET /transactions/:id -- Get a transaction.

        Args:
            transaction_id: Transaction ID.
            tx_type: Optional INBOUND/OUTBOUND filter.
        """
        require(transaction_id, "transaction_id", "Transaction ID")
        return await self._transport.request(
            "GET",
            f"transactions/{path_segment(transaction_id)}",
            params={"txType": tx_type},
            request_id=request_id,
            model=Transaction,
            key="transaction",
        )

    async def validate_address(
        self,
        blockchain: str,
        address: str,
        *,
        request_id: Optional[str] = None,
    ) -> AddressValidation:
        """POST /transactions/validateAddress -- Check an address on a blockchain."""
        require(blockchain, "blockchain", "Blockchain")
        require(address, "address", "Address")
        check_blockchain(blockchain, WALLET_BLOCKCHAINS)
        request = ValidateAddressRequest(blockchain=blockchain, address=address)
        return await self._transport.request(
            "POST",
            "transactions/validateAddress",
            json_body=request.model_dump(),
            request_id=request_id,
            model=AddressValidation,
        )

    # -----------------------------------------------------------------
    # Fee estimation
    # -----------------------------------------------------------------

    async def estimate_transfer_fee(
        self,
        destination_address: str,
        amounts: Sequence[str],
        options: TransferFeeEstimateOptions,
        *,
        request_id: Optional[str] = None,
    ) -> FeeEstimate:
        """POST /transactions/transfer/estimateFee -- Estimate a transfer's fee.

        The source is either ``options.wallet_id`` or ``options.blockchain``
        plus ``options.source_address``.
        """
        require(destination_address, "destination_address", "Destination address")
        _require_amounts(amounts)
        check_nft_amounts(options.nft_token_ids, amounts)
        check_wallet_or_source(options.wallet_id, options.blockchain, options.source_address)
        check_token_source(options.token_id, options.token_address, options.blockchain)
        check_blockchain(options.blockchain, TRANSFER_FEE_BLOCKCHAINS)

        request = EstimateTransferFeeRequest(
            destination_address=destination_address,
            amounts=list(amounts),
            nft_token_ids=options.nft_token_ids,
            source_address=options.source_address,
            token_id=options.token_id,
            token_address=options.token_address,
            blockchain=options.blockchain,
            wallet_id=options.wallet_id,
        )
        return await self._transport.request(
            "POST",
            "transactions/transfer/estimateFee",
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=FeeEstimate,
        )

    async def estimate_contract_execution_fee(
        self,
        contract_address: str,
        options: ContractExecutionFeeEstimateOptions,
        *,
        request_id: Optional[str] = None,
    ) -> FeeEstimate:
        """POST /transactions/contractExecution/estimateFee -- Estimate a contract call's fee."""
        require(contract_address, "contract_address", "Contract address")
        check_wallet_or_source(options.wallet_id, options.blockchain, options.source_address)
        check_call_selection(options.abi_function_signature, options.call_data)
        check_blockchain(options.blockchain, CONTRACT_FEE_BLOCKCHAINS)

        request = EstimateContractExecutionFeeRequest(
            contract_address=contract_address,
            blockchain=options.blockchain,
            source_address=options.source_address,
            wallet_id=options.wallet_id,
            abi_function_signature=options.abi_function_signature,
            abi_parameters=options.abi_parameters,
            call_data=options.call_data,
            amount=options.amount,
        )
        return await self._transport.request(
            "POST",
            "transactions/contractExecution/estimateFee",
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=FeeEstimate,
        )

    # -----------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------

    async def create_transfer(
        self,
        entity_secret: str,
        destination_address: str,
        idempotency_key: str,
        amounts: Sequence[str],
        options: TransferOptions,
        *,
        request_id: Optional[str] = None,
    ) -> TransactionState:
        """POST /developer/transactions/transfer -- Transfer tokens or NFTs.

        Args:
            entity_secret: Entity secret; a fresh ciphertext is generated.
            destination_address: Recipient address.
            idempotency_key: UUIDv4 identifying this transfer.
            amounts: Amounts in whole token units (one per NFT for ERC-1155).
            options: Source wallet, token selection and fee configuration.

        Returns:
            TransactionState with the new transaction's id and state.
        """
        if not options.wallet_id and not options.blockchain:
            raise CircleArgumentError(
                "Wallet ID is required when sourceAddress and blockchain are not provided.",
                "wallet_id",
            )
        require(destination_address, "destination_address", "Destination address")
        require_idempotency_key(idempotency_key)
        _require_amounts(amounts)
        require_entity_secret(entity_secret)
        check_token_source(options.token_id, options.token_address, options.blockchain)
        check_nft_amounts(options.nft_token_ids, amounts)
        check_fee(options.fee)

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = CreateTransferRequest(
            **options.fee.model_dump(),
            wallet_id=options.wallet_id,
            entity_secret_ciphertext=ciphertext,
            destination_address=destination_address,
            idempotency_key=idempotency_key,
            amounts=list(amounts),
            nft_token_ids=options.nft_token_ids,
            ref_id=options.ref_id,
            token_id=options.token_id,
            token_address=options.token_address,
            blockchain=options.blockchain,
        )
        return await self._submit("developer/transactions/transfer", request, request_id)

    async def create_contract_execution(
        self,
        wallet_id: str,
        entity_secret: str,
        contract_address: str,
        idempotency_key: str,
        options: ContractExecutionOptions,
        *,
        request_id: Optional[str] = None,
    ) -> TransactionState:
        """POST /developer/transactions/contractExecution -- Execute a contract call.

        ``options`` carries exactly one of ``abi_function_signature`` (with
        ``abi_parameters``) or raw ``call_data``, plus the fee selection.
        """
        require(wallet_id, "wallet_id", "Wallet ID")
        require_entity_secret(entity_secret)
        require(contract_address, "contract_address", "Contract address")
        require_idempotency_key(idempotency_key)
        check_call_selection(options.abi_function_signature, options.call_data)
        check_fee(options.fee)

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = CreateContractExecutionRequest(
            **options.fee.model_dump(),
            wallet_id=wallet_id,
            entity_secret_ciphertext=ciphertext,
            contract_address=contract_address,
            idempotency_key=idempotency_key,
            abi_function_signature=options.abi_function_signature,
            abi_parameters=options.abi_parameters,
            call_data=options.call_data,
            amount=options.amount,
            ref_id=options.ref_id,
        )
        return await self._submit(
            "developer/transactions/contractExecution", request, request_id
        )

    async def create_wallet_upgrade(
        self,
        wallet_id: str,
        entity_secret: str,
        new_sca_core: str,
        idempotency_key: str,
        *,
        fee: Optional[FeeOptions] = None,
        ref_id: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> TransactionState:
        """POST /developer/transactions/walletUpgrade -- Upgrade an SCA wallet's core."""
        fee = fee or FeeOptions()
        require(wallet_id, "wallet_id", "Wallet ID")
        require_entity_secret(entity_secret)
        if new_sca_core != SCA_CORE_UPGRADE_TARGET:
            raise CircleArgumentError(
                f"newScaCore must be '{SCA_CORE_UPGRADE_TARGET}'.", "new_sca_core"
            )
        require_idempotency_key(idempotency_key)
        check_fee(fee)

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = CreateWalletUpgradeRequest(
            **fee.model_dump(),
            wallet_id=wallet_id,
            entity_secret_ciphertext=ciphertext,
            new_sca_core=new_sca_core,
            idempotency_key=idempotency_key,
            ref_id=ref_id,
        )
        return await self._submit("developer/transactions/walletUpgrade", request, request_id)

    async def cancel_transaction(
        self,
        transaction_id: str,
        entity_secret: str,
        idempotency_key: str,
        *,
        request_id: Optional[str] = None,
    ) -> TransactionState:
        """POST /developer/transactions/:id/cancel -- Cancel a pending transaction."""
        return await self._transaction_action(
            "cancel", transaction_id, entity_secret, idempotency_key, request_id
        )

    async def accelerate_transaction(
        self,
        transaction_id: str,
        entity_secret: str,
        idempotency_key: str,
        *,
        request_id: Optional[str] = None,
    ) -> TransactionState:
        """POST /developer/transactions/:id/accelerate -- Speed up a stuck transaction."""
        return await self._transaction_action(
            "accelerate", transaction_id, entity_secret, idempotency_key, request_id
        )

    # -----------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------

    async def _transaction_action(
        self,
        action: str,
        transaction_id: str,
        entity_secret: str,
        idempotency_key: str,
        request_id: Optional[str],
    ) -> TransactionState:
        require(transaction_id, "transaction_id", "Transaction ID")
        require_entity_secret(entity_secret)
        require_idempotency_key(idempotency_key)

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = TransactionActionRequest(
            entity_secret_ciphertext=ciphertext, idempotency_key=idempotency_key
        )
        return await self._submit(
            f"developer/transactions/{path_segment(transaction_id)}/{action}",
            request,
            request_id,
        )

    async def _submit(
        self, path: str, request: BaseModel, request_id: Optional[str]
    ) -> TransactionState:
        return await self._transport.request(
            "POST",
            path,
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=TransactionState,
        )
