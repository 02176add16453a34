"""Wallet management and signing operations."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Optional

from circle_wallets.errors import CircleArgumentError
from circle_wallets.models import (
    CreateWalletsOptions,
    CreateWalletsRequest,
    DeriveWalletRequest,
    Nft,
    NftList,
    NftListOptions,
    SignatureResponse,
    SignDelegateActionRequest,
    SignDelegateActionResponse,
    SignMessageRequest,
    SignTransactionRequest,
    SignTransactionResponse,
    SignTypedDataRequest,
    UpdateWalletRequest,
    Wallet,
    WalletBalanceListOptions,
    WalletList,
    WalletListOptions,
    WalletMetadata,
    WalletWithBalances,
    WalletWithBalancesList,
)
from circle_wallets.services.entity_secrets import EntitySecretService
from circle_wallets.transport import CircleTransport, path_segment
from circle_wallets.validation import (
    ACCOUNT_TYPES,
    DERIVABLE_BLOCKCHAINS,
    WALLET_BLOCKCHAINS,
    check_blockchain,
    check_pagination,
    require,
    require_entity_secret,
    require_hex_payload,
    require_idempotency_key,
)


class WalletService:
    """Developer-controlled wallets: creation, lookup, balances and signing."""

    def __init__(self, transport: CircleTransport, entity_secrets: EntitySecretService) -> None:
        self._transport = transport
        self._entity_secrets = entity_secrets

    # -----------------------------------------------------------------
    # Wallet management
    # -----------------------------------------------------------------

    async def create_wallets(
        self,
        wallet_set_id: str,
        blockchains: Sequence[str],
        entity_secret: str,
        options: Optional[CreateWalletsOptions] = None,
        *,
        request_id: Optional[str] = None,
    ) -> list[Wallet]:
        """POST /developer/wallets -- Create wallets in a wallet set.

        Args:
            wallet_set_id: Wallet set that will own the new wallets.
            blockchains: Blockchains to create wallets on (e.g., 'ETH-SEPOLIA').
            entity_secret: Entity secret; a fresh ciphertext is generated.
            options: Account type, count per blockchain, metadata and
                idempotency key.  Defaults to one EOA wallet per blockchain.
            request_id: Optional X-Request-Id header value.

        Returns:
            The created wallets.
        """
        options = options or CreateWalletsOptions()
        require(wallet_set_id, "wallet_set_id", "Wallet set ID")
        if not blockchains:
            raise CircleArgumentError("At least one blockchain must be specified.", "blockchains")
        if isinstance(blockchains, str):
            raise CircleArgumentError("Blockchains must be a sequence of names.", "blockchains")
        require_entity_secret(entity_secret)
        if options.count < 1:
            raise CircleArgumentError("Count must be at least 1.", "count")
        if options.account_type not in ACCOUNT_TYPES:
            raise CircleArgumentError("Account type must be 'EOA' or 'SCA'.", "account_type")
        if options.metadata is not None and len(options.metadata) != options.count:
            raise CircleArgumentError(
                "Metadata count must match the specified count.", "metadata"
            )
        for blockchain in blockchains:
            check_blockchain(blockchain, WALLET_BLOCKCHAINS, "blockchains")
        if options.idempotency_key is not None:
            require_idempotency_key(options.idempotency_key)

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = CreateWalletsRequest(
            wallet_set_id=wallet_set_id,
            blockchains=list(blockchains),
            entity_secret_ciphertext=ciphertext,
            idempotency_key=options.idempotency_key or str(uuid.uuid4()),
            account_type=options.account_type,
            count=options.count,
            metadata=options.metadata,
        )
        result = await self._transport.request(
            "POST",
            "developer/wallets",
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=WalletList,
            allow_empty=True,
        )
        return result.wallets

    async def list_wallets(
        self,
        options: Optional[WalletListOptions] = None,
        *,
        request_id: Optional[str] = None,
    ) -> list[Wallet]:
        """GET /wallets -- List wallets matching the given filters."""
        options = options or WalletListOptions()
        check_pagination(options)
        result = await self._transport.request(
            "GET",
            "wallets",
            params=options.to_params(),
            request_id=request_id,
            model=WalletList,
            allow_empty=True,
        )
        return result.wallets

    async def get_wallet(self, wallet_id: str, *, request_id: Optional[str] = None) -> Wallet:
        """GET /wallets/:id -- Get a wallet."""
        require(wallet_id, "wallet_id", "Wallet ID")
        return await self._transport.request(
            "GET",
            f"wallets/{path_segment(wallet_id)}",
            request_id=request_id,
            model=Wallet,
            key="wallet",
        )

    async def update_wallet(
        self,
        wallet_id: str,
        *,
        name: Optional[str] = None,
        ref_id: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> Wallet:
        """PUT /wallets/:id -- Update a wallet's name and/or reference ID."""
        require(wallet_id, "wallet_id", "Wallet ID")
        if not name and not ref_id:
            raise CircleArgumentError(
                "At least one of name or refId must be provided.", "name"
            )
        request = UpdateWalletRequest(name=name, ref_id=ref_id)
        return await self._transport.request(
            "PUT",
            f"wallets/{path_segment(wallet_id)}",
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=Wallet,
            key="wallet",
        )

    async def derive_wallet(
        self,
        wallet_id: str,
        blockchain: str,
        *,
        metadata: Optional[WalletMetadata] = None,
        request_id: Optional[str] = None,
    ) -> Wallet:
        """PUT /developer/wallets/:id/blockchains/:blockchain -- Derive a wallet.

        Creates a wallet on another EVM blockchain with the same address as
        the source wallet.
        """
        require(wallet_id, "wallet_id", "Wallet ID")
        require(blockchain, "blockchain", "Blockchain")
        check_blockchain(blockchain, DERIVABLE_BLOCKCHAINS)
        request = DeriveWalletRequest(metadata=metadata)
        return await self._transport.request(
            "PUT",
            f"developer/wallets/{path_segment(wallet_id)}/blockchains/{path_segment(blockchain)}",
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=Wallet,
            key="wallet",
        )

    async def list_wallet_balances(
        self,
        blockchain: str,
        options: Optional[WalletBalanceListOptions] = None,
        *,
        request_id: Optional[str] = None,
    ) -> list[WalletWithBalances]:
        """GET /developer/wallets/balances -- Wallets on a blockchain with token balances."""
        options = options or WalletBalanceListOptions()
        require(blockchain, "blockchain", "Blockchain")
        check_pagination(options)
        params = {"blockchain": blockchain, **options.to_params()}
        result = await self._transport.request(
            "GET",
            "developer/wallets/balances",
            params=params,
            request_id=request_id,
            model=WalletWithBalancesList,
            allow_empty=True,
        )
        return result.wallets

    async def list_wallet_nfts(
        self,
        wallet_id: str,
        options: Optional[NftListOptions] = None,
        *,
        request_id: Optional[str] = None,
    ) -> list[Nft]:
        """GET /wallets/:id/nfts -- NFTs held by a wallet."""
        options = options or NftListOptions()
        require(wallet_id, "wallet_id", "Wallet ID")
        check_pagination(options)
        result = await self._transport.request(
            "GET",
            f"wallets/{path_segment(wallet_id)}/nfts",
            params=options.to_params(),
            request_id=request_id,
            model=NftList,
            allow_empty=True,
        )
        return result.nfts

    # -----------------------------------------------------------------
    # Signing
    # -----------------------------------------------------------------

    async def sign_message(
        self,
        wallet_id: str,
        message: str,
        entity_secret: str,
        *,
        encoded_by_hex: bool = False,
        memo: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> SignatureResponse:
        """POST /developer/sign/message -- Sign a message (EIP-191 on EVM).

        Args:
            wallet_id: Signing wallet.
            message: UTF-8 message, or ``0x`` hex when ``encoded_by_hex``.
            entity_secret: Entity secret; a fresh ciphertext is generated.
            encoded_by_hex: Treat ``message`` as hex-encoded bytes.
            memo: Optional human-readable note.
        """
        require(wallet_id, "wallet_id", "Wallet ID")
        require(message, "message", "Message")
        require_entity_secret(entity_secret)
        if encoded_by_hex:
            require_hex_payload(message, "message", "Message")

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = SignMessageRequest(
            wallet_id=wallet_id,
            message=message,
            entity_secret_ciphertext=ciphertext,
            encoded_by_hex=encoded_by_hex,
            memo=memo,
        )
        return await self._transport.request(
            "POST",
            "developer/sign/message",
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=SignatureResponse,
        )

    async def sign_typed_data(
        self,
        wallet_id: str,
        data: str,
        entity_secret: str,
        *,
        memo: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> SignatureResponse:
        """POST /developer/sign/typedData -- Sign EIP-712 typed data (JSON string)."""
        require(wallet_id, "wallet_id", "Wallet ID")
        require(data, "data", "Data")
        require_entity_secret(entity_secret)

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = SignTypedDataRequest(
            wallet_id=wallet_id,
            data=data,
            entity_secret_ciphertext=ciphertext,
            memo=memo,
        )
        return await self._transport.request(
            "POST",
            "developer/sign/typedData",
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=SignatureResponse,
        )

    async def sign_transaction(
        self,
        wallet_id: str,
        entity_secret: str,
        *,
        raw_transaction: Optional[str] = None,
        transaction: Optional[str] = None,
        memo: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> SignTransactionResponse:
        """POST /developer/sign/transaction -- Sign a transaction without broadcasting.

        Exactly one of ``raw_transaction`` (serialized) or ``transaction``
        (JSON object string) must be given.
        """
        require(wallet_id, "wallet_id", "Wallet ID")
        require_entity_secret(entity_secret)
        if not raw_transaction and not transaction:
            raise CircleArgumentError(
                "Either rawTransaction or transaction must be provided.", "raw_transaction"
            )
        if raw_transaction and transaction:
            raise CircleArgumentError(
                "Cannot specify both rawTransaction and transaction.", "raw_transaction"
            )

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = SignTransactionRequest(
            wallet_id=wallet_id,
            entity_secret_ciphertext=ciphertext,
            raw_transaction=raw_transaction,
            transaction=transaction,
            memo=memo,
        )
        return await self._transport.request(
            "POST",
            "developer/sign/transaction",
            json_body=request.model_dump(exclude_none=True, by_alias=True),
            request_id=request_id,
            model=SignTransactionResponse,
        )

    async def sign_delegate_action(
        self,
        wallet_id: str,
        unsigned_delegate_action: str,
        entity_secret: str,
        *,
        request_id: Optional[str] = None,
    ) -> SignDelegateActionResponse:
        """POST /developer/sign/delegateAction -- Sign a NEAR delegate action."""
        require(wallet_id, "wallet_id", "Wallet ID")
        require(unsigned_delegate_action, "unsigned_delegate_action", "Unsigned delegate action")
        require_entity_secret(entity_secret)

        ciphertext = await self._entity_secrets.generate_ciphertext(
            entity_secret, request_id=request_id
        )
        request = SignDelegateActionRequest(
            wallet_id=wallet_id,
            unsigned_delegate_action=unsigned_delegate_action,
            entity_secret_ciphertext=ciphertext,
        )
        return await self._transport.request(
            "POST",
            "developer/sign/delegateAction",
            json_body=request.model_dump(by_alias=True),
            request_id=request_id,
            model=SignDelegateActionResponse,
        )
