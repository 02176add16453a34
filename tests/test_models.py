"""Pydantic model validation tests for the Circle client."""

from datetime import datetime, timezone

from circle_wallets.models import (
    CreateTransferRequest,
    FeeEstimate,
    NftListOptions,
    RecoveryRecord,
    RegisterEntitySecretResult,
    Transaction,
    TransactionListOptions,
    WalletBalanceListOptions,
    WalletSetList,
    WalletWithBalances,
)

from tests.conftest import IDEMPOTENCY_KEY, TOKEN_ID, TX_ID, WALLET_ID, WALLET_SET_ID


class TestWalletModels:
    def test_wallet_with_balances_from_camel_case_json(self):
        data = {
            "id": WALLET_ID,
            "blockchain": "ETH-SEPOLIA",
            "walletSetId": WALLET_SET_ID,
            "accountType": "SCA",
            "tokenBalances": [
                {
                    "amount": "3.25",
                    "token": {"id": TOKEN_ID, "symbol": "USDC", "isNative": False},
                    "updateDate": "2024-03-01T00:00:00Z",
                }
            ],
        }
        model = WalletWithBalances.model_validate(data)
        assert model.wallet_set_id == WALLET_SET_ID
        assert model.account_type == "SCA"
        assert model.token_balances[0].token.symbol == "USDC"
        assert model.token_balances[0].update_date.year == 2024

    def test_wallet_set_list_defaults_empty(self):
        assert WalletSetList.model_validate({}).wallet_sets == []


class TestTransactionModels:
    def test_with_null_optional_fields(self):
        model = Transaction.model_validate({"id": TX_ID, "txHash": None, "state": "QUEUED"})
        assert model.tx_hash is None
        assert model.amounts == []
        assert model.transaction_screening_evaluation is None

    def test_with_screening_evaluation(self):
        data = {
            "id": TX_ID,
            "amountInUSD": "10.00",
            "estimatedFee": {"gasLimit": "21000", "maxFee": "5"},
            "transactionScreeningEvaluation": {
                "ruleName": "block-sanctioned",
                "actions": ["DENY"],
                "reasons": [{"source": "ADDRESS", "riskCategories": ["SANCTIONS"]}],
            },
        }
        model = Transaction.model_validate(data)
        assert model.amount_in_usd == "10.00"
        assert model.estimated_fee.gas_limit == "21000"
        assert model.transaction_screening_evaluation.reasons[0].risk_categories == ["SANCTIONS"]

    def test_fee_estimate(self):
        model = FeeEstimate.model_validate(
            {"low": {"networkFee": "0.0001"}, "preVerificationGas": "48000"}
        )
        assert model.low.network_fee == "0.0001"
        assert model.high is None
        assert model.pre_verification_gas == "48000"

    def test_transfer_request_serializes_camel_case(self):
        request = CreateTransferRequest(
            fee_level="LOW",
            wallet_id=WALLET_ID,
            entity_secret_ciphertext="ct",
            destination_address="0xdef",
            idempotency_key=IDEMPOTENCY_KEY,
            amounts=["1"],
        )
        assert request.model_dump(exclude_none=True, by_alias=True) == {
            "feeLevel": "LOW",
            "walletId": WALLET_ID,
            "entitySecretCiphertext": "ct",
            "destinationAddress": "0xdef",
            "idempotencyKey": IDEMPOTENCY_KEY,
            "amounts": ["1"],
        }


class TestOptionParams:
    def test_date_range_and_cursor(self):
        options = TransactionListOptions(
            from_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            page_size=20,
            tx_type="INBOUND",
        )
        params = options.to_params()
        assert params["from"] == "2024-01-01T00:00:00+00:00"
        assert params["to"] is None
        assert params["pageSize"] == 20
        assert params["txType"] == "INBOUND"

    def test_balance_threshold_key(self):
        params = WalletBalanceListOptions(amount_gte="5").to_params()
        assert params["amount__gte"] == "5"

    def test_nft_options_have_no_date_range(self):
        params = NftListOptions(name="Punk").to_params()
        assert "from" not in params
        assert "to" not in params
        assert params["name"] == "Punk"


class TestEntitySecretModels:
    def test_recovery_record_aliases(self):
        record = RecoveryRecord(
            entity_secret="ab" * 32,
            idempotency_key=IDEMPOTENCY_KEY,
            registration_date=datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc),
        )
        dumped = record.model_dump(mode="json", by_alias=True)
        assert list(dumped) == ["EntitySecret", "IdempotencyKey", "RegistrationDate", "Note"]
        assert dumped["RegistrationDate"].startswith("2024-05-06T07:08:09")
        assert dumped["Note"] == "Store this file securely and contact Circle Support for recovery."

    def test_register_result_by_name(self):
        result = RegisterEntitySecretResult(idempotency_key=IDEMPOTENCY_KEY)
        assert result.status is None
        assert result.recovery_file_path is None
