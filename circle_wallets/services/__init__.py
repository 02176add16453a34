"""Resource services exposed as attributes of :class:`CircleClient`."""

from circle_wallets.services.entity_secrets import EntitySecretService
from circle_wallets.services.tokens import TokenService
from circle_wallets.services.transactions import TransactionService
from circle_wallets.services.wallet_sets import WalletSetService
from circle_wallets.services.wallets import WalletService

__all__ = [
    "EntitySecretService",
    "TokenService",
    "TransactionService",
    "WalletSetService",
    "WalletService",
]
