"""Collaborator interfaces: the indexing backend and the ledger (Soroban RPC).

Concrete ledger clients live outside this package. Ledger implementations
raise ``LedgerError`` on RPC or contract failures; backend implementations
raise ``BackendError``.
"""

from decimal import Decimal
from typing import Protocol

from src.lp.models import BackendPair, FactoryPair, NetworkContext, PairReserves, Token


class PairIndex(Protocol):
    async def fetch_all_pairs(self, passphrase: str) -> list[BackendPair]:
        ...

    async def close(self) -> None:
        ...


class LedgerClient(Protocol):
    async def get_pairs_from_factory(self, ctx: NetworkContext) -> list[FactoryPair]:
        """All pairs deployed by the factory, in factory index order."""
        ...

    async def token_balance(
        self, contract: str, user: str, ctx: NetworkContext
    ) -> Decimal:
        """Balance of ``user`` at token contract ``contract``; 0 if none."""
        ...

    async def get_reserves(self, pair: str, ctx: NetworkContext) -> PairReserves | None:
        ...

    async def get_total_shares(self, pair: str, ctx: NetworkContext) -> Decimal:
        ...

    async def get_token_metadata(self, contract: str, ctx: NetworkContext) -> Token | None:
        """name/symbol/decimals read from the token contract itself."""
        ...
