"""Public entry point: pick a pair source for the active network and aggregate.

Mainnet and testnet try the Soroswap backend first and fall back to the
ledger on any error. Other networks have no backend index and go straight to
the ledger. Ledger errors reach the caller.
"""

from __future__ import annotations

from loguru import logger

from config.settings import Settings, settings
from src.lp.aggregators import (
    TraversalMode,
    get_lp_results_from_backend_pairs,
    get_lp_results_from_chain_pairs,
)
from src.lp.models import LpTokensResult, NetworkContext, TokenMap
from src.lp.networks import NetworkKind, classify_network
from src.lp.ports import LedgerClient, PairIndex
from src.lp.soroswap.client import SoroswapApiClient


async def get_lp_tokens(
    ctx: NetworkContext,
    token_map: TokenMap,
    *,
    backend: PairIndex,
    ledger: LedgerClient,
    mode: TraversalMode = TraversalMode.SEQUENTIAL,
    max_concurrency: int = 8,
) -> LpTokensResult:
    """LP holdings of ``ctx.address`` on ``ctx.active_chain``.

    Returns NO_CONTEXT without any I/O when the wallet is not connected.
    """
    if ctx.active_chain is None or not ctx.address:
        return LpTokensResult.no_context()

    passphrase = ctx.active_chain.network_passphrase
    kind = classify_network(passphrase)
    if kind in (NetworkKind.MAINNET, NetworkKind.TESTNET):
        try:
            return await get_lp_results_from_backend_pairs(
                passphrase,
                ctx,
                token_map,
                backend=backend,
                ledger=ledger,
                mode=mode,
                max_concurrency=max_concurrency,
            )
        except Exception as e:
            logger.warning(
                f"[LP] Backend pairs failed on {kind.value} ({type(e).__name__}: {e}), "
                f"falling back to factory"
            )

    return await get_lp_results_from_chain_pairs(
        ctx,
        token_map,
        ledger=ledger,
        mode=mode,
        max_concurrency=max_concurrency,
    )


class LpTokensService:
    """Bundles the collaborators and traversal settings for repeated lookups."""

    def __init__(
        self,
        backend: PairIndex,
        ledger: LedgerClient,
        *,
        mode: TraversalMode = TraversalMode.SEQUENTIAL,
        max_concurrency: int = 8,
    ) -> None:
        self._backend = backend
        self._ledger = ledger
        self._mode = mode
        self._max_concurrency = max_concurrency

    @classmethod
    def from_settings(
        cls, backend: PairIndex, ledger: LedgerClient, cfg: Settings
    ) -> LpTokensService:
        return cls(
            backend,
            ledger,
            mode=TraversalMode(cfg.lp_traversal_mode),
            max_concurrency=cfg.lp_max_concurrency,
        )

    async def get_lp_tokens(self, ctx: NetworkContext, token_map: TokenMap) -> LpTokensResult:
        return await get_lp_tokens(
            ctx,
            token_map,
            backend=self._backend,
            ledger=self._ledger,
            mode=self._mode,
            max_concurrency=self._max_concurrency,
        )

    async def close(self) -> None:
        await self._backend.close()


def build_service(ledger: LedgerClient, app_settings: Settings | None = None) -> LpTokensService:
    """Wire a service with a Soroswap API client configured from settings."""
    cfg = app_settings or settings
    backend = SoroswapApiClient(
        base_url=cfg.soroswap_api_url,
        api_key=cfg.soroswap_api_key,
        timeout=cfg.soroswap_api_timeout_sec,
    )
    return LpTokensService.from_settings(backend, ledger, cfg)
