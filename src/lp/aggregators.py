"""LP holdings aggregation from the indexing backend or from the ledger.

Both aggregators walk their pair list, skip pairs where the user holds no LP
shares and turn the rest into ``LpHolding`` records. A held pair whose tokens
cannot be resolved (or, on chain, whose reserves are missing) abandons the
whole batch: the result carries the failure status and no holdings, never a
shorter list. Lookup errors propagate to the caller.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from decimal import Decimal
from enum import Enum
from typing import TypeVar

from loguru import logger

from src.lp.models import (
    BackendPair,
    FactoryPair,
    LpHolding,
    LpTokensResult,
    NetworkContext,
    PairSource,
    ResultStatus,
    Token,
    TokenMap,
)
from src.lp.ports import LedgerClient, PairIndex
from src.lp.shares import format_decimal, lp_percentage, my_reserve, to_decimal
from src.lp.tokens import find_token

P = TypeVar("P")


class TraversalMode(str, Enum):
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


class _BatchAborted(Exception):
    """Internal: a held pair cannot be reported, drop the whole batch."""

    def __init__(self, status: ResultStatus, pair_address: str) -> None:
        super().__init__(f"{status.value} at {pair_address}")
        self.status = status
        self.pair_address = pair_address


async def _collect(
    pairs: Sequence[P],
    build: Callable[[P], Awaitable[LpHolding | None]],
    mode: TraversalMode,
    max_concurrency: int,
) -> list[LpHolding]:
    """Run ``build`` over every pair and keep the non-None holdings in pair order.

    PARALLEL buffers everything and only returns once all pairs succeeded.
    The first failure cancels the remaining pairs. Real lookup errors win over
    batch aborts when several pairs fail together.
    """
    if mode is TraversalMode.SEQUENTIAL:
        holdings: list[LpHolding] = []
        for pair in pairs:
            holding = await build(pair)
            if holding is not None:
                holdings.append(holding)
        return holdings

    semaphore = asyncio.Semaphore(max(max_concurrency, 1))

    async def _bounded(pair: P) -> LpHolding | None:
        async with semaphore:
            return await build(pair)

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(_bounded(p)) for p in pairs]
    except ExceptionGroup as eg:
        errors = list(eg.exceptions)
        hard = [e for e in errors if not isinstance(e, _BatchAborted)]
        raise (hard or errors)[0] from None

    return [h for t in tasks if (h := t.result()) is not None]


def _build_holding(
    *,
    pair_address: str,
    token_0: Token,
    token_1: Token,
    balance: Decimal,
    total_shares: Decimal,
    reserve0: Decimal,
    reserve1: Decimal,
    source: PairSource,
) -> LpHolding:
    return LpHolding(
        pair_address=pair_address,
        token_0=token_0,
        token_1=token_1,
        balance=balance,
        total_shares=total_shares,
        lp_percentage=format_decimal(lp_percentage(balance, total_shares)),
        reserve0=reserve0,
        reserve1=reserve1,
        my_reserve0=my_reserve(balance, reserve0, total_shares),
        my_reserve1=my_reserve(balance, reserve1, total_shares),
        source=source,
    )


async def _resolve_pair_tokens(
    pair_address: str,
    address_0: str,
    address_1: str,
    token_map: TokenMap,
    ledger: LedgerClient,
    ctx: NetworkContext,
) -> tuple[Token, Token]:
    token_0 = await find_token(address_0, token_map, ledger, ctx)
    token_1 = await find_token(address_1, token_map, ledger, ctx)
    if token_0 is None or token_1 is None:
        missing = address_0 if token_0 is None else address_1
        logger.warning(
            f"[LP] Unresolved token {missing[:12]} in held pair {pair_address[:12]}, "
            f"dropping batch"
        )
        raise _BatchAborted(ResultStatus.UNRESOLVED_TOKEN, pair_address)
    return token_0, token_1


async def get_lp_results_from_backend_pairs(
    passphrase: str,
    ctx: NetworkContext,
    token_map: TokenMap,
    *,
    backend: PairIndex,
    ledger: LedgerClient,
    mode: TraversalMode = TraversalMode.SEQUENTIAL,
    max_concurrency: int = 8,
) -> LpTokensResult:
    """LP holdings using the backend pair list (inline reserves and total shares).

    Balances still come from the ledger. Errors from the backend or the ledger
    propagate.
    """
    if not ctx.address:
        return LpTokensResult.no_context()
    user = ctx.address

    pairs = await backend.fetch_all_pairs(passphrase)

    async def _build(pair: BackendPair) -> LpHolding | None:
        balance = to_decimal(await ledger.token_balance(pair.contractId, user, ctx))
        if balance == 0:
            return None

        token_0, token_1 = await _resolve_pair_tokens(
            pair.contractId, pair.token0, pair.token1, token_map, ledger, ctx
        )
        return _build_holding(
            pair_address=pair.contractId,
            token_0=token_0,
            token_1=token_1,
            balance=balance,
            total_shares=pair.totalShares,
            reserve0=pair.reserve0,
            reserve1=pair.reserve1,
            source=PairSource.BACKEND,
        )

    try:
        holdings = await _collect(pairs, _build, mode, max_concurrency)
    except _BatchAborted as e:
        return LpTokensResult(
            status=e.status, source=PairSource.BACKEND, failed_pair=e.pair_address
        )

    logger.info(f"[LP] {len(holdings)} positions across {len(pairs)} backend pairs")
    return LpTokensResult(
        status=ResultStatus.OK, holdings=tuple(holdings), source=PairSource.BACKEND
    )


async def get_lp_results_from_chain_pairs(
    ctx: NetworkContext,
    token_map: TokenMap,
    *,
    ledger: LedgerClient,
    mode: TraversalMode = TraversalMode.SEQUENTIAL,
    max_concurrency: int = 8,
) -> LpTokensResult:
    """LP holdings recomputed from the factory and per-pair ledger queries.

    Last-resort path: errors propagate to the caller.
    """
    if not ctx.address:
        return LpTokensResult.no_context()
    user = ctx.address

    pairs = await ledger.get_pairs_from_factory(ctx)

    async def _build(pair: FactoryPair) -> LpHolding | None:
        address = pair.pair_address
        balance = to_decimal(await ledger.token_balance(address, user, ctx))
        if balance == 0:
            return None

        token_0, token_1 = await _resolve_pair_tokens(
            address, pair.token_a_address, pair.token_b_address, token_map, ledger, ctx
        )
        total_shares = to_decimal(await ledger.get_total_shares(address, ctx))
        reserves = await ledger.get_reserves(address, ctx)
        if reserves is None:
            logger.warning(f"[LP] No reserves for held pair {address[:12]}, dropping batch")
            raise _BatchAborted(ResultStatus.MISSING_RESERVES, address)

        return _build_holding(
            pair_address=address,
            token_0=token_0,
            token_1=token_1,
            balance=balance,
            total_shares=total_shares,
            reserve0=reserves.reserve0,
            reserve1=reserves.reserve1,
            source=PairSource.CHAIN,
        )

    try:
        holdings = await _collect(pairs, _build, mode, max_concurrency)
    except _BatchAborted as e:
        return LpTokensResult(
            status=e.status, source=PairSource.CHAIN, failed_pair=e.pair_address
        )

    logger.info(f"[LP] {len(holdings)} positions across {len(pairs)} factory pairs")
    return LpTokensResult(
        status=ResultStatus.OK, holdings=tuple(holdings), source=PairSource.CHAIN
    )
