"""Pydantic v2 models for pairs, tokens and LP holdings."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.lp.shares import to_decimal


class Token(BaseModel):
    """Token metadata as listed in the token map (or read from the contract)."""

    contract: str
    name: str = ""
    code: str = ""  # symbol
    decimals: int = 7
    icon: str | None = None
    issuer: str | None = None
    domain: str | None = None

    model_config = {"extra": "ignore"}


TokenMap = dict[str, Token]


class ChainInfo(BaseModel):
    network_passphrase: str
    name: str | None = None

    model_config = {"extra": "ignore"}


class NetworkContext(BaseModel):
    """Wallet/network state supplied by the caller. Either field may be absent."""

    active_chain: ChainInfo | None = None
    address: str | None = None


class BackendPair(BaseModel):
    """Pair as served by the indexing backend, with reserves and supply inline."""

    contractId: str
    token0: str
    token1: str
    totalShares: Decimal
    reserve0: Decimal
    reserve1: Decimal

    model_config = {"extra": "ignore"}

    @field_validator("totalShares", "reserve0", "reserve1", mode="before")
    @classmethod
    def _exact_decimal(cls, v: object) -> Decimal:
        # JSON numbers may arrive as float; go through str to avoid binary noise
        if isinstance(v, float):
            return Decimal(repr(v))
        try:
            return to_decimal(v)  # type: ignore[arg-type]
        except (ArithmeticError, TypeError) as e:
            raise ValueError(f"not a decimal amount: {v!r}") from e


class FactoryPair(BaseModel):
    """Pair enumerated from the factory contract."""

    pair_address: str
    token_a_address: str
    token_b_address: str


class PairReserves(BaseModel):
    reserve0: Decimal
    reserve1: Decimal


class PairSource(str, Enum):
    BACKEND = "backend"
    CHAIN = "chain"


class LpHolding(BaseModel):
    """User position in one pair. Built once by an aggregator, never mutated."""

    model_config = ConfigDict(frozen=True)

    pair_address: str
    token_0: Token
    token_1: Token
    balance: Decimal
    total_shares: Decimal
    lp_percentage: str
    reserve0: Decimal
    reserve1: Decimal
    my_reserve0: Decimal
    my_reserve1: Decimal
    status: Literal["Active"] = "Active"
    source: PairSource


class ResultStatus(str, Enum):
    OK = "ok"
    NO_CONTEXT = "no_context"  # no active network or no wallet address
    UNRESOLVED_TOKEN = "unresolved_token"  # a held pair's token could not be resolved
    MISSING_RESERVES = "missing_reserves"  # ledger returned no reserves for a held pair


class LpTokensResult(BaseModel):
    """Outcome of one aggregation.

    Only OK carries holdings. An OK result with no holdings means the user
    simply has no LP positions.
    """

    model_config = ConfigDict(frozen=True)

    status: ResultStatus
    holdings: tuple[LpHolding, ...] = Field(default_factory=tuple)
    source: PairSource | None = None
    failed_pair: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK

    @classmethod
    def no_context(cls) -> LpTokensResult:
        return cls(status=ResultStatus.NO_CONTEXT)
