"""Token resolution: token map first, contract metadata second."""

from loguru import logger

from src.lp.models import NetworkContext, Token, TokenMap
from src.lp.ports import LedgerClient


async def find_token(
    address: str,
    token_map: TokenMap,
    ledger: LedgerClient,
    ctx: NetworkContext,
) -> Token | None:
    """Resolve a token address. Never raises; None means unresolved."""
    if not address:
        return None

    token = token_map.get(address)
    if token is not None:
        return token

    try:
        token = await ledger.get_token_metadata(address, ctx)
    except Exception as e:
        logger.debug(f"[LP] Token metadata lookup failed for {address[:12]}: {e}")
        return None

    if token is None:
        logger.debug(f"[LP] Token {address[:12]} not in map and has no metadata")
    return token
