"""Entry point: LP holdings for one connected wallet.

The ledger client is supplied by the embedding application; the backend
client is built from settings.
"""

from loguru import logger

from config.settings import Settings, settings
from src.lp.models import LpTokensResult, NetworkContext, TokenMap
from src.lp.ports import LedgerClient
from src.lp.service import build_service
from src.lp.shares import format_decimal
from src.utils.logger import setup_logger


async def main(
    ledger: LedgerClient,
    ctx: NetworkContext,
    token_map: TokenMap,
    app_settings: Settings | None = None,
) -> LpTokensResult:
    cfg = app_settings or settings
    setup_logger(level=cfg.log_level, json_logs=cfg.json_logs, log_dir=cfg.log_dir)
    logger.info(f"Fetching LP holdings ({cfg.lp_traversal_mode} traversal)...")

    service = build_service(ledger, cfg)
    try:
        result = await service.get_lp_tokens(ctx, token_map)
    finally:
        await service.close()

    if not result.ok:
        logger.warning(f"[LP] No holdings: {result.status.value} (pair={result.failed_pair})")
        return result

    for h in result.holdings:
        logger.info(
            f"[LP] {h.token_0.code}/{h.token_1.code} {h.lp_percentage}% "
            f"-> {format_decimal(h.my_reserve0)} {h.token_0.code}, "
            f"{format_decimal(h.my_reserve1)} {h.token_1.code}"
        )
    logger.info(f"[LP] {len(result.holdings)} positions via {result.source.value}")
    return result
