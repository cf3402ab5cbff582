import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - "
    "<level>{message}</level>"
)


def setup_logger(
    *,
    level: str = "INFO",
    json_logs: bool = False,
    log_dir: str | Path | None = "logs",
) -> None:
    """Replace loguru's default sink with the console and a per-day DEBUG file.

    The file keeps every per-pair balance/resolution line so a fallback from
    the backend to the factory can be traced afterwards. ``log_dir=None``
    disables the file sink.
    """
    logger.remove()
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=level.upper(),
        colorize=not json_logs,
        serialize=json_logs,
    )

    if log_dir is None:
        return

    logger.add(
        Path(log_dir) / "lp_radar_{time:YYYY-MM-DD}.log",
        rotation="1 day",
        retention="7 days",
        level="DEBUG",
        serialize=json_logs,
    )
