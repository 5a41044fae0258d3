import os
import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - "
    "<level>{message}</level>"
)


def setup_logger(*, json_logs: bool = False, level: str = "INFO", log_dir: str = "logs") -> Path:
    """Route audit logs to stderr and to a daily file under ``log_dir``.

    stdout is left for the rendered report. LOG_LEVEL overrides ``level`` for
    the console only; the file keeps DEBUG so provider retries and degraded
    sources of a past run can be read back. Returns the log directory.
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        sys.stderr,
        level=os.getenv("LOG_LEVEL", level).upper(),
        serialize=json_logs,
        **({} if json_logs else {"format": CONSOLE_FORMAT, "colorize": True}),
    )
    logger.add(
        directory / "audit_{time:YYYY-MM-DD}.log",
        level="DEBUG",
        rotation="20 MB",
        retention="7 days",
        compression="gz",
        serialize=json_logs,
    )
    return directory
