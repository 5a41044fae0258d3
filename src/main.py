"""Command-line entry point: resolve a token and print its audit report.

Usage:
    poetry run python -m src.main 0xContract [--pair 0xPair] [--lock-status] [--audit]
"""

import argparse
import asyncio
import sys

from loguru import logger

from config.settings import settings
from src.bot.formatters import RenderOptions, render_token_report
from src.parsers.exceptions import InvalidContractError, InvalidMarketDataError, ProviderError
from src.parsers.luckblock.client import LuckblockClient
from src.parsers.luckblock.models import AuditReport
from src.parsers.luckblock.watcher import AuditEventSink, AuditWatcher
from src.parsers.token_resolver import TokenResolver
from src.utils.logger import setup_logger


class LogSink(AuditEventSink):
    """Report audit progress through the logger and keep the failure message."""

    def __init__(self) -> None:
        self.error: str | None = None

    async def on_status(self, status: str) -> None:
        logger.info(f"[AUDIT] status: {status}")

    async def on_end(self, report: AuditReport) -> None:
        logger.info(f"[AUDIT] finished, {len(report.issues)} issues")

    async def on_error(self, message: str) -> None:
        logger.error(f"[AUDIT] {message}")
        self.error = message


async def run_audit(contract: str) -> tuple[AuditReport | None, str | None, str | None]:
    """Trigger the audit and wait for it. Returns (report, pdf_url, error message)."""
    client = LuckblockClient()
    sink = LogSink()
    try:
        try:
            await client.trigger_audit(contract)
        except ProviderError as e:
            await sink.on_error(f"❌ {e}")
            return None, None, sink.error
        watcher = AuditWatcher(
            client, contract, sink, interval_sec=settings.audit_poll_interval_sec
        )
        report = await watcher.start()
        pdf_url = client.pdf_url(contract) if report is not None else None
        return report, pdf_url, sink.error
    finally:
        await client.close()


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="ERC-20 token audit report")
    parser.add_argument("contract", help="Token contract address")
    parser.add_argument("--pair", default=None, help="Known pair address (fallback)")
    parser.add_argument("--lock-status", action="store_true", help="Show lock/burn banner")
    parser.add_argument("--audit", action="store_true", help="Run the AI audit and include it")
    args = parser.parse_args(argv)

    setup_logger(level=settings.log_level, log_dir=settings.log_dir)

    resolver = TokenResolver()
    try:
        stats = await resolver.resolve(args.contract, forced_pair_address=args.pair)
    except (InvalidContractError, InvalidMarketDataError) as e:
        logger.error(f"Cannot audit {args.contract}: {e}")
        return 1
    finally:
        await resolver.close()

    report = pdf_url = audit_error = None
    if args.audit:
        report, pdf_url, audit_error = await run_audit(args.contract)

    options = RenderOptions(
        show_lock_status=args.lock_status,
        show_audit_report=args.audit,
        audit_report=report,
        audit_pdf_url=pdf_url,
        audit_error=audit_error,
    )
    print(render_token_report(stats, options))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
