"""Cancellable polling task that follows one audit job until it ends or fails.

Events go to a caller-supplied sink:
- on_status(status) whenever the reported status changes
- on_end(report) once, when the job has ended and the report is downloaded
- on_error(message) once, on a failed job or a transport fault
"""

import asyncio
from collections.abc import Awaitable, Callable

from loguru import logger

from src.parsers.exceptions import ProviderError
from src.parsers.luckblock.client import LuckblockClient
from src.parsers.luckblock.models import FAILED_STATUSES, AuditReport, AuditStatus

DEFAULT_ERROR = "Oops, something went wrong!"


class AuditEventSink:
    """Receiver for watcher events. Subclass and override what you need."""

    async def on_status(self, status: str) -> None:
        pass

    async def on_end(self, report: AuditReport) -> None:
        pass

    async def on_error(self, message: str) -> None:
        pass


class AuditWatcher:
    """Poll audit status at a fixed interval with an injectable sleep."""

    def __init__(
        self,
        client: LuckblockClient,
        token: str,
        sink: AuditEventSink,
        *,
        interval_sec: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._token = token
        self._sink = sink
        self._interval = interval_sec
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self._last_status: str | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self.running:
            return self._task
        self._task = asyncio.create_task(self.run(), name=f"audit_watch_{self._token[:10]}")
        return self._task

    async def cancel(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def run(self) -> AuditReport | None:
        """Poll until the job ends or fails. Returns the report on success."""
        while True:
            try:
                status = await self._client.get_audit_status(self._token)
            except ProviderError as e:
                logger.warning(f"[AUDIT] Status poll failed for {self._token[:12]}: {e}")
                await self._sink.on_error(f"❌ {e}")
                return None

            if status.status == AuditStatus.ENDED.value:
                try:
                    report = await self._client.get_audit_result(self._token)
                except ProviderError as e:
                    logger.warning(f"[AUDIT] Result download failed for {self._token[:12]}: {e}")
                    await self._sink.on_error(f"❌ {e}")
                    return None
                logger.info(f"[AUDIT] {self._token[:12]} ended with {len(report.issues)} issues")
                await self._sink.on_end(report)
                return report

            if status.status in FAILED_STATUSES:
                await self._sink.on_error(f"❌ {status.error or DEFAULT_ERROR}")
                return None

            if status.status != self._last_status:
                logger.debug(f"[AUDIT] {self._token[:12]} status -> {status.status}")
                self._last_status = status.status
                await self._sink.on_status(status.status)

            await self._sleep(self._interval)
