"""Turn host notifications into log writes."""

import asyncio
from datetime import datetime
from typing import Callable, Optional, Union

from footprints.config.settings import Settings
from footprints.events import (
    SYSTEM_SUBJECT,
    ActivityRecord,
    EventKind,
    VaultFile,
    format_timestamp,
    utc_now,
)
from footprints.log.paths import resolve_log_path
from footprints.log.writer import LogWriter
from footprints.output.formatter import format_record


class EventRecorder:
    """Build an activity record per event and hand it to the writer.

    Settings are read on every call, so changes made through the settings
    panel apply to the next event. Writes to the log file itself are never
    recorded.
    """

    def __init__(
        self,
        settings: Settings,
        writer: LogWriter,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings
        self.writer = writer
        self.clock = clock or utc_now
        self._pending: set[asyncio.Task] = set()

    def current_log_path(self, now: Optional[datetime] = None) -> str:
        return resolve_log_path(self.settings, now or self.clock())

    def record(
        self,
        kind: Union[EventKind, str],
        file: Optional[VaultFile] = None,
        details: Optional[str] = None,
    ) -> None:
        now = self.clock()
        log_path = self.current_log_path(now)
        if file is not None and file.path == log_path:
            return

        entry = ActivityRecord(
            ts=format_timestamp(now),
            event=str(kind),
            file=file.path if file is not None else SYSTEM_SUBJECT,
            details=details,
        )
        line = format_record(entry, self.settings)
        self._dispatch(self.writer.append(log_path, line))

    def _dispatch(self, write) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(write)
            return
        task = loop.create_task(write)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @property
    def pending(self) -> int:
        """Number of writes scheduled but not yet finished."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every scheduled write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
