"""Append formatted lines to the log file."""

import sys
from typing import Callable, Optional

from footprints.host.base import VaultStorage
from footprints.log.paths import parent_dir


def _warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


class LogWriter:
    """Best-effort sink: a failed write is reported and dropped, never raised."""

    def __init__(
        self,
        storage: VaultStorage,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        self.storage = storage
        self.on_error = on_error or _warn

    async def ensure_file(self, path: str) -> None:
        """Create the file (and its parent directories) if it is missing."""
        if await self.storage.exists(path):
            return
        directory = parent_dir(path)
        if directory != "/":
            await self.storage.create_directories(directory)
        try:
            await self.storage.create_file(path, "")
        except OSError:
            # another write may have created it meanwhile
            if not await self.storage.exists(path):
                raise

    async def append(self, path: str, line: str) -> bool:
        """Append one line. Returns False if the write was abandoned."""
        try:
            await self.ensure_file(path)
            await self.storage.append(path, line + "\n")
        except Exception as e:
            self.on_error(f"failed to write log {path}: {e}")
            return False
        return True
