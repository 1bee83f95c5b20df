"""Poll a vault directory and emit vault events for changed files."""

import asyncio
import os
from pathlib import Path
from typing import Optional

from footprints.events import FilePayload, VaultFile
from footprints.host.local import LocalHost


class VaultPoller:
    """Detect created, modified and deleted files by comparing mtimes.

    The first scan only records a baseline. Dot-directories (settings,
    app config) are skipped.
    """

    def __init__(self, host: LocalHost, interval: float = 1.0):
        self.host = host
        self.interval = interval
        self._snapshot: Optional[dict[str, float]] = None

    def scan(self) -> dict[str, float]:
        """Return vault path -> mtime for every file in the vault."""
        root = Path(self.host.root)
        found: dict[str, float] = {}
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            for name in sorted(filenames):
                if name.startswith("."):
                    continue
                full = Path(dirpath) / name
                try:
                    mtime = full.stat().st_mtime
                except OSError:
                    continue  # removed between listing and stat
                found[full.relative_to(root).as_posix()] = mtime
        return found

    def poll(self, current: Optional[dict[str, float]] = None) -> list[tuple[str, str]]:
        """Compare a scan with the last one and trigger events.

        Scans now unless ``current`` is given. Returns the (event, path) pairs emitted.
        """
        if current is None:
            current = self.scan()
        previous = self._snapshot
        self._snapshot = current
        if previous is None:
            return []

        emitted = []
        for path, mtime in current.items():
            if path not in previous:
                emitted.append(("create", path))
            elif mtime != previous[path]:
                emitted.append(("modify", path))
        for path in previous:
            if path not in current:
                emitted.append(("delete", path))

        for name, path in emitted:
            self.host.vault.trigger(name, FilePayload(file=VaultFile(path)))
        return emitted

    async def run(self, stop: asyncio.Event) -> None:
        """Poll until ``stop`` is set."""
        while not stop.is_set():
            self.poll(await asyncio.to_thread(self.scan))
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
