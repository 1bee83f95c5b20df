"""Test fixtures and configuration."""

from datetime import datetime, timezone

import pytest

from footprints.config.settings import Settings
from footprints.events import ActivityRecord
from footprints.host.base import StorageError, VaultStorage


class MemoryStorage(VaultStorage):
    """Vault storage kept in a dict, recording every call."""

    def __init__(self, fail_on: set[str] | None = None):
        self.files: dict[str, str] = {}
        self.dirs: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self.fail_on = fail_on or set()

    def _maybe_fail(self, op: str, path: str) -> None:
        self.calls.append((op, path))
        if op in self.fail_on:
            raise StorageError(f"{op} denied for {path}")

    async def exists(self, path: str) -> bool:
        self._maybe_fail("exists", path)
        return path in self.files

    async def create_directories(self, path: str) -> None:
        self._maybe_fail("create_directories", path)
        self.dirs.add(path)

    async def create_file(self, path: str, contents: str = "") -> None:
        self._maybe_fail("create_file", path)
        self.files[path] = contents

    async def append(self, path: str, text: str) -> None:
        self._maybe_fail("append", path)
        self.files[path] = self.files.get(path, "") + text

    def appends(self) -> list[str]:
        return [path for op, path in self.calls if op == "append"]


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now


@pytest.fixture
def sample_record():
    return ActivityRecord(
        ts="2024-01-01T00:00:00.000Z",
        event="vault-create",
        file="Notes/a.md",
    )


@pytest.fixture
def plain_settings():
    return Settings(log_path="Logs", derive_name_from_date=False, format="plain")


@pytest.fixture
def make_storage():
    """Factory for storages that fail on selected operations."""
    return MemoryStorage
