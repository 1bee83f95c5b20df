"""Filesystem-backed host for running the logger outside the app."""

import asyncio
import os
import sys
import tempfile
from pathlib import Path

import yaml

from footprints.host.base import (
    EventEmitter,
    Host,
    Leaf,
    SettingsPersistence,
    StorageError,
    VaultStorage,
)
from footprints.log.paths import normalize_path


SETTINGS_DIR = ".footprints"
SETTINGS_FILE = "settings.yaml"


class LocalVaultStorage(VaultStorage):
    """Vault storage rooted at a directory on disk."""

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def resolve(self, path: str) -> Path:
        """Map a vault path to a filesystem path inside the root."""
        rel = normalize_path(path)
        if rel == "/":
            return self.root
        target = (self.root / rel).resolve()
        if target != self.root and self.root not in target.parents:
            raise StorageError(f"path escapes vault: {path}")
        return target

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self.resolve(path).exists)

    async def create_directories(self, path: str) -> None:
        target = self.resolve(path)
        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)

    async def create_file(self, path: str, contents: str = "") -> None:
        target = self.resolve(path)

        def _create() -> None:
            with open(target, "x", encoding="utf-8") as f:
                f.write(contents)

        try:
            await asyncio.to_thread(_create)
        except FileExistsError as e:
            raise StorageError(f"file already exists: {path}") from e

    async def append(self, path: str, text: str) -> None:
        target = self.resolve(path)

        def _append() -> None:
            with open(target, "a", encoding="utf-8") as f:
                f.write(text)

        await asyncio.to_thread(_append)


class YamlSettingsFile(SettingsPersistence):
    """Plugin settings stored as YAML, written atomically."""

    def __init__(self, path: str):
        self.path = Path(path)

    @classmethod
    def for_vault(cls, vault_dir: str) -> "YamlSettingsFile":
        return cls(str(Path(vault_dir) / SETTINGS_DIR / SETTINGS_FILE))

    def _read(self) -> dict:
        """Returns an empty mapping on missing or corrupted files."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            print(
                f"Warning: corrupted {self.path}, using defaults: {e}",
                file=sys.stderr,
            )
            return {}
        if not isinstance(data, dict):
            print(
                f"Warning: {self.path} does not hold a mapping, using defaults",
                file=sys.stderr,
            )
            return {}
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent,
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w") as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    async def load_persisted(self) -> dict:
        return await asyncio.to_thread(self._read)

    async def save_persisted(self, data: dict) -> None:
        await asyncio.to_thread(self._write, data)


class LocalHost(Host):
    """Event emitters plus local storage for one vault directory."""

    def __init__(self, root: str):
        self.root = Path(root)
        self._vault = EventEmitter()
        self._metadata_cache = EventEmitter()
        self._workspace = EventEmitter()
        self._storage = LocalVaultStorage(root)
        self._leaves: list[Leaf] = []

    @property
    def vault(self) -> EventEmitter:
        return self._vault

    @property
    def metadata_cache(self) -> EventEmitter:
        return self._metadata_cache

    @property
    def workspace(self) -> EventEmitter:
        return self._workspace

    @property
    def storage(self) -> LocalVaultStorage:
        return self._storage

    def leaves(self) -> list[Leaf]:
        return list(self._leaves)

    def open_leaf(self, leaf: Leaf) -> Leaf:
        self._leaves.append(leaf)
        return leaf
