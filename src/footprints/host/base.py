"""What the plugin needs from its host application."""

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from footprints.events import VaultFile


class StorageError(OSError):
    """Raised by vault storage when an operation cannot be carried out."""


@dataclass(frozen=True)
class EventRef:
    """Opaque handle returned by a subscription."""
    id: int
    name: str


_ref_ids = itertools.count(1)


class EventSource(ABC):
    """A named host channel callers can subscribe to."""

    @abstractmethod
    def on(self, name: str, callback: Callable[[Any], None]) -> EventRef: ...

    @abstractmethod
    def offref(self, ref: EventRef) -> None: ...


class EventEmitter(EventSource):
    """In-process event source; callbacks run in registration order."""

    def __init__(self) -> None:
        self._handlers: dict[EventRef, Callable[[Any], None]] = {}

    def on(self, name: str, callback: Callable[[Any], None]) -> EventRef:
        ref = EventRef(id=next(_ref_ids), name=name)
        self._handlers[ref] = callback
        return ref

    def offref(self, ref: EventRef) -> None:
        self._handlers.pop(ref, None)

    def trigger(self, name: str, payload: Any) -> None:
        for ref, callback in list(self._handlers.items()):
            if ref.name == name and ref in self._handlers:
                callback(payload)

    def listener_count(self, name: Optional[str] = None) -> int:
        if name is None:
            return len(self._handlers)
        return sum(1 for ref in self._handlers if ref.name == name)


@dataclass(eq=False)
class Leaf:
    """A single pane/tab in the workspace, with its own event channel."""
    id: str
    file: Optional[VaultFile] = None
    events: EventEmitter = field(default_factory=EventEmitter)

    def __str__(self) -> str:
        return self.file.path if self.file else self.id


class VaultStorage(ABC):
    """Path-addressed file store. Every operation may fail."""

    @abstractmethod
    async def exists(self, path: str) -> bool: ...

    @abstractmethod
    async def create_directories(self, path: str) -> None: ...

    @abstractmethod
    async def create_file(self, path: str, contents: str = "") -> None: ...

    @abstractmethod
    async def append(self, path: str, text: str) -> None: ...


class SettingsPersistence(ABC):
    """Where the host keeps a plugin's settings blob."""

    @abstractmethod
    async def load_persisted(self) -> dict: ...

    @abstractmethod
    async def save_persisted(self, data: dict) -> None: ...


class Host(ABC):
    """The note-taking application as seen by the plugin."""

    @property
    @abstractmethod
    def vault(self) -> EventSource: ...

    @property
    @abstractmethod
    def metadata_cache(self) -> EventSource: ...

    @property
    @abstractmethod
    def workspace(self) -> EventSource: ...

    @property
    @abstractmethod
    def storage(self) -> VaultStorage: ...

    @abstractmethod
    def leaves(self) -> list[Leaf]: ...
