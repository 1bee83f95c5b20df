"""Subscribe to host channels and forward events to the recorder."""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from footprints.config.settings import Settings
from footprints.events import (
    UNOBSERVABLE_KINDS,
    EventKind,
    VaultFile,
    describe_payload,
)
from footprints.host.base import EventRef, EventSource, Host, Leaf
from footprints.log.recorder import EventRecorder


def _payload_file(payload: Any) -> Optional[VaultFile]:
    return getattr(payload, "file", None)


def _leaf_file(payload: Any) -> Optional[VaultFile]:
    leaf = getattr(payload, "leaf", None)
    return getattr(leaf, "file", None)


def _editor_file(payload: Any) -> Optional[VaultFile]:
    info = getattr(payload, "info", None)
    return getattr(info, "file", None)


def _no_file(payload: Any) -> Optional[VaultFile]:
    return None


@dataclass(frozen=True)
class Wiring:
    """How one event kind maps onto a host channel."""
    kind: EventKind
    channel: str  # "metadata_cache", "vault", "workspace" or "leaf"
    event: str
    subject: Callable[[Any], Optional[VaultFile]] = _payload_file
    requires_file: bool = False


WIRINGS: list[Wiring] = [
    Wiring(EventKind.METADATA_CHANGED, "metadata_cache", "changed"),
    Wiring(EventKind.METADATA_DELETED, "metadata_cache", "deleted"),
    Wiring(EventKind.METADATA_RESOLVE, "metadata_cache", "resolve"),
    Wiring(EventKind.METADATA_RESOLVED, "metadata_cache", "resolved", _no_file),
    Wiring(EventKind.VAULT_CREATE, "vault", "create"),
    Wiring(EventKind.VAULT_MODIFY, "vault", "modify"),
    Wiring(EventKind.VAULT_DELETE, "vault", "delete"),
    Wiring(EventKind.VAULT_RENAME, "vault", "rename"),
    Wiring(EventKind.WORKSPACE_QUICK_PREVIEW, "workspace", "quick-preview"),
    Wiring(EventKind.WORKSPACE_RESIZE, "workspace", "resize", _no_file),
    Wiring(EventKind.WORKSPACE_ACTIVE_LEAF_CHANGE, "workspace", "active-leaf-change", _leaf_file),
    Wiring(EventKind.WORKSPACE_FILE_OPEN, "workspace", "file-open"),
    Wiring(EventKind.WORKSPACE_LAYOUT_CHANGE, "workspace", "layout-change", _no_file),
    Wiring(EventKind.WORKSPACE_WINDOW_OPEN, "workspace", "window-open", _no_file),
    Wiring(EventKind.WORKSPACE_WINDOW_CLOSE, "workspace", "window-close", _no_file),
    Wiring(EventKind.WORKSPACE_CSS_CHANGE, "workspace", "css-change", _no_file),
    Wiring(EventKind.WORKSPACE_FILE_MENU, "workspace", "file-menu"),
    Wiring(EventKind.WORKSPACE_FILES_MENU, "workspace", "files-menu", _no_file),
    Wiring(EventKind.WORKSPACE_URL_MENU, "workspace", "url-menu", _no_file),
    Wiring(EventKind.WORKSPACE_EDITOR_MENU, "workspace", "editor-menu", _editor_file),
    Wiring(EventKind.WORKSPACE_EDITOR_CHANGE, "workspace", "editor-change", _editor_file),
    Wiring(EventKind.WORKSPACE_EDITOR_PASTE, "workspace", "editor-paste", _editor_file),
    Wiring(EventKind.WORKSPACE_EDITOR_DROP, "workspace", "editor-drop", _editor_file),
    Wiring(EventKind.WORKSPACE_QUIT, "workspace", "quit", _no_file),
    Wiring(EventKind.LEAF_PINNED_CHANGE, "leaf", "pinned-change"),
    Wiring(EventKind.LEAF_GROUP_CHANGE, "leaf", "group-change"),
    # Legacy kinds only log when a file is involved
    Wiring(EventKind.OPEN, "workspace", "file-open", requires_file=True),
    Wiring(EventKind.CLOSE, "workspace", "active-leaf-change", _leaf_file, requires_file=True),
    Wiring(EventKind.CREATE, "vault", "create", requires_file=True),
    Wiring(EventKind.SAVE, "vault", "modify", requires_file=True),
]


class ActivityWatcher:
    """Owns every host subscription made on behalf of the logger.

    ``start()`` subscribes each tracked kind once; ``stop()`` releases all
    handles and may be called at any time, any number of times.
    """

    def __init__(self, host: Host, settings: Settings, recorder: EventRecorder):
        self.host = host
        self.settings = settings
        self.recorder = recorder
        self._refs: list[tuple[EventSource, EventRef]] = []
        self._active_kinds: set[EventKind] = set()
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def active_kinds(self) -> set[EventKind]:
        return set(self._active_kinds)

    def subscription_count(self) -> int:
        return len(self._refs)

    def start(self) -> None:
        if self._active:
            return
        self._active = True

        for wiring in WIRINGS:
            if wiring.kind in UNOBSERVABLE_KINDS:
                continue
            if wiring.kind in self._active_kinds:
                continue
            if not self.settings.is_tracked(wiring.kind):
                continue

            if wiring.channel == "leaf":
                for leaf in self.host.leaves():
                    self._subscribe(leaf.events, wiring, leaf)
            else:
                self._subscribe(getattr(self.host, wiring.channel), wiring)
            self._active_kinds.add(wiring.kind)

    def stop(self) -> None:
        for source, ref in self._refs:
            source.offref(ref)
        self._refs = []
        self._active_kinds.clear()
        self._active = False

    def _subscribe(self, source: EventSource, wiring: Wiring, leaf: Optional[Leaf] = None) -> None:
        def callback(payload: Any) -> None:
            if leaf is not None:
                subject = leaf.file
            else:
                subject = wiring.subject(payload)
            if wiring.requires_file and subject is None:
                return
            details = describe_payload(payload, self.settings.parameters_for(wiring.kind))
            self.recorder.record(wiring.kind, subject, details)

        self._refs.append((source, source.on(wiring.event, callback)))
