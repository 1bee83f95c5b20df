"""Event kinds, host payloads and the activity record."""

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional


SYSTEM_SUBJECT = "system"


class EventKind(str, Enum):
    """Every event the logger knows how to name."""

    # MetadataCache
    METADATA_CHANGED = "metadata-changed"
    METADATA_DELETED = "metadata-deleted"
    METADATA_RESOLVE = "metadata-resolve"
    METADATA_RESOLVED = "metadata-resolved"

    # Vault
    VAULT_CREATE = "vault-create"
    VAULT_MODIFY = "vault-modify"
    VAULT_DELETE = "vault-delete"
    VAULT_RENAME = "vault-rename"

    # Workspace
    WORKSPACE_QUICK_PREVIEW = "workspace-quick-preview"
    WORKSPACE_RESIZE = "workspace-resize"
    WORKSPACE_ACTIVE_LEAF_CHANGE = "workspace-active-leaf-change"
    WORKSPACE_FILE_OPEN = "workspace-file-open"
    WORKSPACE_LAYOUT_CHANGE = "workspace-layout-change"
    WORKSPACE_WINDOW_OPEN = "workspace-window-open"
    WORKSPACE_WINDOW_CLOSE = "workspace-window-close"
    WORKSPACE_CSS_CHANGE = "workspace-css-change"
    WORKSPACE_FILE_MENU = "workspace-file-menu"
    WORKSPACE_FILES_MENU = "workspace-files-menu"
    WORKSPACE_URL_MENU = "workspace-url-menu"
    WORKSPACE_EDITOR_MENU = "workspace-editor-menu"
    WORKSPACE_EDITOR_CHANGE = "workspace-editor-change"
    WORKSPACE_EDITOR_PASTE = "workspace-editor-paste"
    WORKSPACE_EDITOR_DROP = "workspace-editor-drop"
    WORKSPACE_QUIT = "workspace-quit"

    # WorkspaceLeaf
    LEAF_PINNED_CHANGE = "leaf-pinned-change"
    LEAF_GROUP_CHANGE = "leaf-group-change"

    # Publish
    PUBLISH_NAVIGATED = "publish-navigated"

    # Menu
    MENU_HIDE = "menu-hide"

    # Legacy names, kept so old logs and settings keep working
    OPEN = "open"
    CLOSE = "close"
    CREATE = "create"
    SAVE = "save"

    def __str__(self) -> str:
        return self.value


EVENT_GROUPS: dict[str, list[EventKind]] = {
    "metadata": [
        EventKind.METADATA_CHANGED,
        EventKind.METADATA_DELETED,
        EventKind.METADATA_RESOLVE,
        EventKind.METADATA_RESOLVED,
    ],
    "vault": [
        EventKind.VAULT_CREATE,
        EventKind.VAULT_MODIFY,
        EventKind.VAULT_DELETE,
        EventKind.VAULT_RENAME,
    ],
    "workspace": [
        EventKind.WORKSPACE_QUICK_PREVIEW,
        EventKind.WORKSPACE_RESIZE,
        EventKind.WORKSPACE_ACTIVE_LEAF_CHANGE,
        EventKind.WORKSPACE_FILE_OPEN,
        EventKind.WORKSPACE_LAYOUT_CHANGE,
        EventKind.WORKSPACE_WINDOW_OPEN,
        EventKind.WORKSPACE_WINDOW_CLOSE,
        EventKind.WORKSPACE_CSS_CHANGE,
        EventKind.WORKSPACE_FILE_MENU,
        EventKind.WORKSPACE_FILES_MENU,
        EventKind.WORKSPACE_URL_MENU,
        EventKind.WORKSPACE_EDITOR_MENU,
        EventKind.WORKSPACE_EDITOR_CHANGE,
        EventKind.WORKSPACE_EDITOR_PASTE,
        EventKind.WORKSPACE_EDITOR_DROP,
        EventKind.WORKSPACE_QUIT,
    ],
    "leaf": [
        EventKind.LEAF_PINNED_CHANGE,
        EventKind.LEAF_GROUP_CHANGE,
    ],
    "publish": [EventKind.PUBLISH_NAVIGATED],
    "menu": [EventKind.MENU_HIDE],
    "legacy": [
        EventKind.OPEN,
        EventKind.CLOSE,
        EventKind.CREATE,
        EventKind.SAVE,
    ],
}

# No host channel reports these.
UNOBSERVABLE_KINDS = frozenset({EventKind.PUBLISH_NAVIGATED, EventKind.MENU_HIDE})


def format_timestamp(moment: datetime) -> str:
    """Render a moment as UTC ISO-8601 with milliseconds, e.g. 2024-01-01T00:00:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ActivityRecord:
    """One logged event occurrence."""
    ts: str
    event: str
    file: str
    details: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"ts": self.ts, "event": self.event, "file": self.file}
        if self.details is not None:
            data["details"] = self.details
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ActivityRecord":
        return cls(
            ts=data["ts"],
            event=data["event"],
            file=data["file"],
            details=data.get("details"),
        )


# ---------------------------------------------------------------------------
# Host value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VaultFile:
    """A file inside the vault, addressed by its vault-relative path."""
    path: str

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lstrip(".")

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class EditorInfo:
    """What the host knows about the editor's current document."""
    file: Optional[VaultFile] = None


# ---------------------------------------------------------------------------
# Payloads: one dataclass per channel signature
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmptyPayload:
    pass


@dataclass(frozen=True)
class FilePayload:
    file: Optional[VaultFile] = None


@dataclass(frozen=True)
class RenamePayload:
    file: VaultFile
    old_path: str


@dataclass(frozen=True)
class MetadataChangedPayload:
    file: VaultFile
    data: str = ""
    cache: Any = None


@dataclass(frozen=True)
class MetadataDeletedPayload:
    file: VaultFile
    prev_cache: Any = None


@dataclass(frozen=True)
class QuickPreviewPayload:
    file: VaultFile
    data: str = ""


@dataclass(frozen=True)
class LeafPayload:
    leaf: Any = None


@dataclass(frozen=True)
class WindowPayload:
    win: Any = None
    window: Any = None


@dataclass(frozen=True)
class FileMenuPayload:
    menu: Any
    file: VaultFile
    source: str = ""
    leaf: Any = None


@dataclass(frozen=True)
class FilesMenuPayload:
    menu: Any
    files: list = field(default_factory=list)
    source: str = ""
    leaf: Any = None


@dataclass(frozen=True)
class UrlMenuPayload:
    menu: Any
    url: str = ""


@dataclass(frozen=True)
class EditorMenuPayload:
    menu: Any
    editor: Any
    info: EditorInfo = field(default_factory=EditorInfo)


@dataclass(frozen=True)
class EditorChangePayload:
    editor: Any
    info: EditorInfo = field(default_factory=EditorInfo)


@dataclass(frozen=True)
class EditorInputPayload:
    event: Any
    editor: Any
    info: EditorInfo = field(default_factory=EditorInfo)


@dataclass(frozen=True)
class QuitPayload:
    tasks: Any = None


@dataclass(frozen=True)
class PinnedPayload:
    pinned: bool


@dataclass(frozen=True)
class GroupPayload:
    group: Optional[str] = None


def _render_value(value: Any) -> str:
    if isinstance(value, VaultFile):
        return value.path
    if isinstance(value, (list, tuple)):
        return ", ".join(_render_value(v) for v in value)
    if isinstance(value, EditorInfo):
        return value.file.path if value.file else ""
    leaf_file = getattr(value, "file", None)
    if isinstance(leaf_file, VaultFile):
        return leaf_file.path
    return str(value)


def describe_payload(payload: Any, parameters: dict) -> Optional[str]:
    """Build the detail string for a payload.

    Every field except the subject ``file`` is considered. A field appears
    only when ``parameters[field].enabled`` is true; fields without a config
    are left out. ``name`` overrides the label and ``include_type`` appends
    the runtime type, e.g. ``oldPath: b.md`` or ``cache: {...} (dict)``.
    """
    if not dataclasses.is_dataclass(payload):
        return None

    parts = []
    for f in dataclasses.fields(payload):
        if f.name == "file":
            continue
        config = parameters.get(f.name)
        if config is None or not config.enabled:
            continue
        value = getattr(payload, f.name)
        label = config.name or f.name
        text = f"{label}: {_render_value(value)}"
        if config.include_type:
            text += f" ({type(value).__name__})"
        parts.append(text)

    return ", ".join(parts) if parts else None
