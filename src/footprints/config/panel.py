"""Settings panel: the form model behind the plugin's settings tab."""

from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from footprints.config.settings import DEFAULT_CUSTOM_FORMAT, DEFAULT_LOG_PATH, LOG_FORMATS
from footprints.events import EVENT_GROUPS, EventKind


@dataclass(frozen=True)
class Section:
    """One group of event toggles."""
    group: str
    title: str
    description: str


SECTIONS = [
    Section("metadata", "MetadataCache Events", "Events related to file metadata indexing and caching"),
    Section("vault", "Vault Events", "Events related to file operations in the vault"),
    Section("workspace", "Workspace Events", "Events related to workspace interactions and UI changes"),
    Section("leaf", "WorkspaceLeaf Events", "Events related to workspace leaf (tab) changes"),
    Section("publish", "Publish Events", "Events related to publishing (not observable)"),
    Section("menu", "Menu Events", "Events related to menu interactions (not observable)"),
    Section("legacy", "Legacy Events", "open/close/create/save names kept for older logs"),
]

EVENT_DESCRIPTIONS: dict[EventKind, str] = {
    EventKind.METADATA_CHANGED: "A file has been indexed and its updated cache is available. Parameters: file, data, cache",
    EventKind.METADATA_DELETED: "A file has been deleted. Parameters: file, prevCache",
    EventKind.METADATA_RESOLVE: "A file's links have been resolved. Parameters: file",
    EventKind.METADATA_RESOLVED: "All files have been resolved. Parameters: none",
    EventKind.VAULT_CREATE: "A file is created. Parameters: file",
    EventKind.VAULT_MODIFY: "A file is modified. Parameters: file",
    EventKind.VAULT_DELETE: "A file is deleted. Parameters: file",
    EventKind.VAULT_RENAME: "A file is renamed. Parameters: file, oldPath",
    EventKind.WORKSPACE_QUICK_PREVIEW: "The active Markdown file is modified. Parameters: file, data",
    EventKind.WORKSPACE_RESIZE: "A workspace item is resized. Parameters: none",
    EventKind.WORKSPACE_ACTIVE_LEAF_CHANGE: "The active leaf changes. Parameters: leaf",
    EventKind.WORKSPACE_FILE_OPEN: "The active file changes. Parameters: file",
    EventKind.WORKSPACE_LAYOUT_CHANGE: "The workspace layout changes. Parameters: none",
    EventKind.WORKSPACE_WINDOW_OPEN: "A popout window is created. Parameters: win, window",
    EventKind.WORKSPACE_WINDOW_CLOSE: "A popout window is closed. Parameters: win, window",
    EventKind.WORKSPACE_CSS_CHANGE: "The app's CSS has changed. Parameters: none",
    EventKind.WORKSPACE_FILE_MENU: "Context menu opened on a file. Parameters: menu, file, source, leaf",
    EventKind.WORKSPACE_FILES_MENU: "Context menu opened on several files. Parameters: menu, files, source, leaf",
    EventKind.WORKSPACE_URL_MENU: "Context menu opened on an external URL. Parameters: menu, url",
    EventKind.WORKSPACE_EDITOR_MENU: "Context menu opened on an editor. Parameters: menu, editor, info",
    EventKind.WORKSPACE_EDITOR_CHANGE: "Changes to an editor have been applied. Parameters: editor, info",
    EventKind.WORKSPACE_EDITOR_PASTE: "The editor receives a paste event. Parameters: evt, editor, info",
    EventKind.WORKSPACE_EDITOR_DROP: "The editor receives a drop event. Parameters: evt, editor, info",
    EventKind.WORKSPACE_QUIT: "The app is about to quit. Parameters: tasks",
    EventKind.LEAF_PINNED_CHANGE: "A leaf is pinned or unpinned. Parameters: pinned",
    EventKind.LEAF_GROUP_CHANGE: "A leaf's group changes. Parameters: group",
    EventKind.PUBLISH_NAVIGATED: "Navigation occurs in Publish. Parameters: none",
    EventKind.MENU_HIDE: "A menu is hidden. Parameters: none",
    EventKind.OPEN: "A file is opened in the workspace",
    EventKind.CLOSE: "The active leaf moves away from a file",
    EventKind.CREATE: "A file is created in the vault",
    EventKind.SAVE: "A file is saved",
}


class SettingsPanel:
    """Mutates the plugin's settings one field at a time, saving after each.

    ``plugin`` needs a ``settings`` attribute and an async ``save_settings()``.
    Toggles take effect for the watcher on its next start.
    """

    def __init__(self, plugin):
        self.plugin = plugin

    @property
    def settings(self):
        return self.plugin.settings

    async def set_log_path(self, value: str) -> None:
        self.settings.log_path = value.strip() or DEFAULT_LOG_PATH
        await self.plugin.save_settings()

    async def set_derive_name_from_date(self, value: bool) -> None:
        self.settings.derive_name_from_date = bool(value)
        await self.plugin.save_settings()

    async def set_format(self, value: str) -> None:
        if value not in LOG_FORMATS:
            raise ValueError(
                f"Unknown log format '{value}'. Choose one of: {', '.join(LOG_FORMATS)}"
            )
        self.settings.format = value
        await self.plugin.save_settings()

    async def set_custom_format(self, value: str) -> None:
        self.settings.custom_format = value or DEFAULT_CUSTOM_FORMAT
        await self.plugin.save_settings()

    async def set_tracked(self, kind: EventKind, value: bool) -> None:
        self.settings.track[kind.value] = bool(value)
        await self.plugin.save_settings()

    def all_enabled(self, group: str) -> bool:
        return all(self.settings.is_tracked(kind) for kind in EVENT_GROUPS[group])

    async def toggle_group(self, group: str, value: bool) -> None:
        if group not in EVENT_GROUPS:
            raise ValueError(
                f"Unknown event group '{group}'. Choose one of: {', '.join(EVENT_GROUPS)}"
            )
        for kind in EVENT_GROUPS[group]:
            self.settings.track[kind.value] = bool(value)
        await self.plugin.save_settings()

    def render(self, console: Console) -> None:
        """Draw the panel: general settings, then one table per event group."""
        settings = self.settings

        general = Table(title="General Settings")
        general.add_column("Setting", style="cyan")
        general.add_column("Value")
        general.add_row("Log Path", settings.log_path)
        general.add_row("Derive File Name From Date", _on_off(settings.derive_name_from_date))
        general.add_row("Log Format", settings.format)
        general.add_row("Custom Format String", settings.custom_format)
        console.print(general)

        for section in SECTIONS:
            table = Table(title=section.title, caption=section.description)
            table.add_column("Event", style="cyan")
            table.add_column("Tracked")
            table.add_column("Description", style="dim")
            for kind in EVENT_GROUPS[section.group]:
                table.add_row(kind.value, _on_off(settings.is_tracked(kind)), EVENT_DESCRIPTIONS[kind])
            console.print(table)


def _on_off(value: bool) -> str:
    return "[green]on[/green]" if value else "[red]off[/red]"
