"""Config commands: view and edit a vault's logger settings."""

import asyncio
import json

import typer
from rich.console import Console

from footprints.config.panel import SettingsPanel
from footprints.events import EVENT_GROUPS, EventKind
from footprints.host.local import LocalHost, YamlSettingsFile
from footprints.plugin import FootprintsPlugin

console = Console()

config_app = typer.Typer(help="View and edit logger settings", no_args_is_help=True)

SETTING_KEYS = ("log-path", "derive-name-from-date", "format", "custom-format")


def _open_panel(vault: str) -> SettingsPanel:
    plugin = FootprintsPlugin(LocalHost(vault), YamlSettingsFile.for_vault(vault))
    asyncio.run(plugin.load_settings())
    return SettingsPanel(plugin)


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Expected a boolean, got '{value}'")


@config_app.command()
def show(
    vault: str = typer.Argument(..., help="Path to the vault directory"),
    format_output: str = typer.Option("text", "--format", "-f", help="Output format: text, json"),
) -> None:
    """Show the current settings."""

    panel = _open_panel(vault)

    if format_output == "json":
        console.print(json.dumps(panel.settings.to_dict(), indent=2))
        return

    panel.render(console)


@config_app.command(name="set")
def set_value(
    vault: str = typer.Argument(..., help="Path to the vault directory"),
    key: str = typer.Argument(..., help=f"One of: {', '.join(SETTING_KEYS)}"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change a general setting."""

    panel = _open_panel(vault)

    try:
        if key == "log-path":
            asyncio.run(panel.set_log_path(value))
        elif key == "derive-name-from-date":
            asyncio.run(panel.set_derive_name_from_date(_parse_bool(value)))
        elif key == "format":
            asyncio.run(panel.set_format(value))
        elif key == "custom-format":
            asyncio.run(panel.set_custom_format(value))
        else:
            console.print(f"[red]Unknown setting '{key}'[/red]")
            console.print(f"Available: {', '.join(SETTING_KEYS)}")
            raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {key} updated")


@config_app.command()
def track(
    vault: str = typer.Argument(..., help="Path to the vault directory"),
    kind: str = typer.Argument(..., help="Event kind, e.g. vault-create"),
    enabled: bool = typer.Option(True, "--on/--off", help="Track or ignore the event"),
) -> None:
    """Turn logging of one event kind on or off."""

    try:
        event_kind = EventKind(kind)
    except ValueError:
        console.print(f"[red]Unknown event kind '{kind}'[/red]")
        raise typer.Exit(1)

    panel = _open_panel(vault)
    asyncio.run(panel.set_tracked(event_kind, enabled))
    state = "on" if enabled else "off"
    console.print(f"[green]✓[/green] {kind} tracking {state}")


@config_app.command()
def group(
    vault: str = typer.Argument(..., help="Path to the vault directory"),
    name: str = typer.Argument(..., help=f"One of: {', '.join(EVENT_GROUPS)}"),
    enabled: bool = typer.Option(True, "--on/--off", help="Track or ignore the group"),
) -> None:
    """Turn logging of a whole event group on or off."""

    panel = _open_panel(vault)
    try:
        asyncio.run(panel.toggle_group(name, enabled))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    state = "on" if enabled else "off"
    console.print(f"[green]✓[/green] {name} events {state}")
