"""Tail command: show the latest log entries."""

import asyncio

import typer
from rich.console import Console

from footprints.host.local import LocalVaultStorage, YamlSettingsFile
from footprints.config.store import ConfigurationStore
from footprints.log.paths import resolve_log_path
from footprints.events import utc_now

console = Console()


def tail(
    vault: str = typer.Argument(..., help="Path to the vault directory"),
    last_n: int = typer.Option(20, "--lines", "-n", help="Number of entries to show"),
) -> None:
    """Show the most recent entries of the current log file."""

    store = ConfigurationStore(YamlSettingsFile.for_vault(vault))
    settings = asyncio.run(store.load())

    log_path = resolve_log_path(settings, utc_now())
    target = LocalVaultStorage(vault).resolve(log_path)

    if not target.exists():
        console.print(f"[dim]No log entries yet ({log_path})[/dim]")
        return

    with open(target, encoding="utf-8") as f:
        lines = f.readlines()

    for line in lines[-last_n:]:
        console.print(line.rstrip("\n"), markup=False, highlight=False)
