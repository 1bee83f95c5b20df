"""Watch command: run the logger against a local vault."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from footprints.host.local import LocalHost, YamlSettingsFile
from footprints.host.poller import VaultPoller
from footprints.plugin import FootprintsPlugin

console = Console()


def watch(
    vault: str = typer.Argument(..., help="Path to the vault directory"),
    interval: float = typer.Option(1.0, "--interval", "-i", help="Seconds between scans"),
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", help="Stop after this many seconds"
    ),
) -> None:
    """Log vault activity until interrupted."""

    if not Path(vault).is_dir():
        console.print(f"[red]Vault {vault} not found[/red]")
        raise typer.Exit(1)

    console.print(f"Watching {vault}... (Ctrl+C to stop)")

    try:
        asyncio.run(_watch(vault, interval, duration))
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped watching[/dim]")


async def _watch(vault: str, interval: float, duration: Optional[float]) -> None:
    host = LocalHost(vault)
    plugin = FootprintsPlugin(host, YamlSettingsFile.for_vault(vault))
    await plugin.on_load()

    recorder = plugin.recorder
    console.print(f"[dim]Log: {recorder.current_log_path()}[/dim]")

    stop = asyncio.Event()
    if duration is not None:
        asyncio.get_running_loop().call_later(duration, stop.set)

    poller = VaultPoller(host, interval=interval)
    try:
        await poller.run(stop)
    finally:
        plugin.on_unload()
        await recorder.drain()
