"""Footprints CLI entry point."""

import typer
from rich.console import Console

app = typer.Typer(
    name="footprints",
    help="Vault activity logger",
    no_args_is_help=True,
    invoke_without_command=True,
)

console = Console()


@app.callback()
def main(
    show_version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit"
    ),
) -> None:
    """Footprints: log what happens in a note vault."""
    if show_version:
        from footprints import __version__

        console.print(f"footprints {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """Show Footprints version."""
    from footprints import __version__

    console.print(f"footprints {__version__}")


from footprints.cli.watch import watch
from footprints.cli.tail import tail
from footprints.cli.config import config_app

app.command()(watch)
app.command()(tail)
app.add_typer(config_app, name="config")


if __name__ == "__main__":
    app()
