"""
logtree CLI - Main entry point
"""

import json
import platform
import sys
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from logtree import __version__
from logtree.core.config.settings import get_settings
from logtree.core.exceptions.custom_exceptions import LogTreeError
from logtree.rendering.human_renderer import render as render_human
from logtree.rendering.json_renderer import render_json
from logtree.value.model import from_json

# Initialize CLI app
app = typer.Typer(
    name="logtree",
    help="Render structured log values for humans and machines",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    human = "human"
    json = "json"


def _version_table() -> Table:
    settings = get_settings()
    table = Table(title="logtree Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Setting", style="yellow")

    table.add_row("logtree", __version__, f"LOG_FORMAT={settings.LOG_FORMAT}")
    table.add_row("Python", platform.python_version(), f"LOG_LEVEL={settings.LOG_LEVEL}")
    return table


def version_callback(value: bool) -> None:
    """Handle version callback"""
    if value:
        console.print(_version_table())
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show logtree version and exit",
    ),
) -> None:
    """
    logtree CLI - Render structured log values

    Run 'logtree --help' for available commands.
    """


@app.command()
def render(
    file: Optional[Path] = typer.Argument(
        None, help="JSON document to render, stdin when omitted"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.human, "--format", "-f", help="Output format"
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", "-i", help="Indent JSON output by this many spaces"
    ),
) -> None:
    """
    Render a JSON document as a logtree value.

    Object keys keep their order. The human format prints the YAML-like
    layout log fields are shown in.
    """
    try:
        text = file.read_text(encoding="utf-8") if file else sys.stdin.read()
    except OSError as e:
        err_console.print(f"[red]Cannot read {file}: {e}[/red]")
        raise typer.Exit(1)

    try:
        value = from_json(text)
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Invalid JSON: {e}[/red]")
        raise typer.Exit(1)

    try:
        if output_format == OutputFormat.json:
            output = render_json(value, indent=indent).decode("utf-8")
        else:
            output = render_human(value)
    except LogTreeError as e:
        err_console.print(f"[red]Render failed: {e.message}[/red]")
        raise typer.Exit(1)

    # Bypasses rich markup and wrapping.
    typer.echo(output)


@app.command()
def version() -> None:
    """Show logtree version information"""
    console.print(_version_table())


if __name__ == "__main__":
    app()
