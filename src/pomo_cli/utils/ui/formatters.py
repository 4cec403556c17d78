"""Output formatters for CLI commands."""

import json
from typing import Any

import yaml
from rich.table import Table

from .console import get_console


def format_output(data: dict[str, Any], output_format: str = "table") -> None:
    """Print a (possibly nested) mapping as json, yaml or a key/value table."""
    console = get_console()
    if output_format == "json":
        console.print_json(json.dumps(data, default=str))
    elif output_format == "yaml":
        console.print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")
    else:
        console.print(format_single_item(data))


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    rows: list[tuple[str, Any]] = []
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, prefix=f"{full_key}."))
        else:
            rows.append((full_key, value))
    return rows


def format_single_item(item: dict[str, Any]) -> Table:
    """Format a mapping as dot-key/value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in _flatten(item):
        if isinstance(value, bool):
            formatted_value = "✓" if value else "✗"
        elif value is None:
            formatted_value = "-"
        else:
            formatted_value = str(value)
        table.add_row(key, formatted_value)

    return table


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console(stderr=True).print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")
