"""
CLI formatting functions for human-readable output.

This module handles presentation formatting for the CLI:
- JSON and YAML dumps
- Rich tables for lists of rows
"""
import json
from typing import Any, Dict, List

import yaml
from rich.console import Console
from rich.table import Table


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    else:
        return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, dict) and "capabilities" in data:
        return format_rows_table(data["capabilities"], title="Capabilities")
    elif isinstance(data, dict) and "registrations" in data:
        return format_rows_table(data["registrations"], title=data.get("capability", "Registrations"))
    elif isinstance(data, dict) and "parts" in data:
        rows = [{"role": role, **part} for role, part in data["parts"].items()]
        return format_rows_table(rows, title=data.get("composite", "Composite"))
    else:
        # Fallback to JSON for unknown data structures
        return json.dumps(data, indent=2, default=str)


def format_rows_table(rows: List[Dict[str, Any]], title: str = "") -> str:
    """Render a list of row dictionaries as a table with one column per key."""
    if not rows:
        return "No entries found."

    columns: List[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)

    table = Table(title=title or None, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column.replace("_", " ").title())

    for row in rows:
        table.add_row(*[_cell(row.get(column, "")) for column in columns])

    console = Console(width=160, color_system=None)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def _cell(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    return str(value)
