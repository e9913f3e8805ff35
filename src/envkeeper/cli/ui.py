"""
UI components module for the envkeeper CLI.

Provides styled terminal output using Rich for scan summaries, documents,
diffs and error rendering.
"""

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from envkeeper.core.env_parser import (
    Blank,
    Comment,
    EnvLine,
    Kv,
    KvChange,
    filter_kv_lines,
    mask_value,
)
from envkeeper.core.file_scanner import ScanResult


def _format_modified(modified_at: int) -> str:
    if not modified_at:
        return "-"
    return datetime.fromtimestamp(modified_at / 1000).strftime("%Y-%m-%d %H:%M")


def render_scan_result(result: ScanResult, console: Console) -> None:
    """
    Render a scan as one table row per discovered file.

    Args:
        result: ScanResult to display.
        console: Rich Console instance for output.
    """
    if not result.groups:
        console.print(f"[yellow]No .env files found under[/yellow] {escape(result.root_path)}")
        return

    table = Table(
        title=f"Env files in {escape(result.root_path)}",
        title_style="bold cyan",
        border_style="blue",
        show_header=True,
        header_style="bold white",
    )
    table.add_column("Project", style="green", no_wrap=True)
    table.add_column("File", style="white", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="dim")

    for group in result.groups:
        for index, env_file in enumerate(group.env_files):
            table.add_row(
                escape(group.name) if index == 0 else "",
                escape(env_file.file_name),
                str(env_file.size),
                _format_modified(env_file.modified_at),
            )

    console.print(table)
    console.print(
        f"Found [bold]{result.file_count}[/bold] file(s) in "
        f"[bold]{len(result.groups)}[/bold] project group(s)."
    )


def render_document(
    file_name: str,
    lines: Sequence[EnvLine],
    console: Console,
    mask: bool = True,
    key_filter: Optional[str] = None,
) -> None:
    """
    Render the classified lines of a document.

    Args:
        file_name: Name shown in the table title.
        lines: Lines to display.
        console: Rich Console instance for output.
        mask: Hide assignment values.
        key_filter: Show only assignments whose key contains this text.
    """
    shown = set(filter_kv_lines(lines, key_filter)) if key_filter is not None else None
    table = Table(
        title=escape(file_name),
        title_style="bold cyan",
        border_style="blue",
        show_header=True,
        header_style="bold white",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="magenta")
    table.add_column("Key", style="green")
    table.add_column("Value")

    for number, line in enumerate(lines, 1):
        if isinstance(line, Blank):
            continue
        if shown is not None and line not in shown:
            continue
        if isinstance(line, Kv):
            key = f"export {line.key}" if line.has_export else line.key
            value = mask_value(line.value) if mask else line.value
            table.add_row(str(number), line.kind, escape(key), Text(value))
        elif isinstance(line, Comment):
            table.add_row(str(number), line.kind, "", Text(line.raw, style="dim"))
        else:
            table.add_row(str(number), line.kind, "", Text(line.raw, style="yellow"))

    console.print(table)


def render_diff(changes: Sequence[KvChange], console: Console, mask: bool = True) -> None:
    """
    Render key-level changes, one line per key.

    Args:
        changes: Changes from diff_kv.
        console: Rich Console instance for output.
        mask: Hide values.
    """
    if not changes:
        console.print("[dim]No changes.[/dim]")
        return

    def show(value: str | None) -> str:
        if value is None:
            return ""
        return mask_value(value) if mask else value

    styles = {"added": ("+", "green"), "removed": ("-", "red"), "updated": ("~", "yellow")}
    for change in changes:
        marker, style = styles[change.change]
        text = Text(f"{marker} {change.key}", style=f"bold {style}")
        if change.change == "updated":
            text.append(f"  {show(change.before)} -> {show(change.after)}", style=style)
        elif change.change == "added":
            text.append(f"  {show(change.after)}", style=style)
        console.print(text)


def render_error(message: str, console: Console) -> None:
    """
    Render an error message in a visually distinct red panel.

    Args:
        message: Error message to display.
        console: Rich Console instance for output.
    """
    error_text = Text()
    error_text.append("Error: ", style="bold red")
    error_text.append(message, style="red")

    console.print(
        Panel(
            error_text,
            border_style="red",
            title="[bold red]Error[/bold red]",
            expand=False,
        )
    )


def render_success(message: str, console: Console) -> None:
    """Render a success message in green."""
    console.print(Text(message, style="green"))


def render_warning(message: str, console: Console) -> None:
    """Render a warning message in yellow."""
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")
