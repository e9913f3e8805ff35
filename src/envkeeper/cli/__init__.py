"""
CLI for envkeeper.

Provides command-line interface for discovering, inspecting and editing
.env files. Every command that touches a file scans its root first, so the
file must be part of that root's inventory.
"""

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from envkeeper.cli.ui import (
    render_diff,
    render_document,
    render_error,
    render_scan_result,
    render_success,
    render_warning,
)
from envkeeper.core.config import LoggingConfig
from envkeeper.core.env_parser import (
    Unknown,
    diff_kv,
    filter_kv_lines,
    find_duplicate_keys,
    lines_to_raw,
    remove_key,
    set_value,
    validate_assignment,
)
from envkeeper.core.errors import EnvKeeperError
from envkeeper.services import EnvDocument, ServicesContainer, WriteOptions, create_services

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="envkeeper",
    help="Discover, inspect and safely edit .env files",
    add_completion=False,
)


def configure_logging(config: LoggingConfig, verbose: bool = False) -> None:
    """Configure the root logger from LoggingConfig."""
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=config.format, force=True)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml or .json)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Discover, inspect and safely edit .env files."""
    try:
        container = create_services(config_path=config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    configure_logging(container.config.logging, verbose=verbose)
    ctx.obj = container


def _open_document(container: ServicesContainer, file: Path, root: Path) -> EnvDocument:
    container.env_service.scan(root)
    return container.env_service.read_document(file)


def _fail(error: EnvKeeperError) -> NoReturn:
    render_error(f"[{error.kind}] {error}", console)
    raise typer.Exit(1)


def _rewrite(
    container: ServicesContainer,
    file: Path,
    document: EnvDocument,
    new_lines: list,
    backup: Optional[bool],
) -> None:
    create_backup = backup if backup is not None else container.config.writer.create_backup
    result = container.env_service.write_document(
        file, lines_to_raw(new_lines), WriteOptions(create_backup=create_backup)
    )
    render_diff(
        diff_kv(document.lines, new_lines),
        console,
        mask=container.config.display.mask_values,
    )
    render_success(f"Saved {document.file.file_name}", console)
    if result.backup_path is not None:
        console.print(f"Backup: {result.backup_path.name}")


@app.command()
def scan(
    ctx: typer.Context,
    root: Path = typer.Argument(..., help="Directory to scan"),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Find .env files under a directory, grouped by folder."""
    container: ServicesContainer = ctx.obj
    try:
        result = container.env_service.scan(root)
    except EnvKeeperError as e:
        _fail(e)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return
    render_scan_result(result, console)


@app.command()
def show(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help=".env file to show"),
    root: Path = typer.Option(..., "--root", "-r", help="Directory the file was discovered in"),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", help="Only show assignments whose key contains this text"
    ),
    reveal: bool = typer.Option(False, "--reveal", help="Show values unmasked"),
    json_output: bool = typer.Option(False, "--json", help="Print the document as JSON"),
):
    """Show the classified lines of a .env file."""
    container: ServicesContainer = ctx.obj
    try:
        document = _open_document(container, file, root)
    except EnvKeeperError as e:
        _fail(e)

    if json_output:
        data = document.to_dict()
        if key is not None:
            data["lines"] = [line.to_dict() for line in filter_kv_lines(document.lines, key)]
        typer.echo(json.dumps(data, indent=2))
        return
    mask = container.config.display.mask_values and not reveal
    render_document(document.file.file_name, document.lines, console, mask=mask, key_filter=key)


@app.command("set")
def set_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help=".env file to edit"),
    key: str = typer.Argument(..., help="Variable name"),
    value: str = typer.Argument(..., help="New value, stored verbatim on one line"),
    root: Path = typer.Option(..., "--root", "-r", help="Directory the file was discovered in"),
    backup: Optional[bool] = typer.Option(
        None, "--backup/--no-backup", help="Keep a timestamped copy of the previous file"
    ),
):
    """Set a variable, updating it in place or adding it after the last assignment."""
    container: ServicesContainer = ctx.obj
    try:
        validate_assignment(key, value)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    try:
        document = _open_document(container, file, root)
        _rewrite(container, file, document, set_value(document.lines, key, value), backup)
    except EnvKeeperError as e:
        _fail(e)


@app.command()
def unset(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help=".env file to edit"),
    key: str = typer.Argument(..., help="Variable name"),
    root: Path = typer.Option(..., "--root", "-r", help="Directory the file was discovered in"),
    backup: Optional[bool] = typer.Option(
        None, "--backup/--no-backup", help="Keep a timestamped copy of the previous file"
    ),
):
    """Remove every assignment of a variable."""
    container: ServicesContainer = ctx.obj
    try:
        document = _open_document(container, file, root)
        new_lines = remove_key(document.lines, key)
        if len(new_lines) == len(document.lines):
            render_warning(f"{key} is not set in {document.file.file_name}", console)
            return
        _rewrite(container, file, document, new_lines, backup)
    except EnvKeeperError as e:
        _fail(e)


@app.command()
def check(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help=".env file to check"),
    root: Path = typer.Option(..., "--root", "-r", help="Directory the file was discovered in"),
):
    """Report duplicate keys and unparseable lines."""
    container: ServicesContainer = ctx.obj
    try:
        document = _open_document(container, file, root)
    except EnvKeeperError as e:
        _fail(e)

    problems = 0
    for key in find_duplicate_keys(document.lines):
        render_warning(f"Duplicate key: {key}", console)
        problems += 1
    for number, line in enumerate(document.lines, 1):
        if isinstance(line, Unknown):
            render_warning(f"Line {number} is not a comment or assignment: {line.raw}", console)
            problems += 1

    if problems:
        raise typer.Exit(1)
    render_success(f"{document.file.file_name}: no problems found", console)


if __name__ == "__main__":
    app()
