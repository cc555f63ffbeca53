"""CLI: Typer app wired to the exploration operations."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import typer
from rich import print as rprint
from rich.markup import escape

from repo_explorer.application import explore_many, run_operation
from repo_explorer.domain import (
    ExplorerError,
    FileInfoResult,
    FindFilesResult,
    GrepResult,
    ListDirectoryResult,
    NotFoundResult,
    ReadFileResult,
    TreeResult,
)

app = typer.Typer(help="repo-explorer: sandboxed, read-only exploration of a directory tree.")

# Exit code for a soft not-found result (the command ran, the target is absent).
EXIT_NOT_FOUND = 2

_ROOT_HELP = "Sandbox root; every path is resolved inside it."


def _root_option() -> Any:
    return typer.Option(".", "--root", "-r", envvar="EXPLORER_ROOT", help=_ROOT_HELP)


def _json_option() -> Any:
    return typer.Option(False, "--json", help="Print the raw result record as JSON.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _execute(
    root: str,
    operation: str,
    params: Dict[str, Any],
    as_json: bool,
    render: Callable[[Any], None],
) -> None:
    """Run one operation, print it, and map errors to exit codes."""
    try:
        record = run_operation(root, operation, params)
    except ExplorerError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    if as_json:
        typer.echo(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    elif isinstance(record, NotFoundResult):
        rprint(f"[yellow]{escape(record.message)}[/yellow]")
    else:
        render(record)

    if isinstance(record, NotFoundResult):
        raise typer.Exit(code=EXIT_NOT_FOUND)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def _render_listing(record: ListDirectoryResult) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"{record.path} ({len(record.entries)} items)", show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Type", style="dim")
    table.add_column("Size", justify="right")
    for e in record.entries:
        name = f"[bold blue]{escape(e.name)}/[/bold blue]" if e.type == "directory" else escape(e.name)
        table.add_row(name, e.type, e.size or "")
    Console().print(table)


def _render_file(record: ReadFileResult) -> None:
    for i, line in enumerate(record.lines):
        typer.echo(f"{record.line_offset + i + 1:>6}  {line}")
    rprint(
        f"[dim]{len(record.lines)} of {record.total_lines} lines, {record.size}[/dim]"
    )


def _render_grep(record: GrepResult) -> None:
    for file, matches in record.search.matches_by_file.items():
        rprint(f"[bold magenta]{escape(file)}[/bold magenta]")
        for m in matches:
            sep = "-" if m.is_context else ":"
            typer.echo(f"{m.line_number:>6}{sep} {m.content}")
    summary = (
        f"{record.search.total_matches} matches in {record.search.files_with_matches} files"
    )
    if record.search.truncated:
        summary += " (truncated)"
    rprint(f"[dim]{summary}[/dim]")


def _render_found(record: FindFilesResult) -> None:
    for f in record.files:
        typer.echo(f)
    rprint(f"[dim]{len(record.files)} files[/dim]")


def _render_info(record: FileInfoResult) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=escape(record.path), show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    kind = "directory" if record.is_directory else "file" if record.is_file else "other"
    if record.is_symbolic_link:
        kind += " (symlink)"
    rows = [
        ("Type", kind),
        ("Size", f"{record.size} ({record.size_bytes} bytes)"),
        ("Created", record.created),
        ("Modified", record.modified),
        ("Accessed", record.accessed),
        ("Mode", record.mode),
    ]
    for field_name, value in rows:
        table.add_row(field_name, value)
    Console().print(table)


def _render_tree(record: TreeResult) -> None:
    typer.echo(record.tree)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("ls")
def list_cmd(
    path: str = typer.Argument("", help="Directory relative to root (empty = root)."),
    root: str = _root_option(),
    as_json: bool = _json_option(),
) -> None:
    """List files and folders in a directory."""
    _execute(root, "listDirectory", {"path": path}, as_json, _render_listing)


@app.command("read")
def read_cmd(
    path: str = typer.Argument(..., help="File relative to root."),
    max_lines: int = typer.Option(0, "--max-lines", "-n", help="Maximum lines to return (0 = all)."),
    line_offset: int = typer.Option(0, "--offset", "-o", help="Start from this line (0-based)."),
    root: str = _root_option(),
    as_json: bool = _json_option(),
) -> None:
    """Read the contents of a file."""
    params = {"path": path, "maxLines": max_lines, "lineOffset": line_offset}
    _execute(root, "readFile", params, as_json, _render_file)


@app.command("grep")
def grep_cmd(
    pattern: str = typer.Argument(..., help="Regular expression to search for."),
    path: str = typer.Argument("", help="File or directory relative to root (empty = root)."),
    file_pattern: str = typer.Option("*", "--include", help="Glob restricting which file names are searched."),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="Case-insensitive matching."),
    context: int = typer.Option(0, "--context", "-C", help="Lines of context around each match."),
    root: str = _root_option(),
    as_json: bool = _json_option(),
) -> None:
    """Search file contents with a regular expression."""
    params = {
        "searchPattern": pattern,
        "path": path,
        "filePattern": file_pattern,
        "caseInsensitive": ignore_case,
        "contextLines": context,
    }
    _execute(root, "grep", params, as_json, _render_grep)


@app.command("find")
def find_cmd(
    name_pattern: str = typer.Argument("*", help="Glob for file names, e.g. '*.py'."),
    path: str = typer.Argument("", help="Directory relative to root (empty = root)."),
    max_results: Optional[int] = typer.Option(None, "--max-results", "-m", help="Stop after this many files."),
    root: str = _root_option(),
    as_json: bool = _json_option(),
) -> None:
    """Find files by name pattern."""
    params: Dict[str, Any] = {"namePattern": name_pattern, "path": path}
    if max_results is not None:
        params["maxResults"] = max_results
    _execute(root, "findFiles", params, as_json, _render_found)


@app.command("info")
def info_cmd(
    path: str = typer.Argument(..., help="File or directory relative to root."),
    root: str = _root_option(),
    as_json: bool = _json_option(),
) -> None:
    """Show metadata for a file or directory."""
    _execute(root, "fileInfo", {"path": path}, as_json, _render_info)


@app.command("tree")
def tree_cmd(
    path: str = typer.Argument("", help="Directory relative to root (empty = root)."),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", "-d", help="Maximum depth (clamped to 1-10, default 3)."),
    root: str = _root_option(),
    as_json: bool = _json_option(),
) -> None:
    """Print a directory tree."""
    params: Dict[str, Any] = {"path": path}
    if max_depth is not None:
        params["maxDepth"] = max_depth
    _execute(root, "tree", params, as_json, _render_tree)


@app.command("batch")
def batch_cmd(
    requests_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help='JSON list of {"rootPath", "operation", ...params} objects.'
    ),
    continue_on_fail: bool = typer.Option(
        False, "--continue-on-fail", help="Record failing requests as errors and keep going."
    ),
) -> None:
    """Run several requests from a JSON file and print the results as JSON."""
    try:
        requests = json.loads(requests_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        rprint(f"[red]Invalid JSON in {escape(str(requests_file))}: {escape(str(e))}[/red]")
        sys.exit(1)
    if not isinstance(requests, list):
        rprint("[red]Batch file must contain a JSON list of requests.[/red]")
        sys.exit(1)
    try:
        results = explore_many(requests, continue_on_fail=continue_on_fail)
    except ExplorerError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    typer.echo(json.dumps(results, indent=2, ensure_ascii=False))


@app.command()
def serve(host: str = "127.0.0.1", port: int = 8788, root: str = _root_option()) -> None:
    """Run the HTTP API (FastAPI + uvicorn), serving only ``--root``."""
    import uvicorn
    os.environ["EXPLORER_ROOT"] = root
    uvicorn.run("repo_explorer.interfaces.http_api:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    app()
