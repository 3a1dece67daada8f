"""CLI for orgtree: inspect the outline, TODO entries and diagnostics of Org files."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from orgtree.config import ParseOptions
from orgtree.core.settings.collector import parse_todo_value
from orgtree.core.tree.navigation import find_todos, iter_headlines
from orgtree.core.tree.writer import render_timestamp
from orgtree.logging_config import configure_logging
from orgtree.models.node import Document, Headline
from orgtree.parser import parse_document

app = typer.Typer(help="orgtree: parse Org files into outline trees.")

_TODO_HELP = "Default TODO sequence, e.g. 'TODO NEXT | DONE' (repeatable)"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load(path: Path, todo: list[str] | None = None) -> Document:
    """Read and parse an Org file, exiting with status 1 if it cannot be read."""
    if not path.is_file():
        logger.error("File not found: {}", path)
        raise typer.Exit(1)

    options = ParseOptions()
    if todo:
        try:
            sequences = tuple(parse_todo_value(value) for value in todo)
        except ValueError as e:
            logger.error("Invalid --todo value: {}", e)
            raise typer.Exit(1) from e
        options = ParseOptions(todo_sequences=sequences)

    return parse_document(path.read_text(encoding="utf-8"), options)


def _outline_line(headline: Headline) -> str:
    indent = "  " * (headline.level - 1)
    parts = []
    if headline.todo_keyword:
        parts.append(headline.todo_keyword)
    if headline.has_priority_cookie:
        parts.append(f"[#{headline.priority}]")
    parts.append(headline.title)
    line = f"{indent}- {' '.join(parts)}"
    if headline.effective_tags:
        line += "  :" + ":".join(headline.effective_tags) + ":"
    return line


@app.command()
def outline(
    path: Path = typer.Argument(..., help="Org file to parse"),
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Deepest headline level to show"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    todo: Annotated[list[str] | None, typer.Option("--todo", "-t", help=_TODO_HELP)] = None,
) -> None:
    """Print the headline tree of an Org file."""
    document = _load(path, todo)

    if output_json:
        typer.echo(json.dumps(asdict(document), indent=2, default=str))
        return

    for headline in iter_headlines(document):
        if max_depth is not None and headline.level > max_depth:
            continue
        typer.echo(_outline_line(headline))


@app.command()
def todos(
    path: Path = typer.Argument(..., help="Org file to parse"),
    done: Annotated[
        bool | None,
        typer.Option("--done/--open", help="Only done or only open entries"),
    ] = None,
    keyword: Annotated[
        str | None,
        typer.Option("--keyword", "-k", help="Only entries with this keyword"),
    ] = None,
    todo: Annotated[list[str] | None, typer.Option("--todo", "-t", help=_TODO_HELP)] = None,
) -> None:
    """List headlines that carry a TODO keyword."""
    document = _load(path, todo)
    entries = find_todos(document, done=done, keyword=keyword)

    typer.echo(f"{len(entries)} entries:\n")
    for h in entries:
        typer.echo(f"  {h.todo_keyword} [#{h.priority}] {h.title}")
        if h.planning is not None:
            if h.planning.scheduled is not None:
                typer.echo(f"    scheduled: {render_timestamp(h.planning.scheduled)}")
            if h.planning.deadline is not None:
                typer.echo(f"    deadline:  {render_timestamp(h.planning.deadline)}")
        typer.echo(f"    line {h.line_number}")


@app.command()
def check(
    path: Path = typer.Argument(..., help="Org file to parse"),
    todo: Annotated[list[str] | None, typer.Option("--todo", "-t", help=_TODO_HELP)] = None,
) -> None:
    """Report recoverable parse problems; exit 1 if there are any."""
    document = _load(path, todo)
    if not document.diagnostics:
        typer.echo("No problems found.")
        return

    typer.echo(f"{len(document.diagnostics)} problem(s):")
    for diagnostic in document.diagnostics:
        typer.echo(f"  {diagnostic}")
    raise typer.Exit(1)
