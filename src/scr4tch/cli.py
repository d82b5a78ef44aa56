"""CLI for inspecting SCR4TCH sample notes."""

from typing import Annotated

import typer
from loguru import logger

from scr4tch.core.tree.invariants import check_document
from scr4tch.core.tree.navigation import walk
from scr4tch.core.tree.text import searchable_text
from scr4tch.logging_config import configure_logging
from scr4tch.models.block import Block
from scr4tch.models.content import (
    AccordionData,
    BookmarkData,
    CodeBlockData,
    ColumnData,
    FilePathData,
    ImageData,
    ListData,
    TableData,
)
from scr4tch.models.document import Document
from scr4tch.samples import SAMPLES, shuffle_session
from scr4tch.store import MemoryStore

app = typer.Typer(help="SCR4TCH block tree: outline, check and search sample notes.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load(name: str) -> Document:
    factory = SAMPLES.get(name)
    if factory is None:
        logger.error("Unknown sample '{}'. Choose from: {}", name, ", ".join(SAMPLES))
        raise typer.Exit(1)
    return factory()


def describe(block: Block) -> str:
    """One-line summary of a block for the outline."""
    content = block.content
    if block.is_text_like:
        detail = block.plain_text[:60]
    elif isinstance(content, AccordionData):
        detail = f"{content.level.value} {content.heading.plain_text}"
    elif isinstance(content, ColumnData):
        detail = ":".join(f"{c.width_ratio:g}" for c in content.sorted_columns())
    elif isinstance(content, TableData):
        detail = f"{content.row_count}x{content.column_count}"
    elif isinstance(content, ListData):
        detail = f"{len(content.items)} items"
    elif isinstance(content, CodeBlockData):
        detail = content.language
    elif isinstance(content, BookmarkData | FilePathData):
        detail = content.display_title
    elif isinstance(content, ImageData):
        detail = content.url_string
    else:
        detail = ""
    return f"{block.display_name}: {detail}" if detail else block.display_name


@app.command()
def samples() -> None:
    """List the available sample notes."""
    for name, factory in SAMPLES.items():
        typer.echo(f"  {name:<10} {factory().title}")


@app.command()
def outline(
    name: str = typer.Argument("welcome", help="Sample note to outline"),
    show_ids: bool = typer.Option(False, "--ids", help="Show block ids"),
) -> None:
    """Print the block tree of a sample note as an indented outline."""
    doc = _load(name)
    typer.echo(doc.title)
    for block, depth in walk(doc.blocks):
        suffix = f"  [id={block.id}]" if show_ids else ""
        typer.echo(f"{'  ' * (depth + 1)}{block.order_index}. {describe(block)}{suffix}")


@app.command()
def check(
    sample: Annotated[
        str | None,
        typer.Option("--sample", "-s", help="Only check this sample note"),
    ] = None,
    shuffle: bool = typer.Option(True, help="Run a burst of edits before checking"),
) -> None:
    """Check the structural rules of sample notes, optionally after editing them."""
    names = [sample] if sample else list(SAMPLES)
    failed = False
    for name in names:
        doc = _load(name)
        store = MemoryStore()
        edits = shuffle_session(doc, store=store) if shuffle else 0
        store.commit()
        problems = check_document(doc)
        if problems:
            failed = True
            typer.echo(f"{name}: {len(problems)} problem(s) after {edits} edits")
            for problem in problems:
                typer.echo(f"    {problem}")
        else:
            typer.echo(f"{name}: ok after {edits} edits")
    if failed:
        raise typer.Exit(1)


@app.command()
def search(query: str = typer.Argument(..., help="Text to look for")) -> None:
    """Find sample notes whose text contains the query (case-insensitive)."""
    needle = query.casefold()
    hits = [n for n, factory in SAMPLES.items() if needle in searchable_text(factory()).casefold()]
    if not hits:
        typer.echo(f"No sample matches '{query}'.")
        raise typer.Exit(1)
    for name in hits:
        typer.echo(name)
