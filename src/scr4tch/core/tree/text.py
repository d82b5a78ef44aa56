"""Plain-text projections of a document, for list previews and search."""

from scr4tch.core.tree.container import Container
from scr4tch.models.block import Block
from scr4tch.models.content import (
    AccordionData,
    BookmarkData,
    CodeBlockData,
    ColumnData,
    FilePathData,
    ListData,
    TableData,
    TextContent,
)
from scr4tch.models.document import Document


def preview_text(doc: Document) -> str:
    """Text of the root-level text and quote blocks, space separated."""
    return " ".join(b.plain_text for b in doc.blocks.blocks_sorted_by_order() if b.is_text_like)


def block_text(block: Block) -> str:
    """All searchable text of one block, recursing into nested bodies."""
    content = block.content
    parts: list[str] = []
    if isinstance(content, TextContent):
        parts.append(content.run.plain_text)
    elif isinstance(content, TableData):
        if content.title:
            parts.append(content.title)
        parts.extend(
            c.content for c in sorted(content.cells, key=lambda c: (c.row, c.column)) if c.content
        )
    elif isinstance(content, CodeBlockData):
        parts.append(content.code)
    elif isinstance(content, ListData):
        if content.title:
            parts.append(content.title)
        parts.extend(item.text.plain_text for item in content.sorted_items())
    elif isinstance(content, AccordionData):
        parts.append(content.heading.plain_text)
        parts.append(_container_text(content.blocks))
    elif isinstance(content, ColumnData):
        parts.extend(_container_text(col.blocks) for col in content.sorted_columns())
    elif isinstance(content, BookmarkData):
        parts.extend(p for p in (content.title, content.description_text, content.url_string) if p)
    elif isinstance(content, FilePathData):
        parts.extend(p for p in (content.path_string, content.display_name) if p)
    # Images carry no searchable text.
    return " ".join(parts)


def _container_text(container: Container) -> str:
    return " ".join(block_text(b) for b in container.blocks_sorted_by_order())


def searchable_text(doc: Document) -> str:
    """Title, category, tags and the text of every block, in reading order."""
    parts: list[str] = []
    if doc.title:
        parts.append(doc.title)
    if doc.category is not None:
        parts.append(doc.category.name)
    parts.extend(tag.name for tag in doc.tags)
    parts.append(_container_text(doc.blocks))
    return " ".join(parts)
