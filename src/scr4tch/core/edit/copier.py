"""Deep copies of block subtrees."""

from dataclasses import replace
from uuid import uuid4

from scr4tch.models.block import Block
from scr4tch.models.content import (
    AccordionData,
    BookmarkData,
    CodeBlockData,
    Column,
    ColumnData,
    FilePathData,
    ImageData,
    ListData,
    ListItem,
    TableCell,
    TableData,
    TextContent,
)


def deep_copy(source: Block) -> Block:
    """Clone a block and everything it owns, with fresh identities throughout.

    The copy is detached (no container) and its order index is 0; callers
    position it. Nothing mutable is shared with the source.
    """
    content = source.content
    new_content: object

    if isinstance(content, TextContent):
        # RichRun is immutable, so the run itself can be shared.
        new_content = TextContent(content.run)

    elif isinstance(content, ListData):
        new_content = ListData(
            list_type=content.list_type,
            title=content.title,
            items=[
                ListItem(order_index=item.order_index, text=item.text, is_checked=item.is_checked)
                for item in content.sorted_items()
            ],
        )

    elif isinstance(content, TableData):
        new_content = TableData(
            title=content.title,
            row_count=content.row_count,
            column_count=content.column_count,
            has_header_row=content.has_header_row,
            has_header_column=content.has_header_column,
            show_alternating_row_colors=content.show_alternating_row_colors,
            show_borders=content.show_borders,
            show_title=content.show_title,
            column_widths=list(content.column_widths),
            row_heights=list(content.row_heights),
            cells=[TableCell(row=c.row, column=c.column, content=c.content) for c in content.cells],
        )

    elif isinstance(content, AccordionData):
        accordion = AccordionData(
            heading=content.heading, level=content.level, is_expanded=content.is_expanded
        )
        for nested in content.blocks.blocks_sorted_by_order():
            accordion.blocks.append(deep_copy(nested))
        new_content = accordion

    elif isinstance(content, ColumnData):
        column_data = ColumnData()
        for col in content.sorted_columns():
            new_col = Column(order_index=col.order_index, width_ratio=col.width_ratio)
            for nested in col.blocks.blocks_sorted_by_order():
                new_col.blocks.append(deep_copy(nested))
            column_data.columns.append(new_col)
        new_content = column_data

    elif isinstance(content, ImageData | CodeBlockData | BookmarkData | FilePathData):
        new_content = replace(content, id=uuid4())

    else:  # pragma: no cover - the payload set is closed
        msg = f"Cannot copy payload {type(content).__name__}"
        raise TypeError(msg)

    return Block(source.type, new_content)  # type: ignore[arg-type]
