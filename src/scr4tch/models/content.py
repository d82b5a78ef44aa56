"""Per-type block payloads."""

import posixpath
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from urllib.parse import urlsplit
from uuid import UUID, uuid4

from scr4tch.config import (
    DEFAULT_CODE_LANGUAGE,
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_ROW_HEIGHT,
    DEFAULT_TABLE_COLUMNS,
    DEFAULT_TABLE_ROWS,
    DEFAULT_TABLE_TITLE,
    MIN_COLUMN_WIDTH,
    MIN_ROW_HEIGHT,
)
from scr4tch.core.tree.container import Container
from scr4tch.errors import InvariantViolation
from scr4tch.models.refs import AccordionRef, ColumnRef
from scr4tch.models.rich_text import RichRun


def _now() -> datetime:
    return datetime.now(tz=UTC)


class HeadingLevel(StrEnum):
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"


class ListType(StrEnum):
    BULLET = "bullet"
    NUMBERED = "numbered"
    CHECKBOX = "checkbox"


@dataclass
class TextContent:
    """Payload of text and quote blocks."""

    run: RichRun = field(default_factory=RichRun)


# --- Tables ---


@dataclass
class TableCell:
    row: int
    column: int
    content: str = ""
    id: UUID = field(default_factory=uuid4)


@dataclass(eq=False)
class TableData:
    """A row x column grid of plain-text cells plus display settings.

    Cells are sparse: a coordinate without a record reads as "".
    """

    title: str = DEFAULT_TABLE_TITLE
    row_count: int = DEFAULT_TABLE_ROWS
    column_count: int = DEFAULT_TABLE_COLUMNS
    has_header_row: bool = True
    has_header_column: bool = True
    show_alternating_row_colors: bool = True
    show_borders: bool = True
    show_title: bool = True
    column_widths: list[float] = field(default_factory=list)
    row_heights: list[float] = field(default_factory=list)
    cells: list[TableCell] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if not self.column_widths:
            self.column_widths = [DEFAULT_COLUMN_WIDTH] * self.column_count
        if not self.row_heights:
            self.row_heights = [DEFAULT_ROW_HEIGHT] * self.row_count

    def get_cell(self, row: int, column: int) -> TableCell | None:
        return next((c for c in self.cells if c.row == row and c.column == column), None)

    def cell_text(self, row: int, column: int) -> str:
        cell = self.get_cell(row, column)
        return cell.content if cell else ""

    def set_cell(self, row: int, column: int, content: str) -> None:
        cell = self.get_cell(row, column)
        if cell is None:
            self.cells.append(TableCell(row=row, column=column, content=content))
        else:
            cell.content = content
        self.updated_at = _now()

    def get_column_width(self, index: int) -> float:
        if index < len(self.column_widths):
            return self.column_widths[index]
        return DEFAULT_COLUMN_WIDTH

    def set_column_width(self, index: int, width: float) -> None:
        if index >= len(self.column_widths):
            self.column_widths.extend(
                [DEFAULT_COLUMN_WIDTH] * (index - len(self.column_widths) + 1)
            )
        self.column_widths[index] = max(MIN_COLUMN_WIDTH, width)
        self.updated_at = _now()

    def get_row_height(self, index: int) -> float:
        if index < len(self.row_heights):
            return self.row_heights[index]
        return DEFAULT_ROW_HEIGHT

    def set_row_height(self, index: int, height: float) -> None:
        if index >= len(self.row_heights):
            self.row_heights.extend([DEFAULT_ROW_HEIGHT] * (index - len(self.row_heights) + 1))
        self.row_heights[index] = max(MIN_ROW_HEIGHT, height)
        self.updated_at = _now()

    def insert_row(self, index: int) -> None:
        index = max(0, min(index, self.row_count))
        for cell in self.cells:
            if cell.row >= index:
                cell.row += 1
        self.row_heights.insert(index, DEFAULT_ROW_HEIGHT)
        self.row_count += 1
        self.updated_at = _now()

    def insert_column(self, index: int) -> None:
        index = max(0, min(index, self.column_count))
        for cell in self.cells:
            if cell.column >= index:
                cell.column += 1
        self.column_widths.insert(index, DEFAULT_COLUMN_WIDTH)
        self.column_count += 1
        self.updated_at = _now()

    def add_row(self) -> None:
        self.insert_row(self.row_count)

    def add_column(self) -> None:
        self.insert_column(self.column_count)

    def remove_row(self, index: int | None = None) -> None:
        """Remove a row (the last one by default). A table keeps at least one row.

        An index outside the grid is ignored.
        """
        target = self.row_count - 1 if index is None else index
        if self.row_count <= 1 or not 0 <= target < self.row_count:
            return
        self.cells = [c for c in self.cells if c.row != target]
        for cell in self.cells:
            if cell.row > target:
                cell.row -= 1
        if target < len(self.row_heights):
            del self.row_heights[target]
        self.row_count -= 1
        self.updated_at = _now()

    def remove_column(self, index: int | None = None) -> None:
        """Remove a column (the last one by default). A table keeps at least one column."""
        target = self.column_count - 1 if index is None else index
        if self.column_count <= 1 or not 0 <= target < self.column_count:
            return
        self.cells = [c for c in self.cells if c.column != target]
        for cell in self.cells:
            if cell.column > target:
                cell.column -= 1
        if target < len(self.column_widths):
            del self.column_widths[target]
        self.column_count -= 1
        self.updated_at = _now()

    def is_header_cell(self, row: int, column: int) -> bool:
        return (self.has_header_row and row == 0) or (self.has_header_column and column == 0)


# --- Containers of blocks ---


@dataclass(eq=False)
class AccordionData:
    """A collapsible section: a heading over a nested block list."""

    heading: RichRun = field(default_factory=RichRun)
    level: HeadingLevel = HeadingLevel.H1
    is_expanded: bool = True
    id: UUID = field(default_factory=uuid4)
    blocks: Container = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.blocks = Container(AccordionRef(self.id))


@dataclass(eq=False)
class Column:
    """One column of a column block, with its own nested block list.

    ``width_ratio`` is relative to the sibling columns and is not normalized.
    """

    order_index: int = 0
    width_ratio: float = 1.0
    id: UUID = field(default_factory=uuid4)
    blocks: Container = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width_ratio <= 0:
            msg = f"Column width ratio must be positive, got {self.width_ratio}"
            raise InvariantViolation(msg)
        self.blocks = Container(ColumnRef(self.id))


@dataclass(eq=False)
class ColumnData:
    columns: list[Column] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def sorted_columns(self) -> list[Column]:
        return sorted(self.columns, key=lambda c: c.order_index)

    def normalized_ratios(self) -> list[float]:
        """Width ratios scaled to sum to 1, in column order. Presentation only."""
        cols = self.sorted_columns()
        total = sum(c.width_ratio for c in cols)
        return [c.width_ratio / total for c in cols] if total else []


# --- Lists ---


@dataclass(eq=False)
class ListItem:
    order_index: int = 0
    text: RichRun = field(default_factory=RichRun)
    is_checked: bool = False
    id: UUID = field(default_factory=uuid4)


@dataclass(eq=False)
class ListData:
    list_type: ListType = ListType.BULLET
    title: str | None = None
    items: list[ListItem] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    def sorted_items(self) -> list[ListItem]:
        return sorted(self.items, key=lambda i: i.order_index)

    def reindex(self) -> None:
        for i, item in enumerate(self.sorted_items()):
            item.order_index = i

    def item_number(self, item: ListItem) -> int:
        """1-based position of ``item``, as shown by numbered lists."""
        for i, candidate in enumerate(self.sorted_items()):
            if candidate is item:
                return i + 1
        return 1

    def insert_item_after(self, item: ListItem, *, text: RichRun | None = None) -> ListItem:
        target = item.order_index + 1
        for other in self.items:
            if other.order_index >= target:
                other.order_index += 1
        new_item = ListItem(order_index=target, text=text or RichRun())
        self.items.append(new_item)
        return new_item

    def remove_item(self, item: ListItem) -> None:
        removed = item.order_index
        self.items = [i for i in self.items if i is not item]
        for other in self.items:
            if other.order_index > removed:
                other.order_index -= 1

    def previous_item(self, item: ListItem) -> ListItem | None:
        ordered = self.sorted_items()
        for i, candidate in enumerate(ordered):
            if candidate is item:
                return ordered[i - 1] if i > 0 else None
        return None


# --- Scalar payloads ---


@dataclass
class ImageData:
    url_string: str
    width: float | None = None
    height: float | None = None
    alt_text: str | None = None
    is_full_width: bool = False
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0
    id: UUID = field(default_factory=uuid4)


@dataclass
class CodeBlockData:
    code: str = ""
    language: str = DEFAULT_CODE_LANGUAGE
    show_line_numbers: bool = True
    theme: str = "default"
    id: UUID = field(default_factory=uuid4)


@dataclass
class BookmarkData:
    url_string: str
    title: str | None = None
    description_text: str | None = None
    favicon_url_string: str | None = None
    og_image_url_string: str | None = None
    fetched_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def display_title(self) -> str:
        """Title, falling back to the URL's host, then the raw URL."""
        if self.title:
            return self.title
        host = urlsplit(self.url_string).hostname
        return host or self.url_string


@dataclass
class FilePathData:
    path_string: str
    display_name: str | None = None
    file_size: int | None = None
    modification_date: datetime | None = None
    is_directory: bool = False
    fetched_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def display_title(self) -> str:
        if self.display_name:
            return self.display_name
        return posixpath.basename(self.path_string) or "Unknown File"

    @property
    def file_extension(self) -> str:
        return posixpath.splitext(self.path_string)[1].lstrip(".").lower()

    @property
    def parent_directory(self) -> str:
        return posixpath.dirname(self.path_string)


BlockContent = (
    TextContent
    | TableData
    | AccordionData
    | ColumnData
    | ListData
    | ImageData
    | CodeBlockData
    | BookmarkData
    | FilePathData
)
