"""A single block of document content."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID, uuid4

from scr4tch.config import (
    DEFAULT_CODE_LANGUAGE,
    DEFAULT_COLUMN_RATIOS,
    DEFAULT_TABLE_COLUMNS,
    DEFAULT_TABLE_ROWS,
)
from scr4tch.core.tree.container import Container
from scr4tch.errors import InvariantViolation
from scr4tch.models.content import (
    AccordionData,
    BlockContent,
    BookmarkData,
    CodeBlockData,
    Column,
    ColumnData,
    FilePathData,
    HeadingLevel,
    ImageData,
    ListData,
    ListItem,
    ListType,
    TableData,
    TextContent,
)
from scr4tch.models.refs import ContainerRef
from scr4tch.models.rich_text import RichRun


class BlockType(StrEnum):
    TEXT = "text"
    QUOTE = "quote"
    TABLE = "table"
    ACCORDION = "accordion"
    COLUMNS = "columns"
    LIST = "list"
    IMAGE = "image"
    CODE = "code"
    BOOKMARK = "bookmark"
    FILE_PATH = "filePath"


PAYLOAD_TYPES: dict[BlockType, type] = {
    BlockType.TEXT: TextContent,
    BlockType.QUOTE: TextContent,
    BlockType.TABLE: TableData,
    BlockType.ACCORDION: AccordionData,
    BlockType.COLUMNS: ColumnData,
    BlockType.LIST: ListData,
    BlockType.IMAGE: ImageData,
    BlockType.CODE: CodeBlockData,
    BlockType.BOOKMARK: BookmarkData,
    BlockType.FILE_PATH: FilePathData,
}

_DISPLAY_NAMES: dict[BlockType, str] = {
    BlockType.TEXT: "Text Block",
    BlockType.QUOTE: "Quote",
    BlockType.TABLE: "Table",
    BlockType.ACCORDION: "Accordion",
    BlockType.COLUMNS: "Columns",
    BlockType.LIST: "List",
    BlockType.IMAGE: "Image",
    BlockType.CODE: "Code Block",
    BlockType.BOOKMARK: "Bookmark",
    BlockType.FILE_PATH: "File Link",
}


@dataclass(eq=False)
class Block:
    """One node of document content.

    ``container`` is ``None`` only while a block is detached (freshly created
    or copied, or mid-move). Equality is identity.
    """

    type: BlockType
    content: BlockContent
    order_index: int = 0
    container: ContainerRef | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        expected = PAYLOAD_TYPES[self.type]
        if not isinstance(self.content, expected):
            msg = (
                f"{self.type} block needs a {expected.__name__} payload, "
                f"got {type(self.content).__name__}"
            )
            raise InvariantViolation(msg)

    def __repr__(self) -> str:
        return f"Block({self.type}, order={self.order_index}, id={self.id})"

    # --- Factories ---

    @classmethod
    def text(cls, run: RichRun | str = "") -> "Block":
        return cls(BlockType.TEXT, TextContent(_as_run(run)))

    @classmethod
    def quote(cls, run: RichRun | str = "") -> "Block":
        return cls(BlockType.QUOTE, TextContent(_as_run(run)))

    @classmethod
    def table(cls, rows: int = DEFAULT_TABLE_ROWS, cols: int = DEFAULT_TABLE_COLUMNS) -> "Block":
        return cls(BlockType.TABLE, TableData(row_count=rows, column_count=cols))

    @classmethod
    def accordion(
        cls, heading: RichRun | str = "", level: HeadingLevel = HeadingLevel.H1
    ) -> "Block":
        """An accordion seeded with one empty text block."""
        data = AccordionData(heading=_as_run(heading), level=level)
        data.blocks.append(cls.text())
        return cls(BlockType.ACCORDION, data)

    @classmethod
    def columns(cls, ratios: Sequence[float] = DEFAULT_COLUMN_RATIOS) -> "Block":
        """A column block with one empty text block per column."""
        if not ratios:
            msg = "A column block needs at least one column"
            raise InvariantViolation(msg)
        data = ColumnData()
        for i, ratio in enumerate(ratios):
            column = Column(order_index=i, width_ratio=ratio)
            column.blocks.append(cls.text())
            data.columns.append(column)
        return cls(BlockType.COLUMNS, data)

    @classmethod
    def list_block(cls, list_type: ListType = ListType.BULLET, title: str | None = None) -> "Block":
        """A list with one empty item."""
        data = ListData(list_type=list_type, title=title, items=[ListItem(order_index=0)])
        return cls(BlockType.LIST, data)

    @classmethod
    def image(cls, url_string: str, **kwargs: object) -> "Block":
        return cls(BlockType.IMAGE, ImageData(url_string=url_string, **kwargs))  # type: ignore[arg-type]

    @classmethod
    def code(cls, code: str = "", language: str = DEFAULT_CODE_LANGUAGE) -> "Block":
        return cls(BlockType.CODE, CodeBlockData(code=code, language=language))

    @classmethod
    def bookmark(cls, url_string: str, **kwargs: object) -> "Block":
        return cls(BlockType.BOOKMARK, BookmarkData(url_string=url_string, **kwargs))  # type: ignore[arg-type]

    @classmethod
    def file_path(cls, path_string: str, **kwargs: object) -> "Block":
        return cls(BlockType.FILE_PATH, FilePathData(path_string=path_string, **kwargs))  # type: ignore[arg-type]

    # --- Queries ---

    @property
    def is_text_like(self) -> bool:
        return self.type in (BlockType.TEXT, BlockType.QUOTE)

    @property
    def run(self) -> RichRun:
        """The rich text of a text or quote block."""
        if not isinstance(self.content, TextContent):
            msg = f"{self.type} block has no rich text"
            raise TypeError(msg)
        return self.content.run

    @run.setter
    def run(self, value: RichRun) -> None:
        if not isinstance(self.content, TextContent):
            msg = f"{self.type} block has no rich text"
            raise TypeError(msg)
        self.content.run = value

    @property
    def plain_text(self) -> str:
        return self.run.plain_text if self.is_text_like else ""

    def is_empty_text(self) -> bool:
        """True for a text block (not a quote) holding only whitespace."""
        return self.type is BlockType.TEXT and self.run.is_blank()

    @property
    def display_name(self) -> str:
        if isinstance(self.content, ListData):
            return f"{self.content.list_type.value.capitalize()} List"
        return _DISPLAY_NAMES[self.type]

    def child_containers(self) -> list[Container]:
        """Containers owned directly by this block: an accordion body or each column."""
        if isinstance(self.content, AccordionData):
            return [self.content.blocks]
        if isinstance(self.content, ColumnData):
            return [c.blocks for c in self.content.sorted_columns()]
        return []


def _as_run(run: RichRun | str) -> RichRun:
    return RichRun.plain(run) if isinstance(run, str) else run
