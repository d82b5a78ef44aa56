"""The document aggregate and its organizing metadata."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID, uuid4

from scr4tch.config import DEFAULT_CODE_LANGUAGE, DEFAULT_TAG_COLOR
from scr4tch.core.tree.container import Container
from scr4tch.models.block import Block
from scr4tch.models.refs import ROOT


class NoteStatus(StrEnum):
    SAVED = "saved"
    TEMP = "temp"
    DELETING_SOON = "Deleting Soon"
    DELETED = "deleted"


@dataclass(frozen=True)
class Category:
    name: str
    hex_color: str


@dataclass(frozen=True)
class Tag:
    name: str
    hex_color: str = DEFAULT_TAG_COLOR


@dataclass(eq=False)
class Document:
    """A note: a title over an ordered tree of blocks."""

    title: str = ""
    id: UUID = field(default_factory=uuid4)
    created_on: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    updated_on: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    status: NoteStatus = NoteStatus.SAVED
    moved_to_deleted_on: datetime | None = None
    category: Category | None = None
    tags: list[Tag] = field(default_factory=list)
    is_pinned: bool = False
    last_used_code_language: str = DEFAULT_CODE_LANGUAGE
    blocks: Container = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.blocks = Container(ROOT)

    @classmethod
    def new(cls, title: str = "", *, status: NoteStatus = NoteStatus.SAVED) -> "Document":
        """A fresh document holding one empty text block."""
        doc = cls(title=title, status=status)
        doc.blocks.append(Block.text())
        return doc

    def touch(self, now: datetime | None = None) -> None:
        self.updated_on = now or datetime.now(tz=UTC)

    def add_tag(self, tag: Tag) -> None:
        if all(t.name != tag.name for t in self.tags):
            self.tags.append(tag)

    def remove_tag(self, name: str) -> None:
        self.tags = [t for t in self.tags if t.name != name]
