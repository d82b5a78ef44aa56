"""Shared test fixtures."""

from collections.abc import Callable

import pytest

from scr4tch.core.edit.clipboard import Clipboard
from scr4tch.core.edit.editor import StructuralEditor
from scr4tch.models.block import Block
from scr4tch.models.document import Document
from scr4tch.models.rich_text import RichRun
from tests.unit.fakes import FakeStore


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def clipboard() -> Clipboard:
    return Clipboard()


@pytest.fixture
def make_doc() -> Callable[..., Document]:
    """Return a builder for a document whose root holds the given blocks, in order."""

    def _make(*blocks: Block, title: str = "Test note") -> Document:
        doc = Document(title=title)
        for block in blocks:
            doc.blocks.append(block)
        return doc

    return _make


@pytest.fixture
def make_editor(store: FakeStore, clipboard: Clipboard) -> Callable[[Document], StructuralEditor]:
    def _make(doc: Document) -> StructuralEditor:
        return StructuralEditor(doc, store=store, clipboard=clipboard)

    return _make


@pytest.fixture
def nested_doc() -> Document:
    """intro, accordion "Section" (inner, columns [left | right], after), outro."""
    accordion = Block.accordion("Section")
    body = accordion.content.blocks
    inner = body.first()
    assert inner is not None
    inner.run = RichRun.plain("inner")

    columns = Block.columns((1.0, 2.0))
    left_col, right_col = columns.content.sorted_columns()
    left = left_col.blocks.first()
    right = right_col.blocks.first()
    assert left is not None and right is not None
    left.run = RichRun.plain("left")
    right.run = RichRun.plain("right")
    body.append(columns)
    body.append(Block.text("after"))

    doc = Document(title="Nested")
    doc.blocks.append(Block.text("intro"))
    doc.blocks.append(accordion)
    doc.blocks.append(Block.text("outro"))
    return doc
