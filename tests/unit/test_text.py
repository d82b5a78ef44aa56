"""Tests for plain-text projections of a document."""

from scr4tch.core.tree.text import block_text, preview_text, searchable_text
from scr4tch.models.block import Block
from scr4tch.models.document import Document, Tag
from scr4tch.models.rich_text import RichRun
from scr4tch.samples import CATEGORIES


def test_preview_uses_root_text_and_quotes_only(nested_doc: Document) -> None:
    nested_doc.blocks.append(Block.quote("said"))
    assert preview_text(nested_doc) == "intro outro said"


def test_searchable_text_covers_metadata_and_nested_blocks(nested_doc: Document) -> None:
    nested_doc.category = CATEGORIES["todo"]
    nested_doc.add_tag(Tag(name="urgent"))
    text = searchable_text(nested_doc)
    assert text.startswith("Nested ToDo urgent ")
    for word in ("intro", "Section", "inner", "left", "right", "after", "outro"):
        assert word in text


def test_block_text_per_type() -> None:
    table = Block.table(2, 2)
    table.content.set_cell(1, 1, "cell")
    assert block_text(table) == "Table cell"

    lst = Block.list_block(title="Groceries")
    lst.content.items[0].text = RichRun.plain("eggs")
    assert block_text(lst) == "Groceries eggs"

    assert block_text(Block.code("x = 1")) == "x = 1"
    assert block_text(Block.bookmark("https://example.com", title="Ex")) == "Ex https://example.com"
    assert block_text(Block.file_path("/tmp/a.txt", display_name="A")) == "/tmp/a.txt A"
    assert block_text(Block.image("https://example.com/a.png", alt_text="alt")) == ""
