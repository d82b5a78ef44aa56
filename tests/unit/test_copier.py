"""Tests for deep copies of blocks."""

from scr4tch.core.edit.copier import deep_copy
from scr4tch.core.tree.navigation import iter_blocks
from scr4tch.models.block import Block
from scr4tch.models.content import AccordionData, ColumnData, ListData, TableData
from scr4tch.models.document import Document
from scr4tch.models.refs import AccordionRef, ColumnRef
from scr4tch.models.rich_text import RichRun
from tests.unit.builders import texts


def test_copy_is_detached_with_a_new_id() -> None:
    doc = Document()
    doc.blocks.append(Block.text("a"))
    source = Block.text("b")
    doc.blocks.append(source)

    copy = deep_copy(source)

    assert copy.id != source.id
    assert copy.container is None
    assert copy.order_index == 0
    assert copy.plain_text == "b"


def test_text_copy_is_independent() -> None:
    source = Block.text("original")
    copy = deep_copy(source)
    copy.run = RichRun.plain("changed")
    assert source.plain_text == "original"


def test_accordion_copy_recurses_and_reparents(nested_doc: Document) -> None:
    source = next(b for b in iter_blocks(nested_doc) if isinstance(b.content, AccordionData))
    copy = deep_copy(source)
    data = copy.content
    assert isinstance(data, AccordionData)

    assert data.id != source.content.id
    assert data.heading == source.content.heading
    assert texts(list(data.blocks)) == ["inner", "columns", "after"]
    assert all(b.container == AccordionRef(data.id) for b in data.blocks)

    source_ids = {b.id for b in iter_blocks(nested_doc)}
    copied = [copy, *(b for c in copy.child_containers() for b in c)]
    assert not source_ids & {b.id for b in copied}


def test_columns_copy_keeps_ratios_with_new_columns() -> None:
    source = Block.columns((2.0, 1.0))
    copy = deep_copy(source)
    src_cols = source.content.sorted_columns()
    new_cols = copy.content.sorted_columns()
    assert isinstance(copy.content, ColumnData)
    assert [c.width_ratio for c in new_cols] == [2.0, 1.0]
    assert {c.id for c in new_cols}.isdisjoint({c.id for c in src_cols})
    for column in new_cols:
        (child,) = list(column.blocks)
        assert child.container == ColumnRef(column.id)


def test_nested_edit_in_copy_leaves_source_alone(nested_doc: Document) -> None:
    source = next(b for b in iter_blocks(nested_doc) if isinstance(b.content, AccordionData))
    copy = deep_copy(source)
    first = copy.content.blocks.first()
    assert first is not None
    first.run = RichRun.plain("edited")
    copy.content.blocks.append(Block.text("extra"))

    assert texts(list(source.content.blocks)) == ["inner", "columns", "after"]


def test_table_copy_has_independent_cells() -> None:
    source = Block.table(2, 2)
    source.content.set_cell(0, 0, "A")
    source.content.set_column_width(1, 220)
    copy = deep_copy(source)
    data = copy.content
    assert isinstance(data, TableData)

    assert data.cell_text(0, 0) == "A"
    assert data.column_widths == [150.0, 220]
    data.set_cell(0, 0, "B")
    data.set_column_width(0, 300)
    assert source.content.cell_text(0, 0) == "A"
    assert source.content.column_widths[0] == 150.0
    assert data.cells[0].id != source.content.cells[0].id


def test_list_copy_has_new_items_with_same_content() -> None:
    source = Block.list_block()
    item = source.content.items[0]
    item.text = RichRun.plain("milk")
    item.is_checked = True
    copy = deep_copy(source)
    data = copy.content
    assert isinstance(data, ListData)
    (new_item,) = data.items
    assert new_item.id != item.id
    assert (new_item.text.text, new_item.is_checked) == ("milk", True)


def test_scalar_payload_is_cloned_verbatim() -> None:
    source = Block.code('print("hi")', language="python")
    copy = deep_copy(source)
    assert copy.content.code == 'print("hi")'
    assert copy.content.language == "python"
    assert copy.content is not source.content
    assert copy.content.id != source.content.id
