"""Tests for tree navigation (lookup, traversal, breadcrumbs, siblings)."""

from uuid import uuid4

from scr4tch.core.tree.navigation import (
    container_of,
    find_accordion,
    find_block,
    find_column,
    first_text_block,
    get_breadcrumbs,
    get_children,
    get_siblings,
    is_descendant,
    iter_blocks,
    iter_containers,
    owner_of,
    resolve_container,
    walk,
)
from scr4tch.models.block import Block, BlockType
from scr4tch.models.document import Document
from scr4tch.models.refs import ROOT, AccordionRef, ColumnRef
from tests.unit.builders import block_with_text, texts


def _accordion(doc: Document) -> Block:
    return next(b for b in iter_blocks(doc) if b.type is BlockType.ACCORDION)


def _columns(doc: Document) -> Block:
    return next(b for b in iter_blocks(doc) if b.type is BlockType.COLUMNS)


def test_iter_blocks_is_depth_first_in_order(nested_doc: Document) -> None:
    assert texts(list(iter_blocks(nested_doc))) == [
        "intro",
        "accordion",
        "inner",
        "columns",
        "left",
        "right",
        "after",
        "outro",
    ]


def test_walk_reports_depth(nested_doc: Document) -> None:
    depths = {b.plain_text: d for b, d in walk(nested_doc.blocks) if b.is_text_like}
    assert depths == {"intro": 0, "inner": 1, "left": 2, "right": 2, "after": 1, "outro": 0}


def test_iter_containers_covers_root_accordion_and_columns(nested_doc: Document) -> None:
    refs = [c.ref for c in iter_containers(nested_doc)]
    assert refs[0] == ROOT
    assert sum(isinstance(r, AccordionRef) for r in refs) == 1
    assert sum(isinstance(r, ColumnRef) for r in refs) == 2


def test_find_block_reaches_into_columns_inside_accordions(nested_doc: Document) -> None:
    left = block_with_text(nested_doc, "left")
    assert find_block(nested_doc, left.id) is left
    assert find_block(nested_doc, uuid4()) is None


def test_find_accordion_and_column(nested_doc: Document) -> None:
    accordion = _accordion(nested_doc)
    columns = _columns(nested_doc)
    first_column = columns.content.sorted_columns()[0]
    assert find_accordion(nested_doc, accordion.content.id) is accordion.content
    assert find_column(nested_doc, first_column.id) is first_column
    assert find_accordion(nested_doc, uuid4()) is None


def test_resolve_and_container_of(nested_doc: Document) -> None:
    right = block_with_text(nested_doc, "right")
    assert right.container is not None
    container = resolve_container(nested_doc, right.container)
    assert container is not None
    assert container_of(nested_doc, right) is container
    assert resolve_container(nested_doc, AccordionRef(uuid4())) is None
    assert container_of(nested_doc, Block.text("detached")) is None


def test_owner_of(nested_doc: Document) -> None:
    inner = block_with_text(nested_doc, "inner")
    assert inner.container is not None
    assert owner_of(nested_doc, inner.container) is _accordion(nested_doc)
    assert owner_of(nested_doc, ROOT) is None


def test_breadcrumbs_for_nested_block(nested_doc: Document) -> None:
    left = block_with_text(nested_doc, "left")
    assert get_breadcrumbs(nested_doc, left.id) == (_accordion(nested_doc), _columns(nested_doc))


def test_breadcrumbs_for_root_block_are_empty(nested_doc: Document) -> None:
    intro = block_with_text(nested_doc, "intro")
    assert get_breadcrumbs(nested_doc, intro.id) == ()
    assert get_breadcrumbs(nested_doc, uuid4()) == ()


def test_siblings_stay_inside_the_container(nested_doc: Document) -> None:
    inner = block_with_text(nested_doc, "inner")
    before, after = get_siblings(nested_doc, block_id=inner.id, count=1)
    assert before == ()
    assert after == (_columns(nested_doc),)


def test_siblings_of_unknown_block(nested_doc: Document) -> None:
    assert get_siblings(nested_doc, block_id=uuid4()) == ((), ())


def test_children_and_descendants(nested_doc: Document) -> None:
    columns = _columns(nested_doc)
    accordion = _accordion(nested_doc)
    assert texts(list(get_children(columns))) == ["left", "right"]
    assert is_descendant(accordion, block_with_text(nested_doc, "left"))
    assert not is_descendant(columns, block_with_text(nested_doc, "inner"))
    assert get_children(block_with_text(nested_doc, "intro")) == ()


def test_first_text_block_is_the_autofocus_target(nested_doc: Document) -> None:
    assert first_text_block(nested_doc) is block_with_text(nested_doc, "intro")
