"""Tree navigation: lookup, traversal, breadcrumbs, siblings."""

from collections.abc import Iterator
from uuid import UUID

from scr4tch.core.tree.container import Container
from scr4tch.models.block import Block, BlockType
from scr4tch.models.content import AccordionData, Column, ColumnData
from scr4tch.models.document import Document
from scr4tch.models.refs import AccordionRef, ColumnRef, ContainerRef, RootRef


def walk(container: Container, *, depth: int = 0) -> Iterator[tuple[Block, int]]:
    """Yield ``(block, depth)`` depth-first, siblings in order-index order.

    A block is yielded before its accordion body or its columns (left to right).
    """
    for block in container.blocks_sorted_by_order():
        yield block, depth
        for child in block.child_containers():
            yield from walk(child, depth=depth + 1)


def iter_blocks(doc: Document) -> Iterator[Block]:
    """Every block of the document in stable depth-first order."""
    for block, _depth in walk(doc.blocks):
        yield block


def iter_containers(doc: Document) -> Iterator[Container]:
    """The root container followed by every nested container, depth-first."""
    yield doc.blocks
    for block in iter_blocks(doc):
        yield from block.child_containers()


def find_block(doc: Document, block_id: UUID) -> Block | None:
    """Find a block anywhere in the tree. Returns None if it is not attached."""
    return _find_in(doc.blocks, block_id)


def _find_in(container: Container, block_id: UUID) -> Block | None:
    for block in container.blocks_sorted_by_order():
        if block.id == block_id:
            return block
        # Explore both kinds of nested body: the tree can interleave them freely.
        for child in block.child_containers():
            found = _find_in(child, block_id)
            if found is not None:
                return found
    return None


def find_accordion(doc: Document, accordion_id: UUID) -> AccordionData | None:
    for block in iter_blocks(doc):
        if isinstance(block.content, AccordionData) and block.content.id == accordion_id:
            return block.content
    return None


def find_column(doc: Document, column_id: UUID) -> Column | None:
    for block in iter_blocks(doc):
        if isinstance(block.content, ColumnData):
            for column in block.content.columns:
                if column.id == column_id:
                    return column
    return None


def resolve_container(doc: Document, ref: ContainerRef) -> Container | None:
    """Turn a container reference into the live container, if it is in the tree."""
    if isinstance(ref, RootRef):
        return doc.blocks
    if isinstance(ref, AccordionRef):
        accordion = find_accordion(doc, ref.accordion_id)
        return accordion.blocks if accordion else None
    column = find_column(doc, ref.column_id)
    return column.blocks if column else None


def container_of(doc: Document, block: Block) -> Container | None:
    """The container currently holding ``block``, or None if it is detached."""
    if block.container is None:
        return None
    container = resolve_container(doc, block.container)
    if container is None or block not in container:
        return None
    return container


def owner_of(doc: Document, ref: ContainerRef) -> Block | None:
    """The accordion or column block that owns the referenced container."""
    if isinstance(ref, RootRef):
        return None
    for block in iter_blocks(doc):
        if isinstance(ref, AccordionRef) and isinstance(block.content, AccordionData):
            if block.content.id == ref.accordion_id:
                return block
        elif isinstance(ref, ColumnRef) and isinstance(block.content, ColumnData):
            if any(c.id == ref.column_id for c in block.content.columns):
                return block
    return None


def get_breadcrumbs(doc: Document, block_id: UUID) -> tuple[Block, ...]:
    """Get the ancestor blocks of a block.

    Returns ancestors in order from the root-level block down to the immediate
    owner (excludes the block itself). Empty for root-level or unknown blocks.
    """
    block = find_block(doc, block_id)
    crumbs: list[Block] = []
    while block is not None and block.container is not None:
        owner = owner_of(doc, block.container)
        if owner is None:
            break
        crumbs.append(owner)
        block = owner
    return tuple(reversed(crumbs))


def get_siblings(
    doc: Document,
    *,
    block_id: UUID,
    count: int = 3,
) -> tuple[tuple[Block, ...], tuple[Block, ...]]:
    """Get siblings before and after a block in its own container.

    Returns (siblings_before, siblings_after) tuples, nearest last/first.
    """
    block = find_block(doc, block_id)
    if block is None:
        return (), ()
    container = container_of(doc, block)
    if container is None:
        return (), ()
    ordered = container.blocks_sorted_by_order()
    pos = ordered.index(block)
    return tuple(ordered[max(0, pos - count) : pos]), tuple(ordered[pos + 1 : pos + 1 + count])


def get_children(block: Block) -> tuple[Block, ...]:
    """Direct children of an accordion or column block, in reading order."""
    return tuple(b for c in block.child_containers() for b in c.blocks_sorted_by_order())


def is_descendant(ancestor: Block, block: Block) -> bool:
    """True if ``block`` sits anywhere below ``ancestor``."""
    for child in ancestor.child_containers():
        for nested, _depth in walk(child):
            if nested is block:
                return True
    return False


def first_text_block(doc: Document) -> Block | None:
    """The first text block in reading order: the focus target when a document opens."""
    return next((b for b in iter_blocks(doc) if b.type is BlockType.TEXT), None)
