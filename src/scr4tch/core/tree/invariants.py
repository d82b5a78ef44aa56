"""Structural rules of the block tree: repair helpers and a checker."""

from uuid import UUID

from loguru import logger

from scr4tch.core.tree.container import Container
from scr4tch.core.tree.navigation import iter_blocks, iter_containers
from scr4tch.errors import InvariantViolation
from scr4tch.models.block import Block, BlockType
from scr4tch.models.content import AccordionData, Column, ColumnData, ListData
from scr4tch.models.document import Document
from scr4tch.models.refs import ColumnRef


def ensure_trailing_text_block(container: Container) -> Block | None:
    """Append an empty text block if the container is empty or ends in a non-text block.

    Returns the appended block, or None if nothing was needed.
    """
    last = container.last()
    if last is not None and last.type is BlockType.TEXT:
        return None
    block = Block.text()
    container.append(block)
    logger.debug("Appended trailing text block {} to {}", block.id, container.ref)
    return block


def ensure_non_empty_accordion(accordion: AccordionData) -> Block | None:
    """Put one empty text block into an accordion whose body became empty.

    The returned block is the natural next focus target.
    """
    if len(accordion.blocks):
        return None
    block = Block.text()
    accordion.blocks.append(block)
    logger.debug("Refilled empty accordion {} with {}", accordion.id, block.id)
    return block


def refill_column(column: Column) -> Block | None:
    """Put one empty text block into a column whose body became empty."""
    if len(column.blocks):
        return None
    block = Block.text()
    column.blocks.append(block)
    logger.debug("Refilled empty column {} with {}", column.id, block.id)
    return block


def _contiguous(indices: list[int]) -> bool:
    return sorted(indices) == list(range(len(indices)))


def check_document(doc: Document) -> list[str]:
    """Return a description of every structural rule the document breaks."""
    problems: list[str] = []
    seen: set[UUID] = set()

    for container in iter_containers(doc):
        blocks = container.blocks_sorted_by_order()
        if not _contiguous([b.order_index for b in blocks]):
            problems.append(f"{container.ref!r}: order indices not contiguous")
        for block in blocks:
            if block.container != container.ref:
                problems.append(f"{block.id}: container ref {block.container!r} != {container.ref!r}")
            if block.id in seen:
                problems.append(f"{block.id}: appears more than once")
            seen.add(block.id)
            if isinstance(container.ref, ColumnRef) and block.type is BlockType.COLUMNS:
                problems.append(f"{block.id}: columns nested directly in a column")
        if isinstance(container.ref, ColumnRef):
            if not blocks:
                problems.append(f"{container.ref!r}: column is empty")
        elif not blocks or blocks[-1].type is not BlockType.TEXT:
            problems.append(f"{container.ref!r}: does not end with a text block")

    for block in iter_blocks(doc):
        content = block.content
        if isinstance(content, ColumnData):
            if not content.columns:
                problems.append(f"{block.id}: column block has no columns")
            if not _contiguous([c.order_index for c in content.columns]):
                problems.append(f"{block.id}: column order indices not contiguous")
            problems.extend(
                f"{c.id}: width ratio {c.width_ratio} is not positive"
                for c in content.columns
                if c.width_ratio <= 0
            )
        elif isinstance(content, ListData):
            if not _contiguous([i.order_index for i in content.items]):
                problems.append(f"{block.id}: list item order indices not contiguous")

    return problems


def assert_valid(doc: Document) -> None:
    """Raise InvariantViolation if the document breaks any structural rule."""
    problems = check_document(doc)
    if problems:
        for problem in problems:
            logger.warning("Invariant violated: {}", problem)
        msg = f"{len(problems)} invariant violation(s): {problems[0]}"
        raise InvariantViolation(msg)
