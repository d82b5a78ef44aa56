"""Structural edits on a document's block tree.

Every operation leaves the tree valid (see ``core.tree.invariants``). Expected
conditions never raise: a detached block or an empty clipboard simply produce
an ``EditResult`` with ``changed=False``.

Focus is an output, never state: each result names the block (or heading,
or list item) that should receive input focus next.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from uuid import UUID

from loguru import logger

from scr4tch.core.edit.clipboard import SHARED_CLIPBOARD, Clipboard
from scr4tch.core.edit.copier import deep_copy
from scr4tch.core.tree.container import Container
from scr4tch.core.tree.invariants import (
    ensure_non_empty_accordion,
    ensure_trailing_text_block,
    refill_column,
)
from scr4tch.core.tree.navigation import (
    container_of,
    find_accordion,
    find_column,
    is_descendant,
    resolve_container,
)
from scr4tch.models.block import Block, BlockType
from scr4tch.models.content import (
    AccordionData,
    CodeBlockData,
    ColumnData,
    HeadingLevel,
    ListData,
    ListItem,
    ListType,
    TextContent,
)
from scr4tch.models.document import Document
from scr4tch.models.refs import AccordionRef, ColumnRef, ContainerRef
from scr4tch.models.rich_text import RichRun
from scr4tch.protocols import StoreProtocol
from scr4tch.store import MemoryStore

BlockFactory = Callable[[], Block]


class DropEdge(StrEnum):
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class EditResult:
    """Outcome of a structural edit.

    ``focus_id`` is the id that should receive input focus (a block id, an
    accordion id for its heading, or a list item id). ``cursor`` is the
    suggested caret offset inside it, when one is meaningful.
    """

    changed: bool
    focus_id: UUID | None = None
    cursor: int | None = None
    created: tuple[Block, ...] = ()
    removed: tuple[Block, ...] = ()


NO_CHANGE = EditResult(changed=False)


def focus_target(block: Block) -> UUID:
    """Where focus lands after ``block`` is inserted."""
    content = block.content
    if isinstance(content, AccordionData):
        return content.id
    if isinstance(content, ColumnData):
        columns = content.sorted_columns()
        first = columns[0].blocks.first() if columns else None
        return first.id if first else block.id
    if isinstance(content, ListData):
        items = content.sorted_items()
        return items[0].id if items else block.id
    return block.id


class StructuralEditor:
    """Insert, delete, split, merge, copy and move blocks in one document."""

    def __init__(
        self,
        document: Document,
        *,
        store: StoreProtocol | None = None,
        clipboard: Clipboard | None = None,
    ) -> None:
        self.document = document
        self.store: StoreProtocol = store if store is not None else MemoryStore()
        self.clipboard = clipboard if clipboard is not None else SHARED_CLIPBOARD

    # --- Bookkeeping ---

    def _container(self, block: Block) -> Container | None:
        container = container_of(self.document, block)
        if container is None:
            logger.debug("Block {} is not attached to the document", block.id)
        return container

    def _register(self, block: Block) -> None:
        """Hand a new block and everything nested in it to the store."""
        self.store.insert(block)
        if isinstance(block.content, ListData):
            for item in block.content.sorted_items():
                self.store.insert(item)
        for child in block.child_containers():
            for nested in child.blocks_sorted_by_order():
                self._register(nested)

    def _destroy(self, block: Block) -> None:
        """Delete a detached block from the store, children and list items first."""
        for child in block.child_containers():
            for nested in child.blocks_sorted_by_order():
                self._destroy(nested)
        if isinstance(block.content, ListData):
            for item in block.content.sorted_items():
                self.store.delete(item)
        self.store.delete(block)

    def _repair(self, container: Container) -> tuple[list[Block], Block | None]:
        """Restore the per-container rules after a mutation.

        Returns the blocks that had to be created and, when an accordion or
        column had to be refilled, the refill block as the focus target.
        """
        created: list[Block] = []
        refill: Block | None = None
        ref = container.ref
        if isinstance(ref, AccordionRef):
            accordion = find_accordion(self.document, ref.accordion_id)
            if accordion is not None:
                refill = ensure_non_empty_accordion(accordion)
        elif isinstance(ref, ColumnRef):
            column = find_column(self.document, ref.column_id)
            if column is not None:
                refill = refill_column(column)
        if refill is not None:
            created.append(refill)
        if not isinstance(ref, ColumnRef):
            trailing = ensure_trailing_text_block(container)
            if trailing is not None:
                created.append(trailing)
        for block in created:
            self.store.insert(block)
        return created, refill

    def _accepts(self, container: Container, block: Block) -> bool:
        # Column blocks never nest directly inside a column.
        if block.type is BlockType.COLUMNS and isinstance(container.ref, ColumnRef):
            logger.debug("Refusing to put columns {} inside {}", block.id, container.ref)
            return False
        return True

    def _finish(
        self,
        container: Container,
        *,
        focus_id: UUID | None,
        cursor: int | None = None,
        created: Sequence[Block] = (),
        removed: Sequence[Block] = (),
    ) -> EditResult:
        repaired, refill = self._repair(container)
        if focus_id is None and refill is not None:
            focus_id = refill.id
        self.document.touch()
        return EditResult(
            changed=True,
            focus_id=focus_id,
            cursor=cursor,
            created=(*created, *repaired),
            removed=tuple(removed),
        )

    # --- Insertion ---

    def insert_after(
        self,
        block: Block,
        make_block: BlockFactory,
        *,
        cursor: int | None = None,
    ) -> EditResult:
        """Insert a new block after ``block`` in the same container.

        - An empty text block is replaced in place by the new block.
        - A non-empty text block with a caret strictly inside its text is
          split: the prefix stays, the new block follows, and the suffix moves
          into a new text block after it.
        - Otherwise the new block goes right after ``block``.

        Args:
            block: The block the insertion is relative to (usually the focused one).
            make_block: Builds the detached block to insert.
            cursor: Caret offset in ``block``'s text; for a selection pass its start.
        """
        container = self._container(block)
        if container is None:
            return NO_CHANGE
        new_block = make_block()
        if not self._accepts(container, new_block):
            return NO_CHANGE

        target = block.order_index + 1
        created = [new_block]
        removed: list[Block] = []

        if block.is_empty_text():
            order = block.order_index
            container.remove(block)
            self._destroy(block)
            removed.append(block)
            container.place(new_block, order)
            logger.debug("Replaced empty block {} with {} {}", block.id, new_block.type, new_block.id)
        elif block.type is BlockType.TEXT and cursor is not None and 0 <= cursor < len(block.run):
            prefix, suffix = block.run.split_at(cursor)
            block.run = prefix
            container.shift_from(target, 2)
            container.place(new_block, target)
            suffix_block = self.store.create_block(BlockType.TEXT, TextContent(suffix))
            container.place(suffix_block, target + 1)
            created.append(suffix_block)
            logger.debug(
                "Split block {} at {} around {} {}", block.id, cursor, new_block.type, new_block.id
            )
        else:
            container.shift_from(target, 1)
            container.place(new_block, target)
            logger.debug("Inserted {} {} at {} in {}", new_block.type, new_block.id, target, container.ref)

        self._register(new_block)
        return self._finish(
            container, focus_id=focus_target(new_block), created=created, removed=removed
        )

    def _place_after(self, block: Block, new_block: Block) -> EditResult:
        """Plain insertion right after ``block``: no replacing, no splitting."""
        container = self._container(block)
        if container is None or not self._accepts(container, new_block):
            return NO_CHANGE
        target = block.order_index + 1
        container.shift_from(target, 1)
        container.place(new_block, target)
        self._register(new_block)
        logger.debug("Placed {} {} at {} in {}", new_block.type, new_block.id, target, container.ref)
        return self._finish(container, focus_id=focus_target(new_block), created=[new_block])

    def insert_at_beginning(self) -> EditResult:
        """Insert an empty text block at the very top of the document."""
        container = self.document.blocks
        new_block = Block.text()
        container.shift_from(0, 1)
        container.place(new_block, 0)
        self._register(new_block)
        return self._finish(container, focus_id=new_block.id, created=[new_block])

    def append_to(self, ref: ContainerRef, make_block: BlockFactory) -> EditResult:
        """Append a new block at the end of the referenced container."""
        container = resolve_container(self.document, ref)
        if container is None:
            return NO_CHANGE
        new_block = make_block()
        if not self._accepts(container, new_block):
            return NO_CHANGE
        container.append(new_block)
        self._register(new_block)
        return self._finish(container, focus_id=focus_target(new_block), created=[new_block])

    def insert_text_after(self, block: Block) -> EditResult:
        return self._place_after(block, Block.text())

    def insert_quote_after(self, block: Block, *, cursor: int | None = None) -> EditResult:
        return self.insert_after(block, Block.quote, cursor=cursor)

    def insert_table_after(
        self, block: Block, rows: int, cols: int, *, cursor: int | None = None
    ) -> EditResult:
        return self.insert_after(block, lambda: Block.table(rows, cols), cursor=cursor)

    def insert_accordion_after(
        self, block: Block, level: HeadingLevel = HeadingLevel.H1, *, cursor: int | None = None
    ) -> EditResult:
        return self.insert_after(block, lambda: Block.accordion(level=level), cursor=cursor)

    def insert_columns_after(
        self, block: Block, ratios: Sequence[float], *, cursor: int | None = None
    ) -> EditResult:
        return self.insert_after(block, lambda: Block.columns(ratios), cursor=cursor)

    def insert_list_after(
        self, block: Block, list_type: ListType = ListType.BULLET, *, cursor: int | None = None
    ) -> EditResult:
        return self.insert_after(block, lambda: Block.list_block(list_type), cursor=cursor)

    def insert_code_after(self, block: Block, *, cursor: int | None = None) -> EditResult:
        """Insert a code block in the document's last used language."""
        language = self.document.last_used_code_language
        return self.insert_after(block, lambda: Block.code(language=language), cursor=cursor)

    def insert_image_after(
        self, block: Block, url_string: str, *, cursor: int | None = None, **kwargs: object
    ) -> EditResult:
        return self.insert_after(block, lambda: Block.image(url_string, **kwargs), cursor=cursor)

    def insert_bookmark_after(
        self, block: Block, url_string: str, *, cursor: int | None = None
    ) -> EditResult:
        return self.insert_after(block, lambda: Block.bookmark(url_string), cursor=cursor)

    def insert_file_path_after(
        self, block: Block, path_string: str, *, cursor: int | None = None, **kwargs: object
    ) -> EditResult:
        return self.insert_after(
            block, lambda: Block.file_path(path_string, **kwargs), cursor=cursor
        )

    def set_code_language(self, block: Block, language: str) -> None:
        """Change a code block's language and remember it for the next code block."""
        if not isinstance(block.content, CodeBlockData):
            msg = f"{block.type} block has no code language"
            raise TypeError(msg)
        block.content.language = language
        self.document.last_used_code_language = language

    # --- Removal and merging ---

    def delete(self, block: Block) -> EditResult:
        """Remove ``block`` (and everything nested in it) from its container.

        If the removed block was not a text block and it sat between two text
        blocks, those two are merged with a newline so no gap is left behind.
        The predecessor then keeps focus, with the caret at the join.
        """
        container = self._container(block)
        if container is None:
            return NO_CHANGE

        prev = container.predecessor(block)
        nxt = container.successor(block)

        container.remove(block)
        container.reindex()
        self._destroy(block)
        removed = [block]
        logger.debug("Deleted {} {} from {}", block.type, block.id, container.ref)

        focus_id: UUID | None = None
        cursor: int | None = None
        if (
            block.type is not BlockType.TEXT
            and prev is not None
            and nxt is not None
            and prev.type is BlockType.TEXT
            and nxt.type is BlockType.TEXT
        ):
            cursor = len(prev.run)
            prev.run = prev.run + RichRun.plain("\n") + nxt.run
            container.remove(nxt)
            container.reindex()
            self._destroy(nxt)
            removed.append(nxt)
            focus_id = prev.id
            logger.debug("Merged {} into {} after removing {}", nxt.id, prev.id, block.id)

        return self._finish(container, focus_id=focus_id, cursor=cursor, removed=removed)

    def merge_with_previous(self, block: Block) -> EditResult:
        """Join ``block``'s text onto the text block right before it (backspace at start).

        No-op when there is no predecessor or the predecessor is not a text block.
        The emptied block then goes through ``delete``, so a merged quote that
        sat between two text blocks also joins the one after it.
        """
        container = self._container(block)
        if container is None or not block.is_text_like:
            return NO_CHANGE
        prev = container.predecessor(block)
        if prev is None or prev.type is not BlockType.TEXT:
            return NO_CHANGE

        cursor = len(prev.run)
        prev.run = prev.run + block.run
        logger.debug("Merged {} into previous block {}", block.id, prev.id)
        result = self.delete(block)
        return replace(result, focus_id=prev.id, cursor=cursor)

    def extract_selection(self, block: Block, start: int, end: int) -> EditResult:
        """Move the selected text ``[start, end)`` of a text block into its own block.

        The source block keeps the first non-empty part (prefix, or the
        selection itself if it starts at 0); the other parts become new text
        blocks right after it.
        """
        container = self._container(block)
        if container is None or not block.is_text_like:
            return NO_CHANGE
        run = block.run
        start = max(0, min(start, len(run)))
        end = max(start, min(end, len(run)))
        if start == end:
            return NO_CHANGE

        prefix, selected, suffix = run.slice(0, start), run.slice(start, end), run.slice(end)
        parts = [p for p in (prefix, selected, suffix) if p.text or p is selected]
        if len(parts) == 1:
            return NO_CHANGE

        base = block.order_index
        container.shift_from(base + 1, len(parts) - 1)
        block.run = parts[0]
        created: list[Block] = []
        for offset, part in enumerate(parts[1:]):
            new_block = self.store.create_block(BlockType.TEXT, TextContent(part))
            container.place(new_block, base + 1 + offset)
            created.append(new_block)

        selected_block = created[0] if prefix.text else block
        logger.debug("Extracted selection {}:{} of {} into {}", start, end, block.id, selected_block.id)
        return self._finish(container, focus_id=selected_block.id, created=created)

    # --- Duplicate, copy, cut, paste ---

    def duplicate(self, block: Block) -> EditResult:
        """Insert a deep copy of ``block`` right after it and focus the copy."""
        if self._container(block) is None:
            return NO_CHANGE
        return self._place_after(block, deep_copy(block))

    def copy(self, block: Block) -> EditResult:
        """Put ``block`` on the clipboard. The tree is not changed."""
        self.clipboard.put(block)
        return NO_CHANGE

    def cut(self, block: Block) -> EditResult:
        if self._container(block) is None:
            return NO_CHANGE
        self.clipboard.put(block)
        return self.delete(block)

    def paste_after(self, target: Block) -> EditResult:
        """Insert a fresh deep copy of the clipboard block right after ``target``."""
        if self.clipboard.block is None:
            return NO_CHANGE
        return self._place_after(target, deep_copy(self.clipboard.block))

    # --- Drag and drop ---

    def move(self, dragged: Block, target: Block, edge: DropEdge) -> EditResult:
        """Move ``dragged`` before (TOP) or after (BOTTOM) ``target``.

        ``target``'s container is the destination and may differ from the
        source container, in which case ``dragged`` is re-parented. Both
        containers are renumbered from scratch.
        """
        if dragged is target or dragged.id == target.id:
            return NO_CHANGE
        source = self._container(dragged)
        dest = self._container(target)
        if source is None or dest is None:
            return NO_CHANGE
        if is_descendant(dragged, target):
            logger.debug("Refusing to drop {} inside itself", dragged.id)
            return NO_CHANGE
        if not self._accepts(dest, dragged):
            return NO_CHANGE

        source.remove(dragged)
        ordered = dest.blocks_sorted_by_order()
        position = ordered.index(target) + (1 if edge is DropEdge.BOTTOM else 0)
        dest.insert_at(position, dragged)
        logger.debug("Moved {} from {} to {} at {}", dragged.id, source.ref, dest.ref, position)

        created: list[Block] = []
        if source is not dest:
            source.reindex()
            repaired, _refill = self._repair(source)
            created.extend(repaired)
        return self._finish(dest, focus_id=dragged.id, created=created)

    # --- List items ---

    def list_item_enter(self, block: Block, item: ListItem, *, cursor: int | None = None) -> EditResult:
        """Return pressed in a list item.

        An empty item is removed instead; if it was the only item, the whole
        list block is deleted. Otherwise the item is split at the caret and the
        rest moves into a new item below.
        """
        data = block.content
        if not isinstance(data, ListData) or self._container(block) is None:
            return NO_CHANGE
        if not item.text.text:
            if len(data.items) == 1:
                return self.delete(block)
            data.remove_item(item)
            self.store.delete(item)
            self.document.touch()
            return EditResult(changed=True)

        suffix = RichRun()
        if cursor is not None and 0 <= cursor < len(item.text):
            item.text, suffix = item.text.split_at(cursor)
        new_item = data.insert_item_after(item, text=suffix)
        self.store.insert(new_item)
        self.document.touch()
        return EditResult(changed=True, focus_id=new_item.id, cursor=0)

    def list_item_backspace(self, block: Block, item: ListItem) -> EditResult:
        """Backspace at the start of a list item: join it onto the previous item.

        On the first item this only deletes the list, and only when that item
        is its sole, empty item.
        """
        data = block.content
        if not isinstance(data, ListData) or self._container(block) is None:
            return NO_CHANGE
        prev = data.previous_item(item)
        if prev is None:
            if len(data.items) == 1 and not item.text.text:
                return self.delete(block)
            return NO_CHANGE
        cursor = len(prev.text)
        prev.text = prev.text + item.text
        data.remove_item(item)
        self.store.delete(item)
        self.document.touch()
        return EditResult(changed=True, focus_id=prev.id, cursor=cursor)
