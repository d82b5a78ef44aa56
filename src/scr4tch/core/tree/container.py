"""Ordered sibling lists shared by the document root, accordion bodies and columns."""

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from loguru import logger

from scr4tch.errors import InvariantViolation
from scr4tch.models.refs import ContainerRef

if TYPE_CHECKING:
    from scr4tch.models.block import Block


class Container:
    """An ordered collection of sibling blocks.

    Storage order is irrelevant; ``order_index`` alone defines sibling order.
    Every block held here points back at this container through its
    ``container`` reference.
    """

    def __init__(self, ref: ContainerRef, blocks: Iterable["Block"] = ()) -> None:
        self.ref = ref
        self._blocks: list[Block] = []
        for block in blocks:
            self.place(block, block.order_index)

    def __repr__(self) -> str:
        return f"Container({self.ref!r}, {len(self._blocks)} blocks)"

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator["Block"]:
        return iter(self.blocks_sorted_by_order())

    def __contains__(self, block: object) -> bool:
        return any(b is block for b in self._blocks)

    def blocks_sorted_by_order(self) -> list["Block"]:
        """Return the children ordered by ``order_index``."""
        return sorted(self._blocks, key=lambda b: b.order_index)

    def _claim(self, block: "Block") -> None:
        if block in self:
            msg = f"Block {block.id} is already in {self.ref!r}"
            raise InvariantViolation(msg)
        if block.container is not None:
            logger.warning("Block {} still owned by {}", block.id, block.container)
            msg = f"Block {block.id} is owned by {block.container!r}; detach it first"
            raise InvariantViolation(msg)
        block.container = self.ref

    def place(self, block: "Block", order_index: int) -> None:
        """Add ``block`` with the given order index without touching its siblings.

        Callers shift siblings first (see ``shift_from``) so indices stay unique.
        """
        self._claim(block)
        block.order_index = order_index
        self._blocks.append(block)

    def insert_at(self, index: int, block: "Block") -> None:
        """Insert ``block`` at sorted position ``index`` and renumber everything.

        The block's previous ``order_index`` is ignored; position wins.
        """
        ordered = self.blocks_sorted_by_order()
        self._claim(block)
        index = max(0, min(index, len(ordered)))
        ordered.insert(index, block)
        for i, child in enumerate(ordered):
            child.order_index = i
        self._blocks = ordered

    def append(self, block: "Block") -> None:
        last = self.last()
        self.place(block, 0 if last is None else last.order_index + 1)

    def remove(self, block: "Block") -> "Block":
        """Detach ``block``. Order indices of the rest are left as they were."""
        for i, candidate in enumerate(self._blocks):
            if candidate is block:
                del self._blocks[i]
                block.container = None
                return block
        msg = f"Block {block.id} is not in {self.ref!r}"
        raise InvariantViolation(msg)

    def remove_at(self, index: int) -> "Block":
        """Detach the block at sorted position ``index``."""
        return self.remove(self.blocks_sorted_by_order()[index])

    def reindex(self) -> None:
        """Renumber the children ``0..n-1`` in their current order."""
        ordered = self.blocks_sorted_by_order()
        for i, block in enumerate(ordered):
            block.order_index = i
        self._blocks = ordered

    def set_order(self, blocks: list["Block"]) -> None:
        """Adopt ``blocks`` (the same members) as the new sibling order."""
        if len(blocks) != len(self._blocks) or any(b not in self for b in blocks):
            msg = f"set_order needs exactly the current members of {self.ref!r}"
            raise InvariantViolation(msg)
        for i, block in enumerate(blocks):
            block.order_index = i
        self._blocks = list(blocks)

    def shift_from(self, order_index: int, amount: int) -> None:
        """Add ``amount`` to every child with ``order_index >= order_index``."""
        for block in self._blocks:
            if block.order_index >= order_index:
                block.order_index += amount

    def index_of(self, block: "Block") -> int | None:
        for i, candidate in enumerate(self.blocks_sorted_by_order()):
            if candidate is block:
                return i
        return None

    def at_order(self, order_index: int) -> "Block | None":
        """Return the child whose order index equals ``order_index``."""
        for block in self._blocks:
            if block.order_index == order_index:
                return block
        return None

    def predecessor(self, block: "Block") -> "Block | None":
        """The sibling immediately before ``block`` by order index."""
        before = [b for b in self._blocks if b.order_index < block.order_index]
        return max(before, key=lambda b: b.order_index) if before else None

    def successor(self, block: "Block") -> "Block | None":
        """The sibling immediately after ``block`` by order index."""
        after = [b for b in self._blocks if b.order_index > block.order_index]
        return min(after, key=lambda b: b.order_index) if after else None

    def first(self) -> "Block | None":
        return min(self._blocks, key=lambda b: b.order_index) if self._blocks else None

    def last(self) -> "Block | None":
        return max(self._blocks, key=lambda b: b.order_index) if self._blocks else None
