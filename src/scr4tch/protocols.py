"""Protocols for the collaborators of the block-tree core."""

from typing import Any, Protocol, runtime_checkable

from scr4tch.models.block import Block, BlockType
from scr4tch.models.content import BlockContent


@runtime_checkable
class StoreProtocol(Protocol):
    """Protocol for the persistence collaborator.

    The core registers every block it creates or destroys; the caller decides
    when to commit.
    """

    def create_block(self, block_type: BlockType, content: BlockContent) -> Block:
        """Create a detached block and register it with the store."""
        ...

    def insert(self, entity: Any) -> None:
        """Register a newly created entity."""
        ...

    def delete(self, entity: Any) -> None:
        """Register an entity for removal."""
        ...

    def commit(self) -> None:
        """Flush pending changes. Raises PersistError on failure."""
        ...
