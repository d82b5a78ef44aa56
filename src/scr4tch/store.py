"""In-memory store used as the default persistence collaborator."""

from typing import Any
from uuid import UUID

from loguru import logger

from scr4tch.errors import PersistError
from scr4tch.models.block import Block, BlockType
from scr4tch.models.content import BlockContent


class MemoryStore:
    """Keeps live entities by id and tracks what changed since the last commit."""

    def __init__(self) -> None:
        self.entities: dict[UUID, Any] = {}
        self.pending_inserts: list[Any] = []
        self.pending_deletes: list[Any] = []
        self.commit_count = 0
        self.closed = False

    @property
    def dirty(self) -> bool:
        return bool(self.pending_inserts or self.pending_deletes)

    def create_block(self, block_type: BlockType, content: BlockContent) -> Block:
        block = Block(block_type, content)
        self.insert(block)
        return block

    def insert(self, entity: Any) -> None:
        self.entities[entity.id] = entity
        self.pending_inserts.append(entity)

    def delete(self, entity: Any) -> None:
        if self.entities.pop(entity.id, None) is None:
            logger.debug("Deleting untracked entity {}", entity.id)
        self.pending_deletes.append(entity)

    def get(self, entity_id: UUID) -> Any | None:
        return self.entities.get(entity_id)

    def commit(self) -> None:
        """Flush pending changes. Fails once the store is closed."""
        if self.closed:
            msg = "Store is closed"
            raise PersistError(msg)
        if not self.dirty:
            return
        logger.debug(
            "Committing {} inserts, {} deletes",
            len(self.pending_inserts),
            len(self.pending_deletes),
        )
        self.pending_inserts.clear()
        self.pending_deletes.clear()
        self.commit_count += 1

    def close(self) -> None:
        self.closed = True
