"""Drag-and-drop session: tracks what is dragged and where it would land."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from loguru import logger

from scr4tch.core.edit.editor import NO_CHANGE, DropEdge, EditResult, StructuralEditor
from scr4tch.errors import DragStateError
from scr4tch.models.block import Block


class DragState(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING = "hovering"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


_ACTIVE = (DragState.DRAGGING, DragState.HOVERING)


@dataclass(frozen=True)
class DropIndicator:
    """Where the insertion line is drawn: above or below the target block."""

    target_id: UUID
    edge: DropEdge


def edge_for(offset: float, height: float) -> DropEdge:
    """Pick the drop edge from the pointer's offset inside the target's frame."""
    return DropEdge.TOP if offset < height / 2 else DropEdge.BOTTOM


class DragSession:
    """One drag gesture, from pick-up to drop or cancel.

    ``idle -> dragging -> hovering -> dropped | cancelled``. Leaving a target
    goes back to ``dragging``; a finished session can begin again.
    """

    def __init__(self, editor: StructuralEditor) -> None:
        self.editor = editor
        self.state = DragState.IDLE
        self.dragged: Block | None = None
        self.target: Block | None = None
        self.edge: DropEdge | None = None

    @property
    def is_active(self) -> bool:
        return self.state in _ACTIVE

    @property
    def indicator(self) -> DropIndicator | None:
        if self.state is not DragState.HOVERING or self.target is None or self.edge is None:
            return None
        return DropIndicator(target_id=self.target.id, edge=self.edge)

    def _require(self, *states: DragState) -> None:
        if self.state not in states:
            msg = f"Drag session is {self.state}, expected one of {[s.value for s in states]}"
            raise DragStateError(msg)

    def begin(self, block: Block) -> None:
        self._require(DragState.IDLE, DragState.DROPPED, DragState.CANCELLED)
        self.dragged = block
        self.target = None
        self.edge = None
        self.state = DragState.DRAGGING
        logger.debug("Drag started on {}", block.id)

    def hover(self, target: Block, edge: DropEdge) -> None:
        """Pointer is over ``target``. Hovering the dragged block itself shows nothing."""
        self._require(*_ACTIVE)
        if target is self.dragged:
            self.leave()
            return
        self.target = target
        self.edge = edge
        self.state = DragState.HOVERING

    def leave(self) -> None:
        self._require(*_ACTIVE)
        self.target = None
        self.edge = None
        self.state = DragState.DRAGGING

    def drop(self) -> EditResult:
        """Release the block. Without a target this cancels the session."""
        self._require(*_ACTIVE)
        if self.dragged is None or self.target is None or self.edge is None:
            self.cancel()
            return NO_CHANGE
        result = self.editor.move(self.dragged, self.target, self.edge)
        logger.debug(
            "Dropped {} on {} ({}): changed={}", self.dragged.id, self.target.id, self.edge, result.changed
        )
        self.state = DragState.DROPPED
        self.target = None
        self.edge = None
        return result

    def cancel(self) -> None:
        self._require(*_ACTIVE)
        self.state = DragState.CANCELLED
        self.target = None
        self.edge = None
        logger.debug("Drag cancelled")
