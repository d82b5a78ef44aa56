"""SCR4TCH block-tree document model and structural editing core."""

from scr4tch.core.edit.clipboard import Clipboard
from scr4tch.core.edit.editor import DropEdge, EditResult, StructuralEditor
from scr4tch.models.block import Block, BlockType
from scr4tch.models.document import Document, NoteStatus
from scr4tch.models.rich_text import RichRun
from scr4tch.protocols import StoreProtocol
from scr4tch.store import MemoryStore

__all__ = [
    "Block",
    "BlockType",
    "Clipboard",
    "Document",
    "DropEdge",
    "EditResult",
    "MemoryStore",
    "NoteStatus",
    "RichRun",
    "StoreProtocol",
    "StructuralEditor",
]
