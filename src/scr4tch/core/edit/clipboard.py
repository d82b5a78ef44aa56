"""Single-slot block clipboard."""

from dataclasses import dataclass

from scr4tch.models.block import Block


@dataclass(eq=False)
class Clipboard:
    """Holds a reference to the last copied or cut block. Last writer wins."""

    block: Block | None = None

    @property
    def is_empty(self) -> bool:
        return self.block is None

    def put(self, block: Block) -> None:
        self.block = block

    def clear(self) -> None:
        self.block = None


# Shared by every editor that is not handed its own clipboard.
SHARED_CLIPBOARD = Clipboard()
