"""Tagged references from a block to the container that owns it."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RootRef:
    """The document's root-level block list."""


@dataclass(frozen=True)
class AccordionRef:
    """The body of the accordion with ``accordion_id``."""

    accordion_id: UUID


@dataclass(frozen=True)
class ColumnRef:
    """The body of the column with ``column_id``."""

    column_id: UUID


ContainerRef = RootRef | AccordionRef | ColumnRef

ROOT = RootRef()
