"""Note lifecycle: trash, restore, permanent deletion and periodic cleanup."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from loguru import logger

from scr4tch.core.tree.container import Container
from scr4tch.models.content import ListData
from scr4tch.models.document import Document, NoteStatus
from scr4tch.models.settings import AppSettings
from scr4tch.protocols import StoreProtocol


@dataclass
class CleanupStats:
    """What one cleanup run changed."""

    expired: int = 0
    purged: int = 0
    stamped: int = 0
    purged_ids: list[UUID] = field(default_factory=list)


def _now() -> datetime:
    return datetime.now(tz=UTC)


def soft_delete(doc: Document, now: datetime | None = None) -> None:
    """Move a note to the trash."""
    doc.status = NoteStatus.DELETED
    doc.moved_to_deleted_on = now or _now()
    logger.info("Moved note {} to trash", doc.id)


def restore(doc: Document) -> None:
    """Take a note out of the trash."""
    doc.status = NoteStatus.SAVED
    doc.moved_to_deleted_on = None
    logger.info("Restored note {}", doc.id)


def _delete_container(container: Container, store: StoreProtocol) -> None:
    for block in container.blocks_sorted_by_order():
        for child in block.child_containers():
            _delete_container(child, store)
        if isinstance(block.content, ListData):
            for item in block.content.sorted_items():
                store.delete(item)
        store.delete(block)


def hard_delete(doc: Document, store: StoreProtocol) -> bool:
    """Permanently delete a trashed note and all its blocks, innermost first.

    Returns False, leaving the note alone, when it is not in the trash.
    """
    if doc.status is not NoteStatus.DELETED:
        logger.debug("Not purging note {}: status is {}", doc.id, doc.status)
        return False
    _delete_container(doc.blocks, store)
    store.delete(doc)
    logger.info("Permanently deleted note {}", doc.id)
    return True


def delete_note(doc: Document, store: StoreProtocol, now: datetime | None = None) -> None:
    """The delete action: trash a note, or purge it if it is already trashed."""
    if doc.status is NoteStatus.DELETED:
        hard_delete(doc, store)
    else:
        soft_delete(doc, now)


def run_cleanup(
    documents: Iterable[Document],
    *,
    settings: AppSettings,
    store: StoreProtocol,
    now: datetime | None = None,
) -> CleanupStats:
    """Expire old temp notes into the trash and purge notes trashed long ago.

    A trashed note without a trash timestamp gets one now, so it is purged
    a full retention period later. Commits once at the end.
    """
    now = now or _now()
    stats = CleanupStats()
    temp_lifetime = timedelta(hours=settings.temp_duration_hours)
    retention = timedelta(days=settings.trash_retention_days)

    for doc in list(documents):
        if doc.status is NoteStatus.TEMP and doc.created_on + temp_lifetime < now:
            soft_delete(doc, now)
            stats.expired += 1
        elif doc.status is NoteStatus.DELETED:
            if doc.moved_to_deleted_on is None:
                doc.moved_to_deleted_on = now
                stats.stamped += 1
            elif doc.moved_to_deleted_on + retention < now:
                hard_delete(doc, store)
                stats.purged += 1
                stats.purged_ids.append(doc.id)

    store.commit()
    logger.info(
        "Cleanup: {} expired, {} purged, {} stamped", stats.expired, stats.purged, stats.stamped
    )
    return stats
