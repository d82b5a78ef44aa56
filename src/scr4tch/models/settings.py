"""User-level settings consumed by lifecycle code."""

from dataclasses import dataclass

from scr4tch.config import TEMP_DURATION_HOURS, TRASH_RETENTION_DAYS
from scr4tch.models.document import NoteStatus


@dataclass(frozen=True)
class AppSettings:
    default_status: NoteStatus = NoteStatus.SAVED
    temp_duration_hours: int = TEMP_DURATION_HOURS
    trash_retention_days: int = TRASH_RETENTION_DAYS
