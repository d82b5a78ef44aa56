"""Configuration constants for the scr4tch block-tree core."""

# Language used for new code blocks until the document records another one.
DEFAULT_CODE_LANGUAGE: str = "swift"

# New tables.
DEFAULT_TABLE_TITLE: str = "Table"
DEFAULT_TABLE_ROWS: int = 3
DEFAULT_TABLE_COLUMNS: int = 3
DEFAULT_COLUMN_WIDTH: float = 150.0
MIN_COLUMN_WIDTH: float = 40.0
DEFAULT_ROW_HEIGHT: float = 36.0
MIN_ROW_HEIGHT: float = 20.0

# New column blocks: two equal columns.
DEFAULT_COLUMN_RATIOS: tuple[float, ...] = (1.0, 1.0)

DEFAULT_TAG_COLOR: str = "007AFF"

# Lifecycle. Temp notes expire into the trash, trashed notes are purged.
TEMP_DURATION_HOURS: int = 24
TRASH_RETENTION_DAYS: int = 30
