"""
Value types passed between the collection, the scheduler and the splitter.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ImageItem:
    """A loaded source image with its preview thumbnail."""
    id: int
    source_path: Path
    thumbnail_data: str

    @property
    def name(self) -> str:
        return self.source_path.name


@dataclass(frozen=True)
class ProcessingJob:
    """Snapshot of the collection handed to the scheduler for one export."""
    items: Tuple[ImageItem, ...]
    destination_root: Path

    def __post_init__(self):
        # accept any sequence, but keep the snapshot immutable
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "destination_root", Path(self.destination_root))


@dataclass(frozen=True)
class ChunkAssignment:
    """Contiguous slice of a job assigned to one worker."""
    items: Tuple[ImageItem, ...]
    starting_sequence_number: int

    @property
    def sequence_numbers(self) -> range:
        return range(self.starting_sequence_number,
                     self.starting_sequence_number + len(self.items))


@dataclass
class ItemOutcome:
    """Per-item result token sent from a worker to the scheduler."""
    item: ImageItem
    sequence_number: int
    error: Optional[Exception] = None
    outputs: Tuple[Path, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def token(self) -> str:
        return f"{'✓' if self.ok else '✗'} {self.item.name}"


@dataclass
class LoadResult:
    """Outcome of loading a batch of source files."""
    items: List[ImageItem] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.items)


@dataclass
class ExportResult:
    """
    Outcome of one export.

    `processed_count` is the number of items attempted, matching what the
    user is told on completion. `succeeded`/`failed` carry the per-item
    breakdown for callers that want the stricter count.
    """
    processed_count: int = 0
    succeeded: List[ItemOutcome] = field(default_factory=list)
    failed: List[ItemOutcome] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_message is None


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    PROCESSING = "processing"


@dataclass(frozen=True)
class Notification:
    """Transient status message for the presentation layer."""
    message: str
    notification_type: NotificationType
    id: int

    @property
    def is_sticky(self) -> bool:
        # processing messages stay until replaced
        return self.notification_type is NotificationType.PROCESSING
