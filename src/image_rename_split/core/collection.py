#!/usr/bin/env python3
"""
collection.py: Ordered collection of loaded images and the load/reorder/export operations on it.

The collection owns the only mutable state of a session. Exports take a
ProcessingJob snapshot of it, so the pipeline itself never sees shared state.
Every operation that the user triggers returns (or records) a Notification
describing what happened.
"""

import itertools
import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Union

from ..config import CHUNK_SIZE
from ..utils.log_utils import get_logger
from .errors import DecodeError
from .image_encoder import thumbnail_data_uri
from .models import (
    ExportResult,
    ImageItem,
    LoadResult,
    Notification,
    NotificationType,
    ProcessingJob,
)
from .workers import ProgressCallback, process_job, process_job_async

logger = get_logger(__name__)


def make_notification(message: str, notification_type: NotificationType) -> Notification:
    return Notification(message=message, notification_type=notification_type,
                        id=int(time.time() * 1000))


def load_items(paths: Iterable[Union[str, Path]], next_id: Callable[[], int]) -> LoadResult:
    """
    Build ImageItems for every decodable file in `paths`, keeping their order.

    Files that cannot be decoded are skipped and listed in `LoadResult.skipped`.
    Ids are only drawn for files that load successfully.
    """
    result = LoadResult()
    for raw in paths:
        path = Path(raw)
        try:
            thumbnail = thumbnail_data_uri(path)
        except DecodeError as e:
            logger.warning("Skipping '%s': %s", path, e)
            result.skipped.append(path)
            continue
        result.items.append(ImageItem(id=next_id(), source_path=path, thumbnail_data=thumbnail))
    if not result.items:
        result.reason = "No valid images found"
    return result


class ImageCollection:
    """
    Ordered list of ImageItems; list order is export order.

    Ids come from a counter shared by all loads of the session, so an id is
    never handed out twice even after clear() or a reload.
    """

    def __init__(self) -> None:
        self._items: List[ImageItem] = []
        self._ids = itertools.count()
        self.folder_path: Optional[Path] = None
        self.notification: Optional[Notification] = None
        self.processing = False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    @property
    def items(self) -> Tuple[ImageItem, ...]:
        return tuple(self._items)

    def ids(self) -> List[int]:
        return [item.id for item in self._items]

    def _notify(self, message: str, notification_type: NotificationType) -> Notification:
        self.notification = make_notification(message, notification_type)
        return self.notification

    def _index_of(self, item_id: int) -> Optional[int]:
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                return idx
        return None

    # Loading

    def load(self, paths: List[Union[str, Path]]) -> LoadResult:
        """
        Replace the collection with the decodable images among `paths`.

        The collection is left untouched when nothing could be loaded.
        """
        result = load_items(paths, lambda: next(self._ids))
        if result.ok:
            self._items = list(result.items)
            self.folder_path = result.items[0].source_path.parent
            self._notify(f"✓ Loaded {len(result.items)} images", NotificationType.SUCCESS)
        else:
            self._notify(f"✗ {result.reason}", NotificationType.ERROR)
        logger.info("Loaded %d of %d files", len(result.items), len(result.items) + len(result.skipped))
        return result

    def clear(self) -> None:
        self._items = []
        self.folder_path = None
        self._notify("Cleared all images", NotificationType.INFO)

    # Reordering

    def swap(self, source_id: int, target_id: int) -> bool:
        """Swap the positions of two items (drag and drop). Returns True if anything moved."""
        if source_id == target_id:
            return False
        src, tgt = self._index_of(source_id), self._index_of(target_id)
        if src is None or tgt is None:
            return False
        self._items[src], self._items[tgt] = self._items[tgt], self._items[src]
        return True

    def move_left(self, item_id: int) -> bool:
        idx = self._index_of(item_id)
        if idx is None or idx == 0:
            return False
        return self.swap(item_id, self._items[idx - 1].id)

    def move_right(self, item_id: int) -> bool:
        idx = self._index_of(item_id)
        if idx is None or idx + 1 >= len(self._items):
            return False
        return self.swap(item_id, self._items[idx + 1].id)

    # Exporting

    def snapshot(self, destination: Union[str, Path]) -> ProcessingJob:
        return ProcessingJob(items=self.items, destination_root=Path(destination))

    def _finish_export(self, result: ExportResult) -> ExportResult:
        self.processing = False
        if result.ok:
            self._notify(f"✓ Completed! Processed {result.processed_count} images", NotificationType.SUCCESS)
        else:
            self._notify(f"✗ Processing error: {result.error_message}", NotificationType.ERROR)
        return result

    def _abort_export(self, err: Exception) -> ExportResult:
        """The scheduler itself raised; the job could not be waited on to completion."""
        logger.exception("Export failed")
        self.processing = False
        message = f"Processing task failed: {err}"
        self._notify(f"✗ {message}", NotificationType.ERROR)
        return ExportResult(error_message=message)

    def _start_export(self) -> bool:
        if not self._items:
            self._notify("No images to process", NotificationType.ERROR)
            return False
        self.processing = True
        self._notify("Processing images...", NotificationType.PROCESSING)
        return True

    def export(
        self,
        destination: Union[str, Path],
        chunk_size: int = CHUNK_SIZE,
        on_item_complete: Optional[ProgressCallback] = None,
    ) -> ExportResult:
        """Split every image into `<destination>/SPL`, numbered in collection order."""
        if not self._start_export():
            return ExportResult(error_message="No images to process")
        try:
            result = process_job(self.snapshot(destination), chunk_size=chunk_size,
                                 on_item_complete=on_item_complete)
        except Exception as e:
            return self._abort_export(e)
        finally:
            self.processing = False
        return self._finish_export(result)

    async def export_async(
        self,
        destination: Union[str, Path],
        chunk_size: int = CHUNK_SIZE,
        on_item_complete: Optional[ProgressCallback] = None,
    ) -> ExportResult:
        if not self._start_export():
            return ExportResult(error_message="No images to process")
        try:
            result = await process_job_async(self.snapshot(destination), chunk_size=chunk_size,
                                             on_item_complete=on_item_complete)
        except Exception as e:
            return self._abort_export(e)
        finally:
            self.processing = False
        return self._finish_export(result)

    def cancel_export(self) -> Notification:
        """Record that the user dismissed the destination picker."""
        self.processing = False
        return self._notify("Save location cancelled", NotificationType.INFO)
