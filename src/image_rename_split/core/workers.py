import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from ..config import CHUNK_SIZE, OUTPUT_SUBDIR
from ..utils.log_utils import get_logger
from .errors import IoError
from .models import ChunkAssignment, ExportResult, ImageItem, ItemOutcome, ProcessingJob
from .splitter import split_image

logger = get_logger(__name__)

# Sent by each chunk worker once it has nothing more to report
_DONE = object()

ProgressCallback = Callable[[ItemOutcome, int, int], None]


def partition_items(items: Sequence[ImageItem], chunk_size: int = CHUNK_SIZE) -> List[ChunkAssignment]:
    """
    Split `items` into contiguous chunks of at most `chunk_size` items.

    Each chunk starts numbering where the previous one stopped, so output
    names follow collection order no matter which chunk finishes first.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    chunks = []
    start = 1
    for i in range(0, len(items), chunk_size):
        chunk = tuple(items[i:i + chunk_size])
        chunks.append(ChunkAssignment(items=chunk, starting_sequence_number=start))
        start += len(chunk)
    return chunks


def prepare_output_dir(destination_root: Path) -> Path:
    """Create `<destination_root>/SPL` and return it."""
    folder = Path(destination_root) / OUTPUT_SUBDIR
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise IoError(f"Failed to create output folder: {err}") from err
    return folder


class ChunkWorkerPool:
    """
    Worker-per-chunk scheduler for splitting a batch of images.

    Every chunk gets its own worker that handles its items strictly in order
    on a dedicated executor thread. Workers report one ItemOutcome per item
    through a shared queue; the pool drains the queue until every worker has
    signed off and then joins them all.
    """

    def __init__(
        self,
        job: ProcessingJob,
        chunk_size: int = CHUNK_SIZE,
        on_item_complete: Optional[ProgressCallback] = None,
    ) -> None:
        self.job = job
        self.chunks = partition_items(job.items, chunk_size)
        self.on_item_complete = on_item_complete

        self.output_dir = Path(job.destination_root) / OUTPUT_SUBDIR
        self.outcomes: List[ItemOutcome] = []
        self.completed_count = 0
        self.total_count = len(job.items)

    async def run(self) -> ExportResult:
        """
        Process the whole job.

        Returns:
            ExportResult with the number of items attempted, or with
            `error_message` set if the output folder could not be created
            or a worker died outside of item handling.
        """
        try:
            self.output_dir = prepare_output_dir(self.job.destination_root)
        except IoError as e:
            logger.error(str(e))
            return ExportResult(error_message=str(e))

        if not self.chunks:
            return ExportResult(processed_count=0)

        logger.info(f"Splitting {self.total_count} images in {len(self.chunks)} chunks into {self.output_dir}")
        start_time = time.time()

        queue: asyncio.Queue = asyncio.Queue()
        with ThreadPoolExecutor(max_workers=len(self.chunks), thread_name_prefix="split-chunk") as executor:
            tasks = [
                asyncio.create_task(self._run_chunk(chunk, queue, executor))
                for chunk in self.chunks
            ]
            try:
                await self._drain(queue, len(tasks))
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
            joined = await asyncio.gather(*tasks, return_exceptions=True)

        crashed = [r for r in joined if isinstance(r, BaseException)]
        if crashed:
            logger.error("Worker failed: %r", crashed[0])
            return ExportResult(error_message=f"Processing task failed: {crashed[0]}")

        succeeded, failed = self._split_outcomes()
        logger.info(
            f"Completed {len(succeeded)}/{self.total_count} images "
            f"({len(failed)} failed) in {time.time() - start_time:.2f}s"
        )
        return ExportResult(processed_count=self.total_count, succeeded=succeeded, failed=failed)

    async def _run_chunk(self, chunk: ChunkAssignment, queue: asyncio.Queue, executor: ThreadPoolExecutor) -> None:
        try:
            for sequence_number, item in zip(chunk.sequence_numbers, chunk.items):
                outcome = await self._process_item(item, sequence_number, executor)
                queue.put_nowait(outcome)
        finally:
            queue.put_nowait(_DONE)

    async def _process_item(self, item: ImageItem, sequence_number: int, executor: ThreadPoolExecutor) -> ItemOutcome:
        """Split a single item, turning any failure into a failure outcome."""
        loop = asyncio.get_running_loop()
        try:
            outputs = await loop.run_in_executor(
                executor, split_image, item.source_path, self.output_dir, sequence_number
            )
            return ItemOutcome(item=item, sequence_number=sequence_number, outputs=outputs)
        except Exception as e:
            logger.error(f"Failed to split {item.name}: {e}")
            return ItemOutcome(item=item, sequence_number=sequence_number, error=e)

    async def _drain(self, queue: asyncio.Queue, producers: int) -> None:
        finished = 0
        while finished < producers:
            message = await queue.get()
            if message is _DONE:
                finished += 1
                continue
            self.outcomes.append(message)
            self.completed_count += 1
            logger.debug(message.token)
            if self.on_item_complete:
                self.on_item_complete(message, self.completed_count, self.total_count)

    def _split_outcomes(self) -> Tuple[List[ItemOutcome], List[ItemOutcome]]:
        ordered = sorted(self.outcomes, key=lambda o: o.sequence_number)
        return [o for o in ordered if o.ok], [o for o in ordered if not o.ok]

    def get_progress(self) -> Tuple[int, int]:
        """Get current progress (completed, total)."""
        return self.completed_count, self.total_count


async def process_job_async(
    job: ProcessingJob,
    chunk_size: int = CHUNK_SIZE,
    on_item_complete: Optional[ProgressCallback] = None,
) -> ExportResult:
    """Run `job` on a ChunkWorkerPool inside the current event loop."""
    pool = ChunkWorkerPool(job, chunk_size=chunk_size, on_item_complete=on_item_complete)
    return await pool.run()


def process_job(
    job: ProcessingJob,
    chunk_size: int = CHUNK_SIZE,
    on_item_complete: Optional[ProgressCallback] = None,
) -> ExportResult:
    """Blocking wrapper around process_job_async for callers without an event loop."""
    return asyncio.run(process_job_async(job, chunk_size=chunk_size, on_item_complete=on_item_complete))
