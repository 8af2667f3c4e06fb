#!/usr/bin/env python3
"""
rich_ui.py: Rich-based terminal front end for image-rename-split.

Loads the selected files, shows the resulting order, asks for a destination
when none was given and runs the export with a live progress bar.
"""

import asyncio
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn
from rich.prompt import Prompt
from rich.table import Table

from ..core.collection import ImageCollection
from ..core.errors import DialogCancelled
from ..core.models import ExportResult, ItemOutcome, Notification, NotificationType
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

NOTIFICATION_STYLES = {
    NotificationType.INFO: "blue",
    NotificationType.SUCCESS: "bold green",
    NotificationType.ERROR: "bold red",
    NotificationType.PROCESSING: "yellow",
}


class RichSplitUI:
    """Terminal UI driving an ImageCollection through load and export."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.collection = ImageCollection()
        self.progress: Optional[Progress] = None
        self.task_id = None

    def show(self, notification: Optional[Notification]) -> None:
        if notification is None:
            return
        style = NOTIFICATION_STYLES.get(notification.notification_type, "")
        self.console.print(notification.message, style=style)

    def _create_table(self) -> Table:
        table = Table(title="Export order", show_lines=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Id", justify="right", style="dim")
        table.add_column("File")
        for position, item in enumerate(self.collection, start=1):
            table.add_row(f"{position:02d}", str(item.id), item.name)
        return table

    def load(self, paths: List[Path]) -> bool:
        if not paths:
            self.console.print("No files selected", style=NOTIFICATION_STYLES[NotificationType.INFO])
            return False
        with self.console.status("Loading images..."):
            result = self.collection.load(paths)
        for skipped in result.skipped:
            self.console.print(f"  skipped {skipped}", style="dim")
        self.show(self.collection.notification)
        if result.ok:
            self.console.print(self._create_table())
        return result.ok

    def ask_destination(self) -> Path:
        """
        Prompt for the output folder, defaulting to the folder of the first image.

        Raises:
            DialogCancelled: if the user enters nothing.
        """
        default = str(self.collection.folder_path) if self.collection.folder_path else ""
        answer = Prompt.ask("Select folder to save split images", default=default, console=self.console)
        if not answer or not answer.strip():
            raise DialogCancelled("Save location cancelled")
        return Path(answer.strip()).expanduser()

    def _on_item_complete(self, outcome: ItemOutcome, completed: int, total: int) -> None:
        style = "green" if outcome.ok else "red"
        self.console.print(f"  {outcome.token}", style=style)
        if self.progress is not None:
            self.progress.update(self.task_id, completed=completed, total=total)

    async def export(self, destination: Path) -> ExportResult:
        self.progress = Progress(
            SpinnerColumn("dots8"),
            TextColumn("[bold yellow]Processing images..."),
            BarColumn(bar_width=None),
            TextColumn("({task.completed}/{task.total})"),
            TimeElapsedColumn(),
            console=self.console,
        )
        with self.progress:
            self.task_id = self.progress.add_task("split", total=len(self.collection))
            result = await self.collection.export_async(destination, on_item_complete=self._on_item_complete)
        self.show(self.collection.notification)
        if result.failed:
            self.console.print(f"{len(result.failed)} image(s) could not be split", style="red")
        return result

    def run_session(self, paths: List[Path], destination: Optional[Path] = None) -> int:
        """Run one load/export round. Returns a process exit code."""
        if not self.load(paths):
            return 0 if not paths else 1
        if destination is None:
            try:
                destination = self.ask_destination()
            except DialogCancelled:
                self.show(self.collection.cancel_export())
                return 0
        result = asyncio.run(self.export(destination))
        return 0 if result.ok else 1

    @staticmethod
    def run(paths: List[Path], destination: Optional[Path] = None) -> int:
        """Convenience method to launch the Rich UI."""
        ui = RichSplitUI()
        return ui.run_session(paths, destination)
