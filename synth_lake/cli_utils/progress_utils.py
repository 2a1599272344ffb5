from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressTracker:
    """
    Progress bar over the chunks of one generation run.

    Usage:
        with ProgressTracker(console, "scores.csv", total_chunks) as on_chunk:
            generate_from_config(config, on_chunk=on_chunk)
    """

    def __init__(
        self,
        console: Optional[Console],
        description: str,
        total: int,
        spinner_name: str = "dots",
    ):
        self.console = console
        self.description = description
        self.total = total
        self.spinner_name = spinner_name
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def create_progress_bar(self) -> Optional[Progress]:
        """Create the rich progress bar; None without a console or with nothing to track."""
        if not self.console or self.total < 1:
            return None

        self._progress = Progress(
            SpinnerColumn(spinner_name=self.spinner_name),
            MofNCompleteColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        return self._progress

    def on_chunk(self, chunks_done: int, chunks_total: int, rows_in_chunk: int) -> None:
        """Chunk callback for BatchGenerator."""
        if self._progress and self._task_id is not None:
            self._progress.update(self._task_id, completed=chunks_done, total=chunks_total)

    def __enter__(self):
        """Context manager entry. Returns the chunk callback."""
        if self.create_progress_bar():
            self._progress.__enter__()
            self._task_id = self._progress.add_task(
                f"[cyan]Generating:[/cyan] {self.description}", total=self.total
            )
        return self.on_chunk

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        if self._progress:
            return self._progress.__exit__(exc_type, exc_val, exc_tb)
        return False
