import asyncio
import logging
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn

from .config import PROGRESS_LINE_OVERHEAD
from .logging_config import console as default_console
from .models import ProgressCallback

logger = logging.getLogger(__name__)


def expected_progress_total(count: int, targets: int) -> int:
    """Estimate of how many lines a whole run will print.

    Each target is expected to print one line per echo plus a header,
    a packet summary and a round-trip summary. The estimate is only used
    for display and may be off in either direction.
    """
    return (count + PROGRESS_LINE_OVERHEAD) * targets


class ProgressSink:
    """Single consumer of the progress channel.

    Counts events from every runner and renders the completion percentage
    in place. It stops once the expected total is reached or when the
    owning task is cancelled.
    """

    def __init__(
        self,
        expected_total: int,
        use_progress_bar: bool = True,
        callback: ProgressCallback | None = None,
        console: Optional[Console] = None,
    ) -> None:
        if expected_total <= 0:
            raise ValueError("expected_total must be positive")
        self.expected_total = expected_total
        self.use_progress_bar = use_progress_bar
        self.callback = callback
        self.console = console or default_console
        self.consumed = 0
        self.percent = 0.0

    def _advance(self) -> float:
        self.consumed += 1
        self.percent = min(100.0, self.consumed * 100.0 / self.expected_total)
        if self.callback:
            self.callback(self.percent)
        return self.percent

    async def run(self, channel: asyncio.Queue) -> int:
        progress = None
        task_id = None
        if self.use_progress_bar:
            progress = Progress(
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                TimeElapsedColumn(),
                console=self.console,
            )
            progress.start()
            task_id = progress.add_task("[cyan]Probing...", total=self.expected_total)

        try:
            while self.consumed < self.expected_total:
                await channel.get()
                self._advance()
                if progress and task_id is not None:
                    progress.update(task_id, completed=self.consumed)
            logger.debug(f"Progress sink reached expected total of {self.expected_total}")
        except asyncio.CancelledError:
            logger.debug(
                f"Progress sink cancelled at {self.consumed}/{self.expected_total} "
                f"({self.percent:.1f}%)"
            )
            raise
        finally:
            if progress:
                progress.stop()

        return self.consumed
