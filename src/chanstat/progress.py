"""Progress reporting for long log runs."""

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeRemainingColumn


class ProgressBar:
    """A single rich progress bar: start(), tick() as work completes, end()."""

    def __init__(self, console: Console | None = None):
        self.console = console
        self._progress: Progress | None = None
        self._task = None

    def start(self, title: str, total: int) -> None:
        self._progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(bar_width=20),
            MofNCompleteColumn(),
            TimeRemainingColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task = self._progress.add_task(title, total=total)

    def tick(self, advance: int = 1) -> None:
        if self._progress is not None:
            self._progress.advance(self._task, advance)

    def end(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task = None


class NullProgress:
    """Same interface as ProgressBar, shows nothing."""

    def start(self, title: str, total: int) -> None:
        pass

    def tick(self, advance: int = 1) -> None:
        pass

    def end(self) -> None:
        pass
