"""Progress observers for the pipeline.

Reporters only observe; the orchestrator ignores anything they raise.
"""

from __future__ import annotations

from typing import Optional, Protocol

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


class ProgressReporter(Protocol):
    """Observer interface for pipeline progress events."""

    def on_pipeline_start(self, total: int) -> None:
        ...

    def on_stage_start(self, name: str, index: int, count: int) -> None:
        ...

    def on_stage_complete(self, name: str, position: int) -> None:
        ...

    def on_pipeline_finish(self, succeeded: bool) -> None:
        ...


class NullProgressReporter:
    """Reporter for headless runs and tests."""

    def on_pipeline_start(self, total: int) -> None:
        pass

    def on_stage_start(self, name: str, index: int, count: int) -> None:
        pass

    def on_stage_complete(self, name: str, position: int) -> None:
        pass

    def on_pipeline_finish(self, succeeded: bool) -> None:
        pass


class RichProgressReporter:
    """Transient progress bar, cleared once the pipeline finishes."""

    def __init__(self, console: Optional[Console] = None, description: str = "Running SBOM Scan") -> None:
        self._description = description
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[cyan]{task.description}"),
            BarColumn(bar_width=30, complete_style="green"),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self._task: Optional[TaskID] = None

    def on_pipeline_start(self, total: int) -> None:
        self._progress.start()
        self._task = self._progress.add_task(self._description, total=total)

    def on_stage_start(self, name: str, index: int, count: int) -> None:
        if self._task is not None:
            self._progress.update(self._task, description=f"{name} ({index}/{count})")

    def on_stage_complete(self, name: str, position: int) -> None:
        if self._task is not None:
            self._progress.update(self._task, completed=position)

    def on_pipeline_finish(self, succeeded: bool) -> None:
        self._progress.stop()
        self._task = None
