"""Sequential, fail-fast execution of the pipeline stages."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from sbomscan.core.context import PipelineContext
from sbomscan.core.errors import StageError
from sbomscan.core.progress import NullProgressReporter, ProgressReporter

MAX_PROGRESS = 100


class PipelineState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Stage:
    """One named step of the pipeline and its share of the progress bar."""

    name: str
    weight: int
    execute: Callable[[PipelineContext], None]

    def __post_init__(self) -> None:
        if not 0 <= self.weight <= MAX_PROGRESS:
            raise ValueError(f"Stage weight must be within 0..{MAX_PROGRESS}: {self.name}={self.weight}")


@dataclass
class PipelineResult:
    state: PipelineState
    completed: List[str] = field(default_factory=list)
    advisories: List[StageError] = field(default_factory=list)
    failure: Optional[StageError] = None
    progress: int = 0
    elapsed: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.COMPLETED


class PipelineOrchestrator:
    """Runs a fixed, ordered list of stages exactly once.

    A stage succeeds by returning and fails by raising :class:`StageError`.
    Advisory errors are logged as warnings and the next stage runs; the first
    fatal error stops the pipeline. Nothing is retried or rolled back.
    """

    def __init__(
        self,
        stages: Sequence[Stage],
        reporter: Optional[ProgressReporter] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._stages = tuple(stages)
        total = sum(stage.weight for stage in self._stages)
        if total > MAX_PROGRESS:
            raise ValueError(f"Stage weights add up to {total}, more than {MAX_PROGRESS}")
        self._reporter = reporter or NullProgressReporter()
        self._log = logger or logging.getLogger(__name__)
        self._clock = clock
        self._state = PipelineState.PENDING
        self._current: Optional[int] = None
        self._progress = 0

    @property
    def stages(self) -> Sequence[Stage]:
        return self._stages

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def current_stage(self) -> Optional[int]:
        """Index of the running stage, ``None`` outside of :meth:`run`."""
        return self._current

    @property
    def progress(self) -> int:
        return self._progress

    def run(self, context: PipelineContext) -> PipelineResult:
        if self._state is not PipelineState.PENDING:
            raise RuntimeError(f"Pipeline already {self._state.value}")

        started = self._clock()
        result = PipelineResult(state=PipelineState.RUNNING)
        self._state = PipelineState.RUNNING
        self._notify("on_pipeline_start", MAX_PROGRESS)

        finished = False
        try:
            self._run_stages(context, result)
            finished = result.failure is None
        finally:
            # Unexpected exceptions still close the reporter and leave a final state.
            self._current = None
            self._state = PipelineState.COMPLETED if finished else PipelineState.FAILED
            result.state = self._state
            result.progress = self._progress
            result.elapsed = self._clock() - started
            self._notify("on_pipeline_finish", finished)
        return result

    def _run_stages(self, context: PipelineContext, result: PipelineResult) -> None:
        count = len(self._stages)
        for index, stage in enumerate(self._stages):
            self._current = index
            self._log.info(stage.name)
            self._notify("on_stage_start", stage.name, index + 1, count)
            try:
                stage.execute(context)
            except StageError as exc:
                if not exc.advisory:
                    self._log.debug("Stage %s failed (%s)", stage.name, exc.kind.value)
                    result.failure = exc
                    return
                self._log.warning("%s", exc.message)
                result.advisories.append(exc)
            result.completed.append(stage.name)
            self._advance(stage.weight)
            self._notify("on_stage_complete", stage.name, self._progress)

    def _advance(self, weight: int) -> None:
        self._progress = min(MAX_PROGRESS, self._progress + max(weight, 0))

    def _notify(self, event: str, *args: object) -> None:
        try:
            getattr(self._reporter, event)(*args)
        except Exception as exc:  # reporters never affect control flow
            self._log.warning("Progress reporter failed on %s: %s", event, exc)
