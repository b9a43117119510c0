"""Error taxonomy shared by the stager, the stages and the orchestrator."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Why a stage failed."""

    LAUNCH_FAILURE = "launch-failure"
    TOOL_EXIT = "tool-exit"
    MISSING_ARTIFACT = "missing-artifact"
    FINDINGS = "findings"
    IO = "io"


class SetupError(Exception):
    """Raised before any stage runs when the workspace cannot be prepared."""


class ConfigError(SetupError):
    """Raised when the tool configuration file is malformed."""


class StageError(Exception):
    """Failure reported by a pipeline stage.

    Advisory errors are logged by the orchestrator and do not halt the run;
    every other stage error is fatal.
    """

    def __init__(
        self,
        stage_name: str,
        message: str,
        kind: ErrorKind,
        advisory: bool = False,
        output: str = "",
        exit_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.stage_name = stage_name
        self.message = message
        self.kind = kind
        self.advisory = advisory
        self.output = output
        self.exit_code = exit_code

    def describe(self) -> str:
        text = self.message
        if self.output.strip():
            text = f"{text}\n{self.output.rstrip()}"
        return text

    def __repr__(self) -> str:
        return (
            f"StageError(stage_name={self.stage_name!r}, kind={self.kind.value!r}, "
            f"advisory={self.advisory!r}, message={self.message!r})"
        )
