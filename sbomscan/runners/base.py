"""Helpers shared by the tool-specific stages."""

from __future__ import annotations

import pathlib

from sbomscan.core.errors import ErrorKind, StageError
from sbomscan.core.process import ProcessResult, ProcessStatus


def tool_failure(stage_name: str, description: str, result: ProcessResult) -> StageError:
    """Turn an unsuccessful :class:`ProcessResult` into a fatal stage error."""

    if result.status is ProcessStatus.LAUNCH_FAILURE:
        return StageError(
            stage_name,
            f"{description} could not start {result.program}: {result.reason}",
            ErrorKind.LAUNCH_FAILURE,
        )
    return StageError(
        stage_name,
        f"{description} failed: exit status {result.exit_code}",
        ErrorKind.TOOL_EXIT,
        output=result.output,
        exit_code=result.exit_code,
    )


def require_artifact(stage_name: str, path: pathlib.Path, produced_by: str) -> None:
    """Fail when *path* is absent even though *produced_by* reported success."""

    if not path.is_file():
        raise StageError(
            stage_name,
            f"{produced_by} reported success but did not write {path}",
            ErrorKind.MISSING_ARTIFACT,
        )
