"""Run external tools and classify how they terminated."""

from __future__ import annotations

import logging
import pathlib
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

_LOG = logging.getLogger(__name__)


class ProcessStatus(str, Enum):
    SUCCESS = "success"
    EXIT_CODE = "exit-code"
    LAUNCH_FAILURE = "launch-failure"


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one external command.

    ``output`` holds combined stdout/stderr, or only stderr when stdout was
    redirected into a file.
    """

    args: Sequence[str]
    status: ProcessStatus
    output: str = ""
    exit_code: Optional[int] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ProcessStatus.SUCCESS

    @property
    def program(self) -> str:
        return self.args[0] if self.args else ""


Runner = Callable[..., ProcessResult]


def run_command(
    args: Sequence[str],
    cwd: pathlib.Path,
    stdout_path: Optional[pathlib.Path] = None,
) -> ProcessResult:
    """Run *args* in *cwd* to completion.

    Never raises for a non-zero exit or a process that cannot be started; the
    caller decides what an exit code means.
    """

    cmd = [str(arg) for arg in args]
    _LOG.debug("Running %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        if stdout_path is None:
            completed = subprocess.run(
                cmd,
                cwd=cwd,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        else:
            with open(stdout_path, "wb") as handle:
                completed = subprocess.run(
                    cmd,
                    cwd=cwd,
                    check=False,
                    stdout=handle,
                    stderr=subprocess.PIPE,
                    text=True,
                    errors="replace",
                )
    except FileNotFoundError as exc:
        missing = exc.filename or cmd[0]
        if str(missing) == str(cwd) or str(missing) == str(stdout_path):
            return _launch_failure(cmd, f"{missing}: {exc.strerror or exc}")
        return _launch_failure(cmd, f"executable not found: {cmd[0]}")
    except OSError as exc:
        return _launch_failure(cmd, f"{cmd[0]}: {exc.strerror or exc}")

    output = completed.stdout if stdout_path is None else completed.stderr
    output = output or ""
    if completed.returncode == 0:
        return ProcessResult(args=cmd, status=ProcessStatus.SUCCESS, output=output, exit_code=0)
    return ProcessResult(
        args=cmd,
        status=ProcessStatus.EXIT_CODE,
        output=output,
        exit_code=completed.returncode,
    )


def _launch_failure(cmd: Sequence[str], reason: str) -> ProcessResult:
    _LOG.debug("Could not launch %s: %s", cmd[0], reason)
    return ProcessResult(args=cmd, status=ProcessStatus.LAUNCH_FAILURE, reason=reason)
