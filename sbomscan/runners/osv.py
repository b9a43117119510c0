"""Vulnerability scanning of the generated SBOM with OSV-Scanner."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from sbomscan.core.config import ToolConfig
from sbomscan.core.context import PipelineContext
from sbomscan.core.errors import ErrorKind, StageError
from sbomscan.core.process import ProcessStatus, Runner, run_command
from sbomscan.runners.base import tool_failure

FINDINGS_EXIT_CODE = 1


class ScanOutcome(str, Enum):
    CLEAN = "clean"
    FINDINGS_PRESENT = "findings-present"
    ERROR = "error"


def classify_scan_result(exit_code: Optional[int]) -> ScanOutcome:
    """Map an osv-scanner exit status to an outcome.

    osv-scanner exits with 1 when it found vulnerabilities; that is a
    result, not a crash. ``None`` means the scanner never ran.
    """

    if exit_code == 0:
        return ScanOutcome.CLEAN
    if exit_code == FINDINGS_EXIT_CODE:
        return ScanOutcome.FINDINGS_PRESENT
    return ScanOutcome.ERROR


class VulnerabilityScanStage:
    name = "Scanning for Vulnerabilities"
    weight = 30

    def __init__(
        self,
        tools: ToolConfig,
        runner: Optional[Runner] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.tools = tools
        self.runner = runner or run_command
        self.log = logger or logging.getLogger(__name__)

    def command(self, context: PipelineContext) -> List[str]:
        return [
            self.tools.osv_scanner,
            "--sbom",
            str(context.sbom_path.resolve()),
            "--format",
            "json",
        ]

    def __call__(self, context: PipelineContext) -> None:
        sbom = context.sbom_path
        if not sbom.is_file():
            raise StageError(self.name, f"SBOM file not found: {sbom.resolve()}", ErrorKind.MISSING_ARTIFACT)

        report = context.vulnerability_report_path
        result = self.runner(
            self.command(context),
            cwd=context.output_dir.resolve(),
            stdout_path=report.resolve(),
        )
        exit_code = result.exit_code if result.status is not ProcessStatus.LAUNCH_FAILURE else None
        outcome = classify_scan_result(exit_code)

        if outcome is ScanOutcome.CLEAN:
            self.log.info("Vulnerability report written to %s", report)
            return
        if outcome is ScanOutcome.FINDINGS_PRESENT:
            if context.exit_on_vuln:
                raise StageError(
                    self.name,
                    f"vulnerabilities found, see details in: {report}",
                    ErrorKind.FINDINGS,
                    exit_code=exit_code,
                )
            raise StageError(
                self.name,
                f"Vulnerabilities found! Details: {report}",
                ErrorKind.FINDINGS,
                advisory=True,
                exit_code=exit_code,
            )
        raise tool_failure(self.name, "osv-scanner", result)
