"""Pipeline stages wrapping the external tools."""

from __future__ import annotations

import logging
from typing import List, Optional

from sbomscan.core import process
from sbomscan.core.config import ToolConfig
from sbomscan.core.orchestrator import Stage
from sbomscan.core.process import Runner
from sbomscan.runners.maven import CycloneDxStage, DependencyTreeStage, EffectivePomStage
from sbomscan.runners.osv import VulnerabilityScanStage

STAGE_TYPES = (DependencyTreeStage, EffectivePomStage, CycloneDxStage, VulnerabilityScanStage)


def default_stages(
    tools: ToolConfig,
    runner: Optional[Runner] = None,
    logger: Optional[logging.Logger] = None,
) -> List[Stage]:
    """Return the four stages in execution order."""

    runner = runner or process.run_command
    stages: List[Stage] = []
    for stage_type in STAGE_TYPES:
        step = stage_type(tools, runner=runner, logger=logger)
        stages.append(Stage(name=step.name, weight=step.weight, execute=step))
    return stages


__all__ = ["STAGE_TYPES", "default_stages"]
