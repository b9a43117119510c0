"""Maven-driven stages: dependency tree, effective POM and CycloneDX SBOM."""

from __future__ import annotations

import logging
import os
import pathlib
import shutil
from abc import ABC, abstractmethod
from typing import List, Optional

from sbomscan.core.config import ToolConfig
from sbomscan.core.context import PipelineContext
from sbomscan.core.errors import ErrorKind, StageError
from sbomscan.core.process import Runner, run_command
from sbomscan.runners.base import require_artifact, tool_failure

SCRATCH_DIR_NAME = "target"
PLUGIN_OUTPUT_NAME = "bom.xml"


class MavenStage(ABC):
    """Base for stages that run a single Maven goal against the staged POM."""

    name = ""
    weight = 0

    def __init__(
        self,
        tools: ToolConfig,
        runner: Optional[Runner] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.tools = tools
        self.runner = runner or run_command
        self.log = logger or logging.getLogger(__name__)

    @abstractmethod
    def command(self, context: PipelineContext) -> List[str]:
        """Full argument vector for this stage's Maven invocation."""

    def _mvn(self, goal: str, context: PipelineContext, *properties: str) -> List[str]:
        return [
            self.tools.maven,
            *self.tools.maven_options,
            goal,
            "-f",
            str(context.descriptor_path.resolve()),
            *properties,
        ]

    def _run(self, context: PipelineContext, description: str) -> None:
        result = self.runner(self.command(context), cwd=context.output_dir.resolve())
        if not result.ok:
            raise tool_failure(self.name, description, result)


class DependencyTreeStage(MavenStage):
    name = "Analyzing Dependencies"
    weight = 20

    def command(self, context: PipelineContext) -> List[str]:
        return self._mvn(
            "dependency:tree",
            context,
            f"-DoutputFile={context.dependency_tree_path.resolve()}",
            "-DoutputType=text",
        )

    def __call__(self, context: PipelineContext) -> None:
        self._run(context, "maven dependency:tree")
        require_artifact(self.name, context.dependency_tree_path, "maven dependency:tree")
        self.log.info("Dependency tree written to %s", context.dependency_tree_path)


class EffectivePomStage(MavenStage):
    name = "Generating Effective POM"
    weight = 20

    def command(self, context: PipelineContext) -> List[str]:
        return self._mvn(
            "help:effective-pom",
            context,
            f"-Doutput={context.effective_descriptor_path.resolve()}",
        )

    def __call__(self, context: PipelineContext) -> None:
        self._run(context, "effective-pom generation")
        require_artifact(self.name, context.effective_descriptor_path, "maven help:effective-pom")
        self.log.info("Effective POM written to %s", context.effective_descriptor_path)


class CycloneDxStage(MavenStage):
    """Generate the aggregate BOM in a scratch ``target/`` dir and move it into place.

    The plugin always writes ``target/bom.xml`` next to the staged POM; the
    stage checks that file exists instead of trusting the exit status.
    """

    name = "Generating CycloneDX SBOM"
    weight = 30

    def scratch_dir(self, context: PipelineContext) -> pathlib.Path:
        return context.output_dir / SCRATCH_DIR_NAME

    def command(self, context: PipelineContext) -> List[str]:
        return self._mvn(
            f"{self.tools.cyclonedx_plugin}:makeAggregateBom",
            context,
            "-DoutputFormat=xml",
            f"-DoutputFile={PLUGIN_OUTPUT_NAME}",
        )

    def __call__(self, context: PipelineContext) -> None:
        scratch = self.scratch_dir(context)
        try:
            scratch.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StageError(self.name, f"failed to create target directory: {exc}", ErrorKind.IO) from exc

        self._run(context, "cyclonedx generation")

        produced = scratch / PLUGIN_OUTPUT_NAME
        require_artifact(self.name, produced, "cyclonedx generation")
        try:
            os.replace(produced, context.sbom_path)
        except OSError as exc:
            raise StageError(self.name, f"failed to move SBOM to output dir: {exc}", ErrorKind.IO) from exc

        self._cleanup(scratch)
        self.log.info("CycloneDX BOM written to %s", context.sbom_path)

    def _cleanup(self, scratch: pathlib.Path) -> None:
        try:
            shutil.rmtree(scratch)
        except OSError as exc:
            self.log.warning("Failed to clean up target directory: %s", exc)
