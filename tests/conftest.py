from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from sbomscan.core.config import ToolConfig
from sbomscan.core.context import PipelineContext
from sbomscan.core.process import ProcessResult, ProcessStatus

POM = """<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.example</groupId>
  <artifactId>demo</artifactId>
  <version>1.0.0</version>
</project>
"""


class FakeToolchain:
    """Stands in for mvn and osv-scanner, writing placeholder outputs."""

    def __init__(self) -> None:
        self.calls: List[str] = []
        self.commands: List[Sequence[str]] = []
        self.exit_codes: Dict[str, int] = {}
        self.launch_failures: set = set()
        self.skip_outputs: set = set()

    def __call__(self, args: Sequence[str], cwd: Path, stdout_path: Optional[Path] = None) -> ProcessResult:
        step = self._step(args)
        self.calls.append(step)
        self.commands.append(list(args))
        if step in self.launch_failures:
            return ProcessResult(args=args, status=ProcessStatus.LAUNCH_FAILURE, reason=f"executable not found: {args[0]}")

        code = self.exit_codes.get(step, 0)
        if step not in self.skip_outputs:
            self._write_output(step, args, Path(cwd), stdout_path)
        if code == 0:
            return ProcessResult(args=args, status=ProcessStatus.SUCCESS, output=f"{step} ok", exit_code=0)
        return ProcessResult(args=args, status=ProcessStatus.EXIT_CODE, output=f"{step} exploded", exit_code=code)

    @staticmethod
    def _step(args: Sequence[str]) -> str:
        joined = " ".join(args)
        if "dependency:tree" in joined:
            return "dependency-tree"
        if "help:effective-pom" in joined:
            return "effective-pom"
        if ":makeAggregateBom" in joined:
            return "sbom"
        return "scan"

    @staticmethod
    def _property(args: Sequence[str], name: str) -> Path:
        prefix = f"-D{name}="
        return Path(next(arg[len(prefix):] for arg in args if arg.startswith(prefix)))

    def _write_output(self, step: str, args: Sequence[str], cwd: Path, stdout_path: Optional[Path]) -> None:
        if step == "dependency-tree":
            self._property(args, "outputFile").write_text("com.example:demo:jar:1.0.0\n")
        elif step == "effective-pom":
            self._property(args, "output").write_text(POM)
        elif step == "sbom":
            target = cwd / "target"
            target.mkdir(exist_ok=True)
            (target / "bom.xml").write_text('<bom xmlns="http://cyclonedx.org/schema/bom/1.4"/>')
        elif stdout_path is not None:
            Path(stdout_path).write_text('{"results": []}')


@pytest.fixture
def toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture
def tools() -> ToolConfig:
    return ToolConfig()


@pytest.fixture
def pom_file(tmp_path: Path) -> Path:
    path = tmp_path / "project" / "pom.xml"
    path.parent.mkdir()
    path.write_text(POM)
    return path


@pytest.fixture
def workspace(tmp_path: Path) -> PipelineContext:
    out = tmp_path / "out"
    out.mkdir()
    staged = out / "pom.xml"
    staged.write_text(POM)
    return PipelineContext(descriptor_path=staged, output_dir=out)
