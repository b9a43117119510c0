"""Run context and the fixed artifact layout of the output directory."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass

STAGED_DESCRIPTOR_NAME = "pom.xml"
DEPENDENCY_TREE_NAME = "deps-tree.txt"
EFFECTIVE_DESCRIPTOR_NAME = "effective-pom.xml"
SBOM_NAME = "sbom.xml"
VULNERABILITY_REPORT_SUFFIX = "-vulnerabilities.json"


def vulnerability_report_path(sbom_path: pathlib.Path) -> pathlib.Path:
    """Return the sibling report path, e.g. ``sbom.xml`` -> ``sbom-vulnerabilities.json``."""

    return sbom_path.with_name(sbom_path.stem + VULNERABILITY_REPORT_SUFFIX)


@dataclass(frozen=True)
class PipelineContext:
    """Inputs shared by every stage of a single run."""

    descriptor_path: pathlib.Path
    output_dir: pathlib.Path
    exit_on_vuln: bool = False

    @property
    def dependency_tree_path(self) -> pathlib.Path:
        return self.output_dir / DEPENDENCY_TREE_NAME

    @property
    def effective_descriptor_path(self) -> pathlib.Path:
        return self.output_dir / EFFECTIVE_DESCRIPTOR_NAME

    @property
    def sbom_path(self) -> pathlib.Path:
        return self.output_dir / SBOM_NAME

    @property
    def vulnerability_report_path(self) -> pathlib.Path:
        return vulnerability_report_path(self.sbom_path)
