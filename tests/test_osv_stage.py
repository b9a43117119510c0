from dataclasses import replace
from pathlib import Path

import pytest

from sbomscan.core.context import vulnerability_report_path
from sbomscan.core.errors import ErrorKind, StageError
from sbomscan.runners.osv import ScanOutcome, VulnerabilityScanStage, classify_scan_result


@pytest.fixture
def scanned(workspace):
    workspace.sbom_path.write_text("<bom/>")
    return workspace


def test_classify_scan_result():
    assert classify_scan_result(0) is ScanOutcome.CLEAN
    assert classify_scan_result(1) is ScanOutcome.FINDINGS_PRESENT
    assert classify_scan_result(2) is ScanOutcome.ERROR
    assert classify_scan_result(127) is ScanOutcome.ERROR
    assert classify_scan_result(-9) is ScanOutcome.ERROR
    assert classify_scan_result(None) is ScanOutcome.ERROR


def test_report_path_replaces_extension():
    assert vulnerability_report_path(Path("out/sbom.xml")) == Path("out/sbom-vulnerabilities.json")
    assert vulnerability_report_path(Path("out/bom")) == Path("out/bom-vulnerabilities.json")


def test_clean_scan_writes_report(toolchain, tools, scanned):
    VulnerabilityScanStage(tools, runner=toolchain)(scanned)
    assert toolchain.commands[0] == [
        "osv-scanner",
        "--sbom",
        str(scanned.sbom_path.resolve()),
        "--format",
        "json",
    ]
    assert scanned.vulnerability_report_path.name == "sbom-vulnerabilities.json"
    assert scanned.vulnerability_report_path.read_text() == '{"results": []}'


def test_findings_are_advisory_without_exit_on_vuln(toolchain, tools, scanned):
    toolchain.exit_codes["scan"] = 1
    with pytest.raises(StageError) as excinfo:
        VulnerabilityScanStage(tools, runner=toolchain)(scanned)
    assert excinfo.value.advisory is True
    assert excinfo.value.kind is ErrorKind.FINDINGS


def test_findings_are_fatal_with_exit_on_vuln(toolchain, tools, scanned):
    toolchain.exit_codes["scan"] = 1
    context = replace(scanned, exit_on_vuln=True)
    with pytest.raises(StageError) as excinfo:
        VulnerabilityScanStage(tools, runner=toolchain)(context)
    assert excinfo.value.advisory is False
    assert excinfo.value.kind is ErrorKind.FINDINGS
    assert "sbom-vulnerabilities.json" in excinfo.value.message


@pytest.mark.parametrize("exit_on_vuln", [False, True])
def test_other_exit_codes_are_fatal(toolchain, tools, scanned, exit_on_vuln):
    toolchain.exit_codes["scan"] = 2
    context = replace(scanned, exit_on_vuln=exit_on_vuln)
    with pytest.raises(StageError) as excinfo:
        VulnerabilityScanStage(tools, runner=toolchain)(context)
    assert excinfo.value.advisory is False
    assert excinfo.value.kind is ErrorKind.TOOL_EXIT
    assert excinfo.value.exit_code == 2


def test_launch_failure_is_fatal(toolchain, tools, scanned):
    toolchain.launch_failures.add("scan")
    with pytest.raises(StageError) as excinfo:
        VulnerabilityScanStage(tools, runner=toolchain)(scanned)
    assert excinfo.value.kind is ErrorKind.LAUNCH_FAILURE
    assert "osv-scanner" in excinfo.value.message


def test_missing_sbom_is_reported_before_scanning(toolchain, tools, workspace):
    with pytest.raises(StageError) as excinfo:
        VulnerabilityScanStage(tools, runner=toolchain)(workspace)
    assert excinfo.value.kind is ErrorKind.MISSING_ARTIFACT
    assert toolchain.calls == []
