from pathlib import Path

import pytest

from sbomscan import __main__ as entrypoint
from sbomscan.core import s3util
from sbomscan.core.errors import ErrorKind, StageError


def test_entrypoint_delegates_to_cli(monkeypatch: pytest.MonkeyPatch):
    captured: dict[str, object] = {}

    def fake_main(argv):  # pragma: no cover - exercised in test
        captured["argv"] = argv
        return 42

    monkeypatch.setattr(entrypoint.cli, "main", fake_main)
    result = entrypoint.main(["--check"])
    assert result == 42
    assert captured["argv"] == ["--check"]


class DummyS3Client:
    def __init__(self) -> None:
        self.put_calls: list[tuple[str, str, bytes, str]] = []

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str) -> None:  # noqa: N803 (boto style)
        self.put_calls.append((Bucket, Key, Body, ContentType))


def test_parse_s3_uri():
    assert s3util.parse_s3_uri("s3://bucket/reports/run-1/") == ("bucket", "reports/run-1")
    assert s3util.parse_s3_uri("s3://bucket") == ("bucket", "")
    with pytest.raises(ValueError):
        s3util.parse_s3_uri("https://bucket/reports")
    with pytest.raises(ValueError):
        s3util.parse_s3_uri("s3:///reports")


def test_upload_directory(tmp_path: Path):
    (tmp_path / "sbom.xml").write_text("<bom/>")
    (tmp_path / "sbom-vulnerabilities.json").write_text("{}")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "deps-tree.txt").write_text("tree")

    client = DummyS3Client()
    keys = s3util.upload_directory(tmp_path, "s3://bucket/scans/demo", client=client)

    assert keys == [
        "scans/demo/sbom-vulnerabilities.json",
        "scans/demo/sbom.xml",
        "scans/demo/sub/deps-tree.txt",
    ]
    uploaded = {key: (body, content_type) for _, key, body, content_type in client.put_calls}
    assert uploaded["scans/demo/sbom.xml"] == (b"<bom/>", "application/xml")
    assert uploaded["scans/demo/sbom-vulnerabilities.json"][1] == "application/json"
    assert uploaded["scans/demo/sub/deps-tree.txt"][1] == "text/plain"


def test_stage_error_describe_includes_tool_output():
    error = StageError("Analyzing Dependencies", "maven dependency:tree failed: exit status 1", ErrorKind.TOOL_EXIT,
                       output="[ERROR] Could not resolve dependencies\n")
    assert error.describe() == (
        "maven dependency:tree failed: exit status 1\n[ERROR] Could not resolve dependencies"
    )
    assert str(error) == "maven dependency:tree failed: exit status 1"
