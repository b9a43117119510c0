"""Publish scan artifacts to S3."""

from __future__ import annotations

import logging
import pathlib
from typing import Any, List, Optional, Tuple

import boto3

_LOG = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".json": "application/json",
    ".xml": "application/xml",
    ".txt": "text/plain",
}


def parse_s3_uri(uri: str) -> Tuple[str, str]:
    """Split ``s3://bucket/prefix`` into ``(bucket, prefix)``."""

    if not uri.startswith("s3://"):
        raise ValueError(f"Not an s3:// URI: {uri}")
    bucket, _, prefix = uri[len("s3://"):].partition("/")
    if not bucket:
        raise ValueError(f"Missing bucket in {uri}")
    return bucket, prefix.strip("/")


def upload_file(bucket: str, key: str, path: pathlib.Path, client: Optional[Any] = None) -> None:
    client = client or _client()
    content_type = CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")
    client.put_object(Bucket=bucket, Key=key, Body=path.read_bytes(), ContentType=content_type)


def upload_directory(
    directory: pathlib.Path,
    uri: str,
    client: Optional[Any] = None,
) -> List[str]:
    """Upload every regular file under *directory*; return the object keys written."""

    bucket, prefix = parse_s3_uri(uri)
    client = client or _client()
    keys: List[str] = []
    for path in sorted(directory.rglob("*")):
        if not path.is_file() or path.is_symlink():
            continue
        relative = path.relative_to(directory).as_posix()
        key = f"{prefix}/{relative}" if prefix else relative
        upload_file(bucket, key, path, client=client)
        _LOG.info("Uploaded %s to s3://%s/%s", path, bucket, key)
        keys.append(key)
    return keys


def _client() -> Any:
    return boto3.client("s3")
