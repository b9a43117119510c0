"""Prepare the output directory and stage the project descriptor into it."""

from __future__ import annotations

import logging
import os
import pathlib
import shutil
import tempfile

from sbomscan.core.context import STAGED_DESCRIPTOR_NAME
from sbomscan.core.errors import SetupError

_LOG = logging.getLogger(__name__)


def stage_descriptor(
    descriptor: pathlib.Path,
    output_dir: pathlib.Path,
    staged_name: str = STAGED_DESCRIPTOR_NAME,
) -> pathlib.Path:
    """Empty *output_dir* and copy *descriptor* into it as *staged_name*.

    Returns the path of the staged copy. Every entry already present in the
    directory is discarded, so repeated runs leave the same layout behind.
    """

    descriptor = pathlib.Path(descriptor)
    output_dir = pathlib.Path(output_dir)

    if not descriptor.is_file():
        raise SetupError(f"POM file not found: {descriptor}")
    if not os.access(descriptor, os.R_OK):
        raise SetupError(f"POM file is not readable: {descriptor}")
    if _is_within(descriptor, output_dir):
        raise SetupError(
            f"POM file {descriptor} lives inside the output directory {output_dir}; "
            "it would be removed while cleaning"
        )

    ensure_directory(output_dir)
    clean_directory(output_dir)

    target = output_dir / staged_name
    _atomic_copy(descriptor, target)
    _LOG.info("Copied POM file to %s", target)
    return target


def ensure_directory(path: pathlib.Path) -> None:
    if path.exists() and not path.is_dir():
        raise SetupError(f"Output path exists and is not a directory: {path}")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SetupError(f"Failed to create directory {path}: {exc}") from exc


def clean_directory(path: pathlib.Path) -> None:
    """Remove every entry of *path* without following symlinks out of it."""

    try:
        entries = sorted(path.iterdir())
    except OSError as exc:
        raise SetupError(f"Failed to read directory {path}: {exc}") from exc
    for entry in entries:
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except OSError as exc:
            raise SetupError(f"Failed to clean directory {path}: {exc}") from exc
    if entries:
        _LOG.debug("Removed %d stale entries from %s", len(entries), path)


def _atomic_copy(source: pathlib.Path, target: pathlib.Path) -> None:
    # Partial copies stay under a temporary name and never replace the target.
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".partial", dir=target.parent)
    tmp_path = pathlib.Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as dst, open(source, "rb") as src:
            shutil.copyfileobj(src, dst)
        os.chmod(tmp_path, _new_file_mode())
        os.replace(tmp_path, target)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise SetupError(f"Failed to copy POM file to {target}: {exc}") from exc


def _new_file_mode() -> int:
    """Mode a freshly created file gets: 0o666 filtered by the process umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _is_within(path: pathlib.Path, directory: pathlib.Path) -> bool:
    try:
        path.resolve().relative_to(directory.resolve())
    except ValueError:
        return False
    return True
