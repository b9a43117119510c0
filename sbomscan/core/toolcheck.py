"""Check that the external tools the pipeline drives are installed."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from typing import List, Optional

from sbomscan.core.config import ToolConfig

_LOG = logging.getLogger(__name__)

INSTALL_HINTS = {
    "mvn": "install Maven, e.g. `brew install maven` or `sudo apt-get install -y maven`",
    "osv-scanner": "install OSV-Scanner, e.g. `go install github.com/google/osv-scanner/cmd/osv-scanner@latest`",
}


@dataclass(frozen=True)
class ToolStatus:
    name: str
    path: Optional[str]

    @property
    def installed(self) -> bool:
        return self.path is not None


def check_tools(tools: ToolConfig, logger: Optional[logging.Logger] = None) -> List[ToolStatus]:
    log = logger or _LOG
    statuses: List[ToolStatus] = []
    for name in tools.required_tools():
        status = ToolStatus(name=name, path=shutil.which(name))
        if status.installed:
            log.info("%s is already installed (%s)", name, status.path)
        else:
            hint = INSTALL_HINTS.get(os.path.basename(name), "make sure it is on PATH")
            log.warning("%s is not installed: %s", name, hint)
        statuses.append(status)
    return statuses
