"""Process exit codes of the sbomscan command.

- 0: success, including advisory vulnerability findings
- 1: vulnerabilities found while ``--exit-on-vuln`` is set
- 2: a pipeline stage failed
- 3: setup failed before any stage ran
- 4: ``--check`` found missing tools
- 5: uploading artifacts failed
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_VULNERABILITIES_FOUND = 1
EXIT_STAGE_FAILURE = 2
EXIT_SETUP_ERROR = 3
EXIT_MISSING_TOOLS = 4
EXIT_UPLOAD_FAILURE = 5
