"""Core pipeline machinery for the SBOM scanner."""

__all__ = [
    "config",
    "context",
    "errors",
    "logs",
    "orchestrator",
    "process",
    "progress",
    "s3util",
    "stager",
    "toolcheck",
]
