"""Generate a CycloneDX SBOM for a Maven project and scan it for vulnerabilities."""

__version__ = "0.1.0"
