"""Command-line interface for generating and scanning a Maven project's SBOM."""

from __future__ import annotations

import argparse
import logging
import pathlib
from typing import List

from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from sbomscan import exit_codes
from sbomscan.core import s3util, stager, toolcheck
from sbomscan.core.config import DEFAULT_CONFIG_PATH, ToolConfig, load_tool_config
from sbomscan.core.context import PipelineContext
from sbomscan.core.errors import ErrorKind, SetupError
from sbomscan.core.logs import build_logger
from sbomscan.core.orchestrator import PipelineOrchestrator, PipelineResult
from sbomscan.core.progress import NullProgressReporter, ProgressReporter, RichProgressReporter
from sbomscan.runners import default_stages

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sbomscan",
        description="SBOM Scanner - generate a CycloneDX SBOM for a Maven project and scan it with OSV-Scanner",
    )
    parser.add_argument("-f", "--file", type=pathlib.Path, default=pathlib.Path("data/pom.xml"), help="Path to POM file")
    parser.add_argument("-o", "--output", type=pathlib.Path, default=pathlib.Path("scan-results"), help="Output directory")
    parser.add_argument(
        "-e",
        "--exit-on-vuln",
        action="store_true",
        help="Exit with an error when vulnerabilities are found (for CI/CD); by default findings are only reported",
    )
    parser.add_argument("-c", "--check", action="store_true", help="Check that the required tools are installed")
    parser.add_argument("--config", type=pathlib.Path, default=DEFAULT_CONFIG_PATH, help="Tool configuration YAML file")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO", help="Logging verbosity")
    parser.add_argument("--upload", metavar="S3_URI", help="Upload the output directory to s3://bucket/prefix after a successful run")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    log = build_logger(args.log_level, console=console)

    try:
        tools = load_tool_config(args.config)
    except SetupError as exc:
        log.error("%s", exc)
        return exit_codes.EXIT_SETUP_ERROR

    if args.check:
        return _check(tools, log)

    if args.upload:
        try:
            s3util.parse_s3_uri(args.upload)
        except ValueError as exc:
            log.error("%s", exc)
            return exit_codes.EXIT_SETUP_ERROR

    try:
        staged = stager.stage_descriptor(args.file, args.output)
    except SetupError as exc:
        log.error("%s", exc)
        return exit_codes.EXIT_SETUP_ERROR

    context = PipelineContext(descriptor_path=staged, output_dir=args.output, exit_on_vuln=args.exit_on_vuln)
    orchestrator = PipelineOrchestrator(
        default_stages(tools, logger=log),
        reporter=_reporter(console, args.no_progress),
        logger=log,
    )
    result = orchestrator.run(context)

    if not result.succeeded:
        return _report_failure(result, log)

    console.print(f"\nCompleted in {round(result.elapsed)}s")
    log.info("Process completed successfully!")

    if args.upload:
        return _upload(args.output, args.upload, log)
    return exit_codes.EXIT_SUCCESS


def _check(tools: ToolConfig, log: logging.Logger) -> int:
    statuses = toolcheck.check_tools(tools, logger=log)
    missing = [status.name for status in statuses if not status.installed]
    if missing:
        log.error("Dependency check failed, missing: %s", ", ".join(missing))
        return exit_codes.EXIT_MISSING_TOOLS
    log.info("All required dependencies are installed")
    return exit_codes.EXIT_SUCCESS


def _reporter(console: Console, disabled: bool) -> ProgressReporter:
    if disabled or not console.is_terminal:
        return NullProgressReporter()
    return RichProgressReporter(console=console)


def _report_failure(result: PipelineResult, log: logging.Logger) -> int:
    failure = result.failure
    if failure is None:
        return exit_codes.EXIT_STAGE_FAILURE
    log.error("%s error: %s", failure.stage_name, failure.describe())
    if failure.kind is ErrorKind.FINDINGS:
        return exit_codes.EXIT_VULNERABILITIES_FOUND
    return exit_codes.EXIT_STAGE_FAILURE


def _upload(output_dir: pathlib.Path, uri: str, log: logging.Logger) -> int:
    try:
        keys = s3util.upload_directory(output_dir, uri)
    except (BotoCoreError, ClientError, OSError) as exc:
        log.error("Failed to upload artifacts to %s: %s", uri, exc)
        return exit_codes.EXIT_UPLOAD_FAILURE
    log.info("Uploaded %d artifacts to %s", len(keys), uri)
    return exit_codes.EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
