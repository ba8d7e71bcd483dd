"""Command line entry point running the startup battery before a deploy starts serving."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from startup_diagnostics.checks import CheckContext
from startup_diagnostics.config import DiagnosticsSettings, load_config, settings_from_env
from startup_diagnostics.errors import StartupDiagnosticsError
from startup_diagnostics.observability.logging import bootstrap_logging_from_settings
from startup_diagnostics.runner import DiagnosticsRunner

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CHECKS_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="startup-diagnostics",
        description="Run startup environment checks for an application",
    )
    parser.add_argument("application", help="Application identifier (MCDA, GeMTC, Patavi)")
    parser.add_argument("--config-dir", type=Path, help="Directory holding appsettings*.json")
    parser.add_argument("--env", help="Configuration environment overlay to apply")
    parser.add_argument(
        "--from-env",
        action="store_true",
        help="Read settings from PATAVI_* / DATABASE_URL variables instead of config files",
    )
    parser.add_argument("--report-file", type=Path, help="Write the HTML report here on failure")
    return parser


def load_settings(args: argparse.Namespace) -> DiagnosticsSettings:
    if args.from_env:
        return settings_from_env(args.application)
    settings = load_config(config_dir=args.config_dir, env=args.env, strict_placeholders=False)
    if settings.application != args.application:
        settings = settings.model_copy(update={"application": args.application})
    return settings


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except StartupDiagnosticsError as exc:
        print(exc, file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    bootstrap_logging_from_settings(settings)
    runner = DiagnosticsRunner(CheckContext(settings=settings))

    try:
        report = asyncio.run(runner.run_report(settings.application))
    except StartupDiagnosticsError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIGURATION_ERROR

    if report is None:
        return EXIT_OK

    if args.report_file is not None:
        try:
            args.report_file.write_text(report, encoding="utf-8")
        except OSError as exc:
            print(f"Cannot write report to {args.report_file}: {exc}", file=sys.stderr)
            return EXIT_CONFIGURATION_ERROR
    else:
        print(report)
    return EXIT_CHECKS_FAILED


if __name__ == "__main__":
    sys.exit(main())
