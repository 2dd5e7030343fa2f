#!/usr/bin/env python3
# cli.py — Command-line entry point for pingherd

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from pingherd.config import load_settings
from pingherd.core import ProbeOrchestrator
from pingherd.logging_config import setup_logging
from pingherd.metrics import compute_fleet_stats
from pingherd.models import RunConfiguration
from pingherd.rendering import render_fleet, render_json, render_text
from pingherd.runner import validate_command_template


def split_targets(values: List[str]) -> List[str]:
    """Flatten comma-delimited target arguments, dropping empty pieces."""
    targets = []
    for value in values:
        targets.extend(t.strip() for t in value.split(",") if t.strip())
    return targets


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        prog="pingherd",
        description="Ping many hosts concurrently and summarize loss and round-trip times",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "hosts",
        nargs="*",
        help="Hosts to probe (may be combined with --targets)",
    )
    parser.add_argument(
        "--targets",
        action="append",
        default=[],
        help="Comma-separated hosts to probe; may be repeated",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=int,
        default=settings.count,
        help="Echo requests to send per target",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=settings.timeout,
        help="Per-target timeout in seconds (only used by templates that reference {timeout})",
    )
    parser.add_argument(
        "--command",
        default=settings.command_template,
        help="Shell command template with {target}, {count} and {timeout} placeholders",
    )

    # Output
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report output format",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )

    # Logging & Debugging
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug-level logging",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional file to write logs to (e.g., pingherd.log)",
    )
    parser.set_defaults(channel_capacity=settings.channel_capacity)
    return parser


def parse_args(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    targets = split_targets(args.hosts + args.targets)
    if not targets:
        parser.error("at least one target is required")
    try:
        args.config = RunConfiguration(targets=targets, count=args.count, timeout=args.timeout)
    except ValidationError as e:
        parser.error(str(e))
    try:
        validate_command_template(args.command)
    except ValueError as e:
        parser.error(str(e))
    return args


async def run(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    setup_logging(level=log_level, log_file=args.log_file)

    orchestrator = ProbeOrchestrator(
        args.config,
        channel_capacity=args.channel_capacity,
        command_template=args.command,
        use_progress_bar=not args.no_progress,
    )
    reports = await orchestrator.run()
    fleet = compute_fleet_stats(reports, failures=len(orchestrator.failures))

    if args.format == "json":
        print(render_json(reports, fleet))
    else:
        print(render_text(reports))
        logging.info(render_fleet(fleet))

    return 0 if reports else 1


def main():
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
