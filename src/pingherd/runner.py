"""
Probe runner: one external ``ping`` process per target.

The runner streams the process's stdout line by line, forwards every raw
line to the shared progress channel without ever waiting on it, and
builds the target's :class:`ProbeReport` from the lines it recognizes.
"""

import asyncio
import logging
import shlex
from dataclasses import dataclass, field
from typing import Optional

from .config import DEFAULT_COMMAND_TEMPLATE
from .errors import ProbeExecutionError, ProbeLaunchError, ProbeStreamError
from .models import (
    EchoReply,
    LineClassification,
    PacketStatistics,
    ProbeConfiguration,
    ProbeReport,
    ProgressEvent,
    RoundTripStatistics,
)
from .parsing import classify_line

logger = logging.getLogger(__name__)


def build_command(probe: ProbeConfiguration, template: str = DEFAULT_COMMAND_TEMPLATE) -> str:
    return template.format(
        target=shlex.quote(probe.target),
        count=probe.count,
        timeout=probe.timeout,
    )


def validate_command_template(template: str) -> str:
    """Check that *template* only uses the {target}, {count} and {timeout} placeholders."""
    try:
        build_command(ProbeConfiguration(target="localhost", count=1, timeout=1), template)
    except (AttributeError, KeyError, IndexError, ValueError) as e:
        raise ValueError(f"invalid command template {template!r}: {e!r}") from e
    return template


def publish(channel: asyncio.Queue, event: ProgressEvent) -> bool:
    """Offer *event* to the progress channel; drop it if the channel is full."""
    try:
        channel.put_nowait(event)
    except asyncio.QueueFull:
        logger.debug(f"Progress channel full, dropped event from {event.target}")
        return False
    return True


@dataclass
class ReportBuilder:
    """Mutable accumulator owned by a single runner until hand-off."""

    destination: str
    replies: list[EchoReply] = field(default_factory=list)
    packets: Optional[PacketStatistics] = None
    trips: Optional[RoundTripStatistics] = None

    def build(self) -> ProbeReport:
        return ProbeReport(self.destination, tuple(self.replies), self.packets, self.trips)


def apply_line(report: ReportBuilder, line: str) -> LineClassification:
    """Classify *line* and fold the result into *report*."""
    result = classify_line(line)
    if isinstance(result, EchoReply):
        report.replies.append(result)
    elif isinstance(result, PacketStatistics):
        report.packets = result
    elif isinstance(result, RoundTripStatistics):
        report.trips = result
    return result


async def run_probe(
    probe: ProbeConfiguration,
    channel: asyncio.Queue,
    command_template: str = DEFAULT_COMMAND_TEMPLATE,
) -> ProbeReport:
    target = probe.target
    try:
        command = build_command(probe, command_template)
    except (AttributeError, KeyError, IndexError, ValueError) as e:
        raise ProbeLaunchError(target, e) from e
    logger.debug(f"Launching probe for {target}: {command}")

    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        raise ProbeLaunchError(target, e) from e

    try:
        if proc.stdout is None:
            raise ProbeLaunchError(target)

        report = ReportBuilder(destination=target)
        lines = 0
        while True:
            try:
                raw = await proc.stdout.readline()
            except (OSError, ValueError) as e:
                raise ProbeStreamError(target, e) from e
            if not raw:
                break
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            lines += 1
            publish(channel, ProgressEvent(target, line))
            apply_line(report, line)

        stderr = b""
        if proc.stderr is not None:
            stderr = await proc.stderr.read()
        returncode = await proc.wait()
    finally:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass

    if returncode != 0:
        if stderr:
            logger.debug(f"{target} stderr: {stderr.decode('utf-8', errors='replace').strip()}")
        raise ProbeExecutionError(target, returncode)

    logger.debug(
        f"Probe for {target} finished: {lines} lines, {len(report.replies)} replies"
    )
    return report.build()
