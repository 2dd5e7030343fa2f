"""
Classification of single lines of ``ping`` output.

Patterns are compiled once at import and tried in a fixed order: echo
reply, then packet statistics, then round-trip statistics. A line that
matches nothing, or whose captured numbers do not parse, is simply
unrecognized.
"""

import logging
import re

from .models import EchoReply, LineClassification, PacketStatistics, RoundTripStatistics

logger = logging.getLogger(__name__)

# ────────────────────────────────
# Patterns
# ────────────────────────────────

ECHO_REPLY_PATTERN = re.compile(
    r"\b(?P<bytes>\d+) bytes from (?P<source>.+?): "
    r"icmp_seq=(?P<icmp_seq>\d+) ttl=(?P<ttl>\d+) time=(?P<time>[\d.]+) ms\s*$"
)

PACKET_STATISTICS_PATTERNS = (
    # BSD / macOS
    re.compile(
        r"(?P<transmitted>\d+) packets transmitted, (?P<received>\d+) packets received, "
        r"(?:\+\d+ duplicates, )?(?P<loss>[\d.]+)% packet loss"
    ),
    # Linux iputils
    re.compile(
        r"(?P<transmitted>\d+) packets transmitted, (?P<received>\d+) received, "
        r"(?:\+\d+ (?:errors|duplicates), )*(?P<loss>[\d.]+)% packet loss, time (?P<elapsed>\d+)ms"
    ),
)

ROUND_TRIP_PATTERNS = (
    re.compile(
        r"min/avg/max/stddev = (?P<min>[\d.]+)/(?P<avg>[\d.]+)/(?P<max>[\d.]+)/(?P<dev>[\d.]+) ms"
    ),
    re.compile(
        r"min/avg/max/mdev = (?P<min>[\d.]+)/(?P<avg>[\d.]+)/(?P<max>[\d.]+)/(?P<dev>[\d.]+) ms"
    ),
)


# ────────────────────────────────
# Per-family parsers
# ────────────────────────────────


def parse_echo_reply(line: str) -> EchoReply | None:
    m = ECHO_REPLY_PATTERN.search(line)
    if not m:
        return None
    try:
        return EchoReply(
            bytes_received=int(m["bytes"]),
            icmp_seq=int(m["icmp_seq"]),
            ttl=int(m["ttl"]),
            time_ms=float(m["time"]),
        )
    except ValueError:
        logger.debug(f"Echo reply pattern matched but fields did not parse: {line!r}")
        return None


def parse_packet_statistics(line: str) -> PacketStatistics | None:
    for pattern in PACKET_STATISTICS_PATTERNS:
        m = pattern.search(line)
        if not m:
            continue
        try:
            return PacketStatistics(
                transmitted=int(m["transmitted"]),
                received=int(m["received"]),
                loss_percent=float(m["loss"]),
            )
        except ValueError:
            logger.debug(f"Packet statistics matched but fields did not parse: {line!r}")
    return None


def parse_round_trip_statistics(line: str) -> RoundTripStatistics | None:
    for pattern in ROUND_TRIP_PATTERNS:
        m = pattern.search(line)
        if not m:
            continue
        try:
            return RoundTripStatistics(
                min=float(m["min"]),
                avg=float(m["avg"]),
                max=float(m["max"]),
                stddev=float(m["dev"]),
            )
        except ValueError:
            logger.debug(f"Round-trip statistics matched but fields did not parse: {line!r}")
    return None


def classify_line(line: str) -> LineClassification:
    """Return the typed value for the first pattern that matches *line*, else None."""
    return (
        parse_echo_reply(line)
        or parse_packet_statistics(line)
        or parse_round_trip_statistics(line)
    )
