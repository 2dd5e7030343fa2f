import math
import logging
from collections.abc import Iterable

from .models import FleetStats, MetricsCallback, ProbeReport

logger = logging.getLogger(__name__)


def compute_fleet_stats(
    reports: Iterable[ProbeReport],
    failures: int = 0,
    metrics_callback: MetricsCallback | None = None,
) -> FleetStats:
    """Aggregate packet counts and reply latencies across every report."""
    reports = list(reports)
    transmitted = sum(r.packets.transmitted for r in reports if r.packets)
    received = sum(r.packets.received for r in reports if r.packets)
    latencies = [reply.time_ms for r in reports for reply in r.replies]
    logger.debug(
        f"Computing fleet stats: reports={len(reports)}, failures={failures}, "
        f"replies={len(latencies)}"
    )

    stats_dict = {
        "targets": len(reports) + failures,
        "failed": failures,
        "transmitted": transmitted,
        "received": received,
        "loss_percent": (
            (transmitted - received) / transmitted * 100.0 if transmitted else None
        ),
        "replies": len(latencies),
        "mean_ms": None,
        "std_ms": None,
        "min_ms": None,
        "max_ms": None,
    }

    n = len(latencies)
    if n:
        mean = sum(latencies) / n
        sum_sq = sum(x * x for x in latencies)
        stats_dict.update(
            mean_ms=mean,
            std_ms=math.sqrt(max(0.0, (sum_sq / n) - (mean * mean))),
            min_ms=min(latencies),
            max_ms=max(latencies),
        )
    else:
        logger.debug("No echo replies recorded.")

    if metrics_callback:
        metrics_callback(stats_dict)

    return FleetStats(**stats_dict)
