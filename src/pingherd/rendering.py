import json
from collections.abc import Iterable
from dataclasses import asdict
from typing import Optional

from .models import FleetStats, ProbeReport


def render_text(reports: Iterable[ProbeReport]) -> str:
    reports = list(reports)
    if not reports:
        return "No reports."

    lines = []
    for item in reports:
        lines.append(f"{item.destination}:")
        if item.packets:
            p = item.packets
            lines.append(f"  Sent: {p.transmitted} Received: {p.received} Loss: {p.loss_percent:g}%")
        if item.trips:
            t = item.trips
            lines.append(f"  Min: {t.min:g} Avg: {t.avg:g} Max: {t.max:g} Std: {t.stddev:g}")
        lines.append("")
    return "\n".join(lines)


def render_fleet(fleet: FleetStats) -> str:
    line = f"{fleet.targets - fleet.failed}/{fleet.targets} targets reported"
    if fleet.loss_percent is not None:
        line += f" | Loss: {fleet.loss_percent:.1f}%"
    if fleet.mean_ms is not None:
        line += f" | Mean RTT: {fleet.mean_ms:.3f} ms (std {fleet.std_ms:.3f})"
    return line


def render_json(reports: Iterable[ProbeReport], fleet: Optional[FleetStats] = None) -> str:
    doc = {"reports": [r.to_dict() for r in reports]}
    if fleet is not None:
        doc["fleet"] = asdict(fleet)
    return json.dumps(doc, indent=2)
