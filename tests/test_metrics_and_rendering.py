import json

import pytest

from pingherd.metrics import compute_fleet_stats
from pingherd.models import EchoReply, PacketStatistics, ProbeReport, RoundTripStatistics
from pingherd.rendering import render_fleet, render_json, render_text


def _report(dest="10.0.0.1"):
    return ProbeReport(
        destination=dest,
        replies=[EchoReply(64, i, 64, float(i + 1)) for i in range(3)],
        packets=PacketStatistics(3, 3, 0.0),
        trips=RoundTripStatistics(1.0, 2.0, 3.0, 0.8),
    )


def test_fleet_stats_empty():
    fleet = compute_fleet_stats([], failures=2)
    assert fleet.targets == 2
    assert fleet.failed == 2
    assert fleet.loss_percent is None
    assert fleet.mean_ms is None


def test_fleet_stats_aggregates_and_calls_back():
    captured = {}
    partial = ProbeReport(destination="b", packets=PacketStatistics(3, 0, 100.0))
    fleet = compute_fleet_stats([_report(), partial], failures=1, metrics_callback=captured.update)

    assert fleet.targets == 3
    assert fleet.transmitted == 6
    assert fleet.received == 3
    assert fleet.loss_percent == pytest.approx(50.0)
    assert fleet.replies == 3
    assert fleet.mean_ms == pytest.approx(2.0)
    assert fleet.std_ms == pytest.approx((2 / 3) ** 0.5)
    assert (fleet.min_ms, fleet.max_ms) == (1.0, 3.0)
    assert captured["received"] == 3


def test_render_text():
    text = render_text([_report(), ProbeReport(destination="quiet")])
    assert text.splitlines() == [
        "10.0.0.1:",
        "  Sent: 3 Received: 3 Loss: 0%",
        "  Min: 1 Avg: 2 Max: 3 Std: 0.8",
        "",
        "quiet:",
        "",
    ]


def test_render_text_empty():
    assert render_text([]) == "No reports."


def test_render_fleet():
    line = render_fleet(compute_fleet_stats([_report()], failures=1))
    assert line.startswith("1/2 targets reported")
    assert "Loss: 0.0%" in line
    assert "Mean RTT: 2.000 ms" in line


def test_render_json():
    reports = [_report()]
    doc = json.loads(render_json(reports, compute_fleet_stats(reports)))
    assert doc["reports"][0]["destination"] == "10.0.0.1"
    assert doc["reports"][0]["trips"]["stddev"] == 0.8
    assert doc["fleet"]["targets"] == 1
    assert "fleet" not in json.loads(render_json(reports))


def test_render_text_keeps_fractional_values():
    report = ProbeReport(
        destination="lossy",
        packets=PacketStatistics(3, 2, 33.3333),
        trips=RoundTripStatistics(0.045, 1.25, 13.2, 0.5),
    )
    assert render_text([report]).splitlines()[1:3] == [
        "  Sent: 3 Received: 2 Loss: 33.3333%",
        "  Min: 0.045 Avg: 1.25 Max: 13.2 Std: 0.5",
    ]
