"""
Quick sanity run: probe a few public resolvers concurrently.
Run: uv run examples/ping_hosts.py
"""
import asyncio
import os

from pingherd import ProbeOrchestrator, RunConfiguration, render_text
from pingherd.logging_config import setup_logging
from pingherd.metrics import compute_fleet_stats
from pingherd.rendering import render_fleet

TARGETS = [
    "1.1.1.1",
    "8.8.8.8",
    "9.9.9.9",
    "nonexistent.invalid",
]

async def main():
    setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))

    config = RunConfiguration(
        targets=TARGETS,
        count=int(os.getenv("PING_COUNT", "5")),
        timeout=5,
    )
    orchestrator = ProbeOrchestrator(config, channel_capacity=4)
    reports = await orchestrator.run()

    print(render_text(reports))
    print(render_fleet(compute_fleet_stats(reports, failures=len(orchestrator.failures))))

if __name__ == "__main__":
    asyncio.run(main())
