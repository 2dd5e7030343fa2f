import asyncio
import logging

from .config import DEFAULT_CHANNEL_CAPACITY, DEFAULT_COMMAND_TEMPLATE
from .errors import ProbeError
from .models import ProbeReport, ProgressCallback, RunConfiguration
from .progress import ProgressSink, expected_progress_total
from .runner import run_probe, validate_command_template
from .utils import now

logger = logging.getLogger(__name__)


class ProbeOrchestrator:
    def __init__(
        self,
        config: RunConfiguration,
        channel_capacity: int = DEFAULT_CHANNEL_CAPACITY,
        command_template: str = DEFAULT_COMMAND_TEMPLATE,
        use_progress_bar: bool = True,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        if channel_capacity <= 0:
            raise ValueError("channel_capacity must be positive")
        self.config = config
        self.channel_capacity = channel_capacity
        self.command_template = validate_command_template(command_template)
        self.use_progress_bar = use_progress_bar
        self.progress_callback = progress_callback

        # Runtime state
        self.failures: list[ProbeError] = []
        self.progress: ProgressSink | None = None
        self.elapsed_s: float | None = None

        logger.debug(
            f"Initialized orchestrator with {len(config.targets)} targets, "
            f"count={config.count}, timeout={config.timeout}"
        )

    # ────────────────────────────────
    # Run
    # ────────────────────────────────

    async def run(self) -> list[ProbeReport]:
        """Probe every target concurrently and return reports in start order.

        Targets whose probe fails are logged, recorded in ``self.failures``
        and left out of the returned list.
        """
        self.failures = []
        t0 = now()
        channel: asyncio.Queue = asyncio.Queue(maxsize=self.channel_capacity)

        self.progress = ProgressSink(
            expected_progress_total(self.config.count, len(self.config.targets)),
            use_progress_bar=self.use_progress_bar,
            callback=self.progress_callback,
        )
        sink = asyncio.create_task(self.progress.run(channel))

        logger.info(
            f"Starting {len(self.config.targets)} probes (count={self.config.count})"
        )
        probes = list(self.config.probes())
        tasks = [
            asyncio.create_task(run_probe(p, channel, self.command_template))
            for p in probes
        ]

        reports: list[ProbeReport] = []
        try:
            for probe, task in zip(probes, tasks):
                try:
                    reports.append(await task)
                except ProbeError as e:
                    logger.error(f"Probe failed for {probe.target}: {e}")
                    self.failures.append(e)
        finally:
            # The sink may never reach its estimate, so it is always torn down
            sink.cancel()
            await asyncio.gather(sink, return_exceptions=True)

        self.elapsed_s = now() - t0
        logger.info(
            f"Run completed: {len(reports)} succeeded, {len(self.failures)} failed "
            f"in {self.elapsed_s:.2f}s"
        )
        return reports


async def run_probes(config: RunConfiguration, **kwargs) -> list[ProbeReport]:
    return await ProbeOrchestrator(config, **kwargs).run()
