from dataclasses import asdict, dataclass
from typing import Any, Iterator, Optional
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_COUNT, DEFAULT_TIMEOUT


class ProbeConfiguration(BaseModel):
    """Inputs for a single target's probe."""

    model_config = ConfigDict(frozen=True)

    target: str = Field(min_length=1)
    count: int = Field(default=DEFAULT_COUNT, gt=0)
    timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)


class RunConfiguration(BaseModel):
    """Validated inputs for one full run across all targets."""

    model_config = ConfigDict(frozen=True)

    targets: list[str] = Field(min_length=1)
    count: int = Field(default=DEFAULT_COUNT, gt=0)
    timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("targets")
    @classmethod
    def _strip_targets(cls, targets: list[str]) -> list[str]:
        cleaned = [t.strip() for t in targets]
        if any(not t for t in cleaned):
            raise ValueError("targets must not contain empty entries")
        return cleaned

    def probes(self) -> Iterator[ProbeConfiguration]:
        for target in self.targets:
            yield ProbeConfiguration(target=target, count=self.count, timeout=self.timeout)


@dataclass(frozen=True)
class EchoReply:
    bytes_received: int
    icmp_seq: int
    ttl: int
    time_ms: float


@dataclass(frozen=True)
class PacketStatistics:
    transmitted: int
    received: int
    loss_percent: float


@dataclass(frozen=True)
class RoundTripStatistics:
    # stddev also holds mdev on Linux
    min: float
    avg: float
    max: float
    stddev: float


@dataclass(frozen=True)
class ProbeReport:
    """Finished result for one target; built by ``runner.ReportBuilder``."""

    destination: str
    replies: tuple[EchoReply, ...] = ()
    packets: Optional[PacketStatistics] = None
    trips: Optional[RoundTripStatistics] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "replies", tuple(self.replies))

    def to_dict(self) -> dict[str, Any]:
        doc = asdict(self)
        doc["replies"] = list(doc["replies"])
        return doc


@dataclass(frozen=True)
class ProgressEvent:
    target: str
    line: str

    def __str__(self) -> str:
        return f"{self.target} {self.line}"


@dataclass
class FleetStats:
    targets: int
    failed: int
    transmitted: int
    received: int
    loss_percent: float | None
    replies: int
    mean_ms: float | None
    std_ms: float | None
    min_ms: float | None
    max_ms: float | None


# Result of classifying one line of probe output; None means unrecognized
LineClassification = Optional[EchoReply | PacketStatistics | RoundTripStatistics]

# Progress callback: receives the current completion percentage
ProgressCallback = Callable[[float], None]

# Metrics callback: callable accepting stats dict
MetricsCallback = Callable[[dict[str, Any]], None]
