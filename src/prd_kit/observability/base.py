from dataclasses import dataclass, field
from typing import Protocol


class MetricsHook(Protocol):
    """Sink for parser, chunking and context-assembly metrics.

    Implementations forward to whatever backend the caller runs
    (Prometheus, StatsD, logs). Durations are in milliseconds.
    """

    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def record_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        pass


@dataclass(frozen=True)
class MetricRecord:
    kind: str
    name: str
    value: float
    labels: dict[str, str]


@dataclass
class InMemoryMetricsHook:
    """Keeps every metric in a list. Handy for debugging a pipeline run."""

    records: list[MetricRecord] = field(default_factory=list)

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        self.records.append(MetricRecord("latency", name, value_ms, labels or {}))

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        self.records.append(MetricRecord("counter", name, value, labels or {}))

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        self.records.append(MetricRecord("gauge", name, value, labels or {}))

    def named(self, name: str) -> list[MetricRecord]:
        return [r for r in self.records if r.name == name]

    def total(self, name: str) -> float:
        return sum(r.value for r in self.named(name))
