import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

BenchmarkIdentity = str


class NamingMode(str, Enum):
    """How a benchmark record is turned into its identity key."""

    SHORT = "short"  # "<Type> - <MethodTitle>[ (<Parameters>)]"
    FULL = "full"  # FullName


@dataclass(frozen=True)
class BenchmarkMeasurement:
    mean_ns: float
    allocated_bytes: int | None = None  # None: no memory diagnostics reported


ResultSet = Mapping[BenchmarkIdentity, BenchmarkMeasurement]


@dataclass(frozen=True)
class DiffRecord:
    """A benchmark present in both runs."""

    identity: BenchmarkIdentity
    baseline: BenchmarkMeasurement
    head: BenchmarkMeasurement

    @property
    def ratio(self) -> float:
        if self.baseline.mean_ns == 0:
            return 1.0 if self.head.mean_ns == 0 else math.inf
        return self.head.mean_ns / self.baseline.mean_ns

    @property
    def percent_change(self) -> float:
        base = self.baseline.mean_ns
        if base == 0:
            return 0.0 if self.head.mean_ns == 0 else math.inf
        return (self.head.mean_ns - base) / base * 100.0

    @property
    def allocation_delta(self) -> int | None:
        if self.baseline.allocated_bytes is None or self.head.allocated_bytes is None:
            return None
        return self.head.allocated_bytes - self.baseline.allocated_bytes


@dataclass(frozen=True)
class SoloRecord:
    """A benchmark measured in only one of the two runs."""

    identity: BenchmarkIdentity
    measurement: BenchmarkMeasurement


@dataclass(frozen=True)
class DiffReport:
    faster: tuple[DiffRecord, ...]
    slower: tuple[DiffRecord, ...]
    below_threshold_count: int
    less_allocation: tuple[DiffRecord, ...]
    more_allocation: tuple[DiffRecord, ...]
    identical_allocation_count: int
    only_in_head: tuple[SoloRecord, ...]
    only_in_baseline: tuple[SoloRecord, ...]
    threshold_percent: float
