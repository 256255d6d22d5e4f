"""Typed reading of BenchmarkDotNet's JSON export."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import ExportParseFailure
from ..models import BenchmarkIdentity, BenchmarkMeasurement, NamingMode

logger = logging.getLogger(__name__)

UNKNOWN = "<unknown>"


@dataclass(frozen=True)
class ExportRecord:
    type_name: str
    method_title: str
    full_name: str
    mean_ns: float
    parameters: str | None = None
    allocated_bytes: int | None = None

    def identity(self, naming: NamingMode) -> BenchmarkIdentity:
        if naming is NamingMode.FULL:
            return self.full_name
        name = f"{self.type_name} - {self.method_title}"
        if self.parameters:
            name += f" ({self.parameters})"
        return name

    def measurement(self) -> BenchmarkMeasurement:
        return BenchmarkMeasurement(mean_ns=self.mean_ns, allocated_bytes=self.allocated_bytes)


def _text(entry: dict[str, Any], key: str) -> str:
    value = entry.get(key)
    if value is None:
        return UNKNOWN
    return str(value)


def _mean(entry: dict[str, Any]) -> float:
    stats = entry.get("Statistics")
    if not isinstance(stats, dict):
        raise ValueError("missing 'Statistics' block")
    mean = stats.get("Mean")
    if isinstance(mean, bool) or not isinstance(mean, (int, float)):
        raise ValueError(f"'Statistics.Mean' is not a number: {mean!r}")
    return float(mean)


def _allocated(entry: dict[str, Any]) -> int | None:
    memory = entry.get("Memory")
    if not isinstance(memory, dict):
        return None
    value = memory.get("BytesAllocatedPerOperation")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'Memory.BytesAllocatedPerOperation' is not a number: {value!r}")
    return int(value)


def parse_record(entry: Any) -> ExportRecord:
    if not isinstance(entry, dict):
        raise ValueError(f"benchmark entry is not an object: {entry!r}")
    parameters = entry.get("Parameters")
    return ExportRecord(
        type_name=_text(entry, "Type"),
        method_title=_text(entry, "MethodTitle"),
        full_name=_text(entry, "FullName"),
        mean_ns=_mean(entry),
        parameters=str(parameters) if parameters else None,
        allocated_bytes=_allocated(entry),
    )


def parse_export(document: Any) -> list[ExportRecord]:
    """Parse a decoded export; a document without ``Benchmarks`` yields nothing."""
    if not isinstance(document, dict) or "Benchmarks" not in document:
        return []
    benchmarks = document["Benchmarks"]
    if not isinstance(benchmarks, list):
        raise ValueError("'Benchmarks' is not a list")
    return [parse_record(entry) for entry in benchmarks]


def parse_export_file(
    path: str | Path, naming: NamingMode = NamingMode.SHORT
) -> dict[BenchmarkIdentity, BenchmarkMeasurement]:
    """Read one export file into identity -> measurement (last entry wins).

    Raises:
        ExportParseFailure: The file is unreadable or malformed.
    """
    try:
        with Path(path).open("r", encoding="utf-8-sig") as f:
            document = json.load(f)
        records = parse_export(document)
    except (OSError, ValueError) as exc:
        raise ExportParseFailure(path, str(exc)) from exc

    if not records:
        logger.debug("No benchmarks in export %s", path)
    return {record.identity(naming): record.measurement() for record in records}


__all__ = ["ExportRecord", "parse_export", "parse_export_file", "parse_record"]
