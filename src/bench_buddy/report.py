"""Render a :class:`DiffReport` as tables that read well both in a monospace
terminal and as markdown."""

from collections.abc import Sequence

from .models import BenchmarkMeasurement, DiffRecord, DiffReport, SoloRecord

NONE_PLACEHOLDER = "<none>"
MISSING = "-"
MIN_NAME_WIDTH = 30
TIME_WIDTH = 10
RATIO_WIDTH = 10
BYTES_WIDTH = 12

_UNITS = (
    (1_000, "ns", 1),
    (1_000_000, "µs", 1_000),
    (1_000_000_000, "ms", 1_000_000),
)


def format_time(mean_ns: float) -> str:
    """Scale nanoseconds to ns/µs/ms/s; precision shrinks as the value grows."""
    for limit, unit, divisor in _UNITS:
        if mean_ns < limit:
            value = mean_ns / divisor
            break
    else:
        unit = "s"
        value = mean_ns / 1_000_000_000

    if value < 1_000:
        return f"{value:.2f} {unit}"
    if value < 100_000:
        return f"{value:.1f} {unit}"
    return f"{value:.0f} {unit}"


def format_bytes(value: int | None) -> str:
    if value is None:
        return MISSING
    return f"{value:,} B"


def format_delta(value: int | None) -> str:
    if value is None:
        return MISSING
    return f"{value:+,} B"


def format_ratio(ratio: float) -> str:
    return f"{ratio:.2f}"


def _name_width(names: Sequence[str]) -> int:
    return max(max(len(name) for name in names) + 1, MIN_NAME_WIDTH)


def _table(
    headers: Sequence[tuple[str, int]],
    rows: Sequence[Sequence[str]],
) -> list[str]:
    """First column left-aligned, remaining columns right-aligned."""
    (first_title, first_width), *rest = headers
    header = f"| {first_title.ljust(first_width)}|" + "".join(
        f" {title.ljust(width)}|" for title, width in rest
    )
    separator = f"|{'-' * first_width} |" + "".join(f"{'-' * width}:|" for _, width in rest)
    lines = [header, separator]
    for first, *cells in rows:
        lines.append(
            f"| {first.ljust(first_width)}|"
            + "".join(f"{cell.rjust(width)} |" for cell, (_, width) in zip(cells, rest))
        )
    return lines


def render_time_table(records: Sequence[DiffRecord]) -> list[str]:
    if not records:
        return [NONE_PLACEHOLDER]
    width = _name_width([r.identity for r in records])
    return _table(
        [
            ("Benchmark", width),
            ("Baseline", TIME_WIDTH),
            ("Head", TIME_WIDTH),
            ("Ratio", RATIO_WIDTH),
        ],
        [
            (
                r.identity,
                format_time(r.baseline.mean_ns),
                format_time(r.head.mean_ns),
                format_ratio(r.ratio),
            )
            for r in records
        ],
    )


def render_allocation_table(records: Sequence[DiffRecord]) -> list[str]:
    if not records:
        return [NONE_PLACEHOLDER]
    width = _name_width([r.identity for r in records])
    return _table(
        [
            ("Benchmark", width),
            ("Baseline", BYTES_WIDTH),
            ("Head", BYTES_WIDTH),
            ("Delta", BYTES_WIDTH),
        ],
        [
            (
                r.identity,
                format_bytes(r.baseline.allocated_bytes),
                format_bytes(r.head.allocated_bytes),
                format_delta(r.allocation_delta),
            )
            for r in records
        ],
    )


def render_solo_table(records: Sequence[SoloRecord]) -> list[str]:
    if not records:
        return [NONE_PLACEHOLDER]
    width = _name_width([r.identity for r in records])

    def _cells(measurement: BenchmarkMeasurement) -> tuple[str, str]:
        return format_time(measurement.mean_ns), format_bytes(measurement.allocated_bytes)

    return _table(
        [("Benchmark", width), ("Mean", TIME_WIDTH), ("Allocated", BYTES_WIDTH)],
        [(r.identity, *_cells(r.measurement)) for r in records],
    )


def _format_threshold(threshold_percent: float) -> str:
    return f"{threshold_percent:g}"


def render_report(report: DiffReport) -> list[str]:
    """Every section is always present; empty ones show ``<none>``."""
    sections: list[tuple[str, list[str]]] = [
        ("Faster benchmarks:", render_time_table(report.faster)),
        ("Slower benchmarks:", render_time_table(report.slower)),
        ("Less allocation:", render_allocation_table(report.less_allocation)),
        ("More allocation:", render_allocation_table(report.more_allocation)),
        ("Only in head:", render_solo_table(report.only_in_head)),
        ("Only in baseline:", render_solo_table(report.only_in_baseline)),
    ]

    lines: list[str] = []
    for title, body in sections:
        lines.extend(["", "", title, ""])
        lines.extend(body)

    lines.extend(
        [
            "",
            "",
            f"{report.below_threshold_count} benchmarks not shown because they were below "
            f"the difference threshold of {_format_threshold(report.threshold_percent)}%.",
            f"{report.identical_allocation_count} benchmarks with identical allocation "
            "not shown.",
        ]
    )
    return lines


__all__ = [
    "format_bytes",
    "format_delta",
    "format_ratio",
    "format_time",
    "render_allocation_table",
    "render_report",
    "render_solo_table",
    "render_time_table",
]
