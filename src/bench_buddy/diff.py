"""Classify two result sets into the tables of the comparison report.

``diff`` is a pure function of its inputs: nothing is mutated and no process
is executed.
"""

from .models import DiffRecord, DiffReport, ResultSet, SoloRecord


def _solo(results: ResultSet, identities: set[str]) -> tuple[SoloRecord, ...]:
    return tuple(SoloRecord(identity, results[identity]) for identity in sorted(identities))


def _by_ratio(records: list[DiffRecord], *, descending: bool) -> tuple[DiffRecord, ...]:
    # identity breaks ties so equal ratios still order deterministically
    if descending:
        return tuple(sorted(records, key=lambda r: (-r.ratio, r.identity)))
    return tuple(sorted(records, key=lambda r: (r.ratio, r.identity)))


def diff(baseline: ResultSet, head: ResultSet, threshold_percent: float) -> DiffReport:
    """Compare ``head`` against ``baseline``.

    Time: a common benchmark whose absolute percent change is below
    ``threshold_percent`` is only counted. The rest split into faster
    (ratio < 1.0, ascending) and slower (ratio >= 1.0, descending).

    Allocation: independent of the time threshold, every common benchmark with
    an allocation figure on both sides splits into less (delta < 0) and more
    (delta > 0) allocation; a zero delta is only counted. Both lists use the
    time-table ratio ordering.
    """
    common = [identity for identity in head if identity in baseline]

    faster: list[DiffRecord] = []
    slower: list[DiffRecord] = []
    less_allocation: list[DiffRecord] = []
    more_allocation: list[DiffRecord] = []
    below_threshold = 0
    identical_allocation = 0

    for identity in common:
        record = DiffRecord(identity, baseline[identity], head[identity])

        if abs(record.percent_change) < threshold_percent:
            below_threshold += 1
        elif record.ratio < 1.0:
            faster.append(record)
        else:
            slower.append(record)

        delta = record.allocation_delta
        if delta is None:
            continue
        if delta < 0:
            less_allocation.append(record)
        elif delta == 0:
            identical_allocation += 1
        else:
            more_allocation.append(record)

    return DiffReport(
        faster=_by_ratio(faster, descending=False),
        slower=_by_ratio(slower, descending=True),
        below_threshold_count=below_threshold,
        less_allocation=_by_ratio(less_allocation, descending=False),
        more_allocation=_by_ratio(more_allocation, descending=True),
        identical_allocation_count=identical_allocation,
        only_in_head=_solo(head, set(head) - set(baseline)),
        only_in_baseline=_solo(baseline, set(baseline) - set(head)),
        threshold_percent=threshold_percent,
    )


__all__ = ["diff"]
