"""Rollup and ranking of workload records.

Records are merged at two granularities: per container (object, namespace,
kind, container name) and per object (object, namespace, kind). The object
rollup consumes the container rollup, so totals are never counted twice.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable

from kubetally.models.core.workload_record import WorkloadRecord

KeyFunc = Callable[[WorkloadRecord], Hashable]


def container_level_key(record: WorkloadRecord) -> tuple[str, str, str, str]:
    """Rollup key for per-container aggregation."""
    return (
        record.object_name,
        record.namespace,
        record.kind.value,
        record.container_names[0],
    )


def object_level_key(record: WorkloadRecord) -> tuple[str, str, str]:
    """Rollup key for per-object aggregation."""
    return (record.object_name, record.namespace, record.kind.value)


def aggregate(records: Iterable[WorkloadRecord], key_fn: KeyFunc) -> list[WorkloadRecord]:
    """Merge records sharing a rollup key.

    The first record seen for a key is kept as-is; later ones are folded in
    with ``WorkloadRecord.merge``. Output follows first-seen key order.
    """
    merged: dict[Hashable, WorkloadRecord] = {}
    for record in records:
        key = key_fn(record)
        existing = merged.get(key)
        merged[key] = record if existing is None else existing.merge(record)
    return list(merged.values())


def rollup(records: Iterable[WorkloadRecord]) -> tuple[list[WorkloadRecord], list[WorkloadRecord]]:
    """Return container-level and object-level rollups.

    Records already merged at container level pass through the first stage
    unchanged.
    """
    container_level = aggregate(records, container_level_key)
    object_level = aggregate(container_level, object_level_key)
    return container_level, object_level


def _rank_key(record: WorkloadRecord) -> tuple[float, str, str, str, str]:
    return (
        -record.total_cores,
        record.object_name,
        record.namespace,
        record.kind.value,
        record.containers_text,
    )


def rank_and_filter(
    records: Iterable[WorkloadRecord],
    include_compliant: bool = False,
) -> list[WorkloadRecord]:
    """Sort by total cores descending and drop compliant records.

    Ties are broken by object name, namespace, kind and containers so the
    order is reproducible.
    """
    ranked = sorted(records, key=_rank_key)
    if include_compliant:
        return ranked
    return [record for record in ranked if not record.is_compliant]
