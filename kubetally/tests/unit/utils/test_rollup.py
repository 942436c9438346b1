"""Tests for rollup aggregation and ranking."""

from __future__ import annotations

from typing import Any

import pytest

from kubetally.constants.enums import WorkloadKind
from kubetally.models.core.workload_record import WorkloadRecord
from kubetally.utils.rollup import (
    aggregate,
    container_level_key,
    object_level_key,
    rank_and_filter,
    rollup,
)


def _record(**overrides: Any) -> WorkloadRecord:
    values: dict[str, Any] = {
        "object_name": "web-7d9f",
        "namespace": "payments",
        "kind": WorkloadKind.POD,
        "container_names": ("app",),
        "node_selector_text": "none",
        "has_node_selector": False,
        "has_qos_request": True,
        "has_trusted_image": True,
        "image_url": "ghcr.io/org/app:1",
        "total_cores": 0.5,
        "instance_count": 1,
    }
    values.update(overrides)
    return WorkloadRecord(**values)


@pytest.fixture
def records() -> list[WorkloadRecord]:
    """Three pods of one replica set plus an unrelated pod."""
    return [
        _record(container_names=("app",), total_cores=0.5),
        _record(container_names=("sidecar",), total_cores=0.1, image_url="docker.io/envoy"),
        _record(container_names=("app",), total_cores=0.5, image_url="ghcr.io/org/app:2"),
        _record(container_names=("sidecar",), total_cores=0.1),
        _record(
            object_name="pod:debug",
            namespace="tools",
            container_names=("shell",),
            total_cores=0.0,
            has_qos_request=False,
        ),
    ]


class TestKeys:
    """Tests for rollup key functions."""

    def test_container_level_key(self) -> None:
        record = _record(container_names=("app",))
        assert container_level_key(record) == ("web-7d9f", "payments", "pod", "app")

    def test_object_level_key(self) -> None:
        record = _record(container_names=("app", "sidecar"))
        assert object_level_key(record) == ("web-7d9f", "payments", "pod")


class TestAggregate:
    """Tests for aggregate function."""

    def test_container_level_merges_same_container(self, records: list[WorkloadRecord]) -> None:
        result = aggregate(records, container_level_key)

        assert len(result) == 3
        app = result[0]
        assert app.container_names == ("app",)
        assert app.total_cores == pytest.approx(1.0)
        assert app.instance_count == 2

    def test_first_seen_values_are_kept(self, records: list[WorkloadRecord]) -> None:
        result = aggregate(records, container_level_key)

        assert result[0].image_url == "ghcr.io/org/app:1"
        assert result[1].image_url == "docker.io/envoy"

    def test_object_level_unions_container_names(self, records: list[WorkloadRecord]) -> None:
        container_level = aggregate(records, container_level_key)
        result = aggregate(container_level, object_level_key)

        assert len(result) == 2
        web = result[0]
        assert set(web.container_names) == {"app", "sidecar"}
        assert web.total_cores == pytest.approx(1.2)
        assert web.instance_count == 4

    def test_output_follows_first_seen_order(self, records: list[WorkloadRecord]) -> None:
        result = aggregate(records, object_level_key)
        assert [r.object_name for r in result] == ["web-7d9f", "pod:debug"]

    def test_does_not_mutate_input(self, records: list[WorkloadRecord]) -> None:
        before = [r.model_copy() for r in records]
        aggregate(records, object_level_key)
        assert records == before

    @pytest.mark.parametrize("key_fn", [container_level_key, object_level_key])
    def test_preserves_totals(self, records: list[WorkloadRecord], key_fn: Any) -> None:
        result = aggregate(records, key_fn)

        assert sum(r.total_cores for r in result) == pytest.approx(
            sum(r.total_cores for r in records)
        )
        assert sum(r.instance_count for r in result) == sum(r.instance_count for r in records)

    @pytest.mark.parametrize("key_fn", [container_level_key, object_level_key])
    def test_idempotent(self, records: list[WorkloadRecord], key_fn: Any) -> None:
        once = aggregate(records, key_fn)
        assert aggregate(once, key_fn) == once

    def test_empty_input(self) -> None:
        assert aggregate([], object_level_key) == []


class TestRollup:
    """Tests for two-stage rollup."""

    def test_object_level_never_inflates_totals(self, records: list[WorkloadRecord]) -> None:
        container_level, object_level = rollup(records)

        total = sum(r.total_cores for r in records)
        assert sum(r.total_cores for r in container_level) == pytest.approx(total)
        assert sum(r.total_cores for r in object_level) == pytest.approx(total)


class TestRankAndFilter:
    """Tests for rank_and_filter function."""

    def test_sorted_by_cores_descending(self) -> None:
        records = [
            _record(object_name="a", total_cores=1.0),
            _record(object_name="b", total_cores=3.0),
            _record(object_name="c", total_cores=2.0),
        ]
        result = rank_and_filter(records, include_compliant=True)
        assert [r.object_name for r in result] == ["b", "c", "a"]

    def test_ties_broken_by_name_then_namespace(self) -> None:
        records = [
            _record(object_name="zeta", namespace="a", total_cores=1.0),
            _record(object_name="alpha", namespace="b", total_cores=1.0),
            _record(object_name="alpha", namespace="a", total_cores=1.0),
        ]
        first = rank_and_filter(records, include_compliant=True)
        second = rank_and_filter(list(reversed(records)), include_compliant=True)

        assert [(r.object_name, r.namespace) for r in first] == [
            ("alpha", "a"),
            ("alpha", "b"),
            ("zeta", "a"),
        ]
        assert first == second

    def test_default_drops_compliant_records(self) -> None:
        compliant = _record(object_name="ok", has_node_selector=True)
        missing_selector = _record(object_name="no-selector")
        missing_request = _record(
            object_name="no-request", has_node_selector=True, has_qos_request=False
        )
        untrusted = _record(
            object_name="untrusted", has_node_selector=True, has_trusted_image=False
        )

        result = rank_and_filter([compliant, missing_selector, missing_request, untrusted])

        assert {r.object_name for r in result} == {"no-selector", "no-request", "untrusted"}

    def test_include_compliant_keeps_all(self) -> None:
        compliant = _record(object_name="ok", has_node_selector=True)
        result = rank_and_filter([compliant], include_compliant=True)
        assert result == [compliant]
