"""Tests for namespace and workload fetchers."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from kubetally.constants.enums import WorkloadKind
from kubetally.controllers.base.errors import FetchError, NamespaceListError
from kubetally.controllers.inventory.fetchers import NamespaceFetcher, WorkloadFetcher


class TestNamespaceFetcher:
    """Tests for NamespaceFetcher class."""

    @pytest.fixture
    def mock_run_kubectl(self) -> AsyncMock:
        """Create mock run_kubectl function."""
        return AsyncMock()

    def test_fetcher_init(self, mock_run_kubectl: AsyncMock) -> None:
        fetcher = NamespaceFetcher(run_kubectl_func=mock_run_kubectl)
        assert fetcher._run_kubectl is mock_run_kubectl

    @pytest.mark.asyncio
    async def test_fetch_namespaces_sorted(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.return_value = json.dumps(
            {
                "items": [
                    {"metadata": {"name": "payments"}},
                    {"metadata": {"name": "default"}},
                    {"metadata": {}},
                ]
            }
        )
        fetcher = NamespaceFetcher(mock_run_kubectl)

        namespaces = await fetcher.fetch_namespaces()

        assert namespaces == ["default", "payments"]
        called_args = mock_run_kubectl.await_args_list[0].args[0]
        assert called_args[:2] == ("get", "namespaces")
        assert "json" in called_args

    @pytest.mark.asyncio
    async def test_fetch_namespaces_empty_output(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.return_value = ""
        assert await NamespaceFetcher(mock_run_kubectl).fetch_namespaces() == []

    @pytest.mark.asyncio
    async def test_fetch_namespaces_kubectl_failure(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.side_effect = RuntimeError("forbidden")
        with pytest.raises(NamespaceListError, match="forbidden"):
            await NamespaceFetcher(mock_run_kubectl).fetch_namespaces()

    @pytest.mark.asyncio
    async def test_fetch_namespaces_bad_json(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.return_value = "{not json"
        with pytest.raises(NamespaceListError):
            await NamespaceFetcher(mock_run_kubectl).fetch_namespaces()


class TestWorkloadFetcher:
    """Tests for WorkloadFetcher class."""

    @pytest.fixture
    def mock_run_kubectl(self) -> AsyncMock:
        """Create mock run_kubectl function."""
        return AsyncMock()

    def test_build_list_args(self) -> None:
        args = WorkloadFetcher.build_list_args("payments", WorkloadKind.DAEMONSET)
        assert args[:4] == ("get", "daemonsets", "-n", "payments")
        assert "-o" in args
        assert args[args.index("-o") + 1] == "json"

    @pytest.mark.asyncio
    async def test_fetch_workloads(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.return_value = json.dumps({"items": [{"metadata": {"name": "web"}}]})
        fetcher = WorkloadFetcher(mock_run_kubectl)

        items = await fetcher.fetch_workloads("payments", WorkloadKind.DEPLOYMENT)

        assert items == [{"metadata": {"name": "web"}}]
        called_args = mock_run_kubectl.await_args_list[0].args[0]
        assert called_args[1] == "deployments"
        assert called_args[called_args.index("-n") + 1] == "payments"

    @pytest.mark.asyncio
    async def test_fetch_workloads_empty_output(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.return_value = ""
        fetcher = WorkloadFetcher(mock_run_kubectl)
        assert await fetcher.fetch_workloads("payments", WorkloadKind.POD) == []

    @pytest.mark.asyncio
    async def test_fetch_workloads_failure(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.side_effect = RuntimeError("connection reset by peer")
        fetcher = WorkloadFetcher(mock_run_kubectl)

        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch_workloads("payments", WorkloadKind.POD)

        assert exc_info.value.namespace == "payments"
        assert exc_info.value.kind == "pod"

    @pytest.mark.asyncio
    async def test_fetch_workloads_bad_json(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.return_value = "<html>"
        with pytest.raises(FetchError):
            await WorkloadFetcher(mock_run_kubectl).fetch_workloads("ns", WorkloadKind.POD)

    @pytest.mark.asyncio
    async def test_fetch_namespace_all_kinds(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.return_value = json.dumps({"items": []})
        fetcher = WorkloadFetcher(mock_run_kubectl)

        result = await fetcher.fetch_namespace(
            "payments", [WorkloadKind.DEPLOYMENT, WorkloadKind.STATEFULSET]
        )

        assert list(result) == [WorkloadKind.DEPLOYMENT, WorkloadKind.STATEFULSET]
        assert mock_run_kubectl.await_count == 2
