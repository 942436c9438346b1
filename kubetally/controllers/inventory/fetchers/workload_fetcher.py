"""Workload fetcher for inventory controller - lists workloads per namespace."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from kubetally.constants.enums import WorkloadKind
from kubetally.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kubetally.controllers.base.errors import FetchError

logger = logging.getLogger(__name__)


class WorkloadFetcher:
    """Fetches workload objects of given kinds from one namespace."""

    def __init__(self, run_kubectl_func: Any) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    @staticmethod
    def build_list_args(namespace: str, kind: WorkloadKind) -> tuple[str, ...]:
        """Build kubectl arguments listing one kind in one namespace."""
        return (
            "get",
            kind.resource_name,
            "-n",
            namespace,
            "-o",
            "json",
            f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}",
        )

    async def fetch_workloads(self, namespace: str, kind: WorkloadKind) -> list[dict[str, Any]]:
        """Fetch raw workload objects of one kind.

        Raises:
            FetchError: If kubectl fails or returns malformed output.
        """
        try:
            output = await self._run_kubectl(self.build_list_args(namespace, kind))
        except Exception as exc:
            raise FetchError(namespace, str(exc), kind.value) from exc
        if not output:
            return []
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise FetchError(namespace, f"malformed JSON: {exc}", kind.value) from exc
        return data.get("items", [])

    async def fetch_namespace(
        self,
        namespace: str,
        kinds: Iterable[WorkloadKind],
    ) -> dict[WorkloadKind, list[dict[str, Any]]]:
        """Fetch every configured kind for a namespace.

        Kinds are fetched one after another; any failure fails the namespace.
        """
        items_by_kind: dict[WorkloadKind, list[dict[str, Any]]] = {}
        for kind in kinds:
            items_by_kind[kind] = await self.fetch_workloads(namespace, kind)
        logger.debug(
            "Fetched %d workloads from namespace %s",
            sum(len(items) for items in items_by_kind.values()),
            namespace,
        )
        return items_by_kind
