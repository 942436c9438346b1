"""Inventory controller for workload compliance data.

This module serves as the fan-out coordinator: one retrieval task per
namespace runs against kubectl, results are consumed as they complete, and
each namespace is extracted and rolled up in a worker thread while slower
namespaces are still loading.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
import time
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from kubetally.constants.enums import WorkloadKind
from kubetally.constants.timeouts import (
    CLUSTER_CHECK_TIMEOUT,
    CLUSTER_REQUEST_TIMEOUT,
)
from kubetally.controllers.base import BaseController, WorkerResult
from kubetally.controllers.base.errors import (
    ClusterConnectionError,
    FetchError,
)
from kubetally.controllers.inventory.fetchers import NamespaceFetcher, WorkloadFetcher
from kubetally.controllers.inventory.parsers import WorkloadParser
from kubetally.models.core.workload_record import WorkloadRecord
from kubetally.models.state.app_settings import AuditSettings
from kubetally.utils.rollup import aggregate, container_level_key

logger = logging.getLogger(__name__)

NamespaceItems = dict[WorkloadKind, list[dict[str, Any]]]

@dataclass
class InventoryResult:
    """Container-level records collected from every reachable namespace."""

    records: list[WorkloadRecord] = field(default_factory=list)
    namespace_count: int = 0
    failed_namespaces: dict[str, str] = field(default_factory=dict)
    skipped_workloads: list[str] = field(default_factory=list)

class InventoryController(BaseController):
    """Cluster workload inventory with parallel per-namespace fetching."""

    def __init__(
        self,
        settings: AuditSettings | None = None,
        run_kubectl_func: Callable[[tuple[str, ...]], Any] | None = None,
    ) -> None:
        """Initialize the inventory controller.

        Args:
            settings: Audit settings; defaults are used when omitted.
            run_kubectl_func: Async kubectl runner override.
        """
        self.settings = settings or AuditSettings()
        self.context = self.settings.context
        self._run_kubectl = run_kubectl_func or self._run_kubectl_async
        self._connection_error: str | None = None

        # Initialize fetchers
        self._namespace_fetcher = NamespaceFetcher(self._run_kubectl)
        self._workload_fetcher = WorkloadFetcher(self._run_kubectl)

        # Initialize parsers
        self._workload_parser = WorkloadParser(
            self.settings.private_registry_pattern,
            self.settings.hosted_registry_patterns,
        )

    # =========================================================================
    # kubectl
    # =========================================================================

    def _run_kubectl_sync(self, args: tuple[str, ...]) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = ["kubectl"]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=self.settings.kubectl_timeout_seconds,
        )
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise RuntimeError(stderr or "kubectl command failed")
        return result.stdout

    async def _run_kubectl_async(self, args: tuple[str, ...]) -> str:
        return await asyncio.to_thread(self._run_kubectl_sync, args)

    @staticmethod
    def _summarize_connection_error(error: BaseException) -> str:
        """Extract a concise connection error from kubectl output."""
        lines = [line.strip() for line in str(error).splitlines() if line.strip()]
        if not lines:
            return "Cluster connection check failed"
        cleaned = lines[-1].removeprefix("error:").strip()
        if len(cleaned) > 160:
            return f"{cleaned[:157].rstrip()}..."
        return cleaned or "Cluster connection check failed"

    # =========================================================================
    # Connection and namespaces
    # =========================================================================

    async def check_connection(self) -> bool:
        """Check if the cluster API server answers."""
        try:
            await asyncio.wait_for(
                self._run_kubectl(
                    ("version", "-o", "json", f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}")
                ),
                timeout=CLUSTER_CHECK_TIMEOUT,
            )
        except asyncio.TimeoutError:
            self._connection_error = "Cluster connection check timed out"
            return False
        except (OSError, subprocess.TimeoutExpired, RuntimeError) as exc:
            self._connection_error = self._summarize_connection_error(exc)
            return False
        self._connection_error = None
        return True

    async def ensure_connection(self) -> None:
        """Raise ClusterConnectionError unless the cluster is reachable."""
        if not await self.check_connection():
            raise ClusterConnectionError(
                self._connection_error or "Cluster connection check failed"
            )

    async def list_namespaces(self) -> list[str]:
        """Return sorted namespace names (NamespaceListError on failure)."""
        logger.info("Retrieving namespaces")
        return await self._namespace_fetcher.fetch_namespaces()

    # =========================================================================
    # Fan-out
    # =========================================================================

    async def fetch_namespace(self, namespace: str) -> NamespaceItems:
        """Fetch all configured workload kinds for one namespace.

        Raises:
            FetchError: If any listing fails or the namespace times out.
        """
        logger.info("Retrieving workloads for namespace %s", namespace)
        try:
            items = await asyncio.wait_for(
                self._workload_fetcher.fetch_namespace(
                    namespace, self.settings.workload_kinds
                ),
                timeout=self.settings.namespace_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise FetchError(
                namespace,
                f"timed out after {self.settings.namespace_timeout_seconds}s",
            ) from exc
        logger.info("Finished retrieving workloads for namespace %s", namespace)
        return items

    def process_namespace(self, namespace: str, items: NamespaceItems) -> WorkerResult:
        """Extract and container-level aggregate one namespace.

        Runs in a worker thread; touches no shared state. Unexpected failures
        are returned as an unsuccessful WorkerResult rather than raised.
        """
        started = time.monotonic()
        try:
            records, skipped = self._workload_parser.parse_namespace(namespace, items)
            aggregated = aggregate(records, container_level_key)
        except Exception as exc:
            logger.exception("Extraction failed for namespace %s", namespace)
            return WorkerResult(
                success=False,
                error=f"extraction failed: {exc}",
                duration_ms=(time.monotonic() - started) * 1000,
            )
        return WorkerResult(
            success=True,
            data=(aggregated, skipped),
            duration_ms=(time.monotonic() - started) * 1000,
        )

    async def collect(self, namespaces: list[str]) -> InventoryResult:
        """Fetch every namespace concurrently and gather container-level records.

        A failing namespace is recorded and skipped; it never cancels siblings.
        """
        result = InventoryResult(namespace_count=len(namespaces))
        if not namespaces:
            return result

        semaphore = asyncio.Semaphore(self.settings.max_concurrent_namespaces)

        async def _fetch_namespace(
            namespace: str,
        ) -> tuple[str, NamespaceItems, FetchError | None]:
            async with semaphore:
                try:
                    return namespace, await self.fetch_namespace(namespace), None
                except FetchError as exc:
                    return namespace, {}, exc

        async def _process(namespace: str, items: NamespaceItems) -> tuple[str, WorkerResult]:
            return namespace, await asyncio.to_thread(self.process_namespace, namespace, items)

        fetch_tasks = [
            asyncio.create_task(_fetch_namespace(namespace)) for namespace in namespaces
        ]
        process_tasks: list[asyncio.Task[tuple[str, WorkerResult]]] = []
        try:
            for future in asyncio.as_completed(fetch_tasks):
                namespace, items, error = await future
                if error is not None:
                    logger.warning("Namespace workload fetch failed for %s: %s", namespace, error)
                    result.failed_namespaces[namespace] = str(error)
                    continue
                process_tasks.append(asyncio.create_task(_process(namespace, items)))

            for namespace, worker_result in await asyncio.gather(*process_tasks):
                if not worker_result.success:
                    result.failed_namespaces[namespace] = worker_result.error or "extraction failed"
                    continue
                records, skipped = worker_result.data
                logger.debug(
                    "Extracted %d records from %s in %.1fms",
                    len(records),
                    namespace,
                    worker_result.duration_ms,
                )
                result.records.extend(records)
                result.skipped_workloads.extend(skipped)
        finally:
            for task in (*fetch_tasks, *process_tasks):
                if not task.done():
                    task.cancel()
            with suppress(Exception):
                await asyncio.gather(*fetch_tasks, *process_tasks, return_exceptions=True)

        return result

    async def fetch_all(self) -> InventoryResult:
        """Check connection, list namespaces, and collect every namespace.

        Raises:
            ClusterConnectionError: If the cluster is unreachable.
            NamespaceListError: If namespaces cannot be listed.
        """
        await self.ensure_connection()
        namespaces = await self.list_namespaces()
        logger.info("Found %d namespaces", len(namespaces))
        return await self.collect(namespaces)
