"""Namespace fetcher for inventory controller - lists cluster namespaces."""

from __future__ import annotations

import json
import logging
from typing import Any

from kubetally.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kubetally.controllers.base.errors import NamespaceListError

logger = logging.getLogger(__name__)


class NamespaceFetcher:
    """Fetches namespace names from Kubernetes cluster."""

    def __init__(self, run_kubectl_func: Any) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    async def fetch_namespaces(self) -> list[str]:
        """Fetch sorted namespace names.

        Raises:
            NamespaceListError: If kubectl fails or returns malformed output.
        """
        try:
            output = await self._run_kubectl(
                (
                    "get",
                    "namespaces",
                    "-o",
                    "json",
                    f"--request-timeout={CLUSTER_REQUEST_TIMEOUT}",
                )
            )
            data = json.loads(output) if output else {}
        except json.JSONDecodeError as exc:
            raise NamespaceListError(f"Malformed namespace list: {exc}") from exc
        except Exception as exc:
            raise NamespaceListError(f"Failed to list namespaces: {exc}") from exc

        names = [
            (item.get("metadata", {}).get("name") or "").strip()
            for item in data.get("items", [])
        ]
        return sorted(name for name in names if name)
