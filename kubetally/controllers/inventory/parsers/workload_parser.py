"""Workload parser for inventory controller - extracts compliance records.

Turns raw kubectl workload objects (pods and replica-controlling kinds) into
one WorkloadRecord per container.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from kubetally.constants.defaults import NODE_SELECTOR_NONE
from kubetally.constants.enums import WorkloadKind
from kubetally.constants.patterns import (
    HOSTED_REGISTRY_PATTERNS,
    PRIVATE_REGISTRY_PATTERN,
)
from kubetally.controllers.base.errors import ExtractionError, ParseError
from kubetally.models.core.workload_record import WorkloadRecord
from kubetally.utils.image_classifier import has_trusted_image
from kubetally.utils.resource_parser import cores_for

logger = logging.getLogger(__name__)


class WorkloadParser:
    """Parses workload objects into compliance records."""

    _OWNER_SEPARATOR = "|"
    _BARE_POD_PREFIX = "pod:"

    def __init__(
        self,
        private_registry_pattern: str = PRIVATE_REGISTRY_PATTERN,
        hosted_registry_patterns: Iterable[str] = HOSTED_REGISTRY_PATTERNS,
    ) -> None:
        """Initialize workload parser.

        Args:
            private_registry_pattern: Substring identifying the internal registry
            hosted_registry_patterns: Substrings of trusted hosted registries
        """
        self._private_registry_pattern = private_registry_pattern
        self._hosted_registry_patterns = tuple(hosted_registry_patterns)

    @staticmethod
    def format_node_selector(node_selector: Mapping[str, str] | None) -> str:
        """Render a node selector deterministically, or the "none" sentinel."""
        if node_selector is None:
            return NODE_SELECTOR_NONE
        return json.dumps(dict(node_selector), sort_keys=True)

    def is_trusted_image(self, image: str) -> bool:
        """Return True when the image comes from a trusted registry."""
        return has_trusted_image(
            image,
            self._private_registry_pattern,
            self._hosted_registry_patterns,
        )

    def extract(
        self,
        owner_name: str,
        namespace: str,
        kind: WorkloadKind,
        containers: list[dict[str, Any]],
        node_selector: Mapping[str, str] | None,
        instance_count: int,
    ) -> list[WorkloadRecord]:
        """Build one record per container, in container order.

        Args:
            owner_name: Owning workload identity
            namespace: Workload namespace
            kind: Workload kind
            containers: Container specs from the pod spec
            node_selector: Pod spec nodeSelector, None when absent
            instance_count: Replica count (1 for bare pods)

        Returns:
            List of WorkloadRecord objects.

        Raises:
            ExtractionError: If there are no containers or a container has no image.
        """
        if not containers:
            raise ExtractionError(owner_name, namespace, "no container specs")

        has_node_selector = node_selector is not None
        node_selector_text = self.format_node_selector(node_selector)

        records: list[WorkloadRecord] = []
        for container in containers:
            container_name = container.get("name") or ""
            image = container.get("image")
            if not image:
                raise ExtractionError(
                    owner_name,
                    namespace,
                    f"container {container_name or '<unnamed>'} has no image",
                )

            resources = container.get("resources") or {}
            requests = resources.get("requests")
            has_qos_request = requests is not None
            cpu_request = (requests or {}).get("cpu", "0")

            try:
                total_cores = cores_for(cpu_request, instance_count)
            except ParseError as exc:
                logger.warning(
                    "Treating CPU request of %s/%s container %s as zero: %s",
                    namespace,
                    owner_name,
                    container_name,
                    exc,
                )
                total_cores = 0.0

            records.append(
                WorkloadRecord(
                    object_name=owner_name,
                    namespace=namespace,
                    kind=kind,
                    container_names=(container_name,),
                    node_selector_text=node_selector_text,
                    has_node_selector=has_node_selector,
                    has_qos_request=has_qos_request,
                    has_trusted_image=self.is_trusted_image(image),
                    image_url=image,
                    total_cores=total_cores,
                    instance_count=instance_count,
                )
            )
        return records

    def _owner_name(self, metadata: dict[str, Any], kind: WorkloadKind) -> str:
        name = metadata.get("name") or ""
        if kind is not WorkloadKind.POD:
            return name
        owners = [
            ref.get("name", "")
            for ref in metadata.get("ownerReferences") or []
        ]
        if owners:
            return self._OWNER_SEPARATOR.join(owners)
        return f"{self._BARE_POD_PREFIX}{name}"

    @staticmethod
    def _instance_count(item: dict[str, Any], kind: WorkloadKind) -> int:
        if kind is WorkloadKind.POD:
            return 1
        if kind is WorkloadKind.DAEMONSET:
            value = (item.get("status") or {}).get("desiredNumberScheduled")
        else:
            value = (item.get("spec") or {}).get("replicas")
        # Absent replicas default to 1, as the API server does.
        return 1 if value is None else int(value)

    @staticmethod
    def _identity(item: Any) -> tuple[str, str | None]:
        metadata = item.get("metadata") if isinstance(item, dict) else None
        if not isinstance(metadata, dict):
            return "<unknown>", None
        return str(metadata.get("name") or "<unknown>"), metadata.get("namespace")

    def parse_workload(self, item: dict[str, Any], kind: WorkloadKind) -> list[WorkloadRecord]:
        """Extract records from one raw kubectl workload object.

        Raises:
            ExtractionError: If namespace or pod spec is missing, a container
                cannot be extracted, or the object has an unexpected shape.
        """
        try:
            return self._parse_workload(item, kind)
        except (AttributeError, TypeError, ValueError) as exc:
            object_name, namespace = self._identity(item)
            raise ExtractionError(
                object_name, namespace, f"malformed {kind.value}: {exc}"
            ) from exc

    def _parse_workload(self, item: dict[str, Any], kind: WorkloadKind) -> list[WorkloadRecord]:
        metadata = item.get("metadata") or {}
        object_name = self._owner_name(metadata, kind)
        namespace = metadata.get("namespace")
        if not namespace:
            raise ExtractionError(object_name, None, "no namespace")

        spec = item.get("spec") or {}
        if kind.is_controller:
            pod_spec = (spec.get("template") or {}).get("spec")
        else:
            pod_spec = item.get("spec")
        if not pod_spec:
            raise ExtractionError(object_name, namespace, "no pod spec")

        try:
            instance_count = self._instance_count(item, kind)
        except (TypeError, ValueError) as exc:
            raise ExtractionError(object_name, namespace, f"invalid instance count: {exc}") from exc

        try:
            return self.extract(
                object_name,
                namespace,
                kind,
                pod_spec.get("containers") or [],
                pod_spec.get("nodeSelector"),
                instance_count,
            )
        except ValidationError as exc:
            raise ExtractionError(object_name, namespace, f"invalid workload values: {exc}") from exc

    def parse_namespace(
        self,
        namespace: str,
        items_by_kind: Mapping[WorkloadKind, list[dict[str, Any]]],
    ) -> tuple[list[WorkloadRecord], list[str]]:
        """Extract every workload of a namespace, skipping malformed ones.

        Returns:
            Tuple of extracted records and messages for skipped workloads.
        """
        records: list[WorkloadRecord] = []
        skipped: list[str] = []
        for kind, items in items_by_kind.items():
            for item in items:
                try:
                    records.extend(self.parse_workload(item, kind))
                except ExtractionError as exc:
                    logger.warning("Skipping %s in namespace %s: %s", kind.value, namespace, exc)
                    skipped.append(str(exc))
        return records, skipped
