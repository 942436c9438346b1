"""Command-line entry point for kubetally."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from kubetally.controllers.base.errors import (
    ClusterConnectionError,
    NamespaceListError,
)
from kubetally.controllers.inventory import InventoryController
from kubetally.models.core.workload_record import WorkloadRecord
from kubetally.models.state import AuditSettings, ConfigError, ConfigManager
from kubetally.utils.report_generator import ReportGenerator, print_table
from kubetally.utils.rollup import rank_and_filter, rollup

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class AuditReport:
    """Ranked rollups produced by one audit run."""

    container_level: list[WorkloadRecord] = field(default_factory=list)
    object_level: list[WorkloadRecord] = field(default_factory=list)
    failed_namespaces: dict[str, str] = field(default_factory=dict)
    skipped_workloads: list[str] = field(default_factory=list)
    csv_paths: tuple[Path, Path] | None = None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kubetally",
        description=(
            "Rank cluster workloads by requested CPU and flag missing node "
            "selectors, CPU requests and untrusted image registries."
        ),
    )
    parser.add_argument(
        "--disable-filter",
        action="store_true",
        help="Disable filters so that compliant workloads are displayed too",
    )
    parser.add_argument(
        "--generate-csv",
        action="store_true",
        help=(
            "Write results_by_container_name.csv and results_by_object.csv; "
            "CSVs hold the same filtered rows as the table unless --disable-filter is set"
        ),
    )
    parser.add_argument(
        "--print-table",
        action="store_true",
        help="Print the container-level table to stdout",
    )
    return parser


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=_LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


async def run_audit(
    settings: AuditSettings,
    *,
    include_compliant: bool = False,
    generate_csv: bool = False,
    show_table: bool = False,
    controller: InventoryController | None = None,
    console: Console | None = None,
) -> AuditReport:
    """Run inventory, rollups, ranking and the enabled sinks.

    Raises:
        ClusterConnectionError: If the cluster is unreachable.
        NamespaceListError: If namespaces cannot be listed.
    """
    controller = controller or InventoryController(settings)
    inventory = await controller.fetch_all()

    logger.info("Rolling up results at container and object level")
    container_level, object_level = rollup(inventory.records)

    report = AuditReport(
        container_level=rank_and_filter(container_level, include_compliant),
        object_level=rank_and_filter(object_level, include_compliant),
        failed_namespaces=dict(inventory.failed_namespaces),
        skipped_workloads=list(inventory.skipped_workloads),
    )

    if show_table:
        print_table(report.container_level, console=console)

    if generate_csv:
        report.csv_paths = ReportGenerator(settings).write_reports(
            report.container_level, report.object_level
        )

    logger.info(
        "Audited %d namespaces: %d container rows, %d object rows, "
        "%d namespaces failed, %d workloads skipped",
        inventory.namespace_count,
        len(report.container_level),
        len(report.object_level),
        len(report.failed_namespaces),
        len(report.skipped_workloads),
    )
    return report


def main(argv: Sequence[str] | None = None) -> int:
    """Run the auditor and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        settings = ConfigManager.load()
    except ConfigError as exc:
        configure_logging("INFO")
        logger.error("%s", exc)
        return 1

    configure_logging(settings.log_level)

    try:
        asyncio.run(
            run_audit(
                settings,
                include_compliant=args.disable_filter,
                generate_csv=args.generate_csv,
                show_table=args.print_table,
            )
        )
    except ClusterConnectionError as exc:
        logger.error("Failed to connect to cluster: %s", exc)
        return 1
    except NamespaceListError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
