"""Report sinks for ranked workload records.

Renders records as a rich table for the terminal and as CSV files, one per
rollup granularity. Columns follow WorkloadRecord field order.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from kubetally.constants.defaults import (
    CONTAINER_LEVEL_CSV_NAME,
    OBJECT_LEVEL_CSV_NAME,
)
from kubetally.models.core.workload_record import WorkloadRecord
from kubetally.models.state.app_settings import AuditSettings

logger = logging.getLogger(__name__)

_NUMERIC_COLUMNS = {"total_cores", "instance_count"}


def _format_cell(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_table(records: Iterable[WorkloadRecord], title: str | None = None) -> Table:
    """Build a rich Table with one row per record."""
    table = Table(title=title)
    for name in WorkloadRecord.field_names():
        table.add_column(name, justify="right" if name in _NUMERIC_COLUMNS else "left")
    for record in records:
        table.add_row(*(_format_cell(value) for value in record.to_row()))
    return table


def print_table(
    records: Iterable[WorkloadRecord],
    console: Console | None = None,
    title: str | None = None,
) -> None:
    """Print records as a table to stdout (or the given console)."""
    (console or Console()).print(render_table(records, title=title))


def write_csv(records: Iterable[WorkloadRecord], path: Path) -> int:
    """Write records to a CSV file with a field-name header.

    Returns:
        Number of data rows written.
    """
    count = 0
    with path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(WorkloadRecord.field_names())
        for record in records:
            writer.writerow([_format_cell(value) for value in record.to_row()])
            count += 1
    return count


class ReportGenerator:
    """Writes the container-level and object-level CSV reports."""

    def __init__(self, settings: AuditSettings):
        self.output_dir = Path(settings.output_dir)

    def write_reports(
        self,
        container_level: Iterable[WorkloadRecord],
        object_level: Iterable[WorkloadRecord],
    ) -> tuple[Path, Path]:
        """Write both CSV files and return their paths."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        container_path = self.output_dir / CONTAINER_LEVEL_CSV_NAME
        object_path = self.output_dir / OBJECT_LEVEL_CSV_NAME

        rows = write_csv(container_level, container_path)
        logger.info("Wrote %d container-level rows to %s", rows, container_path)
        rows = write_csv(object_level, object_path)
        logger.info("Wrote %d object-level rows to %s", rows, object_path)
        return container_path, object_path
