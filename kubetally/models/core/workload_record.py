"""Per-container compliance and cost record."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubetally.constants.enums import WorkloadKind

CONTAINER_SEPARATOR = "|"


class WorkloadRecord(BaseModel):
    """One container's compliance-and-cost facts, or a rollup of several.

    Field order is the column order of every report sink.
    """

    model_config = ConfigDict(frozen=True)

    object_name: str
    namespace: str
    kind: WorkloadKind
    container_names: tuple[str, ...] = Field(min_length=1)
    node_selector_text: str
    has_node_selector: bool
    has_qos_request: bool
    has_trusted_image: bool
    image_url: str
    total_cores: float = Field(ge=0.0)
    instance_count: int = Field(ge=0)

    @field_validator("container_names")
    @classmethod
    def _dedupe_container_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    @property
    def is_compliant(self) -> bool:
        """True when every compliance dimension passes."""
        return self.has_node_selector and self.has_qos_request and self.has_trusted_image

    @property
    def containers_text(self) -> str:
        """Container names joined the way reports render them."""
        return CONTAINER_SEPARATOR.join(self.container_names)

    def merge(self, other: WorkloadRecord) -> WorkloadRecord:
        """Return a new record with ``other`` folded in.

        Cores and instance counts are summed and container names unioned.
        Flags, selector text and image keep this record's (first-seen) values.
        """
        return self.model_copy(
            update={
                "container_names": tuple(
                    dict.fromkeys(self.container_names + other.container_names)
                ),
                "total_cores": self.total_cores + other.total_cores,
                "instance_count": self.instance_count + other.instance_count,
            }
        )

    @classmethod
    def field_names(cls) -> list[str]:
        """Column names in declaration order."""
        return list(cls.model_fields)

    def to_row(self) -> list[Any]:
        """Column values in declaration order, with names joined."""
        row: list[Any] = []
        for name in self.field_names():
            if name == "container_names":
                row.append(self.containers_text)
            elif name == "kind":
                row.append(self.kind.value)
            else:
                row.append(getattr(self, name))
        return row
