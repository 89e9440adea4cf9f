"""
Table statistics and the foreign keys merged into them.
"""

from dataclasses import dataclass, field
from typing import Any

from refschema.shared.capabilities import as_names
from refschema.typing.metadata import ForeignKeyInfo, StatisticsInfo


@dataclass(frozen=True)
class ConstraintDescriptor:
    """A foreign key discovered on the host, resolved against the table map."""

    source_table: str
    source_columns: tuple[str, ...]
    target_table: str
    target_columns: tuple[str, ...]
    member_name: str | None = None

    @classmethod
    def from_constraint(cls, constraint: Any, member_name: str | None = None) -> "ConstraintDescriptor":
        """Build a descriptor from any value satisfying the referential constraint capability."""
        source_name = as_names(constraint.source_qualified_name)
        target_name = as_names(constraint.target_qualified_name)
        return cls(
            source_table=source_name[-1],
            source_columns=as_names(constraint.source_columns),
            target_table=target_name[-1],
            target_columns=as_names(constraint.target_columns),
            member_name=member_name,
        )

    def to_info(self) -> ForeignKeyInfo:
        return {
            "source_columns": list(self.source_columns),
            "target_table": self.target_table,
            "target_columns": list(self.target_columns),
        }


@dataclass(frozen=True)
class StatisticsRecord:
    """Row-count estimate (``None`` when unknown) and foreign keys of a table."""

    estimated_row_count: float | None = None
    foreign_keys: tuple[ConstraintDescriptor, ...] = field(default_factory=tuple)

    @property
    def is_row_count_known(self) -> bool:
        return self.estimated_row_count is not None

    def with_foreign_key(self, constraint: ConstraintDescriptor) -> "StatisticsRecord":
        """Return a copy with one more foreign key appended."""
        return StatisticsRecord(
            estimated_row_count=self.estimated_row_count,
            foreign_keys=self.foreign_keys + (constraint,),
        )

    def to_info(self) -> StatisticsInfo:
        return {
            "estimated_row_count": self.estimated_row_count,
            "foreign_keys": [fk.to_info() for fk in self.foreign_keys],
        }


UNKNOWN = StatisticsRecord()
