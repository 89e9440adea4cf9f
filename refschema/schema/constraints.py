"""
Foreign-key discovery and wiring into table statistics.
"""

import logging
from typing import Any

from refschema.introspection.members import HostMembers, MemberDescriptor, MemberShape
from refschema.introspection.type_utils import unwrap_optional
from refschema.shared.capabilities import is_constraint_value
from refschema.shared.exceptions import (
    ConstraintResolutionError,
    MissingValueError,
    UnsupportedShapeError,
)

from .statistics import ConstraintDescriptor
from .tables import TableBinding

# Configure logging
logger = logging.getLogger(__name__)


def _may_hold_constraint(member: MemberDescriptor) -> bool:
    """Untyped members are checked by value; typed non-constraint members are not read."""
    if member.shape is not MemberShape.UNSUPPORTED:
        return False
    declared, _ = unwrap_optional(member.declared_type)
    return declared is Any or declared is object or isinstance(declared, str)


def discover_constraints(host: Any, members: HostMembers) -> list[ConstraintDescriptor]:
    """
    Collect the foreign keys declared by a host, in introspection order.

    Members declared with a constraint type must hold a value. Members
    declared as ``Any``/``object`` are included when their value satisfies
    the referential constraint capability.

    Raises:
        MissingValueError: If a constraint-typed member is None
        UnsupportedShapeError: If a constraint-typed member holds something else
    """
    constraints: list[ConstraintDescriptor] = []
    for member in members.data:
        if member.shape is MemberShape.CONSTRAINT:
            value = member.read(host)
            if value is None:
                raise MissingValueError(
                    f"Constraint member '{member.name}' is None for {type(host).__name__}"
                )
            if not is_constraint_value(value):
                raise UnsupportedShapeError(
                    f"Constraint member '{member.name}' holds {type(value).__name__}, "
                    f"which is not a referential constraint"
                )
        elif _may_hold_constraint(member):
            value = member.read(host)
            if not is_constraint_value(value):
                continue
        else:
            continue
        constraints.append(ConstraintDescriptor.from_constraint(value, member_name=member.name))
    return constraints


def wire_constraints(
    tables: dict[str, TableBinding], constraints: list[ConstraintDescriptor]
) -> None:
    """
    Merge foreign keys into their source tables' statistics.

    Every constraint is resolved before any is merged, so a failure leaves
    the tables untouched.

    Raises:
        ConstraintResolutionError: If a constraint names an unknown source table
    """
    resolved: list[tuple[TableBinding, ConstraintDescriptor]] = []
    for constraint in constraints:
        table = tables.get(constraint.source_table)
        if table is None:
            raise ConstraintResolutionError(
                f"Constraint '{constraint.member_name}' references unknown source table "
                f"'{constraint.source_table}'. Known tables: {sorted(tables)}"
            )
        if constraint.target_table not in tables:
            logger.warning(
                f"Constraint '{constraint.member_name}' targets '{constraint.target_table}', "
                f"which is not a table of this schema"
            )
        resolved.append((table, constraint))

    for table, constraint in resolved:
        table.merge_foreign_key(constraint)
        logger.debug(
            f"Wired foreign key {constraint.source_table}{list(constraint.source_columns)} -> "
            f"{constraint.target_table}{list(constraint.target_columns)}"
        )
