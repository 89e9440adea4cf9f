"""
Table macros discovered from a host's table-returning methods.
"""

import logging
from collections.abc import Sequence
from typing import Any

from refschema.introspection.members import HostMembers, MemberDescriptor, ParameterDescriptor
from refschema.introspection.type_utils import type_name
from refschema.shared.capabilities import QueryableTable, is_queryable_table_type
from refschema.shared.exceptions import MacroInvocationError
from refschema.typing.metadata import FunctionInfo

# Configure logging
logger = logging.getLogger(__name__)


class TableMacro:
    """
    Parameterized table generator bound to one host method.

    Applying the macro re-invokes the method on the host with positional
    arguments. Arity and argument types are not checked up front; Python's
    own call dispatch reports mismatches.
    """

    def __init__(self, host: Any, member: MemberDescriptor):
        self._host = host
        self.member = member
        self.name = member.name
        self.parameters: tuple[ParameterDescriptor, ...] = member.parameters
        self.return_type = member.return_type

    def apply(self, arguments: Sequence[Any] = ()) -> QueryableTable:
        """
        Invoke the underlying method and return its table.

        Raises:
            MacroInvocationError: If the method raises or returns None
        """
        arguments = list(arguments)
        try:
            result = getattr(self._host, self.name)(*arguments)
        except Exception as e:
            raise MacroInvocationError(
                f"Error invoking method '{self.name}' with arguments {arguments}: {e}"
            ) from e
        if result is None:
            raise MacroInvocationError(
                f"Method '{self.name}' returned None for arguments {arguments}"
            )
        return result

    def __call__(self, *arguments: Any) -> QueryableTable:
        return self.apply(arguments)

    def to_info(self) -> FunctionInfo:
        return {
            "name": self.name,
            "parameters": [
                {
                    "name": param.name,
                    "ordinal": param.ordinal,
                    "type": type_name(param.annotation) if param.annotation is not None else None,
                    "optional": param.optional,
                }
                for param in self.parameters
            ],
            "return_type": type_name(self.return_type) if self.return_type is not None else None,
        }

    def __repr__(self) -> str:
        return f"Member {{method={self.name}}}"


def discover_macros(host: Any, members: HostMembers) -> dict[str, tuple[TableMacro, ...]]:
    """
    Build table macros for every callable member that returns a queryable table.

    Overloads of one method produce several macros under the same name, in
    declaration order.
    """
    grouped: dict[str, list[TableMacro]] = {}
    for member in members.callables:
        if not is_queryable_table_type(member.return_type):
            continue
        grouped.setdefault(member.name, []).append(TableMacro(host, member))
        logger.debug(f"Discovered table macro {member.name} ({len(member.parameters)} parameters)")
    return {name: tuple(macros) for name, macros in grouped.items()}
