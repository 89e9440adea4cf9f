"""
Introspection of host types.
"""

from .members import (
    HostMembers,
    MemberDescriptor,
    MemberKind,
    MemberShape,
    ParameterDescriptor,
    classify_type,
    introspect_members,
    public_data_members,
)
from .type_utils import python_type_to_datatype, type_name

__all__ = [
    "HostMembers",
    "MemberDescriptor",
    "MemberKind",
    "MemberShape",
    "ParameterDescriptor",
    "classify_type",
    "introspect_members",
    "public_data_members",
    "python_type_to_datatype",
    "type_name",
]
