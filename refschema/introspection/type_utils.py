"""
Helpers for reading and classifying declared Python types.
"""

import datetime
import decimal
import types
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, TypeVar, Union, get_args, get_origin

from refschema.shared.constants import NON_TABLE_ITERABLES
from refschema.typing.metadata import DataType


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """
    Strip ``Optional[...]`` and ``ClassVar[...]`` wrappers from a declared type.

    Returns:
        Tuple of (inner_type, nullable). Unions of more than one non-None
        member are returned unchanged.
    """
    if get_origin(tp) is ClassVar:
        args = get_args(tp)
        tp = args[0] if args else Any
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        nullable = len(members) != len(get_args(tp))
        if len(members) == 1:
            return members[0], nullable
        return tp, nullable
    return tp, False


def element_class(tp: Any) -> type:
    """
    Reduce an element annotation to a runtime class.

    ``Any``, type variables and unresolved forward references become
    ``object``; parameterized generics become their origin class.
    """
    tp, _ = unwrap_optional(tp)
    if tp is Any or isinstance(tp, TypeVar) or isinstance(tp, str):
        return object
    origin = get_origin(tp)
    if origin is not None:
        return origin if isinstance(origin, type) else object
    return tp if isinstance(tp, type) else object


def is_text_or_mapping(tp: type) -> bool:
    """True for iterable types that never describe a collection of rows."""
    return issubclass(tp, NON_TABLE_ITERABLES) or issubclass(tp, Mapping)


def is_iterable_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Iterable)


def type_name(tp: Any) -> str:
    """Readable name for a declared type, used in repr and exports."""
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, type) and get_origin(tp) is None:
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp).replace("typing.", "")


# Checked in order: bool before int, datetime before date
_DATATYPE_MAP: tuple[tuple[type, DataType], ...] = (
    (bool, "boolean"),
    (int, "integer"),
    (float, "float"),
    (decimal.Decimal, "number"),
    (str, "string"),
    (bytes, "string"),
    (datetime.datetime, "timestamp"),
    (datetime.date, "date"),
    (datetime.time, "time"),
    (Mapping, "json"),
    (list, "array"),
    (tuple, "array"),
    (set, "array"),
    (frozenset, "array"),
)


def python_type_to_datatype(tp: Any) -> DataType:
    """
    Map a declared Python type to the column datatype vocabulary.

    Examples:
        >>> python_type_to_datatype(int)
        'integer'
        >>> python_type_to_datatype(list[str])
        'array'
    """
    tp, _ = unwrap_optional(tp)
    origin = get_origin(tp)
    if origin is not None:
        tp = origin
    if not isinstance(tp, type):
        return "object"
    for python_type, datatype in _DATATYPE_MAP:
        if issubclass(tp, python_type):
            return datatype
    return "object"
