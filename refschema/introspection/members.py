"""
Member introspection for host types.

Enumerates the public data and callable members of a host class once and
classifies each data member's declared type into a closed set of shapes.
Introspection only looks at the class; it never reads a host instance.
"""

import functools
import inspect
import logging
import sys
import typing
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, get_args, get_origin, get_type_hints

from refschema.shared.capabilities import is_constraint_type
from refschema.shared.exceptions import IntrospectionAccessError

from .type_utils import (
    element_class,
    is_iterable_type,
    is_text_or_mapping,
    unwrap_optional,
)

# Configure logging
logger = logging.getLogger(__name__)

# Containers whose element type is fixed by the annotation and whose values have a length
_ARRAY_ORIGINS = (list, Sequence, MutableSequence)


class MemberKind(str, Enum):
    """Kind of host member."""

    DATA = "data"
    CALLABLE = "callable"


class MemberShape(str, Enum):
    """Shape of a data member's declared type, resolved once at introspection."""

    ARRAY = "array"
    SEQUENCE = "sequence"
    CONSTRAINT = "constraint"
    UNSUPPORTED = "unsupported"

    @property
    def is_table(self) -> bool:
        return self in (MemberShape.ARRAY, MemberShape.SEQUENCE)


@dataclass(frozen=True)
class ParameterDescriptor:
    """One positional parameter of a callable member."""

    name: str
    ordinal: int
    annotation: Any = None
    default: Any = inspect.Parameter.empty

    @property
    def optional(self) -> bool:
        return self.default is not inspect.Parameter.empty


@dataclass(frozen=True)
class MemberDescriptor:
    """Static metadata about one public member of a host type."""

    name: str
    kind: MemberKind
    declared_type: Any = None
    shape: MemberShape = MemberShape.UNSUPPORTED
    element_type: type = object
    nullable: bool = False
    is_property: bool = False
    parameters: tuple[ParameterDescriptor, ...] = field(default_factory=tuple)
    return_type: Any = None

    def read(self, host: Any) -> Any:
        """
        Read this member's current value from a host instance.

        An annotated attribute that was never assigned reads as ``None``.

        Raises:
            IntrospectionAccessError: If the member exists but cannot be read
        """
        try:
            return getattr(host, self.name)
        except AttributeError as e:
            if self.is_property:
                raise IntrospectionAccessError(
                    f"Error while accessing member '{self.name}' of {type(host).__name__}: {e}"
                ) from e
            return None
        except Exception as e:
            raise IntrospectionAccessError(
                f"Error while accessing member '{self.name}' of {type(host).__name__}: {e}"
            ) from e


@dataclass(frozen=True)
class HostMembers:
    """Introspection result for one host type, partitioned by kind."""

    host_type: type
    data: tuple[MemberDescriptor, ...]
    callables: tuple[MemberDescriptor, ...]

    @property
    def tables(self) -> tuple[MemberDescriptor, ...]:
        """Data members that qualify as tables, in introspection order."""
        return tuple(member for member in self.data if member.shape.is_table)

    def get(self, name: str) -> MemberDescriptor | None:
        for member in self.data + self.callables:
            if member.name == name:
                return member
        return None


def classify_type(declared_type: Any) -> tuple[MemberShape, type]:
    """
    Classify a declared type.

    Returns:
        Tuple of (shape, element_type). Element type is ``object`` when it
        cannot be recovered from the annotation.

    Examples:
        >>> classify_type(list[int])
        (<MemberShape.ARRAY: 'array'>, <class 'int'>)
        >>> classify_type(str)
        (<MemberShape.UNSUPPORTED: 'unsupported'>, <class 'object'>)
    """
    tp, _ = unwrap_optional(declared_type)
    origin = get_origin(tp)
    args = get_args(tp)

    if origin is None:
        if not isinstance(tp, type):
            return MemberShape.UNSUPPORTED, object
        if is_text_or_mapping(tp):
            return MemberShape.UNSUPPORTED, object
        if is_constraint_type(tp):
            return MemberShape.CONSTRAINT, object
        if issubclass(tp, list) or tp is tuple:
            return MemberShape.ARRAY, object
        if is_iterable_type(tp):
            return MemberShape.SEQUENCE, object
        return MemberShape.UNSUPPORTED, object

    if not isinstance(origin, type) or is_text_or_mapping(origin):
        return MemberShape.UNSUPPORTED, object

    if origin is tuple:
        # Only homogeneous tuples are collections; tuple[int, str] is a record
        if len(args) == 2 and args[1] is Ellipsis:
            return MemberShape.ARRAY, element_class(args[0])
        return MemberShape.UNSUPPORTED, object

    if origin in _ARRAY_ORIGINS:
        return MemberShape.ARRAY, element_class(args[0]) if args else object

    if is_iterable_type(origin):
        return MemberShape.SEQUENCE, element_class(args[0]) if args else object

    return MemberShape.UNSUPPORTED, object


def _evaluate_annotation(
    name: str, value: Any, globalns: dict[str, Any], localns: dict[str, Any] | None
) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return eval(value, globalns, localns)
    except Exception as e:
        logger.warning(f"Could not resolve annotation '{name}: {value}': {e}")
        return value


def _resolve_hints(obj: Any) -> dict[str, Any]:
    """Resolve annotations, keeping the raw string only for the ones that cannot be resolved."""
    try:
        return get_type_hints(obj)
    except Exception as e:
        logger.debug(f"Resolving type hints of {obj!r} one by one: {e}")

    if isinstance(obj, type):
        merged: dict[str, Any] = {}
        for klass in reversed(obj.__mro__):
            if klass is object:
                continue
            module = sys.modules.get(klass.__module__)
            globalns = dict(vars(module)) if module is not None else {}
            localns = dict(vars(klass))
            for name, value in inspect.get_annotations(klass).items():
                merged[name] = _evaluate_annotation(name, value, globalns, localns)
        return merged

    globalns = getattr(inspect.unwrap(obj), "__globals__", {})
    return {
        name: _evaluate_annotation(name, value, globalns, None)
        for name, value in inspect.get_annotations(obj).items()
    }


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _declared_on_object(name: str) -> bool:
    return hasattr(object, name)


def _data_member(name: str, declared_type: Any, is_property: bool = False) -> MemberDescriptor:
    shape, element_type = classify_type(declared_type)
    _, nullable = unwrap_optional(declared_type)
    return MemberDescriptor(
        name=name,
        kind=MemberKind.DATA,
        declared_type=declared_type,
        shape=shape,
        element_type=element_type,
        nullable=nullable,
        is_property=is_property,
    )


def _parameters(func: Any, hints: dict[str, Any], bound: bool) -> tuple[ParameterDescriptor, ...]:
    params = list(inspect.signature(func).parameters.values())
    if bound and params:
        params = params[1:]
    descriptors = []
    for ordinal, param in enumerate(params):
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        descriptors.append(
            ParameterDescriptor(
                name=param.name,
                ordinal=ordinal,
                annotation=hints.get(param.name),
                default=param.default,
            )
        )
    return tuple(descriptors)


def _callable_members(name: str, attr: Any) -> list[MemberDescriptor]:
    """Describe a callable attribute; one descriptor per declared overload."""
    if isinstance(attr, staticmethod):
        func, bound = attr.__func__, False
    elif isinstance(attr, classmethod):
        func, bound = attr.__func__, True
    elif inspect.isfunction(attr):
        func, bound = attr, True
    else:
        return []

    signatures = list(typing.get_overloads(func)) or [func]
    members = []
    for signature in signatures:
        hints = _resolve_hints(signature)
        members.append(
            MemberDescriptor(
                name=name,
                kind=MemberKind.CALLABLE,
                parameters=_parameters(signature, hints, bound),
                return_type=hints.get("return"),
            )
        )
    return members


def public_data_members(host_type: type) -> tuple[MemberDescriptor, ...]:
    """Public data members of a type, in introspection order."""
    return introspect_members(host_type).data


@functools.lru_cache(maxsize=None)
def introspect_members(host_type: type) -> HostMembers:
    """
    Enumerate a host type's public members.

    Data members are annotated attributes (base classes first) followed by
    annotated read-only properties. Callable members are functions, static
    methods and class methods. Members defined on ``object`` are skipped.

    Args:
        host_type: The host class

    Returns:
        HostMembers with data and callable descriptors in introspection order
    """
    data: dict[str, MemberDescriptor] = {}
    for name, declared_type in _resolve_hints(host_type).items():
        if _is_public(name) and not _declared_on_object(name):
            data[name] = _data_member(name, declared_type)

    callables: list[MemberDescriptor] = []
    seen: set[str] = set()
    for klass in reversed(host_type.__mro__):
        if klass is object:
            continue
        for name in vars(klass):
            if name in seen or name in data or not _is_public(name) or _declared_on_object(name):
                continue
            seen.add(name)
            attr = inspect.getattr_static(host_type, name)
            if isinstance(attr, property):
                if attr.fget is None:
                    continue
                return_type = _resolve_hints(attr.fget).get("return")
                if return_type is not None:
                    data[name] = _data_member(name, return_type, is_property=True)
                continue
            callables.extend(_callable_members(name, attr))

    members = HostMembers(
        host_type=host_type,
        data=tuple(data.values()),
        callables=tuple(callables),
    )
    logger.debug(
        f"Introspected {host_type.__name__}: {len(members.data)} data members, "
        f"{len(members.callables)} callable members"
    )
    return members
