"""
Type Descriptor Helpers

Normalizes runtime types and typing constructs for dispatch:
- Unwrapping of Optional, Annotated and NewType
- Union and Literal member extraction
- Collection shape detection (builtins, abc containers, custom subclasses)
- Abstract type detection
- Constructor parameter and public member discovery for population
"""

import collections
import collections.abc as abc
import dataclasses
import inspect
import logging
import sys
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NewType, Optional, Tuple

logger = logging.getLogger(__name__)

# A single character; dispatched to any_alphanumeric_char
Char = NewType("Char", str)

NoneType = type(None)

# Python 3.10+ spells unions `A | B` as types.UnionType
_UNION_TYPES = tuple(t for t in (typing.Union, getattr(types, "UnionType", None)) if t is not None)


class CollectionKind(Enum):
    """How a collection descriptor is built"""
    LIST = "list"
    SET = "set"
    FROZENSET = "frozenset"
    DEQUE = "deque"
    DICT = "dict"
    TUPLE = "tuple"  # fixed arity, one type per position
    VARIADIC_TUPLE = "variadic_tuple"  # tuple[T, ...]
    ITERATOR = "iterator"
    CUSTOM = "custom"  # user type built empty then appended to


@dataclass
class CollectionShape:
    """Resolved collection descriptor"""
    kind: CollectionKind
    container: Any
    element_types: Tuple[Any, ...] = field(default_factory=tuple)


@dataclass
class MemberInfo:
    """A public, populatable member of a class"""
    name: str
    type_: Any
    read_only: bool = False
    is_property: bool = False


@dataclass
class ParameterInfo:
    """A required constructor parameter"""
    name: str
    type_: Any
    positional_only: bool = False


# Origins that map straight onto a builtin container
_ORIGIN_KINDS = {
    list: (CollectionKind.LIST, list),
    abc.Iterable: (CollectionKind.LIST, list),
    abc.Collection: (CollectionKind.LIST, list),
    abc.Sequence: (CollectionKind.LIST, list),
    abc.MutableSequence: (CollectionKind.LIST, list),
    abc.Reversible: (CollectionKind.LIST, list),
    abc.Iterator: (CollectionKind.ITERATOR, iter),
    set: (CollectionKind.SET, set),
    abc.MutableSet: (CollectionKind.SET, set),
    frozenset: (CollectionKind.FROZENSET, frozenset),
    abc.Set: (CollectionKind.FROZENSET, frozenset),
    collections.deque: (CollectionKind.DEQUE, collections.deque),
    dict: (CollectionKind.DICT, dict),
    abc.Mapping: (CollectionKind.DICT, dict),
    abc.MutableMapping: (CollectionKind.DICT, dict),
    collections.OrderedDict: (CollectionKind.DICT, collections.OrderedDict),
}

# Builtin bases a user class can extend to become a custom enumerable
_CUSTOM_BASES = (list, set, dict, collections.deque)


def unwrap(type_: Any) -> Any:
    """
    Strip Annotated, Optional and NewType layers

    Args:
        type_: Type descriptor

    Returns:
        The underlying descriptor (Char is kept as-is)
    """
    while True:
        origin = typing.get_origin(type_)
        if origin is typing.Annotated:
            type_ = typing.get_args(type_)[0]
        elif origin in _UNION_TYPES:
            members = [arg for arg in typing.get_args(type_) if arg is not NoneType]
            if len(members) != 1:
                return type_
            type_ = members[0]
        elif type_ is not Char and is_new_type(type_):
            type_ = type_.__supertype__
        else:
            return type_


def is_new_type(type_: Any) -> bool:
    return hasattr(type_, "__supertype__") and callable(type_)


def is_optional(type_: Any) -> bool:
    """True when None is an accepted value of the descriptor"""
    if type_ is NoneType or type_ is None:
        return True
    origin = typing.get_origin(type_)
    if origin is typing.Annotated:
        return is_optional(typing.get_args(type_)[0])
    if origin in _UNION_TYPES:
        return NoneType in typing.get_args(type_)
    return False


def union_members(type_: Any) -> Optional[Tuple[Any, ...]]:
    """Non-None members of a Union, or None if the descriptor isn't one"""
    if typing.get_origin(type_) in _UNION_TYPES:
        return tuple(arg for arg in typing.get_args(type_) if arg is not NoneType)
    return None


def literal_values(type_: Any) -> Optional[Tuple[Any, ...]]:
    """Allowed values of a Literal, or None if the descriptor isn't one"""
    if typing.get_origin(type_) is typing.Literal:
        return typing.get_args(type_)
    return None


def generic_origin(type_: Any) -> Optional[Any]:
    """Unparameterized origin of a generic alias (list for list[int])"""
    return typing.get_origin(type_)


def collection_shape(type_: Any) -> Optional[CollectionShape]:
    """
    Detect whether a descriptor denotes a collection

    Args:
        type_: Unwrapped type descriptor

    Returns:
        CollectionShape, or None for non-collections
    """
    origin = typing.get_origin(type_)
    args = typing.get_args(type_)

    if origin is None:
        origin, args = type_, ()

    if origin is tuple:
        return _tuple_shape(args)

    if origin in _ORIGIN_KINDS:
        kind, container = _ORIGIN_KINDS[origin]
        if kind is CollectionKind.DICT:
            key_type, value_type = (args + (str, str))[:2] if args else (str, str)
            return CollectionShape(kind, container, (key_type, value_type))
        return CollectionShape(kind, container, (args[0] if args else str,))

    if not isinstance(origin, type) or issubclass(origin, (str, bytes)):
        return None

    # NamedTuples and other tuple subclasses are records, not collections
    if issubclass(origin, tuple):
        return None

    if issubclass(origin, _CUSTOM_BASES):
        return CollectionShape(CollectionKind.CUSTOM, origin, args or _base_element_types(origin))

    # Parameterized user generic with an append/add method, e.g. Bag[int]
    if args and (callable(getattr(origin, "append", None)) or callable(getattr(origin, "add", None))):
        return CollectionShape(CollectionKind.CUSTOM, origin, args)

    return None


def _tuple_shape(args: Tuple[Any, ...]) -> CollectionShape:
    if not args:
        return CollectionShape(CollectionKind.VARIADIC_TUPLE, tuple, (str,))
    if len(args) == 2 and args[1] is Ellipsis:
        return CollectionShape(CollectionKind.VARIADIC_TUPLE, tuple, (args[0],))
    # tuple[()] is the empty tuple
    if args == ((),):
        return CollectionShape(CollectionKind.TUPLE, tuple, ())
    return CollectionShape(CollectionKind.TUPLE, tuple, args)


def _base_element_types(cls: type) -> Tuple[Any, ...]:
    """Element types declared on a builtin container base (class Models(List[Model]))"""
    for klass in cls.__mro__:
        for base in getattr(klass, "__orig_bases__", ()):
            origin = typing.get_origin(base)
            if origin in _ORIGIN_KINDS or origin in _CUSTOM_BASES:
                args = typing.get_args(base)
                if args and not any(isinstance(arg, typing.TypeVar) for arg in args):
                    return args
    if issubclass(cls, dict):
        return (str, str)
    return (str,)


def is_abstract(type_: Any) -> bool:
    """Abstract base classes and protocols cannot be constructed"""
    if not isinstance(type_, type):
        return False
    if getattr(type_, "_is_protocol", False):
        return True
    return inspect.isabstract(type_)


def _class_hints(cls: type) -> Dict[str, Any]:
    """Resolved annotations across the MRO; unresolvable names become Any"""
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError, AttributeError) as e:
        logger.debug(f"Could not resolve all annotations of {cls.__qualname__}: {e}")

    hints = {}
    for klass in reversed(cls.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        for name, hint in _own_annotations(klass).items():
            hints[name] = _resolve_hint(klass, name, hint, globalns, localns)
    return hints


def _own_annotations(klass: type) -> Dict[str, Any]:
    if hasattr(inspect, "get_annotations"):
        try:
            return inspect.get_annotations(klass)
        except NameError as e:
            logger.debug(f"Annotations of {klass.__qualname__} fail to evaluate eagerly: {e}")
    return vars(klass).get("__annotations__", {})


def _resolve_hint(klass: type, name: str, hint: Any, globalns: Dict[str, Any], localns: Dict[str, Any]) -> Any:
    if hint is None:
        return NoneType
    if not isinstance(hint, str):
        return hint
    try:
        return eval(hint, globalns, localns)
    except Exception as e:
        logger.debug(f"Annotation {klass.__qualname__}.{name} = {hint!r} is unresolvable: {e}")

    # An unresolved ClassVar still marks a class attribute
    if hint.split("[", 1)[0].strip() in ("ClassVar", "typing.ClassVar"):
        return typing.ClassVar
    return Any


def _callable_hints(func: Any) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError, AttributeError):
        return {}


def public_members(cls: type) -> List[MemberInfo]:
    """
    Public annotated attributes and properties of a class

    ClassVars and names starting with an underscore are skipped. Fields of
    frozen dataclasses, NamedTuple fields and setter-less properties are
    reported as read-only.

    Args:
        cls: Class to inspect

    Returns:
        Members in declaration order
    """
    members: Dict[str, MemberInfo] = {}
    frozen = (
        (dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen)
        or issubclass(cls, tuple)
    )

    for name, hint in _class_hints(cls).items():
        if name.startswith("_") or typing.get_origin(hint) is typing.ClassVar or hint is typing.ClassVar:
            continue
        if isinstance(hint, dataclasses.InitVar):
            continue
        members[name] = MemberInfo(name=name, type_=hint, read_only=frozen)

    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if name.startswith("_") or not isinstance(value, property):
                continue
            hint = _callable_hints(value.fget).get("return", Any) if value.fget else Any
            members[name] = MemberInfo(
                name=name,
                type_=hint,
                read_only=value.fset is None,
                is_property=True,
            )

    return list(members.values())


def required_parameters(cls: type) -> List[ParameterInfo]:
    """
    Constructor parameters without defaults

    Args:
        cls: Class to inspect

    Returns:
        Required parameters, with types resolved where annotations allow
    """
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return []

    hints = dict(_class_hints(cls))
    hints.update(_callable_hints(getattr(cls, "__init__", None)))

    parameters = []
    for name, parameter in signature.parameters.items():
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if parameter.default is not inspect.Parameter.empty:
            continue

        hint = hints.get(name, parameter.annotation)
        if hint is inspect.Parameter.empty or isinstance(hint, str):
            hint = inspect.Parameter.empty

        parameters.append(ParameterInfo(
            name=name,
            type_=hint,
            positional_only=parameter.kind is inspect.Parameter.POSITIONAL_ONLY,
        ))

    return parameters
