"""
Object Graph Populator

Builds and fills instances of arbitrary classes:
- Construction with synthesized required constructor arguments
- Assignment of unset public members (annotated attributes and properties)
- Elements appended to already-initialized mutable collections
- Member overrides registered per (type, member)
- Deep recursion guarded by the types on the current path
"""

import inspect
import logging
import uuid
from collections import deque
from datetime import date, time, timedelta, tzinfo
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from .base import PopulationOption
from .descriptors import (
    MemberInfo,
    collection_shape,
    is_abstract,
    is_optional,
    public_members,
    required_parameters,
    unwrap,
    CollectionKind,
)
from .exceptions import AnonymousDataError, PopulationFailureError, UnsupportedTypeError

logger = logging.getLogger(__name__)

_MISSING = object()

# Values that are never populated or recursed into
_SCALARS = (str, bytes, int, float, complex, Decimal, date, time, timedelta, tzinfo, uuid.UUID, Enum, np.generic)

_MUTABLE_COLLECTIONS = (list, set, dict, deque)

_SEQUENCES = (list, set, frozenset, tuple, deque)


def is_unset(value: Any) -> bool:
    """Missing, None, zero, False, empty string/bytes or empty tuple"""
    if value is _MISSING or value is None:
        return True
    if isinstance(value, (str, bytes, tuple)):
        return len(value) == 0
    if isinstance(value, (bool, int, float, Decimal)):
        return value == 0
    return False


def is_mutable_collection(value: Any, declared_type: Any = None) -> bool:
    """Builtin mutable containers, or custom enumerables declared as collections"""
    if isinstance(value, _MUTABLE_COLLECTIONS):
        return True
    if declared_type is None or value is _MISSING or value is None:
        return False
    shape = collection_shape(unwrap(declared_type))
    if shape is None or shape.kind is not CollectionKind.CUSTOM:
        return False
    return callable(getattr(value, "append", None)) or callable(getattr(value, "add", None))


class ObjectPopulator:
    """
    Constructs and populates objects for one engine

    Keeps the stack of types whose constructors are running so required
    constructor arguments cannot recurse forever.
    """

    def __init__(self, engine):
        self.engine = engine
        self._constructing: List[type] = []

    # Construction

    def create(self, cls: type, option: PopulationOption) -> Any:
        """
        Construct an instance and populate it

        Args:
            cls: Concrete class
            option: How far to populate

        Returns:
            The new instance
        """
        instance = self.construct(cls)
        if option is PopulationOption.NONE:
            return instance
        return self.populate(instance, option)

    def construct(self, cls: type) -> Any:
        if is_abstract(cls):
            raise UnsupportedTypeError(cls)
        if cls in self._constructing:
            raise PopulationFailureError(
                cls, None, RecursionError(f"{cls.__qualname__} is already being constructed")
            )

        self._constructing.append(cls)
        try:
            args, kwargs = self._arguments(cls)
            try:
                return cls(*args, **kwargs)
            except AnonymousDataError:
                raise
            except Exception as e:
                raise PopulationFailureError(cls, None, e) from e
        finally:
            self._constructing.pop()

    def _arguments(self, cls: type) -> Tuple[List[Any], Dict[str, Any]]:
        args, kwargs = [], {}

        for parameter in required_parameters(cls):
            if parameter.type_ is inspect.Parameter.empty:
                raise PopulationFailureError(
                    cls, parameter.name, TypeError("required parameter has no type annotation")
                )

            value = self._argument(cls, parameter.name, parameter.type_)
            if parameter.positional_only:
                args.append(value)
            else:
                kwargs[parameter.name] = value

        return args, kwargs

    def _argument(self, cls: type, name: str, type_: Any) -> Any:
        """Synthesize one constructor argument, cutting cycles through types under construction"""
        target = unwrap(type_)

        if self._is_constructing(target):
            if is_optional(type_):
                return None
            raise PopulationFailureError(
                cls, name, RecursionError(f"{target.__qualname__} is already being constructed")
            )

        shape = collection_shape(target)
        if shape is not None and any(self._is_constructing(unwrap(t)) for t in shape.element_types):
            if is_optional(type_):
                return None
            return _empty(shape)

        return self.engine.any(type_, PopulationOption.NONE)

    def _is_constructing(self, target: Any) -> bool:
        return isinstance(target, type) and target in self._constructing

    # Population

    def populate(self, instance: Any, option: PopulationOption,
                 path: Optional[FrozenSet[type]] = None) -> Any:
        """
        Assign the members of an existing instance

        Args:
            instance: Object to fill
            option: SHALLOW assigns members; DEEP also recurses into them
            path: Types being populated above this instance

        Returns:
            The same instance
        """
        if option is PopulationOption.NONE or instance is None or isinstance(instance, _SCALARS):
            return instance

        cls = type(instance)
        path = (path or frozenset()) | {cls}

        for member in public_members(cls):
            value = self._populate_member(instance, cls, member, option)
            if option is PopulationOption.DEEP:
                self._recurse(value, path)

        return instance

    def _populate_member(self, instance: Any, cls: type, member: MemberInfo, option: PopulationOption) -> Any:
        override = self.engine.registry.member_factory_for(cls, member.name)

        try:
            current = getattr(instance, member.name, _MISSING)
        except Exception as e:
            raise PopulationFailureError(cls, member.name, e) from e

        assign = not member.read_only and (
            is_unset(current) or (override is not None and option is PopulationOption.DEEP)
        )

        if assign:
            if override is not None:
                value = override(self.engine)
            else:
                value = self.engine.any(member.type_, PopulationOption.NONE)
            try:
                setattr(instance, member.name, value)
            except Exception as e:
                raise PopulationFailureError(cls, member.name, e) from e
            return value

        if is_mutable_collection(current, member.type_):
            try:
                self.engine.extend_collection(current, member.type_, PopulationOption.NONE)
            except AnonymousDataError:
                raise
            except Exception as e:
                raise PopulationFailureError(cls, member.name, e) from e

        return None if current is _MISSING else current

    def _recurse(self, value: Any, path: FrozenSet[type]):
        """Deep-populate a member value or the elements of a collection"""
        if value is None or isinstance(value, _SCALARS) or isinstance(value, type):
            return

        if isinstance(value, dict):
            elements = list(value.values())
        elif isinstance(value, _SEQUENCES):
            elements = list(value)
        else:
            elements = None

        if elements is not None:
            for element in elements:
                self._recurse(element, path)
            return

        if type(value) in path:
            return

        self.populate(value, PopulationOption.DEEP, path)


def _empty(shape) -> Any:
    if shape.kind is CollectionKind.ITERATOR:
        return iter(())
    return shape.container()
