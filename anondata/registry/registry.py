# anondata/registry/registry.py

import logging
import typing
import uuid
from datetime import datetime, date, time, timedelta, timezone, tzinfo
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from anondata.descriptors import (
    Char,
    collection_shape,
    generic_origin,
    literal_values,
    public_members,
    union_members,
)
from anondata.registry.rules import MemberRule, ShapeRule, SynthesisRule

logger = logging.getLogger(__name__)


SYNTHESIS_RULES = [

    # -------------------------
    # Numbers
    # -------------------------
    SynthesisRule(target=bool, func=lambda anon: anon.any_bool()),
    SynthesisRule(target=np.bool_, func=lambda anon: np.bool_(anon.any_bool())),
    SynthesisRule(target=int, func=lambda anon: anon.any_int32()),
    SynthesisRule(target=np.int16, func=lambda anon: np.int16(anon.any_int16())),
    SynthesisRule(target=np.int32, func=lambda anon: np.int32(anon.any_int32())),
    SynthesisRule(target=np.int64, func=lambda anon: np.int64(anon.any_int64())),
    SynthesisRule(target=np.uint8, func=lambda anon: np.uint8(anon.any_byte())),
    SynthesisRule(target=float, func=lambda anon: anon.any_double()),
    SynthesisRule(target=np.float64, func=lambda anon: np.float64(anon.any_double())),
    SynthesisRule(target=np.float32, func=lambda anon: np.float32(anon.any_single())),
    SynthesisRule(target=Decimal, func=lambda anon: anon.any_decimal()),

    # -------------------------
    # Text and identifiers
    # -------------------------
    SynthesisRule(target=str, func=lambda anon: anon.any_string()),
    SynthesisRule(target=Char, func=lambda anon: anon.any_alphanumeric_char()),
    SynthesisRule(target=bytes, func=lambda anon: anon.any_bytes()),
    SynthesisRule(target=uuid.UUID, func=lambda anon: anon.any_uuid()),

    # -------------------------
    # Temporal
    # -------------------------
    SynthesisRule(target=datetime, func=lambda anon: anon.any_datetime()),
    SynthesisRule(target=date, func=lambda anon: anon.any_date()),
    SynthesisRule(target=time, func=lambda anon: anon.any_time()),
    SynthesisRule(target=timedelta, func=lambda anon: anon.any_timedelta()),
    SynthesisRule(target=tzinfo, func=lambda anon: anon.any_timezone()),
    SynthesisRule(target=timezone, func=lambda anon: anon.any_timezone()),

    # -------------------------
    # Anything goes
    # -------------------------
    SynthesisRule(target=object, func=lambda anon: object()),
    SynthesisRule(target=typing.Any, func=lambda anon: object()),
]


def _is_enum(descriptor: Any) -> bool:
    return isinstance(descriptor, type) and issubclass(descriptor, Enum)


def _pick_union_member(anon, descriptor, option):
    members = union_members(descriptor)
    return anon.any(anon.any_item(members), option)


def _pick_literal(anon, descriptor, option):
    return anon.any_item(literal_values(descriptor))


SHAPE_RULES = [

    # -------------------------
    # Checked in order after the exact-type rules
    # -------------------------
    ShapeRule(
        name="enum",
        matches=_is_enum,
        func=lambda anon, descriptor, option: anon.any_enum_value(descriptor),
    ),
    ShapeRule(
        name="union",
        matches=lambda descriptor: bool(union_members(descriptor)),
        func=_pick_union_member,
    ),
    ShapeRule(
        name="literal",
        matches=lambda descriptor: bool(literal_values(descriptor)),
        func=_pick_literal,
    ),
    ShapeRule(
        name="collection",
        matches=lambda descriptor: collection_shape(descriptor) is not None,
        func=lambda anon, descriptor, option: anon.build_collection(collection_shape(descriptor), option),
    ),
]


def _lookup(table: Dict[Any, Any], key: Any) -> Optional[Any]:
    """Dict lookup tolerant of unhashable descriptors"""
    try:
        return table.get(key)
    except TypeError:
        return None


class FactoryRegistry:
    """
    Frozen values, type factories and member overrides

    An engine's registry has the process-wide default registry as its parent;
    lookups that miss locally fall through to it.
    """

    def __init__(self, parent: Optional["FactoryRegistry"] = None):
        self.parent = parent
        self._frozen: Dict[Any, Any] = {}
        self._factories: Dict[Any, Callable] = {}
        self._members: Dict[Tuple[type, str], MemberRule] = {}

    def freeze(self, type_: Any, value: Any):
        self._frozen[type_] = value
        logger.debug(f"Froze {type_!r}")

    def frozen(self, type_: Any) -> Tuple[bool, Any]:
        """(True, value) when a value is frozen for exactly this descriptor"""
        try:
            if type_ in self._frozen:
                return True, self._frozen[type_]
        except TypeError:
            pass
        return False, None

    def register(self, type_: Any, factory: Callable):
        if not callable(factory):
            raise ValueError(f"Factory for {type_!r} must be callable")
        self._factories[type_] = factory
        logger.debug(f"Registered factory for {type_!r}")

    def register_member(self, declaring_type: type, member: str, factory: Callable):
        """
        Register a factory for one member of a type

        Args:
            declaring_type: Exact type whose instances receive the override
            member: Name of a public annotated attribute or property
            factory: callable(anon) producing the member's value

        Raises:
            ValueError: The member is not a public, writable member of declaring_type
        """
        if not isinstance(declaring_type, type):
            raise ValueError(f"Declaring type must be a class, got {declaring_type!r}")
        if not callable(factory):
            raise ValueError(f"Factory for {declaring_type.__name__}.{member} must be callable")

        members = {info.name: info for info in public_members(declaring_type)}
        if member not in members:
            raise ValueError(f"{declaring_type.__name__} has no public member '{member}'")
        if members[member].read_only:
            raise ValueError(f"{declaring_type.__name__}.{member} is read-only and cannot be overridden")

        self._members[(declaring_type, member)] = MemberRule(declaring_type, member, factory)
        logger.debug(f"Registered factory for {declaring_type.__name__}.{member}")

    def factory_for(self, type_: Any) -> Optional[Callable]:
        """Factory for the exact descriptor, then for its generic origin, then the parent's"""
        factory = _lookup(self._factories, type_)
        if factory is None:
            origin = generic_origin(type_)
            if origin is not None:
                factory = _lookup(self._factories, origin)
        if factory is None and self.parent is not None:
            factory = self.parent.factory_for(type_)
        return factory

    def member_factory_for(self, declaring_type: type, member: str) -> Optional[Callable]:
        rule = self._members.get((declaring_type, member))
        if rule is not None:
            return rule.func
        if self.parent is not None:
            return self.parent.member_factory_for(declaring_type, member)
        return None

    def clear(self):
        self._frozen.clear()
        self._factories.clear()
        self._members.clear()


# Process-wide defaults, visible to every engine created afterward
DEFAULT_REGISTRY = FactoryRegistry()


def register_default(type_: Any, factory: Callable):
    DEFAULT_REGISTRY.register(type_, factory)


def register_default_member(declaring_type: type, member: str, factory: Callable):
    DEFAULT_REGISTRY.register_member(declaring_type, member, factory)


def reset_defaults():
    """Drop every process-wide default (not thread-safe)"""
    DEFAULT_REGISTRY.clear()
    logger.debug("Cleared default registry")
