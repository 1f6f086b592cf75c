"""
Categorical Data Synthesizer

Generates:
- Enumeration members (uniform over named members)
- Flag combinations (bitwise OR of a random subset of single-bit flags)
- Random UUIDs
"""

import uuid
import logging
from enum import Enum, Flag
from functools import reduce
from typing import Any, List
import operator

from .base import GeneratorBase, DistributionLike
from ..exceptions import UnsupportedTypeError

logger = logging.getLogger(__name__)


def _single_bit_members(flag_type) -> List[Flag]:
    members = []
    for member in flag_type.__members__.values():
        value = member.value
        if isinstance(value, int) and value > 0 and value & (value - 1) == 0 and member not in members:
            members.append(member)
    return members


class CategoricalData(GeneratorBase):
    """Synthesizes enumeration members and identifiers"""

    def any_enum_value(self, enum_type: Any, distribution: DistributionLike = None) -> Enum:
        """
        Generate a member of an enumeration

        Args:
            enum_type: Enum or Flag subclass
            distribution: Distribution over the member index

        Returns:
            A member; for Flag types, a non-empty combination of single-bit flags

        Raises:
            UnsupportedTypeError: enum_type is not an enumeration
        """
        if not isinstance(enum_type, type) or not issubclass(enum_type, Enum):
            raise UnsupportedTypeError(enum_type)

        members = list(enum_type)
        if not members:
            raise UnsupportedTypeError(enum_type)

        if issubclass(enum_type, Flag):
            flags = _single_bit_members(enum_type)
            if flags:
                chosen = [flag for flag in flags if self._sample(distribution) >= 0.5]
                if not chosen:
                    chosen = [flags[self._int_between(0, len(flags) - 1, distribution)]]
                return reduce(operator.or_, chosen)

        return members[self._int_between(0, len(members) - 1, distribution)]

    def any_uuid(self) -> uuid.UUID:
        """Random (version 4) UUID drawn from the engine's random source"""
        return uuid.UUID(bytes=self.random.bytes(16), version=4)
