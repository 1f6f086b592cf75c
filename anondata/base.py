"""Synthesizer surface shared by the engine and customization contexts."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable

from .generators import (
    NumericData,
    TextData,
    PersonData,
    TemporalData,
    CategoricalData,
    CollectionData,
)
from .exceptions import AnonymousDataError


class PopulationOption(Enum):
    """How far object graph population reaches"""
    NONE = "none"  # construct only
    SHALLOW = "shallow"  # assign immediate members
    DEEP = "deep"  # assign members and recurse into them

    @classmethod
    def parse(cls, value) -> "PopulationOption":
        if isinstance(value, PopulationOption):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            available = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown population option '{value}'. Available: {available}") from None


class AnonymousDataBase(
    NumericData,
    TextData,
    PersonData,
    TemporalData,
    CategoricalData,
    CollectionData,
    ABC,
):
    """
    Everything that can produce anonymous values

    Subclasses supply `any` (dispatch on a type descriptor) along with the
    random source, configuration and Faker instance the synthesizers read.
    """

    @abstractmethod
    def any(self, type_: Any, option=None) -> Any:
        """Produce a value of the given type descriptor"""

    def any_matching(self, type_: Any, predicate: Callable[[Any], bool], option=None) -> Any:
        """
        Retry `any` until the predicate holds

        Args:
            type_: Type descriptor
            predicate: Condition the value must satisfy
            option: Population option

        Returns:
            The first generated value satisfying the predicate

        Raises:
            AnonymousDataError: No value matched within generation.max_attempts
        """
        attempts = self.config.generation.max_attempts
        for _ in range(attempts):
            value = self.any(type_, option)
            if predicate(value):
                return value
        raise AnonymousDataError(f"No value of {type_!r} satisfied the predicate after {attempts} attempts")
