"""
Person Name Synthesizer

Generates realistic but entirely fictitious names:
- First names (male / female, or by configured gender mix)
- Surnames
- Full names, occasionally with a title, professional or generational
  suffix, or middle initial

Names come from Faker in the configured locale. The Faker instance is seeded
from the engine's random source, so names are reproducible per seed.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .base import GeneratorBase
from ..distribution import Distribution

logger = logging.getLogger(__name__)


@dataclass
class NameComponents:
    """Components of a person's name"""
    first_name: str
    last_name: str
    middle_initial: Optional[str] = None
    title: Optional[str] = None
    suffix: Optional[str] = None

    def full_name(self) -> str:
        """Generate full name string"""
        parts = []

        if self.title:
            parts.append(self.title)

        parts.append(self.first_name)

        if self.middle_initial:
            parts.append(f"{self.middle_initial}.")

        parts.append(self.last_name)

        if self.suffix:
            parts.append(self.suffix)

        return " ".join(parts)


class PersonData(GeneratorBase):
    """
    Generate person names

    One full name in eleven carries a title, one a professional suffix and
    one a generational suffix; one plain name in six has a middle initial.
    """

    MALE_TITLES = ['Mr.', 'Dr.']
    FEMALE_TITLES = ['Mrs.', 'Ms.', 'Miss', 'Dr.']
    PROFESSIONAL_SUFFIXES = ['MD', 'DDS', 'PhD', 'DVM']
    GENERATIONAL_SUFFIXES = ['Jr.', 'Sr.', 'I', 'II', 'III']

    def _is_male(self, male: Optional[bool]) -> bool:
        if male is not None:
            return male
        share = self.config.pii.gender_distribution.get('male', 0.5)
        return float(self.random.random()) < share

    def _choice(self, items):
        return items[self._int_between(0, len(items) - 1, Distribution.UNIFORM)]

    def any_first_name(self, male: Optional[bool] = None) -> str:
        """
        Generate a first name

        Args:
            male: True for male, False for female, None to pick by gender mix

        Returns:
            A first name
        """
        if self._is_male(male):
            return self.faker.first_name_male()
        return self.faker.first_name_female()

    def any_surname(self) -> str:
        return self.faker.last_name()

    def _simple_name(self, male: bool) -> NameComponents:
        components = NameComponents(
            first_name=self.any_first_name(male),
            last_name=self.any_surname(),
        )

        if self._int_between(0, 5, Distribution.UNIFORM) == 0:
            components.middle_initial = self.any_first_name(male)[0]

        return components

    def any_full_name(self, male: Optional[bool] = None) -> str:
        """
        Generate a full name

        Args:
            male: True for male, False for female, None to pick by gender mix

        Returns:
            A full name such as "Dr. Jane Roe" or "John Q. Public Jr."
        """
        male = self._is_male(male)
        components = self._simple_name(male)

        shape = self._int_between(0, 10, Distribution.UNIFORM)
        if shape == 0:
            components.title = self._choice(self.MALE_TITLES if male else self.FEMALE_TITLES)
        elif shape == 1:
            components.suffix = self._choice(self.PROFESSIONAL_SUFFIXES)
        elif shape == 2:
            components.suffix = self._choice(self.GENERATIONAL_SUFFIXES)

        return components.full_name()
