"""
Character and String Synthesizers

Features:
- Class-based characters (alpha, numeric, latin blocks, printable, unrestricted)
- Bounded character requests intersected with the class ranges
- Strings of configurable length and character class
- Raw byte strings
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple, Union

from .base import GeneratorBase, DistributionLike

logger = logging.getLogger(__name__)

CharRange = Tuple[int, int]

LOWER_ALPHA: CharRange = (ord('a'), ord('z'))
UPPER_ALPHA: CharRange = (ord('A'), ord('Z'))
DIGITS: CharRange = (ord('0'), ord('9'))
BASIC_LATIN: CharRange = (0x20, 0x7F)
LATIN_SUPPLEMENT: CharRange = (0xA0, 0xFF)

# Every code point except the surrogate block
UNRESTRICTED_RANGES: Tuple[CharRange, ...] = ((0x0000, 0xD7FF), (0xE000, 0x10FFFF))


class CharClass(Enum):
    """Character classes and the inclusive code point ranges they draw from"""
    ALPHA = "alpha"
    ALPHANUMERIC = "alphanumeric"
    NUMERIC = "numeric"
    BASIC_LATIN = "basic_latin"
    LATIN_SUPPLEMENT = "latin_supplement"
    PRINTABLE = "printable"
    UNRESTRICTED = "unrestricted"

    @property
    def ranges(self) -> Tuple[CharRange, ...]:
        return _CLASS_RANGES[self]

    @classmethod
    def parse(cls, value) -> "CharClass":
        """Accept a CharClass, its value or its name (case-insensitive)"""
        if isinstance(value, CharClass):
            return value

        normalized = str(value).strip().lower().replace('-', '_').replace(' ', '_')
        for member in cls:
            if normalized == member.value:
                return member

        available = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown character class '{value}'. Available: {available}")


_CLASS_RANGES = {
    CharClass.ALPHA: (LOWER_ALPHA, UPPER_ALPHA),
    CharClass.ALPHANUMERIC: (LOWER_ALPHA, UPPER_ALPHA, DIGITS),
    CharClass.NUMERIC: (DIGITS,),
    CharClass.BASIC_LATIN: (BASIC_LATIN,),
    CharClass.LATIN_SUPPLEMENT: (LATIN_SUPPLEMENT,),
    CharClass.PRINTABLE: (BASIC_LATIN, LATIN_SUPPLEMENT),
    CharClass.UNRESTRICTED: UNRESTRICTED_RANGES,
}

CharBound = Union[str, int, None]


def _code_point(bound: CharBound) -> Optional[int]:
    if bound is None or isinstance(bound, int):
        return bound
    if len(bound) != 1:
        raise ValueError(f"Character bound must be a single character, got {bound!r}")
    return ord(bound)


def clip_ranges(ranges: Tuple[CharRange, ...], minimum: Optional[int], maximum: Optional[int]) -> List[CharRange]:
    """Intersect inclusive ranges with [minimum, maximum]"""
    low = minimum if minimum is not None else -1
    high = maximum if maximum is not None else 0x10FFFF + 1
    clipped = []
    for start, end in ranges:
        start, end = max(start, low), min(end, high)
        if start <= end:
            clipped.append((start, end))
    return clipped


class TextData(GeneratorBase):
    """Synthesizes characters, strings and bytes"""

    def _char_from_ranges(self, ranges: List[CharRange], distribution: DistributionLike) -> str:
        """
        Pick a character across several ranges

        The ranges are laid end to end and a single index is drawn over their
        combined length, so the distribution shapes the whole span.

        Args:
            ranges: Inclusive code point ranges
            distribution: Distribution for the index

        Returns:
            A one-character string
        """
        total = sum(end - start + 1 for start, end in ranges)
        index = self._int_between(0, total - 1, distribution)
        for start, end in ranges:
            length = end - start + 1
            if index < length:
                return chr(start + index)
            index -= length
        raise RuntimeError("Character index fell outside the combined ranges")

    def _any_char_of(self, char_class: CharClass, minimum: CharBound, maximum: CharBound,
                     distribution: DistributionLike) -> str:
        low, high = _code_point(minimum), _code_point(maximum)
        if low is not None and high is not None:
            low, high = self._ordered(low, high)

        ranges = clip_ranges(char_class.ranges, low, high)
        if not ranges:
            raise ValueError(
                f"No {char_class.value} characters between {minimum!r} and {maximum!r}"
            )
        return self._char_from_ranges(ranges, distribution)

    def any_alpha_char(self, minimum: CharBound = None, maximum: CharBound = None,
                       distribution: DistributionLike = None) -> str:
        """ASCII letter (a-z, A-Z)"""
        return self._any_char_of(CharClass.ALPHA, minimum, maximum, distribution)

    def any_alphanumeric_char(self, minimum: CharBound = None, maximum: CharBound = None,
                              distribution: DistributionLike = None) -> str:
        """ASCII letter or digit"""
        return self._any_char_of(CharClass.ALPHANUMERIC, minimum, maximum, distribution)

    def any_numeric_char(self, minimum: CharBound = None, maximum: CharBound = None,
                         distribution: DistributionLike = None) -> str:
        return self._any_char_of(CharClass.NUMERIC, minimum, maximum, distribution)

    def any_basic_latin_char(self, minimum: CharBound = None, maximum: CharBound = None,
                             distribution: DistributionLike = None) -> str:
        return self._any_char_of(CharClass.BASIC_LATIN, minimum, maximum, distribution)

    def any_latin_supplement_char(self, minimum: CharBound = None, maximum: CharBound = None,
                                  distribution: DistributionLike = None) -> str:
        return self._any_char_of(CharClass.LATIN_SUPPLEMENT, minimum, maximum, distribution)

    def any_printable_char(self, minimum: CharBound = None, maximum: CharBound = None,
                           distribution: DistributionLike = None) -> str:
        return self._any_char_of(CharClass.PRINTABLE, minimum, maximum, distribution)

    def any_char(self, minimum: CharBound = None, maximum: CharBound = None,
                 distribution: DistributionLike = None) -> str:
        """Any code point outside the surrogate block"""
        return self._any_char_of(CharClass.UNRESTRICTED, minimum, maximum, distribution)

    def any_string(
        self,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        distribution: DistributionLike = None,
        char_class: Union[CharClass, str, None] = None
    ) -> str:
        """
        Generate a string

        Args:
            min_length: Minimum length (config default when None)
            max_length: Maximum length (config default when None)
            distribution: Distribution for each character; the length is uniform
            char_class: Character class (config default, alpha, when None)

        Returns:
            A string whose length lies in [min_length, max_length]
        """
        text_config = self.config.text
        length = self._length(min_length, max_length, text_config.min_length, text_config.max_length)
        char_class = CharClass.parse(char_class if char_class is not None else text_config.char_class)

        ranges = list(char_class.ranges)
        return "".join(self._char_from_ranges(ranges, distribution) for _ in range(length))

    def any_bytes(
        self,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        distribution: DistributionLike = None
    ) -> bytes:
        """Byte string with a uniform length and shaped byte values"""
        length = self._length(min_length, max_length, self.config.text.min_bytes, self.config.text.max_bytes)
        return bytes(self._int_between(0, 255, distribution) for _ in range(length))
