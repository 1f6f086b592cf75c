"""
Distribution Sampler Module

Shapes a draw from the engine's random source into a value in [0, 1):
- Uniform: flat
- PositiveNormal: mass near 0, thin tail near 1
- NegativeNormal: mirror of PositiveNormal, mass near 1
- InvertedNormal: mass near both 0 and 1, sparse around 0.5

The synthesizers scale the sample into their [minimum, maximum] range, so the
distribution biases where in the range a value lands.
"""

import math
from enum import Enum

import numpy as np

# Gaussian draws are folded over this many standard deviations
NSIGMA = 3

# Largest double strictly below 1.0
_BELOW_ONE = math.nextafter(1.0, 0.0)


def _folded_gaussian(random: np.random.Generator, sigma: int) -> float:
    """Standard normal draw folded into (-1, 1) by its remainder over sigma"""
    return math.fmod(float(random.standard_normal()), sigma) / sigma


class Distribution(Enum):
    """Closed set of probability shapes used by every ranged synthesizer"""
    UNIFORM = "uniform"
    POSITIVE_NORMAL = "positive_normal"
    NEGATIVE_NORMAL = "negative_normal"
    INVERTED_NORMAL = "inverted_normal"

    def sample(self, random: np.random.Generator) -> float:
        """
        Draw a shaped value

        Args:
            random: Random source owned by the engine

        Returns:
            A float in [0, 1)
        """
        if self is Distribution.UNIFORM:
            value = float(random.random())
        elif self is Distribution.POSITIVE_NORMAL:
            value = abs(_folded_gaussian(random, NSIGMA))
        elif self is Distribution.NEGATIVE_NORMAL:
            value = 1.0 - abs(_folded_gaussian(random, NSIGMA))
        elif self is Distribution.INVERTED_NORMAL:
            value = _folded_gaussian(random, NSIGMA * 2)
            if value < 0:
                value += 1.0
        else:
            raise ValueError(f"Unknown distribution: {self}")

        return min(max(value, 0.0), _BELOW_ONE)

    @classmethod
    def parse(cls, value) -> "Distribution":
        """Accept a Distribution, its value or its name (case-insensitive)"""
        if isinstance(value, Distribution):
            return value

        # "PositiveNormal", "positive-normal" and "positive_normal" all match
        normalized = str(value).strip().lower()
        for separator in ('-', '_', ' '):
            normalized = normalized.replace(separator, '')
        for member in cls:
            if normalized == member.value.replace('_', ''):
                return member

        available = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown distribution '{value}'. Available: {available}")
