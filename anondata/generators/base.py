"""
Shared state and range helpers for the synthesizer mixins.
"""

import logging
from typing import Optional, Tuple, Union

import numpy as np
from faker import Faker

from ..config import Config
from ..distribution import Distribution

logger = logging.getLogger(__name__)

DistributionLike = Union[Distribution, str, None]


class GeneratorBase:
    """
    Base for the synthesizer mixins

    Subclasses provide the random source, configuration and Faker instance;
    the mixins only read them.
    """

    random: np.random.Generator
    config: Config
    faker: Faker

    def _distribution(self, distribution: DistributionLike = None) -> Distribution:
        """Resolve a distribution argument, falling back to the configured default"""
        if distribution is None:
            distribution = self.config.numeric.distribution
        return Distribution.parse(distribution)

    def _sample(self, distribution: DistributionLike = None) -> float:
        """Shaped sample in [0, 1)"""
        return self._distribution(distribution).sample(self.random)

    def _ordered(self, minimum, maximum) -> Tuple:
        """
        Check range bounds against the configured range policy

        Args:
            minimum: Lower bound
            maximum: Upper bound

        Returns:
            (minimum, maximum), swapped when the policy allows it
        """
        if minimum > maximum:
            if self.config.generation.range_policy == "swap":
                logger.debug(f"Swapping bounds {minimum} > {maximum}")
                return maximum, minimum
            raise ValueError(f"minimum ({minimum}) must not be greater than maximum ({maximum})")
        return minimum, maximum

    def _int_between(self, minimum: int, maximum: int, distribution: DistributionLike = None) -> int:
        """Integer in the inclusive range [minimum, maximum]"""
        minimum, maximum = self._ordered(minimum, maximum)
        span = maximum - minimum
        offset = int(self._sample(distribution) * (span + 1))
        return minimum + min(offset, span)

    def _float_between(self, minimum: float, maximum: float, distribution: DistributionLike = None) -> float:
        """Float in [minimum, maximum]; works across the full double range"""
        minimum, maximum = self._ordered(float(minimum), float(maximum))

        # Halves keep (maximum - minimum) from overflowing to inf
        middle = minimum / 2 + maximum / 2
        half_span = maximum / 2 - minimum / 2
        value = middle + (2 * self._sample(distribution) - 1) * half_span

        return min(max(value, minimum), maximum)

    def _length(self, minimum: Optional[int], maximum: Optional[int], default_min: int, default_max: int) -> int:
        """Uniform length; bounds left as None take the configured defaults"""
        if minimum is None:
            minimum = default_min if maximum is None else min(default_min, maximum)
        if maximum is None:
            maximum = max(default_max, minimum)
        if minimum < 0:
            raise ValueError(f"minimum length must not be negative, got {minimum}")
        return self._int_between(minimum, maximum, Distribution.UNIFORM)
