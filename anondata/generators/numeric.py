"""
Numeric Data Synthesizers

Features:
1. Booleans, signed integers of each width and unsigned bytes
2. Single, double and decimal floating point
3. Full-domain defaults with optional [minimum, maximum] bounds
4. Sign-restricted (positive / negative) variants
5. Every value shaped by a Distribution
"""

import sys
import logging
from decimal import Decimal, localcontext

import numpy as np

from .base import GeneratorBase, DistributionLike

logger = logging.getLogger(__name__)

INT16_MIN, INT16_MAX = -2**15, 2**15 - 1
INT32_MIN, INT32_MAX = -2**31, 2**31 - 1
INT64_MIN, INT64_MAX = -2**63, 2**63 - 1
BYTE_MIN, BYTE_MAX = 0, 255

SINGLE_MAX = float(np.finfo(np.float32).max)
DOUBLE_MAX = sys.float_info.max

# Domain of a 96-bit scaled decimal
DECIMAL_MAX = Decimal(2**96 - 1)
DECIMAL_MIN = Decimal(-(2**96 - 1))

# Significant digits kept in synthesized decimals
DECIMAL_PRECISION = 28


class NumericData(GeneratorBase):
    """Synthesizes booleans and numbers within a range"""

    def any_bool(self, distribution: DistributionLike = None) -> bool:
        """True when the shaped sample lands in the upper half of [0, 1)"""
        return self._sample(distribution) >= 0.5

    # Integers

    def any_int16(self, minimum: int = INT16_MIN, maximum: int = INT16_MAX,
                  distribution: DistributionLike = None) -> int:
        return self._int_between(minimum, maximum, distribution)

    def any_positive_int16(self, maximum: int = INT16_MAX, distribution: DistributionLike = None) -> int:
        return self.any_int16(0, maximum, distribution)

    def any_negative_int16(self, minimum: int = INT16_MIN, distribution: DistributionLike = None) -> int:
        return self.any_int16(minimum, 0, distribution)

    def any_int32(self, minimum: int = INT32_MIN, maximum: int = INT32_MAX,
                  distribution: DistributionLike = None) -> int:
        """
        Generate a 32-bit integer

        Args:
            minimum: Inclusive lower bound
            maximum: Inclusive upper bound
            distribution: Where in the range values tend to land

        Returns:
            An int in [minimum, maximum]
        """
        return self._int_between(minimum, maximum, distribution)

    def any_positive_int32(self, maximum: int = INT32_MAX, distribution: DistributionLike = None) -> int:
        return self.any_int32(0, maximum, distribution)

    def any_negative_int32(self, minimum: int = INT32_MIN, distribution: DistributionLike = None) -> int:
        return self.any_int32(minimum, 0, distribution)

    def any_int64(self, minimum: int = INT64_MIN, maximum: int = INT64_MAX,
                  distribution: DistributionLike = None) -> int:
        return self._int_between(minimum, maximum, distribution)

    def any_positive_int64(self, maximum: int = INT64_MAX, distribution: DistributionLike = None) -> int:
        return self.any_int64(0, maximum, distribution)

    def any_negative_int64(self, minimum: int = INT64_MIN, distribution: DistributionLike = None) -> int:
        return self.any_int64(minimum, 0, distribution)

    def any_byte(self, minimum: int = BYTE_MIN, maximum: int = BYTE_MAX,
                 distribution: DistributionLike = None) -> int:
        if minimum < BYTE_MIN or maximum > BYTE_MAX:
            raise ValueError(f"byte bounds must lie within [{BYTE_MIN}, {BYTE_MAX}]")
        return self._int_between(minimum, maximum, distribution)

    # Floating point

    def any_single(self, minimum: float = -SINGLE_MAX, maximum: float = SINGLE_MAX,
                   distribution: DistributionLike = None) -> float:
        """Double rounded to single precision, kept within the bounds"""
        minimum, maximum = self._ordered(minimum, maximum)
        value = float(np.float32(self._float_between(minimum, maximum, distribution)))
        return min(max(value, minimum), maximum)

    def any_positive_single(self, maximum: float = SINGLE_MAX, distribution: DistributionLike = None) -> float:
        return self.any_single(0.0, maximum, distribution)

    def any_negative_single(self, minimum: float = -SINGLE_MAX, distribution: DistributionLike = None) -> float:
        return self.any_single(minimum, 0.0, distribution)

    def any_double(self, minimum: float = -DOUBLE_MAX, maximum: float = DOUBLE_MAX,
                   distribution: DistributionLike = None) -> float:
        return self._float_between(minimum, maximum, distribution)

    def any_positive_double(self, maximum: float = DOUBLE_MAX, distribution: DistributionLike = None) -> float:
        return self.any_double(0.0, maximum, distribution)

    def any_negative_double(self, minimum: float = -DOUBLE_MAX, distribution: DistributionLike = None) -> float:
        return self.any_double(minimum, 0.0, distribution)

    def any_decimal(self, minimum=DECIMAL_MIN, maximum=DECIMAL_MAX,
                    distribution: DistributionLike = None) -> Decimal:
        """
        Generate a Decimal

        Args:
            minimum: Lower bound (anything Decimal accepts)
            maximum: Upper bound (anything Decimal accepts)
            distribution: Where in the range values tend to land

        Returns:
            A Decimal in [minimum, maximum] with at most 28 significant digits
        """
        minimum, maximum = self._ordered(Decimal(minimum), Decimal(maximum))
        sample = Decimal(self._sample(distribution))

        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION * 2
            value = minimum + sample * (maximum - minimum)

        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            value = +value

        return min(max(value, minimum), maximum)

    def any_positive_decimal(self, maximum=DECIMAL_MAX, distribution: DistributionLike = None) -> Decimal:
        return self.any_decimal(0, maximum, distribution)

    def any_negative_decimal(self, minimum=DECIMAL_MIN, distribution: DistributionLike = None) -> Decimal:
        return self.any_decimal(minimum, 0, distribution)
