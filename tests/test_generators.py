"""
Test Suite for Primitive Synthesizers

Tests all synthesizer mixins:
- NumericData (integers, floats, decimals, range policy)
- TextData (character classes, strings, bytes)
- PersonData (names)
- TemporalData (datetimes, dates, times, intervals, timezones)
- CategoricalData (enums, flags, UUIDs)
"""

import math
import re
import uuid
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from enum import Enum, Flag

import pytest

from anondata import AnonymousData, UnsupportedTypeError, get_default_config
from anondata.generators.numeric import (
    DECIMAL_MAX,
    INT16_MAX,
    INT16_MIN,
    SINGLE_MAX,
)


class Color(Enum):
    RED = 1
    GREEN = 2
    BLUE = 3


class Permission(Flag):
    READ = 1
    WRITE = 2
    EXECUTE = 4


class Nothing(Enum):
    pass


@pytest.fixture
def anon():
    return AnonymousData(seed=42)


class TestNumericData:
    """Test numeric synthesis"""

    def test_int32_within_bounds(self, anon):
        """Test bounded integers cover the inclusive range"""
        values = [anon.any_int32(-10, 10) for _ in range(2000)]

        assert set(values) == set(range(-10, 11))

    def test_int16_default_range(self, anon):
        values = [anon.any_int16() for _ in range(500)]

        assert all(INT16_MIN <= v <= INT16_MAX for v in values)

    def test_positive_and_negative_variants(self, anon):
        """Test sign-restricted variants stay on their side of zero"""
        for _ in range(300):
            assert 0 <= anon.any_positive_int16() <= INT16_MAX
            assert 0 <= anon.any_positive_int32(maximum=5) <= 5
            assert anon.any_negative_int64() <= 0
            assert -3 <= anon.any_negative_int32(minimum=-3) <= 0
            assert anon.any_positive_double() >= 0.0
            assert anon.any_negative_single() <= 0.0
            assert anon.any_positive_decimal() >= 0
            assert anon.any_negative_decimal() <= 0

    def test_byte(self, anon):
        values = [anon.any_byte() for _ in range(500)]

        assert all(0 <= v <= 255 for v in values)

    def test_byte_out_of_range(self, anon):
        with pytest.raises(ValueError):
            anon.any_byte(0, 300)

    def test_double_full_range_is_finite(self, anon):
        """Test unbounded doubles never overflow"""
        values = [anon.any_double() for _ in range(500)]

        assert all(math.isfinite(v) for v in values)

    def test_single_within_float32(self, anon):
        values = [anon.any_single() for _ in range(500)]

        assert all(-SINGLE_MAX <= v <= SINGLE_MAX for v in values)

    def test_double_bounds(self, anon):
        values = [anon.any_double(1.5, 2.5) for _ in range(500)]

        assert all(1.5 <= v <= 2.5 for v in values)

    def test_decimal(self, anon):
        """Test decimals stay within bounds and precision"""
        values = [anon.any_decimal(Decimal("0.5"), Decimal("1.5")) for _ in range(300)]

        assert all(isinstance(v, Decimal) for v in values)
        assert all(Decimal("0.5") <= v <= Decimal("1.5") for v in values)

        full = [anon.any_decimal() for _ in range(300)]
        assert all(-DECIMAL_MAX <= v <= DECIMAL_MAX for v in full)
        assert all(len(v.as_tuple().digits) <= 28 for v in full)

    def test_inverted_bounds_fail_by_default(self, anon):
        """Test minimum > maximum raises under the default policy"""
        with pytest.raises(ValueError, match="must not be greater than"):
            anon.any_int32(10, 1)

        with pytest.raises(ValueError):
            anon.any_double(2.0, 1.0)

    def test_inverted_bounds_swap_policy(self):
        """Test the swap policy exchanges inverted bounds"""
        config = get_default_config()
        config.generation.range_policy = "swap"
        anon = AnonymousData(seed=1, config=config)

        values = [anon.any_int32(10, 1) for _ in range(200)]

        assert all(1 <= v <= 10 for v in values)

    def test_degenerate_range(self, anon):
        assert anon.any_int64(7, 7) == 7
        assert anon.any_double(3.0, 3.0) == 3.0

    def test_bool_values(self, anon):
        values = {anon.any_bool() for _ in range(100)}

        assert values == {True, False}


class TestTextData:
    """Test character and string synthesis"""

    def test_alpha_char(self, anon):
        chars = [anon.any_alpha_char() for _ in range(500)]

        assert all(len(c) == 1 and c.isascii() and c.isalpha() for c in chars)

    def test_alphanumeric_char(self, anon):
        chars = [anon.any_alphanumeric_char() for _ in range(500)]

        assert all(c.isascii() and c.isalnum() for c in chars)

    def test_numeric_char(self, anon):
        chars = [anon.any_numeric_char() for _ in range(200)]

        assert all(c in "0123456789" for c in chars)

    def test_bounded_char(self, anon):
        """Test bounds intersect with the character class"""
        chars = {anon.any_alpha_char("a", "f") for _ in range(300)}

        assert chars == set("abcdef")

    def test_bounds_outside_class(self, anon):
        """Test bounds containing no class members raise"""
        with pytest.raises(ValueError, match="No alpha characters"):
            anon.any_alpha_char("0", "9")

    def test_latin_blocks(self, anon):
        for _ in range(300):
            assert 0x20 <= ord(anon.any_basic_latin_char()) <= 0x7F
            assert 0xA0 <= ord(anon.any_latin_supplement_char()) <= 0xFF

            printable = ord(anon.any_printable_char())
            assert 0x20 <= printable <= 0x7F or 0xA0 <= printable <= 0xFF

    def test_unrestricted_char_skips_surrogates(self, anon):
        chars = [anon.any_char() for _ in range(1000)]

        assert not any(0xD800 <= ord(c) <= 0xDFFF for c in chars)

    def test_string_defaults(self, anon):
        """Test default strings are alpha with length in [1, 20]"""
        values = [anon.any_string() for _ in range(300)]

        assert all(1 <= len(v) <= 20 for v in values)
        assert all(v.isascii() and v.isalpha() for v in values)

    def test_string_length(self, anon):
        assert len(anon.any_string(5, 5)) == 5

        values = [anon.any_string(min_length=3, max_length=6) for _ in range(200)]
        assert {len(v) for v in values} == {3, 4, 5, 6}

    def test_string_char_class(self, anon):
        value = anon.any_string(10, 10, char_class="numeric")

        assert value.isdigit()

    def test_bytes(self, anon):
        values = [anon.any_bytes() for _ in range(100)]

        assert all(isinstance(v, bytes) and 1 <= len(v) <= 32 for v in values)
        assert len(anon.any_bytes(4, 4)) == 4


class TestPersonData:
    """Test name synthesis"""

    TITLES = {"Mr.", "Mrs.", "Ms.", "Miss", "Dr."}
    SUFFIXES = {"MD", "DDS", "PhD", "DVM", "Jr.", "Sr.", "I", "II", "III"}

    def test_first_name_and_surname(self, anon):
        assert anon.any_first_name()
        assert anon.any_first_name(male=True)
        assert anon.any_first_name(male=False)
        assert anon.any_surname()

    def test_full_name_shapes(self, anon):
        """Test full names sometimes carry titles, suffixes and initials"""
        names = [anon.any_full_name() for _ in range(1000)]
        parts = [name.split() for name in names]

        assert all(len(p) >= 2 for p in parts)
        assert any(p[0] in self.TITLES for p in parts)
        assert any(p[-1] in self.SUFFIXES for p in parts)
        assert any(re.fullmatch(r"[A-Z]\.", token) for p in parts for token in p)

    def test_names_reproducible(self):
        """Test names repeat for the same seed"""
        first = AnonymousData(seed=7)
        second = AnonymousData(seed=7)

        assert [first.any_full_name() for _ in range(20)] == [second.any_full_name() for _ in range(20)]


class TestTemporalData:
    """Test temporal synthesis"""

    def test_datetime_bounds(self, anon):
        low, high = datetime(2020, 1, 1), datetime(2020, 12, 31)
        values = [anon.any_datetime(low, high) for _ in range(300)]

        assert all(low <= v <= high for v in values)
        assert all(v.tzinfo is None for v in values)

    def test_default_datetime(self, anon):
        assert isinstance(anon.any_datetime(), datetime)

    def test_date(self, anon):
        low, high = date(1999, 12, 25), date(2000, 1, 5)
        values = [anon.any_date(low, high) for _ in range(300)]

        assert all(low <= v <= high for v in values)
        assert isinstance(anon.any_date(), date)

    def test_time(self, anon):
        values = [anon.any_time(time(9), time(17)) for _ in range(300)]

        assert all(time(9) <= v <= time(17) for v in values)

    def test_timedelta(self, anon):
        values = [anon.any_timedelta(timedelta(0), timedelta(hours=1)) for _ in range(300)]

        assert all(timedelta(0) <= v <= timedelta(hours=1) for v in values)
        assert isinstance(anon.any_timedelta(), timedelta)

    def test_timezone(self, anon):
        """Test offsets lie in [-12:00, +14:00] on 15 minute steps"""
        for _ in range(300):
            offset = anon.any_timezone().utcoffset(None)

            assert timedelta(hours=-12) <= offset <= timedelta(hours=14)
            assert offset % timedelta(minutes=15) == timedelta(0)

    def test_datetime_offset(self, anon):
        """Test aware datetimes keep their instant within the bounds"""
        low, high = datetime(2021, 6, 1), datetime(2021, 6, 2)
        values = [anon.any_datetime_offset(low, high) for _ in range(300)]

        assert all(v.tzinfo is not None for v in values)
        assert all(
            low.replace(tzinfo=timezone.utc) <= v <= high.replace(tzinfo=timezone.utc)
            for v in values
        )

    def test_datetime_offset_full_range(self, anon):
        values = [anon.any_datetime_offset() for _ in range(300)]

        assert all(v.tzinfo is not None for v in values)


class TestCategoricalData:
    """Test enumeration and identifier synthesis"""

    def test_enum_members(self, anon):
        values = {anon.any_enum_value(Color) for _ in range(300)}

        assert values == set(Color)

    def test_flag_combinations(self, anon):
        """Test flags combine a non-empty subset of single-bit members"""
        values = [anon.any_enum_value(Permission) for _ in range(300)]

        assert all(isinstance(v, Permission) for v in values)
        assert all(1 <= v.value <= 7 for v in values)
        assert len({v.value for v in values}) > 3

    def test_non_enum_raises(self, anon):
        with pytest.raises(UnsupportedTypeError) as excinfo:
            anon.any_enum_value(int)

        assert excinfo.value.type_ is int

    def test_empty_enum_raises(self, anon):
        with pytest.raises(UnsupportedTypeError):
            anon.any_enum_value(Nothing)

    def test_uuid(self, anon):
        values = [anon.any_uuid() for _ in range(100)]

        assert all(isinstance(v, uuid.UUID) and v.version == 4 for v in values)
        assert len(set(values)) == 100


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
