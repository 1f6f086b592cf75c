"""
Temporal Data Synthesizer

Generates:
- Naive datetimes, dates and times of day
- Intervals (timedelta)
- Timezone-aware datetimes with a random fixed UTC offset
- Fixed-offset timezones

Values are drawn as a count of microseconds (days for dates) between the
bounds, so the distribution shapes where in the interval they land.
"""

import logging
from datetime import datetime, date, time, timedelta, timezone
from typing import Optional

from .base import GeneratorBase, DistributionLike

logger = logging.getLogger(__name__)

MICROSECOND = timedelta(microseconds=1)
ONE_DAY = timedelta(days=1)

# Leave room for any UTC offset when converting aware values
AWARE_MIN = datetime.min.replace(tzinfo=timezone.utc) + ONE_DAY
AWARE_MAX = datetime.max.replace(tzinfo=timezone.utc) - ONE_DAY


def _as_aware(value: datetime) -> datetime:
    """Naive bounds are read as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TemporalData(GeneratorBase):
    """Synthesizes dates, times, intervals and timezones"""

    def any_datetime(
        self,
        minimum: Optional[datetime] = None,
        maximum: Optional[datetime] = None,
        distribution: DistributionLike = None
    ) -> datetime:
        """
        Generate a datetime

        Args:
            minimum: Earliest value (datetime.min when None)
            maximum: Latest value (datetime.max when None)
            distribution: Where in the interval values tend to land

        Returns:
            A datetime in [minimum, maximum]; naive unless the bounds are aware
        """
        minimum = datetime.min if minimum is None else minimum
        maximum = datetime.max if maximum is None else maximum
        minimum, maximum = self._ordered(minimum, maximum)

        span = (maximum - minimum) // MICROSECOND
        return minimum + self._int_between(0, span, distribution) * MICROSECOND

    def any_date(
        self,
        minimum: Optional[date] = None,
        maximum: Optional[date] = None,
        distribution: DistributionLike = None
    ) -> date:
        minimum = date.min if minimum is None else minimum
        maximum = date.max if maximum is None else maximum
        minimum, maximum = self._ordered(minimum, maximum)

        span = (maximum - minimum).days
        return minimum + timedelta(days=self._int_between(0, span, distribution))

    def any_time(
        self,
        minimum: Optional[time] = None,
        maximum: Optional[time] = None,
        distribution: DistributionLike = None
    ) -> time:
        """Time of day (naive)"""
        minimum = time.min if minimum is None else minimum
        maximum = time.max if maximum is None else maximum
        minimum, maximum = self._ordered(minimum, maximum)

        base = datetime.combine(date.min, minimum)
        span = (datetime.combine(date.min, maximum) - base) // MICROSECOND
        return (base + self._int_between(0, span, distribution) * MICROSECOND).time()

    def any_timedelta(
        self,
        minimum: Optional[timedelta] = None,
        maximum: Optional[timedelta] = None,
        distribution: DistributionLike = None
    ) -> timedelta:
        minimum = timedelta.min if minimum is None else minimum
        maximum = timedelta.max if maximum is None else maximum
        minimum, maximum = self._ordered(minimum, maximum)

        microseconds = self._int_between(minimum // MICROSECOND, maximum // MICROSECOND, distribution)
        return timedelta(microseconds=microseconds)

    def any_timezone(self, distribution: DistributionLike = None) -> timezone:
        """
        Generate a fixed-offset timezone

        Offsets step through the configured range (default -12:00 to +14:00
        in 15 minute steps); a zero offset is timezone.utc.
        """
        temporal = self.config.temporal
        first = temporal.min_utc_offset_hours * 60
        last = temporal.max_utc_offset_hours * 60
        steps = (last - first) // temporal.offset_step_minutes

        minutes = first + self._int_between(0, steps, distribution) * temporal.offset_step_minutes
        if minutes == 0:
            return timezone.utc
        return timezone(timedelta(minutes=minutes))

    def any_datetime_offset(
        self,
        minimum: Optional[datetime] = None,
        maximum: Optional[datetime] = None,
        distribution: DistributionLike = None
    ) -> datetime:
        """
        Generate a timezone-aware datetime

        The instant is drawn between the bounds, then expressed in a random
        fixed-offset timezone.

        Args:
            minimum: Earliest instant (naive values are read as UTC)
            maximum: Latest instant (naive values are read as UTC)
            distribution: Where in the interval values tend to land

        Returns:
            An aware datetime whose instant lies in [minimum, maximum]
        """
        minimum = AWARE_MIN if minimum is None else _as_aware(minimum)
        maximum = AWARE_MAX if maximum is None else _as_aware(maximum)

        instant = self.any_datetime(minimum, maximum, distribution)
        zone = self.any_timezone(distribution)
        try:
            return instant.astimezone(zone)
        except OverflowError:
            logger.debug(f"{instant} cannot be expressed in {zone}; keeping its own offset")
            return instant
