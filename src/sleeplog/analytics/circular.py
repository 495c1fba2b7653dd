"""Circular statistics over clock times.

Times of day live on a circle: 23:30 and 00:30 are an hour apart, and
their "typical" time is midnight, not noon.  Each time is mapped onto the
unit circle (1440 minutes -> 2*pi), the vectors are averaged, and the mean
angle is mapped back to a clock time.

Only the hour and minute of each timestamp are used; date and UTC offset
are ignored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import numpy as np
from scipy import stats


MINUTES_PER_DAY = 1440

# Mean resultant length below this is treated as "no direction" -> 00:00
ZERO_RESULTANT = 1e-9

# Circular std grows without bound as the mean vector shrinks
MAX_SPREAD_MIN = MINUTES_PER_DAY / 2


@dataclass(frozen=True)
class TimeOfDay:
    """A 24-hour clock time with minute resolution."""

    hour: int
    minute: int

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    @classmethod
    def from_minutes(cls, minutes: int) -> TimeOfDay:
        minutes %= MINUTES_PER_DAY
        return cls(hour=minutes // 60, minute=minutes % 60)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def _angles(timestamps: Sequence[datetime]) -> np.ndarray:
    minutes = np.asarray(
        [ts.hour * 60 + ts.minute for ts in timestamps], dtype=np.float64
    )
    return minutes / MINUTES_PER_DAY * 2.0 * np.pi


def average_time_of_day(timestamps: Sequence[datetime]) -> TimeOfDay | None:
    """Circular mean of the clock times in *timestamps*.

    Returns None for empty input.  If the times are spread evenly around
    the clock (zero-length mean vector) the result is 00:00.
    """
    if len(timestamps) == 0:
        return None

    theta = _angles(timestamps)
    mean_x = float(np.mean(np.cos(theta)))
    mean_y = float(np.mean(np.sin(theta)))

    if math.hypot(mean_x, mean_y) < ZERO_RESULTANT:
        return TimeOfDay(0, 0)

    angle = math.atan2(mean_y, mean_x)
    if angle < 0:
        angle += 2.0 * math.pi

    # 1439.9999999 is midnight, not 23:59
    minutes = round(angle / (2.0 * math.pi) * MINUTES_PER_DAY, 6)
    return TimeOfDay.from_minutes(int(minutes))


def time_of_day_spread(timestamps: Sequence[datetime]) -> float | None:
    """Circular standard deviation of the clock times, in minutes.

    A small spread means a regular schedule.  Returns None for empty input,
    and when the times are scattered so widely that there is no typical
    time (spread above half a day, or a zero-length mean vector).
    """
    if len(timestamps) == 0:
        return None

    theta = _angles(timestamps)
    if math.hypot(float(np.mean(np.cos(theta))), float(np.mean(np.sin(theta)))) < ZERO_RESULTANT:
        return None

    minutes = [ts.hour * 60 + ts.minute for ts in timestamps]
    spread = float(stats.circstd(minutes, high=MINUTES_PER_DAY, low=0))
    if spread > MAX_SPREAD_MIN:
        return None
    return round(spread, 1)
