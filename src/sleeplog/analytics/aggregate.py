"""Period aggregation: weekly, monthly and yearly summaries.

Records whose bedtime falls in ``[period_start, now]`` are reduced into a
:class:`PeriodSummary`.  Windows are calendar-aware: "one month ago" from
March 31 is February 28/29, not March 1.

Stage durations are reported per night for week and month views.  The year
view groups nights by calendar month and divides each month's stage totals
by the number of nights in it, so months with more logged nights don't
dominate the chart.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, asdict
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Sequence

import numpy as np
from dateutil.relativedelta import relativedelta

from sleeplog.analytics.circular import (
    TimeOfDay,
    average_time_of_day,
    time_of_day_spread,
)
from sleeplog.models import SleepRecord, SleepStage

logger = logging.getLogger(__name__)

PLACEHOLDER = "-"


class Period(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def period_start(period: Period, now: datetime) -> datetime:
    """Start of the look-back window ending at *now*."""
    if period == Period.WEEK:
        return now - timedelta(days=7)
    if period == Period.MONTH:
        return now - relativedelta(months=1)
    return now - relativedelta(years=1)


def filter_period(
    records: Sequence[SleepRecord],
    period: Period,
    now: datetime,
) -> list[SleepRecord]:
    """Records whose bedtime lies within the window (both ends inclusive)."""
    cutoff = period_start(period, now)
    return [r for r in records if cutoff <= r.start <= now]


# ---------------------------------------------------------------------------
# Stage breakdowns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StageBreakdown:
    """Stage durations (seconds) for one chart column.

    ``label`` is the night's date in week/month views and the first day of
    the month in the year view.
    """

    label: date
    durations: dict[SleepStage, float]
    nights: int = 1


def nightly_stage_durations(records: Sequence[SleepRecord]) -> list[StageBreakdown]:
    """One breakdown per record, in bedtime order."""
    ordered = sorted(records, key=lambda r: r.start)
    return [StageBreakdown(label=r.start.date(), durations=r.stage_durations()) for r in ordered]


def monthly_stage_averages(records: Sequence[SleepRecord]) -> list[StageBreakdown]:
    """Per-night average stage durations for each calendar month."""
    grouped: dict[date, list[SleepRecord]] = {}
    for rec in records:
        month = rec.start.date().replace(day=1)
        grouped.setdefault(month, []).append(rec)

    breakdowns: list[StageBreakdown] = []
    for month in sorted(grouped):
        nights = grouped[month]
        durations = {
            stage: sum(r.stage_duration(stage) for r in nights) / len(nights)
            for stage in SleepStage
        }
        breakdowns.append(StageBreakdown(label=month, durations=durations, nights=len(nights)))
    return breakdowns


def stage_totals(records: Sequence[SleepRecord]) -> dict[SleepStage, float]:
    return {stage: sum(r.stage_duration(stage) for r in records) for stage in SleepStage}


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------


def _breakdown_dict(b: StageBreakdown) -> dict[str, Any]:
    return {
        "label": b.label.isoformat(),
        "nights": b.nights,
        "durations": {stage.value: round(sec, 1) for stage, sec in b.durations.items()},
    }


@dataclass(frozen=True)
class PeriodSummary:
    """Aggregated statistics for one period window."""

    period: Period
    period_label: str
    record_count: int
    average_score: int
    average_duration_sec: float
    average_bedtime: TimeOfDay | None
    average_wake_time: TimeOfDay | None
    bedtime_spread_min: float | None = None
    stage_totals: dict[SleepStage, float] = field(default_factory=dict)
    stage_breakdown: list[StageBreakdown] = field(default_factory=list)

    is_empty = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period.value,
            "period_label": self.period_label,
            "record_count": self.record_count,
            "average_score": self.average_score,
            "average_duration_sec": round(self.average_duration_sec, 1),
            "average_bedtime": str(self.average_bedtime) if self.average_bedtime else PLACEHOLDER,
            "average_wake_time": str(self.average_wake_time) if self.average_wake_time else PLACEHOLDER,
            "bedtime_spread_min": self.bedtime_spread_min,
            "stage_totals": {s.value: round(sec, 1) for s, sec in self.stage_totals.items()},
            "stage_breakdown": [_breakdown_dict(b) for b in self.stage_breakdown],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"PeriodSummary({self.period.value}: n={self.record_count}, "
            f"score={self.average_score}, "
            f"duration={self.average_duration_sec / 3600:.1f}h, "
            f"bed={self.average_bedtime}, wake={self.average_wake_time})"
        )


@dataclass(frozen=True)
class EmptySummary:
    """Summary of a window with no records.  Every field is a placeholder."""

    period: Period
    period_label: str = PLACEHOLDER
    average_score: str = PLACEHOLDER
    average_duration: str = PLACEHOLDER
    average_bedtime: str = PLACEHOLDER
    average_wake_time: str = PLACEHOLDER

    record_count = 0
    is_empty = True

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["period"] = self.period.value
        data["record_count"] = 0
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def _period_label(records: Sequence[SleepRecord]) -> str:
    first = min(r.start for r in records)
    last = max(r.start for r in records)
    return f"{first:%b} {first.day} - {last:%b} {last.day}"


def summarize(
    records: Sequence[SleepRecord],
    period: Period,
    now: datetime | None = None,
) -> PeriodSummary | EmptySummary:
    """Summarize the records falling in *period* ending at *now*.

    Args:
        records: All known records, in any order.
        period: Window length.
        now: End of the window (default: current local time).  Must carry
            the same tz-awareness as the record timestamps.

    Returns:
        PeriodSummary, or EmptySummary when no record falls in the window.
    """
    period = Period(period)
    if now is None:
        now = datetime.now()

    window = filter_period(records, period, now)
    logger.debug("summarize %s: %d of %d records in window", period.value, len(window), len(records))
    if not window:
        return EmptySummary(period=period)

    scores = np.asarray([r.score for r in window], dtype=np.int64)
    durations = np.asarray([r.duration_sec for r in window], dtype=np.float64)
    bedtimes = [r.start for r in window]

    if period == Period.YEAR:
        breakdown = monthly_stage_averages(window)
    else:
        breakdown = nightly_stage_durations(window)

    return PeriodSummary(
        period=period,
        period_label=_period_label(window),
        record_count=len(window),
        average_score=int(scores.sum()) // len(window),
        average_duration_sec=float(np.mean(durations)),
        average_bedtime=average_time_of_day(bedtimes),
        average_wake_time=average_time_of_day([r.end for r in window]),
        bedtime_spread_min=time_of_day_spread(bedtimes),
        stage_totals=stage_totals(window),
        stage_breakdown=breakdown,
    )
