"""Value types shared by the analytics engine.

Records are immutable snapshots.  The storage layer owns identity and
lifecycle; everything in :mod:`sleeplog.analytics` only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SleepStage(str, Enum):
    """Sleep stage label for a segment of the night."""

    AWAKE = "awake"
    REM = "rem"
    LIGHT = "light"
    DEEP = "deep"

    @property
    def color(self) -> str:
        return STAGE_COLORS[self]


STAGE_COLORS = {
    SleepStage.AWAKE: "red",
    SleepStage.REM: "blue",
    SleepStage.LIGHT: "green",
    SleepStage.DEEP: "purple",
}


@dataclass(frozen=True)
class SleepInterval:
    """Bedtime to wake time.  ``end <= start`` is a degenerate interval."""

    start: datetime
    end: datetime

    @property
    def duration_sec(self) -> float:
        return (self.end - self.start).total_seconds()

    @property
    def is_degenerate(self) -> bool:
        return self.end <= self.start


@dataclass(frozen=True)
class StageSegment:
    """A contiguous stretch of one sleep stage."""

    stage: SleepStage
    start: datetime
    end: datetime

    @property
    def duration_sec(self) -> float:
        return (self.end - self.start).total_seconds()


@dataclass(frozen=True)
class HealthSample:
    """A single heart-rate (bpm) or blood-oxygen (%) reading."""

    timestamp: datetime
    value: float


@dataclass(frozen=True)
class SleepRecord:
    """One logged night: interval, score and (possibly synthetic) sensor data."""

    interval: SleepInterval
    score: int
    stages: tuple[StageSegment, ...] = ()
    heart_rate: tuple[HealthSample, ...] = ()
    blood_oxygen: tuple[HealthSample, ...] = ()
    respiratory_rate: float | None = None

    @property
    def start(self) -> datetime:
        return self.interval.start

    @property
    def end(self) -> datetime:
        return self.interval.end

    @property
    def duration_sec(self) -> float:
        return self.interval.duration_sec

    def stage_duration(self, stage: SleepStage) -> float:
        """Total seconds spent in *stage* across all segments."""
        return sum(seg.duration_sec for seg in self.stages if seg.stage == stage)

    def stage_durations(self) -> dict[SleepStage, float]:
        return {stage: self.stage_duration(stage) for stage in SleepStage}

    def __repr__(self) -> str:
        return (
            f"SleepRecord({self.start.isoformat()} -> {self.end.isoformat()}, "
            f"score={self.score}, stages={len(self.stages)})"
        )
