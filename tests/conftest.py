"""Shared fixtures and helpers for the sleeplog test suite."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path

import numpy as np
import pytest

from sleeplog.analytics.score import sleep_score
from sleeplog.models import SleepInterval, SleepRecord, SleepStage, StageSegment


# Fixed "now" so period windows are deterministic
NOW = datetime(2024, 3, 15, 12, 0)


# ---------------------------------------------------------------------------
# Record-building helpers
# ---------------------------------------------------------------------------


def make_record(
    start: datetime,
    hours: float,
    stages: list[tuple[SleepStage, float]] | None = None,
) -> SleepRecord:
    """Build a scored record without synthetic data.

    *stages* is a list of ``(stage, minutes)`` laid out back to back from
    *start*.
    """
    end = start + timedelta(hours=hours)
    segments: list[StageSegment] = []
    t = start
    for stage, minutes in stages or []:
        seg_end = t + timedelta(minutes=minutes)
        segments.append(StageSegment(stage, t, seg_end))
        t = seg_end
    return SleepRecord(
        interval=SleepInterval(start, end),
        score=sleep_score((end - start).total_seconds()),
        stages=tuple(segments),
    )


def night(days_ago: int, hour: int = 23, minute: int = 0, hours: float = 8.0, **kw) -> SleepRecord:
    """A record whose bedtime is *days_ago* days before NOW at hour:minute."""
    day = NOW - timedelta(days=days_ago)
    start = day.replace(hour=hour, minute=minute)
    return make_record(start, hours, **kw)


def write_jsonl(path: Path, entries: list[dict]) -> Path:
    """Write a list of dicts as JSONL to the given path."""
    with open(path, "w") as f:
        for entry in entries:
            f.write(json.dumps(entry) + "\n")
    return path


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
