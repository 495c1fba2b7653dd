"""Building sleep records, demo data, session tracking and JSONL input.

:func:`build_record` is the one place a :class:`SleepRecord` is created
from raw times.  It scores the night and backfills any sensor series the
caller did not supply with synthetic data; supplied values are passed
through untouched, even if they look physiologically implausible.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Sequence

import numpy as np
from dateutil import parser as date_parser

from sleeplog.analytics.score import TARGET_SLEEP_SEC, sleep_score
from sleeplog.analytics.synthetic import DEFAULT_CONFIG, SyntheticConfig, generate
from sleeplog.errors import RecordFormatError
from sleeplog.models import HealthSample, SleepInterval, SleepRecord, StageSegment

logger = logging.getLogger(__name__)


def build_record(
    start: datetime,
    end: datetime,
    *,
    stages: Sequence[StageSegment] | None = None,
    heart_rate: Sequence[HealthSample] | None = None,
    blood_oxygen: Sequence[HealthSample] | None = None,
    respiratory_rate: float | None = None,
    rng: np.random.Generator | None = None,
    target_sec: float = TARGET_SLEEP_SEC,
    config: SyntheticConfig = DEFAULT_CONFIG,
) -> SleepRecord:
    """Create a scored record, filling missing sensor data synthetically.

    Args:
        start: Bedtime.
        end: Wake time.
        stages: Measured stage segments, if any.
        heart_rate: Measured heart-rate samples, if any.
        blood_oxygen: Measured SpO2 samples, if any.
        respiratory_rate: Measured breaths/min, if any.
        rng: Random source for backfilled data.
        target_sec: Target sleep duration for scoring.
        config: Ranges for synthetic data.
    """
    interval = SleepInterval(start=start, end=end)

    missing = [
        name for name, value in (
            ("stages", stages),
            ("heart_rate", heart_rate),
            ("blood_oxygen", blood_oxygen),
            ("respiratory_rate", respiratory_rate),
        )
        if value is None
    ]
    if missing:
        logger.debug("backfilling %s for %s", ", ".join(missing), start.isoformat())
        synthetic = generate(interval, rng, config)
        if stages is None:
            stages = synthetic.stages
        if heart_rate is None:
            heart_rate = synthetic.heart_rate
        if blood_oxygen is None:
            blood_oxygen = synthetic.blood_oxygen
        if respiratory_rate is None:
            respiratory_rate = synthetic.respiratory_rate

    return SleepRecord(
        interval=interval,
        score=sleep_score(interval.duration_sec, target_sec),
        stages=tuple(stages),
        heart_rate=tuple(heart_rate),
        blood_oxygen=tuple(blood_oxygen),
        respiratory_rate=respiratory_rate,
    )


def average_duration(records: Sequence[SleepRecord]) -> float | None:
    """Mean night length in seconds, or None for no records."""
    if not records:
        return None
    return float(np.mean([r.duration_sec for r in records]))


def sample_records(
    now: datetime | None = None,
    days: int = 7,
    rng: np.random.Generator | None = None,
    target_sec: float = TARGET_SLEEP_SEC,
) -> list[SleepRecord]:
    """Demo data: one night for each of the previous *days* days.

    Bedtime is drawn between 22:00 and 23:59 and the night lasts 6-9 h.
    Returned oldest first.
    """
    rng = rng if rng is not None else np.random.default_rng()
    if now is None:
        now = datetime.now()

    records: list[SleepRecord] = []
    for offset in range(days, 0, -1):
        day = now - timedelta(days=offset)
        bedtime = day.replace(
            hour=int(rng.integers(22, 24)),
            minute=int(rng.integers(0, 60)),
            second=0,
            microsecond=0,
        )
        length = float(rng.uniform(6.0, 9.0)) * 3600
        records.append(build_record(
            bedtime, bedtime + timedelta(seconds=length), rng=rng, target_sec=target_sec,
        ))
    return records


class SleepTracker:
    """Tracks a live sleep session from "going to bed" to "woke up"."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self.started_at: datetime | None = None

    @property
    def is_sleeping(self) -> bool:
        return self.started_at is not None

    def start(self) -> None:
        self.started_at = self._clock()

    def current(self) -> SleepInterval | None:
        """Interval so far, without ending the session."""
        if self.started_at is None:
            return None
        return SleepInterval(start=self.started_at, end=self._clock())

    def stop(
        self,
        save: bool = True,
        end: datetime | None = None,
        **record_kwargs,
    ) -> SleepRecord | None:
        """End the session.  Returns the new record when *save* is true."""
        if self.started_at is None:
            return None

        if not save:
            self.started_at = None
            return None

        try:
            return build_record(
                self.started_at, end if end is not None else self._clock(), **record_kwargs
            )
        finally:
            self.started_at = None


# ---------------------------------------------------------------------------
# JSON Lines input
# ---------------------------------------------------------------------------


def _is_aware(ts: datetime) -> bool:
    return ts.utcoffset() is not None


def _parse_time(value: object, field_name: str, line_num: int) -> datetime:
    if not isinstance(value, str):
        raise RecordFormatError(f"line {line_num}: missing or non-string '{field_name}'")
    try:
        return date_parser.isoparse(value)
    except ValueError as e:
        raise RecordFormatError(f"line {line_num}: bad '{field_name}' timestamp {value!r}") from e


def load_intervals(path: str | Path) -> list[SleepInterval]:
    """Read ``{"start": ISO, "end": ISO}`` objects, one per line.

    Blank lines are skipped.  Anything else that doesn't parse raises
    :class:`RecordFormatError`.
    """
    intervals: list[SleepInterval] = []
    with open(path) as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError as e:
                raise RecordFormatError(f"line {line_num}: invalid JSON") from e
            if not isinstance(entry, dict):
                raise RecordFormatError(f"line {line_num}: expected an object")

            start = _parse_time(entry.get("start"), "start", line_num)
            end = _parse_time(entry.get("end"), "end", line_num)
            if _is_aware(start) != _is_aware(end):
                raise RecordFormatError(
                    f"line {line_num}: start and end mix timezone-aware and naive timestamps"
                )
            if intervals and _is_aware(start) != _is_aware(intervals[0].start):
                raise RecordFormatError(
                    f"line {line_num}: timezone awareness differs from the first record"
                )
            intervals.append(SleepInterval(start=start, end=end))

    logger.debug("loaded %d intervals from %s", len(intervals), path)
    return intervals


def dump_intervals(records: Sequence[SleepRecord], path: str | Path) -> Path:
    """Write records' intervals as JSON Lines (the format :func:`load_intervals` reads)."""
    outpath = Path(path)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    with open(outpath, "w") as f:
        for r in records:
            f.write(json.dumps({"start": r.start.isoformat(), "end": r.end.isoformat()}) + "\n")
    return outpath
