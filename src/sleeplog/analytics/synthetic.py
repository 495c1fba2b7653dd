"""Synthetic physiological data for nights without sensor input.

Manually entered nights have no wearable data behind them.  To keep the
detail views and stage charts populated, plausible values are drawn:

  - Stage segments: random 15-90 min segments with a uniformly random
    stage, the last one clipped so the segments tile the interval exactly.
  - Heart rate (50-80 bpm) and blood oxygen (90-100 %) every 30 min from
    bedtime to wake time inclusive.
  - One respiratory rate (12-18 breaths/min) for the whole night.

Pass a seeded ``numpy.random.Generator`` for reproducible output.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import numpy as np

from sleeplog.models import HealthSample, SleepInterval, SleepStage, StageSegment


@dataclass(frozen=True)
class SyntheticConfig:
    """Ranges used when drawing synthetic data."""

    stage_min_sec: float = 900.0
    stage_max_sec: float = 5400.0
    sample_step_sec: float = 1800.0
    heart_rate_range: tuple[float, float] = (50.0, 80.0)
    oxygen_range: tuple[float, float] = (90.0, 100.0)
    respiratory_range: tuple[float, float] = (12.0, 18.0)


DEFAULT_CONFIG = SyntheticConfig()

STAGES = tuple(SleepStage)


@dataclass(frozen=True)
class SyntheticData:
    """Everything generated for one interval."""

    stages: tuple[StageSegment, ...]
    heart_rate: tuple[HealthSample, ...]
    blood_oxygen: tuple[HealthSample, ...]
    respiratory_rate: float

    def __repr__(self) -> str:
        return (
            f"SyntheticData(stages={len(self.stages)}, "
            f"samples={len(self.heart_rate)}, "
            f"resp={self.respiratory_rate:.1f})"
        )


def _rng(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def generate_stages(
    interval: SleepInterval,
    rng: np.random.Generator | None = None,
    config: SyntheticConfig = DEFAULT_CONFIG,
) -> tuple[StageSegment, ...]:
    """Tile *interval* with randomly staged segments.

    Degenerate intervals yield no segments.
    """
    rng = _rng(rng)
    segments: list[StageSegment] = []
    current = interval.start

    while current < interval.end:
        length = float(rng.uniform(config.stage_min_sec, config.stage_max_sec))
        next_time = min(current + timedelta(seconds=length), interval.end)
        stage = STAGES[int(rng.integers(len(STAGES)))]
        segments.append(StageSegment(stage=stage, start=current, end=next_time))
        current = next_time

    return tuple(segments)


def generate_health_samples(
    interval: SleepInterval,
    rng: np.random.Generator | None = None,
    config: SyntheticConfig = DEFAULT_CONFIG,
) -> tuple[tuple[HealthSample, ...], tuple[HealthSample, ...], float]:
    """Draw (heart_rate, blood_oxygen, respiratory_rate) for *interval*.

    Degenerate intervals get a single sample pair at ``interval.start``.
    """
    rng = _rng(rng)
    step = timedelta(seconds=config.sample_step_sec)

    timestamps = [interval.start]
    while timestamps[-1] + step <= interval.end:
        timestamps.append(timestamps[-1] + step)

    heart_rate: list[HealthSample] = []
    oxygen: list[HealthSample] = []
    for ts in timestamps:
        oxygen.append(HealthSample(ts, float(rng.uniform(*config.oxygen_range))))
        heart_rate.append(HealthSample(ts, float(rng.uniform(*config.heart_rate_range))))

    respiratory = float(rng.uniform(*config.respiratory_range))
    return tuple(heart_rate), tuple(oxygen), respiratory


def generate(
    interval: SleepInterval,
    rng: np.random.Generator | None = None,
    config: SyntheticConfig = DEFAULT_CONFIG,
) -> SyntheticData:
    """Generate stages, health samples and respiration for one night."""
    rng = _rng(rng)
    stages = generate_stages(interval, rng, config)
    heart_rate, oxygen, respiratory = generate_health_samples(interval, rng, config)
    return SyntheticData(
        stages=stages,
        heart_rate=heart_rate,
        blood_oxygen=oxygen,
        respiratory_rate=respiratory,
    )
