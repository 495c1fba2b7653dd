"""Duration-based sleep score and score bands.

A night of exactly the target duration (8 h by default) scores 100.  Every
hour of deviation in either direction costs 10 points:

    score = 100 - int(|duration - target| / 3600 * 10)

clamped to [0, 100].  The deduction is truncated to whole points, so the
score steps down every 6 minutes of deviation.

One band table drives the label, emoji and coach message everywhere.
"""

from __future__ import annotations

from dataclasses import dataclass


TARGET_SLEEP_SEC = 8 * 3600
POINTS_PER_HOUR = 10

SCORE_MIN = 0
SCORE_MAX = 100


@dataclass(frozen=True)
class ScoreBand:
    """A score range starting at ``lower`` (inclusive)."""

    lower: int
    label: str
    emoji: str
    message: str


# Highest first; a score belongs to the first band whose lower bound it meets.
SCORE_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(
        85, "excellent", "😃",
        "Perfect sleep! Start your day full of energy. 🌟",
    ),
    ScoreBand(
        75, "good", "🙂",
        "Good sleep pattern. Keep this up and you'll stay healthy! 💪",
    ),
    ScoreBand(
        60, "fair", "😐",
        "Not bad. How about going to bed a little earlier? 🌙",
    ),
    ScoreBand(
        SCORE_MIN, "poor", "😟",
        "Looks like you didn't get enough sleep. Take it easy today. 😴",
    ),
)


def clamp_score(value: float) -> int:
    return int(max(SCORE_MIN, min(SCORE_MAX, value)))


def sleep_score(duration_sec: float, target_sec: float = TARGET_SLEEP_SEC) -> int:
    """Score a night of sleep by how far it falls from *target_sec*.

    Total over all inputs: zero and negative durations just score low.
    """
    hours_off = abs(duration_sec - target_sec) / 3600.0
    return clamp_score(SCORE_MAX - int(hours_off * POINTS_PER_HOUR))


def score_band(score: int) -> ScoreBand:
    """Look up the band for a 0-100 score."""
    score = clamp_score(score)
    for band in SCORE_BANDS:
        if score >= band.lower:
            return band
    return SCORE_BANDS[-1]
