"""Rule-based sleep coach.

The base message comes from the score band of the most recent night.  When
a previous night exists, a score change of 10 points or more in either
direction adds a short addendum.
"""

from __future__ import annotations

from typing import Sequence

from sleeplog.analytics.score import score_band
from sleeplog.models import SleepRecord

FEEDBACK_DIFF_THRESHOLD = 10

NO_RECORDS_MESSAGE = "Not enough sleep records yet. Start logging tonight! 🌙"
IMPROVED_ADDENDUM = "You slept much better than the night before! Great job. 👏"
DECLINED_ADDENDUM = (
    "A little short of the night before. Hope you rest more comfortably tonight."
)


def feedback(most_recent: SleepRecord, previous: SleepRecord | None = None) -> str:
    """Compose coaching text for the latest night."""
    text = score_band(most_recent.score).message

    if previous is not None:
        diff = most_recent.score - previous.score
        if diff >= FEEDBACK_DIFF_THRESHOLD:
            text += "\n" + IMPROVED_ADDENDUM
        elif diff <= -FEEDBACK_DIFF_THRESHOLD:
            text += "\n" + DECLINED_ADDENDUM

    return text


def feedback_for_records(records: Sequence[SleepRecord]) -> str:
    """Feedback for a most-recent-first list of records."""
    if not records:
        return NO_RECORDS_MESSAGE
    previous = records[1] if len(records) >= 2 else None
    return feedback(records[0], previous)


def coach_text(records: Sequence[SleepRecord], remote_text: str | None = None) -> str:
    """Prefer externally generated text; fall back to the local rules."""
    if remote_text:
        return remote_text
    return feedback_for_records(records)
