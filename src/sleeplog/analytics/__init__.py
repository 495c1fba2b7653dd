"""Analytics engine for sleep-journal records.

Modules:
    circular   -- Circular mean / spread of clock times
    score      -- Duration-based sleep score and score bands
    synthetic  -- Synthetic stages and health samples for backfill
    aggregate  -- Weekly / monthly / yearly period summaries
"""

from sleeplog.analytics.circular import (
    TimeOfDay,
    average_time_of_day,
    time_of_day_spread,
)
from sleeplog.analytics.score import (
    TARGET_SLEEP_SEC,
    SCORE_BANDS,
    ScoreBand,
    sleep_score,
    score_band,
)
from sleeplog.analytics.synthetic import (
    DEFAULT_CONFIG,
    SyntheticConfig,
    SyntheticData,
    generate,
)
from sleeplog.analytics.aggregate import (
    Period,
    PeriodSummary,
    EmptySummary,
    StageBreakdown,
    summarize,
    monthly_stage_averages,
)

__all__ = [
    # circular
    "TimeOfDay",
    "average_time_of_day",
    "time_of_day_spread",
    # score
    "TARGET_SLEEP_SEC",
    "SCORE_BANDS",
    "ScoreBand",
    "sleep_score",
    "score_band",
    # synthetic
    "DEFAULT_CONFIG",
    "SyntheticConfig",
    "SyntheticData",
    "generate",
    # aggregate
    "Period",
    "PeriodSummary",
    "EmptySummary",
    "StageBreakdown",
    "summarize",
    "monthly_stage_averages",
]
