"""Display strings for engine outputs (English, fixed locale)."""

from __future__ import annotations

from sleeplog.analytics.aggregate import PLACEHOLDER, EmptySummary, PeriodSummary
from sleeplog.analytics.circular import TimeOfDay
from sleeplog.analytics.score import score_band
from sleeplog.models import SleepStage


def format_duration(seconds: float) -> str:
    """``"8h 12m"``; durations under a minute show seconds (``"42s"``)."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    if hours == 0 and minutes == 0:
        return f"{total % 60}s"
    return f"{hours}h {minutes}m"


def format_stage_duration(seconds: float) -> str:
    """``"1h 5m"``, or just ``"45m"`` under an hour."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_time_of_day(tod: TimeOfDay | None) -> str:
    """12-hour clock, e.g. ``"12:05 AM"``.  None renders as the placeholder."""
    if tod is None:
        return PLACEHOLDER
    suffix = "PM" if tod.hour >= 12 else "AM"
    hour = tod.hour % 12 or 12
    return f"{hour}:{tod.minute:02d} {suffix}"


def format_average_score(score: int) -> str:
    return f"{score_band(score).label} ({score})"


def format_summary(summary: PeriodSummary | EmptySummary) -> str:
    """Multi-line text block for a period summary."""
    if isinstance(summary, EmptySummary):
        return "\n".join([
            f"  Period:     {summary.period_label}",
            f"  Score:      {summary.average_score}",
            f"  Duration:   {summary.average_duration}",
            f"  Bedtime:    {summary.average_bedtime}",
            f"  Wake time:  {summary.average_wake_time}",
        ])

    lines = [
        f"  Period:     {summary.period_label} ({summary.record_count} nights)",
        f"  Score:      {format_average_score(summary.average_score)}",
        f"  Duration:   {format_duration(summary.average_duration_sec)} / night",
        f"  Bedtime:    {format_time_of_day(summary.average_bedtime)}",
        f"  Wake time:  {format_time_of_day(summary.average_wake_time)}",
    ]
    if summary.bedtime_spread_min is None:
        lines.append(f"  Regularity: {PLACEHOLDER}")
    else:
        lines.append(f"  Regularity: ±{summary.bedtime_spread_min:.0f} min")
    for stage in SleepStage:
        total = summary.stage_totals.get(stage, 0.0)
        lines.append(f"  {stage.value.capitalize():<11} {format_stage_duration(total)}")
    return "\n".join(lines)
