"""CLI for the sleeplog analytics engine."""

from __future__ import annotations

import logging
from datetime import datetime

import click
import numpy as np
from dateutil import parser as date_parser

from sleeplog.errors import SleepLogError


def _load_records(file: str, seed: int | None, target_hours: float) -> list:
    """Load intervals from *file* and build scored records, newest first."""
    from sleeplog.journal import build_record, load_intervals

    try:
        intervals = load_intervals(file)
    except SleepLogError as e:
        raise click.ClickException(str(e)) from e

    rng = np.random.default_rng(seed)
    records = [
        build_record(iv.start, iv.end, rng=rng, target_sec=target_hours * 3600)
        for iv in intervals
    ]
    records.sort(key=lambda r: r.start, reverse=True)
    return records


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """sleeplog — sleep journal analytics."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


@main.command()
@click.argument("hours", type=float)
@click.option("--target-hours", default=8.0, help="Target sleep duration in hours.")
def score(hours: float, target_hours: float) -> None:
    """Score a night of HOURS hours of sleep."""
    from sleeplog.analytics.score import sleep_score, score_band

    value = sleep_score(hours * 3600, target_hours * 3600)
    band = score_band(value)
    click.echo(f"{value}/100 {band.emoji} {band.label}")


@main.command()
@click.option("--days", "-d", default=7, help="Number of nights to generate.")
@click.option("--seed", "-s", default=None, type=int, help="Random seed.")
@click.option("--output", "-o", default="sleep_log.jsonl", help="Output file path.")
def sample(days: int, seed: int | None, output: str) -> None:
    """Write demo sleep intervals for the previous DAYS nights."""
    from sleeplog.journal import dump_intervals, sample_records

    records = sample_records(days=days, rng=np.random.default_rng(seed))
    path = dump_intervals(records, output)
    click.echo(f"{len(records)} nights → {path}")


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--period", "-p", type=click.Choice(["week", "month", "year"]),
              default="week", help="Summary window.")
@click.option("--now", default=None, help="End of the window (ISO timestamp).")
@click.option("--seed", "-s", default=None, type=int, help="Seed for backfilled data.")
@click.option("--target-hours", default=8.0, help="Target sleep duration in hours.")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON.")
def summary(
    file: str,
    period: str,
    now: str | None,
    seed: int | None,
    target_hours: float,
    as_json: bool,
) -> None:
    """Summarize the sleep intervals in FILE over a week, month or year."""
    from sleeplog.analytics.aggregate import Period, summarize
    from sleeplog.formatting import format_summary

    records = _load_records(file, seed, target_hours)

    if now is not None:
        try:
            end = date_parser.isoparse(now)
        except ValueError as e:
            raise click.BadParameter(f"not an ISO timestamp: {now!r}", param_hint="--now") from e
        if records and (end.utcoffset() is None) != (records[0].start.utcoffset() is None):
            kind = "naive" if end.utcoffset() is None else "timezone-aware"
            raise click.BadParameter(
                f"{now!r} is {kind} but the records in {file} are not",
                param_hint="--now",
            )
    else:
        tz = records[0].start.tzinfo if records else None
        end = datetime.now(tz)

    result = summarize(records, Period(period), now=end)

    if as_json:
        click.echo(result.to_json())
        return

    click.echo(f"\n{'=' * 60}")
    click.echo(f"  {period.capitalize()} summary")
    click.echo(f"{'=' * 60}")
    click.echo(format_summary(result))
    click.echo(f"{'=' * 60}")


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--seed", "-s", default=None, type=int, help="Seed for backfilled data.")
@click.option("--target-hours", default=8.0, help="Target sleep duration in hours.")
def coach(file: str, seed: int | None, target_hours: float) -> None:
    """Coaching feedback for the most recent night in FILE."""
    from sleeplog.coach import coach_text

    records = _load_records(file, seed, target_hours)
    click.echo(coach_text(records))


if __name__ == "__main__":
    main()
