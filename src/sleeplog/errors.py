"""Exceptions raised by sleeplog.

The analytics functions themselves never raise on empty or degenerate
input; these cover malformed data handed in from outside.
"""


class SleepLogError(Exception):
    """Base class for sleeplog errors."""


class RecordFormatError(SleepLogError):
    """A sleep record in an input file could not be parsed."""
