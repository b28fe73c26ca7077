"""Synthetic commit date generation."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple

MAX_WEEKS_OFFSET = 54
MAX_DAYS_OFFSET = 6

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Return the current local wall-clock time as a naive datetime.

    The UTC offset is attached in :func:`format_date`, after the offsets are
    added, so a date across a DST change gets the offset in force on that date.
    """
    return datetime.now()


def draw_offsets(rng: random.Random) -> Tuple[int, int]:
    """Draw ``(weeks, days)`` uniformly from [0, 54] and [0, 6]."""
    weeks = rng.randint(0, MAX_WEEKS_OFFSET)
    days = rng.randint(0, MAX_DAYS_OFFSET)
    return weeks, days


def replace_year(moment: datetime, year: int) -> datetime:
    """Return ``moment`` moved to ``year``.

    29 February is clamped to 28 February when ``year`` is not a leap year.
    """
    try:
        return moment.replace(year=year)
    except ValueError:
        return moment.replace(year=year, day=28)


def candidate_date(today: datetime, weeks: int, days: int) -> datetime:
    """Return ``today`` plus one day plus the drawn offsets, before year clamping."""
    return today + timedelta(days=1) + timedelta(weeks=weeks) + timedelta(days=days)


def synthesize_date(
    today: datetime, rng: Optional[random.Random] = None
) -> datetime:
    """Build a backdated commit date within the year of ``today``.

    The candidate lies 1 to 385 days after ``today``; its year is then forced
    back to ``today.year``, which may place it earlier than ``today``.
    """
    weeks, days = draw_offsets(rng or random.Random())
    return replace_year(candidate_date(today, weeks, days), today.year)


def format_date(moment: datetime) -> str:
    """Format ``moment`` as ISO-8601 with second precision and UTC offset.

    Naive datetimes are taken as local wall-clock time.
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.isoformat(timespec="seconds")
