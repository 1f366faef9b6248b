"""
Random commit timestamp generation

Samples a whole-second, timezone-aware datetime inside the configured daily
window that is strictly later than a lower bound (usually the HEAD commit's
committer date).
"""

import logging
import math
import random
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from .config_store import TimeWindow
from .errors import WindowExhaustedError

logger = logging.getLogger("git_touchfish.timestamp")


def local_datetime(day: date, time_of_day: time) -> datetime:
    """Combine a date and time-of-day into an aware datetime in local time"""
    return datetime.combine(day, time_of_day).astimezone()


def window_bounds(window: TimeWindow, day: date) -> Tuple[datetime, datetime]:
    """Return the window's [start, end] on the given day"""
    return local_datetime(day, window.start), local_datetime(day, window.end)


def _sample_range(
    window: TimeWindow, day: date, lower_bound: Optional[datetime]
) -> Optional[Tuple[int, int]]:
    """Epoch-second range [lo, hi] of valid samples, or None when empty"""
    start, end = window_bounds(window, day)
    lo = math.ceil(start.timestamp())
    hi = math.floor(end.timestamp())

    if lower_bound is not None:
        # Strictly after the bound at git's one-second granularity
        lo = max(lo, math.floor(lower_bound.timestamp()) + 1)

    if lo > hi:
        return None
    return lo, hi


def generate(
    window: TimeWindow,
    lower_bound: Optional[datetime],
    today: date,
    rng: Optional[random.Random] = None,
    roll_over: bool = False,
) -> datetime:
    """Pick a random commit time within the window and after the lower bound

    Args:
        window: Configured daily window
        lower_bound: Aware datetime the result must be strictly later than,
            or None when there is nothing to bound against
        today: Calendar day whose window is sampled
        rng: Random source (defaults to the module-level generator)
        roll_over: Advance to the next day with room left instead of failing

    Returns:
        Aware local datetime with second precision

    Raises:
        WindowExhaustedError: If the lower bound is at or past today's window
            end and roll_over is False
    """
    rng = rng or random.Random()
    if lower_bound is not None and lower_bound.tzinfo is None:
        lower_bound = lower_bound.astimezone()

    day = today
    bounds = _sample_range(window, day, lower_bound)

    if bounds is None and roll_over:
        day = today + timedelta(days=1)
        if lower_bound is not None:
            day = max(day, lower_bound.astimezone().date())
        bounds = _sample_range(window, day, lower_bound)
        if bounds is None:
            # Bound falls after the window on its own day
            day += timedelta(days=1)
            bounds = _sample_range(window, day, lower_bound)
        logger.info(f"Window exhausted on {today}, rolled over to {day}")

    if bounds is None:
        raise WindowExhaustedError(
            f"No time left in window {window} on {today}: "
            f"the previous commit is at {lower_bound.isoformat() if lower_bound else 'n/a'}. "
            "Pass --roll-over to use the next day's window"
        )

    lo, hi = bounds
    chosen = datetime.fromtimestamp(rng.randint(lo, hi)).astimezone()
    logger.debug(
        f"Sampled {chosen.isoformat()} from [{lo}, {hi}] "
        f"(lower bound {lower_bound.isoformat() if lower_bound else None})"
    )
    return chosen
