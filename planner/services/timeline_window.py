"""Date window helpers for the planner timeline.

The ledger is fetched for a window anchored on "today" rather than on the
scroll position, so scrolling within the buffer never refetches.
"""

from __future__ import annotations

import datetime as dt

from planner.schemas.timeline import DateWindow


def ordered_window(start: dt.date, end: dt.date) -> DateWindow:
    """Build a window from two dates, swapping them when inverted."""
    if start > end:
        start, end = end, start
    return DateWindow(start=start, end=end)


def compute_fetch_window(
    period: DateWindow, today: dt.date, buffer_days: int
) -> DateWindow:
    """Return the stable ledger fetch window.

    Args:
        period: Period the user asked for.
        today: Anchor day.
        buffer_days: Days fetched on either side of ``today``.

    Returns:
        ``[today - buffer_days, today + buffer_days]``, widened so it always
        covers ``period``.
    """
    buffer = dt.timedelta(days=max(buffer_days, 0))
    return DateWindow(
        start=min(today - buffer, period.start),
        end=max(today + buffer, period.end),
    )
