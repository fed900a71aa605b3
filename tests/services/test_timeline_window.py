import datetime as dt

import pytest

from planner.schemas.timeline import DateWindow
from planner.services.timeline_window import (
    compute_fetch_window,
    ordered_window,
)

TODAY = dt.date(2026, 10, 19)


def test_fetch_window_is_anchored_on_today():
    period = DateWindow(start=TODAY, end=TODAY + dt.timedelta(days=13))

    window = compute_fetch_window(period, TODAY, buffer_days=70)

    assert window.start == TODAY - dt.timedelta(days=70)
    assert window.end == TODAY + dt.timedelta(days=70)


def test_fetch_window_is_stable_while_scrolling_inside_buffer():
    first = DateWindow(start=TODAY, end=TODAY + dt.timedelta(days=6))
    later = DateWindow(
        start=TODAY + dt.timedelta(days=21), end=TODAY + dt.timedelta(days=27)
    )

    assert compute_fetch_window(first, TODAY, 70) == compute_fetch_window(
        later, TODAY, 70
    )


def test_fetch_window_widens_to_cover_period():
    period = DateWindow(
        start=TODAY + dt.timedelta(days=100), end=TODAY + dt.timedelta(days=120)
    )

    window = compute_fetch_window(period, TODAY, buffer_days=70)

    assert window.start == TODAY - dt.timedelta(days=70)
    assert window.end == period.end


def test_ordered_window_swaps_inverted_dates():
    window = ordered_window(TODAY, TODAY - dt.timedelta(days=3))
    assert (window.start, window.end) == (TODAY - dt.timedelta(days=3), TODAY)


def test_window_rejects_inverted_construction():
    with pytest.raises(ValueError):
        DateWindow(start=TODAY, end=TODAY - dt.timedelta(days=1))


def test_window_days_and_contains():
    window = DateWindow(start=TODAY, end=TODAY + dt.timedelta(days=2))

    assert window.day_count == 3
    assert list(window.days())[-1] == TODAY + dt.timedelta(days=2)
    assert window.contains(TODAY)
    assert not window.contains(TODAY + dt.timedelta(days=3))
