"""Unit tests for budgeting period arithmetic."""

from datetime import date

import pytest

from envelope_budget.models.enums import IntervalType
from envelope_budget.services.period import current_period


class TestCurrentPeriod:
    @pytest.mark.parametrize(
        "interval_type,anchor,today,expected",
        [
            (IntervalType.WEEKLY, date(2024, 1, 1), date(2024, 1, 10), (date(2024, 1, 8), date(2024, 1, 15))),
            (IntervalType.BIWEEKLY, date(2024, 1, 1), date(2024, 1, 14), (date(2024, 1, 1), date(2024, 1, 15))),
            (IntervalType.BIWEEKLY, date(2024, 1, 1), date(2024, 1, 15), (date(2024, 1, 15), date(2024, 1, 29))),
            (IntervalType.MONTHLY, date(2024, 1, 15), date(2024, 3, 20), (date(2024, 3, 15), date(2024, 4, 15))),
            (IntervalType.MONTHLY, date(2024, 1, 15), date(2024, 3, 10), (date(2024, 2, 15), date(2024, 3, 15))),
            (IntervalType.YEARLY, date(2023, 7, 1), date(2024, 6, 30), (date(2023, 7, 1), date(2024, 7, 1))),
            (IntervalType.YEARLY, date(2023, 7, 1), date(2024, 7, 1), (date(2024, 7, 1), date(2025, 7, 1))),
        ],
    )
    def test_period_containing_today(self, interval_type, anchor, today, expected):
        assert current_period(interval_type, anchor, today) == expected

    def test_month_end_anchor_clamps(self):
        start, end = current_period(IntervalType.MONTHLY, date(2024, 1, 31), date(2024, 3, 1))
        assert start == date(2024, 2, 29)
        assert end == date(2024, 3, 31)

    def test_anchor_day_starts_new_period(self):
        start, _ = current_period(IntervalType.MONTHLY, date(2024, 1, 1), date(2024, 2, 1))
        assert start == date(2024, 2, 1)

    def test_future_anchor_yields_first_period(self):
        start, end = current_period(IntervalType.WEEKLY, date(2024, 5, 1), date(2024, 4, 1))
        assert (start, end) == (date(2024, 5, 1), date(2024, 5, 8))
