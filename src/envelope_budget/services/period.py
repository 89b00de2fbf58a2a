"""Budgeting period arithmetic.

Periods are anchored on the user's interval start date. Weekly and biweekly
periods are fixed-length; monthly and yearly periods step by calendar months
from the anchor, clamping to the end of shorter months.
"""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from envelope_budget.models.enums import IntervalType

_FIXED_LENGTH_DAYS = {
    IntervalType.WEEKLY: 7,
    IntervalType.BIWEEKLY: 14,
}

_MONTHS_PER_PERIOD = {
    IntervalType.MONTHLY: 1,
    IntervalType.YEARLY: 12,
}


def current_period(interval_type: IntervalType, anchor: date, today: date) -> tuple[date, date]:
    """Return the half-open ``[start, end)`` period containing ``today``.

    An anchor in the future yields the first period.
    """
    if interval_type in _FIXED_LENGTH_DAYS:
        length = _FIXED_LENGTH_DAYS[interval_type]
        index = max((today - anchor).days // length, 0)
        start = anchor + timedelta(days=index * length)
        return start, start + timedelta(days=length)

    step = _MONTHS_PER_PERIOD[interval_type]
    months = (today.year - anchor.year) * 12 + (today.month - anchor.month)
    index = max(months // step, 0)
    start = anchor + relativedelta(months=index * step)
    if start > today and index > 0:
        index -= 1
        start = anchor + relativedelta(months=index * step)
    return start, anchor + relativedelta(months=(index + 1) * step)
