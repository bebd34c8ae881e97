"""Reporting windows anchored at local midnight (``settings.TIME_ZONE``)."""
from datetime import date as date_cls, datetime, time, timedelta
from typing import NamedTuple, Optional

from django.utils import timezone


class PeriodStarts(NamedTuple):
    today: datetime
    tomorrow: datetime
    week: datetime
    month: datetime


def local_day_bounds(day: Optional[date_cls] = None) -> tuple[datetime, datetime]:
    """Return ``[local midnight, next local midnight)`` for *day* (default today)."""
    day = day or timezone.localdate()
    start = timezone.make_aware(datetime.combine(day, time.min))
    return start, timezone.make_aware(datetime.combine(day + timedelta(days=1), time.min))


def period_starts(now: Optional[datetime] = None) -> PeriodStarts:
    # weeks start on Monday
    today = timezone.localdate(now) if now else timezone.localdate()
    start, tomorrow = local_day_bounds(today)
    week = timezone.make_aware(datetime.combine(today - timedelta(days=today.weekday()), time.min))
    month = timezone.make_aware(datetime.combine(today.replace(day=1), time.min))
    return PeriodStarts(today=start, tomorrow=tomorrow, week=week, month=month)
