import calendar
from datetime import datetime, timezone
from typing import Optional

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def utcnow() -> datetime:
    """Naive UTC now; every timestamp column stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def months_ago(moment: datetime, months: int) -> datetime:
    """Shift ``moment`` back by whole calendar months, clamping the day."""
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def month_label(year: int, month: int) -> str:
    return f"{MONTH_ABBR[month - 1]} {year}"


def time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """Human readable age of ``moment``: "Just now", "5 minutes ago", ... or a M/D/YYYY date."""
    now = now or utcnow()
    seconds = int((now - moment).total_seconds())

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60} minutes ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    if seconds < 604800:
        return f"{seconds // 86400} days ago"
    return f"{moment.month}/{moment.day}/{moment.year}"
