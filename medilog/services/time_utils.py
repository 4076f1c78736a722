from datetime import datetime, time
from typing import Optional

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def weekday_abbrev(dt: datetime) -> str:
    return WEEKDAYS[dt.weekday()]


def parse_hhmm(value: str) -> Optional[time]:
    """
    Parses "08:00" / "8:00" / "20:30" into a time.
    Returns None for anything else.
    """
    if not value:
        return None
    try:
        parts = value.strip().split(":")
        return time(int(parts[0]), int(parts[1]))
    except (ValueError, IndexError):
        return None


def is_due_on(days, dt: datetime) -> bool:
    """
    A reminder with no days listed is treated as daily.
    Day names are matched on their first three letters ("monday" == "Mon").
    """
    if not days:
        return True
    today = weekday_abbrev(dt).lower()
    return any(str(d).strip().lower()[:3] == today for d in days)


def upcoming_today(reminders: list, now: Optional[datetime] = None, limit: int = 3) -> list:
    """
    Reminders due today at or after `now`, earliest first.
    Reminders without a parseable time are skipped.
    """
    now = now or datetime.now()
    due = []
    for r in reminders:
        t = parse_hhmm(r.time)
        if t is None or not is_due_on(r.days, now):
            continue
        if t < now.time().replace(second=0, microsecond=0):
            continue
        due.append((t, r))

    due.sort(key=lambda pair: pair[0])
    return [r for _, r in due[:limit]]
