"""Calendar partitioning utilities (Sunday-start weeks)."""
import calendar
from datetime import date, timedelta
from typing import List, Optional, Union

from rental_admin.models.calendar import WeekBucket

MAX_WEEKS = 4
SAFETY_WEEKS = 6

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

DateLike = Union[date, str]


class InvalidArgument(ValueError):
    """Raised for an out-of-range month or an inverted date range."""
    pass


def _as_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise InvalidArgument(f"Invalid date: {value!r}")


def start_of_week(day: date) -> date:
    """Sunday on or before the given day."""
    # weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_week(day: date) -> date:
    """Saturday on or after the given day."""
    return start_of_week(day) + timedelta(days=6)


def weeks_in_month(year: int, month: int) -> List[WeekBucket]:
    """
    Partition a month into Sunday-to-Saturday week buckets.

    Rules:
    - A week is kept when it overlaps the month; it is never clipped
    - Scanning stops once past the month with at least 4 weeks, or at 6 weeks
    - Only the first 4 weeks are returned
    """
    if not 1 <= month <= 12:
        raise InvalidArgument(f"Month must be between 1 and 12, got {month}")

    try:
        first_day = date(year, month, 1)
        last_day = date(year, month, calendar.monthrange(year, month)[1])
        # Sunday before 0001-01-01 and Saturday after 9999-12-31 do not exist
        start_of_week(first_day)
        end_of_week(last_day)
    except (ValueError, OverflowError):
        raise InvalidArgument(f"Year out of supported range: {year}")

    weeks: List[WeekBucket] = []
    cursor = start_of_week(first_day)

    while cursor <= last_day or len(weeks) < MAX_WEEKS:
        week_start = start_of_week(cursor)
        week_end = week_start + timedelta(days=6)

        if week_end >= first_day and week_start <= last_day:
            weeks.append(WeekBucket(
                week_number=len(weeks) + 1,
                start_date=week_start,
                end_date=week_end,
            ))

        cursor = week_end + timedelta(days=1)

        if len(weeks) >= SAFETY_WEEKS:
            break

    return weeks[:MAX_WEEKS]


def days_in_week(week_start: DateLike, week_end: DateLike) -> List[date]:
    """Every date from week_start to week_end inclusive, ascending."""
    start = _as_date(week_start)
    end = _as_date(week_end)
    if start > end:
        raise InvalidArgument(f"Range start {start} is after end {end}")
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def is_current_week(week: WeekBucket, today: Optional[date] = None) -> bool:
    return week.contains(today or date.today())


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ""


def format_time(value: Optional[str]) -> str:
    """Format "HH:MM" as 12-hour clock, e.g. "14:05" -> "2:05 PM"."""
    if not value:
        return ""
    hours, minutes = value.split(":")[:2]
    hour = int(hours)
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minutes} {suffix}"


def _plural_days(count: int) -> str:
    return f"{count} day{'' if count == 1 else 's'}"


def format_relative_time(value: Optional[DateLike], today: Optional[date] = None) -> str:
    if not value:
        return ""
    diff = (_as_date(value) - (today or date.today())).days
    if diff == 0:
        return "Today"
    if diff > 0:
        return f"in {_plural_days(diff)}"
    return f"{_plural_days(abs(diff))} ago"
