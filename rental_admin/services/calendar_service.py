import logging
from collections import OrderedDict
from datetime import date
from typing import Dict, List, Optional, Sequence

from rental_admin.clients.backend import BackendClient
from rental_admin.models.booking import Booking
from rental_admin.models.calendar import WeekBucket
from rental_admin.utils.calendar import InvalidArgument, days_in_week, weeks_in_month

logger = logging.getLogger(__name__)


def week_query_params(week: WeekBucket) -> Dict[str, str]:
    """Query parameters bounding a booking search to one week."""
    return {
        "week_start": week.start_date.isoformat(),
        "week_end": week.end_date.isoformat(),
    }


def find_week(year: int, month: int, week_number: int) -> WeekBucket:
    for week in weeks_in_month(year, month):
        if week.week_number == week_number:
            return week
    raise InvalidArgument(f"Week {week_number} does not exist in {year}-{month:02d}")


def booking_day(booking: Booking) -> Optional[date]:
    """Day a booking is shown on: its event date, else its pickup date."""
    raw = booking.event_date or booking.pickup_date
    if not raw:
        return None
    try:
        return date.fromisoformat(raw.split("T")[0][:10])
    except ValueError:
        return None


def group_bookings_by_day(bookings: Sequence[Booking], days: Sequence[date]) -> "OrderedDict[date, List[Booking]]":
    grouped: "OrderedDict[date, List[Booking]]" = OrderedDict((day, []) for day in days)
    for booking in bookings:
        day = booking_day(booking)
        if day in grouped:
            grouped[day].append(booking)
    return grouped


class CalendarService:
    @staticmethod
    def week_schedule(
        client: BackendClient,
        year: int,
        month: int,
        week_number: int,
        category_id: Optional[int] = None,
    ):
        """
        Bookings of one calendar week, grouped per day.
        Returns (week, ordered mapping day -> bookings).
        """
        week = find_week(year, month, week_number)
        params = week_query_params(week)
        if category_id is not None:
            params["category_id"] = category_id

        docs = client.list_bookings(**params)
        bookings = [Booking(**doc) for doc in docs]
        logger.debug("Week %s of %s-%s: %d bookings", week_number, year, month, len(bookings))

        days = days_in_week(week.start_date, week.end_date)
        return week, group_bookings_by_day(bookings, days)
