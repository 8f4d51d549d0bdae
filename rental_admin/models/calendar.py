"""
Calendar model - Week buckets used for month -> week -> day navigation.

Design principles:
- Weeks always run Sunday to Saturday
- Buckets are not clipped to the month; a week only has to overlap it
- Computed on demand, never persisted, immutable once returned
"""

from datetime import date
from pydantic import BaseModel, ConfigDict, computed_field


def short_label(day: date) -> str:
    """Format a date as "Jan 7" (abbreviated month, unpadded day)."""
    return f"{day:%b} {day.day}"


class WeekBucket(BaseModel):
    """
    One Sunday-to-Saturday span overlapping a month.

    Invariants:
    - end_date == start_date + 6 days
    - start_date is a Sunday
    """
    model_config = ConfigDict(frozen=True)

    week_number: int  # 1-based, sequential within the month
    start_date: date
    end_date: date

    @computed_field
    @property
    def start_date_formatted(self) -> str:
        return short_label(self.start_date)

    @computed_field
    @property
    def end_date_formatted(self) -> str:
        return short_label(self.end_date)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
