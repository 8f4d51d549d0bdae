from datetime import date
from typing import Dict, List
from pydantic import BaseModel
from rental_admin.models.calendar import WeekBucket
from rental_admin.schemas.booking import BookingSummary

class MonthWeeksResponse(BaseModel):
    year: int
    month: int
    month_name: str
    weeks: List[WeekBucket]

class DaySchedule(BaseModel):
    day: date
    bookings: List[BookingSummary] = []

class WeekScheduleResponse(BaseModel):
    week: WeekBucket
    days: List[DaySchedule]

class MonthlyCountsResponse(BaseModel):
    year: int
    counts: Dict[int, int]  # month -> bookings

class CategoryCountsResponse(BaseModel):
    year: int
    month: int
    counts: Dict[int, int]  # category id -> bookings
