from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from rental_admin.api.v1.deps import backend_http_error, to_booking_summary
from rental_admin.clients.backend import BackendClient, BackendError
from rental_admin.clients.session import get_backend_client
from rental_admin.schemas.calendar import (
    CategoryCountsResponse,
    DaySchedule,
    MonthlyCountsResponse,
    MonthWeeksResponse,
    WeekScheduleResponse,
)
from rental_admin.services.calendar_service import CalendarService
from rental_admin.utils.calendar import InvalidArgument, days_in_week, month_name, weeks_in_month

router = APIRouter()

@router.get("/weeks/{month}/{year}", response_model=MonthWeeksResponse)
async def get_weeks(month: int, year: int):
    """Sunday-start week buckets of a month"""
    try:
        weeks = weeks_in_month(year, month)
    except InvalidArgument as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )
    return MonthWeeksResponse(year=year, month=month, month_name=month_name(month), weeks=weeks)

@router.get("/days", response_model=List[date])
async def get_days(start_date: str, end_date: str):
    """Every day between two dates, inclusive"""
    try:
        return days_in_week(start_date, end_date)
    except InvalidArgument as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )

@router.get("/weeks/{month}/{year}/{week_number}/schedule", response_model=WeekScheduleResponse)
def get_week_schedule(
    month: int,
    year: int,
    week_number: int,
    category_id: Optional[int] = None,
    client: BackendClient = Depends(get_backend_client)
):
    """Bookings of one week grouped per day"""
    try:
        week, grouped = CalendarService.week_schedule(client, year, month, week_number, category_id)
    except InvalidArgument as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )
    except BackendError as exc:
        raise backend_http_error(exc)

    return WeekScheduleResponse(
        week=week,
        days=[
            DaySchedule(day=day, bookings=[to_booking_summary(b) for b in bookings])
            for day, bookings in grouped.items()
        ],
    )

@router.get("/counts/{year}", response_model=MonthlyCountsResponse)
def get_monthly_counts(year: int, client: BackendClient = Depends(get_backend_client)):
    """Bookings per month of a year"""
    try:
        counts = client.get_monthly_counts(year)
    except BackendError as exc:
        raise backend_http_error(exc)
    return MonthlyCountsResponse(year=year, counts=counts)

@router.get("/category-counts/{month}/{year}", response_model=CategoryCountsResponse)
def get_category_counts(month: int, year: int, client: BackendClient = Depends(get_backend_client)):
    """Bookings per item category within a month"""
    if not 1 <= month <= 12:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Month must be between 1 and 12"
        )
    try:
        counts = client.get_category_counts(month, year)
    except BackendError as exc:
        raise backend_http_error(exc)
    return CategoryCountsResponse(year=year, month=month, counts=counts)
