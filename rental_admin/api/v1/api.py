from fastapi import APIRouter
from rental_admin.api.v1.endpoints import bookings, calendar, catalog

api_router = APIRouter()

api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
