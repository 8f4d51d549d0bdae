"""
HTTP client for the booking backend (the REST API that owns persistence).

The backend answers some list endpoints with a bare array and others with a
paginated ``{"data": [...]}`` envelope; ``unwrap_collection`` and
``unwrap_record`` normalize both shapes so callers never branch on them.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

import requests

from rental_admin.core.config import settings

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An unexpected error occurred"


class BackendError(Exception):
    """Raised when the backend rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendAuthError(BackendError):
    """Raised on HTTP 401; the caller's session is no longer valid."""


def unwrap_collection(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    return []


def unwrap_record(payload: Any) -> Dict[str, Any]:
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict):
            return data
        return payload
    return {}


def extract_error_message(payload: Any, fallback: str = GENERIC_ERROR) -> str:
    """First field validation error if any, else the backend message."""
    if not isinstance(payload, dict):
        return fallback

    errors = payload.get("errors")
    if isinstance(errors, dict) and errors:
        first = next(iter(errors.values()))
        if isinstance(first, list) and first:
            return str(first[0])
        if isinstance(first, str):
            return first

    return payload.get("message") or fallback


class BackendClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.backend_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.BACKEND_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.warning("Backend request %s %s failed: %s", method, url, e)
            raise BackendError(f"Backend request failed: {e}")

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = extract_error_message(body, fallback=response.reason or GENERIC_ERROR)
            logger.warning("Backend %s %s returned %s: %s", method, url, response.status_code, message)
            if response.status_code == 401:
                raise BackendAuthError(message, status_code=401)
            raise BackendError(message, status_code=response.status_code)

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _params(params: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in params.items() if value is not None}

    # ------------------------------------------------------------------
    # Calendar
    # ------------------------------------------------------------------
    def get_monthly_counts(self, year: int) -> Dict[int, int]:
        payload = self._request("GET", f"/calendar/counts/{year}") or {}
        return {int(month): int(count) for month, count in (payload.get("counts") or {}).items()}

    def get_category_counts(self, month: int, year: int) -> Dict[int, int]:
        payload = self._request("GET", f"/calendar/category-counts/{month}/{year}") or {}
        return {int(category): int(count) for category, count in (payload.get("counts") or {}).items()}

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------
    def list_bookings(self, **params) -> List[Dict[str, Any]]:
        return unwrap_collection(self._request("GET", "/bookings", params=self._params(params)))

    def get_booking(self, booking_id: int) -> Dict[str, Any]:
        return unwrap_record(self._request("GET", f"/bookings/{booking_id}"))

    def create_booking(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap_record(self._request("POST", "/bookings", json=payload))

    def update_booking(self, booking_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap_record(self._request("PUT", f"/bookings/{booking_id}", json=payload))

    def delete_booking(self, booking_id: int) -> None:
        self._request("DELETE", f"/bookings/{booking_id}")

    def check_availability(self, day: Union[date, str]) -> Dict[str, Any]:
        value = day.isoformat() if isinstance(day, date) else day
        return unwrap_record(self._request("GET", "/bookings/check-availability", params={"date": value}))

    def pay_booking(self, booking_id: int, amount: Decimal, method: str) -> Dict[str, Any]:
        body = {"payment_amount": str(amount), "payment_method": method}
        return unwrap_record(self._request("POST", f"/bookings/{booking_id}/pay", json=body))

    def mark_picked_up(
        self,
        booking_id: int,
        payment_received: Decimal = Decimal("0"),
        payment_method: str = "cash",
    ) -> Dict[str, Any]:
        """Hand the items over; a payment taken at pickup is recorded with it."""
        body = {"payment_received": str(payment_received), "payment_method": payment_method}
        return unwrap_record(self._request("POST", f"/bookings/{booking_id}/deliver", json=body))

    def return_booking(self, booking_id: int) -> Dict[str, Any]:
        return unwrap_record(self._request("POST", f"/bookings/{booking_id}/return"))

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    def list_items(self, **params) -> List[Dict[str, Any]]:
        return unwrap_collection(self._request("GET", "/items", params=self._params(params)))

    def list_accessories(self, **params) -> List[Dict[str, Any]]:
        return unwrap_collection(self._request("GET", "/accessories", params=self._params(params)))

    def list_categories(self, **params) -> List[Dict[str, Any]]:
        return unwrap_collection(self._request("GET", "/categories", params=self._params(params)))

    def list_customers(self, **params) -> List[Dict[str, Any]]:
        return unwrap_collection(self._request("GET", "/customers", params=self._params(params)))
