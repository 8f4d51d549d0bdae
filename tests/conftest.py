import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from rental_admin.main import app
from rental_admin.clients.backend import BackendClient
from rental_admin.clients.session import get_backend_client


@pytest.fixture
def backend():
    """Stand-in for the booking backend client."""
    return MagicMock(spec=BackendClient)


@pytest.fixture
def client(backend):
    """FastAPI test client with the backend client overridden."""
    app.dependency_overrides[get_backend_client] = lambda: backend
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def booking_doc():
    """A booking as the backend returns it."""
    return {
        "id": 42,
        "invoice_number": "INV-042",
        "customer_id": 7,
        "customer": {"id": 7, "name": "Mariam Said", "phone_number": "99001122"},
        "event_date": "2024-01-10T00:00:00.000000Z",
        "pickup_date": "2024-01-08",
        "total_amount": "100.00",
        "deposit_amount": "40.00",
        "remaining_balance": "60.00",
        "payment_method": "cash",
        "is_picked_up": False,
        "returned": False,
        "items": [{"id": 1, "name": "Evening Gown", "price": "50.00", "quantity": 2}],
        "accessories": [{"id": 3, "name": "Belt"}],
    }
