from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from rental_admin.clients.backend import BackendClient
from rental_admin.models.booking import Availability, BookingDraft, CatalogItem
from rental_admin.services.availability_service import AvailabilityService


def test_check_unwraps_backend_payload():
    client = MagicMock(spec=BackendClient)
    client.check_availability.return_value = {"reserved_item_ids": [4, 9], "prep_days": 5}

    availability = AvailabilityService.check(client, date(2024, 1, 10))

    client.check_availability.assert_called_once_with("2024-01-10")
    assert availability.reserved_item_ids == [4, 9]
    assert availability.prep_days == 5
    assert availability.is_reserved(9)


def test_check_defaults_prep_days():
    client = MagicMock(spec=BackendClient)
    client.check_availability.return_value = {}

    availability = AvailabilityService.check(client, "2024-01-10")

    assert availability.reserved_item_ids == []
    assert availability.prep_days == 3


def test_select_item_ignores_reserved_item():
    draft = BookingDraft()
    availability = Availability(date="2024-01-10", reserved_item_ids=[1], prep_days=3)

    result = AvailabilityService.select_item(draft, CatalogItem(id=1, name="Gown", price=50), availability)

    assert result.items == []
    assert result.total_amount == Decimal("0")


def test_select_item_adds_and_derives():
    draft = BookingDraft(deposit_amount=Decimal("20"))
    item = CatalogItem(id=2, name="Veil", price="15")

    draft = AvailabilityService.select_item(draft, item)
    draft = AvailabilityService.select_item(draft, item)

    assert len(draft.items) == 1
    assert draft.items[0].quantity == 2
    assert draft.total_amount == Decimal("30")
    assert draft.remaining_balance == Decimal("10")
