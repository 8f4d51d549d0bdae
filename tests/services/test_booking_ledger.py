"""
Tests for booking ledger derivation.

Covers:
- Item selection merge and quantity floor
- Total override heuristic and balance derivation
- Payment status thresholds and payment preview clamping
- Fulfillment status and action gating for persisted bookings
"""

import pytest
from decimal import Decimal

from rental_admin.models.booking import (
    Booking,
    BookingAccessory,
    BookingDraft,
    BookingLineItem,
    CatalogItem,
    FulfillmentStatus,
    PaymentStatus,
)
from rental_admin.services.booking_ledger import BookingLedger


@pytest.fixture
def gown():
    return CatalogItem(id=1, name="Evening Gown", price="50")


@pytest.fixture
def veil():
    return CatalogItem(id=2, name="Veil", price="12.500")


def test_add_item_to_empty_list(gown):
    items = BookingLedger.add_or_merge_item([], gown)

    assert len(items) == 1
    assert items[0].item_id == 1
    assert items[0].name == "Evening Gown"
    assert items[0].unit_price == Decimal("50")
    assert items[0].quantity == 1


def test_selecting_same_item_twice_merges(gown):
    items = BookingLedger.add_or_merge_item([], gown)
    items = BookingLedger.add_or_merge_item(items, gown)

    assert len(items) == 1
    assert items[0].quantity == 2


def test_merge_preserves_position_and_price(gown, veil):
    items = BookingLedger.add_or_merge_item([], gown)
    items = BookingLedger.add_or_merge_item(items, veil)
    repriced = CatalogItem(id=1, name="Evening Gown", price="80")
    items = BookingLedger.add_or_merge_item(items, repriced)

    assert [line.item_id for line in items] == [1, 2]
    assert items[0].quantity == 2
    assert items[0].unit_price == Decimal("50")


def test_add_item_does_not_mutate_input(gown):
    first_pick = BookingLedger.add_or_merge_item([], gown)
    BookingLedger.add_or_merge_item(first_pick, gown)

    assert first_pick[0].quantity == 1


def test_change_quantity(gown):
    items = BookingLedger.add_or_merge_item([], gown)

    assert BookingLedger.change_quantity(items, 0, 1)[0].quantity == 2
    assert BookingLedger.change_quantity(items, 0, 4)[0].quantity == 5


def test_change_quantity_floor_is_one(gown):
    items = BookingLedger.add_or_merge_item([], gown)

    assert BookingLedger.change_quantity(items, 0, -1) == items
    assert BookingLedger.change_quantity(items, 0, -5)[0].quantity == 1


def test_change_quantity_out_of_range_is_noop(gown):
    items = BookingLedger.add_or_merge_item([], gown)

    assert BookingLedger.change_quantity(items, 3, 1) == items
    assert BookingLedger.change_quantity(items, -1, 1) == items


def test_remove_item(gown, veil):
    items = BookingLedger.add_or_merge_item([], gown)
    items = BookingLedger.add_or_merge_item(items, veil)

    remaining = BookingLedger.remove_item(items, 0)
    assert [line.item_id for line in remaining] == [2]


def test_accessories_never_duplicate():
    belt = BookingAccessory(id=7, name="Belt")
    accessories = BookingLedger.add_accessory([], belt)
    accessories = BookingLedger.add_accessory(accessories, belt)

    assert len(accessories) == 1
    assert BookingLedger.remove_accessory(accessories, 7) == []


def test_recompute_total_from_items(gown, veil):
    items = BookingLedger.add_or_merge_item([], gown)
    items = BookingLedger.add_or_merge_item(items, veil)
    items = BookingLedger.change_quantity(items, 1, 1)

    assert BookingLedger.recompute_total(items, 0) == Decimal("75")


def test_recompute_total_overrides_manual_total_when_items_exist(gown):
    items = BookingLedger.add_or_merge_item([], gown)

    assert BookingLedger.recompute_total(items, Decimal("999")) == Decimal("50")


def test_recompute_total_keeps_manual_total_without_items():
    assert BookingLedger.recompute_total([], Decimal("120")) == Decimal("120")
    assert BookingLedger.recompute_total([], 0) == Decimal("0")


def test_recompute_balance_allows_overpayment():
    assert BookingLedger.recompute_balance(Decimal("50"), Decimal("20")) == Decimal("30")
    assert BookingLedger.recompute_balance(Decimal("50"), Decimal("70")) == Decimal("-20")


@pytest.mark.parametrize("total,balance,deposit,expected", [
    (0, 0, 0, PaymentStatus.PENDING),
    (100, 0, 100, PaymentStatus.PAID),
    (100, 40, 60, PaymentStatus.PARTIAL),
    (100, 100, 0, PaymentStatus.PENDING),
    (100, -20, 120, PaymentStatus.PAID),
    (0, -10, 10, PaymentStatus.PARTIAL),
])
def test_payment_status(total, balance, deposit, expected):
    assert BookingLedger.payment_status(total, balance, deposit) == expected


def test_status_moves_backward_when_payment_is_reversed():
    assert BookingLedger.payment_status(100, 0, 100) == PaymentStatus.PAID
    assert BookingLedger.payment_status(100, 40, 60) == PaymentStatus.PARTIAL
    assert BookingLedger.payment_status(100, 100, 0) == PaymentStatus.PENDING


def test_preview_payment_outcome_clamps_at_zero():
    assert BookingLedger.preview_payment_outcome(Decimal("30"), Decimal("50")) == Decimal("0")
    assert BookingLedger.preview_payment_outcome(Decimal("30"), Decimal("10")) == Decimal("20")


def test_payment_progress():
    assert BookingLedger.payment_progress(Decimal("50"), Decimal("20")) == Decimal("40")
    assert BookingLedger.payment_progress(Decimal("50"), Decimal("80")) == Decimal("100")
    assert BookingLedger.payment_progress(0, Decimal("10")) == Decimal("0")


def test_single_item_booking_scenario(gown):
    draft = BookingDraft(deposit_amount=Decimal("20"))
    draft = draft.model_copy(update={"items": BookingLedger.add_or_merge_item(draft.items, gown)})

    derived = BookingLedger.derive(draft)

    assert derived.total_amount == Decimal("50")
    assert derived.remaining_balance == Decimal("30")
    assert BookingLedger.payment_status(
        derived.total_amount, derived.remaining_balance, derived.deposit_amount
    ) == PaymentStatus.PARTIAL


def _booking(**overrides):
    data = {
        "id": 1,
        "invoice_number": "INV-100",
        "total_amount": "100.00",
        "deposit_amount": "0",
        "remaining_balance": "100.00",
    }
    data.update(overrides)
    return Booking(**data)


def test_booking_money_fields_coerce_blank_values():
    booking = _booking(total_amount=None, deposit_amount="", remaining_balance="abc")

    assert booking.total_amount == Decimal("0")
    assert booking.deposit_amount == Decimal("0")
    assert booking.remaining_balance == Decimal("0")


def test_booking_money_fields_coerce_non_finite_values():
    booking = _booking(total_amount="NaN", deposit_amount="Infinity", remaining_balance=Decimal("-Infinity"))

    assert booking.total_amount == Decimal("0")
    assert booking.deposit_amount == Decimal("0")
    assert booking.remaining_balance == Decimal("0")


@pytest.mark.parametrize("overrides,expected", [
    ({"returned": True, "is_picked_up": True}, FulfillmentStatus.RETURNED),
    ({"is_picked_up": True}, FulfillmentStatus.OUT),
    ({"deposit_amount": "100", "remaining_balance": "0"}, FulfillmentStatus.READY),
    ({"deposit_amount": "40", "remaining_balance": "60"}, FulfillmentStatus.PARTIAL),
    ({}, FulfillmentStatus.RESERVED),
])
def test_fulfillment_status(overrides, expected):
    assert BookingLedger.fulfillment_status(_booking(**overrides)) == expected


def test_action_gating():
    reserved = _booking()
    out = _booking(is_picked_up=True)
    returned = _booking(is_picked_up=True, returned=True, remaining_balance="0")

    assert BookingLedger.can_mark_picked_up(reserved)
    assert not BookingLedger.can_mark_picked_up(out)
    assert not BookingLedger.can_mark_returned(reserved)
    assert BookingLedger.can_mark_returned(out)
    assert not BookingLedger.can_mark_returned(returned)
    assert BookingLedger.can_record_payment(reserved)
    assert not BookingLedger.can_record_payment(returned)


def test_draft_from_booking_falls_back_between_dates():
    booking = _booking(
        pickup_date="2024-02-03",
        customer_id=4,
        items=[{"id": 1, "name": "Evening Gown", "price": "50.00", "quantity": 2, "db_id": 31}],
    )

    draft = BookingLedger.draft_from_booking(booking)

    assert draft.event_date == "2024-02-03"
    assert draft.pickup_date == "2024-02-03"
    assert draft.payment_method == "cash"
    assert draft.items == [
        BookingLineItem(item_id=1, name="Evening Gown", unit_price=Decimal("50.00"), quantity=2, db_id=31)
    ]


def test_submission_payload_maps_items(gown):
    draft = BookingDraft(invoice_number="INV-1", event_date="2024-02-03", pickup_date="2024-02-02")
    draft = draft.model_copy(update={"items": BookingLedger.add_or_merge_item([], gown)})

    payload = BookingLedger.submission_payload(BookingLedger.derive(draft))

    assert payload["items"] == [{"id": 1, "pivot_id": None, "quantity": 1, "price": "50"}]
    assert payload["invoice_number"] == "INV-1"
    assert payload["total_amount"] == "50"


def test_filter_bookings():
    bookings = [
        _booking(id=1, invoice_number="INV-1", customer={"id": 1, "name": "Mariam Said"}),
        _booking(id=2, invoice_number="INV-2", items=[{"id": 5, "name": "Bridal Crown"}]),
        _booking(id=3, invoice_number="X-77"),
    ]

    assert [b.id for b in BookingLedger.filter_bookings(bookings, "mariam")] == [1]
    assert [b.id for b in BookingLedger.filter_bookings(bookings, "CROWN")] == [2]
    assert [b.id for b in BookingLedger.filter_bookings(bookings, "inv")] == [1, 2]
    assert len(BookingLedger.filter_bookings(bookings, "")) == 3
