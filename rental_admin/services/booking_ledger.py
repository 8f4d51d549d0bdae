from decimal import Decimal
from typing import List, Sequence, Union

from rental_admin.models.booking import (
    Booking,
    BookingAccessory,
    BookingDraft,
    BookingLineItem,
    CatalogItem,
    FulfillmentStatus,
    PaymentStatus,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]


def _d(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


class BookingLedger:
    """
    Derives a booking's money fields and line items.

    Every operation is pure: inputs are never mutated and a new value or
    list is returned, so the booking form can replay them after each edit.
    """

    # ------------------------------------------------------------------
    # Line items
    # ------------------------------------------------------------------
    @staticmethod
    def add_or_merge_item(items: Sequence[BookingLineItem], candidate: CatalogItem) -> List[BookingLineItem]:
        """Selecting an item already on the booking bumps its quantity instead of adding a line."""
        updated = list(items)
        for index, line in enumerate(updated):
            if line.item_id == candidate.id:
                updated[index] = line.model_copy(update={"quantity": line.quantity + 1})
                return updated

        updated.append(BookingLineItem(
            item_id=candidate.id,
            name=candidate.name,
            unit_price=candidate.price,
            quantity=1,
        ))
        return updated

    @staticmethod
    def change_quantity(items: Sequence[BookingLineItem], index: int, delta: int) -> List[BookingLineItem]:
        updated = list(items)
        if not 0 <= index < len(updated):
            return updated

        line = updated[index]
        new_quantity = line.quantity + delta
        # Floor is 1; lines are deleted with remove_item
        if new_quantity < 1:
            return updated

        updated[index] = line.model_copy(update={"quantity": new_quantity})
        return updated

    @staticmethod
    def remove_item(items: Sequence[BookingLineItem], index: int) -> List[BookingLineItem]:
        return [line for position, line in enumerate(items) if position != index]

    @staticmethod
    def add_accessory(accessories: Sequence[BookingAccessory], candidate: BookingAccessory) -> List[BookingAccessory]:
        if any(accessory.id == candidate.id for accessory in accessories):
            return list(accessories)
        return [*accessories, BookingAccessory(id=candidate.id, name=candidate.name)]

    @staticmethod
    def remove_accessory(accessories: Sequence[BookingAccessory], accessory_id: int) -> List[BookingAccessory]:
        return [accessory for accessory in accessories if accessory.id != accessory_id]

    # ------------------------------------------------------------------
    # Amounts
    # ------------------------------------------------------------------
    @staticmethod
    def compute_items_total(items: Sequence[BookingLineItem]) -> Decimal:
        return sum((line.unit_price * line.quantity for line in items), ZERO)

    @staticmethod
    def recompute_total(items: Sequence[BookingLineItem], current_total: Number) -> Decimal:
        """
        Total follows the line items.

        A manually typed total survives only while the booking has no
        items; any item change while items exist overwrites it.
        """
        current = _d(current_total)
        if current == 0 or len(items) > 0:
            return BookingLedger.compute_items_total(items)
        return current

    @staticmethod
    def recompute_balance(total: Number, deposit: Number) -> Decimal:
        # Negative means overpayment and is kept as-is
        return _d(total) - _d(deposit)

    @staticmethod
    def payment_status(total: Number, balance: Number, deposit: Number) -> PaymentStatus:
        if _d(total) > 0 and _d(balance) <= 0:
            return PaymentStatus.PAID
        if _d(deposit) > 0:
            return PaymentStatus.PARTIAL
        return PaymentStatus.PENDING

    @staticmethod
    def preview_payment_outcome(current_balance: Number, amount: Number) -> Decimal:
        """Balance shown in payment dialogs before confirming; clamped at zero."""
        return max(ZERO, _d(current_balance) - _d(amount))

    @staticmethod
    def payment_progress(total: Number, deposit: Number) -> Decimal:
        total = _d(total)
        if total <= 0:
            return ZERO
        return min(_d(deposit) / total * HUNDRED, HUNDRED)

    @staticmethod
    def derive(draft: BookingDraft) -> BookingDraft:
        """Recompute total then balance for a form draft."""
        total = BookingLedger.recompute_total(draft.items, draft.total_amount)
        balance = BookingLedger.recompute_balance(total, draft.deposit_amount)
        return draft.model_copy(update={"total_amount": total, "remaining_balance": balance})

    # ------------------------------------------------------------------
    # Persisted bookings
    # ------------------------------------------------------------------
    @staticmethod
    def booking_payment_status(booking: Booking) -> PaymentStatus:
        balance = BookingLedger.recompute_balance(booking.total_amount, booking.deposit_amount)
        return BookingLedger.payment_status(booking.total_amount, balance, booking.deposit_amount)

    @staticmethod
    def fulfillment_status(booking: Booking) -> FulfillmentStatus:
        if booking.returned:
            return FulfillmentStatus.RETURNED
        if booking.is_picked_up:
            return FulfillmentStatus.OUT

        status = BookingLedger.booking_payment_status(booking)
        if status == PaymentStatus.PAID:
            return FulfillmentStatus.READY
        if status == PaymentStatus.PARTIAL:
            return FulfillmentStatus.PARTIAL
        return FulfillmentStatus.RESERVED

    @staticmethod
    def can_mark_picked_up(booking: Booking) -> bool:
        return not booking.is_picked_up

    @staticmethod
    def can_mark_returned(booking: Booking) -> bool:
        return booking.is_picked_up and not booking.returned

    @staticmethod
    def can_record_payment(booking: Booking) -> bool:
        return booking.remaining_balance > 0

    @staticmethod
    def draft_from_booking(booking: Booking) -> BookingDraft:
        """Load a persisted booking into the booking form."""
        return BookingDraft(
            invoice_number=booking.invoice_number or "",
            customer_id=booking.customer_id,
            notes=booking.notes or "",
            event_date=booking.event_date or booking.pickup_date,
            pickup_date=booking.pickup_date or booking.event_date,
            payment_method=booking.payment_method or "cash",
            items=[
                BookingLineItem(
                    item_id=item.id,
                    name=item.name,
                    unit_price=item.price,
                    quantity=item.quantity or 1,
                    db_id=item.db_id,
                )
                for item in booking.items
            ],
            accessories=list(booking.accessories),
            total_amount=booking.total_amount,
            deposit_amount=booking.deposit_amount,
            remaining_balance=booking.remaining_balance,
        )

    @staticmethod
    def submission_payload(draft: BookingDraft) -> dict:
        """JSON body for creating or updating a booking on the backend."""
        payload = draft.model_dump(mode="json", exclude={"items"})
        payload["items"] = [
            {
                "id": line.item_id,
                "pivot_id": line.db_id,
                "quantity": line.quantity,
                "price": str(line.unit_price),
            }
            for line in draft.items
        ]
        return payload

    @staticmethod
    def filter_bookings(bookings: Sequence[Booking], term: str) -> List[Booking]:
        """Case-insensitive search on invoice number, customer name and item names."""
        search = (term or "").strip().lower()
        if not search:
            return list(bookings)

        def matches(booking: Booking) -> bool:
            if search in (booking.invoice_number or "").lower():
                return True
            if booking.customer and search in booking.customer.name.lower():
                return True
            return any(search in item.name.lower() for item in booking.items)

        return [booking for booking in bookings if matches(booking)]
