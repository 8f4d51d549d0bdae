"""Booking draft validation utilities."""
from decimal import Decimal
from typing import List
from rental_admin.models.booking import BookingDraft, BookingLineItem


class BookingValidationError(Exception):
    """Custom exception for booking validation errors."""
    pass


def validate_items(items: List[BookingLineItem]) -> None:
    """
    Validate booking line items.

    Rules:
    - at least one item is booked
    - unit_price must be non-negative
    - quantity must be a positive whole number
    """
    if not items:
        raise BookingValidationError("Please select at least one item")

    for item in items:
        if item.unit_price < 0:
            raise BookingValidationError(
                f"Item '{item.name}' has negative price: {item.unit_price}"
            )

        if item.quantity < 1:
            raise BookingValidationError(
                f"Item '{item.name}' has non-positive quantity: {item.quantity}"
            )


def validate_amounts(total_amount: Decimal, deposit_amount: Decimal) -> None:
    """
    Validate booking amounts.
    Note: a deposit above the total is an overpayment and is allowed.
    """
    if total_amount < 0:
        raise BookingValidationError(f"Total amount is negative: {total_amount}")
    if deposit_amount < 0:
        raise BookingValidationError(f"Deposit amount is negative: {deposit_amount}")


def validate_draft(draft: BookingDraft) -> None:
    """Validate a booking draft before it is sent to the backend."""
    if not draft.event_date:
        raise BookingValidationError("Date is required")
    if not draft.pickup_date:
        raise BookingValidationError("Pickup date is required")
    if not draft.invoice_number.strip():
        raise BookingValidationError("Invoice number is required")
    if draft.customer_id is None:
        raise BookingValidationError("Customer is required")

    validate_items(draft.items)
    validate_amounts(draft.total_amount, draft.deposit_amount)
