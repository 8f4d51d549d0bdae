from fastapi import HTTPException, status
from rental_admin.clients.backend import BackendAuthError, BackendError
from rental_admin.models.booking import Booking
from rental_admin.schemas.booking import BookingSummary
from rental_admin.services.booking_ledger import BookingLedger


def backend_http_error(exc: BackendError) -> HTTPException:
    """Map a backend failure onto the response sent to the dashboard."""
    if isinstance(exc, BackendAuthError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)


def to_booking_summary(booking: Booking) -> BookingSummary:
    return BookingSummary(
        id=booking.id,
        invoice_number=booking.invoice_number,
        customer=booking.customer,
        event_date=booking.event_date,
        pickup_date=booking.pickup_date,
        total_amount=booking.total_amount,
        deposit_amount=booking.deposit_amount,
        remaining_balance=booking.remaining_balance,
        payment_status=BookingLedger.booking_payment_status(booking),
        fulfillment_status=BookingLedger.fulfillment_status(booking),
        payment_progress=BookingLedger.payment_progress(booking.total_amount, booking.deposit_amount),
        can_mark_picked_up=BookingLedger.can_mark_picked_up(booking),
        can_mark_returned=BookingLedger.can_mark_returned(booking),
        can_record_payment=BookingLedger.can_record_payment(booking),
    )
