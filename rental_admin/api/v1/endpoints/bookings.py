from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from rental_admin.api.v1.deps import backend_http_error, to_booking_summary
from rental_admin.clients.backend import BackendClient, BackendError
from rental_admin.clients.session import get_backend_client
from rental_admin.models.booking import Availability, Booking, BookingDraft
from rental_admin.schemas.booking import (
    AvailabilityResponse,
    BookingSummary,
    DeliveryRequest,
    DraftAccessorySelect,
    DraftEdit,
    DraftItemSelect,
    DraftQuantityChange,
    DraftResponse,
    LedgerRequest,
    LedgerResponse,
    PaymentPreviewRequest,
    PaymentPreviewResponse,
    PaymentRequest,
)
from rental_admin.services.availability_service import AvailabilityService
from rental_admin.services.booking_ledger import BookingLedger
from rental_admin.utils.booking_validation import BookingValidationError, validate_draft

router = APIRouter()


def _draft_response(draft: BookingDraft) -> DraftResponse:
    return DraftResponse(
        draft=draft,
        payment_status=BookingLedger.payment_status(
            draft.total_amount, draft.remaining_balance, draft.deposit_amount
        ),
    )


# ----------------------------------------------------------------------
# Ledger derivation (local, no backend call)
# ----------------------------------------------------------------------
@router.post("/ledger", response_model=LedgerResponse)
async def derive_ledger(ledger_in: LedgerRequest):
    """Derive total, balance and payment status for a booking"""
    total = BookingLedger.recompute_total(ledger_in.items, ledger_in.total_amount)
    balance = BookingLedger.recompute_balance(total, ledger_in.deposit_amount)
    return LedgerResponse(
        total_amount=total,
        deposit_amount=ledger_in.deposit_amount,
        remaining_balance=balance,
        payment_status=BookingLedger.payment_status(total, balance, ledger_in.deposit_amount),
        payment_progress=BookingLedger.payment_progress(total, ledger_in.deposit_amount),
    )

@router.post("/payment-preview", response_model=PaymentPreviewResponse)
async def preview_payment(preview_in: PaymentPreviewRequest):
    """Preview the balance left after a payment"""
    new_balance = BookingLedger.preview_payment_outcome(preview_in.current_balance, preview_in.amount)
    return PaymentPreviewResponse(new_balance=new_balance, covers_balance=new_balance == 0)

@router.post("/draft/items", response_model=DraftResponse)
async def select_draft_item(select_in: DraftItemSelect):
    """Add a catalog item to a booking draft; reserved items are ignored"""
    availability = Availability(
        date=select_in.draft.event_date or "",
        reserved_item_ids=select_in.reserved_item_ids,
        prep_days=0,
    )
    draft = AvailabilityService.select_item(select_in.draft, select_in.item, availability)
    return _draft_response(draft)

@router.patch("/draft/items/{index}", response_model=DraftResponse)
async def change_draft_item_quantity(index: int, change_in: DraftQuantityChange):
    """Change the quantity of one draft line"""
    items = BookingLedger.change_quantity(change_in.draft.items, index, change_in.delta)
    draft = BookingLedger.derive(change_in.draft.model_copy(update={"items": items}))
    return _draft_response(draft)

@router.post("/draft/items/{index}/remove", response_model=DraftResponse)
async def remove_draft_item(index: int, edit_in: DraftEdit):
    """Remove one line from a draft"""
    items = BookingLedger.remove_item(edit_in.draft.items, index)
    draft = BookingLedger.derive(edit_in.draft.model_copy(update={"items": items}))
    return _draft_response(draft)

@router.post("/draft/accessories", response_model=DraftResponse)
async def add_draft_accessory(select_in: DraftAccessorySelect):
    accessories = BookingLedger.add_accessory(select_in.draft.accessories, select_in.accessory)
    return _draft_response(select_in.draft.model_copy(update={"accessories": accessories}))

@router.post("/draft/accessories/{accessory_id}/remove", response_model=DraftResponse)
async def remove_draft_accessory(accessory_id: int, edit_in: DraftEdit):
    accessories = BookingLedger.remove_accessory(edit_in.draft.accessories, accessory_id)
    return _draft_response(edit_in.draft.model_copy(update={"accessories": accessories}))


# ----------------------------------------------------------------------
# Backend-backed operations
# ----------------------------------------------------------------------
@router.get("/check-availability", response_model=AvailabilityResponse)
def check_availability(
    date: str = Query(..., description="Event date, YYYY-MM-DD"),
    client: BackendClient = Depends(get_backend_client)
):
    """Items reserved around a date"""
    try:
        availability = AvailabilityService.check(client, date)
    except BackendError as exc:
        raise backend_http_error(exc)
    return AvailabilityResponse(**availability.model_dump())

@router.get("/", response_model=List[BookingSummary])
def list_bookings(
    search: Optional[str] = None,
    customer_id: Optional[int] = None,
    item_id: Optional[int] = None,
    category_id: Optional[int] = None,
    client: BackendClient = Depends(get_backend_client)
):
    """List bookings with derived payment and fulfillment status"""
    try:
        docs = client.list_bookings(customer_id=customer_id, item_id=item_id, category_id=category_id)
    except BackendError as exc:
        raise backend_http_error(exc)

    # Search matches invoice number, customer name and item names
    bookings = BookingLedger.filter_bookings([Booking(**doc) for doc in docs], search or "")
    return [to_booking_summary(booking) for booking in bookings]


def _submission_payload(draft_in: BookingDraft) -> dict:
    draft = BookingLedger.derive(draft_in)
    try:
        validate_draft(draft)
    except BookingValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )
    return BookingLedger.submission_payload(draft)


def _fetch_booking(client: BackendClient, booking_id: int) -> Booking:
    try:
        return Booking(**client.get_booking(booking_id))
    except BackendError as exc:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
        raise backend_http_error(exc)


@router.post("/", response_model=BookingSummary, status_code=status.HTTP_201_CREATED)
def create_booking(
    draft_in: BookingDraft,
    client: BackendClient = Depends(get_backend_client)
):
    """Validate a booking draft and create it on the backend"""
    payload = _submission_payload(draft_in)
    try:
        doc = client.create_booking(payload)
    except BackendError as exc:
        raise backend_http_error(exc)
    return to_booking_summary(Booking(**doc))

@router.get("/{booking_id}", response_model=BookingSummary)
def get_booking(booking_id: int, client: BackendClient = Depends(get_backend_client)):
    return to_booking_summary(_fetch_booking(client, booking_id))

@router.get("/{booking_id}/draft", response_model=DraftResponse)
def get_booking_draft(booking_id: int, client: BackendClient = Depends(get_backend_client)):
    """Load a persisted booking into an editable draft"""
    booking = _fetch_booking(client, booking_id)
    return _draft_response(BookingLedger.derive(BookingLedger.draft_from_booking(booking)))

@router.put("/{booking_id}", response_model=BookingSummary)
def update_booking(
    booking_id: int,
    draft_in: BookingDraft,
    client: BackendClient = Depends(get_backend_client)
):
    """Validate an edited draft and save it over the persisted booking"""
    payload = _submission_payload(draft_in)
    try:
        doc = client.update_booking(booking_id, payload)
    except BackendError as exc:
        raise backend_http_error(exc)
    return to_booking_summary(Booking(**doc))

@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(booking_id: int, client: BackendClient = Depends(get_backend_client)):
    try:
        client.delete_booking(booking_id)
    except BackendError as exc:
        raise backend_http_error(exc)

@router.post("/{booking_id}/pay", response_model=BookingSummary)
def pay_booking(
    booking_id: int,
    payment_in: PaymentRequest,
    client: BackendClient = Depends(get_backend_client)
):
    """Record a payment; the balance is re-derived from the backend's updated booking"""
    try:
        doc = client.pay_booking(booking_id, payment_in.payment_amount, payment_in.payment_method)
    except BackendError as exc:
        raise backend_http_error(exc)
    return to_booking_summary(Booking(**doc))

@router.post("/{booking_id}/deliver", response_model=BookingSummary)
def deliver_booking(
    booking_id: int,
    delivery_in: DeliveryRequest,
    client: BackendClient = Depends(get_backend_client)
):
    """Mark a booking as picked up, recording any payment taken at handover"""
    booking = _fetch_booking(client, booking_id)
    if not BookingLedger.can_mark_picked_up(booking):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Booking is already picked up"
        )

    try:
        doc = client.mark_picked_up(booking_id, delivery_in.payment_received, delivery_in.payment_method)
    except BackendError as exc:
        raise backend_http_error(exc)
    return to_booking_summary(Booking(**doc))

@router.post("/{booking_id}/return", response_model=BookingSummary)
def return_booking(booking_id: int, client: BackendClient = Depends(get_backend_client)):
    """Mark picked-up items as returned"""
    booking = _fetch_booking(client, booking_id)
    if not BookingLedger.can_mark_returned(booking):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Only picked-up bookings that are not yet returned can be returned"
        )

    try:
        doc = client.return_booking(booking_id)
    except BackendError as exc:
        raise backend_http_error(exc)
    return to_booking_summary(Booking(**doc))
