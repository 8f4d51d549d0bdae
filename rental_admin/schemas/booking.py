from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from rental_admin.models.booking import (
    BookingAccessory,
    BookingDraft,
    BookingLineItem,
    CatalogItem,
    Customer,
    FulfillmentStatus,
    PaymentStatus,
)

class LedgerRequest(BaseModel):
    items: List[BookingLineItem] = []
    total_amount: Decimal = Decimal("0")
    deposit_amount: Decimal = Decimal("0")

class LedgerResponse(BaseModel):
    total_amount: Decimal
    deposit_amount: Decimal
    remaining_balance: Decimal
    payment_status: PaymentStatus
    payment_progress: Decimal

class DraftItemSelect(BaseModel):
    draft: BookingDraft
    item: CatalogItem
    reserved_item_ids: List[int] = []  # From /bookings/check-availability

class DraftQuantityChange(BaseModel):
    draft: BookingDraft
    delta: int = 1

class DraftEdit(BaseModel):
    draft: BookingDraft

class DraftAccessorySelect(BaseModel):
    draft: BookingDraft
    accessory: BookingAccessory

class DraftResponse(BaseModel):
    draft: BookingDraft
    payment_status: PaymentStatus

class PaymentPreviewRequest(BaseModel):
    current_balance: Decimal
    amount: Decimal

class PaymentPreviewResponse(BaseModel):
    new_balance: Decimal
    covers_balance: bool

class PaymentRequest(BaseModel):
    payment_amount: Decimal = Field(gt=0)
    payment_method: str = "cash"

class DeliveryRequest(BaseModel):
    # Collected at pickup; zero when nothing is paid on handover
    payment_received: Decimal = Field(default=Decimal("0"), ge=0)
    payment_method: str = "cash"

class AvailabilityResponse(BaseModel):
    date: str
    reserved_item_ids: List[int]
    prep_days: int

class BookingSummary(BaseModel):
    """A persisted booking plus the fields the dashboard derives from it."""
    id: int
    invoice_number: str
    customer: Optional[Customer] = None
    event_date: Optional[str] = None
    pickup_date: Optional[str] = None

    total_amount: Decimal
    deposit_amount: Decimal
    remaining_balance: Decimal

    payment_status: PaymentStatus
    fulfillment_status: FulfillmentStatus
    payment_progress: Decimal

    can_mark_picked_up: bool
    can_mark_returned: bool
    can_record_payment: bool
