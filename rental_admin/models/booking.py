"""
Booking models - Form drafts and persisted bookings.

Design principles:
- The backend owns persisted bookings; these models only mirror its payloads
- Line items are keyed by item_id; selecting an item twice bumps quantity
- remaining_balance is always derived (total - deposit), never edited
- All monetary values are Decimal
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _coerce_money(value: Any) -> Decimal:
    # Backend amounts arrive as numbers, numeric strings, "" or null.
    if value is None or value == "":
        return Decimal("0")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


Money = Annotated[Decimal, BeforeValidator(_coerce_money)]


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class FulfillmentStatus(str, Enum):
    RESERVED = "reserved"
    PARTIAL = "partial"
    READY = "ready"
    OUT = "out"
    RETURNED = "returned"


class CatalogItem(BaseModel):
    """An inventory item as listed by the backend."""
    id: int
    name: str
    price: Money
    description: Optional[str] = None
    category_id: Optional[int] = None


class Category(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str


class BookingLineItem(BaseModel):
    item_id: int
    name: str
    unit_price: Decimal
    quantity: int = 1
    db_id: Optional[int] = None  # Pivot id once the line is persisted

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class BookingAccessory(BaseModel):
    id: int
    name: str


class BookingDraft(BaseModel):
    """State of the booking form while staff edit it."""
    invoice_number: str = ""
    customer_id: Optional[int] = None
    notes: str = ""
    event_date: Optional[str] = None
    pickup_date: Optional[str] = None
    payment_method: str = "cash"

    items: List[BookingLineItem] = []
    accessories: List[BookingAccessory] = []

    total_amount: Decimal = Decimal("0")
    deposit_amount: Decimal = Decimal("0")
    remaining_balance: Decimal = Decimal("0")


class Customer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    phone_number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class BookedItem(BaseModel):
    """A line of a persisted booking, as the backend returns it."""
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    price: Money = Decimal("0")
    quantity: int = 1
    db_id: Optional[int] = None


class Booking(BaseModel):
    """A persisted booking owned by the backend."""
    model_config = ConfigDict(extra="ignore")

    id: int
    invoice_number: str = ""
    customer_id: Optional[int] = None
    customer: Optional[Customer] = None
    phone_number: Optional[str] = None
    notes: Optional[str] = None

    event_date: Optional[str] = None
    pickup_date: Optional[str] = None
    booking_date: Optional[str] = None
    payment_method: Optional[str] = None

    total_amount: Money = Decimal("0")
    deposit_amount: Money = Decimal("0")
    remaining_balance: Money = Decimal("0")

    delivered: bool = False
    is_picked_up: bool = False
    returned: bool = False

    items: List[BookedItem] = []
    accessories: List[BookingAccessory] = Field(default_factory=list)


class Availability(BaseModel):
    """Items already reserved around a date, plus the preparation buffer."""
    date: str
    reserved_item_ids: List[int] = []
    prep_days: int

    def is_reserved(self, item_id: int) -> bool:
        return item_id in self.reserved_item_ids
