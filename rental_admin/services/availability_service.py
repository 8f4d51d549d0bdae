from datetime import date
from typing import Union

from rental_admin.clients.backend import BackendClient
from rental_admin.core.config import settings
from rental_admin.models.booking import Availability, BookingDraft, CatalogItem
from rental_admin.services.booking_ledger import BookingLedger


class AvailabilityService:
    @staticmethod
    def check(client: BackendClient, day: Union[date, str]) -> Availability:
        """Reserved items around a date, as reported by the backend."""
        value = day.isoformat() if isinstance(day, date) else day
        payload = client.check_availability(value)
        return Availability(
            date=value,
            reserved_item_ids=payload.get("reserved_item_ids") or [],
            prep_days=payload.get("prep_days") or settings.DEFAULT_PREP_DAYS,
        )

    @staticmethod
    def select_item(draft: BookingDraft, candidate: CatalogItem, availability: Availability | None = None) -> BookingDraft:
        """Add a catalog item to the draft unless it is already reserved."""
        if availability is not None and availability.is_reserved(candidate.id):
            return draft

        items = BookingLedger.add_or_merge_item(draft.items, candidate)
        return BookingLedger.derive(draft.model_copy(update={"items": items}))
