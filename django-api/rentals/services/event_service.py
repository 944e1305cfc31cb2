"""Event service - per-event reads for both sides of the rental workflow.

MPP administrators get application counts per event. Business owners get the
facilities offered at an event, priced for them and with their remaining
quota. The daily status refresh moves events along by their dates.
"""

import logging
from datetime import date

from rentals.domain import Caller, EventApprovalSummary, EventId, EventStatus, FacilityOffer
from rentals.domain.errors import EventNotFoundError
from rentals.services.guards import parse_id, require_mpp
from rentals.services.quota_ledger import QuotaLedger
from rentals.stores.interfaces import ApplicationStore, CatalogStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, catalog: CatalogStore, applications: ApplicationStore) -> None:
        self._catalog = catalog
        self._ledger = QuotaLedger(applications)

    def list_approval_summaries(
        self, actor: Caller, status: EventStatus | None = None
    ) -> list[EventApprovalSummary]:
        """Return live, non-cancelled events with their application counts."""
        require_mpp(actor)
        return self._catalog.list_event_summaries(status)

    def list_facility_offers(self, caller: Caller, event_id: str) -> list[FacilityOffer]:
        """Return the facilities at an event as the caller would apply for them.

        The remaining quota is the smallest across the caller's businesses.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_id(EventId, event_id, "event")
        if self._catalog.get_event(parsed) is None:
            raise EventNotFoundError(parsed)
        businesses = self._catalog.list_businesses_for_owner(caller.owner_id)
        return [
            FacilityOffer(
                event_facility=event_facility,
                applicable_price=event_facility.unit_price_for(caller.category),
                remaining_quota=min(
                    (self._ledger.remaining(business.id, event_facility) for business in businesses),
                    default=event_facility.max_per_business,
                ),
                has_pending_application=any(
                    self._ledger.has_pending(business.id, event_facility) for business in businesses
                ),
            )
            for event_facility in self._catalog.list_event_facilities(parsed)
        ]

    def refresh_event_statuses(self, today: date | None = None) -> int:
        """Move events between upcoming, active and completed by their dates."""
        changed = self._catalog.refresh_event_statuses(today or date.today())
        logger.info(f"Refreshed event statuses: {changed} event(s) changed")
        return changed
