"""Submission service - business owners applying for facilities at events."""

import logging
from collections.abc import Sequence

from rentals.domain import (
    ApplicationDetail,
    ApplicationDraft,
    Business,
    BusinessId,
    Caller,
    EventFacilityId,
    Quantity,
)
from rentals.domain.errors import (
    ApplicationsClosedError,
    BusinessInactiveError,
    BusinessNotFoundError,
    DuplicatePendingApplicationError,
    EventFacilityNotFoundError,
    EventNotFoundError,
    NotPermittedError,
    QuotaExceededError,
)
from rentals.services.guards import parse_id
from rentals.services.quota_ledger import QuotaLedger
from rentals.stores.interfaces import ApplicationStore, CatalogStore

logger = logging.getLogger(__name__)


class SubmissionService:
    """Service for creating facility applications."""

    def __init__(self, catalog: CatalogStore, applications: ApplicationStore) -> None:
        self._catalog = catalog
        self._applications = applications
        self._ledger = QuotaLedger(applications)

    def submit(
        self,
        caller: Caller,
        business_id: str,
        items: Sequence[tuple[str, int]],
    ) -> list[ApplicationDetail]:
        """Create one PENDING application per (event_facility_id, quantity) item.

        Every item is validated before anything is written, so a batch is
        either stored whole or not at all. No stock is taken at this point.

        Raises:
            InvalidIdError: If an ID is not a valid UUID.
            BusinessNotFoundError: If the business does not exist.
            NotPermittedError: If the business belongs to someone else.
            BusinessInactiveError: If the business is not ACTIVE.
            EventFacilityNotFoundError: If an event facility does not exist.
            ApplicationsClosedError: If an event is not accepting applications.
            DuplicatePendingApplicationError: If a facility already has a PENDING
                application from this business, or appears twice in the batch.
            QuotaExceededError: If a quantity exceeds the remaining allowance.
        """
        if not items:
            raise ValueError("At least one facility must be selected")
        business = self._own_business(caller, business_id)

        drafts: list[ApplicationDraft] = []
        seen: set[EventFacilityId] = set()
        for raw_event_facility_id, raw_quantity in items:
            event_facility_id = parse_id(EventFacilityId, raw_event_facility_id, "event facility")
            quantity = Quantity(raw_quantity)

            event_facility = self._catalog.get_event_facility(event_facility_id)
            if event_facility is None:
                raise EventFacilityNotFoundError(event_facility_id)
            event = self._catalog.get_event(event_facility.event_id)
            if event is None:
                raise EventNotFoundError(event_facility.event_id)
            if not event.accepts_applications:
                raise ApplicationsClosedError(event.name)
            if event_facility_id in seen or self._ledger.has_pending(business.id, event_facility):
                raise DuplicatePendingApplicationError(event_facility.facility_name)

            remaining = self._ledger.remaining(business.id, event_facility)
            if quantity.value > remaining:
                raise QuotaExceededError.for_business(event_facility.facility_name, remaining, quantity.value)

            seen.add(event_facility_id)
            drafts.append(ApplicationDraft(business.id, event_facility_id, quantity))

        with self._applications.atomic():
            created = self._applications.add_applications(drafts)
        logger.info(f"Business {business.id} submitted {len(created)} application(s)")
        return [self._applications.get_application_detail(application.id) for application in created]

    def list_for_owner(self, caller: Caller) -> list[ApplicationDetail]:
        """Return every application of the caller's businesses, newest first."""
        return self._applications.list_details_for_owner(caller.owner_id)

    def _own_business(self, caller: Caller, business_id: str) -> Business:
        parsed = parse_id(BusinessId, business_id, "business")
        business = self._catalog.get_business(parsed)
        if business is None:
            raise BusinessNotFoundError(parsed)
        if business.owner_id != caller.owner_id:
            raise NotPermittedError("Business does not belong to current user")
        if not business.is_active:
            raise BusinessInactiveError()
        return business
