"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date

from rentals.domain import (
    ApplicationDetail,
    ApplicationDraft,
    ApplicationId,
    ApplicationStatus,
    Business,
    BusinessId,
    Event,
    EventApprovalSummary,
    EventFacility,
    EventFacilityId,
    EventId,
    EventStatus,
    FacilityApplication,
    Money,
    Owner,
    OwnerId,
    Payment,
    PaymentId,
    SortOrder,
)


class CatalogStore(ABC):
    """Interface for events, facilities at events, businesses and owners."""

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return a live event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_event_facility(self, event_facility_id: EventFacilityId) -> EventFacility | None:
        """Return a facility assignment by ID, or None if not found."""
        ...

    @abstractmethod
    def list_event_facilities(self, event_id: EventId) -> list[EventFacility]:
        """Return the live facilities assigned to an event."""
        ...

    @abstractmethod
    def get_business(self, business_id: BusinessId) -> Business | None:
        ...

    @abstractmethod
    def list_businesses_for_owner(self, owner_id: OwnerId) -> list[Business]:
        ...

    @abstractmethod
    def get_owner(self, owner_id: OwnerId) -> Owner | None:
        ...

    @abstractmethod
    def deduct_available_quantity(self, event_facility_id: EventFacilityId, quantity: int) -> int | None:
        """Atomically take `quantity` units from the facility's stock.

        Returns the stock left afterwards, or None (and changes nothing)
        when fewer than `quantity` units are available.
        """
        ...

    @abstractmethod
    def restore_available_quantity(self, event_facility_id: EventFacilityId, quantity: int) -> int:
        """Atomically give `quantity` units back and return the new stock."""
        ...

    @abstractmethod
    def list_event_summaries(self, status: EventStatus | None = None) -> list[EventApprovalSummary]:
        """Return live, non-cancelled events with their application counts."""
        ...

    @abstractmethod
    def refresh_event_statuses(self, today: date) -> int:
        """Recompute date-driven event statuses. Returns how many changed."""
        ...


class ApplicationStore(ABC):
    """Interface for facility application persistence."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager scoping one unit of work."""
        ...

    @abstractmethod
    def get_application(self, application_id: ApplicationId, lock: bool = False) -> FacilityApplication | None:
        """Return an application by ID. `lock` holds the row until the unit of work ends."""
        ...

    @abstractmethod
    def get_application_detail(self, application_id: ApplicationId) -> ApplicationDetail | None:
        ...

    @abstractmethod
    def total_applied_quantity(self, business_id: BusinessId, event_facility_id: EventFacilityId) -> int:
        """Sum of quantities over the pair's PENDING and APPROVED applications."""
        ...

    @abstractmethod
    def has_pending_application(
        self,
        business_id: BusinessId,
        event_facility_id: EventFacilityId,
        exclude: ApplicationId | None = None,
    ) -> bool:
        ...

    @abstractmethod
    def add_applications(self, drafts: list[ApplicationDraft]) -> list[FacilityApplication]:
        """Persist new PENDING applications.

        Raises:
            DuplicatePendingApplicationError: If a pair already has a PENDING row.
        """
        ...

    @abstractmethod
    def save_application(self, application: FacilityApplication) -> None:
        """Persist the status and rejection reason of an existing application."""
        ...

    @abstractmethod
    def list_pending_for_event_facility(self, event_facility_id: EventFacilityId) -> list[FacilityApplication]:
        ...

    @abstractmethod
    def list_pending_for_owner(self, owner_id: OwnerId) -> list[FacilityApplication]:
        ...

    @abstractmethod
    def list_details_for_event(
        self,
        event_id: EventId,
        status: ApplicationStatus | None = None,
        search: str | None = None,
        sort: SortOrder = SortOrder.LATEST,
    ) -> list[ApplicationDetail]:
        """Return an event's applications, filtered and ordered by created_at."""
        ...

    @abstractmethod
    def list_details_for_owner(self, owner_id: OwnerId) -> list[ApplicationDetail]:
        """Return every application of the owner's businesses, newest first."""
        ...


class PaymentStore(ABC):
    """Interface for payment persistence."""

    @abstractmethod
    def get_for_application(self, application_id: ApplicationId) -> Payment | None:
        ...

    @abstractmethod
    def add(self, application_id: ApplicationId, amount: Money) -> Payment:
        """Create an UNPAID payment for an application."""
        ...

    @abstractmethod
    def delete(self, payment_id: PaymentId) -> None:
        ...
