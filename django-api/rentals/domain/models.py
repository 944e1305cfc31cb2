"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in rentals/models.py (persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import date, datetime

from rentals.domain.errors import ErrorCode, InvalidStateTransitionError
from rentals.domain.statuses import (
    ApplicationStatus,
    ApplicationWindow,
    BusinessStatus,
    EventStatus,
    OwnerCategory,
    OwnerStatus,
    PaymentStatus,
)
from rentals.domain.value_objects import (
    ApplicationId,
    BusinessId,
    Capacity,
    EventFacilityId,
    EventId,
    FacilityId,
    Money,
    OwnerId,
    PaymentId,
    Quantity,
)

QUOTA_HOLDING_STATUSES = frozenset({ApplicationStatus.PENDING, ApplicationStatus.APPROVED})


@dataclass(frozen=True)
class Owner:
    """Domain representation of a business owner or MPP administrator."""

    id: OwnerId
    name: str
    email: str
    category: OwnerCategory
    status: OwnerStatus


@dataclass(frozen=True)
class Business:
    """Domain representation of a Business."""

    id: BusinessId
    owner_id: OwnerId
    name: str
    category: str
    description: str
    status: BusinessStatus

    @property
    def is_active(self) -> bool:
        return self.status is BusinessStatus.ACTIVE


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    venue: str
    start_date: date
    end_date: date
    application_window: ApplicationWindow
    status: EventStatus
    created_at: datetime

    @property
    def accepts_applications(self) -> bool:
        return self.application_window is ApplicationWindow.OPEN

    def status_on(self, today: date) -> EventStatus:
        """Return the status implied by the event dates. Cancelled events stay cancelled."""
        if self.status is EventStatus.CANCELLED:
            return EventStatus.CANCELLED
        if today < self.start_date:
            return EventStatus.UPCOMING
        if today > self.end_date:
            return EventStatus.COMPLETED
        return EventStatus.ACTIVE


@dataclass(frozen=True)
class EventFacility:
    """A facility offered at an event, with its stock and prices."""

    id: EventFacilityId
    event_id: EventId
    facility_id: FacilityId
    facility_name: str
    available: Capacity
    max_per_business: int
    student_price: Money
    non_student_price: Money

    def unit_price_for(self, category: OwnerCategory) -> Money:
        if category is OwnerCategory.STUDENT:
            return self.student_price
        return self.non_student_price


@dataclass(frozen=True)
class FacilityApplication:
    """One business's request for a quantity of one event facility.

    Transitions return a new instance and raise InvalidStateTransitionError
    when the current status does not allow them.
    """

    id: ApplicationId
    business_id: BusinessId
    event_facility_id: EventFacilityId
    quantity: Quantity
    status: ApplicationStatus
    created_at: datetime
    rejection_reason: str | None = None

    @property
    def holds_quota(self) -> bool:
        return self.status in QUOTA_HOLDING_STATUSES

    @property
    def is_pending(self) -> bool:
        return self.status is ApplicationStatus.PENDING

    def approve(self) -> "FacilityApplication":
        if not self.is_pending:
            raise InvalidStateTransitionError("Only PENDING applications can be approved")
        return replace(self, status=ApplicationStatus.APPROVED, rejection_reason=None)

    def reject(self, reason: str | None = None) -> "FacilityApplication":
        if not self.is_pending:
            raise InvalidStateTransitionError("Only PENDING applications can be rejected")
        return replace(self, status=ApplicationStatus.REJECTED, rejection_reason=reason)

    def revert(self) -> "FacilityApplication":
        if self.is_pending:
            raise InvalidStateTransitionError("Application is already PENDING")
        if self.status is ApplicationStatus.CANCELLED:
            raise InvalidStateTransitionError("Cancelled applications cannot be reverted")
        return replace(self, status=ApplicationStatus.PENDING, rejection_reason=None)


@dataclass(frozen=True)
class ApplicationDraft:
    """A validated application that has not been persisted yet."""

    business_id: BusinessId
    event_facility_id: EventFacilityId
    quantity: Quantity


@dataclass(frozen=True)
class Payment:
    """Domain representation of the payment owed for an approved application."""

    id: PaymentId
    application_id: ApplicationId
    amount: Money
    status: PaymentStatus
    created_at: datetime

    @property
    def is_paid(self) -> bool:
        return self.status is PaymentStatus.PAID

    @property
    def is_unpaid(self) -> bool:
        return self.status is PaymentStatus.UNPAID


@dataclass(frozen=True)
class ApplicationDetail:
    """An application together with everything the approval pages display."""

    application: FacilityApplication
    business: Business
    owner: Owner
    event: Event
    event_facility: EventFacility
    payment: Payment | None = None


@dataclass(frozen=True)
class EventApprovalSummary:
    event: Event
    total: int
    pending: int
    approved: int
    rejected: int


@dataclass(frozen=True)
class FacilityOffer:
    """A business owner's view of one facility at an event."""

    event_facility: EventFacility
    applicable_price: Money
    remaining_quota: int
    has_pending_application: bool


@dataclass(frozen=True)
class BulkFailure:
    application_id: str
    code: ErrorCode
    message: str


@dataclass(frozen=True)
class BulkResult:
    """Outcome of a bulk action. Each id lands in exactly one of the two lists."""

    succeeded: tuple[ApplicationDetail, ...] = ()
    failed: tuple[BulkFailure, ...] = ()


@dataclass(frozen=True)
class Caller:
    """Identity of whoever invoked an operation, resolved by the transport layer."""

    owner_id: OwnerId
    category: OwnerCategory

    @property
    def is_mpp(self) -> bool:
        return self.category is OwnerCategory.MPP
