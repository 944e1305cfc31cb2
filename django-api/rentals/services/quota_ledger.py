"""Per-business quota accounting for facilities offered at events."""

from rentals.domain import ApplicationId, BusinessId, EventFacility
from rentals.stores.interfaces import ApplicationStore


class QuotaLedger:
    """Answers how much of a facility a business may still apply for.

    Only PENDING and APPROVED applications count against the allowance.
    Results are point-in-time reads, not reservations.
    """

    def __init__(self, applications: ApplicationStore) -> None:
        self._applications = applications

    def total_applied(self, business_id: BusinessId, event_facility: EventFacility) -> int:
        return self._applications.total_applied_quantity(business_id, event_facility.id)

    def remaining(self, business_id: BusinessId, event_facility: EventFacility) -> int:
        return event_facility.max_per_business - self.total_applied(business_id, event_facility)

    def has_pending(
        self,
        business_id: BusinessId,
        event_facility: EventFacility,
        exclude: ApplicationId | None = None,
    ) -> bool:
        return self._applications.has_pending_application(business_id, event_facility.id, exclude=exclude)
