"""Approval service - the MPP side of the facility application workflow.

Every single-item action runs inside one unit of work: the status change,
the stock change and the payment change commit or roll back together.
Bulk actions are sequences of independent single-item actions.
"""

import logging
from collections.abc import Callable, Iterable

from rentals.domain import (
    ApplicationDetail,
    ApplicationId,
    ApplicationStatus,
    BulkFailure,
    BulkResult,
    Caller,
    EventFacility,
    EventFacilityId,
    EventId,
    FacilityApplication,
    OwnerCategory,
    OwnerId,
    SortOrder,
)
from rentals.domain.errors import (
    ApplicationNotFoundError,
    BusinessNotFoundError,
    DomainError,
    DuplicatePendingApplicationError,
    EventFacilityNotFoundError,
    EventNotFoundError,
    OwnerNotFoundError,
    QuotaExceededError,
)
from rentals.services.guards import parse_id, require_mpp
from rentals.services.payment_binder import PaymentBinder
from rentals.services.quota_ledger import QuotaLedger
from rentals.stores.interfaces import ApplicationStore, CatalogStore, PaymentStore

logger = logging.getLogger(__name__)

QUOTA_FILLED_REASON = "Facility quota has been filled"
ACCOUNT_BLOCKED_REASON = "Application rejected due to blocked account"


class ApprovalService:
    """Service for approving, rejecting and reverting facility applications."""

    def __init__(
        self,
        catalog: CatalogStore,
        applications: ApplicationStore,
        payments: PaymentStore,
    ) -> None:
        self._catalog = catalog
        self._applications = applications
        self._payments = payments
        self._ledger = QuotaLedger(applications)
        self._binder = PaymentBinder(payments)

    def approve(self, application_id: str, actor: Caller) -> ApplicationDetail:
        """Approve a PENDING application.

        Deducts the quantity from the facility's stock, creates a payment when
        the price is non-zero, and rejects every other PENDING application on
        the facility when the stock reaches zero.

        Raises:
            InvalidIdError: If the application_id is not a valid UUID.
            ApplicationNotFoundError: If the application does not exist.
            InvalidStateTransitionError: If the application is not PENDING.
            QuotaExceededError: If the facility has fewer units left than requested.
        """
        require_mpp(actor)
        app_id = parse_id(ApplicationId, application_id, "application")
        with self._applications.atomic():
            application = self._locked(app_id)
            approved = application.approve()
            left = self._catalog.deduct_available_quantity(
                application.event_facility_id, application.quantity.value
            )
            if left is None:
                event_facility = self._event_facility(application.event_facility_id)
                raise QuotaExceededError.for_stock(event_facility.available.value, application.quantity.value)
            self._applications.save_application(approved)

            event_facility = self._event_facility(application.event_facility_id)
            self._binder.create_if_needed(approved, event_facility, self._owner_category(approved))
            logger.info(
                f"Application {app_id} approved by {actor.owner_id}; "
                f"{left} unit(s) of {event_facility.facility_name} left"
            )
            if left == 0:
                self._reject_remaining_pending(event_facility, approved.id)
        return self._detail(app_id)

    def reject(self, application_id: str, actor: Caller, reason: str | None = None) -> ApplicationDetail:
        """Reject a PENDING application with an optional reason.

        Raises:
            InvalidIdError: If the application_id is not a valid UUID.
            ApplicationNotFoundError: If the application does not exist.
            InvalidStateTransitionError: If the application is not PENDING.
        """
        require_mpp(actor)
        app_id = parse_id(ApplicationId, application_id, "application")
        with self._applications.atomic():
            application = self._locked(app_id)
            self._applications.save_application(application.reject(reason or None))
            logger.info(f"Application {app_id} rejected by {actor.owner_id}")
        return self._detail(app_id)

    def revert(self, application_id: str, actor: Caller) -> ApplicationDetail:
        """Send an APPROVED or REJECTED application back to PENDING.

        Reverting an approval gives its units back to the facility and deletes
        the payment if it is still UNPAID. A PAID payment is kept.

        Raises:
            InvalidIdError: If the application_id is not a valid UUID.
            ApplicationNotFoundError: If the application does not exist.
            InvalidStateTransitionError: If the application is already PENDING or is CANCELLED.
            DuplicatePendingApplicationError: If the business already has another
                PENDING application for the same facility.
            QuotaExceededError: If a rejected application no longer fits the
                business's remaining allowance.
        """
        require_mpp(actor)
        app_id = parse_id(ApplicationId, application_id, "application")
        with self._applications.atomic():
            application = self._locked(app_id)
            pending = application.revert()
            event_facility = self._event_facility(application.event_facility_id)
            if self._ledger.has_pending(application.business_id, event_facility, exclude=application.id):
                raise DuplicatePendingApplicationError(event_facility.facility_name)

            if application.status is ApplicationStatus.APPROVED:
                self._binder.remove_if_unpaid(application.id)
                self._catalog.restore_available_quantity(event_facility.id, application.quantity.value)
            else:
                remaining = self._ledger.remaining(application.business_id, event_facility)
                if application.quantity.value > remaining:
                    raise QuotaExceededError.for_business(
                        event_facility.facility_name, remaining, application.quantity.value
                    )
            self._applications.save_application(pending)
            logger.info(
                f"Application {app_id} reverted from {application.status.value} to PENDING by {actor.owner_id}"
            )
        return self._detail(app_id)

    def bulk_approve(self, application_ids: Iterable[str], actor: Caller) -> BulkResult:
        require_mpp(actor)
        return self._bulk("approve", application_ids, lambda app_id: self.approve(app_id, actor))

    def bulk_reject(self, application_ids: Iterable[str], actor: Caller, reason: str | None = None) -> BulkResult:
        require_mpp(actor)
        return self._bulk("reject", application_ids, lambda app_id: self.reject(app_id, actor, reason))

    def bulk_revert(self, application_ids: Iterable[str], actor: Caller) -> BulkResult:
        require_mpp(actor)
        return self._bulk("revert", application_ids, lambda app_id: self.revert(app_id, actor))

    def has_been_paid(self, application_id: str, actor: Caller) -> bool:
        """Return whether the application's payment, if any, is PAID."""
        require_mpp(actor)
        app_id = parse_id(ApplicationId, application_id, "application")
        if self._applications.get_application(app_id) is None:
            raise ApplicationNotFoundError(app_id)
        payment = self._payments.get_for_application(app_id)
        return payment is not None and payment.is_paid

    def auto_reject_for_blocked_owner(self, owner_id: OwnerId | str) -> int:
        """Reject every PENDING application belonging to the owner's businesses."""
        owner = parse_id(OwnerId, owner_id, "owner")
        with self._applications.atomic():
            pending = self._applications.list_pending_for_owner(owner)
            for application in pending:
                self._applications.save_application(application.reject(ACCOUNT_BLOCKED_REASON))
        logger.info(f"Auto-rejected {len(pending)} pending application(s) for blocked owner {owner}")
        return len(pending)

    def get_applications_by_event(
        self,
        event_id: str,
        actor: Caller,
        status: ApplicationStatus | None = None,
        search: str | None = None,
        sort: SortOrder = SortOrder.LATEST,
    ) -> list[ApplicationDetail]:
        """Return an event's applications for the approval page.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        require_mpp(actor)
        parsed = parse_id(EventId, event_id, "event")
        if self._catalog.get_event(parsed) is None:
            raise EventNotFoundError(parsed)
        return self._applications.list_details_for_event(parsed, status=status, search=search, sort=sort)

    def _bulk(
        self,
        verb: str,
        application_ids: Iterable[str],
        action: Callable[[str], ApplicationDetail],
    ) -> BulkResult:
        succeeded = []
        failed = []
        for application_id in application_ids:
            try:
                succeeded.append(action(application_id))
            except DomainError as exc:
                logger.warning(f"Failed to {verb} application {application_id}: {exc.message}")
                failed.append(BulkFailure(str(application_id), exc.code, exc.message))
        logger.info(f"Bulk {verb}: {len(succeeded)} succeeded, {len(failed)} failed")
        return BulkResult(succeeded=tuple(succeeded), failed=tuple(failed))

    def _reject_remaining_pending(self, event_facility: EventFacility, approved_id: ApplicationId) -> int:
        rejected = 0
        for application in self._applications.list_pending_for_event_facility(event_facility.id):
            if application.id == approved_id:
                continue
            self._applications.save_application(application.reject(QUOTA_FILLED_REASON))
            logger.info(f"Auto-rejected application {application.id} due to quota exhaustion")
            rejected += 1
        return rejected

    def _locked(self, app_id: ApplicationId) -> FacilityApplication:
        application = self._applications.get_application(app_id, lock=True)
        if application is None:
            raise ApplicationNotFoundError(app_id)
        return application

    def _event_facility(self, event_facility_id: EventFacilityId) -> EventFacility:
        event_facility = self._catalog.get_event_facility(event_facility_id)
        if event_facility is None:
            raise EventFacilityNotFoundError(event_facility_id)
        return event_facility

    def _owner_category(self, application: FacilityApplication) -> OwnerCategory:
        business = self._catalog.get_business(application.business_id)
        if business is None:
            raise BusinessNotFoundError(application.business_id)
        owner = self._catalog.get_owner(business.owner_id)
        if owner is None:
            raise OwnerNotFoundError()
        return owner.category

    def _detail(self, app_id: ApplicationId) -> ApplicationDetail:
        detail = self._applications.get_application_detail(app_id)
        if detail is None:
            raise ApplicationNotFoundError(app_id)
        return detail
