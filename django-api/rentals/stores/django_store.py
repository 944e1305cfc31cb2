"""Django ORM implementation of the rental stores.

Each store queries the Django ORM and converts rows to domain models.
"""

from datetime import date

from django.db import IntegrityError, transaction
from django.db.models import Count, F, Q, Sum
from django.db.models.functions import Coalesce

from rentals import models
from rentals.domain import (
    ApplicationDetail,
    ApplicationDraft,
    ApplicationId,
    ApplicationStatus,
    ApplicationWindow,
    Business,
    BusinessId,
    BusinessStatus,
    Capacity,
    Event,
    EventApprovalSummary,
    EventFacility,
    EventFacilityId,
    EventId,
    EventStatus,
    FacilityApplication,
    FacilityId,
    Money,
    Owner,
    OwnerCategory,
    OwnerId,
    OwnerStatus,
    Payment,
    PaymentId,
    PaymentStatus,
    Quantity,
    RecordState,
    SortOrder,
)
from rentals.domain.errors import DuplicatePendingApplicationError
from rentals.stores.interfaces import ApplicationStore, CatalogStore, PaymentStore

PENDING = ApplicationStatus.PENDING.value
QUOTA_HOLDING = [ApplicationStatus.PENDING.value, ApplicationStatus.APPROVED.value]
DETAIL_RELATIONS = (
    "business__owner",
    "event_facility__event",
    "event_facility__facility",
    "payment",
)


def to_owner(row: models.Owner) -> Owner:
    return Owner(
        id=OwnerId(row.id),
        name=row.name,
        email=row.email,
        category=OwnerCategory(row.category),
        status=OwnerStatus(row.status),
    )


def to_business(row: models.Business) -> Business:
    return Business(
        id=BusinessId(row.id),
        owner_id=OwnerId(row.owner_id),
        name=row.name,
        category=row.category,
        description=row.description,
        status=BusinessStatus(row.status),
    )


def to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        name=row.name,
        venue=row.venue,
        start_date=row.start_date,
        end_date=row.end_date,
        application_window=ApplicationWindow(row.application_window),
        status=EventStatus(row.status),
        created_at=row.created_at,
    )


def to_event_facility(row: models.EventFacility) -> EventFacility:
    return EventFacility(
        id=EventFacilityId(row.id),
        event_id=EventId(row.event_id),
        facility_id=FacilityId(row.facility_id),
        facility_name=row.facility.name,
        available=Capacity(row.available_quantity),
        max_per_business=row.max_per_business,
        student_price=Money(row.student_price),
        non_student_price=Money(row.non_student_price),
    )


def to_application(row: models.FacilityApplication) -> FacilityApplication:
    return FacilityApplication(
        id=ApplicationId(row.id),
        business_id=BusinessId(row.business_id),
        event_facility_id=EventFacilityId(row.event_facility_id),
        quantity=Quantity(row.quantity),
        status=ApplicationStatus(row.status),
        created_at=row.created_at,
        rejection_reason=row.rejection_reason,
    )


def to_payment(row: models.Payment) -> Payment:
    return Payment(
        id=PaymentId(row.id),
        application_id=ApplicationId(row.application_id),
        amount=Money(row.amount),
        status=PaymentStatus(row.status),
        created_at=row.created_at,
    )


def to_detail(row: models.FacilityApplication) -> ApplicationDetail:
    try:
        payment = to_payment(row.payment)
    except models.Payment.DoesNotExist:
        payment = None
    return ApplicationDetail(
        application=to_application(row),
        business=to_business(row.business),
        owner=to_owner(row.business.owner),
        event=to_event(row.event_facility.event),
        event_facility=to_event_facility(row.event_facility),
        payment=payment,
    )


class DjangoCatalogStore(CatalogStore):
    """Django ORM-backed catalog store."""

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.live.filter(pk=event_id.value).first()
        return to_event(row) if row else None

    def get_event_facility(self, event_facility_id: EventFacilityId) -> EventFacility | None:
        row = (
            models.EventFacility.objects.select_related("facility")
            .filter(pk=event_facility_id.value, event__record_state=RecordState.LIVE.value)
            .first()
        )
        return to_event_facility(row) if row else None

    def list_event_facilities(self, event_id: EventId) -> list[EventFacility]:
        rows = (
            models.EventFacility.objects.select_related("facility")
            .filter(event_id=event_id.value, facility__record_state=RecordState.LIVE.value)
            .order_by("facility__name")
        )
        return [to_event_facility(row) for row in rows]

    def get_business(self, business_id: BusinessId) -> Business | None:
        row = models.Business.objects.filter(pk=business_id.value).first()
        return to_business(row) if row else None

    def list_businesses_for_owner(self, owner_id: OwnerId) -> list[Business]:
        rows = models.Business.objects.filter(owner_id=owner_id.value).order_by("name")
        return [to_business(row) for row in rows]

    def get_owner(self, owner_id: OwnerId) -> Owner | None:
        row = models.Owner.objects.filter(pk=owner_id.value).first()
        return to_owner(row) if row else None

    def deduct_available_quantity(self, event_facility_id: EventFacilityId, quantity: int) -> int | None:
        rows = models.EventFacility.objects.filter(pk=event_facility_id.value)
        updated = rows.filter(available_quantity__gte=quantity).update(
            available_quantity=F("available_quantity") - quantity
        )
        if not updated:
            return None
        return rows.values_list("available_quantity", flat=True).get()

    def restore_available_quantity(self, event_facility_id: EventFacilityId, quantity: int) -> int:
        rows = models.EventFacility.objects.filter(pk=event_facility_id.value)
        rows.update(available_quantity=F("available_quantity") + quantity)
        return rows.values_list("available_quantity", flat=True).get()

    def list_event_summaries(self, status: EventStatus | None = None) -> list[EventApprovalSummary]:
        def count(status_value=None):
            if status_value is None:
                return Count("facilities__applications")
            return Count(
                "facilities__applications",
                filter=Q(facilities__applications__status=status_value),
            )

        rows = models.Event.live.exclude(status=EventStatus.CANCELLED.value)
        if status is not None:
            rows = rows.filter(status=status.value)
        rows = rows.annotate(
            total_count=count(),
            pending_count=count(ApplicationStatus.PENDING.value),
            approved_count=count(ApplicationStatus.APPROVED.value),
            rejected_count=count(ApplicationStatus.REJECTED.value),
        ).order_by("-created_at")
        return [
            EventApprovalSummary(
                event=to_event(row),
                total=row.total_count,
                pending=row.pending_count,
                approved=row.approved_count,
                rejected=row.rejected_count,
            )
            for row in rows
        ]

    def refresh_event_statuses(self, today: date) -> int:
        changed = 0
        for row in models.Event.live.exclude(status=EventStatus.CANCELLED.value):
            status = to_event(row).status_on(today)
            if status.value != row.status:
                row.status = status.value
                row.save(update_fields=["status"])
                changed += 1
        return changed


class DjangoApplicationStore(ApplicationStore):
    """Django ORM-backed application store."""

    def atomic(self):
        return transaction.atomic()

    def get_application(self, application_id: ApplicationId, lock: bool = False) -> FacilityApplication | None:
        rows = models.FacilityApplication.objects.all()
        if lock:
            rows = rows.select_for_update()
        row = rows.filter(pk=application_id.value).first()
        return to_application(row) if row else None

    def get_application_detail(self, application_id: ApplicationId) -> ApplicationDetail | None:
        row = (
            models.FacilityApplication.objects.select_related(*DETAIL_RELATIONS)
            .filter(pk=application_id.value)
            .first()
        )
        return to_detail(row) if row else None

    def total_applied_quantity(self, business_id: BusinessId, event_facility_id: EventFacilityId) -> int:
        rows = models.FacilityApplication.objects.filter(
            business_id=business_id.value,
            event_facility_id=event_facility_id.value,
            status__in=QUOTA_HOLDING,
        )
        return rows.aggregate(total=Coalesce(Sum("quantity"), 0))["total"]

    def has_pending_application(
        self,
        business_id: BusinessId,
        event_facility_id: EventFacilityId,
        exclude: ApplicationId | None = None,
    ) -> bool:
        rows = models.FacilityApplication.objects.filter(
            business_id=business_id.value,
            event_facility_id=event_facility_id.value,
            status=PENDING,
        )
        if exclude is not None:
            rows = rows.exclude(pk=exclude.value)
        return rows.exists()

    def add_applications(self, drafts: list[ApplicationDraft]) -> list[FacilityApplication]:
        try:
            with transaction.atomic():
                rows = [
                    models.FacilityApplication.objects.create(
                        business_id=draft.business_id.value,
                        event_facility_id=draft.event_facility_id.value,
                        quantity=draft.quantity.value,
                        status=PENDING,
                    )
                    for draft in drafts
                ]
        except IntegrityError as exc:
            raise DuplicatePendingApplicationError(self._conflicting_facility_name(drafts)) from exc
        return [to_application(row) for row in rows]

    def save_application(self, application: FacilityApplication) -> None:
        models.FacilityApplication.objects.filter(pk=application.id.value).update(
            status=application.status.value,
            rejection_reason=application.rejection_reason,
        )

    def list_pending_for_event_facility(self, event_facility_id: EventFacilityId) -> list[FacilityApplication]:
        rows = models.FacilityApplication.objects.filter(
            event_facility_id=event_facility_id.value, status=PENDING
        ).order_by("created_at")
        return [to_application(row) for row in rows]

    def list_pending_for_owner(self, owner_id: OwnerId) -> list[FacilityApplication]:
        rows = models.FacilityApplication.objects.filter(
            business__owner_id=owner_id.value, status=PENDING
        ).order_by("created_at")
        return [to_application(row) for row in rows]

    def list_details_for_event(
        self,
        event_id: EventId,
        status: ApplicationStatus | None = None,
        search: str | None = None,
        sort: SortOrder = SortOrder.LATEST,
    ) -> list[ApplicationDetail]:
        rows = models.FacilityApplication.objects.select_related(*DETAIL_RELATIONS).filter(
            event_facility__event_id=event_id.value
        )
        if status is not None:
            rows = rows.filter(status=status.value)
        if search and search.strip():
            term = search.strip()
            rows = rows.filter(Q(business__name__icontains=term) | Q(business__owner__name__icontains=term))
        if sort is SortOrder.OLDEST:
            rows = rows.order_by("created_at", "id")
        else:
            rows = rows.order_by("-created_at", "-id")
        return [to_detail(row) for row in rows]

    def list_details_for_owner(self, owner_id: OwnerId) -> list[ApplicationDetail]:
        rows = (
            models.FacilityApplication.objects.select_related(*DETAIL_RELATIONS)
            .filter(business__owner_id=owner_id.value)
            .order_by("-created_at", "-id")
        )
        return [to_detail(row) for row in rows]

    def _conflicting_facility_name(self, drafts: list[ApplicationDraft]) -> str:
        for draft in drafts:
            if self.has_pending_application(draft.business_id, draft.event_facility_id):
                return models.Facility.objects.filter(
                    assignments__pk=draft.event_facility_id.value
                ).values_list("name", flat=True).first() or "selected facility"
        return "selected facility"


class DjangoPaymentStore(PaymentStore):
    """Django ORM-backed payment store."""

    def get_for_application(self, application_id: ApplicationId) -> Payment | None:
        row = models.Payment.objects.filter(application_id=application_id.value).first()
        return to_payment(row) if row else None

    def add(self, application_id: ApplicationId, amount: Money) -> Payment:
        row = models.Payment.objects.create(
            application_id=application_id.value,
            amount=amount.amount,
            status=PaymentStatus.UNPAID.value,
        )
        return to_payment(row)

    def delete(self, payment_id: PaymentId) -> None:
        models.Payment.objects.filter(pk=payment_id.value).delete()
