"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q

from rentals.domain.statuses import (
    ApplicationStatus,
    ApplicationWindow,
    BusinessStatus,
    EventStatus,
    OwnerCategory,
    OwnerStatus,
    PaymentStatus,
    RecordState,
    choices_for,
)


class LiveManager(models.Manager):
    """Manager hiding records whose lifecycle state is DELETED."""

    def get_queryset(self):
        return super().get_queryset().filter(record_state=RecordState.LIVE.value)


class Owner(models.Model):
    """Persistence model for business owners and MPP administrators."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="owner",
    )
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    category = models.CharField(max_length=50, choices=choices_for(OwnerCategory))
    status = models.CharField(
        max_length=50, choices=choices_for(OwnerStatus), default=OwnerStatus.PENDING.value
    )
    registered_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class Business(models.Model):
    """Persistence model for businesses registered by owners."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(Owner, on_delete=models.CASCADE, related_name="businesses")
    name = models.CharField(max_length=255, unique=True)
    category = models.CharField(max_length=255)
    description = models.CharField(max_length=255, blank=True)
    status = models.CharField(
        max_length=50, choices=choices_for(BusinessStatus), default=BusinessStatus.ACTIVE.value
    )
    registered_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "businesses"
        indexes = [
            models.Index(fields=["owner"], name="business_owner_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    venue = models.CharField(max_length=200)
    start_date = models.DateField()
    end_date = models.DateField()
    application_window = models.CharField(
        max_length=20,
        choices=choices_for(ApplicationWindow),
        default=ApplicationWindow.OPEN.value,
    )
    status = models.CharField(
        max_length=20, choices=choices_for(EventStatus), default=EventStatus.UPCOMING.value
    )
    record_state = models.CharField(
        max_length=20, choices=choices_for(RecordState), default=RecordState.LIVE.value
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = models.Manager()
    live = LiveManager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="event_created_at_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Facility(models.Model):
    """Persistence model for the facility catalog (tents, booths, tables...)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    size = models.CharField(max_length=50)
    type = models.CharField(max_length=50)
    description = models.CharField(max_length=500)
    record_state = models.CharField(
        max_length=20, choices=choices_for(RecordState), default=RecordState.LIVE.value
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = models.Manager()
    live = LiveManager()

    class Meta:
        verbose_name_plural = "facilities"

    def __str__(self) -> str:
        return self.name


class EventFacility(models.Model):
    """Persistence model for a facility assigned to an event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="facilities")
    facility = models.ForeignKey(Facility, on_delete=models.PROTECT, related_name="assignments")
    available_quantity = models.PositiveIntegerField()
    max_per_business = models.PositiveIntegerField()
    student_price = models.DecimalField(max_digits=12, decimal_places=2)
    non_student_price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        verbose_name_plural = "event facilities"
        constraints = [
            models.UniqueConstraint(fields=["event", "facility"], name="unique_facility_per_event"),
            models.CheckConstraint(
                condition=Q(available_quantity__gte=0), name="available_quantity_not_negative"
            ),
            models.CheckConstraint(condition=Q(max_per_business__gte=1), name="max_per_business_positive"),
            models.CheckConstraint(
                condition=Q(student_price__gte=0) & Q(non_student_price__gte=0),
                name="prices_not_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.facility.name} @ {self.event.name}"


class FacilityApplication(models.Model):
    """Persistence model for facility applications."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="applications")
    event_facility = models.ForeignKey(
        EventFacility, on_delete=models.PROTECT, related_name="applications"
    )
    quantity = models.PositiveIntegerField()
    status = models.CharField(
        max_length=50,
        choices=choices_for(ApplicationStatus),
        default=ApplicationStatus.PENDING.value,
    )
    rejection_reason = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gte=1), name="application_quantity_positive"),
            models.UniqueConstraint(
                fields=["business", "event_facility"],
                condition=Q(status=ApplicationStatus.PENDING.value),
                name="one_pending_application_per_facility",
            ),
        ]
        indexes = [
            models.Index(fields=["event_facility", "status"], name="application_ef_status_idx"),
            models.Index(
                fields=["business", "event_facility", "status"], name="application_pair_status_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.business} x{self.quantity} ({self.status})"


class Payment(models.Model):
    """Persistence model for the payment owed on an approved application."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    application = models.OneToOneField(
        FacilityApplication, on_delete=models.PROTECT, related_name="payment"
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(
        max_length=50, choices=choices_for(PaymentStatus), default=PaymentStatus.UNPAID.value
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.amount} ({self.status})"
