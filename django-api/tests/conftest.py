"""Pytest configuration and shared fixtures."""

import itertools
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from rentals import models, wiring
from rentals.domain import (
    ApplicationStatus,
    ApplicationWindow,
    BusinessStatus,
    Caller,
    EventStatus,
    OwnerCategory,
    OwnerId,
    OwnerStatus,
)

_sequence = itertools.count(1)


def caller_of(owner: models.Owner) -> Caller:
    return Caller(owner_id=OwnerId(owner.id), category=OwnerCategory(owner.category))


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def make_owner(db):
    def make(category=OwnerCategory.STUDENT, status=OwnerStatus.ACTIVE, name=None, with_user=False):
        n = next(_sequence)
        owner = models.Owner.objects.create(
            name=name or f"Owner {n}",
            email=f"owner{n}@example.com",
            category=category.value,
            status=status.value,
        )
        if with_user:
            owner.user = get_user_model().objects.create_user(username=f"user{n}", password="secret")
            owner.save(update_fields=["user"])
        return owner

    return make


@pytest.fixture
def make_business(make_owner):
    def make(owner=None, status=BusinessStatus.ACTIVE, name=None):
        n = next(_sequence)
        return models.Business.objects.create(
            owner=owner or make_owner(),
            name=name or f"Business {n}",
            category="Food & Beverage",
            status=status.value,
        )

    return make


@pytest.fixture
def make_event(db):
    def make(window=ApplicationWindow.OPEN, status=EventStatus.UPCOMING, name=None, start=None, end=None):
        n = next(_sequence)
        start = start or date.today() + timedelta(days=7)
        return models.Event.objects.create(
            name=name or f"Campus Fair {n}",
            venue="Main Hall",
            start_date=start,
            end_date=end or start + timedelta(days=2),
            application_window=window.value,
            status=status.value,
        )

    return make


@pytest.fixture
def make_event_facility(make_event):
    def make(
        event=None,
        available=10,
        max_per_business=5,
        student_price="20.00",
        non_student_price="35.00",
        name=None,
    ):
        n = next(_sequence)
        facility = models.Facility.objects.create(
            name=name or f"Booth {n}",
            size="3x3",
            type="booth",
            description="Standard vendor booth",
        )
        return models.EventFacility.objects.create(
            event=event or make_event(),
            facility=facility,
            available_quantity=available,
            max_per_business=max_per_business,
            student_price=Decimal(student_price),
            non_student_price=Decimal(non_student_price),
        )

    return make


@pytest.fixture
def make_application(make_business):
    def make(event_facility, business=None, quantity=1, status=ApplicationStatus.PENDING, created_at=None):
        application = models.FacilityApplication.objects.create(
            business=business or make_business(),
            event_facility=event_facility,
            quantity=quantity,
            status=status.value,
        )
        if created_at is not None:
            models.FacilityApplication.objects.filter(pk=application.pk).update(created_at=created_at)
            application.refresh_from_db()
        return application

    return make


@pytest.fixture
def mpp_owner(make_owner):
    return make_owner(category=OwnerCategory.MPP, name="MPP Admin", with_user=True)


@pytest.fixture
def mpp(mpp_owner) -> Caller:
    return caller_of(mpp_owner)


@pytest.fixture
def approvals():
    return wiring.approval_service()


@pytest.fixture
def submissions():
    return wiring.submission_service()


@pytest.fixture
def events():
    return wiring.event_service()


@pytest.fixture
def minutes_ago():
    now = timezone.now()
    return lambda minutes: now - timedelta(minutes=minutes)


@pytest.fixture
def as_caller():
    return caller_of
