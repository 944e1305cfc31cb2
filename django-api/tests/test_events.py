"""Integration tests for event summaries, facility offers and status refresh."""

from datetime import date
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest
from django.core.management import call_command

from rentals import models
from rentals.domain import ApplicationStatus, EventStatus, OwnerCategory, RecordState
from rentals.domain.errors import EventNotFoundError, NotPermittedError

pytestmark = pytest.mark.django_db


class TestApprovalSummaries:
    def test_counts_by_status(self, events, mpp, make_event, make_event_facility, make_application):
        event = make_event(name="Charity Run")
        booth = make_event_facility(event=event)
        table = make_event_facility(event=event)
        make_application(booth)
        make_application(booth, status=ApplicationStatus.APPROVED)
        make_application(table, status=ApplicationStatus.REJECTED)
        make_application(table, status=ApplicationStatus.REJECTED)

        [summary] = [s for s in events.list_approval_summaries(mpp) if s.event.name == "Charity Run"]

        assert (summary.total, summary.pending, summary.approved, summary.rejected) == (4, 1, 1, 2)

    def test_hides_cancelled_and_deleted_events(self, events, mpp, make_event):
        make_event(name="Visible")
        make_event(name="Called off", status=EventStatus.CANCELLED)
        deleted = make_event(name="Gone")
        models.Event.objects.filter(pk=deleted.pk).update(record_state=RecordState.DELETED.value)

        names = {s.event.name for s in events.list_approval_summaries(mpp)}

        assert names == {"Visible"}

    def test_filters_by_status(self, events, mpp, make_event):
        make_event(name="Soon")
        make_event(name="Now", status=EventStatus.ACTIVE)

        names = [s.event.name for s in events.list_approval_summaries(mpp, EventStatus.ACTIVE)]

        assert names == ["Now"]

    def test_requires_mpp(self, events, as_caller, make_owner):
        with pytest.raises(NotPermittedError):
            events.list_approval_summaries(as_caller(make_owner()))


class TestFacilityOffers:
    def test_price_and_remaining_quota_follow_the_caller(self, events, as_caller, make_owner, make_business,
                                                         make_event, make_event_facility, make_application):
        owner = make_owner(category=OwnerCategory.NON_STUDENT)
        business = make_business(owner=owner)
        event = make_event()
        facility = make_event_facility(event=event, max_per_business=5, non_student_price="35.00")
        make_application(facility, business=business, quantity=2)

        [offer] = events.list_facility_offers(as_caller(owner), str(event.id))

        assert offer.applicable_price.amount == Decimal("35.00")
        assert offer.remaining_quota == 3
        assert offer.has_pending_application is True

    def test_unknown_event(self, events, mpp):
        with pytest.raises(EventNotFoundError):
            events.list_facility_offers(mpp, str(uuid4()))


class TestStatusRefresh:
    @pytest.fixture
    def fair(self, make_event):
        return make_event(start=date(2026, 3, 10), end=date(2026, 3, 12))

    @pytest.mark.parametrize(
        ("today", "expected"),
        [
            (date(2026, 3, 1), EventStatus.UPCOMING),
            (date(2026, 3, 10), EventStatus.ACTIVE),
            (date(2026, 3, 12), EventStatus.ACTIVE),
            (date(2026, 3, 13), EventStatus.COMPLETED),
        ],
    )
    def test_status_follows_dates(self, events, fair, today, expected):
        events.refresh_event_statuses(today)
        fair.refresh_from_db()
        assert fair.status == expected.value

    def test_cancelled_events_are_left_alone(self, events, make_event):
        cancelled = make_event(status=EventStatus.CANCELLED, start=date(2026, 3, 10), end=date(2026, 3, 12))

        assert events.refresh_event_statuses(date(2026, 3, 11)) == 0
        cancelled.refresh_from_db()
        assert cancelled.status == EventStatus.CANCELLED.value

    def test_management_command(self, fair):
        out = StringIO()

        call_command("refresh_event_statuses", "--date", "2026-03-11", stdout=out)

        fair.refresh_from_db()
        assert fair.status == EventStatus.ACTIVE.value
        assert out.getvalue().strip() == "1 event(s) updated"
