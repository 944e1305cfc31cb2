"""Integration tests for facility application submission."""

from uuid import uuid4

import pytest

from rentals import models
from rentals.domain import ApplicationStatus, ApplicationWindow, BusinessStatus
from rentals.domain.errors import (
    ApplicationsClosedError,
    BusinessInactiveError,
    BusinessNotFoundError,
    DuplicatePendingApplicationError,
    EventFacilityNotFoundError,
    InvalidIdError,
    NotPermittedError,
    QuotaExceededError,
)

pytestmark = pytest.mark.django_db


@pytest.fixture
def owner(make_owner):
    return make_owner(name="Farah")


@pytest.fixture
def business(make_business, owner):
    return make_business(owner=owner, name="Farah's Bakes")


@pytest.fixture
def caller(as_caller, owner):
    return as_caller(owner)


class TestSubmit:
    def test_creates_one_pending_application_per_item(self, submissions, caller, business, make_event_facility):
        booth = make_event_facility(name="Booth A")
        table = make_event_facility(name="Table B")

        created = submissions.submit(caller, str(business.id), [(str(booth.id), 2), (str(table.id), 1)])

        assert [(d.event_facility.facility_name, d.application.quantity.value) for d in created] == [
            ("Booth A", 2),
            ("Table B", 1),
        ]
        assert {d.application.status for d in created} == {ApplicationStatus.PENDING}
        assert all(d.payment is None for d in created)
        booth.refresh_from_db()
        assert booth.available_quantity == 10

    def test_inactive_business_is_refused(self, submissions, caller, make_business, owner, make_event_facility):
        blocked = make_business(owner=owner, status=BusinessStatus.BLOCKED)
        with pytest.raises(BusinessInactiveError):
            submissions.submit(caller, str(blocked.id), [(str(make_event_facility().id), 1)])

    def test_someone_elses_business_is_refused(self, submissions, caller, make_business, make_event_facility):
        other = make_business()
        with pytest.raises(NotPermittedError, match="does not belong"):
            submissions.submit(caller, str(other.id), [(str(make_event_facility().id), 1)])

    def test_unknown_business(self, submissions, caller, make_event_facility):
        with pytest.raises(BusinessNotFoundError):
            submissions.submit(caller, str(uuid4()), [(str(make_event_facility().id), 1)])

    def test_unknown_and_malformed_event_facility(self, submissions, caller, business):
        with pytest.raises(EventFacilityNotFoundError):
            submissions.submit(caller, str(business.id), [(str(uuid4()), 1)])
        with pytest.raises(InvalidIdError):
            submissions.submit(caller, str(business.id), [("booth-1", 1)])

    def test_closed_event_is_refused(self, submissions, caller, business, make_event, make_event_facility):
        event = make_event(window=ApplicationWindow.CLOSED, name="Spring Bazaar")
        with pytest.raises(ApplicationsClosedError, match="Spring Bazaar"):
            submissions.submit(caller, str(business.id), [(str(make_event_facility(event=event).id), 1)])

    def test_second_pending_for_same_facility_is_refused(self, submissions, caller, business,
                                                         make_event_facility):
        facility = make_event_facility(name="Booth C")
        submissions.submit(caller, str(business.id), [(str(facility.id), 1)])

        with pytest.raises(DuplicatePendingApplicationError, match="Booth C"):
            submissions.submit(caller, str(business.id), [(str(facility.id), 1)])

    def test_same_facility_twice_in_one_batch_is_refused(self, submissions, caller, business,
                                                         make_event_facility):
        facility = make_event_facility()
        with pytest.raises(DuplicatePendingApplicationError):
            submissions.submit(caller, str(business.id), [(str(facility.id), 1), (str(facility.id), 1)])
        assert not models.FacilityApplication.objects.exists()

    def test_quota_message_names_remaining_units(self, submissions, caller, business, make_event_facility,
                                                 make_application):
        facility = make_event_facility(max_per_business=5, name="Booth D")
        make_application(facility, business=business, quantity=3, status=ApplicationStatus.APPROVED)

        with pytest.raises(QuotaExceededError) as excinfo:
            submissions.submit(caller, str(business.id), [(str(facility.id), 3)])

        assert excinfo.value.message == (
            "Insufficient quota for facility: Booth D. You can only apply for 2 more unit(s)."
        )

    def test_rejected_applications_free_the_allowance(self, submissions, caller, business, make_event_facility,
                                                      make_application):
        facility = make_event_facility(max_per_business=5)
        make_application(facility, business=business, quantity=5, status=ApplicationStatus.REJECTED)

        [created] = submissions.submit(caller, str(business.id), [(str(facility.id), 5)])

        assert created.application.quantity.value == 5

    def test_batch_is_all_or_nothing(self, submissions, caller, business, make_event, make_event_facility):
        open_booth = make_event_facility()
        closed_booth = make_event_facility(event=make_event(window=ApplicationWindow.CLOSED))

        with pytest.raises(ApplicationsClosedError):
            submissions.submit(caller, str(business.id), [(str(open_booth.id), 1), (str(closed_booth.id), 1)])

        assert not models.FacilityApplication.objects.exists()

    def test_empty_batch_is_a_programming_error(self, submissions, caller, business):
        with pytest.raises(ValueError):
            submissions.submit(caller, str(business.id), [])


class TestListForOwner:
    def test_lists_only_own_applications_newest_first(self, submissions, caller, business, make_business, owner,
                                                      make_event_facility, make_application, minutes_ago):
        second_business = make_business(owner=owner)
        older = make_application(make_event_facility(), business=business, created_at=minutes_ago(20))
        newer = make_application(make_event_facility(), business=second_business, created_at=minutes_ago(2))
        make_application(make_event_facility())

        listed = submissions.list_for_owner(caller)

        assert [d.application.id.value for d in listed] == [newer.id, older.id]
