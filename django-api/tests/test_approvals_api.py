"""API tests for the MPP approval endpoints."""

from uuid import uuid4

import pytest
from django.urls import reverse

from rentals import models
from rentals.domain import ApplicationStatus, EventStatus, PaymentStatus

pytestmark = pytest.mark.django_db


@pytest.fixture
def mpp_client(api_client, mpp_owner):
    api_client.force_authenticate(mpp_owner.user)
    return api_client


class TestApproveEndpoint:
    def test_approve_returns_detail_with_payment(self, mpp_client, make_event_facility, make_application):
        facility = make_event_facility(available=10, student_price="20.00")
        application = make_application(facility, quantity=4)

        response = mpp_client.patch(reverse("approval-approve", args=[application.id]))

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "APPROVED"
        assert body["payment"]["amount"] == "80.00"
        assert body["payment"]["status"] == "UNPAID"
        facility.refresh_from_db()
        assert facility.available_quantity == 6

    def test_unknown_application_is_not_found(self, mpp_client):
        response = mpp_client.patch(reverse("approval-approve", args=[uuid4()]))
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "APPLICATION_NOT_FOUND"

    def test_malformed_id_is_a_bad_request(self, mpp_client):
        response = mpp_client.patch(reverse("approval-approve", args=["12"]))
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ID"

    def test_approving_twice_is_a_bad_request(self, mpp_client, make_event_facility, make_application):
        application = make_application(make_event_facility(), status=ApplicationStatus.APPROVED)

        response = mpp_client.patch(reverse("approval-approve", args=[application.id]))

        assert response.status_code == 400
        assert response.json() == {
            "error": {
                "code": "INVALID_STATE_TRANSITION",
                "message": "Only PENDING applications can be approved",
            }
        }

    def test_insufficient_stock_message(self, mpp_client, make_event_facility, make_application):
        application = make_application(make_event_facility(available=1), quantity=2)

        response = mpp_client.patch(reverse("approval-approve", args=[application.id]))

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Insufficient facility quota. Available: 1, Requested: 2"


class TestRejectAndRevertEndpoints:
    def test_reject_with_reason(self, mpp_client, make_event_facility, make_application):
        application = make_application(make_event_facility())

        response = mpp_client.patch(
            reverse("approval-reject", args=[application.id]),
            {"rejection_reason": "Incomplete documents"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "REJECTED"
        assert response.json()["rejection_reason"] == "Incomplete documents"

    def test_reject_without_body(self, mpp_client, make_event_facility, make_application):
        application = make_application(make_event_facility())
        response = mpp_client.patch(reverse("approval-reject", args=[application.id]), {}, format="json")
        assert response.status_code == 200
        assert response.json()["rejection_reason"] is None

    def test_revert_approved(self, mpp_client, make_event_facility, make_application):
        facility = make_event_facility(available=10)
        application = make_application(facility, quantity=3)
        mpp_client.patch(reverse("approval-approve", args=[application.id]))

        response = mpp_client.patch(reverse("approval-revert", args=[application.id]))

        assert response.status_code == 200
        assert response.json()["status"] == "PENDING"
        assert response.json()["payment"] is None
        facility.refresh_from_db()
        assert facility.available_quantity == 10

    def test_revert_with_newer_pending_is_a_conflict(self, mpp_client, make_business, make_event_facility,
                                                     make_application):
        business = make_business()
        facility = make_event_facility()
        rejected = make_application(facility, business=business, status=ApplicationStatus.REJECTED)
        make_application(facility, business=business)

        response = mpp_client.patch(reverse("approval-revert", args=[rejected.id]))

        assert response.status_code == 409


class TestPaymentStatusEndpoint:
    def test_reports_paid(self, mpp_client, make_event_facility, make_application):
        application = make_application(make_event_facility())
        mpp_client.patch(reverse("approval-approve", args=[application.id]))
        url = reverse("approval-payment-status", args=[application.id])

        assert mpp_client.get(url).json() == {"has_paid": False}
        models.Payment.objects.filter(application=application).update(status=PaymentStatus.PAID.value)
        assert mpp_client.get(url).json() == {"has_paid": True}

    def test_no_payment_means_unpaid(self, mpp_client, make_event_facility, make_application):
        application = make_application(make_event_facility())
        response = mpp_client.get(reverse("approval-payment-status", args=[application.id]))
        assert response.json() == {"has_paid": False}


class TestBulkEndpoints:
    def test_bulk_approve_reports_partial_success(self, mpp_client, make_event_facility, make_application):
        facility = make_event_facility(available=5, max_per_business=10)
        first = make_application(facility, quantity=5)
        second = make_application(facility, quantity=1)
        missing = uuid4()

        response = mpp_client.post(
            reverse("approval-bulk-approve"),
            {"application_ids": [str(first.id), str(second.id), str(missing)]},
            format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body["succeeded"]] == [str(first.id)]
        assert [(item["application_id"], item["code"]) for item in body["failed"]] == [
            (str(second.id), "INVALID_STATE_TRANSITION"),
            (str(missing), "APPLICATION_NOT_FOUND"),
        ]

    def test_bulk_reject_with_reason(self, mpp_client, make_event_facility, make_application):
        facility = make_event_facility()
        ids = [str(make_application(facility).id) for _ in range(2)]

        response = mpp_client.post(
            reverse("approval-bulk-reject"),
            {"application_ids": ids, "rejection_reason": "Venue change"},
            format="json",
        )

        assert response.status_code == 200
        assert [item["rejection_reason"] for item in response.json()["succeeded"]] == ["Venue change"] * 2
        assert response.json()["failed"] == []

    def test_bulk_revert(self, mpp_client, make_event_facility, make_application):
        application = make_application(make_event_facility(), status=ApplicationStatus.REJECTED)

        response = mpp_client.post(
            reverse("approval-bulk-revert"), {"application_ids": [str(application.id)]}, format="json"
        )

        assert [item["status"] for item in response.json()["succeeded"]] == ["PENDING"]

    def test_empty_id_list_is_a_bad_request(self, mpp_client):
        response = mpp_client.post(reverse("approval-bulk-approve"), {"application_ids": []}, format="json")
        assert response.status_code == 400


class TestListingEndpoints:
    def test_event_summaries(self, mpp_client, make_event, make_event_facility, make_application):
        event = make_event(name="Night Market")
        facility = make_event_facility(event=event)
        make_application(facility)
        make_application(facility, status=ApplicationStatus.APPROVED)
        make_event(name="Next Year", status=EventStatus.ACTIVE)

        response = mpp_client.get(reverse("approval-event-list"), {"status": "upcoming"})

        assert response.status_code == 200
        [summary] = response.json()
        assert summary["event"]["name"] == "Night Market"
        assert summary["total_applications"] == 2
        assert summary["pending_count"] == 1
        assert summary["approved_count"] == 1
        assert summary["rejected_count"] == 0

    def test_event_applications_with_query(self, mpp_client, make_business, make_event, make_event_facility,
                                           make_application, minutes_ago):
        event = make_event()
        facility = make_event_facility(event=event)
        older = make_application(facility, business=make_business(name="Roti Canai Co"), created_at=minutes_ago(9))
        newer = make_application(facility, business=make_business(name="Satay Stop"), created_at=minutes_ago(1))
        url = reverse("approval-application-list", args=[event.id])

        assert [a["id"] for a in mpp_client.get(url).json()] == [str(newer.id), str(older.id)]
        assert [a["id"] for a in mpp_client.get(url, {"sort": "oldest"}).json()] == [str(older.id), str(newer.id)]
        assert [a["id"] for a in mpp_client.get(url, {"search": "roti"}).json()] == [str(older.id)]
        assert mpp_client.get(url, {"status": "approved"}).json() == []
        assert len(mpp_client.get(url, {"status": "ALL"}).json()) == 2

    def test_unknown_status_filter(self, mpp_client, make_event):
        url = reverse("approval-application-list", args=[make_event().id])
        assert mpp_client.get(url, {"status": "archived"}).status_code == 400

    def test_unknown_event(self, mpp_client):
        response = mpp_client.get(reverse("approval-application-list", args=[uuid4()]))
        assert response.status_code == 404


class TestAccess:
    def test_business_owner_cannot_approve(self, api_client, make_owner, make_event_facility, make_application):
        owner = make_owner(with_user=True)
        application = make_application(make_event_facility())
        api_client.force_authenticate(owner.user)

        response = api_client.patch(reverse("approval-approve", args=[application.id]))

        assert response.status_code == 403
        application.refresh_from_db()
        assert application.status == ApplicationStatus.PENDING.value
