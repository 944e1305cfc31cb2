from django.urls import path

from rentals.handlers import (
    ApplicationListView,
    ApproveApplicationView,
    BulkApproveView,
    BulkRejectView,
    BulkRevertView,
    EventApplicationListView,
    EventSummaryListView,
    FacilityOfferListView,
    PaymentStatusView,
    RejectApplicationView,
    RevertApplicationView,
)

urlpatterns = [
    path("applications", ApplicationListView.as_view(), name="application-list"),
    path(
        "events/<str:event_id>/facilities",
        FacilityOfferListView.as_view(),
        name="facility-offer-list",
    ),
    path("approvals/events", EventSummaryListView.as_view(), name="approval-event-list"),
    path(
        "approvals/events/<str:event_id>/applications",
        EventApplicationListView.as_view(),
        name="approval-application-list",
    ),
    path("approvals/bulk-approve", BulkApproveView.as_view(), name="approval-bulk-approve"),
    path("approvals/bulk-reject", BulkRejectView.as_view(), name="approval-bulk-reject"),
    path("approvals/bulk-revert", BulkRevertView.as_view(), name="approval-bulk-revert"),
    path(
        "approvals/<str:application_id>/approve",
        ApproveApplicationView.as_view(),
        name="approval-approve",
    ),
    path(
        "approvals/<str:application_id>/reject",
        RejectApplicationView.as_view(),
        name="approval-reject",
    ),
    path(
        "approvals/<str:application_id>/revert",
        RevertApplicationView.as_view(),
        name="approval-revert",
    ),
    path(
        "approvals/<str:application_id>/payment-status",
        PaymentStatusView.as_view(),
        name="approval-payment-status",
    ),
]
