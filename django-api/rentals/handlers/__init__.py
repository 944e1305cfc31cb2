from rentals.handlers.views import (
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

__all__ = [
    "ApplicationListView",
    "ApproveApplicationView",
    "BulkApproveView",
    "BulkRejectView",
    "BulkRevertView",
    "EventApplicationListView",
    "EventSummaryListView",
    "FacilityOfferListView",
    "PaymentStatusView",
    "RejectApplicationView",
    "RevertApplicationView",
]
