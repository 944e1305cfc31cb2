from rentals.domain.models import (
    ApplicationDetail,
    ApplicationDraft,
    Business,
    BulkFailure,
    BulkResult,
    Caller,
    Event,
    EventApprovalSummary,
    EventFacility,
    FacilityApplication,
    FacilityOffer,
    Owner,
    Payment,
)
from rentals.domain.statuses import (
    ApplicationStatus,
    ApplicationWindow,
    BusinessStatus,
    EventStatus,
    OwnerCategory,
    OwnerStatus,
    PaymentStatus,
    RecordState,
    SortOrder,
)
from rentals.domain.value_objects import (
    ApplicationId,
    BusinessId,
    Capacity,
    EventFacilityId,
    EventId,
    FacilityId,
    Money,
    OwnerId,
    PaymentId,
    Quantity,
)

__all__ = [
    "ApplicationDetail",
    "ApplicationDraft",
    "Business",
    "BulkFailure",
    "BulkResult",
    "Caller",
    "Event",
    "EventApprovalSummary",
    "EventFacility",
    "FacilityApplication",
    "FacilityOffer",
    "Owner",
    "Payment",
    "ApplicationStatus",
    "ApplicationWindow",
    "BusinessStatus",
    "EventStatus",
    "OwnerCategory",
    "OwnerStatus",
    "PaymentStatus",
    "RecordState",
    "SortOrder",
    "ApplicationId",
    "BusinessId",
    "Capacity",
    "EventFacilityId",
    "EventId",
    "FacilityId",
    "Money",
    "OwnerId",
    "PaymentId",
    "Quantity",
]
