"""Domain error codes for the rentals module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ID = "INVALID_ID"
    APPLICATION_NOT_FOUND = "APPLICATION_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EVENT_FACILITY_NOT_FOUND = "EVENT_FACILITY_NOT_FOUND"
    BUSINESS_NOT_FOUND = "BUSINESS_NOT_FOUND"
    OWNER_NOT_FOUND = "OWNER_NOT_FOUND"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    DUPLICATE_PENDING_APPLICATION = "DUPLICATE_PENDING_APPLICATION"
    APPLICATIONS_CLOSED = "APPLICATIONS_CLOSED"
    BUSINESS_INACTIVE = "BUSINESS_INACTIVE"
    NOT_PERMITTED = "NOT_PERMITTED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidIdError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, kind: str = "resource") -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {kind} ID format",
        )


class ApplicationNotFoundError(DomainError):
    """Raised when an application is not found."""

    def __init__(self, application_id: object) -> None:
        super().__init__(
            code=ErrorCode.APPLICATION_NOT_FOUND,
            message=f"Application not found with ID: {application_id}",
        )
        self.application_id = application_id


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event not found with ID: {event_id}",
        )
        self.event_id = event_id


class EventFacilityNotFoundError(DomainError):
    """Raised when a facility is not offered at any event under the given ID."""

    def __init__(self, event_facility_id: object) -> None:
        super().__init__(
            code=ErrorCode.EVENT_FACILITY_NOT_FOUND,
            message=f"Event facility not found with ID: {event_facility_id}",
        )
        self.event_facility_id = event_facility_id


class BusinessNotFoundError(DomainError):
    def __init__(self, business_id: object) -> None:
        super().__init__(
            code=ErrorCode.BUSINESS_NOT_FOUND,
            message="Business not found",
        )
        self.business_id = business_id


class OwnerNotFoundError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.OWNER_NOT_FOUND,
            message="Business owner not found",
        )


class InvalidStateTransitionError(DomainError):
    """Raised when an application cannot move from its current status."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_STATE_TRANSITION, message=message)


class QuotaExceededError(DomainError):
    """Raised when a request asks for more units than are left.

    ``remaining`` is the exact number of units still available to the caller,
    either under the per-business allowance or in the facility's stock.
    """

    def __init__(self, message: str, remaining: int, requested: int) -> None:
        super().__init__(code=ErrorCode.QUOTA_EXCEEDED, message=message)
        self.remaining = remaining
        self.requested = requested

    @classmethod
    def for_business(cls, facility_name: str, remaining: int, requested: int) -> "QuotaExceededError":
        return cls(
            message=(
                f"Insufficient quota for facility: {facility_name}. "
                f"You can only apply for {remaining} more unit(s)."
            ),
            remaining=remaining,
            requested=requested,
        )

    @classmethod
    def for_stock(cls, available: int, requested: int) -> "QuotaExceededError":
        return cls(
            message=f"Insufficient facility quota. Available: {available}, Requested: {requested}",
            remaining=available,
            requested=requested,
        )


class DuplicatePendingApplicationError(DomainError):
    """Raised when a business already has an unresolved request for a facility."""

    def __init__(self, facility_name: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_PENDING_APPLICATION,
            message=(
                f"You already have a pending application for facility: {facility_name}. "
                "Please wait for it to be reviewed."
            ),
        )


class ApplicationsClosedError(DomainError):
    def __init__(self, event_name: str) -> None:
        super().__init__(
            code=ErrorCode.APPLICATIONS_CLOSED,
            message=f"Applications are closed for event: {event_name}",
        )


class BusinessInactiveError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.BUSINESS_INACTIVE,
            message="Business is not active",
        )


class NotPermittedError(DomainError):
    """Raised when the caller may not perform an action on a resource."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.NOT_PERMITTED, message=message)
