"""Closed enumerations for every status field in the rentals domain."""

from enum import Enum


class ApplicationStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"
    FAILED = "FAILED"


class OwnerCategory(Enum):
    MPP = "MPP"
    STUDENT = "STUDENT"
    NON_STUDENT = "NON_STUDENT"


class OwnerStatus(Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"


class BusinessStatus(Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"
    INACTIVE = "INACTIVE"


class ApplicationWindow(Enum):
    """Whether an event is accepting new facility applications."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class EventStatus(Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RecordState(Enum):
    """Lifecycle of a catalog record. DELETED records are hidden from every query."""

    LIVE = "LIVE"
    DELETED = "DELETED"


class SortOrder(Enum):
    LATEST = "latest"
    OLDEST = "oldest"


def choices_for(enum_cls: type[Enum]) -> list[tuple[str, str]]:
    """Django `choices` for a domain enum."""
    return [(member.value, member.name.replace("_", " ").title()) for member in enum_cls]
