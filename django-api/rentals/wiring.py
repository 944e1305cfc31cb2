"""Builds services on top of the Django ORM stores."""

from rentals.services.approval_service import ApprovalService
from rentals.services.event_service import EventService
from rentals.services.submission_service import SubmissionService
from rentals.stores.django_store import DjangoApplicationStore, DjangoCatalogStore, DjangoPaymentStore


def approval_service() -> ApprovalService:
    return ApprovalService(DjangoCatalogStore(), DjangoApplicationStore(), DjangoPaymentStore())


def submission_service() -> SubmissionService:
    return SubmissionService(DjangoCatalogStore(), DjangoApplicationStore())


def event_service() -> EventService:
    return EventService(DjangoCatalogStore(), DjangoApplicationStore())
