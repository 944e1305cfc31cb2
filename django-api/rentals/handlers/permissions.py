"""Caller resolution and role checks for the rental API."""

from rest_framework.permissions import BasePermission
from rest_framework.request import Request

from rentals import models
from rentals.domain import Caller, OwnerCategory, OwnerId, OwnerStatus


def owner_for(request: Request) -> models.Owner | None:
    user = request.user
    if not user or not user.is_authenticated:
        return None
    try:
        return user.owner
    except models.Owner.DoesNotExist:
        return None


def caller_for(request: Request) -> Caller:
    """Build the explicit caller identity handed to services."""
    owner = owner_for(request)
    return Caller(owner_id=OwnerId(owner.id), category=OwnerCategory(owner.category))


class IsBusinessOwner(BasePermission):
    """Active student or non-student owners."""

    message = "Only active business owners can use this endpoint."

    def has_permission(self, request, view) -> bool:
        owner = owner_for(request)
        return (
            owner is not None
            and owner.status == OwnerStatus.ACTIVE.value
            and owner.category != OwnerCategory.MPP.value
        )


class IsMPP(BasePermission):
    message = "Only MPP administrators can use this endpoint."

    def has_permission(self, request, view) -> bool:
        owner = owner_for(request)
        return owner is not None and owner.category == OwnerCategory.MPP.value
