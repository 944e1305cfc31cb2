"""Django signals reacting to owner account changes."""

import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from rentals import wiring
from rentals.domain import OwnerStatus
from rentals.models import Owner

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Owner)
def reject_pending_applications_of_blocked_owner(sender, instance, created, **kwargs):
    """Reject an owner's PENDING applications once the account is blocked."""
    if created or instance.status != OwnerStatus.BLOCKED.value:
        return
    rejected = wiring.approval_service().auto_reject_for_blocked_owner(str(instance.id))
    if rejected:
        logger.info(f"Owner {instance.id} blocked; {rejected} pending application(s) rejected")
