"""Creates and removes payments in step with application approval."""

import logging

from rentals.domain import ApplicationId, EventFacility, FacilityApplication, OwnerCategory, Payment
from rentals.stores.interfaces import PaymentStore

logger = logging.getLogger(__name__)


class PaymentBinder:
    def __init__(self, payments: PaymentStore) -> None:
        self._payments = payments

    def create_if_needed(
        self,
        application: FacilityApplication,
        event_facility: EventFacility,
        owner_category: OwnerCategory,
    ) -> Payment | None:
        """Create an UNPAID payment priced by the owner's category.

        Free facilities produce no payment and return None. An application
        that already has a payment, such as a PAID one kept through a revert,
        gets that payment back instead of a second one.
        """
        existing = self._payments.get_for_application(application.id)
        if existing is not None:
            logger.info(f"Application {application.id} already has payment {existing.id} ({existing.status.value})")
            return existing
        amount = event_facility.unit_price_for(owner_category).times(application.quantity.value)
        if amount.is_zero:
            return None
        payment = self._payments.add(application.id, amount)
        logger.info(f"Created payment {payment.id} of {amount} for application {application.id}")
        return payment

    def remove_if_unpaid(self, application_id: ApplicationId) -> bool:
        """Delete the application's payment if it is still UNPAID.

        Paid or failed payments are left in place. Returns True when a
        payment was deleted.
        """
        payment = self._payments.get_for_application(application_id)
        if payment is None or not payment.is_unpaid:
            return False
        self._payments.delete(payment.id)
        logger.info(f"Deleted unpaid payment {payment.id} for application {application_id}")
        return True
