"""Serializers for transforming domain models to API responses.

Input serializers only check request shape. Business rules live in services.
"""

from rest_framework import serializers

from rentals.domain import ApplicationStatus, EventStatus, SortOrder


class EnumValueField(serializers.Field):
    """Renders a domain Enum member as its value."""

    def to_representation(self, value):
        return value.value


class PaymentSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    amount = serializers.DecimalField(source="amount.amount", max_digits=12, decimal_places=2)
    status = EnumValueField()
    created_at = serializers.DateTimeField()


class ApplicationDetailSerializer(serializers.Serializer):
    """Serializer for ApplicationDetail domain model."""

    id = serializers.UUIDField(source="application.id.value")
    quantity = serializers.IntegerField(source="application.quantity.value")
    status = EnumValueField(source="application.status")
    created_at = serializers.DateTimeField(source="application.created_at")
    rejection_reason = serializers.CharField(source="application.rejection_reason", allow_null=True)

    business_id = serializers.UUIDField(source="business.id.value")
    business_name = serializers.CharField(source="business.name")
    business_category = serializers.CharField(source="business.category")
    business_status = EnumValueField(source="business.status")

    owner_id = serializers.UUIDField(source="owner.id.value")
    owner_name = serializers.CharField(source="owner.name")
    owner_email = serializers.EmailField(source="owner.email")
    owner_category = EnumValueField(source="owner.category")

    event_id = serializers.UUIDField(source="event.id.value")
    event_name = serializers.CharField(source="event.name")
    event_venue = serializers.CharField(source="event.venue")
    event_start_date = serializers.DateField(source="event.start_date")
    event_end_date = serializers.DateField(source="event.end_date")
    event_status = EnumValueField(source="event.status")

    event_facility_id = serializers.UUIDField(source="event_facility.id.value")
    facility_name = serializers.CharField(source="event_facility.facility_name")

    payment = PaymentSerializer(allow_null=True)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    venue = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    application_window = EnumValueField()
    status = EnumValueField()


class EventApprovalSummarySerializer(serializers.Serializer):
    event = EventSerializer()
    total_applications = serializers.IntegerField(source="total")
    pending_count = serializers.IntegerField(source="pending")
    approved_count = serializers.IntegerField(source="approved")
    rejected_count = serializers.IntegerField(source="rejected")


class FacilityOfferSerializer(serializers.Serializer):
    """Serializer for FacilityOffer domain model."""

    event_facility_id = serializers.UUIDField(source="event_facility.id.value")
    facility_id = serializers.UUIDField(source="event_facility.facility_id.value")
    facility_name = serializers.CharField(source="event_facility.facility_name")
    available_quantity = serializers.IntegerField(source="event_facility.available.value")
    max_per_business = serializers.IntegerField(source="event_facility.max_per_business")
    student_price = serializers.DecimalField(
        source="event_facility.student_price.amount", max_digits=12, decimal_places=2
    )
    non_student_price = serializers.DecimalField(
        source="event_facility.non_student_price.amount", max_digits=12, decimal_places=2
    )
    applicable_price = serializers.DecimalField(source="applicable_price.amount", max_digits=12, decimal_places=2)
    remaining_quota = serializers.IntegerField()
    has_pending_application = serializers.BooleanField()


class BulkFailureSerializer(serializers.Serializer):
    application_id = serializers.CharField()
    code = EnumValueField()
    message = serializers.CharField()


class BulkResultSerializer(serializers.Serializer):
    succeeded = ApplicationDetailSerializer(many=True)
    failed = BulkFailureSerializer(many=True)


class ApplicationItemSerializer(serializers.Serializer):
    event_facility_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)


class SubmitApplicationsSerializer(serializers.Serializer):
    business_id = serializers.CharField()
    facilities = ApplicationItemSerializer(many=True, allow_empty=False)


class RejectApplicationSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)


class BulkActionSerializer(serializers.Serializer):
    application_ids = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    rejection_reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)


class ApplicationQuerySerializer(serializers.Serializer):
    """Query parameters of the approval page listing."""

    status = serializers.CharField(required=False, default="all")
    search = serializers.CharField(required=False, allow_blank=True, default="")
    sort = serializers.ChoiceField(
        choices=[order.value for order in SortOrder], required=False, default=SortOrder.LATEST.value
    )

    def validate_status(self, value: str) -> ApplicationStatus | None:
        if value.lower() == "all":
            return None
        try:
            return ApplicationStatus(value.upper())
        except ValueError as exc:
            raise serializers.ValidationError(f"Unknown application status: {value}") from exc

    def validate_sort(self, value: str) -> SortOrder:
        return SortOrder(value)


class EventQuerySerializer(serializers.Serializer):
    status = serializers.CharField(required=False, default="all")

    def validate_status(self, value: str) -> EventStatus | None:
        if value.lower() == "all":
            return None
        try:
            return EventStatus(value.lower())
        except ValueError as exc:
            raise serializers.ValidationError(f"Unknown event status: {value}") from exc
