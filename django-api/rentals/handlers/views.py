"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to the exception handler in handlers/errors.py
- Never contain business logic
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from rentals import wiring
from rentals.handlers.permissions import IsBusinessOwner, IsMPP, caller_for
from rentals.handlers.serializers import (
    ApplicationDetailSerializer,
    ApplicationQuerySerializer,
    BulkActionSerializer,
    BulkResultSerializer,
    EventApprovalSummarySerializer,
    EventQuerySerializer,
    FacilityOfferSerializer,
    RejectApplicationSerializer,
    SubmitApplicationsSerializer,
)


class BusinessOwnerView(APIView):
    permission_classes = [IsAuthenticated, IsBusinessOwner]


class MPPView(APIView):
    permission_classes = [IsAuthenticated, IsMPP]


class ApplicationListView(BusinessOwnerView):
    """Handler for GET and POST /api/applications"""

    def get(self, request: Request) -> Response:
        details = wiring.submission_service().list_for_owner(caller_for(request))
        return Response(ApplicationDetailSerializer(details, many=True).data)

    def post(self, request: Request) -> Response:
        payload = SubmitApplicationsSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        items = [(item["event_facility_id"], item["quantity"]) for item in payload.validated_data["facilities"]]
        details = wiring.submission_service().submit(
            caller_for(request), payload.validated_data["business_id"], items
        )
        return Response(ApplicationDetailSerializer(details, many=True).data, status=status.HTTP_201_CREATED)


class FacilityOfferListView(BusinessOwnerView):
    """Handler for GET /api/events/{event_id}/facilities"""

    def get(self, request: Request, event_id: str) -> Response:
        offers = wiring.event_service().list_facility_offers(caller_for(request), event_id)
        return Response(FacilityOfferSerializer(offers, many=True).data)


class EventSummaryListView(MPPView):
    """Handler for GET /api/approvals/events"""

    def get(self, request: Request) -> Response:
        query = EventQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        summaries = wiring.event_service().list_approval_summaries(
            caller_for(request), query.validated_data["status"]
        )
        return Response(EventApprovalSummarySerializer(summaries, many=True).data)


class EventApplicationListView(MPPView):
    """Handler for GET /api/approvals/events/{event_id}/applications"""

    def get(self, request: Request, event_id: str) -> Response:
        query = ApplicationQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        details = wiring.approval_service().get_applications_by_event(
            event_id,
            caller_for(request),
            status=query.validated_data["status"],
            search=query.validated_data["search"],
            sort=query.validated_data["sort"],
        )
        return Response(ApplicationDetailSerializer(details, many=True).data)


class ApproveApplicationView(MPPView):
    """Handler for PATCH /api/approvals/{application_id}/approve"""

    def patch(self, request: Request, application_id: str) -> Response:
        detail = wiring.approval_service().approve(application_id, caller_for(request))
        return Response(ApplicationDetailSerializer(detail).data)


class RejectApplicationView(MPPView):
    """Handler for PATCH /api/approvals/{application_id}/reject"""

    def patch(self, request: Request, application_id: str) -> Response:
        payload = RejectApplicationSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        detail = wiring.approval_service().reject(
            application_id, caller_for(request), payload.validated_data.get("rejection_reason")
        )
        return Response(ApplicationDetailSerializer(detail).data)


class RevertApplicationView(MPPView):
    """Handler for PATCH /api/approvals/{application_id}/revert"""

    def patch(self, request: Request, application_id: str) -> Response:
        detail = wiring.approval_service().revert(application_id, caller_for(request))
        return Response(ApplicationDetailSerializer(detail).data)


class PaymentStatusView(MPPView):
    """Handler for GET /api/approvals/{application_id}/payment-status"""

    def get(self, request: Request, application_id: str) -> Response:
        has_paid = wiring.approval_service().has_been_paid(application_id, caller_for(request))
        return Response({"has_paid": has_paid})


class BulkActionView(MPPView):
    """Base handler for POST /api/approvals/bulk-{action}"""

    verb = ""

    def post(self, request: Request) -> Response:
        payload = BulkActionSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        ids = payload.validated_data["application_ids"]
        service = wiring.approval_service()
        actor = caller_for(request)
        if self.verb == "approve":
            result = service.bulk_approve(ids, actor)
        elif self.verb == "reject":
            result = service.bulk_reject(ids, actor, payload.validated_data.get("rejection_reason"))
        else:
            result = service.bulk_revert(ids, actor)
        return Response(BulkResultSerializer(result).data)


class BulkApproveView(BulkActionView):
    verb = "approve"


class BulkRejectView(BulkActionView):
    verb = "reject"


class BulkRevertView(BulkActionView):
    verb = "revert"
