"""
Seller payout views: balance, payout requests and payout history.
"""

import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from authentication.permissions import IsSellerUser
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from payment_system.api.serializers import (
    BalanceResponseSerializer,
    PaginatedPayoutsResponseSerializer,
    PayoutRequestCreateSerializer,
    PayoutRequestSerializer,
    PayoutSerializer,
)
from payment_system.domain.services.payout_request_service import minimum_payout_amount
from utils.service_base import error_response


logger = logging.getLogger(__name__)


def _page_params(request):
    try:
        return int(request.query_params.get("page", 1)), int(request.query_params.get("limit", 20))
    except ValueError:
        return None


@extend_schema(
    operation_id="payout_balance",
    summary="Seller balance",
    responses={200: BalanceResponseSerializer, 404: ErrorResponseSerializer},
    tags=["Payouts"],
)
@api_view(["GET"])
@permission_classes([IsSellerUser])
def seller_balance(request):
    result = container.payout_request_service().get_seller_balance(request.user)
    if not result.ok:
        return error_response(result)
    return Response(
        {
            "balance": str(result.value["balance"]),
            "last_payout_request_date": result.value["last_payout_request_date"],
            "currency": settings.PAYOUT_CURRENCY,
            "minimum_payout_amount": str(minimum_payout_amount()),
        },
        status=status.HTTP_200_OK,
    )


@extend_schema(
    operation_id="payout_requests",
    summary="List or create payout requests",
    description=(
        "GET lists the caller's payout requests. POST requests a payout; the seller must be approved, "
        "outside the cooldown, at or above the minimum and within their balance."
    ),
    request=PayoutRequestCreateSerializer,
    responses={
        200: PayoutRequestSerializer(many=True),
        201: PayoutRequestSerializer,
        400: OpenApiResponse(response=ErrorResponseSerializer, description="Payout rules not met"),
        404: OpenApiResponse(response=ErrorResponseSerializer, description="No seller profile"),
    },
    tags=["Payouts"],
)
@api_view(["GET", "POST"])
@permission_classes([IsSellerUser])
def payout_requests(request):
    service = container.payout_request_service()

    if request.method == "GET":
        result = service.get_payout_requests_by_user(request.user)
        return Response(PayoutRequestSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    serializer = PayoutRequestCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = service.create_payout_request(request.user, serializer.validated_data["total_amount"])
    if not result.ok:
        return error_response(result)
    return Response(PayoutRequestSerializer(result.value).data, status=status.HTTP_201_CREATED)


@extend_schema(
    operation_id="payout_history",
    summary="Payouts sent to the caller",
    parameters=[
        OpenApiParameter(name="page", type=int, description="Page number"),
        OpenApiParameter(name="limit", type=int, description="Items per page (max 100)"),
    ],
    responses={200: PaginatedPayoutsResponseSerializer},
    tags=["Payouts"],
)
@api_view(["GET"])
@permission_classes([IsSellerUser])
def payout_history(request):
    params = _page_params(request)
    if params is None:
        return Response({"detail": "page and limit must be integers"}, status=status.HTTP_400_BAD_REQUEST)

    result = container.payout_service().get_payout_history(request.user, *params)
    return Response(
        {"data": PayoutSerializer(result.value["data"], many=True).data, "meta": result.value["meta"]},
        status=status.HTTP_200_OK,
    )
