"""
Admin payout review.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from authentication.api.serializers.seller_serializers import BankAccountSerializer, SellerProfileSerializer
from authentication.permissions import IsAdminUser
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.ordering.api.serializers import OrderSerializer
from payment_system.api.serializers import (
    PaginatedPayoutRequestsResponseSerializer,
    PayoutProcessRequestSerializer,
    PayoutRequestDetailResponseSerializer,
    PayoutRequestSerializer,
    PayoutRequestUpdateSerializer,
    SellerEarningsQuerySerializer,
    SellerEarningsResponseSerializer,
)
from utils.service_base import ErrorCodes, error_response, service_err


logger = logging.getLogger(__name__)

User = get_user_model()


@extend_schema(
    operation_id="admin_payout_requests_list",
    summary="Payout requests (admin)",
    description="Paginated list of every payout request. With approved_only=true, all requests from approved sellers.",
    parameters=[
        OpenApiParameter(name="page", type=int),
        OpenApiParameter(name="limit", type=int),
        OpenApiParameter(name="approved_only", type=bool),
    ],
    responses={200: PaginatedPayoutRequestsResponseSerializer},
    tags=["Payouts Admin"],
)
@api_view(["GET"])
@permission_classes([IsAdminUser])
def admin_payout_requests(request):
    service = container.payout_request_service()

    if request.query_params.get("approved_only", "").lower() == "true":
        result = service.get_all_payout_requests()
        return Response(PayoutRequestSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    try:
        page = int(request.query_params.get("page", 1))
        limit = int(request.query_params.get("limit", 20))
    except ValueError:
        return Response({"detail": "page and limit must be integers"}, status=status.HTTP_400_BAD_REQUEST)

    result = service.get_paginated_payout_requests(page, limit)
    return Response(
        {"data": PayoutRequestSerializer(result.value["data"], many=True).data, "meta": result.value["meta"]},
        status=status.HTTP_200_OK,
    )


@extend_schema(
    operation_id="admin_payout_request_detail",
    summary="Payout request detail, update or delete (admin)",
    request=PayoutRequestUpdateSerializer,
    responses={
        200: PayoutRequestDetailResponseSerializer,
        204: None,
        400: OpenApiResponse(response=ErrorResponseSerializer, description="Request already processed"),
        404: ErrorResponseSerializer,
    },
    tags=["Payouts Admin"],
)
@api_view(["GET", "PATCH", "DELETE"])
@permission_classes([IsAdminUser])
def admin_payout_request_detail(request, payout_request_id):
    service = container.payout_request_service()

    if request.method == "PATCH":
        serializer = PayoutRequestUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = service.update_payout_request(payout_request_id, serializer.validated_data["status"])
        if not result.ok:
            return error_response(result)
        return Response(PayoutRequestSerializer(result.value).data, status=status.HTTP_200_OK)

    if request.method == "DELETE":
        result = service.delete_payout_request(payout_request_id)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    result = service.get_payout_request(payout_request_id)
    if not result.ok:
        return error_response(result)

    detail = result.value
    bank_account = detail["bank_account"]
    return Response(
        {
            "payout_request": PayoutRequestSerializer(detail["payout_request"]).data,
            "seller_profile": SellerProfileSerializer(detail["seller_profile"]).data,
            "bank_account": BankAccountSerializer(bank_account).data if bank_account else None,
            "orders": OrderSerializer(detail["orders"], many=True).data,
        },
        status=status.HTTP_200_OK,
    )


@extend_schema(
    operation_id="admin_payout_request_process",
    summary="Approve or reject a payout request (admin)",
    description="Approval debits the seller balance and queues the transfer once the transaction commits.",
    request=PayoutProcessRequestSerializer,
    responses={
        200: PayoutRequestSerializer,
        400: OpenApiResponse(response=ErrorResponseSerializer, description="Not pending or insufficient balance"),
        404: ErrorResponseSerializer,
    },
    tags=["Payouts Admin"],
)
@api_view(["POST"])
@permission_classes([IsAdminUser])
def admin_process_payout_request(request, payout_request_id):
    serializer = PayoutProcessRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = container.payout_request_service().process_payout_request(
        payout_request_id,
        serializer.validated_data["action"],
        request.user,
        serializer.validated_data.get("note", ""),
    )
    if not result.ok:
        return error_response(result)
    return Response(PayoutRequestSerializer(result.value).data, status=status.HTTP_200_OK)


@extend_schema(
    operation_id="admin_seller_earnings",
    summary="Seller earnings after platform fee (admin)",
    parameters=[
        OpenApiParameter(name="seller_id", type=str, required=True),
        OpenApiParameter(name="start", type=str, required=True, description="ISO datetime"),
        OpenApiParameter(name="end", type=str, required=True, description="ISO datetime"),
    ],
    responses={200: SellerEarningsResponseSerializer, 404: ErrorResponseSerializer},
    tags=["Payouts Admin"],
)
@api_view(["GET"])
@permission_classes([IsAdminUser])
def admin_seller_earnings(request):
    serializer = SellerEarningsQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    params = serializer.validated_data

    seller = User.objects.filter(id=params["seller_id"]).first()
    if seller is None:
        return error_response(service_err(ErrorCodes.NOT_FOUND, "Seller not found"))

    amount = container.payout_service().calculate_payout_amount(seller, params["start"], params["end"])
    return Response(
        {
            "seller_id": str(seller.pk),
            "start": params["start"].isoformat(),
            "end": params["end"].isoformat(),
            "payout_amount": str(amount),
            "platform_fee_percent": settings.PLATFORM_FEE_PERCENT,
        },
        status=status.HTTP_200_OK,
    )
