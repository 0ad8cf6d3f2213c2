import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import NotBanned
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from payment_system.api.serializers import (
    CheckoutRequestSerializer,
    CheckoutResponseSerializer,
    PaymentIntentResponseSerializer,
)
from utils.rbac import is_admin
from utils.service_base import ErrorCodes, error_response, service_err


logger = logging.getLogger(__name__)


@extend_schema(
    operation_id="checkout_create",
    summary="Start a repository purchase",
    description="Creates a payment intent for the repository price. The order is recorded once the provider confirms the payment.",
    request=CheckoutRequestSerializer,
    responses={
        201: CheckoutResponseSerializer,
        400: OpenApiResponse(response=ErrorResponseSerializer, description="Owner is not a seller"),
        404: OpenApiResponse(response=ErrorResponseSerializer, description="Repository not found"),
        409: OpenApiResponse(response=ErrorResponseSerializer, description="Already purchased"),
        502: OpenApiResponse(response=ErrorResponseSerializer, description="Payment provider error"),
    },
    tags=["Checkout"],
)
@api_view(["POST"])
@permission_classes([IsAuthenticated, NotBanned])
def create_checkout(request):
    serializer = CheckoutRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = container.checkout_service().init_checkout(request.user, serializer.validated_data["repo_id"])
    if not result.ok:
        return error_response(result)
    return Response(result.value, status=status.HTTP_201_CREATED)


@extend_schema(
    operation_id="checkout_payment_intent",
    summary="Payment intent status",
    description="Lets the buyer poll the provider status of their payment.",
    responses={
        200: PaymentIntentResponseSerializer,
        403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the buyer"),
        502: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown intent or provider error"),
    },
    tags=["Checkout"],
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def get_payment_intent(request, intent_id):
    result = container.checkout_service().get_payment_intent(intent_id)
    if not result.ok:
        return error_response(result)

    intent = result.value
    if intent.metadata.get("user_id") != str(request.user.pk) and not is_admin(request.user):
        return error_response(service_err(ErrorCodes.PERMISSION_DENIED, "You don't have permission to view this payment"))

    return Response(
        {
            "payment_intent_id": intent.intent_id,
            "status": intent.status.value,
            "amount": str(intent.amount),
            "currency": intent.currency,
        },
        status=status.HTTP_200_OK,
    )
