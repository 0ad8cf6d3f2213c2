from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import IsAdminUser, NotBanned
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import CodeRepoSerializer
from marketplace.catalog.api.views.repo_views import UUID_REGEX
from marketplace.ordering.api.serializers import OrderSerializer
from marketplace.ordering.domain.services.order_service import OrderService
from utils.service_base import error_response


class OrderViewSet(viewsets.ViewSet):
    lookup_value_regex = UUID_REGEX

    def get_service(self) -> OrderService:
        return container.order_service()

    def get_permissions(self):
        if self.action == "by_status":
            return [IsAdminUser()]
        return [IsAuthenticated(), NotBanned()]

    @extend_schema(
        operation_id="orders_list",
        summary="List user's orders (as buyer)",
        description="""
        **What it returns:**
        - Every order where the caller is the buyer, newest first
        """,
        responses={200: OrderSerializer(many=True)},
        tags=["Orders"],
    )
    def list(self, request):
        result = self.get_service().get_user_orders(request.user)
        return Response(OrderSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Get order details",
        responses={
            200: OrderSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the buyer"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Orders"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_order(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_by_status",
        summary="Orders in a given status (admin)",
        parameters=[OpenApiParameter(name="status", type=str, required=True)],
        responses={200: OrderSerializer(many=True)},
        tags=["Orders"],
    )
    @action(detail=False, methods=["get"], url_path="by-status")
    def by_status(self, request):
        result = self.get_service().get_orders_by_status(request.query_params.get("status", ""))
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="orders_purchased_repos",
        summary="Repositories the caller can access",
        responses={200: CodeRepoSerializer(many=True)},
        tags=["Orders"],
    )
    @action(detail=False, methods=["get"], url_path="purchased-repos")
    def purchased_repos(self, request):
        result = container.access_service().get_user_accessible_repos(request.user)
        return Response(CodeRepoSerializer(result.value, many=True).data, status=status.HTTP_200_OK)
