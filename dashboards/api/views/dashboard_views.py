"""
Dashboard views. One read-only endpoint per role.
"""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from authentication.permissions import IsAdminUser, IsModeratorUser, IsSellerUser, NotBanned
from dashboards.api.serializers import SellerDashboardQuerySerializer
from infrastructure.container import container
from utils.service_base import error_response


def _respond(result):
    if not result.ok:
        return error_response(result)
    return Response(result.value, status=status.HTTP_200_OK)


@extend_schema(
    operation_id="dashboard_admin",
    summary="Admin dashboard",
    description="Sales, users, repositories, sellers, orders, payouts, support and moderation.",
    responses={200: OpenApiTypes.OBJECT},
    tags=["Dashboards"],
)
@api_view(["GET"])
@permission_classes([IsAdminUser])
def admin_dashboard(request):
    return _respond(container.admin_dashboard_service().get_admin_dashboard())


@extend_schema(
    operation_id="dashboard_moderator",
    summary="Moderator dashboard",
    responses={200: OpenApiTypes.OBJECT},
    tags=["Dashboards"],
)
@api_view(["GET"])
@permission_classes([IsModeratorUser])
def moderator_dashboard(request):
    return _respond(container.moderator_dashboard_service().get_moderator_dashboard())


@extend_schema(
    operation_id="dashboard_seller",
    summary="Seller dashboard",
    description="Daily sales for the last `days` days, totals, balance and the latest reviews.",
    parameters=[OpenApiParameter(name="days", type=int, description="1 to 365, default 30")],
    responses={200: OpenApiTypes.OBJECT},
    tags=["Dashboards"],
)
@api_view(["GET"])
@permission_classes([IsSellerUser])
def seller_dashboard(request):
    query = SellerDashboardQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    result = container.seller_dashboard_service().get_seller_dashboard(request.user, query.validated_data["days"])
    return _respond(result)


@extend_schema(
    operation_id="dashboard_user",
    summary="Buyer dashboard",
    responses={200: OpenApiTypes.OBJECT},
    tags=["Dashboards"],
)
@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated, NotBanned])
def user_dashboard(request):
    return _respond(container.user_dashboard_service().get_user_dashboard(request.user))
