from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from authentication.permissions import IsAdminUser
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from support.api.serializers import (
    PaginatedTicketsSerializer,
    SupportTicketCreateSerializer,
    SupportTicketSerializer,
    SupportTicketStatusSerializer,
)
from support.domain.services import SupportService
from utils.service_base import error_response


UUID_REGEX = "[0-9a-fA-F-]{36}"


class SupportTicketViewSet(viewsets.ViewSet):
    """
    Support tickets.

    Anyone can open a ticket; triage is admin only.
    """

    lookup_value_regex = UUID_REGEX

    def get_service(self) -> SupportService:
        return container.support_service()

    def get_permissions(self):
        if self.action == "create":
            return [permissions.AllowAny()]
        return [IsAdminUser()]

    @extend_schema(
        operation_id="support_tickets_create",
        summary="Open a support ticket",
        description="An acknowledgement is emailed to the given address.",
        request=SupportTicketCreateSerializer,
        responses={
            201: SupportTicketSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
        },
        tags=["Support"],
    )
    def create(self, request):
        serializer = SupportTicketCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().create_ticket(serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(SupportTicketSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="support_tickets_list",
        summary="List tickets (admin)",
        description="Paginated by default. `title` and `email` filter by prefix, `status` by exact status.",
        parameters=[
            OpenApiParameter(name="page", type=int),
            OpenApiParameter(name="limit", type=int, description="Items per page (max 100)"),
            OpenApiParameter(name="title", type=str, description="Title prefix"),
            OpenApiParameter(name="email", type=str, description="Email prefix"),
            OpenApiParameter(name="status", type=str),
        ],
        responses={200: PaginatedTicketsSerializer},
        tags=["Support"],
    )
    def list(self, request):
        service = self.get_service()
        params = request.query_params

        if "title" in params:
            result = service.get_tickets_by_title(params["title"])
        elif "email" in params:
            result = service.get_tickets_by_email(params["email"])
        elif "status" in params:
            result = service.get_tickets_by_status(params["status"])
        else:
            try:
                page = int(params.get("page", 1))
                limit = int(params.get("limit", 20))
            except ValueError:
                return Response({"detail": "page and limit must be integers"}, status=status.HTTP_400_BAD_REQUEST)

            result = service.get_paginated_tickets(page, limit)
            if not result.ok:
                return error_response(result)
            return Response(PaginatedTicketsSerializer(result.value).data, status=status.HTTP_200_OK)

        if not result.ok:
            return error_response(result)
        return Response(SupportTicketSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="support_tickets_all",
        summary="Every ticket, newest first (admin)",
        responses={200: SupportTicketSerializer(many=True)},
        tags=["Support"],
    )
    @action(detail=False, methods=["get"])
    def all(self, request):
        result = self.get_service().get_all_tickets()
        return Response(SupportTicketSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="support_tickets_retrieve",
        summary="Ticket detail (admin)",
        responses={200: SupportTicketSerializer, 404: ErrorResponseSerializer},
        tags=["Support"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_ticket(pk)
        if not result.ok:
            return error_response(result)
        return Response(SupportTicketSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="support_tickets_update",
        summary="Move a ticket to another status (admin)",
        request=SupportTicketStatusSerializer,
        responses={200: SupportTicketSerializer, 404: ErrorResponseSerializer},
        tags=["Support"],
    )
    def partial_update(self, request, pk=None):
        serializer = SupportTicketStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_ticket(pk, serializer.validated_data["status"])
        if not result.ok:
            return error_response(result)
        return Response(SupportTicketSerializer(result.value).data, status=status.HTTP_200_OK)
