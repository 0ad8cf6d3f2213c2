from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from authentication.permissions import IsAdminUser, IsSellerUser, NotBanned
from infrastructure.container import container
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    PaginatedReposResponseSerializer,
    RepoDetailResponseSerializer,
)
from marketplace.catalog.api.serializers import (
    CodeRepoOwnerSerializer,
    CodeRepoSerializer,
    CodeRepoWriteSerializer,
    RepoStatusSerializer,
)
from marketplace.catalog.domain.models import CodeRepo
from marketplace.catalog.domain.services import CatalogService
from marketplace.filters import CodeRepoFilter
from utils.service_base import error_response


UUID_REGEX = "[0-9a-fA-F-]{36}"


class RepoViewSet(viewsets.ViewSet):
    """
    Code repository catalog.

    Browsing is public; sellers create listings, owners and admins edit them.
    """

    lookup_value_regex = UUID_REGEX

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [permissions.AllowAny(), NotBanned()]
        if self.action in ["create", "mine"]:
            return [IsSellerUser()]
        if self.action in ["set_status", "admin_list"]:
            return [IsAdminUser()]
        return [permissions.IsAuthenticated(), NotBanned()]

    @extend_schema(
        operation_id="repos_list",
        summary="Browse the catalog",
        description="Public, active repositories. Tags from the caller's recent searches sort first.",
        parameters=[
            OpenApiParameter(name="page", type=int, description="Page number"),
            OpenApiParameter(name="page_size", type=int, description="Items per page (max 100)"),
        ],
        responses={200: PaginatedReposResponseSerializer},
        tags=["Catalog"],
    )
    def list(self, request):
        try:
            page = int(request.query_params.get("page", 1))
            page_size = int(request.query_params.get("page_size", 20))
        except ValueError:
            return Response({"detail": "page and page_size must be integers"}, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().get_paginated_repos(request.user, page, page_size)
        if not result.ok:
            return error_response(result)
        return Response(result.value, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="repos_retrieve",
        summary="Repository detail",
        description="Source is only returned to the owner, admins and buyers with access.",
        responses={
            200: RepoDetailResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Repository not found"),
        },
        tags=["Catalog"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_repo(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(result.value, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="repos_create",
        summary="Create a repository listing",
        request=CodeRepoWriteSerializer,
        responses={
            201: CodeRepoOwnerSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Payment provider error"),
        },
        tags=["Catalog"],
    )
    def create(self, request):
        serializer = CodeRepoWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().create_repo(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(CodeRepoOwnerSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="repos_update",
        summary="Update a repository (owner or admin)",
        request=CodeRepoWriteSerializer,
        responses={200: CodeRepoOwnerSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Catalog"],
    )
    def partial_update(self, request, pk=None):
        serializer = CodeRepoWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_repo(pk, request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(CodeRepoOwnerSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="repos_delete", summary="Soft delete a repository", tags=["Catalog"])
    def destroy(self, request, pk=None):
        result = self.get_service().delete_repo(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="repos_mine",
        summary="Repositories owned by the caller",
        responses={200: CodeRepoOwnerSerializer(many=True)},
        tags=["Catalog"],
    )
    @action(detail=False, methods=["get"])
    def mine(self, request):
        result = self.get_service().get_repos_by_user(request.user.pk)
        return Response(CodeRepoOwnerSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="repos_set_status",
        summary="Approve or reject a listing (admin)",
        request=RepoStatusSerializer,
        responses={200: CodeRepoSerializer},
        tags=["Catalog Admin"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = RepoStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_repo_status(pk, serializer.validated_data["status"])
        if not result.ok:
            return error_response(result)
        return Response(CodeRepoSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="repos_admin_list",
        summary="All repositories with filters (admin)",
        parameters=[
            OpenApiParameter(name="status", type=str),
            OpenApiParameter(name="language", type=str),
            OpenApiParameter(name="visibility", type=str),
            OpenApiParameter(name="user_id", type=str),
            OpenApiParameter(name="tag", type=str),
            OpenApiParameter(name="search", type=str),
        ],
        responses={200: CodeRepoSerializer(many=True)},
        tags=["Catalog Admin"],
    )
    @action(detail=False, methods=["get"], url_path="admin")
    def admin_list(self, request):
        queryset = CodeRepo.objects.filter(deleted_at__isnull=True).select_related("user").prefetch_related("tags")
        repo_filter = CodeRepoFilter(request.query_params, queryset=queryset)
        if not repo_filter.is_valid():
            return Response({"detail": repo_filter.errors}, status=status.HTTP_400_BAD_REQUEST)
        return Response(CodeRepoSerializer(repo_filter.qs, many=True).data, status=status.HTTP_200_OK)
