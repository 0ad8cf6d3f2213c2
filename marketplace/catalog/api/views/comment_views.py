from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from authentication.permissions import IsModeratorUser, NotBanned
from infrastructure.container import container
from marketplace.api.serializers import PaginatedCommentsResponseSerializer
from marketplace.catalog.api.serializers import (
    CommentCreateSerializer,
    CommentSerializer,
    CommentUpdateSerializer,
    VoteSerializer,
)
from marketplace.catalog.domain.services import CommentService
from utils.service_base import error_response

from .repo_views import UUID_REGEX


class CommentViewSet(viewsets.ViewSet):
    """
    Comments on reviews, with up/down votes and moderation.
    """

    lookup_value_regex = UUID_REGEX

    def get_service(self) -> CommentService:
        return container.comment_service()

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [permissions.AllowAny()]
        if self.action in ["revert_flag", "flagged"]:
            return [IsModeratorUser()]
        return [permissions.IsAuthenticated(), NotBanned()]

    @extend_schema(
        operation_id="comments_list",
        summary="Comments on a review",
        parameters=[
            OpenApiParameter(name="review_id", type=str, required=True),
            OpenApiParameter(name="page", type=int),
            OpenApiParameter(name="per_page", type=int, description="Max 100"),
        ],
        responses={200: PaginatedCommentsResponseSerializer},
        tags=["Comments"],
    )
    def list(self, request):
        review_id = request.query_params.get("review_id")
        if not review_id:
            return Response({"detail": "review_id is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            page = int(request.query_params.get("page", 1))
            per_page = int(request.query_params.get("per_page", 20))
        except ValueError:
            return Response({"detail": "page and per_page must be integers"}, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().get_paginated_comments_by_review(review_id, page, per_page)
        response_data = result.value
        response_data["data"] = CommentSerializer(response_data["data"], many=True).data
        return Response(response_data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="comments_retrieve", responses={200: CommentSerializer}, tags=["Comments"])
    def retrieve(self, request, pk=None):
        result = self.get_service().get_comment(pk)
        if not result.ok:
            return error_response(result)
        return Response(CommentSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="comments_create",
        request=CommentCreateSerializer,
        responses={201: CommentSerializer},
        tags=["Comments"],
    )
    def create(self, request):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().create_comment(
            request.user, serializer.validated_data["review_id"], serializer.validated_data["content"]
        )
        if not result.ok:
            return error_response(result)
        return Response(CommentSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="comments_update",
        request=CommentUpdateSerializer,
        responses={200: CommentSerializer},
        tags=["Comments"],
    )
    def partial_update(self, request, pk=None):
        serializer = CommentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_comment(pk, request.user, serializer.validated_data["content"])
        if not result.ok:
            return error_response(result)
        return Response(CommentSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="comments_delete", tags=["Comments"])
    def destroy(self, request, pk=None):
        result = self.get_service().delete_comment(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="comments_vote",
        summary="Vote on a comment",
        description="Same type again removes the vote; the other type switches it.",
        request=VoteSerializer,
        responses={200: CommentSerializer},
        tags=["Comments"],
    )
    @action(detail=True, methods=["post"])
    def vote(self, request, pk=None):
        serializer = VoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().handle_vote(pk, request.user, serializer.validated_data["type"])
        if not result.ok:
            return error_response(result)
        return Response(CommentSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="comments_revert_flag", request=None, responses={200: CommentSerializer}, tags=["Moderation"]
    )
    @action(detail=True, methods=["post"], url_path="revert-flag")
    def revert_flag(self, request, pk=None):
        result = self.get_service().revert_flag(pk)
        if not result.ok:
            return error_response(result)
        return Response(CommentSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="comments_flagged", responses={200: CommentSerializer(many=True)}, tags=["Moderation"])
    @action(detail=False, methods=["get"])
    def flagged(self, request):
        result = self.get_service().get_flagged_comments()
        return Response(CommentSerializer(result.value, many=True).data, status=status.HTTP_200_OK)
