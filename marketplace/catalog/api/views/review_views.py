from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from authentication.permissions import IsModeratorUser, NotBanned
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import ReviewCreateSerializer, ReviewSerializer, ReviewUpdateSerializer
from marketplace.catalog.domain.services import ReviewService
from utils.service_base import error_response

from .repo_views import UUID_REGEX


class ReviewViewSet(viewsets.ViewSet):
    lookup_value_regex = UUID_REGEX

    def get_service(self) -> ReviewService:
        return container.review_service()

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [permissions.AllowAny()]
        if self.action in ["revert_flag", "flagged"]:
            return [IsModeratorUser()]
        return [permissions.IsAuthenticated(), NotBanned()]

    @extend_schema(
        operation_id="reviews_list",
        summary="Reviews of a repository",
        parameters=[OpenApiParameter(name="repo_id", type=str, required=True)],
        responses={200: ReviewSerializer(many=True)},
        tags=["Reviews"],
    )
    def list(self, request):
        repo_id = request.query_params.get("repo_id")
        if not repo_id:
            return Response({"detail": "repo_id is required"}, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().get_reviews_by_repo(repo_id)
        return Response(ReviewSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="reviews_retrieve", responses={200: ReviewSerializer}, tags=["Reviews"])
    def retrieve(self, request, pk=None):
        result = self.get_service().get_review(pk)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="reviews_create",
        summary="Review a repository",
        description="Content with inappropriate language is accepted but flagged for moderation.",
        request=ReviewCreateSerializer,
        responses={
            201: ReviewSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Repository not found"),
        },
        tags=["Reviews"],
    )
    def create(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.get_service().create_review(request.user, data["repo_id"], data["content"], data["rating"])
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="reviews_update", request=ReviewUpdateSerializer, responses={200: ReviewSerializer}, tags=["Reviews"]
    )
    def partial_update(self, request, pk=None):
        serializer = ReviewUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.get_service().update_review(request.user, pk, data.get("content"), data.get("rating"))
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="reviews_delete", tags=["Reviews"])
    def destroy(self, request, pk=None):
        result = self.get_service().delete_review(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(operation_id="reviews_upvote", request=None, responses={200: ReviewSerializer}, tags=["Reviews"])
    @action(detail=True, methods=["post"])
    def upvote(self, request, pk=None):
        result = self.get_service().upvote_review(pk)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="reviews_downvote", request=None, responses={200: ReviewSerializer}, tags=["Reviews"])
    @action(detail=True, methods=["post"])
    def downvote(self, request, pk=None):
        result = self.get_service().downvote_review(pk)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="reviews_revert_flag", request=None, responses={200: ReviewSerializer}, tags=["Moderation"]
    )
    @action(detail=True, methods=["post"], url_path="revert-flag")
    def revert_flag(self, request, pk=None):
        result = self.get_service().revert_review_flag(pk)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="reviews_flagged", responses={200: ReviewSerializer(many=True)}, tags=["Moderation"])
    @action(detail=False, methods=["get"])
    def flagged(self, request):
        result = self.get_service().get_flagged_reviews()
        return Response(ReviewSerializer(result.value, many=True).data, status=status.HTTP_200_OK)
