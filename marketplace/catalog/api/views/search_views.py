from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response

from authentication.permissions import NotBanned
from infrastructure.container import container
from marketplace.api.serializers import PaginatedReposResponseSerializer
from marketplace.catalog.api.serializers import SearchParamsSerializer
from marketplace.catalog.domain.services import SearchService


class SearchViewSet(viewsets.ViewSet):
    """
    Catalog search.
    Delegates logic to SearchService; signed-in callers get their query recorded.
    """

    permission_classes = [permissions.AllowAny, NotBanned]

    def get_service(self) -> SearchService:
        return container.search_service()

    @extend_schema(
        operation_id="repos_search",
        summary="Search repositories",
        description="Every search term must match the name or description. Private repositories are never returned.",
        parameters=[
            OpenApiParameter(name="q", type=str, description="Search query"),
            OpenApiParameter(name="tags", type=str, description="Filter by tag (can be multiple)", many=True),
            OpenApiParameter(name="min_price", type=float, description="Minimum price"),
            OpenApiParameter(name="max_price", type=float, description="Maximum price"),
            OpenApiParameter(name="language", type=str, description="JSX or TSX"),
            OpenApiParameter(name="page", type=int),
            OpenApiParameter(name="page_size", type=int),
        ],
        responses={200: PaginatedReposResponseSerializer},
        tags=["Search"],
    )
    def search(self, request):
        params = SearchParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        result = self.get_service().search(request.user, params.validated_data)
        return Response(result.value, status=status.HTTP_200_OK)
