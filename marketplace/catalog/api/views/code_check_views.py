from dataclasses import asdict

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response

from authentication.permissions import NotBanned
from infrastructure.container import container
from marketplace.catalog.api.serializers import CodeCheckRequestSerializer, CodeCheckResponseSerializer
from marketplace.catalog.domain.services import CodeCheckService
from utils.service_base import error_response


class CodeCheckViewSet(viewsets.ViewSet):
    """
    AI code quality check.
    Delegates logic to CodeCheckService.
    """

    permission_classes = [permissions.IsAuthenticated, NotBanned]

    def get_service(self) -> CodeCheckService:
        return container.code_check_service()

    @extend_schema(
        operation_id="code_check",
        summary="Check code quality",
        description="Scores a JSX or TSX snippet from 0 to 100 for security, maintainability and readability.",
        request=CodeCheckRequestSerializer,
        responses={200: CodeCheckResponseSerializer},
        tags=["Code Check"],
    )
    def check(self, request):
        serializer = CodeCheckRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().perform_code_check(**serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(CodeCheckResponseSerializer(asdict(result.value)).data, status=status.HTTP_200_OK)
