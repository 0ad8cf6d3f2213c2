from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import ProfileSerializer
from authentication.api.serializers.response_serializers import ErrorResponseSerializer
from authentication.permissions import NotBanned
from infrastructure.container import container

from .auth_views import result_error_response


class ProfileView(APIView):
    """GET, POST (create) and PATCH the current user's profile."""

    permission_classes = [permissions.IsAuthenticated, NotBanned]

    @extend_schema(
        operation_id="profile_get",
        responses={200: ProfileSerializer, 404: ErrorResponseSerializer},
        tags=["Profile"],
    )
    def get(self, request):
        result = container.profile_service().get_profile(request.user)
        if not result.success:
            return result_error_response(result)
        return Response(ProfileSerializer(result.data["profile"]).data)

    @extend_schema(
        operation_id="profile_create",
        request=ProfileSerializer,
        responses={201: ProfileSerializer, 409: ErrorResponseSerializer},
        tags=["Profile"],
    )
    def post(self, request):
        serializer = ProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.profile_service().create_profile(request.user, serializer.validated_data)
        if not result.success:
            return result_error_response(result)
        return Response(ProfileSerializer(result.data["profile"]).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="profile_update",
        request=ProfileSerializer,
        responses={200: ProfileSerializer, 404: ErrorResponseSerializer},
        tags=["Profile"],
    )
    def patch(self, request):
        serializer = ProfileSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = container.profile_service().update_profile(request.user, serializer.validated_data)
        if not result.success:
            return result_error_response(result)
        return Response(ProfileSerializer(result.data["profile"]).data)
