"""
Admin user management views. Users are addressed by email.
"""

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    AdminUserCreateSerializer,
    AdminUserProfileUpdateSerializer,
    AdminUserUpdateSerializer,
    ProfileSerializer,
    SellerProfileSerializer,
    UserSerializer,
)
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    MessageResponseSerializer,
    PaginatedUsersResponseSerializer,
)
from authentication.models import SellerProfile
from authentication.permissions import IsAdminUser
from infrastructure.container import container

from .auth_views import result_error_response


class AdminUserListView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="admin_users_paginated",
        parameters=[
            OpenApiParameter(name="page", type=int, required=False),
            OpenApiParameter(name="limit", type=int, required=False),
        ],
        responses={200: PaginatedUsersResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Admin - Users"],
    )
    def get(self, request):
        try:
            page = int(request.query_params.get("page", 1))
            limit = int(request.query_params.get("limit", 10))
        except ValueError:
            return Response({"detail": "page and limit must be integers"}, status=status.HTTP_400_BAD_REQUEST)

        result = container.user_service().get_paginated_users(page, limit)
        return Response(
            {"data": UserSerializer(result.data["data"], many=True).data, "meta": result.data["meta"]}
        )

    @extend_schema(
        operation_id="admin_users_create",
        request=AdminUserCreateSerializer,
        responses={
            201: UserSerializer,
            400: ErrorResponseSerializer,
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Email already in use"),
        },
        tags=["Admin - Users"],
    )
    def post(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.user_service().create_user(**serializer.validated_data)
        if not result.success:
            return result_error_response(result)
        return Response(UserSerializer(result.data["user"]).data, status=status.HTTP_201_CREATED)


class AdminUserAllView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="admin_users_all",
        responses={200: UserSerializer(many=True)},
        tags=["Admin - Users"],
    )
    def get(self, request):
        result = container.user_service().get_all_users()
        return Response(UserSerializer(result.data["users"], many=True).data)


class AdminUserDetailView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="admin_user_detail",
        responses={200: UserSerializer, 404: ErrorResponseSerializer},
        tags=["Admin - Users"],
    )
    def get(self, request, email):
        result = container.user_service().get_user_by_email(email)
        if not result.success:
            return result_error_response(result)

        user = result.data["user"]
        data = UserSerializer(user).data
        seller_profile = SellerProfile.objects.filter(user=user).first()
        data["seller_profile"] = SellerProfileSerializer(seller_profile).data if seller_profile else None
        return Response(data)

    @extend_schema(
        operation_id="admin_user_update",
        request=AdminUserUpdateSerializer,
        responses={200: UserSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        tags=["Admin - Users"],
    )
    def patch(self, request, email):
        serializer = AdminUserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.user_service().update_user(email, serializer.validated_data)
        if not result.success:
            return result_error_response(result)
        return Response(UserSerializer(result.data["user"]).data)

    @extend_schema(
        operation_id="admin_user_delete",
        responses={200: MessageResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Admin - Users"],
    )
    def delete(self, request, email):
        result = container.user_service().delete_user(email)
        if not result.success:
            return result_error_response(result)
        return Response({"message": result.message})


class AdminUserProfileView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="admin_user_profile_update",
        request=AdminUserProfileUpdateSerializer,
        responses={200: UserSerializer, 404: ErrorResponseSerializer},
        tags=["Admin - Users"],
    )
    def patch(self, request, email):
        serializer = AdminUserProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.user_service().update_user_profile(email, serializer.validated_data)
        if not result.success:
            return result_error_response(result)

        profile = result.data["profile"]
        if isinstance(profile, SellerProfile):
            return Response(SellerProfileSerializer(profile).data)
        return Response(ProfileSerializer(profile).data)
