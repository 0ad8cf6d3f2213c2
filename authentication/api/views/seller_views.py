from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    ConnectAccountSerializer,
    IdentityDocumentSerializer,
    SellerApplicationSerializer,
    SellerProfileSerializer,
    SellerProfileUpdateSerializer,
    SellerStatusSerializer,
)
from authentication.api.serializers.response_serializers import (
    AccountStatusResponseSerializer,
    ConnectAccountResponseSerializer,
    ErrorResponseSerializer,
)
from authentication.permissions import IsAdminUser, NotBanned
from infrastructure.container import container

from .auth_views import result_error_response


class SellerApplicationView(APIView):
    """POST only - Submit or resubmit the seller application"""

    permission_classes = [permissions.IsAuthenticated, NotBanned]

    @extend_schema(
        operation_id="seller_application_submit",
        summary="Apply for a seller account",
        description="""
        Upserts the caller's seller profile and bank account, and moves the
        application to PENDING for admin review.
        """,
        request=SellerApplicationSerializer,
        responses={
            201: SellerProfileSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
        },
        tags=["Seller Applications"],
    )
    def post(self, request):
        serializer = SellerApplicationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.seller_service().apply_for_seller_account(request.user, serializer.validated_data)
        if not result.success:
            return result_error_response(result)
        return Response(SellerProfileSerializer(result.data["seller_profile"]).data, status=status.HTTP_201_CREATED)


class SellerProfileView(APIView):
    permission_classes = [permissions.IsAuthenticated, NotBanned]

    @extend_schema(
        operation_id="seller_profile_get",
        responses={200: SellerProfileSerializer, 404: ErrorResponseSerializer},
        tags=["Seller Applications"],
    )
    def get(self, request):
        result = container.seller_service().get_seller_profile(request.user)
        if not result.success:
            return result_error_response(result)
        return Response(SellerProfileSerializer(result.data["seller_profile"]).data)

    @extend_schema(
        operation_id="seller_profile_update",
        request=SellerProfileUpdateSerializer,
        responses={200: SellerProfileSerializer, 404: ErrorResponseSerializer},
        tags=["Seller Applications"],
    )
    def patch(self, request):
        serializer = SellerProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = container.seller_service().update_seller_profile(request.user, serializer.validated_data)
        if not result.success:
            return result_error_response(result)
        return Response(SellerProfileSerializer(result.data["seller_profile"]).data)


class IdentityDocumentView(APIView):
    """POST uploads the PDF, GET returns a short-lived signed URL."""

    permission_classes = [permissions.IsAuthenticated, NotBanned]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="seller_identity_document_upload",
        request={"multipart/form-data": IdentityDocumentSerializer},
        responses={201: OpenApiResponse(description="Document stored"), 400: ErrorResponseSerializer},
        tags=["Seller Applications"],
    )
    def post(self, request):
        serializer = IdentityDocumentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.seller_service().upload_identity_document(
            request.user, serializer.validated_data["file"]
        )
        if not result.success:
            return result_error_response(result)
        return Response({"message": result.message, "key": result.data["key"]}, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="seller_identity_document_url",
        responses={200: OpenApiResponse(description="Signed URL"), 404: ErrorResponseSerializer},
        tags=["Seller Applications"],
    )
    def get(self, request):
        result = container.seller_service().get_identity_document_url(request.user)
        if not result.success:
            return result_error_response(result)
        return Response({"url": result.data["url"]})


class ConnectAccountView(APIView):
    permission_classes = [permissions.IsAuthenticated, NotBanned]

    @extend_schema(
        operation_id="seller_connect_account_create",
        summary="Create the payment-provider account and return its onboarding link",
        request=ConnectAccountSerializer,
        responses={201: ConnectAccountResponseSerializer, 502: ErrorResponseSerializer},
        tags=["Seller Onboarding"],
    )
    def post(self, request):
        serializer = ConnectAccountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.onboarding_service().create_connect_account(
            request.user,
            serializer.validated_data["business_name"],
            serializer.validated_data["business_type"],
        )
        if not result.success:
            return result_error_response(result)
        return Response(result.data, status=status.HTTP_201_CREATED)


class AccountStatusView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="seller_account_status",
        responses={200: AccountStatusResponseSerializer, 502: ErrorResponseSerializer},
        tags=["Seller Onboarding"],
    )
    def get(self, request):
        result = container.onboarding_service().verify_account_status(request.user)
        if not result.success:
            return result_error_response(result)
        return Response(result.data)


class FinalizeSellerView(APIView):
    permission_classes = [permissions.IsAuthenticated, NotBanned]

    @extend_schema(
        operation_id="seller_finalize",
        summary="Activate the seller role once onboarding is complete",
        responses={200: SellerProfileSerializer, 400: ErrorResponseSerializer},
        tags=["Seller Onboarding"],
    )
    def post(self, request):
        result = container.onboarding_service().finalize_seller(request.user)
        if not result.success:
            return result_error_response(result)
        return Response(SellerProfileSerializer(result.data["seller_profile"]).data)


class SellerApplicationAdminListView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="admin_seller_applications_list",
        parameters=[OpenApiParameter("status", str, description="IDLE, PENDING, APPROVED or REJECTED")],
        responses={200: SellerProfileSerializer(many=True)},
        tags=["Admin - Seller Applications"],
    )
    def get(self, request):
        result = container.seller_service().get_seller_applications(request.query_params.get("status"))
        return Response(SellerProfileSerializer(result.data["applications"], many=True).data)


class SellerApplicationAdminView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="admin_seller_application_update",
        request=SellerStatusSerializer,
        responses={200: SellerProfileSerializer, 404: ErrorResponseSerializer},
        tags=["Admin - Seller Applications"],
    )
    def patch(self, request, pk):
        serializer = SellerStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.seller_service().update_seller_application_status(pk, serializer.validated_data["status"])
        if not result.success:
            return result_error_response(result)
        return Response(SellerProfileSerializer(result.data["seller_profile"]).data)
