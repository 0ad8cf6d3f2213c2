from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.api.views import (
    AccountStatusView,
    AdminBanUserView,
    AdminUserAllView,
    AdminUserDetailView,
    AdminUserListView,
    AdminUserProfileView,
    ConnectAccountView,
    FinalizeSellerView,
    IdentityDocumentView,
    LoginAPIView,
    LogoutAPIView,
    MeView,
    PasswordResetConfirmView,
    PasswordResetRequestView,
    ProfileView,
    RegisterAPIView,
    SellerApplicationAdminListView,
    SellerApplicationAdminView,
    SellerApplicationView,
    SellerProfileView,
    SendVerificationCodeView,
    VerifyEmailView,
)


urlpatterns = [
    # Auth
    path("register/", RegisterAPIView.as_view(), name="register"),
    path("login/", LoginAPIView.as_view(), name="login"),
    path("logout/", LogoutAPIView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("verification-code/", SendVerificationCodeView.as_view(), name="send_verification_code"),
    path("verify-email/", VerifyEmailView.as_view(), name="verify_email"),
    path("password-reset/", PasswordResetRequestView.as_view(), name="password_reset_request"),
    path("password-reset/confirm/", PasswordResetConfirmView.as_view(), name="password_reset_confirm"),
    # Profile
    path("profile/", ProfileView.as_view(), name="profile"),
    # Seller
    path("seller/apply/", SellerApplicationView.as_view(), name="seller_apply"),
    path("seller/profile/", SellerProfileView.as_view(), name="seller_profile"),
    path("seller/identity-document/", IdentityDocumentView.as_view(), name="seller_identity_document"),
    path("seller/connect/", ConnectAccountView.as_view(), name="seller_connect_account"),
    path("seller/connect/status/", AccountStatusView.as_view(), name="seller_account_status"),
    path("seller/finalize/", FinalizeSellerView.as_view(), name="seller_finalize"),
    # Admin
    path("admin/seller/applications/", SellerApplicationAdminListView.as_view(), name="admin_seller_applications"),
    path(
        "admin/seller/applications/<uuid:pk>/",
        SellerApplicationAdminView.as_view(),
        name="admin_seller_application_update",
    ),
    path("admin/users/<uuid:user_id>/ban/", AdminBanUserView.as_view(), name="admin_ban_user"),
    path("admin/users/", AdminUserListView.as_view(), name="admin_users"),
    path("admin/users/all/", AdminUserAllView.as_view(), name="admin_users_all"),
    path("admin/users/<str:email>/", AdminUserDetailView.as_view(), name="admin_user_detail"),
    path("admin/users/<str:email>/profile/", AdminUserProfileView.as_view(), name="admin_user_profile"),
]
