from .auth_views import (
    AdminBanUserView,
    LoginAPIView,
    LogoutAPIView,
    MeView,
    PasswordResetConfirmView,
    PasswordResetRequestView,
    RegisterAPIView,
    SendVerificationCodeView,
    VerifyEmailView,
)
from .profile_views import ProfileView
from .user_views import AdminUserAllView, AdminUserDetailView, AdminUserListView, AdminUserProfileView
from .seller_views import (
    AccountStatusView,
    ConnectAccountView,
    FinalizeSellerView,
    IdentityDocumentView,
    SellerApplicationAdminListView,
    SellerApplicationAdminView,
    SellerApplicationView,
    SellerProfileView,
)


__all__ = [
    "LoginAPIView",
    "RegisterAPIView",
    "LogoutAPIView",
    "MeView",
    "SendVerificationCodeView",
    "VerifyEmailView",
    "PasswordResetRequestView",
    "PasswordResetConfirmView",
    "AdminBanUserView",
    "AdminUserListView",
    "AdminUserAllView",
    "AdminUserDetailView",
    "AdminUserProfileView",
    "ProfileView",
    "SellerApplicationView",
    "SellerProfileView",
    "IdentityDocumentView",
    "ConnectAccountView",
    "AccountStatusView",
    "FinalizeSellerView",
    "SellerApplicationAdminListView",
    "SellerApplicationAdminView",
]
