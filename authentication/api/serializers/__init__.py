from .auth_serializers import (
    AdminUserCreateSerializer,
    AdminUserProfileUpdateSerializer,
    AdminUserUpdateSerializer,
    BanUserSerializer,
    LoginRequestSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    UserRegistrationSerializer,
    UserSerializer,
    VerifyEmailRequestSerializer,
)
from .profile_serializers import ProfileSerializer
from .seller_serializers import (
    BankAccountSerializer,
    ConnectAccountSerializer,
    IdentityDocumentSerializer,
    SellerApplicationSerializer,
    SellerProfileSerializer,
    SellerProfileUpdateSerializer,
    SellerStatusSerializer,
)


__all__ = [
    "AdminUserCreateSerializer",
    "AdminUserUpdateSerializer",
    "AdminUserProfileUpdateSerializer",
    "UserSerializer",
    "UserRegistrationSerializer",
    "LoginRequestSerializer",
    "VerifyEmailRequestSerializer",
    "PasswordResetRequestSerializer",
    "PasswordResetConfirmSerializer",
    "BanUserSerializer",
    "ProfileSerializer",
    "BankAccountSerializer",
    "SellerProfileSerializer",
    "SellerApplicationSerializer",
    "SellerProfileUpdateSerializer",
    "SellerStatusSerializer",
    "ConnectAccountSerializer",
    "IdentityDocumentSerializer",
]
