from authentication.domain.models.profile import Profile
from authentication.domain.models.seller import BankAccount, SellerProfile
from authentication.domain.models.user import CustomUser
from authentication.domain.models.verification import EmailVerificationCode, PasswordResetToken


__all__ = [
    "CustomUser",
    "Profile",
    "EmailVerificationCode",
    "PasswordResetToken",
    "SellerProfile",
    "BankAccount",
]
