from .profile import Profile
from .seller import BankAccount, SellerProfile
from .user import CustomUser
from .verification import EmailVerificationCode, PasswordResetToken


__all__ = [
    "CustomUser",
    "Profile",
    "EmailVerificationCode",
    "PasswordResetToken",
    "SellerProfile",
    "BankAccount",
]
