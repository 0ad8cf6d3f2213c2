from rest_framework_simplejwt.tokens import RefreshToken


class CustomRefreshToken(RefreshToken):
    """Refresh token carrying the user's role as a display hint.

    Permission checks never read these claims; roles are reloaded from the
    database (see utils.rbac).
    """

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token["role"] = user.role
        token["email"] = user.email
        token["is_seller_verified"] = user.is_seller_verified
        return token
