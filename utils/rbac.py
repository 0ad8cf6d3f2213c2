from django.contrib.auth import get_user_model
from django.utils import timezone


# Canonical role names
ROLE_USER = "user"
ROLE_SELLER = "seller"
ROLE_MODERATOR = "moderator"
ROLE_ADMIN = "admin"


def _fetch_user_from_db(user):
    """Fetch a fresh copy of the user with only the fields RBAC needs.

    Returns None if the user is anonymous or no longer exists.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    User = get_user_model()
    return (
        User.objects.only("id", "role", "is_superuser", "banned_until", "is_seller_verified")
        .filter(pk=getattr(user, "pk", None))
        .first()
    )


def is_admin(user) -> bool:
    """Admin check verified against the database."""
    db_user = _fetch_user_from_db(user)
    if not db_user:
        return False
    return bool(db_user.is_superuser or db_user.role == ROLE_ADMIN)


def is_moderator(user) -> bool:
    """Moderators and admins can moderate content."""
    db_user = _fetch_user_from_db(user)
    if not db_user:
        return False
    return db_user.role == ROLE_MODERATOR or bool(db_user.is_superuser or db_user.role == ROLE_ADMIN)


def is_seller(user) -> bool:
    """Verified sellers; admins are considered sellers as well."""
    db_user = _fetch_user_from_db(user)
    if not db_user:
        return False
    if db_user.is_superuser or db_user.role == ROLE_ADMIN:
        return True
    return db_user.role == ROLE_SELLER and db_user.is_seller_verified


def is_banned(user) -> bool:
    db_user = _fetch_user_from_db(user)
    if not db_user or db_user.banned_until is None:
        return False
    return db_user.banned_until > timezone.now()

