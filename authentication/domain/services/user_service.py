"""
UserService - Admin user management.

Account creation with an explicit role, lookup, account and profile updates
and soft delete. Bans live in AuthService.
"""

import logging
from typing import Any, Dict

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from authentication.models import Profile, SellerProfile
from utils.service_base import ErrorCodes

from .results import Result


User = get_user_model()
logger = logging.getLogger(__name__)

ROLES = {choice for choice, _ in User.ROLE_CHOICES}
SELLER_PROFILE_FIELDS = ("business_name", "business_address", "business_phone", "business_email")


def _not_found(email: str) -> Result:
    message = f"User with email {email} not found."
    return Result(success=False, message=message, error=message, error_code=ErrorCodes.NOT_FOUND)


def _invalid(message: str) -> Result:
    return Result(success=False, message=message, error=message, error_code=ErrorCodes.VALIDATION_ERROR)


def _email_taken() -> Result:
    return Result(
        success=False, message="Email already in use.", error="Email already in use.", error_code=ErrorCodes.EMAIL_EXISTS
    )


class UserService:
    """Admin-side user operations. Soft-deleted users are invisible to every lookup."""

    def _live_users(self):
        return User.objects.filter(deleted_at__isnull=True)

    def _find(self, email: str):
        return self._live_users().filter(email__iexact=(email or "").strip()).first()

    @transaction.atomic
    def create_user(self, email: str, username: str, password: str, role: str = User.ROLE_USER) -> Result:
        """
        Create an already verified account with the given role.

        Sellers created this way start with an approved, empty seller profile.
        """
        email = (email or "").strip().lower()
        if not email or not username or not password:
            return _invalid("Email, username and password are required.")
        if role not in ROLES:
            return _invalid(f"Invalid role: {role}")
        if User.objects.filter(email__iexact=email).exists():
            return _email_taken()

        user = User.objects.create_user(
            email=email,
            username=username,
            password=password,
            role=role,
            is_email_verified=True,
            is_seller_verified=role == User.ROLE_SELLER,
            is_staff=role == User.ROLE_ADMIN,
        )
        Profile.objects.create(user=user, name=username)
        if role == User.ROLE_SELLER:
            profile = SellerProfile(user=user, business_name=username, business_email=email)
            profile.set_verification_status(SellerProfile.STATUS_APPROVED)
            profile.save()

        logger.info(f"User {user.email} created with role {role}")
        return Result(success=True, message="User created", data={"user": user})

    def get_all_users(self) -> Result:
        users = self._live_users().select_related("seller_profile__bank_account").order_by("-date_joined")
        return Result(success=True, data={"users": list(users)})

    def get_paginated_users(self, page: int = 1, limit: int = 10) -> Result:
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or 10), 1), 100)

        queryset = self._live_users().order_by("-date_joined")
        offset = (page - 1) * limit
        return Result(
            success=True,
            data={
                "data": list(queryset[offset : offset + limit]),
                "meta": {"total": queryset.count(), "page": page, "limit": limit},
            },
        )

    def get_user_by_email(self, email: str) -> Result:
        user = self._find(email)
        if user is None:
            return _not_found(email)
        return Result(success=True, data={"user": user})

    @transaction.atomic
    def update_user(self, email: str, data: Dict[str, Any]) -> Result:
        """
        Update login details and role. Keys: email, username, password, role.
        """
        user = self._find(email)
        if user is None:
            return _not_found(email)

        updated_fields = []
        new_email = (data.get("email") or "").strip().lower()
        if new_email and new_email != user.email:
            if User.objects.filter(email__iexact=new_email).exclude(pk=user.pk).exists():
                return _email_taken()
            user.email = new_email
            updated_fields.append("email")

        if data.get("username"):
            user.username = data["username"]
            updated_fields.append("username")

        role = data.get("role")
        if role:
            if role not in ROLES:
                return _invalid(f"Invalid role: {role}")
            user.role = role
            updated_fields.append("role")

        if data.get("password"):
            user.set_password(data["password"])
            updated_fields.append("password")

        if updated_fields:
            user.save(update_fields=updated_fields + ["updated_at"])
            logger.info(f"User {user.email} updated: {', '.join(updated_fields)}")

        return Result(success=True, message="User updated", data={"user": user})

    @transaction.atomic
    def update_user_profile(self, email: str, data: Dict[str, Any]) -> Result:
        """
        Update the profile matching the user's role: the business details of a
        seller, the display name (and optionally the password) of anyone else.
        """
        user = self._find(email)
        if user is None:
            return _not_found(email)

        if user.role == User.ROLE_SELLER:
            profile = SellerProfile.objects.filter(user=user).first()
            if profile is None:
                return Result(
                    success=False,
                    message="Seller profile not found",
                    error="Seller profile not found",
                    error_code=ErrorCodes.SELLER_NOT_FOUND,
                )
            changed = [field for field in SELLER_PROFILE_FIELDS if field in data]
            for field in changed:
                setattr(profile, field, data[field])
            if changed:
                profile.save(update_fields=changed + ["updated_at"])
            return Result(success=True, message="Seller profile updated", data={"user": user, "profile": profile})

        if data.get("password"):
            user.set_password(data["password"])
            user.save(update_fields=["password", "updated_at"])

        profile, _ = Profile.objects.get_or_create(user=user)
        if "fullname" in data:
            profile.name = data["fullname"]
            profile.save(update_fields=["name", "updated_at"])
        return Result(success=True, message="Profile updated", data={"user": user, "profile": profile})

    @transaction.atomic
    def delete_user(self, email: str) -> Result:
        """Soft delete: the row stays for order history, the account can no longer log in."""
        user = self._find(email)
        if user is None:
            return _not_found(email)

        user.deleted_at = timezone.now()
        user.is_active = False
        user.save(update_fields=["deleted_at", "is_active", "updated_at"])

        logger.info(f"User {user.email} deleted")
        return Result(success=True, message="User deleted successfully", data={"user": user})
