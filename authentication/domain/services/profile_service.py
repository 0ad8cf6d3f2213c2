"""
ProfileService - Profile Management Business Logic.
"""

import logging
from typing import Any, Dict

from django.db import IntegrityError, transaction

from authentication.models import Profile
from utils.service_base import ErrorCodes

from .results import Result


logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "phone_number", "profile_img")


class ProfileService:
    """Create, read and update the one-per-user profile."""

    def create_profile(self, user, profile_data: Dict[str, Any]) -> Result:
        if Profile.objects.filter(user=user).exists():
            return Result(
                success=False,
                message="Profile already exists",
                error="Profile already exists",
                error_code=ErrorCodes.PROFILE_EXISTS,
            )

        values = {field: profile_data.get(field) for field in PROFILE_FIELDS if field in profile_data}
        try:
            with transaction.atomic():
                profile = Profile.objects.create(user=user, **values)
        except IntegrityError:
            # Concurrent create for the same user
            return Result(
                success=False,
                message="Profile already exists",
                error="Profile already exists",
                error_code=ErrorCodes.PROFILE_EXISTS,
            )

        logger.info(f"Profile created for user {user.id}")
        return Result(success=True, message="Profile created", data={"profile": profile})

    def get_profile(self, user) -> Result:
        profile = Profile.objects.filter(user=user).first()
        if profile is None:
            return Result(
                success=False, message="Profile not found", error="Profile not found", error_code=ErrorCodes.NOT_FOUND
            )
        return Result(success=True, data={"profile": profile})

    def update_profile(self, user, profile_data: Dict[str, Any]) -> Result:
        """
        Partially update the profile. Unknown keys are ignored.
        """
        profile = Profile.objects.filter(user=user).first()
        if profile is None:
            return Result(
                success=False, message="Profile not found", error="Profile not found", error_code=ErrorCodes.NOT_FOUND
            )

        updated_fields = []
        for field in PROFILE_FIELDS:
            if field in profile_data:
                setattr(profile, field, profile_data[field])
                updated_fields.append(field)

        if updated_fields:
            profile.save(update_fields=updated_fields + ["updated_at"])
            logger.info(f"Profile updated for user {user.id}: {', '.join(updated_fields)}")

        return Result(success=True, message="Profile updated", data={"profile": profile})
