from rest_framework import serializers

from authentication.domain.models import Profile


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = ("name", "phone_number", "profile_img", "created_at", "updated_at")
        read_only_fields = ("created_at", "updated_at")
