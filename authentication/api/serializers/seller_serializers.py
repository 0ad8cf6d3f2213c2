from rest_framework import serializers

from authentication.domain.models import BankAccount, SellerProfile


class BankAccountSerializer(serializers.ModelSerializer):
    swift_code = serializers.CharField(min_length=8, max_length=11)

    class Meta:
        model = BankAccount
        fields = ("account_holder_name", "account_number", "bank_name", "swift_code", "iban", "routing_number")
        extra_kwargs = {
            "iban": {"required": False, "allow_null": True, "allow_blank": True},
            "routing_number": {"required": False, "allow_null": True, "allow_blank": True},
        }

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["account_number"] = instance.masked_account_number
        return data


class SellerProfileSerializer(serializers.ModelSerializer):
    bank_account = BankAccountSerializer(read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = SellerProfile
        fields = (
            "id",
            "email",
            "business_name",
            "business_address",
            "business_phone",
            "business_email",
            "business_type",
            "profile_img",
            "verification_status",
            "verification_date",
            "stripe_account_id",
            "balance",
            "last_payout_date",
            "bank_account",
            "created_at",
        )
        read_only_fields = fields


class SellerApplicationSerializer(serializers.Serializer):
    """Request body for applying or updating the seller profile."""

    business_name = serializers.CharField(max_length=200)
    business_address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    business_phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    business_email = serializers.EmailField(required=False, allow_blank=True)
    business_type = serializers.ChoiceField(choices=SellerProfile.BUSINESS_TYPE_CHOICES, required=False)
    profile_img = serializers.URLField(required=False, allow_null=True, allow_blank=True)
    bank_account = BankAccountSerializer()


class SellerProfileUpdateSerializer(SellerApplicationSerializer):
    business_name = serializers.CharField(max_length=200, required=False)
    bank_account = BankAccountSerializer(required=False, partial=True)


class SellerStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SellerProfile.VERIFICATION_STATUS_CHOICES)


class ConnectAccountSerializer(serializers.Serializer):
    business_name = serializers.CharField(max_length=200)
    business_type = serializers.ChoiceField(choices=SellerProfile.BUSINESS_TYPE_CHOICES, default="individual")


class IdentityDocumentSerializer(serializers.Serializer):
    file = serializers.FileField()
