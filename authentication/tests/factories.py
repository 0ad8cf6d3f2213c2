import uuid
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model

from authentication.models import BankAccount, Profile, SellerProfile


User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True
    is_email_verified = True
    role = "user"


class SellerFactory(UserFactory):
    role = "seller"
    is_seller_verified = True
    username = factory.Sequence(lambda n: f"seller_{n}")
    email = factory.Sequence(lambda n: f"seller_{n}@example.com")


class ModeratorFactory(UserFactory):
    role = "moderator"
    username = factory.Sequence(lambda n: f"moderator_{n}")
    email = factory.Sequence(lambda n: f"moderator_{n}@example.com")


class AdminFactory(UserFactory):
    role = "admin"
    is_superuser = True
    is_staff = True
    username = factory.Sequence(lambda n: f"admin_{n}")
    email = factory.Sequence(lambda n: f"admin_{n}@example.com")


class ProfileFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Profile

    user = factory.SubFactory(UserFactory)
    name = factory.Faker("name")
    phone_number = factory.Faker("numerify", text="+60#########")


class SellerProfileFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SellerProfile

    user = factory.SubFactory(SellerFactory)
    business_name = factory.Faker("company")
    business_address = factory.Faker("address")
    business_email = factory.Faker("company_email")
    business_type = "individual"
    verification_status = SellerProfile.STATUS_APPROVED
    stripe_account_id = factory.Sequence(lambda n: f"acct_test_{n}")
    balance = Decimal("0.00")


class BankAccountFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = BankAccount

    seller_profile = factory.SubFactory(SellerProfileFactory)
    account_holder_name = factory.Faker("name")
    account_number = factory.Faker("numerify", text="############")
    bank_name = factory.Faker("company")
    swift_code = "MBBEMYKL"
