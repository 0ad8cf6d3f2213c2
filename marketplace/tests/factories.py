from decimal import Decimal

import factory

from authentication.tests.factories import SellerFactory, UserFactory
from marketplace.models import CodeRepo, Comment, ContentFlag, Order, Review, SearchHistory, Tag, UserRepoAccess


class TagFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Tag
        django_get_or_create = ("name",)

    name = factory.Sequence(lambda n: f"tag-{n}")


class CodeRepoFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CodeRepo

    user = factory.SubFactory(SellerFactory)
    name = factory.Sequence(lambda n: f"Component {n}")
    description = factory.Faker("sentence")
    language = CodeRepo.LANGUAGE_TSX
    price = Decimal("25.00")
    source_js = "export default function Button() { return <button /> }"
    source_css = ".button { color: red; }"
    visibility = CodeRepo.VISIBILITY_PUBLIC
    status = CodeRepo.STATUS_ACTIVE
    stripe_product_id = factory.Sequence(lambda n: f"prod_test_{n}")
    stripe_price_id = factory.Sequence(lambda n: f"price_test_{n}")

    @factory.post_generation
    def tags(self, create, extracted, **kwargs):
        if not create or not extracted:
            return
        for name in extracted:
            self.tags.add(TagFactory(name=name))


class ReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Review

    user = factory.SubFactory(UserFactory)
    code_repo = factory.SubFactory(CodeRepoFactory)
    content = factory.Faker("paragraph")
    rating = 4
    flag = ContentFlag.NONE


class CommentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Comment

    user = factory.SubFactory(UserFactory)
    review = factory.SubFactory(ReviewFactory)
    content = factory.Faker("sentence")
    flag = ContentFlag.NONE


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    user = factory.SubFactory(UserFactory)
    code_repo = factory.SubFactory(CodeRepoFactory)
    status = Order.STATUS_SUCCEEDED
    total_amount = factory.LazyAttribute(lambda o: o.code_repo.price)
    stripe_payment_intent_id = factory.Sequence(lambda n: f"pi_test_{n}")


class UserRepoAccessFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = UserRepoAccess

    user = factory.SubFactory(UserFactory)
    code_repo = factory.SubFactory(CodeRepoFactory)
    order = None
    expires_at = None


class SearchHistoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SearchHistory

    user = factory.SubFactory(UserFactory)
    tag = factory.Faker("word")
