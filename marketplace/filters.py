import django_filters
from django.db.models import Q

from .models import CodeRepo


class CodeRepoFilter(django_filters.FilterSet):
    """
    Admin filter over repository listings
    """

    status = django_filters.ChoiceFilter(choices=CodeRepo.STATUS_CHOICES)
    language = django_filters.ChoiceFilter(choices=CodeRepo.LANGUAGE_CHOICES)
    visibility = django_filters.ChoiceFilter(choices=CodeRepo.VISIBILITY_CHOICES)

    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    user_id = django_filters.UUIDFilter(field_name="user__id")
    tag = django_filters.CharFilter(field_name="tags__name", lookup_expr="iexact", distinct=True)

    # Search in name and description
    search = django_filters.CharFilter(method="filter_search")

    ordering = django_filters.OrderingFilter(
        fields=(
            ("created_at", "created_at"),
            ("price", "price"),
            ("name", "name"),
        )
    )

    class Meta:
        model = CodeRepo
        fields = ["status", "language", "visibility"]

    def filter_search(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
