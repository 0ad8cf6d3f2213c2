from rest_framework import serializers

from marketplace.catalog.domain.models import CodeRepo


class CodeCheckRequestSerializer(serializers.Serializer):
    code = serializers.CharField(trim_whitespace=False)
    language = serializers.ChoiceField(choices=CodeRepo.LANGUAGE_CHOICES)


class CodeCheckResponseSerializer(serializers.Serializer):
    security_score = serializers.IntegerField(min_value=0, max_value=100)
    maintainability_score = serializers.IntegerField(min_value=0, max_value=100)
    readability_score = serializers.IntegerField(min_value=0, max_value=100)
    security_suggestion = serializers.CharField()
    maintainability_suggestion = serializers.CharField()
    readability_suggestion = serializers.CharField()
    overall_description = serializers.CharField()
