import bleach
from rest_framework import serializers


class CleanTextMixin:
    """Strip markup from the free-text fields listed in ``Meta.clean_fields``."""

    def validate(self, attrs):
        attrs = super().validate(attrs)
        for name in getattr(self.Meta, 'clean_fields', ()):
            value = attrs.get(name)
            if isinstance(value, str):
                attrs[name] = bleach.clean(value.strip(), tags=set(), strip=True)
        return attrs


class ListParamsSerializer(serializers.Serializer):
    """Type check for pagination parameters; range clamping happens in the evaluator."""
    page = serializers.IntegerField(required=False, allow_null=True)
    limit = serializers.IntegerField(required=False, allow_null=True)
    pageSize = serializers.IntegerField(required=False, allow_null=True)
    search = serializers.CharField(required=False, allow_blank=True, max_length=128)


class LimitParamsSerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=5)
