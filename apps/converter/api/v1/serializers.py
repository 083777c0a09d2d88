"""
Serializers for the converter API.
Validate query parameters and shape the response payloads.
"""

from rest_framework import serializers

from apps.converter.domain.models import CurrencyCode

CURRENCY_CHOICES = [code.value for code in CurrencyCode]


class CurrencyField(serializers.ChoiceField):
    """Case-insensitive currency code."""

    def __init__(self, **kwargs):
        super().__init__(choices=CURRENCY_CHOICES, **kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().upper()
        return super().to_internal_value(data)


class PairQuerySerializer(serializers.Serializer):
    source_currency = CurrencyField()
    target_currency = CurrencyField()


class ConvertQuerySerializer(PairQuerySerializer):
    amount = serializers.CharField(allow_blank=True, trim_whitespace=False, max_length=64)


class ThemeQuerySerializer(serializers.Serializer):
    prefers_dark = serializers.BooleanField(required=False, allow_null=True, default=None)


class CurrencySerializer(serializers.Serializer):
    code = serializers.CharField()
    glyph = serializers.CharField()
    icon = serializers.CharField()
    label = serializers.CharField()


class RateSerializer(serializers.Serializer):
    source_currency = serializers.CharField()
    target_currency = serializers.CharField()
    rate = serializers.FloatField()
    rate_display = serializers.CharField()


class ConversionSerializer(RateSerializer):
    amount = serializers.CharField()
    converted_amount = serializers.CharField()


class ThemeSerializer(serializers.Serializer):
    theme = serializers.CharField()
    css_class = serializers.CharField(allow_blank=True)
