import bleach
from rest_framework import serializers


class CleanTextField(serializers.CharField):
    """Free text with any markup stripped."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return bleach.clean(value, tags=[], strip=True).strip()


class LenientDateField(serializers.DateField):
    """Accepts ``YYYY-MM-DD`` as well as a full ISO timestamp."""

    def to_internal_value(self, value):
        if isinstance(value, str) and 'T' in value:
            value = value.split('T', 1)[0]
        return super().to_internal_value(value)


def optional_char(max_length=255):
    return serializers.CharField(max_length=max_length, required=False, allow_blank=True, allow_null=True)


def money(**kwargs):
    return serializers.DecimalField(max_digits=12, decimal_places=2, **kwargs)
