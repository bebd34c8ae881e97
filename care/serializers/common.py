import html

import bleach
from rest_framework import serializers
from rest_framework.settings import ISO_8601

DATETIME_INPUT_FORMATS = [ISO_8601, '%Y-%m-%d']


def clean_text(v):
    """Strip every tag; plain characters such as ``&`` and ``<`` survive as typed."""
    return html.unescape(bleach.clean((v or '').strip(), tags=set(), strip=True)).strip()


class IdSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)


class PageSerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=50)
    offset = serializers.IntegerField(required=False, min_value=0, default=0)


class MoneyField(serializers.DecimalField):
    """Two-decimal amount rendered as a string."""
    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 10)
        kwargs.setdefault('decimal_places', 2)
        super().__init__(**kwargs)
