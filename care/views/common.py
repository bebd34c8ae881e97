"""Small helpers shared by the RPC view functions."""
from __future__ import annotations

from rest_framework.response import Response


def ok(data=None, status: int = 200) -> Response:
    return Response({'ok': True, 'data': data}, status=status)


def validated(serializer_class, data) -> dict:
    """Validate *data* with *serializer_class*; a failure raises a 400."""
    s = serializer_class(data=data)
    s.is_valid(raise_exception=True)
    return s.validated_data


def without_id(vd: dict) -> dict:
    fields = dict(vd)
    fields.pop('id', None)
    return fields
