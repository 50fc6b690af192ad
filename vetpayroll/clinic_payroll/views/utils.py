# views/utils.py
"""
drf-spectacular helpers shared by the payroll viewsets: the {"detail": ...}
error schema, path/query parameter builders and response mappings.
"""
from drf_spectacular.utils import (
    extend_schema, extend_schema_view,
    OpenApiParameter, OpenApiExample, OpenApiResponse, inline_serializer,
)
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="Error",
    fields={"detail": serializers.CharField()}
)

# ---- Param helpers

def path_int(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.PATH, description=description)

def path_str(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.PATH, description=description)

def q_int(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.QUERY, required=required, description=description)

def q_str(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.QUERY, required=required, description=description)

def q_bool(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.BOOL, OpenApiParameter.QUERY, required=required, description=description)

def q_date(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.DATE, OpenApiParameter.QUERY, required=required, description=description)

# ---- Convenience for common responses

def responses_ok(serializer_cls, many: bool = False, description: str | None = None, extra: dict | None = None):
    """Build a {200: ...} response mapping quickly."""
    serializer = serializer_cls(many=many) if isinstance(serializer_cls, type) else serializer_cls
    mapping = {200: OpenApiResponse(response=serializer, description=description or "OK")}
    if extra:
        mapping.update(extra)
    return mapping


def std_errors(extra: dict | None = None):
    """Payroll endpoints answer 400 on invalid input and 404 on unknown ids."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found"),
    }
    if extra:
        errs.update(extra)
    return errs
