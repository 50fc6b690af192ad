# -*- coding: utf-8 -*-
"""
Base ViewSet for the payroll API:
- service exceptions → {"detail": ...} responses (DoesNotExist 404, ValidationError 400, PermissionError 403)
- PageNumberPagination helpers for list endpoints
"""
from __future__ import annotations

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from rest_framework import status, viewsets
from rest_framework.response import Response



def error_detail(ex: DjangoValidationError):
    if hasattr(ex, "error_dict"):
        return {k: [str(m) for m in v] for k, v in ex.message_dict.items()}
    messages = ex.messages
    return messages[0] if len(messages) == 1 else messages


class PayrollViewSet(viewsets.ViewSet):

    def handle_exception(self, exc):
        if isinstance(exc, ObjectDoesNotExist):
            return Response({"detail": str(exc) or "Not found."}, status=status.HTTP_404_NOT_FOUND)
        if isinstance(exc, DjangoValidationError):
            return Response({"detail": error_detail(exc)}, status=status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, ValueError):
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, PermissionError):
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return super().handle_exception(exc)

    # ===== Pagination helpers (DRF PageNumberPagination) =====
    def paginate_queryset(self, queryset):
        if getattr(self, "paginator", None) is None:
            from clinic_payroll.utils.pagination import DefaultPagination
            self.paginator = DefaultPagination()
        return self.paginator.paginate_queryset(queryset, self.request, view=self)

    def get_paginated_response(self, data):
        return self.paginator.get_paginated_response(data)

    def list_response(self, queryset, serializer_cls):
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(serializer_cls(page, many=True).data)
        return Response(serializer_cls(queryset, many=True).data)
