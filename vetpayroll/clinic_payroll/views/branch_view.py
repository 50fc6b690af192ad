from rest_framework import status
from rest_framework.response import Response

from clinic_payroll.selectors._common import as_bool
from clinic_payroll.selectors.employee_selector import get_branch_by_id, list_branches
from clinic_payroll.serializers.branch_serializer import (
    BranchReadSerializer, BranchUpdateResultSerializer, BranchWriteSerializer,
)
from clinic_payroll.services.branch_service import create_branch, update_branch
from .base import PayrollViewSet
from .utils import (
    extend_schema, extend_schema_view, OpenApiExample, OpenApiResponse,
    path_int, q_bool, std_errors,
)


@extend_schema_view(
    list=extend_schema(
        tags=["Branch"],
        summary="List branches",
        parameters=[q_bool("active_only", "Only active branches (default true)")],
        responses={200: BranchReadSerializer(many=True)},
    ),
    retrieve=extend_schema(
        tags=["Branch"], summary="Branch detail",
        parameters=[path_int("id", "Branch ID")],
        responses={200: BranchReadSerializer, **std_errors()},
    ),
    create=extend_schema(
        tags=["Branch"], summary="Create branch",
        request=BranchWriteSerializer,
        responses={201: BranchReadSerializer, **std_errors()},
        examples=[OpenApiExample(
            "Payload",
            value={"name": "Main", "working_days_per_month": 26, "working_hours_per_day": 8},
        )],
    ),
    partial_update=extend_schema(
        tags=["Branch"],
        summary="Update branch (changing D/H recomputes Resident Veterinarian rates)",
        parameters=[path_int("id", "Branch ID")],
        request=BranchWriteSerializer,
        responses={200: BranchUpdateResultSerializer, **std_errors()},
    ),
)
class BranchViewSet(PayrollViewSet):
    """
    Branch CRUD. Working days (D) / hours (H) feed the branch rate formula,
    so an update that changes either one recomputes the affected employees.
    """

    # GET /branches/?active_only=
    def list(self, request):
        active_only = as_bool(request.query_params.get("active_only"))
        qs = list_branches(active_only=True if active_only is None else active_only)
        return self.list_response(qs, BranchReadSerializer)

    # GET /branches/{id}/
    def retrieve(self, request, pk=None):
        return Response(BranchReadSerializer(get_branch_by_id(int(pk))).data)

    # POST /branches/
    def create(self, request):
        ser = BranchWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        branch = create_branch(ser.validated_data)
        return Response(BranchReadSerializer(branch).data, status=status.HTTP_201_CREATED)

    # PATCH /branches/{id}/
    def partial_update(self, request, pk=None):
        branch = get_branch_by_id(int(pk))
        ser = BranchWriteSerializer(branch, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        branch, recalculated = update_branch(branch, ser.validated_data)
        return Response({
            "branch": BranchReadSerializer(branch).data,
            "recalculated_employees": recalculated,
        })
