from rest_framework import serializers, status
from rest_framework.decorators import action
from rest_framework.response import Response

from clinic_payroll.selectors.employee_selector import (
    filter_employees, get_employee_by_id, list_fixed_deductions,
)
from clinic_payroll.serializers.employee_serializer import (
    EmployeeReadSerializer, EmployeeWriteSerializer,
    FixedDeductionSerializer, FixedDeductionsReplaceSerializer,
    IncentiveExclusionSerializer, ExclusionToggleSerializer, ExclusionToggleResultSerializer,
)
from clinic_payroll.services import employee_service, exclusion_service
from clinic_payroll.services.rate_service import rate_formula_description
from .base import PayrollViewSet
from .utils import (
    extend_schema, extend_schema_view, inline_serializer, OpenApiExample,
    path_int, q_int, q_str, q_bool, responses_ok, std_errors,
)


@extend_schema_view(
    list=extend_schema(
        tags=["Employee"],
        summary="List employees",
        parameters=[
            q_int("branch_id", "Filter by branch (csv allowed)"),
            q_str("position", "Filter by position (csv allowed)"),
            q_bool("is_active", "Filter by active flag"),
            q_str("q", "Search by name (contains)"),
        ],
        responses={200: EmployeeReadSerializer(many=True)},
    ),
    retrieve=extend_schema(
        tags=["Employee"], summary="Employee detail",
        parameters=[path_int("id", "Employee ID")],
        responses={200: EmployeeReadSerializer, **std_errors()},
    ),
    create=extend_schema(
        tags=["Employee"],
        summary="Create employee (rates computed from salary unless both manual rates are given)",
        request=EmployeeWriteSerializer,
        responses={201: EmployeeReadSerializer, **std_errors()},
        examples=[OpenApiExample(
            "Payload",
            value={"branch": 1, "name": "Dr. Reyes", "position": "RESIDENT_VETERINARIAN", "salary": "45000.00",
                   "fixed_deductions": [{"type": "SSS", "category": "GOVERNMENT", "amount": "1125.00"}]},
        )],
    ),
    partial_update=extend_schema(
        tags=["Employee"],
        summary="Update employee (rates kept unless recalculate_rates or manual rates)",
        parameters=[path_int("id", "Employee ID")],
        request=EmployeeWriteSerializer,
        responses={200: EmployeeReadSerializer, **std_errors()},
    ),
    destroy=extend_schema(
        tags=["Employee"], summary="Deactivate employee",
        parameters=[path_int("id", "Employee ID")],
        responses={200: EmployeeReadSerializer, **std_errors()},
    ),
)
class EmployeeViewSet(PayrollViewSet):
    """
    Employee rows with rate calculation, fixed deduction templates and
    per-type incentive exclusions.
    """

    # GET /employees/?branch_id=&position=&is_active=&q=
    def list(self, request):
        qs = filter_employees(request.query_params)
        return self.list_response(qs, EmployeeReadSerializer)

    # GET /employees/{id}/
    def retrieve(self, request, pk=None):
        return Response(EmployeeReadSerializer(get_employee_by_id(int(pk))).data)

    # POST /employees/
    def create(self, request):
        ser = EmployeeWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        data.pop("recalculate_rates", None)
        fixed = data.pop("fixed_deductions", None)
        employee = employee_service.create_employee(data, fixed_deductions=fixed)
        return Response(EmployeeReadSerializer(employee).data, status=status.HTTP_201_CREATED)

    # PATCH /employees/{id}/
    def partial_update(self, request, pk=None):
        employee = get_employee_by_id(int(pk))
        ser = EmployeeWriteSerializer(employee, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        recalc = data.pop("recalculate_rates", False)
        fixed = data.pop("fixed_deductions", None)
        employee = employee_service.update_employee(employee, data, recalculate_rates=recalc)
        if fixed is not None:
            employee_service.replace_fixed_deductions(employee=employee, deductions=fixed)
        return Response(EmployeeReadSerializer(employee).data)

    # DELETE /employees/{id}/  (deactivate, payroll history is kept)
    def destroy(self, request, pk=None):
        employee = employee_service.deactivate_employee(get_employee_by_id(int(pk)))
        return Response(EmployeeReadSerializer(employee).data)

    # POST /employees/{id}/recalculate-rates/
    @extend_schema(
        tags=["Employee"], summary="Recompute daily/hourly rates from salary",
        request=None, responses={200: EmployeeReadSerializer, **std_errors()},
    )
    @action(detail=True, methods=["post"], url_path="recalculate-rates")
    def recalculate_rates(self, request, pk=None):
        employee = employee_service.recalculate_rates(get_employee_by_id(int(pk)))
        return Response(EmployeeReadSerializer(employee).data)

    # GET /employees/rate-formula/?position=
    @extend_schema(
        tags=["Employee"], summary="Rate formula description for a position",
        parameters=[q_str("position", "Position code", required=True)],
        responses=responses_ok(inline_serializer(
            name="RateFormula",
            fields={"position": serializers.CharField(), "formula": serializers.CharField()},
        )),
    )
    @action(detail=False, methods=["get"], url_path="rate-formula")
    def rate_formula(self, request):
        position = (request.query_params.get("position") or "").strip().upper()
        return Response({"position": position, "formula": rate_formula_description(position)})

    # GET|PUT /employees/{id}/fixed-deductions/
    @extend_schema(
        tags=["Employee"], summary="List or replace fixed deduction templates",
        request=FixedDeductionsReplaceSerializer,
        responses={200: FixedDeductionSerializer(many=True), **std_errors()},
    )
    @action(detail=True, methods=["get", "put"], url_path="fixed-deductions")
    def fixed_deductions(self, request, pk=None):
        employee = get_employee_by_id(int(pk))
        if request.method == "GET":
            rows = list_fixed_deductions(employee.id)
        else:
            ser = FixedDeductionsReplaceSerializer(data=request.data)
            ser.is_valid(raise_exception=True)
            rows = employee_service.replace_fixed_deductions(
                employee=employee, deductions=ser.validated_data["deductions"],
            )
        return Response(FixedDeductionSerializer(rows, many=True).data)

    # GET /employees/{id}/incentive-exclusions/
    @extend_schema(
        tags=["Employee"], summary="Incentive types the employee is excluded from",
        responses={200: IncentiveExclusionSerializer(many=True), **std_errors()},
    )
    @action(detail=True, methods=["get"], url_path="incentive-exclusions")
    def incentive_exclusions(self, request, pk=None):
        rows = exclusion_service.list_exclusions(int(pk))
        return Response(IncentiveExclusionSerializer(rows, many=True).data)

    # POST /employees/{id}/incentive-exclusions/toggle/
    @extend_schema(
        tags=["Employee"], summary="Toggle exclusion from one incentive type",
        request=ExclusionToggleSerializer,
        responses={200: ExclusionToggleResultSerializer, **std_errors()},
        examples=[OpenApiExample("Payload", value={"incentive_type": "CONFINEMENT_VET"})],
    )
    @action(detail=True, methods=["post"], url_path="incentive-exclusions/toggle")
    def toggle_exclusion(self, request, pk=None):
        ser = ExclusionToggleSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        incentive_type = (ser.validated_data.get("incentive_type") or "").strip().upper()
        result = exclusion_service.toggle_exclusion(employee_id=int(pk), incentive_type=incentive_type)
        return Response(ExclusionToggleResultSerializer(result).data)
