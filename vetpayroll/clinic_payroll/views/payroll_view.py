from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from clinic_payroll.selectors.payroll_selector import filter_payrolls, get_payroll_by_id
from clinic_payroll.serializers.payroll_serializer import (
    PayrollReadSerializer, PayrollListSerializer, PayrollUpdateSerializer, PayrollCreatePeriodSerializer,
    PayrollSummaryQuerySerializer, PayrollSummarySerializer,
)
from clinic_payroll.services import payroll_service
from .base import PayrollViewSet
from .utils import (
    extend_schema, extend_schema_view, OpenApiExample, OpenApiResponse,
    path_int, q_int, q_str, q_date, std_errors,
)


@extend_schema_view(
    list=extend_schema(
        tags=["Payroll"],
        summary="List payroll periods",
        parameters=[
            q_int("branch_id", "Filter by branch (csv allowed)"),
            q_int("employee_id", "Filter by employee (csv allowed)"),
            q_str("status", "DRAFT | PENDING | APPROVED | PAID (csv allowed)"),
            q_date("start_date", "Period start date"),
            q_date("end_date", "Period end date"),
        ],
        responses={200: PayrollListSerializer(many=True)},
    ),
    retrieve=extend_schema(
        tags=["Payroll"], summary="Payroll period with incentive and deduction lines",
        parameters=[path_int("id", "Payroll period ID")],
        responses={200: PayrollReadSerializer, **std_errors()},
    ),
    partial_update=extend_schema(
        tags=["Payroll"],
        summary="Update attendance / allowances / status, then recalculate totals",
        parameters=[path_int("id", "Payroll period ID")],
        request=PayrollUpdateSerializer,
        responses={200: PayrollReadSerializer, **std_errors()},
        examples=[OpenApiExample("Payload", value={"working_days": 13, "absences": 0, "holidays": 1, "overtime_hours": 4})],
    ),
    destroy=extend_schema(
        tags=["Payroll"], summary="Delete payroll period (lines cascade)",
        parameters=[path_int("id", "Payroll period ID")],
        responses={204: OpenApiResponse(description="No Content"), **std_errors()},
    ),
)
class PayrollPeriodViewSet(PayrollViewSet):
    """
    PayrollPeriod rows. Stored totals are always the output of the recalculation,
    never written directly.
    """

    # GET /payrolls/?branch_id=&employee_id=&status=&start_date=&end_date=
    def list(self, request):
        qs = filter_payrolls(request.query_params)
        return self.list_response(qs, PayrollListSerializer)

    # GET /payrolls/{id}/
    def retrieve(self, request, pk=None):
        return Response(PayrollReadSerializer(get_payroll_by_id(int(pk))).data)

    # PATCH /payrolls/{id}/
    def partial_update(self, request, pk=None):
        ser = PayrollUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        payroll_service.update_payroll(payroll_id=int(pk), changes=ser.validated_data)
        return Response(PayrollReadSerializer(get_payroll_by_id(int(pk))).data)

    # DELETE /payrolls/{id}/
    def destroy(self, request, pk=None):
        payroll_service.delete_payroll(payroll_id=int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # POST /payrolls/create-period/
    @extend_schema(
        tags=["Payroll"],
        summary="Create a DRAFT period for every active employee of a branch (existing ones returned)",
        request=PayrollCreatePeriodSerializer,
        responses={201: PayrollListSerializer(many=True), **std_errors()},
        examples=[OpenApiExample("Payload", value={"branch_id": 1, "start_date": "2025-01-01", "end_date": "2025-01-15"})],
    )
    @action(detail=False, methods=["post"], url_path="create-period")
    def create_period(self, request):
        ser = PayrollCreatePeriodSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        rows = payroll_service.create_period_for_branch(**ser.validated_data)
        return Response(PayrollListSerializer(rows, many=True).data, status=status.HTTP_201_CREATED)

    # POST /payrolls/{id}/calculate/
    @extend_schema(
        tags=["Payroll"], summary="Recalculate stored totals",
        parameters=[path_int("id", "Payroll period ID")],
        request=None,
        responses={200: PayrollReadSerializer, **std_errors()},
    )
    @action(detail=True, methods=["post"], url_path="calculate")
    def calculate(self, request, pk=None):
        payroll_service.recalculate(payroll_id=int(pk))
        return Response(PayrollReadSerializer(get_payroll_by_id(int(pk))).data)

    # GET /payrolls/summary/?start_date=&end_date=&branch_id=
    @extend_schema(
        tags=["Payroll"],
        summary="Totals and status counts of the periods inside a date range",
        parameters=[
            q_date("start_date", "Range start (periods starting on/after)", required=True),
            q_date("end_date", "Range end (periods ending on/before)", required=True),
            q_int("branch_id", "Limit to one branch"),
        ],
        responses={200: PayrollSummarySerializer, **std_errors()},
    )
    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        ser = PayrollSummaryQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        result = payroll_service.payroll_summary(**ser.validated_data)
        return Response(PayrollSummarySerializer(result).data)
