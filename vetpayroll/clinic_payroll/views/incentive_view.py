from rest_framework import serializers, status
from rest_framework.decorators import action
from rest_framework.response import Response

from clinic_payroll.selectors.employee_selector import get_branch_by_id
from clinic_payroll.selectors.payroll_selector import get_payroll_by_id
from clinic_payroll.serializers.incentive_serializer import (
    IncentiveUpsertSerializer, IncentiveBulkSerializer, IncentiveCalculateSerializer,
    CalculatedBulkSerializer,
)
from clinic_payroll.serializers.payroll_serializer import IncentiveReadSerializer, PayrollReadSerializer
from clinic_payroll.services import incentive_service
from clinic_payroll.services.eligibility_service import eligible_counts_for_branch
from clinic_payroll.services.incentive_config_service import get_config_store
from clinic_payroll.services.incentive_formula import calculate_bulk
from .base import PayrollViewSet
from .utils import (
    extend_schema, extend_schema_view, inline_serializer, OpenApiExample, OpenApiResponse,
    path_int, std_errors,
)


@extend_schema_view(
    create=extend_schema(
        tags=["Incentive"],
        summary="Create or update one incentive line (configured rate unless overridden, never pooled)",
        request=IncentiveUpsertSerializer,
        responses={200: IncentiveReadSerializer, **std_errors()},
        examples=[OpenApiExample("Payload", value={"payroll_id": 1, "type": "CBC", "count": 5})],
    ),
    destroy=extend_schema(
        tags=["Incentive"], summary="Delete an incentive line",
        parameters=[path_int("id", "Incentive ID")],
        responses={204: OpenApiResponse(description="No Content"), **std_errors()},
    ),
)
class IncentiveViewSet(PayrollViewSet):
    """Incentive lines of a payroll period. Every write recalculates the period totals."""

    # POST /incentives/
    def create(self, request):
        ser = IncentiveUpsertSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data
        obj = incentive_service.upsert_incentive(
            payroll_id=d["payroll_id"], incentive_type=d["type"],
            count=d.get("count"), input_value=d.get("input_value"),
            rate=d.get("rate"), date_earned=d.get("date_earned"),
        )
        return Response(IncentiveReadSerializer(obj).data)

    # DELETE /incentives/{id}/
    def destroy(self, request, pk=None):
        incentive_service.delete_incentive(incentive_id=int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # GET /incentives/payroll/{payroll_id}/
    @extend_schema(
        tags=["Incentive"], summary="Incentive lines of a payroll period",
        parameters=[path_int("payroll_id", "Payroll period ID")],
        responses={200: IncentiveReadSerializer(many=True), **std_errors()},
    )
    @action(detail=False, methods=["get"], url_path=r"payroll/(?P<payroll_id>\d+)")
    def for_payroll(self, request, payroll_id=None):
        payroll = get_payroll_by_id(int(payroll_id))
        rows = incentive_service.list_incentives(payroll.id)
        return Response(IncentiveReadSerializer(rows, many=True).data)

    # POST /incentives/bulk/
    @extend_schema(
        tags=["Incentive"],
        summary="Replace all incentive lines of a payroll period",
        description="Lines without count or input value are dropped. Shared types are pooled "
                    "over the branch division count unless their config disables it.",
        request=IncentiveBulkSerializer,
        responses={200: PayrollReadSerializer, **std_errors()},
    )
    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request):
        ser = IncentiveBulkSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        payroll = incentive_service.bulk_replace_incentives(
            payroll_id=ser.validated_data["payroll_id"],
            incentives=ser.validated_data["incentives"],
        )
        return Response(PayrollReadSerializer(payroll).data)

    # POST /incentives/calculate/
    @extend_schema(
        tags=["Incentive"], summary="Preview amounts for a list of lines (nothing saved)",
        request=IncentiveCalculateSerializer,
        responses={200: CalculatedBulkSerializer, **std_errors()},
    )
    @action(detail=False, methods=["post"], url_path="calculate")
    def calculate(self, request):
        ser = IncentiveCalculateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = calculate_bulk(ser.validated_data["incentives"], get_config_store())
        return Response(CalculatedBulkSerializer(result).data)

    # GET /incentives/eligible-counts/{branch_id}/
    @extend_schema(
        tags=["Incentive"], summary="Division count per shared incentive type for a branch",
        parameters=[path_int("branch_id", "Branch ID")],
        responses={200: inline_serializer(
            name="EligibleCounts", fields={"branch_id": serializers.IntegerField(), "counts": serializers.DictField()},
        ), **std_errors()},
    )
    @action(detail=False, methods=["get"], url_path=r"eligible-counts/(?P<branch_id>\d+)")
    def eligible_counts(self, request, branch_id=None):
        branch = get_branch_by_id(int(branch_id))
        counts = eligible_counts_for_branch(branch.id, get_config_store())
        return Response({"branch_id": branch.id, "counts": counts})
