from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from clinic_payroll.selectors.payroll_selector import get_payroll_by_id
from clinic_payroll.serializers.deduction_serializer import (
    DeductionUpsertSerializer, DeductionBulkSerializer, DeductionDivisorSerializer,
)
from clinic_payroll.serializers.payroll_serializer import DeductionReadSerializer, PayrollReadSerializer
from clinic_payroll.services import deduction_service
from .base import PayrollViewSet
from .utils import (
    extend_schema, extend_schema_view, OpenApiExample, OpenApiResponse,
    path_int, std_errors,
)


@extend_schema_view(
    create=extend_schema(
        tags=["Deduction"], summary="Create or update one deduction line by type",
        request=DeductionUpsertSerializer,
        responses={200: DeductionReadSerializer, **std_errors()},
        examples=[OpenApiExample("Payload", value={"payroll_id": 1, "type": "CASH_ADVANCE", "amount": "500.00"})],
    ),
    destroy=extend_schema(
        tags=["Deduction"], summary="Delete a deduction line",
        parameters=[path_int("id", "Deduction ID")],
        responses={204: OpenApiResponse(description="No Content"), **std_errors()},
    ),
)
class DeductionViewSet(PayrollViewSet):
    """Deduction lines of a payroll period. Every write recalculates the period totals."""

    # POST /deductions/
    def create(self, request):
        ser = DeductionUpsertSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data
        obj = deduction_service.upsert_deduction(
            payroll_id=d["payroll_id"], deduction_type=d["type"],
            amount=d.get("amount"), notes=d.get("notes"),
        )
        return Response(DeductionReadSerializer(obj).data)

    # DELETE /deductions/{id}/
    def destroy(self, request, pk=None):
        deduction_service.delete_deduction(deduction_id=int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # GET /deductions/payroll/{payroll_id}/
    @extend_schema(
        tags=["Deduction"], summary="Deduction lines of a payroll period",
        parameters=[path_int("payroll_id", "Payroll period ID")],
        responses={200: DeductionReadSerializer(many=True), **std_errors()},
    )
    @action(detail=False, methods=["get"], url_path=r"payroll/(?P<payroll_id>\d+)")
    def for_payroll(self, request, payroll_id=None):
        payroll = get_payroll_by_id(int(payroll_id))
        rows = deduction_service.list_deductions(payroll.id)
        return Response(DeductionReadSerializer(rows, many=True).data)

    # POST /deductions/bulk/
    @extend_schema(
        tags=["Deduction"], summary="Replace all deduction lines of a payroll period",
        request=DeductionBulkSerializer,
        responses={200: PayrollReadSerializer, **std_errors()},
    )
    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request):
        ser = DeductionBulkSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        payroll_id = ser.validated_data["payroll_id"]
        deduction_service.bulk_replace_deductions(payroll_id=payroll_id, deductions=ser.validated_data["deductions"])
        return Response(PayrollReadSerializer(get_payroll_by_id(payroll_id)).data)

    # POST /deductions/payroll/{payroll_id}/apply-fixed/
    @extend_schema(
        tags=["Deduction"],
        summary="Add the employee's fixed deductions divided by the period divisor",
        parameters=[path_int("payroll_id", "Payroll period ID")],
        request=None,
        responses={200: PayrollReadSerializer, **std_errors()},
    )
    @action(detail=False, methods=["post"], url_path=r"payroll/(?P<payroll_id>\d+)/apply-fixed")
    def apply_fixed(self, request, payroll_id=None):
        deduction_service.apply_fixed_deductions(payroll_id=int(payroll_id))
        return Response(PayrollReadSerializer(get_payroll_by_id(int(payroll_id))).data)

    # PUT /deductions/payroll/{payroll_id}/divisor/
    @extend_schema(
        tags=["Deduction"], summary="Set the fixed deduction divisor of a payroll period",
        parameters=[path_int("payroll_id", "Payroll period ID")],
        request=DeductionDivisorSerializer,
        responses={200: PayrollReadSerializer, **std_errors()},
        examples=[OpenApiExample("Payload", value={"deduction_divisor": 2})],
    )
    @action(detail=False, methods=["put"], url_path=r"payroll/(?P<payroll_id>\d+)/divisor")
    def divisor(self, request, payroll_id=None):
        ser = DeductionDivisorSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        deduction_service.set_deduction_divisor(
            payroll_id=int(payroll_id), divisor=ser.validated_data["deduction_divisor"],
        )
        return Response(PayrollReadSerializer(get_payroll_by_id(int(payroll_id))).data)
