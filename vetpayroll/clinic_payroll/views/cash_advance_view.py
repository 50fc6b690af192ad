from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from clinic_payroll.selectors.cash_advance_selector import filter_cash_advances, get_cash_advance_by_id
from clinic_payroll.serializers.cash_advance_serializer import (
    CashAdvanceReadSerializer, CashAdvanceCreateSerializer, CashAdvanceUpdateSerializer,
    CashAdvanceMarkPaidSerializer, UnpaidCashAdvancesSerializer,
)
from clinic_payroll.services import cash_advance_service
from .base import PayrollViewSet
from .utils import (
    extend_schema, extend_schema_view, OpenApiExample, OpenApiResponse,
    path_int, q_int, q_bool, std_errors,
)


@extend_schema_view(
    list=extend_schema(
        tags=["CashAdvance"],
        summary="List cash advances",
        parameters=[
            q_int("employee_id", "Filter by employee (csv allowed)"),
            q_int("branch_id", "Filter by branch (csv allowed)"),
            q_bool("is_paid", "Filter by paid flag"),
        ],
        responses={200: CashAdvanceReadSerializer(many=True)},
    ),
    retrieve=extend_schema(
        tags=["CashAdvance"], summary="Cash advance detail",
        parameters=[path_int("id", "Cash advance ID")],
        responses={200: CashAdvanceReadSerializer, **std_errors()},
    ),
    create=extend_schema(
        tags=["CashAdvance"], summary="Record a cash advance",
        request=CashAdvanceCreateSerializer,
        responses={201: CashAdvanceReadSerializer, **std_errors()},
        examples=[OpenApiExample("Payload", value={"employee_id": 1, "amount": "1500.00", "date_taken": "2025-01-06"})],
    ),
    partial_update=extend_schema(
        tags=["CashAdvance"], summary="Edit an unpaid cash advance",
        parameters=[path_int("id", "Cash advance ID")],
        request=CashAdvanceUpdateSerializer,
        responses={200: CashAdvanceReadSerializer, **std_errors()},
    ),
    destroy=extend_schema(
        tags=["CashAdvance"], summary="Delete an unpaid cash advance",
        parameters=[path_int("id", "Cash advance ID")],
        responses={204: OpenApiResponse(description="No Content"), **std_errors()},
    ),
)
class CashAdvanceViewSet(PayrollViewSet):
    """Cash advance ledger. Paid advances are read-only."""

    # GET /cash-advances/?employee_id=&branch_id=&is_paid=
    def list(self, request):
        qs = filter_cash_advances(request.query_params)
        return self.list_response(qs, CashAdvanceReadSerializer)

    # GET /cash-advances/{id}/
    def retrieve(self, request, pk=None):
        return Response(CashAdvanceReadSerializer(get_cash_advance_by_id(int(pk))).data)

    # POST /cash-advances/
    def create(self, request):
        ser = CashAdvanceCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        obj = cash_advance_service.create_cash_advance(**ser.validated_data)
        return Response(CashAdvanceReadSerializer(get_cash_advance_by_id(obj.id)).data, status=status.HTTP_201_CREATED)

    # PATCH /cash-advances/{id}/
    def partial_update(self, request, pk=None):
        ser = CashAdvanceUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        cash_advance_service.update_cash_advance(advance_id=int(pk), changes=ser.validated_data)
        return Response(CashAdvanceReadSerializer(get_cash_advance_by_id(int(pk))).data)

    # DELETE /cash-advances/{id}/
    def destroy(self, request, pk=None):
        cash_advance_service.delete_cash_advance(advance_id=int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # POST /cash-advances/{id}/mark-paid/
    @extend_schema(
        tags=["CashAdvance"],
        summary="Mark paid; with payroll_id the amount is added to that period's CASH_ADVANCE deduction",
        parameters=[path_int("id", "Cash advance ID")],
        request=CashAdvanceMarkPaidSerializer,
        responses={200: CashAdvanceReadSerializer, **std_errors()},
        examples=[OpenApiExample("Payload", value={"payroll_id": 1})],
    )
    @action(detail=True, methods=["post"], url_path="mark-paid")
    def mark_paid(self, request, pk=None):
        ser = CashAdvanceMarkPaidSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        cash_advance_service.mark_paid(advance_id=int(pk), payroll_id=ser.validated_data.get("payroll_id"))
        return Response(CashAdvanceReadSerializer(get_cash_advance_by_id(int(pk))).data)

    # GET /cash-advances/employee/{employee_id}/unpaid/
    @extend_schema(
        tags=["CashAdvance"], summary="Unpaid cash advances of an employee with their total",
        parameters=[path_int("employee_id", "Employee ID")],
        responses={200: UnpaidCashAdvancesSerializer, **std_errors()},
    )
    @action(detail=False, methods=["get"], url_path=r"employee/(?P<employee_id>\d+)/unpaid")
    def unpaid(self, request, employee_id=None):
        result = cash_advance_service.unpaid_for_employee(int(employee_id))
        return Response(UnpaidCashAdvancesSerializer(result).data)
