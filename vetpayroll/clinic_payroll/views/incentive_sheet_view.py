from rest_framework import serializers
from rest_framework.decorators import action
from rest_framework.response import Response

from clinic_payroll.selectors.incentive_sheet_selector import get_sheet_by_id
from clinic_payroll.serializers.incentive_sheet_serializer import (
    SheetQuerySerializer, DailyInputsSaveSerializer, SheetOverviewSerializer,
    DistributionReportSerializer,
)
from clinic_payroll.services.distribution_service import (
    distribute_sheet, distribution_config, sheet_overview,
)
from clinic_payroll.services.incentive_sheet_service import get_or_create_sheet, save_daily_inputs
from .base import PayrollViewSet
from .utils import (
    extend_schema, extend_schema_view, inline_serializer, OpenApiExample,
    path_int, q_int, q_date, responses_ok, std_errors,
)


@extend_schema_view(
    list=extend_schema(
        tags=["IncentiveSheet"],
        summary="Get (or create) the branch sheet for a period with grid, totals and distribution preview",
        parameters=[
            q_int("branch_id", "Branch ID", required=True),
            q_date("start_date", "Period start (YYYY-MM-DD)", required=True),
            q_date("end_date", "Period end (YYYY-MM-DD)", required=True),
        ],
        responses={200: SheetOverviewSerializer, **std_errors()},
    ),
    retrieve=extend_schema(
        tags=["IncentiveSheet"], summary="Sheet overview by id",
        parameters=[path_int("id", "Sheet ID")],
        responses={200: SheetOverviewSerializer, **std_errors()},
    ),
)
class IncentiveSheetViewSet(PayrollViewSet):
    """
    Branch-wide daily tally of GROOMING / SURGERY / EMERGENCY / CONFINEMENT and its
    distribution into the payrolls of the same period.
    """

    # GET /incentive-sheets/?branch_id=&start_date=&end_date=
    def list(self, request):
        ser = SheetQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        sheet, _ = get_or_create_sheet(**ser.validated_data)
        return Response(SheetOverviewSerializer(sheet_overview(sheet)).data)

    # GET /incentive-sheets/{id}/
    def retrieve(self, request, pk=None):
        sheet = get_sheet_by_id(int(pk))
        return Response(SheetOverviewSerializer(sheet_overview(sheet)).data)

    # PUT /incentive-sheets/{id}/inputs/
    @extend_schema(
        tags=["IncentiveSheet"],
        summary="Save daily tallies (value 0 clears the cell, the whole batch is atomic)",
        parameters=[path_int("id", "Sheet ID")],
        request=DailyInputsSaveSerializer,
        responses={200: SheetOverviewSerializer, **std_errors()},
        examples=[OpenApiExample(
            "Payload",
            value={"inputs": [{"date": "2025-01-03", "type": "CONFINEMENT", "value": 4}]},
        )],
    )
    @action(detail=True, methods=["put"], url_path="inputs")
    def inputs(self, request, pk=None):
        ser = DailyInputsSaveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        sheet = save_daily_inputs(sheet_id=int(pk), inputs=ser.validated_data["inputs"])
        return Response(SheetOverviewSerializer(sheet_overview(sheet)).data)

    # POST /incentive-sheets/{id}/distribute/
    @extend_schema(
        tags=["IncentiveSheet"],
        summary="Distribute the period totals into the matching payrolls (re-running overwrites)",
        parameters=[path_int("id", "Sheet ID")],
        request=None,
        responses={200: DistributionReportSerializer, **std_errors()},
    )
    @action(detail=True, methods=["post"], url_path="distribute")
    def distribute(self, request, pk=None):
        report = distribute_sheet(sheet_id=int(pk))
        return Response(DistributionReportSerializer(report).data)

    # GET /incentive-sheets/config/
    @extend_schema(
        tags=["IncentiveSheet"], summary="Sheet input types and distribution rules",
        responses=responses_ok(inline_serializer(
            name="DistributionConfig",
            fields={
                "shared_types": serializers.ListField(child=serializers.CharField()),
                "rules": serializers.ListField(child=serializers.DictField()),
            },
        )),
    )
    @action(detail=False, methods=["get"], url_path="config")
    def config(self, request):
        cfg = distribution_config()
        cfg["rules"] = [{**r, "rate": str(r["rate"])} for r in cfg["rules"]]
        return Response(cfg)
