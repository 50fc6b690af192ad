from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from clinic_payroll.incentive_defaults import IncentiveConfigItem
from clinic_payroll.serializers.incentive_config_serializer import (
    IncentiveConfigReadSerializer, IncentiveConfigWriteSerializer,
)
from clinic_payroll.services.incentive_config_service import get_config_store
from .base import PayrollViewSet
from .utils import (
    extend_schema, extend_schema_view, OpenApiExample, path_str, std_errors,
)


@extend_schema_view(
    list=extend_schema(
        tags=["IncentiveConfig"],
        summary="Active incentive configs (built-in defaults until configs are initialized)",
        responses={200: IncentiveConfigReadSerializer(many=True)},
    ),
    update=extend_schema(
        tags=["IncentiveConfig"],
        summary="Create or update the config of one incentive type (version is bumped)",
        parameters=[path_str("incentive_type", "Incentive type code, e.g. CBC")],
        request=IncentiveConfigWriteSerializer,
        responses={200: IncentiveConfigReadSerializer, **std_errors()},
        examples=[OpenApiExample("Payload", value={"rate": "60.00", "positions": ["RESIDENT_VETERINARIAN"]})],
    ),
)
class IncentiveConfigViewSet(PayrollViewSet):
    lookup_field = "incentive_type"
    lookup_value_regex = "[A-Za-z0-9_]+"

    # GET /incentive-configs/
    def list(self, request):
        items = get_config_store().list_active()
        return Response(IncentiveConfigReadSerializer(items, many=True).data)

    # PUT /incentive-configs/{incentive_type}/
    def update(self, request, incentive_type=None):
        ser = IncentiveConfigWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        obj = get_config_store().upsert(incentive_type, ser.validated_data)
        return Response(IncentiveConfigReadSerializer(IncentiveConfigItem.from_model(obj)).data)

    # GET /incentive-configs/position/{position}/
    @extend_schema(
        tags=["IncentiveConfig"], summary="Incentive types a position receives",
        parameters=[path_str("position", "Position code")],
        responses={200: IncentiveConfigReadSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path=r"position/(?P<position>[A-Za-z_]+)")
    def for_position(self, request, position=None):
        items = get_config_store().for_position(position.upper())
        return Response(IncentiveConfigReadSerializer(items, many=True).data)

    # POST /incentive-configs/init/
    @extend_schema(
        tags=["IncentiveConfig"], summary="Persist the built-in default configs (only once)",
        request=None,
        responses={201: IncentiveConfigReadSerializer(many=True), **std_errors()},
    )
    @action(detail=False, methods=["post"], url_path="init")
    def init_defaults(self, request):
        rows = get_config_store().seed_defaults()
        items = [IncentiveConfigItem.from_model(obj) for obj in rows]
        return Response(IncentiveConfigReadSerializer(items, many=True).data, status=status.HTTP_201_CREATED)
