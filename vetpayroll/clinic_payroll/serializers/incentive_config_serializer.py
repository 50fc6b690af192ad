from rest_framework import serializers
from clinic_payroll.models import IncentiveConfig, Position

class IncentiveConfigReadSerializer(serializers.Serializer):
    """Reads persisted rows and built-in defaults alike (IncentiveConfigItem)."""
    incentive_type = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    rate = serializers.DecimalField(max_digits=12, decimal_places=4)
    formula_type = serializers.CharField()
    positions = serializers.ListField(child=serializers.CharField())
    division_positions = serializers.ListField(child=serializers.CharField(), allow_null=True)
    is_shared = serializers.BooleanField()
    pool_on_individual_entry = serializers.BooleanField()
    is_active = serializers.BooleanField()
    sort_order = serializers.IntegerField()
    version = serializers.IntegerField()

class IncentiveConfigWriteSerializer(serializers.Serializer):
    name = serializers.CharField(required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    rate = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=0, required=False)
    formula_type = serializers.ChoiceField(choices=IncentiveConfig.FormulaType.choices, required=False)
    positions = serializers.ListField(child=serializers.ChoiceField(choices=Position.choices), required=False)
    division_positions = serializers.ListField(
        child=serializers.ChoiceField(choices=Position.choices), required=False, allow_null=True,
    )
    is_shared = serializers.BooleanField(required=False)
    pool_on_individual_entry = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)
    sort_order = serializers.IntegerField(required=False)
