from rest_framework import serializers
from clinic_payroll.models import DeductionType

class DeductionUpsertSerializer(serializers.Serializer):
    payroll_id = serializers.IntegerField()
    type = serializers.ChoiceField(choices=DeductionType.choices)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

class DeductionLineSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=DeductionType.choices)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

class DeductionBulkSerializer(serializers.Serializer):
    payroll_id = serializers.IntegerField()
    deductions = DeductionLineSerializer(many=True)

class DeductionDivisorSerializer(serializers.Serializer):
    deduction_divisor = serializers.IntegerField(min_value=1)
