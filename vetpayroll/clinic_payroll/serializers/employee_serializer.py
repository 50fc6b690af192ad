from rest_framework import serializers
from clinic_payroll.models import (
    Branch, Employee, FixedDeduction, IncentiveExclusion,
    Position, DeductionType, DeductionCategory,
)
from clinic_payroll.services.rate_service import rate_formula_description

class FixedDeductionSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="deduction_type", read_only=True)

    class Meta:
        model = FixedDeduction
        fields = ["id", "employee", "type", "category", "amount", "is_active"]

class FixedDeductionWriteSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=DeductionType.choices)
    category = serializers.ChoiceField(choices=DeductionCategory.choices, required=False, default=DeductionCategory.OTHERS)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    is_active = serializers.BooleanField(required=False, default=True)

class FixedDeductionsReplaceSerializer(serializers.Serializer):
    deductions = FixedDeductionWriteSerializer(many=True)

class EmployeeReadSerializer(serializers.ModelSerializer):
    branch_name = serializers.CharField(source="branch.name", read_only=True)
    rate_formula = serializers.SerializerMethodField()

    class Meta:
        model = Employee
        fields = [
            "id", "branch", "branch_name", "name", "position", "salary",
            "rate_per_day", "rate_per_hour", "rate_formula",
            "address", "sss_no", "tin_no", "philhealth_no", "pagibig_no", "hired_on",
            "is_active", "created_at", "updated_at",
        ]

    def get_rate_formula(self, obj) -> str:
        return rate_formula_description(obj.position)

class EmployeeWriteSerializer(serializers.ModelSerializer):
    branch = serializers.PrimaryKeyRelatedField(queryset=Branch.objects.all())
    position = serializers.ChoiceField(choices=Position.choices)
    salary = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    # manual rates: both must be given to override the formula
    rate_per_day = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    rate_per_hour = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    recalculate_rates = serializers.BooleanField(required=False, default=False, write_only=True)
    fixed_deductions = FixedDeductionWriteSerializer(many=True, required=False, write_only=True)

    class Meta:
        model = Employee
        fields = [
            "branch", "name", "position", "salary", "rate_per_day", "rate_per_hour",
            "address", "sss_no", "tin_no", "philhealth_no", "pagibig_no", "hired_on", "is_active",
            "recalculate_rates", "fixed_deductions",
        ]

    def validate(self, attrs):
        has_day = attrs.get("rate_per_day") is not None
        has_hour = attrs.get("rate_per_hour") is not None
        if has_day != has_hour:
            raise serializers.ValidationError("rate_per_day and rate_per_hour must be given together.")
        return attrs

class IncentiveExclusionSerializer(serializers.ModelSerializer):
    class Meta:
        model = IncentiveExclusion
        fields = ["id", "employee", "incentive_type", "created_at"]

class ExclusionToggleSerializer(serializers.Serializer):
    incentive_type = serializers.CharField(required=False, allow_blank=True)

class ExclusionToggleResultSerializer(serializers.Serializer):
    excluded = serializers.BooleanField()
    exclusion = IncentiveExclusionSerializer(allow_null=True)
    message = serializers.CharField()
