from rest_framework import serializers
from clinic_payroll.models import Branch

class BranchReadSerializer(serializers.ModelSerializer):
    employee_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Branch
        fields = [
            "id", "name", "address", "contact", "branch_type", "is_active",
            "working_days_per_month", "working_hours_per_day", "employee_count",
            "created_at", "updated_at",
        ]

class BranchWriteSerializer(serializers.ModelSerializer):
    working_days_per_month = serializers.IntegerField(min_value=1, max_value=31, required=False)
    working_hours_per_day = serializers.IntegerField(min_value=1, max_value=24, required=False)

    class Meta:
        model = Branch
        fields = [
            "name", "address", "contact", "branch_type", "is_active",
            "working_days_per_month", "working_hours_per_day",
        ]

class BranchUpdateResultSerializer(serializers.Serializer):
    branch = BranchReadSerializer()
    recalculated_employees = serializers.IntegerField()
