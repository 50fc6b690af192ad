from rest_framework import serializers
from clinic_payroll.models import CashAdvance

class CashAdvanceReadSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source="employee.name", read_only=True)
    branch = serializers.IntegerField(source="employee.branch_id", read_only=True)

    class Meta:
        model = CashAdvance
        fields = [
            "id", "employee", "employee_name", "branch", "amount", "date_taken", "notes",
            "is_paid", "date_deducted", "payroll", "created_at", "updated_at",
        ]

class CashAdvanceCreateSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    date_taken = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)

    def validate_amount(self, v):
        if v <= 0:
            raise serializers.ValidationError("Amount must be > 0.")
        return v

class CashAdvanceUpdateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    date_taken = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=255)

    def validate_amount(self, v):
        if v <= 0:
            raise serializers.ValidationError("Amount must be > 0.")
        return v

class CashAdvanceMarkPaidSerializer(serializers.Serializer):
    payroll_id = serializers.IntegerField(required=False, allow_null=True)

class UnpaidCashAdvancesSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    cash_advances = CashAdvanceReadSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
