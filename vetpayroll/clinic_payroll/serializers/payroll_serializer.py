from rest_framework import serializers
from clinic_payroll.models import PayrollPeriod, Incentive, Deduction

class IncentiveReadSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="incentive_type", read_only=True)

    class Meta:
        model = Incentive
        fields = ["id", "payroll", "type", "count", "input_value", "rate", "amount", "formula", "date_earned"]

class DeductionReadSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="deduction_type", read_only=True)

    class Meta:
        model = Deduction
        fields = ["id", "payroll", "type", "amount", "notes"]

class PayrollReadSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source="employee.name", read_only=True)
    position = serializers.CharField(source="employee.position", read_only=True)
    branch = serializers.IntegerField(source="employee.branch_id", read_only=True)
    incentives = IncentiveReadSerializer(many=True, read_only=True)
    deductions = DeductionReadSerializer(many=True, read_only=True)

    class Meta:
        model = PayrollPeriod
        fields = [
            "id", "employee", "employee_name", "position", "branch", "start_date", "end_date",
            "working_days", "day_off", "absences", "total_days_present", "holidays",
            "overtime_hours", "late_minutes", "meal_allowance", "sil_pay", "birthday_leave",
            "deduction_divisor", "basic_pay", "holiday_pay", "overtime_pay", "late_deduction",
            "total_incentives", "total_deductions", "gross_pay", "net_pay", "status",
            "incentives", "deductions", "created_at", "updated_at",
        ]

class PayrollListSerializer(PayrollReadSerializer):
    class Meta(PayrollReadSerializer.Meta):
        fields = [f for f in PayrollReadSerializer.Meta.fields if f not in ("incentives", "deductions")]

class PayrollUpdateSerializer(serializers.Serializer):
    working_days = serializers.IntegerField(min_value=0, required=False)
    day_off = serializers.IntegerField(min_value=0, required=False)
    absences = serializers.IntegerField(min_value=0, required=False)
    holidays = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=0, required=False)
    overtime_hours = serializers.DecimalField(max_digits=7, decimal_places=2, min_value=0, required=False)
    late_minutes = serializers.IntegerField(min_value=0, required=False)
    meal_allowance = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    sil_pay = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    birthday_leave = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    status = serializers.ChoiceField(choices=PayrollPeriod.Status.choices, required=False)

class PayrollCreatePeriodSerializer(serializers.Serializer):
    branch_id = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    working_days = serializers.IntegerField(min_value=1, required=False)

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("end_date must be >= start_date.")
        return attrs

class PayrollSummaryQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    branch_id = serializers.IntegerField(required=False, allow_null=True)

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("end_date must be >= start_date.")
        return attrs

def _money_field():
    return serializers.DecimalField(max_digits=14, decimal_places=2)

class PayrollSummarySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    branch_id = serializers.IntegerField(allow_null=True)
    total_employees = serializers.IntegerField()
    total_basic_pay = _money_field()
    total_holiday_pay = _money_field()
    total_overtime_pay = _money_field()
    total_incentives = _money_field()
    total_deductions = _money_field()
    total_gross_pay = _money_field()
    total_net_pay = _money_field()
    by_status = serializers.DictField(child=serializers.IntegerField())
    payrolls = PayrollListSerializer(many=True)
