from rest_framework import serializers
from clinic_payroll.models import IncentiveSheet, DailyIncentiveInput

class IncentiveSheetSerializer(serializers.ModelSerializer):
    branch_name = serializers.CharField(source="branch.name", read_only=True)

    class Meta:
        model = IncentiveSheet
        fields = ["id", "branch", "branch_name", "start_date", "end_date", "is_distributed", "distributed_at"]

class SheetQuerySerializer(serializers.Serializer):
    branch_id = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("end_date must be >= start_date.")
        return attrs

class DailyInputSerializer(serializers.Serializer):
    date = serializers.DateField()
    type = serializers.ChoiceField(choices=DailyIncentiveInput.InputType.choices)
    value = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)

class DailyInputsSaveSerializer(serializers.Serializer):
    inputs = DailyInputSerializer(many=True)

class DistributionPreviewSerializer(serializers.Serializer):
    config_key = serializers.CharField()
    label = serializers.CharField()
    source_type = serializers.CharField()
    incentive_type = serializers.CharField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    rate = serializers.DecimalField(max_digits=12, decimal_places=4)
    num_eligible = serializers.IntegerField()
    total_pay = serializers.DecimalField(max_digits=14, decimal_places=2)
    per_person = serializers.DecimalField(max_digits=14, decimal_places=2)
    eligible_names = serializers.ListField(child=serializers.CharField())

class SheetOverviewSerializer(serializers.Serializer):
    sheet = IncentiveSheetSerializer()
    days = serializers.ListField(child=serializers.CharField())
    grid = serializers.DictField(child=serializers.DictField(child=serializers.DecimalField(max_digits=12, decimal_places=2)))
    totals = serializers.DictField(child=serializers.DecimalField(max_digits=14, decimal_places=2))
    distribution_preview = DistributionPreviewSerializer(many=True)
    employees = serializers.ListField(child=serializers.DictField())

class DistributionLineSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    employee_name = serializers.CharField()
    payroll_id = serializers.IntegerField()
    incentive_type = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    formula = serializers.CharField()

class DistributionReportSerializer(serializers.Serializer):
    sheet_id = serializers.IntegerField()
    affected_payrolls = serializers.IntegerField()
    affected_payroll_ids = serializers.ListField(child=serializers.IntegerField())
    skipped_employee_ids = serializers.ListField(child=serializers.IntegerField())
    lines = DistributionLineSerializer(many=True)
