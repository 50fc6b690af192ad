from rest_framework import serializers

class IncentiveUpsertSerializer(serializers.Serializer):
    payroll_id = serializers.IntegerField()
    type = serializers.CharField()
    count = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    input_value = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    rate = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=0, required=False, allow_null=True)
    date_earned = serializers.DateField(required=False, allow_null=True)

    def validate_type(self, v):
        return v.strip().upper()

class IncentiveLineSerializer(serializers.Serializer):
    type = serializers.CharField()
    count = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, default=0)
    input_value = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, default=0)
    rate = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=0, required=False, allow_null=True)
    date_earned = serializers.DateField(required=False, allow_null=True)

    def validate_type(self, v):
        return v.strip().upper()

class IncentiveBulkSerializer(serializers.Serializer):
    payroll_id = serializers.IntegerField()
    incentives = IncentiveLineSerializer(many=True)

class IncentiveCalculateSerializer(serializers.Serializer):
    incentives = IncentiveLineSerializer(many=True)

class CalculatedLineSerializer(serializers.Serializer):
    type = serializers.CharField()
    name = serializers.CharField()
    count = serializers.DecimalField(max_digits=12, decimal_places=2)
    input_value = serializers.DecimalField(max_digits=12, decimal_places=2)
    rate = serializers.DecimalField(max_digits=12, decimal_places=4)
    formula_type = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    formula = serializers.CharField(allow_blank=True)

class CalculatedBulkSerializer(serializers.Serializer):
    incentives = CalculatedLineSerializer(many=True)
    total_count = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
