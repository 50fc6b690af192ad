from decimal import Decimal
from django.db import models
from django.db.models import Q, CheckConstraint, UniqueConstraint
from .mixins import TimeStampedModel
from .choices import DeductionType

ZERO = Decimal("0.00")


def _money(**kwargs):
    return models.DecimalField(max_digits=12, decimal_places=2, default=ZERO, **kwargs)


class PayrollPeriod(TimeStampedModel):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        PAID = "PAID", "Paid"

    employee = models.ForeignKey("clinic_payroll.Employee", on_delete=models.PROTECT, related_name="payroll_periods")
    start_date = models.DateField()
    end_date = models.DateField()

    # Attendance
    working_days = models.IntegerField(default=0)
    day_off = models.IntegerField(default=0)
    absences = models.IntegerField(default=0)
    total_days_present = models.IntegerField(default=0)
    holidays = models.DecimalField(max_digits=6, decimal_places=2, default=ZERO)
    overtime_hours = models.DecimalField(max_digits=7, decimal_places=2, default=ZERO)
    late_minutes = models.IntegerField(default=0)

    # Allowances
    meal_allowance = _money()
    sil_pay = _money()
    birthday_leave = _money()

    deduction_divisor = models.PositiveIntegerField(default=2, help_text="Fixed deductions are divided by this.")

    # Computed (payroll_totals_service)
    basic_pay = _money()
    holiday_pay = _money()
    overtime_pay = _money()
    late_deduction = _money()
    total_incentives = _money()
    total_deductions = _money()
    gross_pay = _money()
    net_pay = _money()

    status = models.CharField(max_length=16, choices=Status.choices, default=Status.DRAFT)

    class Meta:
        ordering = ["-start_date", "employee_id"]
        db_table = "PayrollPeriod"
        constraints = [
            UniqueConstraint(fields=["employee", "start_date", "end_date"], name="uniq_payroll_per_employee_period"),
            CheckConstraint(name="payroll_dates_valid", condition=Q(end_date__gte=models.F("start_date"))),
            CheckConstraint(name="payroll_divisor_positive", condition=Q(deduction_divisor__gte=1)),
        ]

    def __str__(self):
        return f"PR {self.employee_id} {self.start_date}→{self.end_date} [{self.get_status_display()}]"


class Incentive(TimeStampedModel):
    payroll = models.ForeignKey(PayrollPeriod, on_delete=models.CASCADE, related_name="incentives")
    incentive_type = models.CharField(max_length=32)
    count = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    input_value = _money()
    rate = models.DecimalField(max_digits=12, decimal_places=4, default=Decimal("0"))
    amount = _money()
    formula = models.CharField(max_length=255, blank=True)
    date_earned = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["payroll_id", "incentive_type"]
        db_table = "Incentive"
        constraints = [
            UniqueConstraint(fields=["payroll", "incentive_type"], name="uniq_incentive_per_type"),
        ]

    def __str__(self):
        return f"INC {self.payroll_id} {self.incentive_type} {self.amount}"


class Deduction(TimeStampedModel):
    payroll = models.ForeignKey(PayrollPeriod, on_delete=models.CASCADE, related_name="deductions")
    deduction_type = models.CharField(max_length=32, choices=DeductionType.choices)
    amount = _money()
    notes = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["payroll_id", "deduction_type"]
        db_table = "Deduction"
        constraints = [
            UniqueConstraint(fields=["payroll", "deduction_type"], name="uniq_deduction_per_type"),
        ]

    def __str__(self):
        return f"DED {self.payroll_id} {self.deduction_type} {self.amount}"
