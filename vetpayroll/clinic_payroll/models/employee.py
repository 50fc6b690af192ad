from decimal import Decimal
from django.db import models
from django.db.models import UniqueConstraint
from .mixins import TimeStampedModel
from .choices import Position, DeductionType, DeductionCategory


class Employee(TimeStampedModel):
    Position = Position

    branch = models.ForeignKey("clinic_payroll.Branch", on_delete=models.PROTECT, related_name="employees")
    name = models.CharField(max_length=160)
    position = models.CharField(max_length=32, choices=Position.choices)

    salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    # Derived from salary + position (+ branch D/H), unless entered manually
    rate_per_day = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    rate_per_hour = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    address = models.CharField(max_length=255, blank=True)
    sss_no = models.CharField(max_length=32, blank=True)
    tin_no = models.CharField(max_length=32, blank=True)
    philhealth_no = models.CharField(max_length=32, blank=True)
    pagibig_no = models.CharField(max_length=32, blank=True)
    hired_on = models.DateField(null=True, blank=True)

    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ["name"]
        db_table = "Employee"
        indexes = [
            models.Index(fields=["branch", "is_active"], name="employee_branch_active_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.position})"


class FixedDeduction(TimeStampedModel):
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name="fixed_deductions")
    deduction_type = models.CharField(max_length=32, choices=DeductionType.choices)
    category = models.CharField(max_length=16, choices=DeductionCategory.choices, default=DeductionCategory.OTHERS)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["category", "deduction_type"]
        db_table = "FixedDeduction"
        constraints = [
            UniqueConstraint(fields=["employee", "deduction_type"], name="uniq_fixed_deduction_per_type"),
        ]

    def __str__(self):
        return f"FD {self.employee_id} {self.deduction_type} {self.amount}"


class IncentiveExclusion(TimeStampedModel):
    """Employee opted out of receiving (and being counted for) one shared incentive type."""
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name="incentive_exclusions")
    incentive_type = models.CharField(max_length=32)

    class Meta:
        ordering = ["employee_id", "incentive_type"]
        db_table = "IncentiveExclusion"
        constraints = [
            UniqueConstraint(fields=["employee", "incentive_type"], name="uniq_exclusion_per_type"),
        ]

    def __str__(self):
        return f"EXCL {self.employee_id} {self.incentive_type}"
