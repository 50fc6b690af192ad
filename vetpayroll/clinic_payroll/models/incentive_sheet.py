from decimal import Decimal
from django.db import models
from django.db.models import Q, CheckConstraint, UniqueConstraint
from .mixins import TimeStampedModel


class IncentiveSheet(TimeStampedModel):
    """Branch-level daily tally grid for one payroll period."""
    branch = models.ForeignKey("clinic_payroll.Branch", on_delete=models.CASCADE, related_name="incentive_sheets")
    start_date = models.DateField()
    end_date = models.DateField()
    is_distributed = models.BooleanField(default=False)
    distributed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-start_date", "branch_id"]
        db_table = "IncentiveSheet"
        constraints = [
            UniqueConstraint(fields=["branch", "start_date", "end_date"], name="uniq_sheet_per_branch_period"),
            CheckConstraint(name="sheet_dates_valid", condition=Q(end_date__gte=models.F("start_date"))),
        ]

    def __str__(self):
        return f"SHEET {self.branch_id} {self.start_date}→{self.end_date}"


class DailyIncentiveInput(TimeStampedModel):
    class InputType(models.TextChoices):
        GROOMING = "GROOMING", "Grooming"
        SURGERY = "SURGERY", "Surgery"
        EMERGENCY = "EMERGENCY", "Emergency (P)"
        CONFINEMENT = "CONFINEMENT", "Confinement"

    sheet = models.ForeignKey(IncentiveSheet, on_delete=models.CASCADE, related_name="daily_inputs")
    date = models.DateField()
    incentive_type = models.CharField(max_length=16, choices=InputType.choices)
    # counts for GROOMING / CONFINEMENT, peso tallies are allowed too
    value = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["date", "incentive_type"]
        db_table = "DailyIncentiveInput"
        constraints = [
            UniqueConstraint(fields=["sheet", "date", "incentive_type"], name="uniq_daily_input_cell"),
        ]

    def __str__(self):
        return f"DAY {self.sheet_id} {self.date} {self.incentive_type}={self.value}"
