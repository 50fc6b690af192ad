from decimal import Decimal
from django.db import models
from django.db.models import Q, CheckConstraint
from .mixins import TimeStampedModel


class CashAdvance(TimeStampedModel):
    """Money handed to an employee ahead of payday, later recovered as a CASH_ADVANCE deduction."""
    employee = models.ForeignKey("clinic_payroll.Employee", on_delete=models.CASCADE, related_name="cash_advances")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    date_taken = models.DateField()
    notes = models.CharField(max_length=255, blank=True)

    is_paid = models.BooleanField(default=False)
    date_deducted = models.DateField(null=True, blank=True)
    payroll = models.ForeignKey(
        "clinic_payroll.PayrollPeriod", on_delete=models.SET_NULL, null=True, blank=True,
        related_name="cash_advances", help_text="Period the advance was deducted from.",
    )

    class Meta:
        ordering = ["-date_taken", "-id"]
        db_table = "CashAdvance"
        indexes = [
            models.Index(fields=["employee", "is_paid"], name="cash_advance_emp_paid_idx"),
        ]
        constraints = [
            CheckConstraint(name="cash_advance_amount_positive", condition=Q(amount__gt=Decimal("0"))),
        ]

    def __str__(self):
        return f"CA {self.employee_id} {self.amount} {self.date_taken} [{'paid' if self.is_paid else 'unpaid'}]"
