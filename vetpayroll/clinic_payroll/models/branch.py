from django.db import models
from django.db.models import Q, CheckConstraint
from .mixins import TimeStampedModel


class Branch(TimeStampedModel):
    class BranchType(models.TextChoices):
        VETERINARY_CLINIC = "VETERINARY_CLINIC", "Veterinary Clinic"
        VETERINARY_HOSPITAL = "VETERINARY_HOSPITAL", "Veterinary Hospital"
        TRADING = "TRADING", "Trading"

    name = models.CharField(max_length=120)
    address = models.CharField(max_length=255, blank=True)
    contact = models.CharField(max_length=64, blank=True)
    branch_type = models.CharField(max_length=32, choices=BranchType.choices, default=BranchType.VETERINARY_CLINIC)

    # D / H: only the branch-dependent rate formula reads these
    working_days_per_month = models.PositiveIntegerField(default=22)
    working_hours_per_day = models.PositiveIntegerField(default=8)

    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        db_table = "Branch"
        constraints = [
            CheckConstraint(name="branch_working_days_positive", condition=Q(working_days_per_month__gte=1)),
            CheckConstraint(name="branch_working_hours_positive", condition=Q(working_hours_per_day__gte=1)),
        ]

    def __str__(self):
        return self.name
