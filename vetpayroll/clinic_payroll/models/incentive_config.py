from django.db import models
from .mixins import TimeStampedModel


class IncentiveConfig(TimeStampedModel):
    class FormulaType(models.TextChoices):
        COUNT_MULTIPLY = "COUNT_MULTIPLY", "Count × rate"
        PERCENT = "PERCENT", "Amount × percent"

    incentive_type = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=120)
    description = models.CharField(max_length=255, blank=True)
    # peso-per-unit for COUNT_MULTIPLY, 0–1 fraction for PERCENT
    rate = models.DecimalField(max_digits=12, decimal_places=4)
    formula_type = models.CharField(max_length=16, choices=FormulaType.choices, default=FormulaType.COUNT_MULTIPLY)

    positions = models.JSONField(default=list, help_text="Positions that receive this incentive.")
    division_positions = models.JSONField(
        null=True, blank=True,
        help_text="Positions counted when dividing a shared pool (defaults to positions).",
    )
    is_shared = models.BooleanField(default=False)
    pool_on_individual_entry = models.BooleanField(
        default=True,
        help_text="Divide by the branch pool when entered per employee (distribution always divides).",
    )

    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    version = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["sort_order", "incentive_type"]
        db_table = "IncentiveConfig"

    def __str__(self):
        return f"{self.incentive_type} v{self.version}"
