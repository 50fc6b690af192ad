# Load all models into the clinic_payroll.models namespace
from .mixins import TimeStampedModel
from .choices import Position, DeductionType, DeductionCategory, IncentiveType

from .branch import Branch
from .employee import Employee, FixedDeduction, IncentiveExclusion
from .incentive_config import IncentiveConfig
from .payroll import PayrollPeriod, Incentive, Deduction
from .incentive_sheet import IncentiveSheet, DailyIncentiveInput
from .cash_advance import CashAdvance

__all__ = [
    "TimeStampedModel",
    "Position", "DeductionType", "DeductionCategory", "IncentiveType",
    "Branch",
    "Employee", "FixedDeduction", "IncentiveExclusion",
    "IncentiveConfig",
    "PayrollPeriod", "Incentive", "Deduction",
    "IncentiveSheet", "DailyIncentiveInput",
    "CashAdvance",
]
