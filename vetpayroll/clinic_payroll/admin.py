from django.contrib import admin
from .models import (
    Branch, Employee, FixedDeduction, IncentiveExclusion, IncentiveConfig,
    PayrollPeriod, Incentive, Deduction, IncentiveSheet, DailyIncentiveInput, CashAdvance,
)


class FixedDeductionInline(admin.TabularInline):
    model = FixedDeduction
    extra = 0


class IncentiveInline(admin.TabularInline):
    model = Incentive
    extra = 0
    readonly_fields = ("amount", "formula")


class DeductionInline(admin.TabularInline):
    model = Deduction
    extra = 0


class DailyIncentiveInputInline(admin.TabularInline):
    model = DailyIncentiveInput
    extra = 0


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("name", "branch_type", "working_days_per_month", "working_hours_per_day", "is_active")
    search_fields = ("name",)


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("name", "branch", "position", "salary", "rate_per_day", "rate_per_hour", "is_active")
    list_filter = ("branch", "position", "is_active")
    search_fields = ("name",)
    inlines = [FixedDeductionInline]


@admin.register(IncentiveExclusion)
class IncentiveExclusionAdmin(admin.ModelAdmin):
    list_display = ("employee", "incentive_type", "created_at")
    list_filter = ("incentive_type",)


@admin.register(IncentiveConfig)
class IncentiveConfigAdmin(admin.ModelAdmin):
    list_display = ("incentive_type", "name", "rate", "formula_type", "is_shared", "is_active", "sort_order", "version")
    list_filter = ("is_shared", "is_active", "formula_type")
    readonly_fields = ("version",)


@admin.register(PayrollPeriod)
class PayrollPeriodAdmin(admin.ModelAdmin):
    list_display = ("employee", "start_date", "end_date", "gross_pay", "net_pay", "status")
    list_filter = ("status", "employee__branch")
    readonly_fields = (
        "total_days_present", "basic_pay", "holiday_pay", "overtime_pay", "late_deduction",
        "total_incentives", "total_deductions", "gross_pay", "net_pay",
    )
    inlines = [IncentiveInline, DeductionInline]


@admin.register(IncentiveSheet)
class IncentiveSheetAdmin(admin.ModelAdmin):
    list_display = ("branch", "start_date", "end_date", "is_distributed", "distributed_at")
    list_filter = ("branch", "is_distributed")
    inlines = [DailyIncentiveInputInline]


@admin.register(CashAdvance)
class CashAdvanceAdmin(admin.ModelAdmin):
    list_display = ("employee", "amount", "date_taken", "is_paid", "date_deducted", "payroll")
    list_filter = ("is_paid", "employee__branch")
    search_fields = ("employee__name",)
