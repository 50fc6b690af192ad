from django.urls import path, include
from rest_framework.routers import DefaultRouter
from clinic_payroll.views.cash_advance_view import CashAdvanceViewSet
from clinic_payroll.views.deduction_view import DeductionViewSet
from clinic_payroll.views.payroll_view import PayrollPeriodViewSet

router = DefaultRouter()
router.register(r"payrolls", PayrollPeriodViewSet, basename="payroll")
router.register(r"deductions", DeductionViewSet, basename="deduction")
router.register(r"cash-advances", CashAdvanceViewSet, basename="cash-advance")

urlpatterns = [
    path("", include(router.urls)),
]
