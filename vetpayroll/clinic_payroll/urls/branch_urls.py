from django.urls import path, include
from rest_framework.routers import DefaultRouter
from clinic_payroll.views.branch_view import BranchViewSet
from clinic_payroll.views.employee_view import EmployeeViewSet

router = DefaultRouter()
router.register(r"branches", BranchViewSet, basename="branch")
router.register(r"employees", EmployeeViewSet, basename="employee")

urlpatterns = [
    path("", include(router.urls)),
]
