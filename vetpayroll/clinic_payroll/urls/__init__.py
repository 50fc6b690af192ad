# clinic_payroll/urls/__init__.py
from django.urls import path, include

urlpatterns = [
    path("", include("clinic_payroll.urls.branch_urls")),
    path("", include("clinic_payroll.urls.incentive_urls")),
    path("", include("clinic_payroll.urls.payroll_urls")),
]
