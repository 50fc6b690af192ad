from django.urls import path, include
from rest_framework.routers import DefaultRouter
from clinic_payroll.views.incentive_config_view import IncentiveConfigViewSet
from clinic_payroll.views.incentive_sheet_view import IncentiveSheetViewSet
from clinic_payroll.views.incentive_view import IncentiveViewSet

router = DefaultRouter()
router.register(r"incentive-configs", IncentiveConfigViewSet, basename="incentive-config")
router.register(r"incentive-sheets", IncentiveSheetViewSet, basename="incentive-sheet")
router.register(r"incentives", IncentiveViewSet, basename="incentive")

urlpatterns = [
    path("", include(router.urls)),
]
