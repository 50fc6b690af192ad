from django.apps import AppConfig


class ClinicPayrollConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "clinic_payroll"
    verbose_name = "Clinic payroll"
