from django.db import models


class Position(models.TextChoices):
    RESIDENT_VETERINARIAN = "RESIDENT_VETERINARIAN", "Resident Veterinarian"
    JUNIOR_VETERINARIAN = "JUNIOR_VETERINARIAN", "Junior Veterinarian"
    GROOMER = "GROOMER", "Groomer"
    GROOMER_VET_ASSISTANT = "GROOMER_VET_ASSISTANT", "Groomer / Vet Assistant"
    VETERINARY_ASSISTANT = "VETERINARY_ASSISTANT", "Veterinary Assistant"
    VETERINARY_NURSE = "VETERINARY_NURSE", "Veterinary Nurse"
    CLINIC_SECRETARY = "CLINIC_SECRETARY", "Clinic Secretary"
    STAFF = "STAFF", "Staff"


class DeductionType(models.TextChoices):
    SSS = "SSS", "SSS"
    PHILHEALTH = "PHILHEALTH", "PhilHealth"
    PAGIBIG = "PAGIBIG", "Pag-IBIG"
    WTAX = "WTAX", "Withholding Tax"
    SUNLIFE = "SUNLIFE", "Sun Life"
    BPI_AIA = "BPI_AIA", "BPI AIA"
    INSURANCE_OTHER = "INSURANCE_OTHER", "Other Insurance"
    SSS_LOAN = "SSS_LOAN", "SSS Loan"
    PAGIBIG_LOAN = "PAGIBIG_LOAN", "Pag-IBIG Loan"
    COMPANY_LOAN = "COMPANY_LOAN", "Company Loan"
    UNIFORM = "UNIFORM", "Uniform"
    CASH_ADVANCE = "CASH_ADVANCE", "Cash Advance"
    LATE = "LATE", "Late"
    OTHERS = "OTHERS", "Others"


class DeductionCategory(models.TextChoices):
    GOVERNMENT = "GOVERNMENT", "Government"
    INSURANCE = "INSURANCE", "Insurance"
    LOANS = "LOANS", "Loans"
    OTHERS = "OTHERS", "Others"


class IncentiveType(models.TextChoices):
    CBC = "CBC", "CBC"
    BLOOD_CHEM = "BLOOD_CHEM", "Blood Chemistry"
    ULTRASOUND = "ULTRASOUND", "Ultrasound"
    TEST_KITS = "TEST_KITS", "Test Kits"
    XRAY = "XRAY", "X-Ray"
    SURGERY = "SURGERY", "Surgery"
    EMERGENCY = "EMERGENCY", "Emergency"
    CONFINEMENT_VET = "CONFINEMENT_VET", "Confinement (Vet)"
    CONFINEMENT_ASST = "CONFINEMENT_ASST", "Confinement (Assistant)"
    GROOMING = "GROOMING", "Grooming"
    NURSING = "NURSING", "Nursing"
