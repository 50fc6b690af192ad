import pytest
from datetime import date
from decimal import Decimal
from clinic_payroll.models import DailyIncentiveInput, Incentive, IncentiveExclusion, PayrollPeriod
from clinic_payroll.services.distribution_service import (
    compute_distributions, distribute_sheet, preview_distribution, sheet_overview,
)
from clinic_payroll.services.eligibility_service import RosterEntry, resolve
from clinic_payroll.incentive_defaults import DISTRIBUTION_RULES, VETS


def _tally(sheet, incentive_type, value, day=date(2025, 1, 3)):
    return DailyIncentiveInput.objects.create(sheet=sheet, date=day, incentive_type=incentive_type, value=Decimal(value))


ROSTER = [
    RosterEntry(1, "RESIDENT_VETERINARIAN", "A"),
    RosterEntry(2, "RESIDENT_VETERINARIAN", "B"),
    RosterEntry(3, "JUNIOR_VETERINARIAN", "C"),
    RosterEntry(4, "JUNIOR_VETERINARIAN", "D"),
]


def test_receivers_and_division_pool_differ():
    elig = resolve(ROSTER, ["RESIDENT_VETERINARIAN"], VETS, {}, "CONFINEMENT_VET")
    assert [e.employee_id for e in elig.receivers] == [1, 2]
    assert elig.division_count == 4

def test_exclusion_removes_from_both_sets():
    elig = resolve(ROSTER, ["RESIDENT_VETERINARIAN"], VETS, {2: {"CONFINEMENT_VET"}, 3: {"CONFINEMENT_VET"}}, "CONFINEMENT_VET")
    assert [e.employee_id for e in elig.receivers] == [1]
    assert elig.division_count == 2

def test_exclusion_is_per_type():
    elig = resolve(ROSTER, ["RESIDENT_VETERINARIAN"], VETS, {1: {"CONFINEMENT_ASST"}}, "CONFINEMENT_VET")
    assert elig.division_count == 4

def test_empty_pool_divides_by_one():
    elig = resolve(ROSTER, ["GROOMER"], None, {}, "GROOMING")
    assert elig.receivers == []
    assert elig.divisor == 1

def test_confinement_vet_paid_to_residents_only():
    lines = compute_distributions({"CONFINEMENT": Decimal("10")}, ROSTER, {}, DISTRIBUTION_RULES)
    assert {l.employee_id for l in lines} == {1, 2}
    assert all(l.amount == Decimal("137.50") for l in lines)
    assert lines[0].formula == "(10 × ₱55) ÷ 4 = ₱137.50"

def test_zero_totals_and_empty_receivers_are_skipped():
    assert compute_distributions({"GROOMING": Decimal("0")}, ROSTER, {}, DISTRIBUTION_RULES) == []
    # nobody at the branch grooms
    assert compute_distributions({"GROOMING": Decimal("4")}, ROSTER, {}, DISTRIBUTION_RULES) == []

def test_preview_shows_every_rule():
    rows = preview_distribution({"CONFINEMENT": Decimal("10")}, ROSTER, {}, DISTRIBUTION_RULES)
    by_key = {r["config_key"]: r for r in rows}
    assert set(by_key) == {r.key for r in DISTRIBUTION_RULES}
    assert by_key["CONFINEMENT_VET"]["per_person"] == Decimal("137.50")
    assert by_key["CONFINEMENT_VET"]["total_pay"] == Decimal("550.00")
    assert by_key["CONFINEMENT_VET"]["eligible_names"] == ["A", "B"]
    assert by_key["CONFINEMENT_STAFF"]["num_eligible"] == 0
    assert by_key["CONFINEMENT_STAFF"]["per_person"] == Decimal("0.00")


@pytest.mark.django_db
def test_distribute_sheet_writes_and_recalculates(sheet, staff, payrolls):
    _tally(sheet, "CONFINEMENT", "6")
    _tally(sheet, "CONFINEMENT", "4", day=date(2025, 1, 4))
    _tally(sheet, "GROOMING", "2")

    report = distribute_sheet(sheet_id=sheet.id)

    res1 = Incentive.objects.get(payroll=payrolls["res1"], incentive_type="CONFINEMENT_VET")
    assert res1.amount == Decimal("137.50")
    assert res1.count == Decimal("10")
    assert not Incentive.objects.filter(payroll__employee__in=[staff["jr1"], staff["jr2"]]).exists()

    asst = Incentive.objects.get(payroll=payrolls["asst"], incentive_type="CONFINEMENT_ASST")
    assert asst.amount == Decimal("450.00")
    groom = Incentive.objects.get(payroll=payrolls["groomer"], incentive_type="GROOMING")
    assert groom.amount == Decimal("150.00")

    payrolls["res1"].refresh_from_db()
    assert payrolls["res1"].total_incentives == Decimal("137.50")
    assert payrolls["res1"].gross_pay == Decimal("15137.50")

    sheet.refresh_from_db()
    assert sheet.is_distributed and sheet.distributed_at is not None
    assert report.affected_payrolls == 4

@pytest.mark.django_db
def test_distribute_twice_does_not_stack(sheet, staff, payrolls):
    _tally(sheet, "CONFINEMENT", "10")
    distribute_sheet(sheet_id=sheet.id)
    distribute_sheet(sheet_id=sheet.id)

    rows = Incentive.objects.filter(payroll=payrolls["res2"])
    assert rows.count() == 1
    assert rows.get().amount == Decimal("137.50")
    payrolls["res2"].refresh_from_db()
    assert payrolls["res2"].total_incentives == Decimal("137.50")

@pytest.mark.django_db
def test_excluded_vet_shrinks_the_pool(sheet, staff, payrolls):
    IncentiveExclusion.objects.create(employee=staff["jr1"], incentive_type="CONFINEMENT_VET")
    _tally(sheet, "CONFINEMENT", "10")
    distribute_sheet(sheet_id=sheet.id)
    assert Incentive.objects.get(payroll=payrolls["res1"], incentive_type="CONFINEMENT_VET").amount == Decimal("183.33")

@pytest.mark.django_db
def test_receivers_without_period_are_skipped(sheet, staff, payrolls):
    PayrollPeriod.objects.filter(employee=staff["res2"]).delete()
    _tally(sheet, "CONFINEMENT", "10")
    report = distribute_sheet(sheet_id=sheet.id)
    assert report.skipped_employee_ids == [staff["res2"].id]
    # the absent payroll still counts in the pool
    assert Incentive.objects.get(payroll=payrolls["res1"], incentive_type="CONFINEMENT_VET").amount == Decimal("137.50")

@pytest.mark.django_db
def test_overview_has_grid_for_every_day(sheet, staff):
    _tally(sheet, "SURGERY", "3")
    data = sheet_overview(sheet)
    assert len(data["days"]) == 15
    assert data["grid"]["SURGERY"]["2025-01-03"] == Decimal("3")
    assert data["totals"]["SURGERY"] == Decimal("3")
    assert data["totals"]["GROOMING"] == Decimal("0")
    assert len(data["employees"]) == 6
