import pytest
from decimal import Decimal
from django.core.exceptions import ValidationError
from clinic_payroll.incentive_defaults import DEFAULT_INCENTIVE_CONFIG
from clinic_payroll.models import IncentiveConfig
from clinic_payroll.services.incentive_config_service import IncentiveConfigStore


@pytest.mark.django_db
def test_defaults_until_persisted():
    store = IncentiveConfigStore()
    items = store.list_active()
    assert [c.incentive_type for c in items][:2] == ["CBC", "BLOOD_CHEM"]
    assert store.get("CBC").rate == Decimal("50")
    assert store.get("NOPE") is None

@pytest.mark.django_db
def test_seed_once():
    store = IncentiveConfigStore()
    rows = store.seed_defaults()
    assert len(rows) == len(DEFAULT_INCENTIVE_CONFIG)
    assert IncentiveConfig.objects.get(incentive_type="CONFINEMENT_VET").division_positions == [
        "RESIDENT_VETERINARIAN", "JUNIOR_VETERINARIAN",
    ]
    with pytest.raises(ValidationError):
        store.seed_defaults()

@pytest.mark.django_db
def test_upsert_bumps_version_and_wins_over_default():
    store = IncentiveConfigStore()
    store.seed_defaults()
    obj = store.upsert("CBC", {"rate": "60"})
    assert obj.version == 2
    assert store.get("CBC").rate == Decimal("60")

@pytest.mark.django_db
def test_upsert_new_type():
    obj = IncentiveConfigStore().upsert("dental", {"rate": 30, "positions": ["RESIDENT_VETERINARIAN"]})
    assert obj.incentive_type == "DENTAL"
    assert obj.sort_order == 99
    assert obj.version == 1
    assert obj.formula_type == IncentiveConfig.FormulaType.COUNT_MULTIPLY

@pytest.mark.django_db
def test_inactive_persisted_row_is_hidden_from_listing_but_resolvable():
    store = IncentiveConfigStore()
    store.seed_defaults()
    store.upsert("XRAY", {"is_active": False})
    assert "XRAY" not in [c.incentive_type for c in store.list_active()]
    assert store.get("XRAY").is_active is False

@pytest.mark.django_db
@pytest.mark.parametrize("patch", [
    {"formula_type": "SQUARE"},
    {"rate": "-1"},
    {"positions": ["ASTRONAUT"]},
])
def test_upsert_rejects_bad_values(patch):
    with pytest.raises(ValidationError):
        IncentiveConfigStore().upsert("CBC", patch)

@pytest.mark.django_db
def test_for_position():
    types = [c.incentive_type for c in IncentiveConfigStore().for_position("GROOMER")]
    assert "GROOMING" in types
    assert "CBC" not in types
