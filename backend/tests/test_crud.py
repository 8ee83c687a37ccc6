import pytest

from exbudget.crud.cost_lines import create_execution_line, update_execution_line
from exbudget.crud.exercises import create_exercise, delete_exercise, get_exercise_detail, upsert_travel_config
from exbudget.crud.personnel import add_entry, delete_entry, update_entry, update_group
from exbudget.crud.rates import load_rate_inputs, put_app_config, upsert_cpd_rates
from exbudget.crud.units import add_unit
from exbudget.db.models.personnel import PersonnelEntry, PersonnelGroup
from exbudget.schemas.cost_lines import ExecutionCostLineIn, ExecutionCostLineUpdate
from exbudget.schemas.exercise import ExerciseCreate, TravelConfigIn
from exbudget.schemas.personnel import PersonnelEntryIn, PersonnelEntryUpdate, PersonnelGroupUpdate
from exbudget.schemas.rates import CpdRateIn
from exbudget.services.seed import seed_baseline


def _groups(ub):
    return sorted((g.role, g.funding_type) for g in ub.personnel_groups)


def test_create_exercise_seeds_unit_template(db):
    e = create_exercise(db, ExerciseCreate(name="Southern Strike"))
    e = get_exercise_detail(db, e.id)
    assert [u.unit_code for u in e.unit_budgets] == ["SG", "AE", "CAB", "A7"]
    sg = e.unit_budgets[0]
    a7 = e.unit_budgets[3]
    assert _groups(sg) == [("PLAYER", "OM"), ("PLAYER", "RPA"), ("WHITE_CELL", "OM"), ("WHITE_CELL", "RPA")]
    assert _groups(a7) == [("PLANNING", "OM"), ("PLANNING", "RPA"), ("SUPPORT", "OM"), ("SUPPORT", "RPA")]
    assert all(g.location == "GULFPORT" for u in e.unit_budgets for g in u.personnel_groups)
    assert e.default_duty_days == 14
    assert e.travel_config.airfare_per_person == 400
    assert e.travel_config.rental_car_daily_rate == 50


def test_add_unit_rejects_duplicate_code(db):
    e = create_exercise(db, ExerciseCreate(name="X", unit_codes=["SG"]))
    ub = add_unit(db, e.id, "a7")
    assert ub.unit_code == "A7"
    assert len(ub.personnel_groups) == 4
    with pytest.raises(ValueError, match="unit_code_exists"):
        add_unit(db, e.id, "sg")


def test_entry_changes_resync_group_pax(db):
    e = create_exercise(db, ExerciseCreate(name="X", unit_codes=["SG"]))
    g = e.unit_budgets[0].personnel_groups[0]
    first = add_entry(db, g, PersonnelEntryIn(rank_code="ssgt", count=3))
    add_entry(db, g, PersonnelEntryIn(rank_code="CAPT", count=2))
    db.refresh(g)
    assert first.rank_code == "SSGT"
    assert g.pax_count == 5

    update_entry(db, first, PersonnelEntryUpdate(count=1))
    db.refresh(g)
    assert g.pax_count == 3

    delete_entry(db, first)
    db.refresh(g)
    assert g.pax_count == 2


def test_entry_locations_are_upper_cased(db):
    e = create_exercise(db, ExerciseCreate(name="X", unit_codes=["SG"]))
    g = e.unit_budgets[0].personnel_groups[0]
    entry = add_entry(db, g, PersonnelEntryIn(rank_code="SSGT", count=1, location=" camp shelby"))
    assert entry.location == "CAMP SHELBY"
    entry = update_entry(db, entry, PersonnelEntryUpdate(location="Gulfport "))
    assert entry.location == "GULFPORT"


def test_update_group_partial(db):
    e = create_exercise(db, ExerciseCreate(name="X", unit_codes=["SG"]))
    g = e.unit_budgets[0].personnel_groups[0]
    update_group(db, g, PersonnelGroupUpdate(duty_days=9, avg_cpd_override=250))
    update_group(db, g, PersonnelGroupUpdate(is_local=True))
    assert (g.duty_days, g.avg_cpd_override, g.is_local, g.location) == (9, 250, True, "GULFPORT")


def test_equipment_cost_derives_ufr_amount(db):
    e = create_exercise(db, ExerciseCreate(name="X", unit_codes=["A7"]))
    ub = e.unit_budgets[0]
    line = create_execution_line(
        db, ub.id, ExecutionCostLineIn(funding_type="RPA", category="wrm", amount=1, overall_equipment_cost=4321)
    )
    assert (line.category, line.funding_type, line.amount) == ("UFR", "OM", 432.1)
    line = update_execution_line(db, line, ExecutionCostLineUpdate(overall_equipment_cost=1000))
    assert line.amount == 100.0

    plain = create_execution_line(db, ub.id, ExecutionCostLineIn(funding_type="RPA", category="fuel", amount=75))
    assert (plain.category, plain.funding_type, plain.amount) == ("FUEL", "RPA", 75)


def test_delete_exercise_cascades(db):
    e = create_exercise(db, ExerciseCreate(name="X"))
    g = e.unit_budgets[0].personnel_groups[0]
    add_entry(db, g, PersonnelEntryIn(count=1))
    delete_exercise(db, e)
    assert db.query(PersonnelGroup).count() == 0
    assert db.query(PersonnelEntry).count() == 0


def test_upsert_travel_config(db):
    e = create_exercise(db, ExerciseCreate(name="X", unit_codes=[]))
    tc = upsert_travel_config(db, e, TravelConfigIn(rental_car_count=3, rental_car_days=4))
    assert (tc.airfare_per_person, tc.rental_car_count, tc.rental_car_days) == (400, 3, 4)


def test_load_rate_inputs_defaults_and_overrides(db):
    rates = load_rate_inputs(db)
    assert rates.cpd_rates == {}
    assert rates.meal_rates.lunch_mre == 15.91
    assert rates.player_billeting_per_night == 27

    seed_baseline(db)
    put_app_config(db, {"DINNER_COST": "16.5", "BREAKFAST_COST": "n/a"})
    upsert_cpd_rates(db, [CpdRateIn(rank_code="sra", cost_per_day=210)])
    rates = load_rate_inputs(db)
    assert rates.cpd_rates["SRA"] == 210
    assert rates.cpd_rates["CMSGT"] == 476
    assert rates.per_diem_rates["CAMP_SHELBY"].mie == 59
    assert rates.meal_rates.dinner == 16.5
    assert rates.meal_rates.breakfast == 14


def test_seed_baseline_keeps_existing_values(db):
    upsert_cpd_rates(db, [CpdRateIn(rank_code="AB", cost_per_day=1)])
    seed_baseline(db)
    seed_baseline(db)
    rates = load_rate_inputs(db)
    assert rates.cpd_rates["AB"] == 1
    assert len(rates.cpd_rates) == 18
    assert set(rates.per_diem_rates) == {"GULFPORT", "CAMP_SHELBY"}
