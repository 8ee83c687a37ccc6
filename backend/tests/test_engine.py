from exbudget.schemas.exercise import ExerciseDetail
from exbudget.schemas.rates import MealRates, PerDiem, RateInputs
from exbudget.services.budget.engine import calculate_budget

RATES = RateInputs(
    cpd_rates={"SSGT": 253.0, "CAPT": 457.0},
    per_diem_rates={"GULFPORT": PerDiem(lodging=98, mie=64), "CAMP_SHELBY": PerDiem(lodging=96, mie=59)},
    meal_rates=MealRates(breakfast=14, lunch_mre=15.91, dinner=14),
    player_billeting_per_night=27,
    player_per_diem_per_day=5,
)


def _group(role, funding, **kw):
    g = {"role": role, "funding_type": funding, "pax_count": 0, "is_long_tour": False, "is_local": False}
    g.update(kw)
    return g


def _exercise(units, om_cost_lines=None, travel=None, default_duty_days=14):
    return ExerciseDetail.model_validate({
        "id": 1,
        "name": "Test",
        "default_duty_days": default_duty_days,
        "unit_budgets": units,
        "travel_config": travel or {"airfare_per_person": 400, "rental_car_daily_rate": 50},
        "om_cost_lines": om_cost_lines or [],
    })


def _sg_player_exercise(unit_code="SG"):
    return _exercise([{
        "unit_code": unit_code,
        "personnel_groups": [
            _group("PLAYER", "RPA", pax_count=2, avg_cpd_override=200, duty_days=10),
            _group("PLAYER", "OM"),
        ],
    }])


def test_sg_player_rpa_scenario():
    r = calculate_budget(_sg_player_exercise(), RATES)
    u = r.units["SG"]
    assert u.player_rpa.mil_pay == 4000
    assert u.player_rpa.meals == 560
    assert u.player_rpa.per_diem == 100
    assert u.player_rpa.travel == 800
    assert u.player_rpa.billeting == 540
    assert u.player_rpa.subtotal == 5460
    assert u.player_om.billeting == 540
    assert u.player_om.subtotal == 540
    assert u.unit_total_rpa == 5460
    assert u.unit_total_om == 540
    assert r.grand_total == 6000
    assert r.total_players == 2


def test_billeting_stays_on_rpa_outside_redirect_units():
    r = calculate_budget(_sg_player_exercise("A7"), RATES)
    u = r.units["A7"]
    # full three-meal rate and no airfare for standard units
    assert abs(u.player_rpa.meals - 2 * (14 + 15.91 + 14) * 10) < 1e-9
    assert u.player_rpa.travel == 0
    assert u.player_rpa.billeting == 540
    assert abs(u.player_rpa.subtotal - (4000 + u.player_rpa.meals + 100 + 540)) < 1e-9
    assert u.player_om.billeting == 0
    assert u.player_om.subtotal == 0


def test_redirect_unit_codes_are_case_insensitive():
    r = calculate_budget(_sg_player_exercise("cab"), RATES)
    assert r.units["cab"].player_om.billeting == 540


def test_local_group_has_no_travel_or_per_diem():
    ex = _exercise([{
        "unit_code": "AE",
        "personnel_groups": [
            _group("WHITE_CELL", "RPA", pax_count=3, avg_cpd_override=300, duty_days=5, is_local=True),
            _group("PLAYER", "OM", pax_count=4, duty_days=5, is_local=True),
        ],
    }], travel={"airfare_per_person": 400, "rental_car_daily_rate": 50, "rental_car_count": 2, "rental_car_days": 5})
    u = calculate_budget(ex, RATES).units["AE"]
    assert u.white_cell_rpa.mil_pay == 3 * 300 * 5
    assert u.white_cell_rpa.per_diem == 0
    assert u.white_cell_rpa.travel == 0
    assert u.player_om.per_diem == 0
    assert u.player_om.travel == 0
    assert u.player_om.billeting == 0


def test_entry_level_local_flag_only_suppresses_that_entry():
    ex = _exercise([{
        "unit_code": "A7",
        "personnel_groups": [
            _group("SUPPORT", "OM", personnel_entries=[
                {"rank_code": "SSGT", "count": 1, "duty_days": 4, "is_local": True},
                {"rank_code": "SSGT", "count": 2, "duty_days": 4},
            ]),
        ],
    }])
    u = calculate_budget(ex, RATES).units["A7"]
    assert u.white_cell_om.pax_count == 3
    assert u.white_cell_om.per_diem == 2 * (98 + 64) * 4
    assert u.white_cell_om.travel == 2 * 400
    assert u.white_cell_om.mil_pay == 0


def test_long_tour_suppresses_mil_pay_and_feeds_rpa_travel():
    ex = _exercise([{
        "unit_code": "SG",
        "personnel_groups": [
            _group("WHITE_CELL", "RPA", is_long_tour=True, personnel_entries=[
                {"rank_code": "CAPT", "count": 2, "duty_days": 10},
            ]),
        ],
    }])
    r = calculate_budget(ex, RATES)
    u = r.units["SG"]
    assert u.white_cell_rpa.mil_pay == 0
    assert u.white_cell_rpa.per_diem == 2 * 162 * 10
    assert u.white_cell_rpa.travel == 800
    assert r.rpa_travel == 800


def test_unknown_location_and_rank_price_at_zero():
    ex = _exercise([{
        "unit_code": "A7",
        "personnel_groups": [
            _group("PLANNING", "RPA", personnel_entries=[
                {"rank_code": "ADM", "count": 1, "duty_days": 3, "location": "NOWHERE"},
            ]),
        ],
    }])
    r = calculate_budget(ex, RATES)
    u = r.units["A7"]
    assert u.planning_rpa.mil_pay == 0
    assert u.planning_rpa.per_diem == 0
    assert u.planning_rpa.travel == 400
    # planning headcount counts as players
    assert r.total_players == 1
    assert r.total_white_cell == 0


def test_duty_days_fall_back_to_exercise_default():
    ex = _exercise([{
        "unit_code": "A7",
        "personnel_groups": [_group("PLANNING", "RPA", pax_count=1, avg_cpd_override=100)],
    }], default_duty_days=7)
    u = calculate_budget(ex, RATES).units["A7"]
    assert u.planning_rpa.mil_pay == 700
    assert u.planning_rpa.duty_days == 7


def test_average_duty_days_is_pax_weighted():
    ex = _exercise([{
        "unit_code": "A7",
        "personnel_groups": [
            _group("PLANNING", "OM", duty_days=20, personnel_entries=[
                {"count": 1, "duty_days": 10},
                {"count": 3},
            ]),
        ],
    }])
    g = calculate_budget(ex, RATES).units["A7"].planning_om
    assert g.pax_count == 4
    assert g.duty_days == (10 + 3 * 20) / 4


def test_same_slot_groups_are_merged():
    ex = _exercise([{
        "unit_code": "A7",
        "personnel_groups": [
            _group("WHITE_CELL", "OM", pax_count=1, duty_days=2, is_local=True),
            _group("SUPPORT", "OM", pax_count=2, duty_days=2, is_local=True),
        ],
    }])
    r = calculate_budget(ex, RATES)
    assert r.units["A7"].white_cell_om.pax_count == 3
    assert r.total_white_cell == 3


def test_rental_budget_is_split_across_all_units():
    # units without white cell RPA travellers still absorb a share of the rental budget
    travel = {"airfare_per_person": 0, "rental_car_daily_rate": 50, "rental_car_count": 2, "rental_car_days": 10}
    ex = _exercise([
        {"unit_code": "SG", "personnel_groups": [_group("WHITE_CELL", "RPA", pax_count=1, duty_days=1, location="NOWHERE")]},
        {"unit_code": "AE", "personnel_groups": []},
        {"unit_code": "CAB", "personnel_groups": []},
        {"unit_code": "A7", "personnel_groups": []},
    ], travel=travel)
    r = calculate_budget(ex, RATES)
    assert r.units["SG"].white_cell_rpa.travel == 2 * 50 * 10 / 4
    assert r.units["AE"].unit_total == 0


def test_group_rental_override_replaces_shared_share():
    travel = {"airfare_per_person": 0, "rental_car_daily_rate": 50, "rental_car_count": 2, "rental_car_days": 10}
    ex = _exercise([{
        "unit_code": "SG",
        "personnel_groups": [
            _group("WHITE_CELL", "RPA", pax_count=1, duty_days=1, location="NOWHERE",
                   rental_car_count=1, rental_car_days=3),
        ],
    }], travel=travel)
    assert calculate_budget(ex, RATES).units["SG"].white_cell_rpa.travel == 1 * 50 * 3


def test_group_rental_count_zero_opts_out_of_shared_share():
    travel = {"airfare_per_person": 0, "rental_car_daily_rate": 50, "rental_car_count": 2, "rental_car_days": 10}
    ex = _exercise([{
        "unit_code": "SG",
        "personnel_groups": [
            _group("WHITE_CELL", "RPA", pax_count=1, duty_days=1, location="NOWHERE", rental_car_count=0),
        ],
    }], travel=travel)
    assert calculate_budget(ex, RATES).units["SG"].white_cell_rpa.travel == 0


def test_execution_lines_and_exercise_om_roll_up():
    ex = _exercise(
        [{
            "unit_code": "A7",
            "personnel_groups": [],
            "execution_cost_lines": [
                {"funding_type": "RPA", "category": "FUEL", "amount": 100},
                {"funding_type": "OM", "category": "UFR", "amount": 250, "overall_equipment_cost": 2500},
            ],
        }],
        om_cost_lines=[
            {"category": "WRM", "label": "Generators", "amount": 1000},
            {"category": "CONTRACT", "label": "Catering", "amount": 500},
            {"category": "WRM", "label": "Tents", "amount": 200},
        ],
    )
    r = calculate_budget(ex, RATES)
    assert r.units["A7"].execution_rpa == 100
    assert r.units["A7"].execution_om == 250
    assert r.exercise_om_costs == {"WRM": 1200, "CONTRACT": 500}
    assert r.exercise_om_total == 1700
    assert r.wrm == 1200
    assert r.total_om == 250 + 1700
    assert r.grand_total == 100 + 250 + 1700


def test_totals_partition_and_non_negative():
    ex = _exercise([
        {"unit_code": "SG", "personnel_groups": [
            _group("PLAYER", "RPA", pax_count=5, duty_days=3),
            _group("PLAYER", "OM", pax_count=2, duty_days=3),
            _group("WHITE_CELL", "RPA", pax_count=1),
            _group("WHITE_CELL", "OM", pax_count=1, location="CAMP_SHELBY"),
        ]},
        {"unit_code": "A7", "personnel_groups": [
            _group("PLANNING", "RPA", personnel_entries=[{"rank_code": "SSGT", "count": 2}]),
            _group("SUPPORT", "OM", pax_count=1),
        ]},
    ], om_cost_lines=[{"category": "OTHER", "amount": 10}])
    r = calculate_budget(ex, RATES)
    assert abs(r.total_rpa + r.total_om - r.grand_total) < 1e-9
    assert r.total_players + r.total_white_cell == r.total_pax
    assert r.total_pax == 12
    for u in r.units.values():
        for slot in ("planning_rpa", "planning_om", "white_cell_rpa", "white_cell_om", "player_rpa", "player_om"):
            g = getattr(u, slot)
            assert min(g.mil_pay, g.per_diem, g.meals, g.travel, g.billeting, g.subtotal) >= 0


def test_calculation_is_idempotent_and_does_not_mutate_input():
    ex = _sg_player_exercise()
    before = ex.model_dump()
    first = calculate_budget(ex, RATES)
    second = calculate_budget(ex, RATES)
    assert first == second
    assert ex.model_dump() == before


def test_missing_travel_config_uses_rate_defaults():
    ex = _sg_player_exercise()
    ex.travel_config = None
    rates = RATES.model_copy(update={"default_airfare_per_person": 300})
    assert calculate_budget(ex, rates).units["SG"].player_rpa.travel == 600


def test_empty_exercise():
    r = calculate_budget(_exercise([]), RATES)
    assert r.units == {}
    assert r.grand_total == 0
