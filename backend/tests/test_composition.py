from types import SimpleNamespace

from exbudget.core.enums import FundingType
from exbudget.schemas.rates import PerDiem, RateInputs
from exbudget.services.budget.composition import (
    RoleClass,
    UnitClass,
    MealBasis,
    role_class_for,
    funding_type_for,
    rule_for,
    unit_class_for,
)
from exbudget.services.budget.resolution import calc_mil_pay, effective_is_local, effective_location, per_diem_for


def test_support_is_treated_as_white_cell():
    assert role_class_for("SUPPORT") is RoleClass.white_cell
    assert role_class_for("white_cell") is RoleClass.white_cell
    assert role_class_for("PLANNING") is RoleClass.planning
    assert role_class_for("COOK") is None
    assert funding_type_for(" om ") is FundingType.om
    assert funding_type_for("X") is None


def test_player_rpa_rule_depends_on_unit():
    assert unit_class_for("ae") is UnitClass.billeting_to_om
    assert unit_class_for("A7") is UnitClass.standard
    redirect = rule_for(RoleClass.player, FundingType.rpa, UnitClass.billeting_to_om)
    standard = rule_for(RoleClass.player, FundingType.rpa, UnitClass.standard)
    assert redirect.billeting_to_om and redirect.travel and redirect.meals is MealBasis.breakfast_dinner
    assert not standard.billeting_to_om and not standard.travel and standard.meals is MealBasis.full_day
    # other combinations ignore the unit
    assert rule_for(RoleClass.player, FundingType.om, UnitClass.billeting_to_om).slot == "player_om"
    assert rule_for(RoleClass.white_cell, FundingType.rpa, UnitClass.standard).rental_car


def test_only_rpa_rules_pay_military():
    for role_class in RoleClass:
        assert not rule_for(role_class, FundingType.om, UnitClass.standard).mil_pay


def test_local_flag_variants():
    assert effective_is_local(SimpleNamespace(is_local="local"), SimpleNamespace(is_local=False))
    assert effective_is_local(SimpleNamespace(is_local=None), SimpleNamespace(is_local=1))
    assert effective_is_local(SimpleNamespace(is_local=" TRUE "), SimpleNamespace(is_local=None))
    assert not effective_is_local(SimpleNamespace(is_local="no"), SimpleNamespace(is_local=0))


def test_location_and_per_diem_fallbacks():
    rates = RateInputs(per_diem_rates={"GULFPORT": PerDiem(lodging=98, mie=64)})
    loc = effective_location(SimpleNamespace(location=None), SimpleNamespace(location=""))
    assert loc == "GULFPORT"
    assert per_diem_for(rates, loc).lodging == 98
    assert per_diem_for(rates, "ELSEWHERE") == PerDiem(lodging=0, mie=0)


def test_mil_pay():
    rates = RateInputs(cpd_rates={"MSGT": 350})
    group = SimpleNamespace(is_long_tour=False, avg_cpd_override=None)
    assert calc_mil_pay(group, SimpleNamespace(rank_code="MSGT", count=2), rates, 3) == 2100
    assert calc_mil_pay(group, SimpleNamespace(rank_code="XYZ", count=2), rates, 3) == 0
    # no rank falls back to the group average, then 200
    assert calc_mil_pay(group, SimpleNamespace(rank_code=None, count=2), rates, 3) == 1200
    group.avg_cpd_override = 0
    assert calc_mil_pay(group, SimpleNamespace(rank_code=None, count=2), rates, 3) == 0
    group.is_long_tour = True
    assert calc_mil_pay(group, SimpleNamespace(rank_code="MSGT", count=2), rates, 3) == 0
