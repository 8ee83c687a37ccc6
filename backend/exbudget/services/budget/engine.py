"""Budget calculation engine.

`calculate_budget` is pure: it reads a fully loaded exercise aggregate
(ORM rows or the `ExerciseDetail` schema) and a `RateInputs` table, and
returns a new `BudgetResult`. It performs no I/O and never mutates its
inputs. Unknown ranks, locations and non-numeric fields price at zero
rather than raising.
"""
from dataclasses import dataclass
from typing import Any

from exbudget.core.enums import FundingType
from exbudget.schemas.budget import BudgetResult, GroupCalc, UnitCalc
from exbudget.schemas.rates import RateInputs
from exbudget.services.budget.composition import (
    CompositionRule,
    Headcount,
    MealBasis,
    PerDiemBasis,
    funding_type_for,
    role_class_for,
    rule_for,
    unit_class_for,
)
from exbudget.services.budget.equipment import WRM_CATEGORY
from exbudget.services.budget.resolution import (
    calc_mil_pay,
    effective_duty_days,
    effective_is_local,
    effective_location,
    per_diem_for,
)
from exbudget.services.utils import norm_str, to_bool, to_float, to_float_nullable, to_int

_SLOTS = ("planning_rpa", "planning_om", "white_cell_rpa", "white_cell_om", "player_rpa", "player_om")


@dataclass
class _AggregateEntry:
    # stands in for the rank breakdown of a group that has none
    count: int
    duty_days: Any
    location: Any
    is_local: Any
    rank_code: str | None = None


@dataclass
class _Travel:
    airfare_per_person: float
    rental_car_daily_rate: float
    rental_car_count: float
    rental_car_days: float


@dataclass
class _SlotTotals:
    pax: int = 0
    day_weight: float = 0.0
    fallback_days: float = 0.0
    mil_pay: float = 0.0
    per_diem: float = 0.0
    meals: float = 0.0
    travel: float = 0.0
    billeting: float = 0.0
    subtotal: float = 0.0

    def to_calc(self) -> GroupCalc:
        duty_days = self.day_weight / self.pax if self.pax > 0 else self.fallback_days
        return GroupCalc(
            pax_count=self.pax,
            duty_days=duty_days,
            mil_pay=self.mil_pay,
            per_diem=self.per_diem,
            meals=self.meals,
            travel=self.travel,
            billeting=self.billeting,
            subtotal=self.subtotal,
        )


def _travel_config(exercise: Any, rates: RateInputs) -> _Travel:
    tc = getattr(exercise, "travel_config", None)
    if tc is None:
        return _Travel(rates.default_airfare_per_person, rates.default_rental_car_daily, 0.0, 0.0)
    return _Travel(
        airfare_per_person=to_float(getattr(tc, "airfare_per_person", None), rates.default_airfare_per_person),
        rental_car_daily_rate=to_float(getattr(tc, "rental_car_daily_rate", None), rates.default_rental_car_daily),
        rental_car_count=to_float(getattr(tc, "rental_car_count", None)),
        rental_car_days=to_float(getattr(tc, "rental_car_days", None)),
    )


def _group_rental_cost(group: Any, travel: _Travel, shared_rental_cost: float) -> float:
    count = to_float_nullable(getattr(group, "rental_car_count", None))
    days = to_float_nullable(getattr(group, "rental_car_days", None))
    daily = to_float_nullable(getattr(group, "rental_car_daily", None))
    # any group value, even 0, replaces the shared share
    if count is not None or days is not None or daily is not None:
        if daily is None:
            daily = travel.rental_car_daily_rate
        return (count or 0.0) * daily * (days or 0.0)
    return shared_rental_cost


def _meal_rate(rates: RateInputs, basis: MealBasis) -> float:
    m = rates.meal_rates
    if basis is MealBasis.full_day:
        return m.breakfast + m.lunch_mre + m.dinner
    if basis is MealBasis.breakfast_dinner:
        return m.breakfast + m.dinner
    return 0.0


def _price_group(
    group: Any,
    rule: CompositionRule,
    rates: RateInputs,
    travel: _Travel,
    default_days: float,
    shared_rental_cost: float,
) -> tuple[_SlotTotals, float]:
    """Price one personnel group.

    Returns the group's totals and the billeting amount that has to be
    charged to the unit's player O&M instead of the group itself.
    """
    entries = list(getattr(group, "personnel_entries", None) or [])
    if entries:
        pax = sum(to_int(getattr(e, "count", 0)) for e in entries)
    else:
        pax = to_int(getattr(group, "pax_count", 0))
        entries = [
            _AggregateEntry(
                count=pax,
                duty_days=getattr(group, "duty_days", None),
                location=getattr(group, "location", None),
                is_local=getattr(group, "is_local", None),
            )
        ]

    airfare = to_float_nullable(getattr(group, "airfare_per_person", None))
    if airfare is None:
        airfare = travel.airfare_per_person
    meal_rate = _meal_rate(rates, rule.meals)

    t = _SlotTotals(pax=pax)
    any_travelling = False
    for entry in entries:
        count = to_int(getattr(entry, "count", 0))
        days = effective_duty_days(entry, group, default_days)
        local = effective_is_local(entry, group)
        t.day_weight += days * count

        if rule.mil_pay:
            t.mil_pay += calc_mil_pay(group, entry, rates, days)
        t.meals += count * meal_rate * days
        if local:
            continue

        any_travelling = True
        if rule.per_diem is PerDiemBasis.location:
            pd = per_diem_for(rates, effective_location(entry, group))
            t.per_diem += count * (pd.lodging + pd.mie) * days
        elif rule.per_diem is PerDiemBasis.player_flat:
            t.per_diem += count * rates.player_per_diem_per_day * days
        if rule.travel:
            t.travel += count * airfare
        if rule.billeting:
            t.billeting += count * rates.player_billeting_per_night * max(days, 0.0)

    if rule.rental_car and any_travelling:
        t.travel += _group_rental_cost(group, travel, shared_rental_cost)

    group_days = to_float_nullable(getattr(group, "duty_days", None))
    t.fallback_days = group_days if group_days is not None else default_days

    redirected = t.billeting if rule.billeting_to_om else 0.0
    t.subtotal = t.mil_pay + t.per_diem + t.meals + t.travel + (t.billeting - redirected)
    return t, redirected


def _merge(into: _SlotTotals, t: _SlotTotals) -> None:
    into.pax += t.pax
    into.day_weight += t.day_weight
    into.fallback_days = t.fallback_days
    into.mil_pay += t.mil_pay
    into.per_diem += t.per_diem
    into.meals += t.meals
    into.travel += t.travel
    into.billeting += t.billeting
    into.subtotal += t.subtotal


def calculate_budget(exercise: Any, rates: RateInputs) -> BudgetResult:
    default_days = to_float(getattr(exercise, "default_duty_days", None)) or 1.0
    travel = _travel_config(exercise, rates)
    unit_budgets = list(getattr(exercise, "unit_budgets", None) or [])

    # the exercise-wide rental budget is split evenly across every unit
    unit_count = len(unit_budgets) or 1
    total_rental_cost = travel.rental_car_count * travel.rental_car_daily_rate * travel.rental_car_days
    shared_rental_cost = total_rental_cost / unit_count

    result = BudgetResult()

    for ub in unit_budgets:
        unit_code = norm_str(getattr(ub, "unit_code", None)) or ""
        unit_class = unit_class_for(unit_code)
        slots = {name: _SlotTotals() for name in _SLOTS}
        billeting_to_om = 0.0
        unit_pax = 0

        for group in getattr(ub, "personnel_groups", None) or []:
            role_class = role_class_for(getattr(group, "role", None))
            funding_type = funding_type_for(getattr(group, "funding_type", None))
            if role_class is None or funding_type is None:
                continue
            rule = rule_for(role_class, funding_type, unit_class)
            if rule is None:
                continue

            t, redirected = _price_group(group, rule, rates, travel, default_days, shared_rental_cost)
            _merge(slots[rule.slot], t)
            billeting_to_om += redirected
            unit_pax += t.pax

            if rule.headcount is Headcount.white_cell:
                result.total_white_cell += t.pax
            else:
                result.total_players += t.pax

            if rule.slot == "white_cell_rpa" and to_bool(getattr(group, "is_long_tour", False)):
                result.rpa_travel += t.travel

        if billeting_to_om > 0:
            slots["player_om"].billeting += billeting_to_om
            slots["player_om"].subtotal += billeting_to_om

        execution_rpa = 0.0
        execution_om = 0.0
        for line in getattr(ub, "execution_cost_lines", None) or []:
            amount = to_float(getattr(line, "amount", None))
            if funding_type_for(getattr(line, "funding_type", None)) is FundingType.rpa:
                execution_rpa += amount
            else:
                execution_om += amount

        calcs = {name: s.to_calc() for name, s in slots.items()}
        unit_total_rpa = (
            calcs["planning_rpa"].subtotal + calcs["white_cell_rpa"].subtotal + calcs["player_rpa"].subtotal + execution_rpa
        )
        unit_total_om = (
            calcs["planning_om"].subtotal + calcs["white_cell_om"].subtotal + calcs["player_om"].subtotal + execution_om
        )
        result.units[unit_code] = UnitCalc(
            unit_code=unit_code,
            total_pax=unit_pax,
            execution_rpa=execution_rpa,
            execution_om=execution_om,
            unit_total_rpa=unit_total_rpa,
            unit_total_om=unit_total_om,
            unit_total=unit_total_rpa + unit_total_om,
            **calcs,
        )
        result.total_rpa += unit_total_rpa
        result.total_om += unit_total_om

    for line in getattr(exercise, "om_cost_lines", None) or []:
        category = norm_str(getattr(line, "category", None)) or "OTHER"
        amount = to_float(getattr(line, "amount", None))
        result.exercise_om_costs[category] = result.exercise_om_costs.get(category, 0.0) + amount
        result.exercise_om_total += amount
        if category.upper() == WRM_CATEGORY:
            # reported separately, already part of exercise_om_total
            result.wrm += amount

    result.total_om += result.exercise_om_total
    result.grand_total = result.total_rpa + result.total_om
    result.total_pax = result.total_players + result.total_white_cell
    return result
