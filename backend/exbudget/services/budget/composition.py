"""Cost composition rules keyed by role class, funding type and unit class.

Each personnel group is priced with exactly one rule. The rule says which
cost buckets apply, which meal rate players eat at, where billeting is
charged and which headcount the group's pax counts toward.
"""
from dataclasses import dataclass
from enum import Enum

from exbudget.core.enums import FundingType, PersonnelRole
from exbudget.services.utils import norm_str

# Player RPA billeting for these units is charged to the unit's player O&M.
BILLETING_TO_OM_UNITS = frozenset({"SG", "AE", "CAB"})


class RoleClass(str, Enum):
    white_cell = "WHITE_CELL"
    planning = "PLANNING"
    player = "PLAYER"


class UnitClass(str, Enum):
    standard = "STANDARD"
    billeting_to_om = "BILLETING_TO_OM"


class PerDiemBasis(str, Enum):
    none = "none"
    location = "location"  # lodging + M&IE for the effective location
    player_flat = "player_flat"  # flat player per-diem per day


class MealBasis(str, Enum):
    none = "none"
    breakfast_dinner = "breakfast_dinner"
    full_day = "full_day"


class Headcount(str, Enum):
    players = "players"
    white_cell = "white_cell"


@dataclass(frozen=True)
class CompositionRule:
    slot: str
    headcount: Headcount
    mil_pay: bool = False
    per_diem: PerDiemBasis = PerDiemBasis.none
    meals: MealBasis = MealBasis.none
    travel: bool = False
    billeting: bool = False
    billeting_to_om: bool = False
    rental_car: bool = False


_ROLE_CLASSES = {
    PersonnelRole.white_cell: RoleClass.white_cell,
    PersonnelRole.support: RoleClass.white_cell,
    PersonnelRole.planning: RoleClass.planning,
    PersonnelRole.player: RoleClass.player,
}

# unit class None means the rule holds for every unit
RULES: dict[tuple[RoleClass, FundingType, UnitClass | None], CompositionRule] = {
    (RoleClass.white_cell, FundingType.rpa, None): CompositionRule(
        slot="white_cell_rpa",
        headcount=Headcount.white_cell,
        mil_pay=True,
        per_diem=PerDiemBasis.location,
        travel=True,
        rental_car=True,
    ),
    (RoleClass.white_cell, FundingType.om, None): CompositionRule(
        slot="white_cell_om",
        headcount=Headcount.white_cell,
        per_diem=PerDiemBasis.location,
        travel=True,
    ),
    (RoleClass.planning, FundingType.rpa, None): CompositionRule(
        slot="planning_rpa",
        headcount=Headcount.players,
        mil_pay=True,
        per_diem=PerDiemBasis.location,
        travel=True,
    ),
    (RoleClass.planning, FundingType.om, None): CompositionRule(
        slot="planning_om",
        headcount=Headcount.players,
        per_diem=PerDiemBasis.location,
        travel=True,
    ),
    (RoleClass.player, FundingType.rpa, UnitClass.billeting_to_om): CompositionRule(
        slot="player_rpa",
        headcount=Headcount.players,
        mil_pay=True,
        per_diem=PerDiemBasis.player_flat,
        meals=MealBasis.breakfast_dinner,
        travel=True,
        billeting=True,
        billeting_to_om=True,
    ),
    (RoleClass.player, FundingType.rpa, UnitClass.standard): CompositionRule(
        slot="player_rpa",
        headcount=Headcount.players,
        mil_pay=True,
        per_diem=PerDiemBasis.player_flat,
        meals=MealBasis.full_day,
        billeting=True,
    ),
    (RoleClass.player, FundingType.om, None): CompositionRule(
        slot="player_om",
        headcount=Headcount.players,
        per_diem=PerDiemBasis.player_flat,
        travel=True,
        billeting=True,
    ),
}


def role_class_for(role) -> RoleClass | None:
    s = norm_str(role)
    if not s:
        return None
    try:
        return _ROLE_CLASSES[PersonnelRole(s.upper())]
    except ValueError:
        return None


def funding_type_for(funding_type) -> FundingType | None:
    s = norm_str(funding_type)
    if not s:
        return None
    try:
        return FundingType(s.upper())
    except ValueError:
        return None


def unit_class_for(unit_code) -> UnitClass:
    code = (norm_str(unit_code) or "").upper()
    return UnitClass.billeting_to_om if code in BILLETING_TO_OM_UNITS else UnitClass.standard


def rule_for(role_class: RoleClass, funding_type: FundingType, unit_class: UnitClass) -> CompositionRule | None:
    rule = RULES.get((role_class, funding_type, unit_class))
    if rule is None:
        rule = RULES.get((role_class, funding_type, None))
    return rule
