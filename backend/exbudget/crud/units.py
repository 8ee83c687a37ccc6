from sqlalchemy.orm import Session

from exbudget.core.config import settings
from exbudget.core.enums import FundingType, PersonnelRole
from exbudget.db.models.personnel import PersonnelGroup
from exbudget.db.models.unit_budget import UnitBudget
from exbudget.services.utils import norm_location

PLAYER_UNIT_ROLES = (PersonnelRole.player, PersonnelRole.white_cell)
STAFF_UNIT_ROLES = (PersonnelRole.planning, PersonnelRole.support)

# unit code -> roles whose RPA and OM groups are created with the unit
UNIT_TEMPLATES = {
    "SG": PLAYER_UNIT_ROLES,
    "AE": PLAYER_UNIT_ROLES,
    "CAB": PLAYER_UNIT_ROLES,
    "A7": STAFF_UNIT_ROLES,
}


def template_roles(unit_code: str) -> tuple[PersonnelRole, ...]:
    return UNIT_TEMPLATES.get(unit_code.upper(), PLAYER_UNIT_ROLES)


def build_unit(unit_code: str) -> UnitBudget:
    ub = UnitBudget(unit_code=unit_code)
    for role in template_roles(unit_code):
        for funding_type in (FundingType.rpa, FundingType.om):
            ub.personnel_groups.append(
                PersonnelGroup(
                    role=role.value,
                    funding_type=funding_type.value,
                    pax_count=0,
                    location=norm_location(settings.DEFAULT_LOCATION),
                    is_long_tour=False,
                    is_local=False,
                )
            )
    return ub


def get_unit(db: Session, unit_id: int) -> UnitBudget | None:
    return db.query(UnitBudget).filter(UnitBudget.id == unit_id).one_or_none()


def list_units(db: Session, exercise_id: int):
    return db.query(UnitBudget).filter(UnitBudget.exercise_id == exercise_id).order_by(UnitBudget.id).all()


def add_unit(db: Session, exercise_id: int, unit_code: str) -> UnitBudget:
    code = unit_code.strip().upper()
    exists = (
        db.query(UnitBudget.id)
        .filter(UnitBudget.exercise_id == exercise_id, UnitBudget.unit_code == code)
        .first()
    )
    if exists:
        raise ValueError("unit_code_exists")
    ub = build_unit(code)
    ub.exercise_id = exercise_id
    db.add(ub)
    db.commit()
    db.refresh(ub)
    return ub


def delete_unit(db: Session, ub: UnitBudget) -> None:
    db.delete(ub)
    db.commit()
