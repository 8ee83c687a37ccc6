from sqlalchemy.orm import Session, selectinload

from exbudget.core.config import settings
from exbudget.crud.units import build_unit
from exbudget.db.models.exercise import Exercise, TravelConfig
from exbudget.db.models.personnel import PersonnelGroup
from exbudget.db.models.unit_budget import UnitBudget
from exbudget.schemas.exercise import ExerciseCreate, ExerciseUpdate, TravelConfigIn


def default_unit_codes() -> list[str]:
    return [c.strip().upper() for c in settings.DEFAULT_UNIT_CODES.split(",") if c.strip()]


def list_exercises(db: Session):
    return db.query(Exercise).order_by(Exercise.id).all()


def get_exercise(db: Session, exercise_id: int) -> Exercise | None:
    return db.query(Exercise).filter(Exercise.id == exercise_id).one_or_none()


def get_exercise_detail(db: Session, exercise_id: int) -> Exercise | None:
    """Exercise with its whole budget aggregate loaded, ready for the engine."""
    return (
        db.query(Exercise)
        .options(
            selectinload(Exercise.unit_budgets)
            .selectinload(UnitBudget.personnel_groups)
            .selectinload(PersonnelGroup.personnel_entries),
            selectinload(Exercise.unit_budgets).selectinload(UnitBudget.execution_cost_lines),
            selectinload(Exercise.travel_config),
            selectinload(Exercise.om_cost_lines),
        )
        .filter(Exercise.id == exercise_id)
        .one_or_none()
    )


def create_exercise(db: Session, data: ExerciseCreate) -> Exercise:
    e = Exercise(
        name=data.name,
        start_date=data.start_date,
        end_date=data.end_date,
        default_duty_days=data.default_duty_days if data.default_duty_days is not None else settings.DEFAULT_DUTY_DAYS,
        total_budget=data.total_budget,
    )
    codes = data.unit_codes if data.unit_codes is not None else default_unit_codes()
    seen = set()
    for code in codes:
        code = code.strip().upper()
        if not code or code in seen:
            continue
        seen.add(code)
        e.unit_budgets.append(build_unit(code))
    e.travel_config = TravelConfig(
        airfare_per_person=400.0,
        rental_car_daily_rate=50.0,
        rental_car_count=0,
        rental_car_days=0,
    )
    db.add(e)
    db.commit()
    db.refresh(e)
    return e


def update_exercise(db: Session, e: Exercise, data: ExerciseUpdate) -> Exercise:
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "default_duty_days", "total_budget"):
            continue
        setattr(e, field, value)
    db.commit()
    db.refresh(e)
    return e


def delete_exercise(db: Session, e: Exercise) -> None:
    db.delete(e)
    db.commit()


def upsert_travel_config(db: Session, e: Exercise, data: TravelConfigIn) -> TravelConfig:
    tc = e.travel_config
    if tc is None:
        tc = TravelConfig(
            exercise_id=e.id,
            airfare_per_person=400.0,
            rental_car_daily_rate=50.0,
            rental_car_count=0,
            rental_car_days=0,
        )
        db.add(tc)
    for field, value in data.model_dump(exclude_none=True).items():
        setattr(tc, field, value)
    db.commit()
    db.refresh(tc)
    return tc
