from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from exbudget.core.deps import get_db, not_found
from exbudget.crud.exercises import (
    create_exercise,
    delete_exercise,
    get_exercise,
    get_exercise_detail,
    list_exercises,
    update_exercise,
    upsert_travel_config,
)
from exbudget.crud.units import add_unit, list_units
from exbudget.crud.cost_lines import create_om_line, list_om_lines
from exbudget.schemas.cost_lines import OmCostLineIn, OmCostLineOut
from exbudget.schemas.exercise import (
    ExerciseCreate,
    ExerciseDetail,
    ExerciseOut,
    ExerciseUpdate,
    TravelConfigIn,
    TravelConfigOut,
)
from exbudget.schemas.personnel import UnitBudgetCreate, UnitBudgetOut

router = APIRouter()


def _exercise_or_404(db: Session, exercise_id: int):
    e = get_exercise(db, exercise_id)
    if not e:
        raise not_found("Exercise")
    return e


@router.get("", response_model=list[ExerciseOut])
def get_exercises(db: Session = Depends(get_db)):
    return list_exercises(db)


@router.post("", response_model=ExerciseDetail, status_code=201)
def post_exercise(data: ExerciseCreate, db: Session = Depends(get_db)):
    e = create_exercise(db, data)
    return get_exercise_detail(db, e.id)


@router.get("/{exercise_id}", response_model=ExerciseDetail)
def get_one(exercise_id: int, db: Session = Depends(get_db)):
    e = get_exercise_detail(db, exercise_id)
    if not e:
        raise not_found("Exercise")
    return e


@router.put("/{exercise_id}", response_model=ExerciseOut)
def put_exercise(exercise_id: int, data: ExerciseUpdate, db: Session = Depends(get_db)):
    return update_exercise(db, _exercise_or_404(db, exercise_id), data)


@router.delete("/{exercise_id}")
def remove_exercise(exercise_id: int, db: Session = Depends(get_db)):
    delete_exercise(db, _exercise_or_404(db, exercise_id))
    return {"deleted": exercise_id}


@router.put("/{exercise_id}/travel", response_model=TravelConfigOut)
def put_travel(exercise_id: int, data: TravelConfigIn, db: Session = Depends(get_db)):
    return upsert_travel_config(db, _exercise_or_404(db, exercise_id), data)


@router.get("/{exercise_id}/units", response_model=list[UnitBudgetOut])
def get_units(exercise_id: int, db: Session = Depends(get_db)):
    _exercise_or_404(db, exercise_id)
    return list_units(db, exercise_id)


@router.post("/{exercise_id}/units", response_model=UnitBudgetOut, status_code=201)
def post_unit(exercise_id: int, data: UnitBudgetCreate, db: Session = Depends(get_db)):
    _exercise_or_404(db, exercise_id)
    try:
        return add_unit(db, exercise_id, data.unit_code)
    except ValueError as e:
        if str(e) == "unit_code_exists":
            raise HTTPException(status_code=409, detail=f"Unit {data.unit_code} already exists")
        raise


@router.get("/{exercise_id}/om-costs", response_model=list[OmCostLineOut])
def get_om_costs(exercise_id: int, db: Session = Depends(get_db)):
    _exercise_or_404(db, exercise_id)
    return list_om_lines(db, exercise_id)


@router.post("/{exercise_id}/om-costs", response_model=OmCostLineOut, status_code=201)
def post_om_cost(exercise_id: int, data: OmCostLineIn, db: Session = Depends(get_db)):
    _exercise_or_404(db, exercise_id)
    return create_om_line(db, exercise_id, data)
