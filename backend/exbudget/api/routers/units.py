from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from exbudget.core.deps import get_db, not_found
from exbudget.crud.cost_lines import create_execution_line, list_execution_lines
from exbudget.crud.units import delete_unit, get_unit
from exbudget.schemas.cost_lines import ExecutionCostLineIn, ExecutionCostLineOut
from exbudget.schemas.personnel import UnitBudgetOut

router = APIRouter()


def _unit_or_404(db: Session, unit_id: int):
    ub = get_unit(db, unit_id)
    if not ub:
        raise not_found("Unit")
    return ub


@router.get("/{unit_id}", response_model=UnitBudgetOut)
def get_one(unit_id: int, db: Session = Depends(get_db)):
    return _unit_or_404(db, unit_id)


@router.delete("/{unit_id}")
def remove_unit(unit_id: int, db: Session = Depends(get_db)):
    delete_unit(db, _unit_or_404(db, unit_id))
    return {"deleted": unit_id}


@router.get("/{unit_id}/execution-costs", response_model=list[ExecutionCostLineOut])
def get_execution_costs(unit_id: int, db: Session = Depends(get_db)):
    _unit_or_404(db, unit_id)
    return list_execution_lines(db, unit_id)


@router.post("/{unit_id}/execution-costs", response_model=ExecutionCostLineOut, status_code=201)
def post_execution_cost(unit_id: int, data: ExecutionCostLineIn, db: Session = Depends(get_db)):
    _unit_or_404(db, unit_id)
    return create_execution_line(db, unit_id, data)
