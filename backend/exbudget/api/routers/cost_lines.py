from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from exbudget.core.deps import get_db, not_found
from exbudget.crud.cost_lines import (
    delete_execution_line,
    delete_om_line,
    get_execution_line,
    get_om_line,
    update_execution_line,
    update_om_line,
)
from exbudget.schemas.cost_lines import (
    ExecutionCostLineOut,
    ExecutionCostLineUpdate,
    OmCostLineOut,
    OmCostLineUpdate,
)

execution_router = APIRouter()
om_router = APIRouter()


@execution_router.put("/{line_id}", response_model=ExecutionCostLineOut)
def put_execution_cost(line_id: int, data: ExecutionCostLineUpdate, db: Session = Depends(get_db)):
    line = get_execution_line(db, line_id)
    if not line:
        raise not_found("Execution cost line")
    return update_execution_line(db, line, data)


@execution_router.delete("/{line_id}")
def remove_execution_cost(line_id: int, db: Session = Depends(get_db)):
    line = get_execution_line(db, line_id)
    if not line:
        raise not_found("Execution cost line")
    delete_execution_line(db, line)
    return {"deleted": line_id}


@om_router.put("/{line_id}", response_model=OmCostLineOut)
def put_om_cost(line_id: int, data: OmCostLineUpdate, db: Session = Depends(get_db)):
    line = get_om_line(db, line_id)
    if not line:
        raise not_found("O&M cost line")
    return update_om_line(db, line, data)


@om_router.delete("/{line_id}")
def remove_om_cost(line_id: int, db: Session = Depends(get_db)):
    line = get_om_line(db, line_id)
    if not line:
        raise not_found("O&M cost line")
    delete_om_line(db, line)
    return {"deleted": line_id}
