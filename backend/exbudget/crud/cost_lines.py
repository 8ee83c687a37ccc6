from sqlalchemy.orm import Session

from exbudget.core.enums import FundingType
from exbudget.db.models.cost_lines import ExecutionCostLine, OmCostLine
from exbudget.schemas.cost_lines import (
    ExecutionCostLineIn,
    ExecutionCostLineUpdate,
    OmCostLineIn,
    OmCostLineUpdate,
)
from exbudget.services.budget.equipment import UFR_CATEGORY, ufr_amount


def _apply_equipment_cost(line: ExecutionCostLine) -> None:
    if line.overall_equipment_cost is None:
        return
    line.amount = ufr_amount(line.overall_equipment_cost)
    line.category = UFR_CATEGORY
    line.funding_type = FundingType.om.value


def list_execution_lines(db: Session, unit_budget_id: int):
    return (
        db.query(ExecutionCostLine)
        .filter(ExecutionCostLine.unit_budget_id == unit_budget_id)
        .order_by(ExecutionCostLine.id)
        .all()
    )


def get_execution_line(db: Session, line_id: int) -> ExecutionCostLine | None:
    return db.query(ExecutionCostLine).filter(ExecutionCostLine.id == line_id).one_or_none()


def create_execution_line(db: Session, unit_budget_id: int, data: ExecutionCostLineIn) -> ExecutionCostLine:
    line = ExecutionCostLine(
        unit_budget_id=unit_budget_id,
        funding_type=data.funding_type.value,
        category=data.category.strip().upper(),
        amount=data.amount,
        notes=data.notes,
        overall_equipment_cost=data.overall_equipment_cost,
    )
    _apply_equipment_cost(line)
    db.add(line)
    db.commit()
    db.refresh(line)
    return line


def update_execution_line(db: Session, line: ExecutionCostLine, data: ExecutionCostLineUpdate) -> ExecutionCostLine:
    values = data.model_dump(exclude_unset=True)
    if values.get("funding_type") is not None:
        values["funding_type"] = values["funding_type"].value
    if values.get("category") is not None:
        values["category"] = values["category"].strip().upper()
    for field, value in values.items():
        if value is None and field in ("funding_type", "category", "amount"):
            continue
        setattr(line, field, value)
    _apply_equipment_cost(line)
    db.commit()
    db.refresh(line)
    return line


def delete_execution_line(db: Session, line: ExecutionCostLine) -> None:
    db.delete(line)
    db.commit()


def list_om_lines(db: Session, exercise_id: int):
    return db.query(OmCostLine).filter(OmCostLine.exercise_id == exercise_id).order_by(OmCostLine.id).all()


def get_om_line(db: Session, line_id: int) -> OmCostLine | None:
    return db.query(OmCostLine).filter(OmCostLine.id == line_id).one_or_none()


def create_om_line(db: Session, exercise_id: int, data: OmCostLineIn) -> OmCostLine:
    line = OmCostLine(
        exercise_id=exercise_id,
        category=data.category.value,
        label=data.label,
        amount=data.amount,
        notes=data.notes,
    )
    db.add(line)
    db.commit()
    db.refresh(line)
    return line


def update_om_line(db: Session, line: OmCostLine, data: OmCostLineUpdate) -> OmCostLine:
    if data.category is not None:
        line.category = data.category.value
    if data.label is not None:
        line.label = data.label
    if data.amount is not None:
        line.amount = data.amount
    if "notes" in data.model_fields_set:
        line.notes = data.notes
    db.commit()
    db.refresh(line)
    return line


def delete_om_line(db: Session, line: OmCostLine) -> None:
    db.delete(line)
    db.commit()
