from sqlalchemy.orm import Session

from exbudget.core.logging import logger
from exbudget.crud.exercises import get_exercise_detail
from exbudget.crud.rates import load_rate_inputs
from exbudget.services.budget.engine import calculate_budget
from exbudget.services.budget.warnings import find_unknown_rate_codes
from exbudget.services.utils import to_float


def budget_report(db: Session, exercise_id: int) -> dict | None:
    exercise = get_exercise_detail(db, exercise_id)
    if exercise is None:
        return None
    rates = load_rate_inputs(db)
    budget = calculate_budget(exercise, rates)
    warnings = find_unknown_rate_codes(exercise, rates)
    for w in warnings:
        logger.warning("rate_warning", exercise_id=exercise_id, unit_code=w.unit_code, field=w.column, value=w.value)

    total_budget = to_float(exercise.total_budget)
    logger.info(
        "budget_calculated",
        exercise_id=exercise_id,
        grand_total=round(budget.grand_total, 2),
        warnings=len(warnings),
    )
    return {
        "exercise_id": exercise.id,
        "exercise_name": exercise.name,
        "start_date": exercise.start_date,
        "end_date": exercise.end_date,
        "default_duty_days": exercise.default_duty_days,
        "total_budget": total_budget,
        "total_budget_left": total_budget - budget.grand_total,
        "budget": budget,
        "om_lines": [
            {"category": l.category, "label": l.label, "amount": to_float(l.amount), "notes": l.notes}
            for l in exercise.om_cost_lines
        ],
        "warnings": [
            {"message": w.message, "unit_code": w.unit_code, "field": w.column, "value": w.value}
            for w in warnings
        ],
    }
