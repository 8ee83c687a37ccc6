from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fastapi.responses import FileResponse

from exbudget.core.deps import get_db, not_found
from exbudget.schemas.budget import BudgetReportOut
from exbudget.services.reports.service import budget_report
from exbudget.services.exports.exporter import export_budget_xlsx, export_budget_pdf, default_export_path

router = APIRouter()


def _report_or_404(db: Session, exercise_id: int) -> dict:
    report = budget_report(db, exercise_id)
    if report is None:
        raise not_found("Exercise")
    return report


@router.get("/{exercise_id}/budget", response_model=BudgetReportOut)
def budget(exercise_id: int, db: Session = Depends(get_db)):
    return _report_or_404(db, exercise_id)


@router.get("/{exercise_id}/export.xlsx")
def export_xlsx(exercise_id: int, db: Session = Depends(get_db)):
    report = _report_or_404(db, exercise_id)
    out = default_export_path(f"budget_{exercise_id}", "xlsx")
    export_budget_xlsx(report, out)
    return FileResponse(str(out), media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", filename=out.name)


@router.get("/{exercise_id}/export.pdf")
def export_pdf(exercise_id: int, db: Session = Depends(get_db)):
    report = _report_or_404(db, exercise_id)
    out = default_export_path(f"budget_{exercise_id}", "pdf")
    export_budget_pdf(report, out)
    return FileResponse(str(out), media_type="application/pdf", filename=out.name)
