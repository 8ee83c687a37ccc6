from pathlib import Path

import openpyxl

from exbudget.crud.cost_lines import create_om_line
from exbudget.crud.exercises import create_exercise
from exbudget.crud.personnel import update_group
from exbudget.schemas.cost_lines import OmCostLineIn
from exbudget.schemas.exercise import ExerciseCreate
from exbudget.schemas.personnel import PersonnelGroupUpdate
from exbudget.services.exports.exporter import export_budget_pdf, export_budget_xlsx, sheet_name
from exbudget.services.reports.service import budget_report
from exbudget.services.seed import seed_baseline


def _report(db):
    seed_baseline(db)
    e = create_exercise(db, ExerciseCreate(name="Export Test", total_budget=100000, unit_codes=["SG", "A7"]))
    update_group(db, e.unit_budgets[0].personnel_groups[0], PersonnelGroupUpdate(pax_count=2, duty_days=10))
    create_om_line(db, e.id, OmCostLineIn(category="WRM", label="Generators", amount=400))
    return budget_report(db, e.id)


def test_export_budget_xlsx(db, tmp_path: Path):
    report = _report(db)
    out = export_budget_xlsx(report, tmp_path / "out" / "budget.xlsx")
    wb = openpyxl.load_workbook(out, data_only=True)
    assert wb.sheetnames == ["Summary", "SG", "A7", "O&M Detail"]

    summary = {r[0]: r[1] for r in wb["Summary"].iter_rows(values_only=True) if r[0]}
    assert summary["Exercise"] == "Export Test"
    assert abs(summary["Grand Total"] - report["budget"].grand_total) < 1e-6
    assert abs(summary["Total Budget Left"] - (100000 - report["budget"].grand_total)) < 1e-6

    om = list(wb["O&M Detail"].iter_rows(values_only=True))
    assert om[1][:3] == ("WRM", "Generators", 400)
    assert om[-1][0] == "Total"


def test_export_budget_pdf(db, tmp_path: Path):
    out = export_budget_pdf(_report(db), tmp_path / "budget.pdf")
    assert out.read_bytes().startswith(b"%PDF")


def test_sheet_names_are_excel_safe():
    taken = set()
    long = "X" * 40
    assert sheet_name(long, taken) == "X" * 31
    assert sheet_name(long, taken) == "X" * 29 + "_2"
    assert sheet_name("A/B", taken) == "A_B"
