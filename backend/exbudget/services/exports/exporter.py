import datetime as dt
import re
from pathlib import Path
import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib.units import mm

from exbudget.core.config import settings
from exbudget.schemas.budget import BudgetResult

SLOT_LABELS = [
    ("planning_rpa", "Planning RPA"),
    ("planning_om", "Planning O&M"),
    ("white_cell_rpa", "White Cell RPA"),
    ("white_cell_om", "White Cell O&M"),
    ("player_rpa", "Player RPA"),
    ("player_om", "Player O&M"),
]

_SHEET_BAD_CHARS = re.compile(r"[\[\]:*?/\\]")


def sheet_name(name: str, taken: set[str]) -> str:
    base = _SHEET_BAD_CHARS.sub("_", name).strip() or "Unit"
    base = base[:31]
    out = base
    n = 2
    while out.lower() in taken:
        suffix = f"_{n}"
        out = base[: 31 - len(suffix)] + suffix
        n += 1
    taken.add(out.lower())
    return out


def _period(report: dict) -> str:
    start, end = report.get("start_date"), report.get("end_date")
    if start is None and end is None:
        return ""
    return f"{start or ''} to {end or ''}"


def summary_frames(report: dict) -> tuple[pd.DataFrame, pd.DataFrame]:
    b: BudgetResult = report["budget"]
    totals = pd.DataFrame(
        [
            ("Exercise", report["exercise_name"]),
            ("Period", _period(report)),
            ("Duty Days", report.get("default_duty_days")),
            ("Total RPA", b.total_rpa),
            ("Total O&M", b.total_om),
            ("Grand Total", b.grand_total),
            ("RPA Travel-Only", b.rpa_travel),
            ("WRM", b.wrm),
            ("Total Budget", report["total_budget"]),
            ("Total Budget Left", report["total_budget_left"]),
            ("Total PAX", b.total_pax),
            ("Total Players", b.total_players),
            ("Total White Cell", b.total_white_cell),
        ],
        columns=["Category", "Amount"],
    )
    units = pd.DataFrame(
        [(u.unit_code, u.unit_total_rpa, u.unit_total_om, u.unit_total) for u in b.units.values()],
        columns=["Unit", "RPA", "O&M", "Total"],
    )
    return totals, units


def unit_frame(unit) -> pd.DataFrame:
    rows = []
    for attr, label in SLOT_LABELS:
        g = getattr(unit, attr)
        rows.append({
            "Group": label,
            "PAX": g.pax_count,
            "Days": g.duty_days,
            "Mil Pay": g.mil_pay,
            "Per Diem": g.per_diem,
            "Meals": g.meals,
            "Travel": g.travel,
            "Billeting": g.billeting,
            "Subtotal": g.subtotal,
        })
    rows.append({"Group": "Execution RPA", "Subtotal": unit.execution_rpa})
    rows.append({"Group": "Execution O&M", "Subtotal": unit.execution_om})
    rows.append({"Group": "Unit Total RPA", "Subtotal": unit.unit_total_rpa})
    rows.append({"Group": "Unit Total O&M", "Subtotal": unit.unit_total_om})
    rows.append({"Group": "Unit Grand Total", "Subtotal": unit.unit_total})
    return pd.DataFrame(rows, columns=["Group", "PAX", "Days", "Mil Pay", "Per Diem", "Meals", "Travel", "Billeting", "Subtotal"])


def om_frame(report: dict) -> pd.DataFrame:
    df = pd.DataFrame(report.get("om_lines") or [], columns=["category", "label", "amount", "notes"])
    df = df.rename(columns={"category": "Category", "label": "Label", "amount": "Amount", "notes": "Notes"})
    total = pd.DataFrame([{"Category": "Total", "Amount": report["budget"].exercise_om_total}])
    return pd.concat([df, total], ignore_index=True) if len(df) else total


def export_budget_xlsx(report: dict, out_path: Path):
    totals, units = summary_frames(report)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    taken = {"summary", "o&m detail"}
    with pd.ExcelWriter(out_path, engine="xlsxwriter") as w:
        totals.to_excel(w, index=False, sheet_name="Summary")
        units.to_excel(w, index=False, sheet_name="Summary", startrow=len(totals) + 2)
        for code, unit in report["budget"].units.items():
            unit_frame(unit).to_excel(w, index=False, sheet_name=sheet_name(code, taken))
        om_frame(report).to_excel(w, index=False, sheet_name="O&M Detail")
    return out_path


def export_budget_pdf(report: dict, out_path: Path):
    b: BudgetResult = report["budget"]
    out_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(out_path), pagesize=A4)
    width, height = A4
    y = height - 20*mm
    c.setFont("Helvetica-Bold", 14)
    c.drawString(20*mm, y, f"Budget Summary: {report['exercise_name']}")
    y -= 10*mm
    c.setFont("Helvetica", 11)
    lines = [
        f"Period: {_period(report)}" if _period(report) else "Period: -",
        f"Total RPA: {b.total_rpa:,.2f}",
        f"Total O&M: {b.total_om:,.2f}",
        f"Grand Total: {b.grand_total:,.2f}",
        f"RPA Travel-Only: {b.rpa_travel:,.2f}",
        f"WRM: {b.wrm:,.2f}",
        f"Total Budget Left: {report['total_budget_left']:,.2f}",
        f"PAX: {b.total_pax} (players {b.total_players}, white cell {b.total_white_cell})",
        "",
    ]
    for u in b.units.values():
        lines.append(f"{u.unit_code}: RPA {u.unit_total_rpa:,.2f}  O&M {u.unit_total_om:,.2f}  Total {u.unit_total:,.2f}")
    for ln in lines:
        if y < 20*mm:
            c.showPage()
            c.setFont("Helvetica", 11)
            y = height - 20*mm
        c.drawString(20*mm, y, ln)
        y -= 7*mm
    c.showPage()
    c.save()
    return out_path


def default_export_path(prefix: str, ext: str) -> Path:
    ts = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S")
    return Path(settings.EXPORT_DIR) / f"{prefix}_{ts}.{ext}"
