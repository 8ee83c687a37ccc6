import datetime as dt
from pydantic import BaseModel


class GroupCalc(BaseModel):
    pax_count: int = 0
    duty_days: float = 0.0
    mil_pay: float = 0.0
    per_diem: float = 0.0
    meals: float = 0.0
    travel: float = 0.0
    billeting: float = 0.0
    subtotal: float = 0.0


class UnitCalc(BaseModel):
    unit_code: str
    total_pax: int = 0
    planning_rpa: GroupCalc = GroupCalc()
    planning_om: GroupCalc = GroupCalc()
    white_cell_rpa: GroupCalc = GroupCalc()
    white_cell_om: GroupCalc = GroupCalc()
    player_rpa: GroupCalc = GroupCalc()
    player_om: GroupCalc = GroupCalc()
    execution_rpa: float = 0.0
    execution_om: float = 0.0
    unit_total_rpa: float = 0.0
    unit_total_om: float = 0.0
    unit_total: float = 0.0


class BudgetResult(BaseModel):
    units: dict[str, UnitCalc] = {}
    exercise_om_costs: dict[str, float] = {}
    exercise_om_total: float = 0.0
    wrm: float = 0.0
    total_rpa: float = 0.0
    total_om: float = 0.0
    grand_total: float = 0.0
    rpa_travel: float = 0.0
    total_pax: int = 0
    total_players: int = 0
    total_white_cell: int = 0


class RateWarningOut(BaseModel):
    message: str
    unit_code: str | None = None
    field: str | None = None
    value: str | None = None


class OmLineOut(BaseModel):
    category: str
    label: str = ""
    amount: float = 0.0
    notes: str | None = None


class BudgetReportOut(BaseModel):
    exercise_id: int
    exercise_name: str
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    default_duty_days: int | None = None
    total_budget: float
    total_budget_left: float
    budget: BudgetResult
    om_lines: list[OmLineOut] = []
    warnings: list[RateWarningOut] = []
