import datetime as dt
from pydantic import BaseModel, ConfigDict, Field

from exbudget.schemas.personnel import UnitBudgetOut
from exbudget.schemas.cost_lines import OmCostLineOut


class ExerciseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=256)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    default_duty_days: int | None = Field(default=None, ge=0)
    total_budget: float = Field(default=0.0, ge=0)
    unit_codes: list[str] | None = None


class ExerciseUpdate(BaseModel):
    name: str | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    default_duty_days: int | None = Field(default=None, ge=0)
    total_budget: float | None = Field(default=None, ge=0)


class ExerciseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    default_duty_days: int
    total_budget: float = 0.0


class TravelConfigIn(BaseModel):
    airfare_per_person: float | None = Field(default=None, ge=0)
    rental_car_daily_rate: float | None = Field(default=None, ge=0)
    rental_car_count: int | None = Field(default=None, ge=0)
    rental_car_days: int | None = Field(default=None, ge=0)


class TravelConfigOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    exercise_id: int | None = None
    airfare_per_person: float = 400.0
    rental_car_daily_rate: float = 50.0
    rental_car_count: int = 0
    rental_car_days: int = 0


class ExerciseDetail(ExerciseOut):
    unit_budgets: list[UnitBudgetOut] = []
    travel_config: TravelConfigOut | None = None
    om_cost_lines: list[OmCostLineOut] = []
