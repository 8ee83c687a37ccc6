from pydantic import BaseModel, ConfigDict, Field

from exbudget.core.enums import PersonnelRole, FundingType
from exbudget.schemas.cost_lines import ExecutionCostLineOut


class PersonnelEntryIn(BaseModel):
    rank_code: str | None = None
    count: int = Field(default=0, ge=0)
    duty_days: int | None = Field(default=None, ge=0)
    location: str | None = None
    is_local: bool | None = None


class PersonnelEntryUpdate(BaseModel):
    rank_code: str | None = None
    count: int | None = Field(default=None, ge=0)
    duty_days: int | None = Field(default=None, ge=0)
    location: str | None = None
    is_local: bool | None = None


class PersonnelEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    personnel_group_id: int | None = None
    rank_code: str | None = None
    count: int = 0
    duty_days: int | None = None
    location: str | None = None
    is_local: bool | None = None


class PersonnelGroupUpdate(BaseModel):
    pax_count: int | None = Field(default=None, ge=0)
    duty_days: int | None = Field(default=None, ge=0)
    location: str | None = None
    is_long_tour: bool | None = None
    is_local: bool | None = None
    airfare_per_person: float | None = Field(default=None, ge=0)
    rental_car_count: int | None = Field(default=None, ge=0)
    rental_car_daily: float | None = Field(default=None, ge=0)
    rental_car_days: int | None = Field(default=None, ge=0)
    avg_cpd_override: float | None = Field(default=None, ge=0)


class PersonnelGroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    unit_budget_id: int | None = None
    role: PersonnelRole
    funding_type: FundingType
    pax_count: int = 0
    duty_days: int | None = None
    location: str | None = None
    is_long_tour: bool = False
    is_local: bool = False
    airfare_per_person: float | None = None
    rental_car_count: int | None = None
    rental_car_daily: float | None = None
    rental_car_days: int | None = None
    avg_cpd_override: float | None = None
    personnel_entries: list[PersonnelEntryOut] = []


class UnitBudgetCreate(BaseModel):
    unit_code: str = Field(..., min_length=1, max_length=32)


class UnitBudgetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    exercise_id: int | None = None
    unit_code: str
    personnel_groups: list[PersonnelGroupOut] = []
    execution_cost_lines: list[ExecutionCostLineOut] = []
