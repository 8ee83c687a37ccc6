from pydantic import BaseModel, ConfigDict, Field

from exbudget.core.enums import FundingType, OmCategory


class ExecutionCostLineIn(BaseModel):
    funding_type: FundingType = FundingType.om
    category: str = Field(default="OTHER", min_length=1, max_length=64)
    amount: float = Field(default=0.0, ge=0)
    notes: str | None = None
    overall_equipment_cost: float | None = Field(default=None, ge=0)


class ExecutionCostLineUpdate(BaseModel):
    funding_type: FundingType | None = None
    category: str | None = Field(default=None, min_length=1, max_length=64)
    amount: float | None = Field(default=None, ge=0)
    notes: str | None = None
    overall_equipment_cost: float | None = Field(default=None, ge=0)


class ExecutionCostLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    unit_budget_id: int | None = None
    funding_type: FundingType
    category: str
    amount: float = 0.0
    notes: str | None = None
    overall_equipment_cost: float | None = None


class OmCostLineIn(BaseModel):
    category: OmCategory
    label: str = ""
    amount: float = Field(default=0.0, ge=0)
    notes: str | None = None


class OmCostLineUpdate(BaseModel):
    category: OmCategory | None = None
    label: str | None = None
    amount: float | None = Field(default=None, ge=0)
    notes: str | None = None


class OmCostLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    exercise_id: int | None = None
    category: OmCategory
    label: str = ""
    amount: float = 0.0
    notes: str | None = None
