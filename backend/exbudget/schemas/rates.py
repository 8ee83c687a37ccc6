import datetime as dt
from pydantic import BaseModel, ConfigDict, Field


class PerDiem(BaseModel):
    lodging: float = 0.0
    mie: float = 0.0


class MealRates(BaseModel):
    breakfast: float = 14.0
    lunch_mre: float = 15.91
    dinner: float = 14.0


class RateInputs(BaseModel):
    """Lookup tables the budget engine prices an exercise with.

    Missing ranks and locations resolve to zero cost inside the engine.
    """

    cpd_rates: dict[str, float] = {}
    per_diem_rates: dict[str, PerDiem] = {}
    meal_rates: MealRates = MealRates()
    player_billeting_per_night: float = 27.0
    player_per_diem_per_day: float = 5.0
    default_airfare_per_person: float = 400.0
    default_rental_car_daily: float = 50.0


class CpdRateIn(BaseModel):
    rank_code: str = Field(..., min_length=1, max_length=16)
    cost_per_day: float = Field(..., ge=0)


class CpdRatesIn(BaseModel):
    rates: list[CpdRateIn]


class CpdRateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    rank_code: str
    cost_per_day: float
    effective_date: dt.date | None = None


class PerDiemRateIn(BaseModel):
    location: str = Field(..., min_length=1, max_length=64)
    lodging_rate: float = Field(default=0.0, ge=0)
    mie_rate: float = Field(default=0.0, ge=0)


class PerDiemRatesIn(BaseModel):
    rates: list[PerDiemRateIn]


class PerDiemRateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location: str
    lodging_rate: float
    mie_rate: float
    effective_date: dt.date | None = None
