import datetime as dt
from sqlalchemy.orm import Session

from exbudget.db.models.rates import AppConfig, PerDiemRate, RankCpdRate
from exbudget.schemas.rates import CpdRateIn, MealRates, PerDiem, PerDiemRateIn, RateInputs
from exbudget.services.utils import norm_location, to_float_nullable

# app config key -> default value
CONFIG_DEFAULTS: dict[str, float] = {
    "BREAKFAST_COST": 14.0,
    "LUNCH_MRE_COST": 15.91,
    "DINNER_COST": 14.0,
    "PLAYER_BILLETING_NIGHT": 27.0,
    "PLAYER_PER_DIEM_PER_DAY": 5.0,
    "DEFAULT_AIRFARE": 400.0,
    "DEFAULT_RENTAL_CAR_DAILY": 50.0,
}


def list_cpd_rates(db: Session):
    return db.query(RankCpdRate).order_by(RankCpdRate.rank_code).all()


def upsert_cpd_rates(db: Session, rates: list[CpdRateIn]):
    existing = {r.rank_code: r for r in db.query(RankCpdRate).all()}
    today = dt.date.today()
    for item in rates:
        code = item.rank_code.strip().upper()
        row = existing.get(code)
        if row is None:
            row = RankCpdRate(rank_code=code)
            db.add(row)
            existing[code] = row
        row.cost_per_day = item.cost_per_day
        row.effective_date = today
    db.commit()
    return list_cpd_rates(db)


def list_per_diem_rates(db: Session):
    return db.query(PerDiemRate).order_by(PerDiemRate.location).all()


def get_per_diem_rate(db: Session, rate_id: int) -> PerDiemRate | None:
    return db.query(PerDiemRate).filter(PerDiemRate.id == rate_id).one_or_none()


def upsert_per_diem_rates(db: Session, rates: list[PerDiemRateIn]):
    existing = {r.location: r for r in db.query(PerDiemRate).all()}
    today = dt.date.today()
    for item in rates:
        location = norm_location(item.location)
        row = existing.get(location)
        if row is None:
            row = PerDiemRate(location=location)
            db.add(row)
            existing[location] = row
        row.lodging_rate = item.lodging_rate
        row.mie_rate = item.mie_rate
        row.effective_date = today
    db.commit()
    return list_per_diem_rates(db)


def add_per_diem_rate(db: Session, data: PerDiemRateIn) -> PerDiemRate:
    location = norm_location(data.location)
    if db.query(PerDiemRate.id).filter(PerDiemRate.location == location).first():
        raise ValueError("location_exists")
    row = PerDiemRate(
        location=location,
        lodging_rate=data.lodging_rate,
        mie_rate=data.mie_rate,
        effective_date=dt.date.today(),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_per_diem_rate(db: Session, row: PerDiemRate) -> None:
    db.delete(row)
    db.commit()


def get_app_config(db: Session) -> dict[str, str]:
    return {c.key: c.value for c in db.query(AppConfig).order_by(AppConfig.key).all()}


def put_app_config(db: Session, values: dict[str, str]) -> dict[str, str]:
    existing = {c.key: c for c in db.query(AppConfig).all()}
    for key, value in values.items():
        row = existing.get(key)
        if row is None:
            db.add(AppConfig(key=key, value=str(value)))
        else:
            row.value = str(value)
    db.commit()
    return get_app_config(db)


def load_rate_inputs(db: Session) -> RateInputs:
    config = get_app_config(db)

    def _num(key: str) -> float:
        v = to_float_nullable(config.get(key))
        return CONFIG_DEFAULTS[key] if v is None else v

    return RateInputs(
        cpd_rates={r.rank_code: r.cost_per_day or 0.0 for r in list_cpd_rates(db)},
        per_diem_rates={
            r.location: PerDiem(lodging=r.lodging_rate or 0.0, mie=r.mie_rate or 0.0)
            for r in list_per_diem_rates(db)
        },
        meal_rates=MealRates(
            breakfast=_num("BREAKFAST_COST"),
            lunch_mre=_num("LUNCH_MRE_COST"),
            dinner=_num("DINNER_COST"),
        ),
        player_billeting_per_night=_num("PLAYER_BILLETING_NIGHT"),
        player_per_diem_per_day=_num("PLAYER_PER_DIEM_PER_DAY"),
        default_airfare_per_person=_num("DEFAULT_AIRFARE"),
        default_rental_car_daily=_num("DEFAULT_RENTAL_CAR_DAILY"),
    )
