from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from exbudget.core.deps import get_db, not_found
from exbudget.crud.rates import (
    add_per_diem_rate,
    delete_per_diem_rate,
    get_app_config,
    get_per_diem_rate,
    list_cpd_rates,
    list_per_diem_rates,
    load_rate_inputs,
    put_app_config,
    upsert_cpd_rates,
    upsert_per_diem_rates,
)
from exbudget.schemas.rates import (
    CpdRateOut,
    CpdRatesIn,
    PerDiemRateIn,
    PerDiemRateOut,
    PerDiemRatesIn,
    RateInputs,
)

router = APIRouter()


@router.get("/cpd", response_model=list[CpdRateOut])
def get_cpd(db: Session = Depends(get_db)):
    return list_cpd_rates(db)


@router.put("/cpd", response_model=list[CpdRateOut])
def put_cpd(data: CpdRatesIn, db: Session = Depends(get_db)):
    return upsert_cpd_rates(db, data.rates)


@router.get("/per-diem", response_model=list[PerDiemRateOut])
def get_per_diem(db: Session = Depends(get_db)):
    return list_per_diem_rates(db)


@router.put("/per-diem", response_model=list[PerDiemRateOut])
def put_per_diem(data: PerDiemRatesIn, db: Session = Depends(get_db)):
    return upsert_per_diem_rates(db, data.rates)


@router.post("/per-diem", response_model=PerDiemRateOut, status_code=201)
def post_per_diem(data: PerDiemRateIn, db: Session = Depends(get_db)):
    try:
        return add_per_diem_rate(db, data)
    except ValueError as e:
        if str(e) == "location_exists":
            raise HTTPException(status_code=409, detail=f"Location {data.location} already exists")
        raise


@router.delete("/per-diem/{rate_id}")
def remove_per_diem(rate_id: int, db: Session = Depends(get_db)):
    row = get_per_diem_rate(db, rate_id)
    if not row:
        raise not_found("Per diem rate")
    delete_per_diem_rate(db, row)
    return {"deleted": rate_id}


@router.get("/config", response_model=dict[str, str])
def get_config(db: Session = Depends(get_db)):
    return get_app_config(db)


@router.put("/config", response_model=dict[str, str])
def put_config(values: dict[str, str], db: Session = Depends(get_db)):
    return put_app_config(db, values)


@router.get("/effective", response_model=RateInputs)
def get_effective(db: Session = Depends(get_db)):
    return load_rate_inputs(db)
