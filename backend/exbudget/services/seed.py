from sqlalchemy.orm import Session
from exbudget.db.session import SessionLocal
from exbudget.core.config import settings
from exbudget.core.logging import logger
from exbudget.crud.exercises import list_exercises, create_exercise
from exbudget.crud.rates import CONFIG_DEFAULTS
from exbudget.db.models.rates import AppConfig, PerDiemRate, RankCpdRate
from exbudget.schemas.exercise import ExerciseCreate

BASELINE_CPD_RATES = {
    "AB": 191, "AMN": 185, "A1C": 194, "SRA": 209, "SSGT": 253, "TSGT": 300,
    "MSGT": 350, "SMSGT": 401, "CMSGT": 476,
    "2LT": 332, "1LT": 386, "CAPT": 457, "MAJ": 545, "LTCOL": 635, "COL": 744,
    "BG": 861, "MG": 960,
    "CIV": 0,
}

# location -> (lodging, M&IE)
BASELINE_PER_DIEM = {
    "GULFPORT": (98, 64),
    "CAMP_SHELBY": (96, 59),
}


def seed_baseline(db: Session) -> None:
    """Insert missing baseline rates and config keys; existing values are left alone."""
    known_ranks = {r for (r,) in db.query(RankCpdRate.rank_code).all()}
    for code, cpd in BASELINE_CPD_RATES.items():
        if code not in known_ranks:
            db.add(RankCpdRate(rank_code=code, cost_per_day=float(cpd)))

    if db.query(PerDiemRate.id).first() is None:
        for location, (lodging, mie) in BASELINE_PER_DIEM.items():
            db.add(PerDiemRate(location=location, lodging_rate=float(lodging), mie_rate=float(mie)))

    known_keys = {k for (k,) in db.query(AppConfig.key).all()}
    for key, value in CONFIG_DEFAULTS.items():
        if key not in known_keys:
            db.add(AppConfig(key=key, value=str(value)))
    db.commit()


def seed_demo():
    db: Session = SessionLocal()
    try:
        seed_baseline(db)
        # Create default exercise if none
        if not list_exercises(db):
            e = create_exercise(db, ExerciseCreate(name=settings.DEMO_EXERCISE_NAME))
            logger.info("demo_exercise_created", exercise_id=e.id)
    finally:
        db.close()
