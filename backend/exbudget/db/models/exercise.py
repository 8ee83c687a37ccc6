import datetime as dt
from sqlalchemy import String, ForeignKey, Date, Float, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from exbudget.db.base import Base
from exbudget.db.models._mixins import TimestampMixin

class Exercise(Base, TimestampMixin):
    __tablename__ = "exercise"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(256))
    start_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    default_duty_days: Mapped[int] = mapped_column(Integer, default=14)
    total_budget: Mapped[float] = mapped_column(Float, default=0.0)

    unit_budgets = relationship(
        "UnitBudget",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="UnitBudget.id",
    )
    travel_config = relationship(
        "TravelConfig",
        back_populates="exercise",
        cascade="all, delete-orphan",
        uselist=False,
    )
    om_cost_lines = relationship(
        "OmCostLine",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="OmCostLine.id",
    )


class TravelConfig(Base, TimestampMixin):
    __tablename__ = "travel_config"

    id: Mapped[int] = mapped_column(primary_key=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercise.id", ondelete="CASCADE"), unique=True, index=True)

    airfare_per_person: Mapped[float] = mapped_column(Float, default=400.0)
    rental_car_daily_rate: Mapped[float] = mapped_column(Float, default=50.0)
    rental_car_count: Mapped[int] = mapped_column(Integer, default=0)
    rental_car_days: Mapped[int] = mapped_column(Integer, default=0)

    exercise = relationship("Exercise", back_populates="travel_config")
