from sqlalchemy import String, ForeignKey, Float, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from exbudget.db.base import Base
from exbudget.db.models._mixins import TimestampMixin
from exbudget.core.enums import FundingType

class PersonnelGroup(Base, TimestampMixin):
    __tablename__ = "personnel_group"

    id: Mapped[int] = mapped_column(primary_key=True)
    unit_budget_id: Mapped[int] = mapped_column(ForeignKey("unit_budget.id", ondelete="CASCADE"), index=True)

    role: Mapped[str] = mapped_column(String(16))  # PLAYER|WHITE_CELL|PLANNING|SUPPORT
    funding_type: Mapped[str] = mapped_column(String(8), default=FundingType.rpa.value)
    pax_count: Mapped[int] = mapped_column(Integer, default=0)
    duty_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    location: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_long_tour: Mapped[bool] = mapped_column(Boolean, default=False)
    is_local: Mapped[bool] = mapped_column(Boolean, default=False)

    # group-level overrides of the exercise travel config
    airfare_per_person: Mapped[float | None] = mapped_column(Float, nullable=True)
    rental_car_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rental_car_daily: Mapped[float | None] = mapped_column(Float, nullable=True)
    rental_car_days: Mapped[int | None] = mapped_column(Integer, nullable=True)

    avg_cpd_override: Mapped[float | None] = mapped_column(Float, nullable=True)

    unit_budget = relationship("UnitBudget", back_populates="personnel_groups")
    personnel_entries = relationship(
        "PersonnelEntry",
        back_populates="personnel_group",
        cascade="all, delete-orphan",
        order_by="PersonnelEntry.id",
    )


class PersonnelEntry(Base, TimestampMixin):
    __tablename__ = "personnel_entry"

    id: Mapped[int] = mapped_column(primary_key=True)
    personnel_group_id: Mapped[int] = mapped_column(ForeignKey("personnel_group.id", ondelete="CASCADE"), index=True)

    rank_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    count: Mapped[int] = mapped_column(Integer, default=0)
    duty_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    location: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_local: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    personnel_group = relationship("PersonnelGroup", back_populates="personnel_entries")
