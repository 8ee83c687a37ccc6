from sqlalchemy import String, ForeignKey, Float, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from exbudget.db.base import Base
from exbudget.db.models._mixins import TimestampMixin

class ExecutionCostLine(Base, TimestampMixin):
    __tablename__ = "execution_cost_line"

    id: Mapped[int] = mapped_column(primary_key=True)
    unit_budget_id: Mapped[int] = mapped_column(ForeignKey("unit_budget.id", ondelete="CASCADE"), index=True)

    funding_type: Mapped[str] = mapped_column(String(8))
    category: Mapped[str] = mapped_column(String(64))
    amount: Mapped[float] = mapped_column(Float, default=0.0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # user-entered equipment value; amount is derived from it for UFR lines
    overall_equipment_cost: Mapped[float | None] = mapped_column(Float, nullable=True)

    unit_budget = relationship("UnitBudget", back_populates="execution_cost_lines")


class OmCostLine(Base, TimestampMixin):
    __tablename__ = "om_cost_line"

    id: Mapped[int] = mapped_column(primary_key=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercise.id", ondelete="CASCADE"), index=True)

    category: Mapped[str] = mapped_column(String(32), index=True)
    label: Mapped[str] = mapped_column(String(256), default="")
    amount: Mapped[float] = mapped_column(Float, default=0.0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    exercise = relationship("Exercise", back_populates="om_cost_lines")
