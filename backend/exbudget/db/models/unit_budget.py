from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from exbudget.db.base import Base
from exbudget.db.models._mixins import TimestampMixin

class UnitBudget(Base, TimestampMixin):
    __tablename__ = "unit_budget"
    __table_args__ = (UniqueConstraint("exercise_id", "unit_code", name="uq_unit_budget_exercise_code"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercise.id", ondelete="CASCADE"), index=True)
    unit_code: Mapped[str] = mapped_column(String(32), index=True)  # e.g. "SG", "A7"

    exercise = relationship("Exercise", back_populates="unit_budgets")
    personnel_groups = relationship(
        "PersonnelGroup",
        back_populates="unit_budget",
        cascade="all, delete-orphan",
        order_by="PersonnelGroup.id",
    )
    execution_cost_lines = relationship(
        "ExecutionCostLine",
        back_populates="unit_budget",
        cascade="all, delete-orphan",
        order_by="ExecutionCostLine.id",
    )
