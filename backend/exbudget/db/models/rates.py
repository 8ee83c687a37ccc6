import datetime as dt
from sqlalchemy import String, Date, Float
from sqlalchemy.orm import Mapped, mapped_column

from exbudget.db.base import Base
from exbudget.db.models._mixins import TimestampMixin

class RankCpdRate(Base, TimestampMixin):
    __tablename__ = "rank_cpd_rate"

    id: Mapped[int] = mapped_column(primary_key=True)
    rank_code: Mapped[str] = mapped_column(String(16), unique=True, index=True)
    cost_per_day: Mapped[float] = mapped_column(Float, default=0.0)
    effective_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)


class PerDiemRate(Base, TimestampMixin):
    __tablename__ = "per_diem_rate"

    id: Mapped[int] = mapped_column(primary_key=True)
    location: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    lodging_rate: Mapped[float] = mapped_column(Float, default=0.0)
    mie_rate: Mapped[float] = mapped_column(Float, default=0.0)
    effective_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)


class AppConfig(Base):
    __tablename__ = "app_config"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(String(256))
