# import all models for Alembic
from exbudget.db.models.exercise import Exercise, TravelConfig
from exbudget.db.models.unit_budget import UnitBudget
from exbudget.db.models.personnel import PersonnelGroup, PersonnelEntry
from exbudget.db.models.cost_lines import ExecutionCostLine, OmCostLine
from exbudget.db.models.rates import RankCpdRate, PerDiemRate, AppConfig
