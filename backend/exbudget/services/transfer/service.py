"""Whole-database JSON export and import.

Rows travel as flat per-table lists. On import every row gets a fresh id and
child rows are re-pointed at their parents through the old-id -> new-id maps,
so bundles written by older clients (string ids, camelCase keys) load too.
"""
import datetime as dt
from typing import Any

from sqlalchemy import Boolean, Date, Float, Integer
from sqlalchemy.orm import Session

from exbudget.core.logging import logger
from exbudget.db.models.cost_lines import ExecutionCostLine, OmCostLine
from exbudget.db.models.exercise import Exercise, TravelConfig
from exbudget.db.models.personnel import PersonnelEntry, PersonnelGroup
from exbudget.db.models.rates import AppConfig, PerDiemRate, RankCpdRate
from exbudget.db.models.unit_budget import UnitBudget
from exbudget.schemas.transfer import DataBundle
from exbudget.services.budget.equipment import (
    LEGACY_NOTES_PREFIX,
    UFR_CATEGORY,
    WRM_CATEGORY,
    is_legacy_notes,
    parse_legacy_overall_equipment_cost,
)
from exbudget.services.utils import norm_location, norm_str, snake_keys, to_bool, to_date, to_float_nullable
from exbudget.services.validators import ValidationError

BUNDLE_VERSION = 1

# bundle field -> model, in parent-before-child order
TABLES = [
    ("exercises", Exercise),
    ("unit_budgets", UnitBudget),
    ("personnel_groups", PersonnelGroup),
    ("personnel_entries", PersonnelEntry),
    ("travel_configs", TravelConfig),
    ("execution_cost_lines", ExecutionCostLine),
    ("om_cost_lines", OmCostLine),
    ("rank_cpd_rates", RankCpdRate),
    ("per_diem_rates", PerDiemRate),
    ("app_config", AppConfig),
]

# child table -> (foreign key column, parent table)
PARENTS = {
    "unit_budgets": ("exercise_id", "exercises"),
    "personnel_groups": ("unit_budget_id", "unit_budgets"),
    "personnel_entries": ("personnel_group_id", "personnel_groups"),
    "travel_configs": ("exercise_id", "exercises"),
    "execution_cost_lines": ("unit_budget_id", "unit_budgets"),
    "om_cost_lines": ("exercise_id", "exercises"),
}

_SKIP_COLS = {"id", "created_at", "updated_at"}


def _table_cols(model) -> dict[str, Any]:
    return {c.key: c for c in model.__table__.columns}


def _row_dict(obj, model) -> dict[str, Any]:
    out = {}
    for name in _table_cols(model):
        if name in ("created_at", "updated_at"):
            continue
        v = getattr(obj, name)
        out[name] = v.isoformat() if isinstance(v, dt.date) else v
    return out


def export_all(db: Session) -> DataBundle:
    data: dict[str, Any] = {}
    for field, model in TABLES:
        order = model.key if model is AppConfig else model.id
        data[field] = [_row_dict(obj, model) for obj in db.query(model).order_by(order).all()]
    return DataBundle(version=BUNDLE_VERSION, exported_at=dt.datetime.now(dt.timezone.utc), **data)


def _coerce(column, value: Any) -> Any:
    if isinstance(column.type, Boolean):
        return None if value is None else to_bool(value)
    if isinstance(column.type, Integer):
        f = to_float_nullable(value)
        return None if f is None else int(f)
    if isinstance(column.type, Float):
        return to_float_nullable(value)
    if isinstance(column.type, Date):
        return to_date(value)
    return norm_str(value)


def _filter_values(model, values: dict) -> dict:
    cols = _table_cols(model)
    out = {}
    for k, v in values.items():
        col = cols.get(k)
        if col is None or k in _SKIP_COLS or k.endswith("_id"):
            continue
        v = _coerce(col, v)
        if k == "location":
            v = norm_location(v)
        # missing non-nullable values fall back to the column default
        if v is None and not col.nullable:
            continue
        out[k] = v
    return out


def _upgrade_execution_line(values: dict) -> dict:
    category = (values.get("category") or "").upper()
    notes = values.get("notes")
    if values.get("overall_equipment_cost") is None and (
        category in (UFR_CATEGORY, WRM_CATEGORY) or is_legacy_notes(notes)
    ):
        values["overall_equipment_cost"] = parse_legacy_overall_equipment_cost(notes, category, values.get("amount"))
    if notes and notes.startswith(LEGACY_NOTES_PREFIX):
        values["notes"] = None
    return values


def _clear_all(db: Session) -> None:
    for _, model in reversed(TABLES):
        db.query(model).delete(synchronize_session=False)


def import_all(db: Session, bundle: DataBundle) -> dict:
    """Replace every table with the bundle contents in one transaction."""
    errors: list[ValidationError] = []
    id_maps: dict[str, dict[str, int]] = {field: {} for field, _ in TABLES}
    rows_loaded = 0

    try:
        _clear_all(db)
        db.flush()
        db.expunge_all()

        for field, model in TABLES:
            for i, raw in enumerate(getattr(bundle, field) or [], start=1):
                row = snake_keys(raw)
                values = _filter_values(model, row)
                if model is ExecutionCostLine:
                    values = _upgrade_execution_line(values)

                if field in PARENTS:
                    fk, parent = PARENTS[field]
                    parent_id = id_maps[parent].get(str(row.get(fk)))
                    if parent_id is None:
                        errors.append(ValidationError(
                            f"Unknown parent id {row.get(fk)!r}", table=field, row_num=i, column=fk,
                        ))
                        continue
                    values[fk] = parent_id

                if model is AppConfig:
                    key = norm_str(row.get("key"))
                    if key is None:
                        errors.append(ValidationError("Missing config key", table=field, row_num=i, column="key"))
                        continue
                    values["key"] = key
                    values["value"] = "" if row.get("value") is None else str(row.get("value"))

                missing = [
                    name for name, col in _table_cols(model).items()
                    if name not in _SKIP_COLS and not col.nullable and col.default is None
                    and col.server_default is None and name not in values
                ]
                if missing:
                    errors.append(ValidationError(
                        f"Missing required value '{missing[0]}'", table=field, row_num=i, column=missing[0],
                    ))
                    continue

                obj = model(**values)
                db.add(obj)
                db.flush()
                if model is not AppConfig:
                    id_maps[field][str(row.get("id"))] = obj.id
                rows_loaded += 1

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("data_imported", rows_loaded=rows_loaded, errors=len(errors))
    return {
        "rows_loaded": rows_loaded,
        "errors": [
            {"message": e.message, "table": e.table, "row_num": e.row_num, "column": e.column}
            for e in errors
        ],
    }
