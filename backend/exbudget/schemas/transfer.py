import datetime as dt
from typing import Any
from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DataBundle(BaseModel):
    # accepts camelCase keys from older exports
    model_config = ConfigDict(alias_generator=AliasGenerator(validation_alias=to_camel), populate_by_name=True)

    version: int = 1
    exported_at: dt.datetime | None = None
    exercises: list[dict[str, Any]] = []
    unit_budgets: list[dict[str, Any]] = []
    personnel_groups: list[dict[str, Any]] = []
    personnel_entries: list[dict[str, Any]] = []
    travel_configs: list[dict[str, Any]] = []
    execution_cost_lines: list[dict[str, Any]] = []
    om_cost_lines: list[dict[str, Any]] = []
    rank_cpd_rates: list[dict[str, Any]] = []
    per_diem_rates: list[dict[str, Any]] = []
    app_config: list[dict[str, Any]] = []


class ImportErrorOut(BaseModel):
    message: str
    table: str | None = None
    row_num: int | None = None
    column: str | None = None


class ImportResultOut(BaseModel):
    rows_loaded: int
    errors: list[ImportErrorOut] = []
