from typing import Any

from exbudget.schemas.rates import RateInputs
from exbudget.services.budget.resolution import effective_is_local, effective_location
from exbudget.services.utils import norm_str
from exbudget.services.validators import ValidationError, is_negative


def find_unknown_rate_codes(exercise: Any, rates: RateInputs) -> list[ValidationError]:
    """Rank codes, locations and amounts the engine will silently price at zero or below."""
    errors: list[ValidationError] = []
    seen: set[tuple[str | None, str, str]] = set()

    def _add(message: str, unit_code: str | None, column: str, value: str):
        key = (unit_code, column, value)
        if key in seen:
            return
        seen.add(key)
        errors.append(ValidationError(message, column=column, unit_code=unit_code, value=value))

    for ub in getattr(exercise, "unit_budgets", None) or []:
        unit_code = norm_str(getattr(ub, "unit_code", None))
        for group in getattr(ub, "personnel_groups", None) or []:
            entries = list(getattr(group, "personnel_entries", None) or [])
            for entry in entries:
                rank_code = norm_str(getattr(entry, "rank_code", None))
                if rank_code and rank_code not in rates.cpd_rates:
                    _add(f"Unknown rank code '{rank_code}'", unit_code, "rank_code", rank_code)
            for entry in entries or [None]:
                if effective_is_local(entry, group):
                    continue
                location = effective_location(entry, group)
                if location not in rates.per_diem_rates:
                    _add(f"No per diem rate for location '{location}'", unit_code, "location", location)
        for line in getattr(ub, "execution_cost_lines", None) or []:
            if is_negative(getattr(line, "amount", None)):
                _add("Negative execution cost amount", unit_code, "amount", str(line.amount))

    for line in getattr(exercise, "om_cost_lines", None) or []:
        if is_negative(getattr(line, "amount", None)):
            _add("Negative O&M cost amount", None, "amount", str(line.amount))
    return errors
