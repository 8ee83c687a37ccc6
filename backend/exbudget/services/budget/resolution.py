"""Per-entry rate resolution and military pay.

Every lookup here falls back to a safe default instead of raising: an
unknown rank or location prices at zero, a missing duty-day value falls
back to the group and then to the exercise default.
"""
from typing import Any

from exbudget.schemas.rates import PerDiem, RateInputs
from exbudget.services.utils import is_local_flag, norm_str, to_bool, to_float, to_float_nullable

DEFAULT_LOCATION = "GULFPORT"
DEFAULT_AVG_CPD = 200.0

_NO_PER_DIEM = PerDiem(lodging=0.0, mie=0.0)


def effective_duty_days(entry: Any, group: Any, default_days: float) -> float:
    for v in (getattr(entry, "duty_days", None), getattr(group, "duty_days", None)):
        days = to_float_nullable(v)
        if days is not None:
            return days
    return default_days


def effective_location(entry: Any, group: Any) -> str:
    return (
        norm_str(getattr(entry, "location", None))
        or norm_str(getattr(group, "location", None))
        or DEFAULT_LOCATION
    )


def effective_is_local(entry: Any, group: Any) -> bool:
    return is_local_flag(getattr(entry, "is_local", None)) or is_local_flag(getattr(group, "is_local", None))


def per_diem_for(rates: RateInputs, location: str) -> PerDiem:
    return rates.per_diem_rates.get(location, _NO_PER_DIEM)


def calc_mil_pay(group: Any, entry: Any, rates: RateInputs, duty_days: float) -> float:
    if to_bool(getattr(group, "is_long_tour", False)):
        return 0.0
    count = to_float(getattr(entry, "count", 0))
    rank_code = norm_str(getattr(entry, "rank_code", None))
    if rank_code:
        return count * to_float(rates.cpd_rates.get(rank_code)) * duty_days
    avg_cpd = to_float_nullable(getattr(group, "avg_cpd_override", None))
    if avg_cpd is None:
        avg_cpd = DEFAULT_AVG_CPD
    # rankless entries price with the group average; the aggregate entry carries the group pax
    return count * avg_cpd * duty_days
