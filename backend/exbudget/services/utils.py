import datetime as dt
import re
from enum import Enum
from typing import Any

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def is_nan(v: Any) -> bool:
    return isinstance(v, float) and (v != v)


def norm_str(v: Any) -> str | None:
    if v is None or is_nan(v):
        return None
    if isinstance(v, Enum):
        v = v.value
    if isinstance(v, str):
        s = v.strip()
        return s if s else None
    return str(v).strip()


def norm_location(v: Any) -> str | None:
    # locations are matched against per-diem rates upper-cased
    s = norm_str(v)
    return s.upper() if s else None


def to_float_nullable(v: Any) -> float | None:
    if v is None or is_nan(v):
        return None
    try:
        if isinstance(v, (int, float)):
            return float(v)
        s = str(v).strip().replace(" ", "").replace(",", "")
        if not s or s.lower() in ("nan", "none", "null", "-"):
            return None
        return float(s)
    except (TypeError, ValueError):
        return None


def to_float(v: Any, default: float = 0.0) -> float:
    f = to_float_nullable(v)
    if f is None or is_nan(f):
        return default
    return f


def to_int(v: Any, default: int = 0) -> int:
    return int(to_float(v, float(default)))


def to_bool(v: Any) -> bool:
    if v is True or v == 1:
        return True
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes")
    return False


def is_local_flag(v: Any) -> bool:
    if isinstance(v, str) and v.strip().lower() == "local":
        return True
    return to_bool(v)


def to_date(v: Any) -> dt.date | None:
    if v is None:
        return None
    if isinstance(v, dt.datetime):
        return v.date()
    if isinstance(v, dt.date):
        return v
    if isinstance(v, str):
        s = v.strip()
        if not s:
            return None
        try:
            return dt.date.fromisoformat(s[:10])
        except ValueError:
            return None
    return None


def camel_to_snake(name: str) -> str:
    if "_" in name:
        return name
    return _CAMEL_RE.sub("_", name).lower()


def snake_keys(row: dict[str, Any]) -> dict[str, Any]:
    return {camel_to_snake(k): v for k, v in row.items()}
