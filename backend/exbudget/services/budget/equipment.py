"""UFR share of an equipment cost line.

A unit may record an overall equipment cost on one of its execution cost
lines; the amount charged to O&M is the UFR share of it. Older data kept the
overall cost inside the line's notes as ``A7_WRM_OVERALL:<number>``; that
convention is only decoded when importing.
"""
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from exbudget.services.utils import norm_str, to_float

UFR_CATEGORY = "UFR"
WRM_CATEGORY = "WRM"
UFR_SHARE = Decimal("0.10")

LEGACY_NOTES_PREFIX = "A7_WRM_OVERALL:"
LEGACY_NOTES_RE = re.compile("^" + re.escape(LEGACY_NOTES_PREFIX) + r"([0-9]+(?:\.[0-9]+)?)$")


def ufr_amount(overall_equipment_cost: Any) -> float:
    value = Decimal(str(to_float(overall_equipment_cost))) * UFR_SHARE
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def is_legacy_notes(notes: Any) -> bool:
    s = norm_str(notes)
    return bool(s and LEGACY_NOTES_RE.match(s))


def parse_legacy_overall_equipment_cost(notes: Any, category: Any = None, amount: Any = None) -> float | None:
    s = norm_str(notes)
    if s:
        m = LEGACY_NOTES_RE.match(s)
        if m:
            return float(m.group(1))
    cat = (norm_str(category) or "").upper()
    if cat == UFR_CATEGORY:
        return to_float(amount) * 10
    if cat == WRM_CATEGORY:
        return to_float(amount)
    return None
