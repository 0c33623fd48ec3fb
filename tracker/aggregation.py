import calendar
import math
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from tracker.catalog import Catalog
from tracker.domain import ExpenseRecord
from tracker.filters import iter_expenses, on_day

DEFAULT_WINDOW = 7


def half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (2.5 -> 3, not 2)."""
    return math.floor(value + 0.5)


def category_spend(records: Iterable[ExpenseRecord], catalog: Catalog) -> Dict[str, float]:
    """Total spent per catalog key; categories without expenses map to 0."""
    totals: Dict[str, float] = {c.key: 0.0 for c in catalog}
    for e in records:
        if e.category in totals:
            totals[e.category] += e.amount
    return totals


def category_totals(records: Iterable[ExpenseRecord], catalog: Catalog) -> List[dict]:
    """Chart rows in catalog order, only for categories with spending."""
    totals = category_spend(records, catalog)
    return [
        {"key": c.key, "label": c.label, "value": totals[c.key], "color": c.color}
        for c in catalog
        if totals[c.key] > 0
    ]


def daily_totals(
    records: Iterable[ExpenseRecord],
    window: int = DEFAULT_WINDOW,
    reference_date: Optional[date] = None,
) -> List[dict]:
    """Spending for each of the last ``window`` days, oldest first.

    The window ends at ``reference_date`` (local today by default) and always
    has exactly ``window`` rows; days without expenses report 0.
    """
    end = reference_date or date.today()
    records = tuple(records)
    rows = []
    for offset in range(window - 1, -1, -1):
        day = end - timedelta(days=offset)
        total = sum(e.amount for e in iter_expenses(records, on_day(day)))
        rows.append({
            "day": calendar.day_abbr[day.weekday()],
            "date": day.isoformat(),
            "amount": half_up(total),
        })
    return rows


def monthly_totals(records: Iterable[ExpenseRecord]) -> List[dict]:
    # grouped by month name only: March 2024 and March 2025 share one row
    totals: Dict[str, float] = {}
    for e in records:
        month = calendar.month_abbr[e.date.month]
        totals[month] = totals.get(month, 0.0) + e.amount
    return [{"month": month, "total": half_up(total)} for month, total in totals.items()]


def summary(records: Iterable[ExpenseRecord]) -> dict:
    records = tuple(records)
    total = sum(e.amount for e in records)
    active_days = len({e.date for e in records})
    return {
        "total_spent": total,
        "count": len(records),
        "active_days": active_days,
        "avg_per_day": total / max(1, active_days),
    }
