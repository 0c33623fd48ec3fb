"""Heuristic next-month spending forecast.

The projection is plain arithmetic over the ledger: recent daily average
times 30 days times a fixed trend multiplier, plus per-category averages
scaled by a 10% frequency bump. Results are memoized per ledger snapshot;
any add or delete produces a new snapshot and therefore a fresh result.
"""

import copy
import logging
import math
from functools import lru_cache
from typing import Dict, List, Tuple

from tracker.aggregation import half_up
from tracker.catalog import Catalog
from tracker.domain import ExpenseRecord

logger = logging.getLogger(__name__)

MIN_RECORDS = 5
RECENT_RECORDS = 30
DAYS_AHEAD = 30
FREQUENCY_GROWTH = 1.1
BUFFER = 1.1


def trend_multiplier(count: int) -> float:
    return 1.05 if count > 10 else 1.02


def confidence_level(count: int) -> str:
    if count > 20:
        return "high"
    if count > 10:
        return "medium"
    return "low"


def category_stats(records: Tuple[ExpenseRecord, ...], catalog: Catalog) -> Dict[str, Tuple[float, int]]:
    """Map catalog key -> (average amount, number of expenses), history only."""
    totals: Dict[str, float] = {}
    counts: Dict[str, int] = {}
    for e in records:
        totals[e.category] = totals.get(e.category, 0.0) + e.amount
        counts[e.category] = counts.get(e.category, 0) + 1
    return {
        c.key: (totals[c.key] / counts[c.key], counts[c.key])
        for c in catalog
        if counts.get(c.key)
    }


def recent_daily_average(records: Tuple[ExpenseRecord, ...]) -> float:
    # last N inserted records, not the last N days
    recent = records[-RECENT_RECORDS:]
    active_days = max(1, len({e.date for e in recent}))
    return sum(e.amount for e in recent) / active_days


def recommendations(next_month_total: int, trend: str) -> List[str]:
    tips = [f"Based on your patterns, budget ${next_month_total} for next month."]
    if trend == "increasing":
        tips.append("Your spending is trending upward. Review your expenses!")
    tips.append(
        f"Set aside ${next_month_total * BUFFER:.2f} (10% buffer) for unexpected expenses."
    )
    return tips


@lru_cache(maxsize=32)
def _forecast(records: Tuple[ExpenseRecord, ...], catalog: Catalog) -> dict:
    if len(records) < MIN_RECORDS:
        logger.debug("Forecast skipped: %d of %d required expenses", len(records), MIN_RECORDS)
        return {
            "next_month_total": 0,
            "confidence": "low",
            "message": "insufficient data",
            "category_predictions": [],
        }

    multiplier = trend_multiplier(len(records))
    next_month_total = half_up(recent_daily_average(records) * DAYS_AHEAD * multiplier)

    stats = category_stats(records, catalog)
    predictions = [
        {
            "key": c.key,
            "category": c.label,
            "predicted": half_up(stats[c.key][0] * math.ceil(stats[c.key][1] * FREQUENCY_GROWTH)),
            "color": c.color,
        }
        for c in catalog
        if c.key in stats
    ]

    trend = "increasing" if multiplier > 1.03 else "stable"
    return {
        "next_month_total": next_month_total,
        "category_predictions": predictions,
        "confidence": confidence_level(len(records)),
        "trend": trend,
        "recommendations": recommendations(next_month_total, trend),
    }


def forecast(records: Tuple[ExpenseRecord, ...], catalog: Catalog) -> dict:
    """Next-month forecast for a ledger snapshot.

    Fewer than five expenses short-circuits to a zero, low-confidence result
    carrying ``message == "insufficient data"``.
    """
    return copy.deepcopy(_forecast(tuple(records), tuple(catalog)))
