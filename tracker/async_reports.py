import asyncio
from datetime import date
from typing import Any, Callable, Dict, Iterable, Optional

from tracker.aggregation import DEFAULT_WINDOW, category_totals, daily_totals, monthly_totals, summary
from tracker.catalog import Catalog
from tracker.domain import ExpenseRecord
from tracker.forecast import forecast
from tracker.insights import generate_insights


async def build_dashboard(
    records: Iterable[ExpenseRecord],
    catalog: Catalog,
    window: int = DEFAULT_WINDOW,
    reference_date: Optional[date] = None,
) -> Dict[str, Any]:
    """Compute every dashboard section concurrently from one snapshot.

    The records are frozen into a tuple before any task starts, so all
    sections describe the same ledger state even if the ledger changes while
    the tasks are pending.
    """
    snapshot = tuple(records)
    today = reference_date or date.today()

    async def section(name: str, compute: Callable[[], Any]) -> tuple[str, Any]:
        await asyncio.sleep(0)  # cooperate
        return name, compute()

    results = await asyncio.gather(
        section("category_totals", lambda: category_totals(snapshot, catalog)),
        section("daily_totals", lambda: daily_totals(snapshot, window, today)),
        section("monthly_totals", lambda: monthly_totals(snapshot)),
        section("summary", lambda: summary(snapshot)),
        section("insights", lambda: generate_insights(snapshot, catalog) if snapshot else None),
        section("forecast", lambda: forecast(snapshot, catalog) if snapshot else None),
    )
    return {"size": len(snapshot), **{k: v for k, v in results}}
