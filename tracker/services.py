import datetime
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from tracker import config
from tracker.aggregation import category_totals, daily_totals, monthly_totals, summary
from tracker.async_reports import build_dashboard
from tracker.catalog import Catalog
from tracker.domain import ExpenseRecord
from tracker.events import BUDGET_ALERT, EXPENSE_ADDED, Event, EventBus, check_budget_handler
from tracker.filters import newest_first
from tracker.forecast import forecast
from tracker.insights import generate_insights
from tracker.ledger import Ledger

logger = logging.getLogger(__name__)


class ExpenseTracker:
    """Facade the UI talks to: one instance per session.

    Mutations go through ``add_expense``/``delete_expense``; every getter
    recomputes from the ledger's current snapshot, so results always reflect
    the latest mutation.

    A caller-supplied ``ledger`` must already publish to an ``EventBus``;
    the tracker subscribes to that bus and never replaces it. ``bus`` is
    only used when the tracker builds its own ledger.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        window: Optional[int] = None,
        ledger: Optional[Ledger] = None,
        today: Callable[[], datetime.date] = datetime.date.today,
        bus: Optional[EventBus] = None,
    ):
        if ledger is None:
            ledger = Ledger(catalog or config.get_catalog(), bus or EventBus())
        elif ledger.bus is None:
            raise ValueError("ExpenseTracker needs a ledger constructed with an EventBus")
        elif bus is not None and bus is not ledger.bus:
            raise ValueError("bus must be the ledger's own EventBus")
        self.ledger = ledger
        self.catalog = ledger.catalog
        self.bus = ledger.bus
        self.window = window or config.DAILY_WINDOW
        self._today = today
        self.alerts: List[dict] = []
        self.bus.subscribe(EXPENSE_ADDED, self._on_expense_added)

    def _on_expense_added(self, event: Event, payload: dict) -> dict:
        result = check_budget_handler(event, payload)
        if "alert" in result:
            logger.info(result["alert"])
            self.alerts.append({"timestamp": event.ts, "message": result["alert"], **result})
            self.bus.publish(BUDGET_ALERT, result)
        return result

    def subscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        self.bus.subscribe(name, handler)

    def add_expense(
        self,
        amount: Any,
        category: str,
        description: Optional[str] = None,
        date: Any = None,
    ) -> ExpenseRecord:
        """Record an expense; ``date`` defaults to today.

        Raises ``ValidationError`` for a bad amount, unknown category or
        malformed date.
        """
        return self.ledger.add(amount, category, description, self._today() if date is None else date)

    def delete_expense(self, expense_id: int) -> None:
        self.ledger.remove(expense_id)

    def expenses(self) -> Tuple[ExpenseRecord, ...]:
        return self.ledger.all()

    def recent_expenses(self, limit: Optional[int] = None) -> Tuple[ExpenseRecord, ...]:
        return newest_first(self.ledger.all(), limit)

    def get_category_totals(self) -> List[dict]:
        return category_totals(self.ledger.all(), self.catalog)

    def get_daily_totals(self) -> List[dict]:
        return daily_totals(self.ledger.all(), self.window, self._today())

    def get_monthly_totals(self) -> List[dict]:
        return monthly_totals(self.ledger.all())

    def get_summary(self) -> dict:
        return summary(self.ledger.all())

    def get_insights(self) -> Optional[dict]:
        records = self.ledger.all()
        return generate_insights(records, self.catalog) if records else None

    def get_forecast(self) -> Optional[dict]:
        records = self.ledger.all()
        return forecast(records, self.catalog) if records else None

    def dashboard(self) -> Dict[str, Any]:
        """All analytics computed from a single snapshot."""
        records = self.ledger.all()
        return {
            "size": len(records),
            "category_totals": category_totals(records, self.catalog),
            "daily_totals": daily_totals(records, self.window, self._today()),
            "monthly_totals": monthly_totals(records),
            "summary": summary(records),
            "insights": generate_insights(records, self.catalog) if records else None,
            "forecast": forecast(records, self.catalog) if records else None,
        }

    async def dashboard_async(self) -> Dict[str, Any]:
        return await build_dashboard(self.ledger.all(), self.catalog, self.window, self._today())
