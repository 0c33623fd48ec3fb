import logging
from datetime import datetime
from itertools import count
from typing import Any, Callable, Iterator, Optional, Tuple

from tracker.catalog import DEFAULT_CATALOG, Catalog
from tracker.domain import ExpenseRecord
from tracker.events import EXPENSE_ADDED, EXPENSE_REMOVED, EventBus
from tracker.filters import by_category, iter_expenses
from tracker.functional import ValidationError, validate_expense

logger = logging.getLogger(__name__)


class Ledger:
    """Append/remove-only collection of expenses for one session.

    Records are kept in insertion order inside an immutable tuple; every
    mutation swaps in a new tuple, so a snapshot handed out by ``all()`` never
    changes underneath its reader.
    """

    def __init__(
        self,
        catalog: Catalog = DEFAULT_CATALOG,
        bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.catalog = catalog
        self.bus = bus
        self._clock = clock
        self._records: Tuple[ExpenseRecord, ...] = ()
        self._ids = count(1)

    def add(
        self,
        amount: Any,
        category: str,
        description: Optional[str] = None,
        date: Any = None,
    ) -> ExpenseRecord:
        result = validate_expense(amount, category, date, self.catalog)
        if result.is_left():
            error = result.get_error()
            logger.warning("Rejected expense: %s", error["message"])
            raise ValidationError.from_error(error)

        value, category_def, day = result.get_or_else(None)
        current_spent = sum(e.amount for e in iter_expenses(self._records, by_category(category)))

        record = ExpenseRecord(
            id=next(self._ids),
            amount=value,
            category=category_def.key,
            description=(description or "").strip() or category_def.label,
            date=day,
            created_at=self._clock(),
        )
        self._records = self._records + (record,)
        logger.debug("Added expense %s: %.2f %s on %s", record.id, value, record.category, day)

        if self.bus is not None:
            self.bus.publish(EXPENSE_ADDED, {
                "id": record.id,
                "amount": record.amount,
                "category": record.category,
                "budget_limit": category_def.monthly_budget,
                "current_spent": current_spent,
            })
        return record

    def remove(self, expense_id: int) -> bool:
        """Drop the expense with this id. Unknown ids are ignored."""
        removed = self.get(expense_id)
        if removed is None:
            logger.debug("Ignoring removal of unknown expense %s", expense_id)
            return False

        self._records = tuple(e for e in self._records if e.id != expense_id)
        logger.debug("Removed expense %s", expense_id)

        if self.bus is not None:
            self.bus.publish(EXPENSE_REMOVED, {
                "id": removed.id,
                "amount": removed.amount,
                "category": removed.category,
            })
        return True

    def get(self, expense_id: int) -> Optional[ExpenseRecord]:
        return next((e for e in self._records if e.id == expense_id), None)

    def all(self) -> Tuple[ExpenseRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExpenseRecord]:
        return iter(self._records)
