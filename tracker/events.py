from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'Event', 'EventBus', 'EXPENSE_ADDED', 'EXPENSE_REMOVED', 'BUDGET_ALERT',
    'check_budget_handler',
]

class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    """Synchronous observer list; handlers run in subscription order."""

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        if name not in self._subscribers:
            return []

        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload
        )

        # copy so a handler may unsubscribe itself
        return [handler(event, payload) for handler in list(self._subscribers[name])]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


EXPENSE_ADDED = "EXPENSE_ADDED"
EXPENSE_REMOVED = "EXPENSE_REMOVED"
BUDGET_ALERT = "BUDGET_ALERT"


def check_budget_handler(event: Event, payload: dict) -> dict:
    """Report when an added expense pushes its category over budget.

    Expects ``amount``, ``category``, ``budget_limit`` and ``current_spent``
    (spend before this expense) in the payload. Pure: returns a result dict.
    """
    amount = payload.get("amount", 0)
    category = payload.get("category", "")
    budget_limit = payload.get("budget_limit", 0)
    current_spent = payload.get("current_spent", 0)

    new_spent = current_spent + amount
    if budget_limit > 0 and new_spent > budget_limit:
        return {
            "alert": f"Budget exceeded for {category}: {new_spent:,.2f} / {budget_limit:,.2f}",
            "category": category,
            "spent": new_spent,
            "limit": budget_limit,
        }
    return {"spent": new_spent}
