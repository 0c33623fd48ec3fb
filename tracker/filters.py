from datetime import date
from itertools import islice
from typing import Callable, Iterable, Iterator

from tracker.domain import ExpenseRecord

Predicate = Callable[[ExpenseRecord], bool]


def by_category(key: str) -> Predicate:
    def _filter(e: ExpenseRecord) -> bool:
        return e.category == key

    return _filter


def on_day(day: date) -> Predicate:
    def _filter(e: ExpenseRecord) -> bool:
        return e.date == day

    return _filter


def iter_expenses(
    records: Iterable[ExpenseRecord], pred: Predicate
) -> Iterator[ExpenseRecord]:
    for e in records:
        if pred(e):
            yield e


def chronological(records: Iterable[ExpenseRecord]) -> tuple[ExpenseRecord, ...]:
    """Oldest first; entries on the same day keep their capture order."""
    return tuple(sorted(records, key=lambda e: (e.date, e.created_at, e.id)))


def newest_first(records: Iterable[ExpenseRecord], limit: int | None = None) -> tuple[ExpenseRecord, ...]:
    ordered = reversed(chronological(records))
    return tuple(islice(ordered, max(0, limit)) if limit is not None else ordered)
