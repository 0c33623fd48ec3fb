from datetime import date, datetime

from tracker.domain import ExpenseRecord


def make_expense(id, amount, category, day, description=""):
    if isinstance(day, str):
        day = date.fromisoformat(day)
    return ExpenseRecord(
        id=id,
        amount=amount,
        category=category,
        description=description or category,
        date=day,
        created_at=datetime(2026, 10, 19, 12, 0, id % 60),
    )
