from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class CategoryDefinition:
    key: str               # stable identifier, e.g. "food"
    label: str             # short label used in reports
    color: str             # chart color, passed through untouched
    monthly_budget: float  # spending ceiling per month
    title: str = ""        # longer display text for the UI
    icon: str = ""


@dataclass(frozen=True)
class ExpenseRecord:
    id: int
    amount: float        # always > 0
    category: str        # CategoryDefinition.key
    description: str
    date: date           # calendar day chosen by the user
    created_at: datetime # capture time, orders same-day entries
