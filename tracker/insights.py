"""Rule-based spending insights.

Every catalog category with spending is compared against its monthly budget:
above 90% it is flagged as overspending, below 50% as good spending, and above
100% it also raises a warning. Savings tips come from a fixed rule table and
are evaluated independently of that classification.
"""

from typing import Iterable, List, NamedTuple

from tracker.aggregation import category_spend, half_up
from tracker.catalog import Catalog, categories_by_key
from tracker.domain import ExpenseRecord

OVERSPEND_PERCENT = 90
GOOD_SPEND_PERCENT = 50
WARNING_PERCENT = 100


class SavingsRule(NamedTuple):
    category: str     # catalog key
    threshold: float  # fraction of budget that must be exceeded
    rate: float       # share of spending the tip could save
    name: str
    tip: str


SAVINGS_RULES = (
    SavingsRule("food", 0.8, 0.35, "meal-prep",
                "Meal prep on weekends to save 30-40% on food expenses"),
    SavingsRule("entertainment", 0.7, 0.25, "free alternatives",
                "Try free alternatives like community events"),
    SavingsRule("shopping", 0.8, 0.3, "24-hour wait rule",
                "Wait 24 hours before non-essential purchases"),
)


def percent_of_budget(spent: float, budget: float) -> float:
    return spent * 100 / budget


def savings_tips(records: Iterable[ExpenseRecord], catalog: Catalog, rules=SAVINGS_RULES) -> List[dict]:
    spent = category_spend(records, catalog)
    by_key = categories_by_key(catalog)
    tips = []
    for rule in rules:
        cat = by_key.get(rule.category)
        if cat is None:
            continue
        if spent[cat.key] > cat.monthly_budget * rule.threshold:
            tips.append({
                "key": cat.key,
                "category": cat.label,
                "icon": cat.icon,
                "name": rule.name,
                "tip": rule.tip,
                "potential": half_up(spent[cat.key] * rule.rate),
            })
    return tips


def generate_insights(records: Iterable[ExpenseRecord], catalog: Catalog) -> dict:
    records = tuple(records)
    spent = category_spend(records, catalog)

    overspending = []
    good_spending = []
    warnings = []
    for cat in catalog:
        amount = spent[cat.key]
        if amount <= 0:
            continue
        percent = percent_of_budget(amount, cat.monthly_budget)
        if percent > OVERSPEND_PERCENT:
            overspending.append({
                "category": cat.label,
                "spent": amount,
                "budget": cat.monthly_budget,
                "percent": percent,
            })
        elif percent < GOOD_SPEND_PERCENT:
            good_spending.append({"category": cat.label, "percent": percent})
        if percent > WARNING_PERCENT:
            warnings.append(cat.label)

    tips = savings_tips(records, catalog)
    potential = sum(t["potential"] for t in tips)
    return {
        "total_spent": sum(e.amount for e in records),
        "overspending": overspending,
        "good_spending": good_spending,
        "warnings": warnings,
        "savings_tips": tips,
        "total_potential_savings": potential,
        "yearly_savings": potential * 12,
    }
