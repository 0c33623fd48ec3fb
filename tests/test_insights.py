from datetime import date

from tracker.catalog import DEFAULT_CATALOG
from tracker.domain import CategoryDefinition
from tracker.insights import generate_insights, savings_tips
from helpers import make_expense

TODAY = date(2026, 10, 19)


def test_food_over_budget_scenario():
    trans = (make_expense(1, 600, "food", TODAY),)
    report = generate_insights(trans, DEFAULT_CATALOG)

    assert report["total_spent"] == 600
    assert report["overspending"] == [
        {"category": "food", "spent": 600, "budget": 500, "percent": 120}
    ]
    assert report["warnings"] == ["food"]
    assert report["good_spending"] == []
    assert len(report["savings_tips"]) == 1
    tip = report["savings_tips"][0]
    assert tip["key"] == "food"
    assert tip["name"] == "meal-prep"
    assert tip["potential"] == 210
    assert report["total_potential_savings"] == 210
    assert report["yearly_savings"] == 2520


def test_ninety_five_percent_overspends_without_warning():
    trans = (make_expense(1, 475, "food", TODAY),)
    report = generate_insights(trans, DEFAULT_CATALOG)
    assert [o["category"] for o in report["overspending"]] == ["food"]
    assert report["overspending"][0]["percent"] == 95
    assert report["warnings"] == []


def test_hundred_twenty_percent_overspends_with_warning():
    trans = (make_expense(1, 1440, "rent", TODAY),)
    report = generate_insights(trans, DEFAULT_CATALOG)
    assert [o["category"] for o in report["overspending"]] == ["rent"]
    assert report["warnings"] == ["rent"]
    # rent has no savings rule
    assert report["savings_tips"] == []


def test_middle_band_is_in_neither_list():
    trans = (make_expense(1, 210, "travel", TODAY),)
    report = generate_insights(trans, DEFAULT_CATALOG)
    assert report["overspending"] == []
    assert report["good_spending"] == []
    assert report["warnings"] == []


def test_good_spending_under_half_budget():
    trans = (make_expense(1, 30, "healthcare", TODAY),)
    report = generate_insights(trans, DEFAULT_CATALOG)
    assert report["good_spending"] == [{"category": "healthcare", "percent": 20}]


def test_entertainment_tip_independent_of_overspending():
    trans = (make_expense(1, 150, "entertainment", TODAY),)
    report = generate_insights(trans, DEFAULT_CATALOG)
    assert report["overspending"] == []
    assert [t["name"] for t in report["savings_tips"]] == ["free alternatives"]
    assert report["savings_tips"][0]["potential"] == 38


def test_shopping_tip_and_totals():
    trans = (
        make_expense(1, 330, "shopping", TODAY),
        make_expense(2, 600, "food", TODAY),
    )
    tips = savings_tips(trans, DEFAULT_CATALOG)
    assert [(t["key"], t["potential"]) for t in tips] == [("food", 210), ("shopping", 99)]

    report = generate_insights(trans, DEFAULT_CATALOG)
    assert report["total_potential_savings"] == 309
    assert report["yearly_savings"] == 309 * 12


def test_no_tip_below_threshold():
    trans = (make_expense(1, 100, "food", TODAY),)
    assert savings_tips(trans, DEFAULT_CATALOG) == []


def test_rules_skip_categories_missing_from_catalog():
    catalog = (CategoryDefinition("rent", "rent", "#000000", 100),)
    trans = (make_expense(1, 500, "rent", TODAY),)
    report = generate_insights(trans, catalog)
    assert report["warnings"] == ["rent"]
    assert report["savings_tips"] == []


def test_empty_ledger_report():
    report = generate_insights((), DEFAULT_CATALOG)
    assert report == {
        "total_spent": 0,
        "overspending": [],
        "good_spending": [],
        "warnings": [],
        "savings_tips": [],
        "total_potential_savings": 0,
        "yearly_savings": 0,
    }


def test_insights_are_idempotent():
    trans = (make_expense(1, 600, "food", TODAY), make_expense(2, 150, "entertainment", TODAY))
    assert generate_insights(trans, DEFAULT_CATALOG) == generate_insights(trans, DEFAULT_CATALOG)
