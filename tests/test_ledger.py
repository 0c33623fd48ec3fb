import math
import time
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from tracker.events import EXPENSE_ADDED, EXPENSE_REMOVED, EventBus
from tracker.functional import ValidationError
from tracker.ledger import Ledger

TODAY = date(2026, 10, 19)


def fixed_clock():
    return datetime(2026, 10, 19, 9, 30)


def test_add_appends_record_with_inputs():
    ledger = Ledger(clock=fixed_clock)
    record = ledger.add(12.5, "food", "Lunch", TODAY)

    assert len(ledger) == 1
    assert ledger.all() == (record,)
    assert record.id == 1
    assert record.amount == 12.5
    assert record.category == "food"
    assert record.description == "Lunch"
    assert record.date == TODAY
    assert record.created_at == datetime(2026, 10, 19, 9, 30)


def test_ids_are_unique_and_increasing():
    ledger = Ledger()
    ids = [ledger.add(1, "other", date=TODAY).id for _ in range(5)]
    assert ids == [1, 2, 3, 4, 5]

    ledger.remove(5)
    assert ledger.add(1, "other", date=TODAY).id == 6


def test_description_defaults_to_category_label():
    ledger = Ledger()
    assert ledger.add(3, "travel", None, TODAY).description == "travel"
    assert ledger.add(3, "travel", "   ", TODAY).description == "travel"


def test_add_accepts_iso_strings_datetimes_and_numeric_text():
    ledger = Ledger()
    assert ledger.add("19.99", "shopping", date="2026-10-01").date == date(2026, 10, 1)
    assert ledger.add(Decimal("5"), "shopping", date=datetime(2026, 10, 2, 23, 59)).date == date(2026, 10, 2)
    assert [e.amount for e in ledger] == [19.99, 5.0]


@pytest.mark.parametrize("amount", [0, -5, "abc", "", math.nan, math.inf, 10**400, True, None, [10]])
def test_add_rejects_bad_amounts(amount):
    ledger = Ledger()
    with pytest.raises(ValidationError) as exc:
        ledger.add(amount, "food", "x", TODAY)
    assert exc.value.code == "invalid_amount"
    assert len(ledger) == 0


def test_add_rejects_unknown_category():
    ledger = Ledger()
    with pytest.raises(ValidationError) as exc:
        ledger.add(10, "pets", "x", TODAY)
    assert exc.value.code == "category_not_found"
    assert exc.value.details["category"] == "pets"
    assert "pets" in str(exc.value)


@pytest.mark.parametrize("when", ["2026-02-30", "yesterday", None, 20261019])
def test_add_rejects_bad_dates(when):
    ledger = Ledger()
    with pytest.raises(ValidationError) as exc:
        ledger.add(10, "food", "x", when)
    assert exc.value.code == "invalid_date"


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        Ledger().add(-1, "food", "x", TODAY)


def test_remove_unknown_id_is_noop():
    ledger = Ledger()
    ledger.add(10, "food", "x", TODAY)
    before = ledger.all()

    assert ledger.remove(42) is False
    assert ledger.all() == before


def test_remove_existing_id():
    ledger = Ledger()
    first = ledger.add(10, "food", "x", TODAY)
    second = ledger.add(20, "rent", "y", TODAY)

    assert ledger.remove(first.id) is True
    assert ledger.all() == (second,)
    assert ledger.get(first.id) is None
    assert ledger.remove(first.id) is False


def test_snapshot_is_not_affected_by_later_mutations():
    ledger = Ledger()
    ledger.add(10, "food", "x", TODAY)
    snapshot = ledger.all()
    ledger.add(20, "food", "y", TODAY)
    ledger.remove(1)

    assert isinstance(snapshot, tuple)
    assert [e.amount for e in snapshot] == [10]


def test_mutations_publish_events():
    bus = EventBus()
    added, removed = [], []
    bus.subscribe(EXPENSE_ADDED, lambda event, payload: added.append(payload) or {})
    bus.subscribe(EXPENSE_REMOVED, lambda event, payload: removed.append(payload) or {})

    ledger = Ledger(bus=bus)
    ledger.add(300, "food", "a", TODAY)
    ledger.add(250, "food", "b", TODAY)
    ledger.remove(1)
    ledger.remove(1)

    assert added[1] == {
        "id": 2,
        "amount": 250,
        "category": "food",
        "budget_limit": 500,
        "current_spent": 300,
    }
    assert removed == [{"id": 1, "amount": 300, "category": "food"}]


def test_rejected_add_publishes_nothing():
    bus = EventBus()
    calls = []
    bus.subscribe(EXPENSE_ADDED, lambda event, payload: calls.append(payload) or {})
    with pytest.raises(ValidationError):
        Ledger(bus=bus).add(0, "food", "x", TODAY)
    assert calls == []


@pytest.fixture
def los_angeles_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_aware_datetime_is_stored_on_local_day(los_angeles_tz):
    ledger = Ledger()
    record = ledger.add(10, "food", "late dinner", datetime(2026, 10, 19, 2, 30, tzinfo=timezone.utc))
    assert record.date == date(2026, 10, 18)
