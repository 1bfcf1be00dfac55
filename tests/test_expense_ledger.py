"""Mini README: Tests covering the expense ledger and its aggregates.

Structure:
    * validation tests - bad amounts, dates and categories never enter the ledger.
    * removal tests - positional and identifier based deletion semantics.
    * aggregate tests - totals, year-aware month buckets and category sums.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal

import pytest

from expense_tracker.ledger import (
    Expense,
    ExpenseLedger,
    ExpenseNotFoundError,
    LedgerError,
    OutOfRangeError,
    ValidationError,
)


def _expense(
    amount: object, category: str = "Food", when: object = "2024-03-15", description: str = ""
) -> dict:
    return {"amount": amount, "category": category, "date": when, "description": description}


def test_add_returns_position_and_preserves_order() -> None:
    """Expenses append in submission order and report their position."""

    ledger = ExpenseLedger()

    assert ledger.add(_expense(10, description="coffee")) == 0
    assert ledger.add(_expense(20, description="lunch")) == 1
    assert ledger.add(_expense(30, description="dinner")) == 2

    assert [expense.description for expense in ledger.list_expenses()] == [
        "coffee",
        "lunch",
        "dinner",
    ]
    assert len(ledger) == 3


def test_add_coerces_form_strings() -> None:
    """Form submissions arrive as strings and should be parsed before storage."""

    ledger = ExpenseLedger()
    ledger.add({"amount": " 12.50 ", "category": "Transportation", "date": "2024-01-05"})

    expense = ledger.list_expenses()[0]
    assert expense.amount == pytest.approx(12.5)
    assert expense.occurred_on == date(2024, 1, 5)
    assert expense.description == ""


def test_add_accepts_date_objects_and_decimals() -> None:
    ledger = ExpenseLedger()
    ledger.add(_expense(Decimal("99.99"), when=datetime(2024, 2, 29, 18, 30)))

    expense = ledger.list_expenses()[0]
    assert expense.occurred_on == date(2024, 2, 29)
    assert expense.amount == pytest.approx(99.99)


@pytest.mark.parametrize(
    "amount",
    [
        -5,
        "-0.01",
        "abc",
        "",
        None,
        True,
        math.nan,
        math.inf,
        "inf",
        [10],
        Decimal("NaN"),
        Decimal("sNaN"),
        Decimal("-1"),
    ],
)
def test_add_rejects_invalid_amounts(amount: object) -> None:
    """Negative, non-numeric and non-finite amounts raise ValidationError."""

    ledger = ExpenseLedger()
    ledger.add(_expense(1))

    with pytest.raises(ValidationError):
        ledger.add(_expense(amount))
    assert len(ledger) == 1


@pytest.mark.parametrize("when", ["2024-02-30", "15/03/2024", "", None, 20240315])
def test_add_rejects_invalid_dates(when: object) -> None:
    ledger = ExpenseLedger()

    with pytest.raises(ValidationError):
        ledger.add(_expense(10, when=when))
    assert len(ledger) == 0


def test_add_requires_category() -> None:
    ledger = ExpenseLedger()

    with pytest.raises(ValidationError):
        ledger.add({"amount": 10, "date": "2024-03-01"})


def test_negative_amount_scenario_leaves_ledger_unchanged() -> None:
    """A rejected expense is validated before any state changes."""

    ledger = ExpenseLedger()
    with pytest.raises(ValidationError):
        ledger.add(_expense(-5, description="refund?"))

    assert len(ledger) == 0
    assert ledger.total() == 0
    # A failed add must not consume an identifier.
    ledger.add(_expense(5))
    assert ledger.list_expenses()[0].expense_id == "exp_0001"


def test_validation_errors_are_value_errors() -> None:
    """Callers catching ValueError keep working with the ledger taxonomy."""

    assert issubclass(ValidationError, ValueError)
    assert issubclass(ValidationError, LedgerError)
    assert issubclass(OutOfRangeError, IndexError)


def test_remove_at_on_empty_ledger_raises() -> None:
    ledger = ExpenseLedger()

    with pytest.raises(OutOfRangeError):
        ledger.remove_at(0)


def test_remove_at_rejects_negative_positions() -> None:
    """Negative positions are out of range rather than counted from the end."""

    ledger = ExpenseLedger([_expense(1), _expense(2)])

    with pytest.raises(OutOfRangeError):
        ledger.remove_at(-1)
    with pytest.raises(OutOfRangeError):
        ledger.remove_at(2)
    assert len(ledger) == 2


def test_remove_at_shifts_later_records_and_keeps_order() -> None:
    ledger = ExpenseLedger()
    for amount, description in [(1, "a"), (2, "b"), (3, "c"), (4, "d")]:
        ledger.add(_expense(amount, description=description))

    removed = ledger.remove_at(1)

    assert removed.description == "b"
    assert [expense.description for expense in ledger.list_expenses()] == ["a", "c", "d"]
    assert ledger.total() == pytest.approx(8)


def test_remove_by_id_uses_stable_identifiers() -> None:
    """Identifiers remain valid after earlier records are removed."""

    ledger = ExpenseLedger()
    ledger.add(_expense(1, description="first"))
    ledger.add(_expense(2, description="second"))
    ledger.add(_expense(3, description="third"))
    third_id = ledger.list_expenses()[2].expense_id

    ledger.remove_at(0)
    removed = ledger.remove_by_id(third_id)

    assert removed.description == "third"
    assert [expense.description for expense in ledger.list_expenses()] == ["second"]
    with pytest.raises(ExpenseNotFoundError):
        ledger.remove_by_id(third_id)
    with pytest.raises(ExpenseNotFoundError):
        ledger.get(third_id)


def test_restore_puts_removed_expense_back_with_its_identifier() -> None:
    """A removed expense can be reinserted at its old position unchanged."""

    ledger = ExpenseLedger([_expense(1, description="a"), _expense(2, description="b")])
    position = ledger.index_of("exp_0001")
    removed = ledger.remove_at(position)

    ledger.restore(position, removed)

    assert [expense.expense_id for expense in ledger.list_expenses()] == ["exp_0001", "exp_0002"]
    with pytest.raises(ValidationError):
        ledger.restore(0, removed)
    with pytest.raises(OutOfRangeError):
        ledger.restore(5, removed)
    with pytest.raises(ExpenseNotFoundError):
        ledger.index_of("exp_0099")


def test_identifiers_are_not_reused_after_removal() -> None:
    ledger = ExpenseLedger()
    ledger.add(_expense(1))
    ledger.remove_at(0)
    ledger.add(_expense(2))

    assert ledger.list_expenses()[0].expense_id == "exp_0002"
    assert ledger.get("exp_0002").amount == pytest.approx(2)


def test_list_expenses_is_a_read_only_snapshot() -> None:
    ledger = ExpenseLedger([_expense(1)])
    snapshot = ledger.list_expenses()

    ledger.add(_expense(2))

    assert isinstance(snapshot, tuple)
    assert len(snapshot) == 1
    assert isinstance(snapshot[0], Expense)


def test_total_matches_sum_of_remaining_amounts() -> None:
    ledger = ExpenseLedger()
    amounts = [12.5, 100, 0, 7.25, 300]
    for amount in amounts:
        ledger.add(_expense(amount))
    ledger.remove_at(1)

    assert ledger.total() == pytest.approx(sum(amounts) - 100)
    assert ExpenseLedger().total() == 0


def test_category_and_month_scenario_across_years() -> None:
    """Same-month expenses from different years stay in separate year buckets."""

    ledger = ExpenseLedger()
    ledger.add({"amount": 500, "category": "Food", "date": "2024-03-15", "description": "lunch"})
    ledger.add({"amount": 1200, "category": "Food", "date": "2023-03-10", "description": "dinner"})

    assert ledger.by_category() == {"Food": pytest.approx(1700)}
    assert ledger.by_month(2024)[2] == pytest.approx(500)
    assert ledger.by_month(2023)[2] == pytest.approx(1200)


def test_by_month_returns_twelve_buckets_for_the_requested_year() -> None:
    ledger = ExpenseLedger(
        [
            _expense(10, when="2024-01-31"),
            _expense(20, when="2024-12-01"),
            _expense(40, when="2024-12-31"),
            _expense(80, when="2025-01-01"),
        ]
    )

    trend = ledger.by_month(2024)

    assert len(trend) == 12
    assert trend[0] == pytest.approx(10)
    assert trend[11] == pytest.approx(60)
    assert sum(trend) == pytest.approx(70)
    assert ledger.by_month(2025) == [80.0] + [0.0] * 11
    assert ledger.by_month(1999) == [0.0] * 12


def test_by_category_sums_match_total() -> None:
    ledger = ExpenseLedger(
        [
            _expense(10, category="Food"),
            _expense(25.5, category="Transportation"),
            _expense(4.5, category="Food"),
            _expense(60, category="Pet care"),
        ]
    )

    by_category = ledger.by_category()

    assert list(by_category) == ["Food", "Transportation", "Pet care"]
    assert by_category["Food"] == pytest.approx(14.5)
    assert sum(by_category.values()) == pytest.approx(ledger.total())
    assert ExpenseLedger().by_category() == {}


def test_current_month_total_excludes_same_month_of_previous_year() -> None:
    ledger = ExpenseLedger(
        [
            _expense(100, when="2024-03-01"),
            _expense(50, when="2024-03-31"),
            _expense(999, when="2023-03-15"),
            _expense(7, when="2024-04-01"),
        ]
    )

    assert ledger.current_month_total(date(2024, 3, 20)) == pytest.approx(150)
    assert ledger.current_month_total("2023-03-01") == pytest.approx(999)
    assert ledger.current_month_total(date(2022, 3, 20)) == 0


def test_current_month_total_defaults_to_today() -> None:
    today = date.today()
    ledger = ExpenseLedger(
        [_expense(42, when=today), _expense(8, when=date(today.year - 1, today.month, 1))]
    )

    assert ledger.current_month_total() == pytest.approx(42)


def test_snapshot_uses_persisted_shape_and_rehydrates() -> None:
    """Snapshots omit identifiers and rebuild an equivalent ledger."""

    ledger = ExpenseLedger()
    ledger.add(_expense(500, description="lunch"))
    ledger.add(_expense(1200, category="Utilities", when="2023-03-10", description="power"))

    snapshot = ledger.snapshot()

    assert snapshot[1] == {
        "amount": 1200.0,
        "category": "Utilities",
        "date": "2023-03-10",
        "description": "power",
    }
    rebuilt = ExpenseLedger(snapshot)
    assert rebuilt.snapshot() == snapshot
    assert [expense.expense_id for expense in rebuilt.list_expenses()] == ["exp_0001", "exp_0002"]


def test_rehydration_rejects_invalid_records() -> None:
    with pytest.raises(ValidationError):
        ExpenseLedger([_expense(10), _expense("ten")])


def test_summarise_and_years() -> None:
    ledger = ExpenseLedger(
        [
            _expense(500, when="2024-03-15"),
            _expense(1200, when="2023-03-10"),
            _expense(30, category="Other", when="2024-05-02"),
        ]
    )

    summary = ledger.summarise(date(2024, 3, 1))

    assert summary["expense_count"] == 3
    assert summary["total"] == pytest.approx(1730)
    assert summary["current_month_total"] == pytest.approx(500)
    assert summary["by_category"] == {"Food": pytest.approx(1700), "Other": pytest.approx(30)}
    assert summary["reference_date"] == "2024-03-01"
    assert ledger.years() == [2023, 2024]
    with pytest.raises(ValidationError):
        ledger.summarise("not-a-date")
