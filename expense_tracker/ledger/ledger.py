"""Mini README: In-memory expense ledger with spending aggregates.

Structure:
    * Expense - immutable record of one spending event.
    * validate_candidate - coerces raw form or storage payloads into fields.
    * ExpenseLedger - ordered collection with add/remove and aggregates.

The ledger keeps expenses in insertion order and hands out a stable
``expense_id`` for each one so deletions do not depend on list positions,
although positional removal remains available for list-driven callers.
Aggregates compare month and year together; an expense from March 2023 never
lands in the March 2024 bucket. Nothing here formats amounts or dates for
display and nothing here touches disk. Callers persist ``snapshot()`` after
each mutation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..logging_utils import get_logger
from .errors import ExpenseNotFoundError, OutOfRangeError, ValidationError

LOGGER = get_logger(__name__)

MONTHS_PER_YEAR = 12


@dataclass(frozen=True, slots=True)
class Expense:
    """A single recorded spending event."""

    expense_id: str
    amount: float
    category: str
    occurred_on: date
    description: str = ""

    def as_record(self) -> Dict[str, object]:
        """Export the expense in the persisted JSON shape."""

        return {
            "amount": self.amount,
            "category": self.category,
            "date": self.occurred_on.isoformat(),
            "description": self.description,
        }

    def as_dict(self) -> Dict[str, object]:
        """Export the expense with its identifier for API responses."""

        return {"expense_id": self.expense_id, **self.as_record()}


CandidateExpense = Union[Mapping[str, object], Expense]


def _parse_amount(value: object) -> float:
    """Accept finite, non-negative numbers or numeric strings."""

    if value is None or isinstance(value, bool):
        raise ValidationError("Amount is required and must be a number.")
    if isinstance(value, str):
        try:
            amount = float(value.strip())
        except ValueError as error:
            raise ValidationError(f"Amount '{value}' is not a number.") from error
    elif isinstance(value, (int, float, Decimal)):
        try:
            amount = float(value)
        except ValueError as error:
            raise ValidationError(f"Amount {value!r} is not a number.") from error
    else:
        raise ValidationError(f"Amount of type {type(value).__name__} is not supported.")

    if not math.isfinite(amount):
        raise ValidationError("Amount must be a finite number.")
    if amount < 0:
        raise ValidationError(f"Amount must not be negative (got {amount}).")
    # Normalise -0.0 so it serialises as 0.0.
    return amount + 0.0


def _parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise ValidationError(f"Date '{value}' is not a valid ISO calendar date.") from error
    raise ValidationError("Dates must be provided as ISO strings or date/datetime instances.")


def validate_candidate(candidate: CandidateExpense) -> Dict[str, object]:
    """Return coerced expense fields or raise ``ValidationError``.

    ``candidate`` is either an ``Expense`` or a mapping shaped like the
    persisted record (``amount``, ``category``, ``date``, ``description``).
    ``occurred_on`` is accepted as an alias of ``date``.
    """

    if isinstance(candidate, Expense):
        candidate = candidate.as_record()
    if not isinstance(candidate, Mapping):
        raise ValidationError("Expenses must be provided as a mapping of fields.")

    category = candidate.get("category")
    if category is None:
        raise ValidationError("Category is required.")
    description = candidate.get("description")
    raw_date = candidate["date"] if "date" in candidate else candidate.get("occurred_on")

    return {
        "amount": _parse_amount(candidate.get("amount")),
        "category": str(category),
        "occurred_on": _parse_date(raw_date),
        "description": "" if description is None else str(description),
    }


class ExpenseLedger:
    """Ordered collection of expenses exposing spending aggregates."""

    def __init__(self, records: Optional[Iterable[CandidateExpense]] = None) -> None:
        self._expenses: List[Expense] = []
        self._sequence = 0
        for record in records or ():
            self._append(validate_candidate(record))
        LOGGER.debug("Expense ledger initialised with %s expenses", len(self._expenses))

    def __len__(self) -> int:
        return len(self._expenses)

    def _next_id(self) -> str:
        """Generate a monotonically increasing expense identifier."""

        self._sequence += 1
        return f"exp_{self._sequence:04d}"

    def _append(self, fields: Dict[str, object]) -> Expense:
        expense = Expense(expense_id=self._next_id(), **fields)
        self._expenses.append(expense)
        return expense

    def add(self, candidate: CandidateExpense) -> int:
        """Validate and append an expense, returning its zero-based position."""

        fields = validate_candidate(candidate)
        expense = self._append(fields)
        position = len(self._expenses) - 1
        LOGGER.info(
            "Added expense %s (%s, %.2f on %s) at position %s",
            expense.expense_id,
            expense.category,
            expense.amount,
            expense.occurred_on.isoformat(),
            position,
        )
        return position

    def remove_at(self, position: int) -> Expense:
        """Remove the expense at ``position``; later expenses shift down by one."""

        if isinstance(position, bool) or not isinstance(position, int):
            raise OutOfRangeError(f"Position {position!r} is not an integer index.")
        if not 0 <= position < len(self._expenses):
            raise OutOfRangeError(
                f"Position {position} is outside the ledger (size {len(self._expenses)})."
            )
        removed = self._expenses.pop(position)
        LOGGER.info("Removed expense %s from position %s", removed.expense_id, position)
        return removed

    def get(self, expense_id: str) -> Expense:
        """Retrieve an expense by identifier."""

        for expense in self._expenses:
            if expense.expense_id == expense_id:
                return expense
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")

    def index_of(self, expense_id: str) -> int:
        """Current position of the expense carrying ``expense_id``."""

        for position, expense in enumerate(self._expenses):
            if expense.expense_id == expense_id:
                return position
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")

    def remove_by_id(self, expense_id: str) -> Expense:
        """Remove the expense carrying ``expense_id``."""

        return self.remove_at(self.index_of(expense_id))

    def restore(self, position: int, expense: Expense) -> None:
        """Put a previously removed expense back at ``position``, keeping its id."""

        if not 0 <= position <= len(self._expenses):
            raise OutOfRangeError(
                f"Position {position} is outside the ledger (size {len(self._expenses)})."
            )
        if any(existing.expense_id == expense.expense_id for existing in self._expenses):
            raise ValidationError(f"Expense {expense.expense_id} is already in the ledger.")
        self._expenses.insert(position, expense)
        LOGGER.info("Restored expense %s at position %s", expense.expense_id, position)

    def list_expenses(self) -> Tuple[Expense, ...]:
        """Return a read-only snapshot of expenses in insertion order."""

        return tuple(self._expenses)

    def snapshot(self) -> List[Dict[str, object]]:
        """Serialisable records for the persistence collaborator."""

        return [expense.as_record() for expense in self._expenses]

    def total(self) -> float:
        """Sum of every recorded amount."""

        return sum((expense.amount for expense in self._expenses), 0.0)

    def current_month_total(self, reference_date: Optional[Union[date, str]] = None) -> float:
        """Sum amounts dated in the same month and year as ``reference_date``."""

        reference = _parse_date(reference_date) if reference_date is not None else date.today()
        return sum(
            (
                expense.amount
                for expense in self._expenses
                if expense.occurred_on.year == reference.year
                and expense.occurred_on.month == reference.month
            ),
            0.0,
        )

    def by_category(self) -> Dict[str, float]:
        """Total per category, ordered by each category's first appearance."""

        totals: Dict[str, float] = {}
        for expense in self._expenses:
            totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
        LOGGER.debug("Aggregated %s categories", len(totals))
        return totals

    def by_month(self, year: int) -> List[float]:
        """Twelve monthly totals for ``year``, January first."""

        totals = [0.0] * MONTHS_PER_YEAR
        for expense in self._expenses:
            if expense.occurred_on.year == year:
                totals[expense.occurred_on.month - 1] += expense.amount
        return totals

    def years(self) -> List[int]:
        """Distinct years with at least one expense, ascending."""

        return sorted({expense.occurred_on.year for expense in self._expenses})

    def summarise(self, reference_date: Optional[Union[date, str]] = None) -> Dict[str, object]:
        """Aggregate headline figures for the dashboard."""

        reference = _parse_date(reference_date) if reference_date is not None else date.today()
        return {
            "expense_count": len(self._expenses),
            "total": self.total(),
            "current_month_total": self.current_month_total(reference),
            "by_category": self.by_category(),
            "reference_date": reference.isoformat(),
        }
