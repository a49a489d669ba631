# expense_tracker/ledger.py
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from expense_tracker.core.models import Budget, Category, Expense, Summary
from expense_tracker.core.validators import (
    validate_amount,
    validate_category,
    validate_month,
)
from expense_tracker.exceptions import RecordNotFoundError, ValidationError
from expense_tracker.storage import (
    load_budgets,
    load_expenses,
    save_budgets,
    save_expenses,
)
from expense_tracker.utils import (
    filter_expenses_by_category,
    filter_expenses_by_month,
    next_id,
    total_amount,
)

logger = logging.getLogger(__name__)


def add_expense(
    expenses_path,
    description: str,
    amount,
    category=Category.MISCELLANEOUS,
    on: Optional[date] = None,
) -> Expense:
    """Validate and append a new expense, returning the stored record.

    Parameters
    ----------
    expenses_path:
        JSON file holding the expense array.
    description, amount, category:
        User input; ``amount`` and ``category`` are validated before the store
        is touched.
    on:
        Date of the expense, today when omitted.
    """
    category = validate_category(category)
    amount = validate_amount(amount)
    expenses = load_expenses(expenses_path)
    expense = Expense(
        id=next_id(expenses),
        date=on or date.today(),
        amount=amount,
        description=description,
        category=category,
    )
    expenses.append(expense)
    save_expenses(expenses_path, expenses)
    logger.info("Added expense %d", expense.id)
    return expense


def list_expenses(expenses_path, category: Optional[str] = None) -> List[Expense]:
    """Return the stored expenses, only those in ``category`` when given.

    An empty store raises :class:`RecordNotFoundError` so callers can tell it
    apart from a filter without matches.
    """
    expenses = load_expenses(expenses_path)
    if not expenses:
        raise RecordNotFoundError("No expense recorded yet.")
    if category:
        return filter_expenses_by_category(expenses, category)
    return expenses


def _find_expense(expenses: List[Expense], expense_id: int) -> Expense:
    match = next((e for e in expenses if e.id == expense_id), None)
    if match is None:
        raise RecordNotFoundError(f"Expense with id:{expense_id} does not exist.")
    return match


def update_expense(
    expenses_path,
    expense_id: int,
    description: Optional[str] = None,
    amount=None,
) -> Expense:
    # empty values count as not given
    description = description or None
    amount = None if amount == "" else amount
    if description is None and amount is None:
        raise ValidationError("Nothing to update. Provide a new description and/or amount.")
    if amount is not None:
        amount = validate_amount(amount)
    expenses = load_expenses(expenses_path)
    expense = _find_expense(expenses, expense_id)
    if amount is not None:
        expense.amount = amount
    if description is not None:
        expense.description = description
    save_expenses(expenses_path, expenses)
    logger.info("Updated expense %d", expense_id)
    return expense


def delete_expense(expenses_path, expense_id: int) -> Expense:
    expenses = load_expenses(expenses_path)
    expense = _find_expense(expenses, expense_id)
    save_expenses(expenses_path, [e for e in expenses if e.id != expense_id])
    logger.info("Deleted expense %d", expense_id)
    return expense


def get_budget(budget_path, month: int) -> Optional[Budget]:
    return next((b for b in load_budgets(budget_path) if b.month == month), None)


def list_budgets(budget_path) -> List[Budget]:
    return sorted(load_budgets(budget_path), key=lambda b: b.month)


def set_budget(budget_path, month, amount) -> Budget:
    """Create or replace the budget for ``month``; there is at most one per month."""
    month = validate_month(month)
    amount = validate_amount(amount)
    budgets = load_budgets(budget_path)
    budget = next((b for b in budgets if b.month == month), None)
    if budget is None:
        budget = Budget(id=next_id(budgets), month=month, amount=amount)
        budgets.append(budget)
    else:
        budget.amount = amount
    save_budgets(budget_path, budgets)
    logger.info("Budget for month %d set to %s", month, amount)
    return budget


def summarize(expenses_path, budget_path=None, month=None) -> Summary:
    """Total all expenses, or only those in ``month`` together with its budget."""
    if month is not None:
        month = validate_month(month)
    expenses = load_expenses(expenses_path)
    if month is None:
        return Summary(total=total_amount(expenses), expenses=expenses)
    selected = filter_expenses_by_month(expenses, month)
    budget = get_budget(budget_path, month) if budget_path is not None else None
    return Summary(
        total=total_amount(selected),
        month=month,
        budget=budget,
        expenses=selected,
    )
