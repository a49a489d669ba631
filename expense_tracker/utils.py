# expense_tracker/utils.py
import calendar
import math


def month_name(month):
    """Return the English name of a month number, e.g. 3 -> 'March'."""
    return calendar.month_name[month]


def next_id(records):
    """
    Return one more than the largest id in ``records``, or 1 when empty.
    """
    return max((r.id for r in records), default=0) + 1


def filter_expenses_by_month(expenses, month):
    """
    Return only those expenses whose date falls in the given month (1-12), any year.
    """
    return [e for e in expenses if e.date.month == month]


def filter_expenses_by_category(expenses, category):
    return [e for e in expenses if e.category.value == category]


def total_amount(records):
    return math.fsum(r.amount for r in records)


def format_amount(amount):
    return f"${amount:,.2f}"
