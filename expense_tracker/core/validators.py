# expense_tracker/core/validators.py
import math

from expense_tracker.core.models import Category
from expense_tracker.exceptions import ValidationError

AMOUNT_ERROR = "Invalid amount. Please enter a positive number."
MONTH_ERROR = "Month value must be between 1 and 12 (inclusive)"


def validate_amount(value) -> float:
    """Return ``value`` as a float, rejecting non-numbers, NaN, infinity and values <= 0."""
    if isinstance(value, bool):
        raise ValidationError(AMOUNT_ERROR)
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(AMOUNT_ERROR) from None
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError(AMOUNT_ERROR)
    return amount


def valid_amount(value) -> bool:
    try:
        validate_amount(value)
    except ValidationError:
        return False
    return True


def validate_month(value) -> int:
    if isinstance(value, bool):
        raise ValidationError(MONTH_ERROR)
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(MONTH_ERROR)
    try:
        month = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(MONTH_ERROR) from None
    if not 1 <= month <= 12:
        raise ValidationError(MONTH_ERROR)
    return month


def validate_category(value) -> Category:
    try:
        return Category(value)
    except ValueError:
        raise ValidationError(
            f'The category "{value}" is currently not available. '
            f"Allowed categories includes {', '.join(Category.names())}."
        ) from None
