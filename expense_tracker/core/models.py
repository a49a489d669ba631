# expense_tracker/core/models.py
import datetime as dt
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, Field, StrictInt, StrictStr

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class Category(str, Enum):
    BILLS = "Bills"
    EDUCATION = "Education"
    GROCERIES = "Groceries"
    MISCELLANEOUS = "Miscellaneous"

    @classmethod
    def names(cls):
        return [c.value for c in cls]


DEFAULT_CATEGORY = Category.MISCELLANEOUS


def _to_float(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"must be a number, got {value!r}")
    try:
        return float(value)
    except OverflowError:
        raise ValueError("number is too large") from None


def _to_date(value):
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not ISO_DATE.fullmatch(value):
        raise ValueError(f"must be YYYY-MM-DD, got {value!r}")
    return dt.date.fromisoformat(value)


RecordId = Annotated[StrictInt, Field(gt=0)]
Amount = Annotated[float, BeforeValidator(_to_float), Field(gt=0, allow_inf_nan=False)]
IsoDate = Annotated[dt.date, BeforeValidator(_to_date)]


class Expense(BaseModel):
    id: RecordId
    date: IsoDate
    amount: Amount
    description: StrictStr
    category: Category = DEFAULT_CATEGORY

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


class Budget(BaseModel):
    id: RecordId
    month: Annotated[StrictInt, Field(ge=1, le=12)]
    amount: Amount

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


@dataclass
class Summary:
    total: float
    month: Optional[int] = None
    budget: Optional[Budget] = None
    expenses: list = field(default_factory=list, repr=False)

    @property
    def over_budget(self) -> bool:
        return self.budget is not None and self.total > self.budget.amount
