# expense_tracker/storage.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Type, TypeVar

import pydantic

from expense_tracker.core.models import Budget, Expense
from expense_tracker.exceptions import StoreError, StoreParseError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=pydantic.BaseModel)


def load_records(path) -> List[dict]:
    """Read the JSON array stored at ``path``.

    A missing or empty file is an empty store. Anything that is not a JSON
    array raises :class:`StoreParseError`; I/O failures raise :class:`StoreError`.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("Store %s does not exist yet", path)
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Could not read %s: %s", path, exc)
        raise StoreError(f"Could not read {path}: {exc}") from exc
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("Invalid JSON in %s: %s", path, exc)
        raise StoreParseError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, list):
        logger.error("Expected a JSON array in %s, found %s", path, type(data).__name__)
        raise StoreParseError(f"Expected a JSON array in {path}")
    logger.debug("Loaded %d record(s) from %s", len(data), path)
    return data


def save_records(path, records: List[dict]) -> None:
    """Overwrite ``path`` with ``records`` as pretty-printed JSON."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fp:
            json.dump(records, fp, indent=2)
    except OSError as exc:
        logger.error("Could not write %s: %s", path, exc)
        raise StoreError(f"Could not write {path}: {exc}") from exc
    logger.debug("Saved %d record(s) to %s", len(records), path)


def _describe(exc: pydantic.ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
        for err in exc.errors()
    )


def _parse(path, model: Type[M]) -> List[M]:
    items = []
    for index, entry in enumerate(load_records(path)):
        try:
            items.append(model.model_validate(entry))
        except pydantic.ValidationError as exc:
            reason = _describe(exc)
            logger.error("Bad record #%d in %s: %s", index, path, reason)
            raise StoreParseError(f"Bad record #{index} in {path}: {reason}") from exc
    return items


def load_expenses(path) -> List[Expense]:
    return _parse(path, Expense)


def save_expenses(path, expenses: List[Expense]) -> None:
    save_records(path, [e.to_dict() for e in expenses])


def load_budgets(path) -> List[Budget]:
    return _parse(path, Budget)


def save_budgets(path, budgets: List[Budget]) -> None:
    save_records(path, [b.to_dict() for b in budgets])
