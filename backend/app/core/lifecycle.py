# backend/app/core/lifecycle.py
"""
Completion / recurrence decisions for task updates.

Nothing in here touches the store: `decide` only says what the update
path has to do, and `crud.tasks.update_task` carries it out.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from app.models.task import Recurrence, ROLLOVER_TAGS, classify_recurrence
from app.schemas.task import TaskRead


@dataclass(frozen=True)
class PlainUpdate:
    """Patch the existing task with `fields`."""
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CompleteAndRemove:
    """Delete the task; nothing replaces it."""


@dataclass(frozen=True)
class CompleteAndRollover:
    """Delete the task and create its next occurrence from `new_fields`."""
    new_fields: Dict[str, Any] = field(default_factory=dict)


Action = Union[PlainUpdate, CompleteAndRemove, CompleteAndRollover]

DateLike = Union[date, datetime]


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def add_one_month(value: DateLike) -> DateLike:
    """
    Same day-of-month in the following month, clamped to that month's
    last day (Jan 31 -> Feb 28/29, Mar 31 -> Apr 30).
    """
    if value.month == 12:
        year, month = value.year + 1, 1
    else:
        year, month = value.year, value.month + 1
    last_day = calendar.monthrange(year, month)[1]
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def parse_due_date(raw: Optional[str]) -> Optional[DateLike]:
    """
    Read a stored due date as a calendar value.

    Date-only strings give a `date`, anything with a time part gives a
    `datetime`. Returns None when the value is missing or not ISO-8601.
    """
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        # "Z" suffix is what JS clients send
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def next_due_date(raw: Optional[str], recurrence: Recurrence, today: Optional[date] = None) -> str:
    base = parse_due_date(raw)
    if base is None:
        base = today or _utc_today()

    if recurrence == Recurrence.DAILY:
        nxt = base + timedelta(days=1)
    elif recurrence == Recurrence.WEEKLY:
        nxt = base + timedelta(days=7)
    elif recurrence == Recurrence.MONTHLY:
        nxt = add_one_month(base)
    else:
        raise ValueError(f"recurrence {recurrence.value!r} does not advance a due date")

    return nxt.isoformat()


def decide(existing: TaskRead, requested: Dict[str, Any], today: Optional[date] = None) -> Action:
    """
    Pick the effect of an update request on an existing task.

    - `completed` not exactly True  -> PlainUpdate with the requested fields
    - completed, non-recurring       -> CompleteAndRemove
      (absent / "" / "none" and unrecognized tags alike)
    - completed, daily/weekly/monthly -> CompleteAndRollover with the
      next occurrence's fields; the caller creates it for existing.user
    """
    if requested.get("completed") is not True:
        return PlainUpdate(fields=dict(requested))

    recurrence = classify_recurrence(existing.recurring)
    if recurrence not in ROLLOVER_TAGS:
        return CompleteAndRemove()

    return CompleteAndRollover(
        new_fields={
            "title": existing.title,
            "description": existing.description,
            "due_date": next_due_date(existing.due_date, recurrence, today),
            "recurring": existing.recurring,
            "completed": False,
        }
    )
