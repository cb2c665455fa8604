# backend/app/models/task.py

from enum import Enum
from typing import Optional


class Recurrence(str, Enum):
    """
    Recurrence tags a task may carry in its `recurring` field.

    The stored field is a free string; any value other than the four known
    tags classifies as UNRECOGNIZED and behaves like a non-recurring task
    when completed.
    """
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    UNRECOGNIZED = "unrecognized"


# Tags that advance the due date on completion
ROLLOVER_TAGS = (Recurrence.DAILY, Recurrence.WEEKLY, Recurrence.MONTHLY)

# Query value that disables recurrence filtering when listing
ALL_RECURRENCES = "all"


def classify_recurrence(value: Optional[str]) -> Recurrence:
    if not value or value == Recurrence.NONE.value:
        return Recurrence.NONE
    for tag in ROLLOVER_TAGS:
        if value == tag.value:
            return tag
    return Recurrence.UNRECOGNIZED
