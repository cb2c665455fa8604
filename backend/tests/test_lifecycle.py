from datetime import date, datetime, timezone

import pytest

from app.core import lifecycle
from app.core.lifecycle import (
    CompleteAndRemove,
    CompleteAndRollover,
    PlainUpdate,
    add_one_month,
    decide,
    next_due_date,
    parse_due_date,
)
from app.models.task import Recurrence, classify_recurrence
from app.schemas.task import TaskRead


def make_task(**overrides) -> TaskRead:
    fields = {
        "id": "65a000000000000000000001",
        "title": "Water plants",
        "description": "balcony",
        "completed": False,
        "due_date": "2024-03-10",
        "recurring": None,
        "user": "alice",
    }
    fields.update(overrides)
    return TaskRead(**fields)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, Recurrence.NONE),
        ("", Recurrence.NONE),
        ("none", Recurrence.NONE),
        ("daily", Recurrence.DAILY),
        ("weekly", Recurrence.WEEKLY),
        ("monthly", Recurrence.MONTHLY),
        ("yearly", Recurrence.UNRECOGNIZED),
        ("Daily", Recurrence.UNRECOGNIZED),
    ],
)
def test_classify_recurrence(value, expected):
    assert classify_recurrence(value) is expected


def test_update_without_completed_is_plain_update():
    action = decide(make_task(recurring="daily"), {"title": "Water herbs"})
    assert action == PlainUpdate(fields={"title": "Water herbs"})


def test_completed_false_is_plain_update():
    action = decide(make_task(recurring="weekly"), {"completed": False})
    assert isinstance(action, PlainUpdate)
    assert action.fields == {"completed": False}


@pytest.mark.parametrize("recurring", [None, "", "none", "yearly", "every-other-day"])
def test_completing_non_recurring_removes(recurring):
    action = decide(make_task(recurring=recurring), {"completed": True})
    assert isinstance(action, CompleteAndRemove)


@pytest.mark.parametrize(
    "recurring, due, expected",
    [
        ("daily", "2024-03-10", "2024-03-11"),
        ("daily", "2023-12-31", "2024-01-01"),
        ("weekly", "2024-03-10", "2024-03-17"),
        ("weekly", "2024-02-26", "2024-03-04"),
        ("monthly", "2024-03-10", "2024-04-10"),
        ("monthly", "2024-12-15", "2025-01-15"),
    ],
)
def test_completing_recurring_rolls_over(recurring, due, expected):
    existing = make_task(recurring=recurring, due_date=due)
    action = decide(existing, {"completed": True, "title": "ignored"})

    assert isinstance(action, CompleteAndRollover)
    assert action.new_fields == {
        "title": "Water plants",
        "description": "balcony",
        "due_date": expected,
        "recurring": recurring,
        "completed": False,
    }


@pytest.mark.parametrize(
    "due, expected",
    [
        ("2024-01-31", "2024-02-29"),  # leap year
        ("2023-01-31", "2023-02-28"),
        ("2024-03-31", "2024-04-30"),
        ("2024-01-30", "2024-02-29"),
        ("2024-02-29", "2024-03-29"),
        ("2024-05-31", "2024-06-30"),
    ],
)
def test_monthly_clamps_to_end_of_month(due, expected):
    assert next_due_date(due, Recurrence.MONTHLY) == expected


def test_add_one_month_keeps_time_of_day():
    value = datetime(2024, 1, 31, 9, 30, tzinfo=timezone.utc)
    assert add_one_month(value) == datetime(2024, 2, 29, 9, 30, tzinfo=timezone.utc)


def test_datetime_due_date_stays_a_datetime():
    assert next_due_date("2024-03-10T08:00:00Z", Recurrence.DAILY) == "2024-03-11T08:00:00+00:00"
    assert next_due_date("2024-03-10T08:00:00", Recurrence.WEEKLY) == "2024-03-17T08:00:00"


@pytest.mark.parametrize("due", [None, "", "next tuesday", "2024-13-01"])
def test_missing_or_unparseable_due_date_uses_today(due):
    today = date(2024, 1, 31)
    assert next_due_date(due, Recurrence.DAILY, today=today) == "2024-02-01"
    assert next_due_date(due, Recurrence.MONTHLY, today=today) == "2024-02-29"


def test_today_defaults_to_current_utc_date(monkeypatch):
    monkeypatch.setattr(lifecycle, "_utc_today", lambda: date(2025, 6, 1))
    action = decide(make_task(recurring="weekly", due_date=None), {"completed": True})
    assert action.new_fields["due_date"] == "2025-06-08"


def test_parse_due_date():
    assert parse_due_date("2024-03-10") == date(2024, 3, 10)
    assert parse_due_date(" 2024-03-10 ") == date(2024, 3, 10)
    assert parse_due_date("2024-03-10T10:00:00+02:00").hour == 10
    assert parse_due_date("tomorrow") is None
    assert parse_due_date(None) is None


def test_next_due_date_rejects_non_advancing_recurrence():
    with pytest.raises(ValueError):
        next_due_date("2024-03-10", Recurrence.NONE)


@pytest.mark.parametrize(
    "due, recurrence, error",
    [
        ("9999-12-31", Recurrence.DAILY, OverflowError),
        ("9999-12-31", Recurrence.WEEKLY, OverflowError),
        ("9999-12-15", Recurrence.MONTHLY, ValueError),
    ],
)
def test_advancing_past_year_9999_raises(due, recurrence, error):
    with pytest.raises(error):
        next_due_date(due, recurrence)
