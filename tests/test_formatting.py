from datetime import date, datetime, timedelta, timezone

import pytest

from rockschool.utils.formatting import format_mentions, student_age, time_ago


@pytest.mark.parametrize(
    "names, expected",
    [
        ([], ""),
        (["A"], "A"),
        (["A", "B"], "A and B"),
        (["A", "B", "C"], "A, B and C"),
        (["A", "B", "C", "D"], "A, B, C and D"),
    ],
)
def test_format_mentions(names, expected):
    assert format_mentions(names) == expected


def test_time_ago():
    now = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
    assert time_ago(now - timedelta(seconds=5), now) == "just now"
    assert time_ago(now - timedelta(minutes=1), now) == "1 minute ago"
    assert time_ago(now - timedelta(hours=3), now) == "3 hours ago"
    assert time_ago(now - timedelta(days=2), now) == "2 days ago"
    assert time_ago(now - timedelta(days=400), now) == "1 year ago"


def test_time_ago_treats_naive_values_as_utc():
    now = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
    assert time_ago(datetime(2024, 3, 10, 11, 0), now) == "1 hour ago"


def test_student_age():
    dob = date(2010, 6, 15)
    assert student_age(dob, today=date(2024, 6, 14)) == 13
    assert student_age(dob, today=date(2024, 6, 15)) == 14
