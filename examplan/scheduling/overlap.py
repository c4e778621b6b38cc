from datetime import date, datetime, time
from typing import Tuple, Union

from ..models import Exam

DateLike = Union[date, str]
TimeLike = Union[time, str]


def as_date(value: DateLike) -> date:
    """Calendar date from a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())

def time_to_minutes(value: TimeLike) -> int:
    """Minutes since midnight for a ``time`` or an ``HH:MM`` string.

    Raises ValueError for malformed strings.
    """
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    parts = str(value).strip().split(':')
    if len(parts) < 2:
        raise ValueError(f"Invalid time format: {value!r}")
    h, m = int(parts[0]), int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {value!r}")
    return h * 60 + m

def overlaps(date_a: DateLike, start_a: TimeLike, duration_a: int,
             date_b: DateLike, start_b: TimeLike, duration_b: int) -> bool:
    """True when the two windows ``[start, start + duration)`` intersect on the same day.

    Windows on different dates never overlap, and back-to-back windows
    (one ends the minute the other starts) do not overlap either.
    """
    if as_date(date_a) != as_date(date_b):
        return False
    sa = time_to_minutes(start_a)
    sb = time_to_minutes(start_b)
    return sa < sb + duration_b and sb < sa + duration_a

def exam_window(exam: Exam) -> Tuple[date, int, int]:
    start = time_to_minutes(exam.start_time)
    return as_date(exam.date), start, start + exam.duration

def exams_overlap(a: Exam, b: Exam) -> bool:
    return overlaps(a.date, a.start_time, a.duration, b.date, b.start_time, b.duration)
