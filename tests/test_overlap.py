from datetime import date, time

import pytest

from examplan.scheduling.overlap import exam_window, overlaps, time_to_minutes


def test_time_to_minutes_accepts_strings_and_times():
    assert time_to_minutes('09:30') == 570
    assert time_to_minutes(time(14, 5)) == 845

@pytest.mark.parametrize('bad', ['9h30', '25:00', '10:75', ''])
def test_time_to_minutes_rejects_malformed(bad):
    with pytest.raises(ValueError):
        time_to_minutes(bad)

def test_partial_overlap_same_day():
    assert overlaps('2025-01-15', '09:00', 120, '2025-01-15', '10:00', 60)

def test_overlap_is_symmetric():
    cases = [
        (('2025-01-15', '09:00', 120), ('2025-01-15', '10:00', 60)),
        (('2025-01-15', '09:00', 60), ('2025-01-15', '10:00', 60)),
        (('2025-01-15', '08:00', 240), ('2025-01-15', '09:00', 30)),
        (('2025-01-15', '09:00', 60), ('2025-01-16', '09:00', 60)),
    ]
    for a, b in cases:
        assert overlaps(*a, *b) == overlaps(*b, *a)

def test_interval_overlaps_itself():
    assert overlaps('2025-01-15', '13:00', 1, '2025-01-15', '13:00', 1)

def test_different_dates_never_overlap():
    assert not overlaps(date(2025, 1, 15), '09:00', 600, date(2025, 1, 16), '09:00', 600)

def test_back_to_back_exams_do_not_overlap():
    assert not overlaps('2025-01-15', '09:00', 60, '2025-01-15', '10:00', 90)
    assert not overlaps('2025-01-15', '10:00', 90, '2025-01-15', '09:00', 60)

def test_mixed_date_representations():
    assert overlaps(date(2025, 1, 15), time(9, 0), 60, '2025-01-15', '09:30', 30)

def test_exam_window(make_exam):
    exam = make_exam(1, 1, start='10:15', duration=45)
    assert exam_window(exam) == (date(2025, 1, 15), 615, 660)
