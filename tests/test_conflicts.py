from examplan.models import RoomConflict, Snapshot, SurveillantConflict, TeacherConflict
from examplan.scheduling.conflicts import (
    check_exam_conflicts, check_room_conflicts, check_surveillant_conflicts, check_teacher_conflicts,
)


def test_room_conflict_reports_the_first_exam(snapshot):
    conflicts = check_room_conflicts(snapshot, '2025-01-15', '10:00', 60, [1])
    assert len(conflicts) == 1
    c = conflicts[0]
    assert isinstance(c, RoomConflict)
    assert c.exam_id == 1
    assert c.rooms == ['Room 101']
    assert c.exam_name == 'Algorithms'
    assert c.time == '2025-01-15 at 09:00'
    assert c.as_dict() == {'type': 'room', 'rooms': ['Room 101'], 'examId': 1,
                           'examName': 'Algorithms', 'time': '2025-01-15 at 09:00'}

def test_disjoint_rooms_do_not_conflict(snapshot):
    assert check_room_conflicts(snapshot, '2025-01-15', '09:00', 120, [2, 3]) == []

def test_room_conflicts_on_another_day_are_ignored(snapshot):
    assert check_room_conflicts(snapshot, '2025-01-16', '09:00', 120, [1]) == []

def test_room_conflicts_follow_exam_order(rooms, modules, make_exam):
    exams = [
        make_exam(7, 1, start='11:00', duration=60, rooms=[2]),
        make_exam(3, 3, start='09:00', duration=180, rooms=[1, 2]),
    ]
    snap = Snapshot.from_records(rooms=rooms, modules=modules, exams=exams)
    conflicts = check_room_conflicts(snap, '2025-01-15', '10:30', 60, [2, 1])
    assert [c.exam_id for c in conflicts] == [7, 3]
    assert conflicts[1].rooms == ['Room 202', 'Room 101']

def test_unknown_rooms_and_modules_fail_soft(make_exam):
    snap = Snapshot.from_records(exams=[make_exam(1, 99, rooms=[42])])
    conflicts = check_room_conflicts(snap, '2025-01-15', '09:00', 30, [42])
    assert len(conflicts) == 1
    assert conflicts[0].rooms == []
    assert conflicts[0].exam_name == 'Unknown Module'

def test_teacher_conflict_across_modules(snapshot):
    # module 2 shares responsible teacher 10 with exam 1's module
    conflicts = check_teacher_conflicts(snapshot, '2025-01-15', '10:00', 60, 2)
    assert len(conflicts) == 1
    c = conflicts[0]
    assert isinstance(c, TeacherConflict)
    assert c.exam_id == 1
    assert c.teacher == 'Dr. Ahmed'
    assert c.exam_name == 'Algorithms'

def test_teacher_conflict_needs_same_responsible_teacher(snapshot):
    assert check_teacher_conflicts(snapshot, '2025-01-15', '10:00', 60, 3) == []

def test_teacher_conflict_unknown_module_is_empty(snapshot):
    assert check_teacher_conflicts(snapshot, '2025-01-15', '10:00', 60, 404) == []

def test_teacher_conflict_unknown_teacher_name(modules, make_exam):
    snap = Snapshot.from_records(modules=modules, exams=[make_exam(1, 1)])
    conflicts = check_teacher_conflicts(snap, '2025-01-15', '09:00', 60, 2)
    assert conflicts[0].teacher == 'Unknown Teacher'

def test_surveillant_conflict(snapshot):
    conflicts = check_surveillant_conflicts(snapshot, '2025-01-15', '10:59', 30, [3, 2])
    assert len(conflicts) == 1
    c = conflicts[0]
    assert isinstance(c, SurveillantConflict)
    assert c.surveillants == ['Dr. Benali']
    assert c.as_dict()['type'] == 'surveillant'

def test_surveillant_back_to_back_is_fine(snapshot):
    assert check_surveillant_conflicts(snapshot, '2025-01-15', '11:00', 30, [2]) == []

def test_excluded_exam_is_never_reported_against_itself(snapshot):
    exam = snapshot.exam(1)
    args = (snapshot, exam.date, exam.start_time, exam.duration)
    assert check_room_conflicts(*args, exam.room_ids, exclude_exam_id=1) == []
    assert check_teacher_conflicts(*args, exam.module_id, exclude_exam_id=1) == []
    assert check_surveillant_conflicts(*args, exam.surveillant_ids, exclude_exam_id=1) == []
    assert check_exam_conflicts(snapshot, exam) == []

def test_check_exam_conflicts_collects_every_kind(snapshot, make_exam):
    other = make_exam(2, 2, start='10:00', duration=60, rooms=[1], surveillants=[2])
    snap = snapshot.with_exam(other)
    kinds = [c.type for c in check_exam_conflicts(snap, other)]
    assert kinds == ['room', 'teacher', 'surveillant']

def test_group_double_booking_is_not_detected(snapshot, make_exam):
    # Known gap: two overlapping exams for the same group are not reported.
    other = make_exam(2, 3, start='10:00', duration=60, rooms=[2], surveillants=[3], groups=[1])
    snap = snapshot.with_exam(other)
    assert check_exam_conflicts(snap, other) == []
