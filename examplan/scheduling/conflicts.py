from typing import Iterable, Iterator, List, Optional

from ..models import (
    Conflict, Exam, RoomConflict, Snapshot, SurveillantConflict, TeacherConflict,
)
from .overlap import DateLike, TimeLike, overlaps

UNKNOWN_MODULE = 'Unknown Module'
UNKNOWN_TEACHER = 'Unknown Teacher'


def overlapping_exams(snapshot: Snapshot, date: DateLike, start_time: TimeLike, duration: int,
                      exclude_exam_id: Optional[int] = None) -> Iterator[Exam]:
    """Exams of the snapshot whose window intersects the given one, in snapshot order."""
    for exam in snapshot.exams.values():
        if exclude_exam_id is not None and exam.id == exclude_exam_id:
            continue
        if not overlaps(date, start_time, duration, exam.date, exam.start_time, exam.duration):
            continue
        yield exam

def _exam_name(snapshot: Snapshot, exam: Exam) -> str:
    module = snapshot.module(exam.module_id)
    return module.name if module is not None else UNKNOWN_MODULE

def check_room_conflicts(snapshot: Snapshot, date: DateLike, start_time: TimeLike, duration: int,
                         room_ids: Iterable[int], exclude_exam_id: Optional[int] = None) -> List[RoomConflict]:
    room_ids = list(room_ids)
    conflicts: List[RoomConflict] = []
    for exam in overlapping_exams(snapshot, date, start_time, duration, exclude_exam_id):
        shared = [rid for rid in room_ids if rid in exam.room_ids]
        if not shared:
            continue
        names = [snapshot.room(rid).name for rid in shared if snapshot.room(rid) is not None]
        conflicts.append(RoomConflict(rooms=names, exam_id=exam.id,
                                      exam_name=_exam_name(snapshot, exam), time=exam.when))
    return conflicts

def check_teacher_conflicts(snapshot: Snapshot, date: DateLike, start_time: TimeLike, duration: int,
                            module_id: int, exclude_exam_id: Optional[int] = None) -> List[TeacherConflict]:
    """Overlapping exams whose module has the same responsible teacher as ``module_id``.

    An unknown module, or one without a responsible teacher, yields no conflicts.
    """
    module = snapshot.module(module_id)
    if module is None or module.teacher_id is None:
        return []
    teacher_id = module.teacher_id
    teacher = snapshot.teacher(teacher_id)
    teacher_name = teacher.name if teacher is not None else UNKNOWN_TEACHER

    conflicts: List[TeacherConflict] = []
    for exam in overlapping_exams(snapshot, date, start_time, duration, exclude_exam_id):
        other = snapshot.module(exam.module_id)
        if other is None or other.teacher_id != teacher_id:
            continue
        conflicts.append(TeacherConflict(teacher=teacher_name, exam_id=exam.id,
                                         exam_name=other.name, time=exam.when))
    return conflicts

def check_surveillant_conflicts(snapshot: Snapshot, date: DateLike, start_time: TimeLike, duration: int,
                                surveillant_ids: Iterable[int],
                                exclude_exam_id: Optional[int] = None) -> List[SurveillantConflict]:
    surveillant_ids = list(surveillant_ids)
    conflicts: List[SurveillantConflict] = []
    for exam in overlapping_exams(snapshot, date, start_time, duration, exclude_exam_id):
        shared = [tid for tid in surveillant_ids if tid in exam.surveillant_ids]
        if not shared:
            continue
        names = [snapshot.teacher(tid).name for tid in shared if snapshot.teacher(tid) is not None]
        conflicts.append(SurveillantConflict(surveillants=names, exam_id=exam.id,
                                             exam_name=_exam_name(snapshot, exam), time=exam.when))
    return conflicts

def check_exam_conflicts(snapshot: Snapshot, exam: Exam) -> List[Conflict]:
    """All room, teacher and surveillant conflicts of ``exam`` against the rest of the snapshot.

    Group double-booking is not checked.
    """
    args = (snapshot, exam.date, exam.start_time, exam.duration)
    conflicts: List[Conflict] = []
    conflicts.extend(check_room_conflicts(*args, exam.room_ids, exclude_exam_id=exam.id))
    conflicts.extend(check_teacher_conflicts(*args, exam.module_id, exclude_exam_id=exam.id))
    conflicts.extend(check_surveillant_conflicts(*args, exam.surveillant_ids, exclude_exam_id=exam.id))
    return conflicts
