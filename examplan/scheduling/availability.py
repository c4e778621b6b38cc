from typing import List, Optional, Set

from ..models import Snapshot, Teacher
from .conflicts import overlapping_exams
from .overlap import DateLike, TimeLike


def busy_surveillant_ids(snapshot: Snapshot, date: DateLike, start_time: TimeLike, duration: int,
                         exclude_exam_id: Optional[int] = None) -> Set[int]:
    busy: Set[int] = set()
    for exam in overlapping_exams(snapshot, date, start_time, duration, exclude_exam_id):
        busy.update(exam.surveillant_ids)
    return busy

def get_available_surveillants(snapshot: Snapshot, date: DateLike, start_time: TimeLike, duration: int,
                               exclude_exam_id: Optional[int] = None) -> List[Teacher]:
    """Teachers not invigilating any exam that overlaps the window, in directory order.

    Recomputed from the exams on every call; availability is never stored.
    """
    busy = busy_surveillant_ids(snapshot, date, start_time, duration, exclude_exam_id)
    return [t for t in snapshot.teachers.values() if t.id not in busy]
