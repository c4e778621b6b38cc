from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..models import Exam, Snapshot
from ..scheduling.availability import get_available_surveillants
from ..scheduling.workload import required_surveillants


def auto_assign_surveillants(snapshot: Snapshot, exam_id: int, count: int = 1) -> List[int]:
    """First-fit pick of up to ``count`` free teachers for an exam.

    Candidates are the teachers available during the exam's window (the exam
    itself excluded), minus the responsible teacher of the exam's module,
    taken in directory order. An unknown exam gives an empty list.
    """
    exam = snapshot.exam(exam_id)
    if exam is None or count <= 0:
        return []
    available = get_available_surveillants(snapshot, exam.date, exam.start_time, exam.duration,
                                           exclude_exam_id=exam.id)
    module = snapshot.module(exam.module_id)
    responsible = module.teacher_id if module is not None else None
    return [t.id for t in available if t.id != responsible][:count]

def merge_surveillants(existing: Iterable[int], new: Iterable[int]) -> List[int]:
    merged: List[int] = []
    for tid in list(existing) + list(new):
        if tid not in merged:
            merged.append(tid)
    return merged

def auto_assign_all(snapshot: Snapshot, count: Optional[int] = None,
                    on_assign: Optional[Callable[[Exam], None]] = None) -> Tuple[Snapshot, Dict[int, List[int]]]:
    """Auto-assign every exam that has no surveillant yet, one after the other.

    Each exam is assigned against the snapshot as updated by the exams before
    it, so the outcome depends on snapshot order. ``on_assign`` receives each
    updated exam before the next one is processed. Returns the final snapshot
    and the ids picked per visited exam (empty when nobody was free).
    """
    picked: Dict[int, List[int]] = {}
    pending = [e.id for e in snapshot.exams.values() if not e.surveillant_ids]
    for exam_id in pending:
        exam = snapshot.exam(exam_id)
        wanted = required_surveillants(exam) if count is None else count
        ids = auto_assign_surveillants(snapshot, exam_id, wanted)
        picked[exam_id] = ids
        if not ids:
            continue
        updated = replace(exam, surveillant_ids=merge_surveillants(exam.surveillant_ids, ids))
        snapshot = snapshot.with_exam(updated)
        if on_assign is not None:
            on_assign(updated)
    return snapshot, picked
